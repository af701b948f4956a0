"""ActionCheck Core - Shared types, constants and errors.

Import specific names from submodules:
    from actioncheck.core.context import EventContext
    from actioncheck.core.errors import MissingEventContext
    from actioncheck.core import constants
    from actioncheck.core import validators
"""

from actioncheck.core import constants, context, errors, validators

__all__ = [
    "constants",
    "context",
    "errors",
    "validators",
]
