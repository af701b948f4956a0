"""ActionCheck - detect the GitHub Actions workflows an event triggers."""

from actioncheck.core.constants import ACTIONCHECK_VERSION as __version__

__all__ = ["__version__"]
