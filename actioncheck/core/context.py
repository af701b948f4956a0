"""
ActionCheck Core: Event context.

The structured description of the triggering occurrence. It is built once
per run by :mod:`actioncheck.github.context` and passed explicitly into the
matching engine, which never reads process state itself.
"""
from dataclasses import dataclass

from actioncheck.core.constants import BRANCH_REF_PREFIX, TAG_REF_PREFIX


@dataclass(frozen=True)
class EventContext:
    """Minimum information needed to evaluate workflow triggers.

    Attributes:
        name: Event name, e.g. "pull_request" or "push"
        action: Event subtype for events with `types` filters ("opened")
        ref: Full git ref for ref-based events ("refs/heads/main")
        base_ref: Base branch for pull request style events
        head_ref: Source branch for pull request style events
        default_branch: Repository default branch, informational only
    """

    name: str
    action: str = ""
    ref: str = ""
    base_ref: str = ""
    head_ref: str = ""
    default_branch: str = ""

    def split_ref(self) -> tuple:
        """Split :attr:`ref` into a ``(branch, tag)`` pair.

        Exactly one element is meaningful: ``refs/tags/x`` yields ``("", "x")``,
        ``refs/heads/x`` yields ``("x", "")`` and any other value is treated as
        a bare branch name.
        """
        return split_ref(self.ref)


def split_ref(ref: str) -> tuple:
    """Split a git ref into ``(branch, tag)``."""
    if ref.startswith(BRANCH_REF_PREFIX):
        return ref[len(BRANCH_REF_PREFIX):], ""
    if ref.startswith(TAG_REF_PREFIX):
        return "", ref[len(TAG_REF_PREFIX):]
    return ref.strip(), ""
