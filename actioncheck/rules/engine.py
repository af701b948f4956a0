#!/usr/bin/env python3
"""Trigger evaluation for workflow event declarations.

This module decides whether one declared event of a workflow fires for the
current event context and set of changed files:
- Pull request family (pull_request, pull_request_target, merge_group):
  action types, base branch, changed paths
- Push family: branch or tag filters, changed paths
- Every other event: action types only

Evaluation never raises. Malformed filter values were already reduced to
empty lists by the normalizer and malformed globs never match.

Example:
    >>> filters = normalize_filters({"tags": ["v*"]})
    >>> context = EventContext(name="push", ref="refs/tags/v1.2.3")
    >>> should_trigger("push", filters, context, [])
    True
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from actioncheck.core.constants import BRANCH_REF_PREFIX, EventFamily
from actioncheck.core.context import EventContext
from actioncheck.rules.filters import FilterRecord
from actioncheck.rules.patterns import MultiMatcher, PatternMatcher


@dataclass
class TriggerEvaluation:
    """Outcome of evaluating one event declaration."""

    event: str
    matches: bool = True
    reasons: List[str] = field(default_factory=list)
    matched_files: List[str] = field(default_factory=list)

    def reject(self, reason: str) -> "TriggerEvaluation":
        """Mark the evaluation as failed with a reason."""
        self.matches = False
        self.reasons.append(reason)
        return self


def branch_candidates(branch: str) -> List[str]:
    """Spellings of a branch tried against branch patterns."""
    candidates = [branch]
    if branch and not branch.startswith(BRANCH_REF_PREFIX):
        candidates.append(BRANCH_REF_PREFIX + branch)
    return candidates


class TriggerEngine:
    """Evaluates event declarations with per-family semantics.

    The engine is stateless; one instance can be shared across workflows.
    """

    def evaluate(
        self,
        event_name: str,
        filters: FilterRecord,
        context: EventContext,
        changed_files: Sequence[str],
    ) -> TriggerEvaluation:
        """Evaluate whether a declared event fires.

        Args:
            event_name: Declared event name
            filters: Normalized filters of the declaration
            context: Current event context
            changed_files: Normalized, deduplicated changed paths

        Returns:
            Evaluation with match flag and rejection reasons
        """
        family = EventFamily.from_event(event_name)
        result = TriggerEvaluation(event=event_name)

        if filters.is_unconstrained():
            result.matched_files = list(changed_files)
            return result

        if family == EventFamily.PULL_REQUEST:
            self._evaluate_pull_request(result, filters, context, changed_files)
        elif family == EventFamily.PUSH:
            self._evaluate_push(result, filters, context, changed_files)
        else:
            self._check_types(result, filters.types, context.action)

        return result

    def _evaluate_pull_request(
        self,
        result: TriggerEvaluation,
        filters: FilterRecord,
        context: EventContext,
        changed_files: Sequence[str],
    ) -> None:
        if not self._check_types(result, filters.types, context.action):
            return
        if not self._check_branches(result, filters, context.base_ref):
            return
        self._check_paths(result, filters, changed_files)

    def _evaluate_push(
        self,
        result: TriggerEvaluation,
        filters: FilterRecord,
        context: EventContext,
        changed_files: Sequence[str],
    ) -> None:
        branch, tag = context.split_ref()

        if tag:
            # Tag refs bypass branch filters entirely
            if not self._check_tags(result, filters, tag):
                return
        elif not self._check_branches(result, filters, branch):
            return

        self._check_paths(result, filters, changed_files)

    def _check_types(self, result: TriggerEvaluation, types: List[str], action: str) -> bool:
        """Check the action against a `types` allow-list (case-insensitive)."""
        if not types:
            return True

        if not action:
            result.reject("Event action unavailable to evaluate `types`.")
            return False

        wanted = action.casefold()
        if any(allowed.strip().casefold() == wanted for allowed in types):
            return True

        result.reject(f'Event action "{action}" did not satisfy configured `types`.')
        return False

    def _check_branches(self, result: TriggerEvaluation, filters: FilterRecord, branch: str) -> bool:
        """Check `branches` / `branches-ignore` against a branch name."""
        if not filters.has_branch_filters:
            return True

        if not branch:
            result.reject("Branch information unavailable to evaluate filters.")
            return False

        candidates = branch_candidates(branch)

        if filters.branches and not PatternMatcher(filters.branches).matches_any_of(candidates):
            result.reject(f'Branch "{branch}" did not satisfy `branches` filter.')
            return False

        if filters.branches_ignore and PatternMatcher(filters.branches_ignore).matches_any_of(
            candidates
        ):
            result.reject(f'Branch "{branch}" was excluded by `branches-ignore` filter.')
            return False

        return True

    def _check_tags(self, result: TriggerEvaluation, filters: FilterRecord, tag: str) -> bool:
        """Check `tags` / `tags-ignore`; an empty `tags` list admits any tag."""
        if not filters.has_tag_filters:
            return True

        if filters.tags and not PatternMatcher(filters.tags).matches(tag):
            result.reject(f'Tag "{tag}" did not satisfy `tags` filter.')
            return False

        if filters.tags_ignore and PatternMatcher(filters.tags_ignore).matches(tag):
            result.reject(f'Tag "{tag}" was excluded by `tags-ignore` filter.')
            return False

        return True

    def _check_paths(
        self, result: TriggerEvaluation, filters: FilterRecord, changed_files: Sequence[str]
    ) -> bool:
        """Check `paths` / `paths-ignore` against the changed files.

        With `paths`, at least one file must be included and not ignored.
        With only `paths-ignore`, at least one file must survive the ignore
        list, and an empty change set passes.
        """
        if not filters.has_path_filters:
            result.matched_files = list(changed_files)
            return True

        if not filters.paths and not changed_files:
            return True

        matcher = MultiMatcher(include=filters.paths, exclude=filters.paths_ignore)

        surviving = matcher.filter(changed_files)
        if surviving:
            result.matched_files = surviving
            return True

        if filters.paths:
            result.reject("No changed files satisfied `paths` filter.")
        else:
            result.reject("All changed files were ignored by `paths-ignore` filter.")
        return False


_default_engine: Optional[TriggerEngine] = None


def get_engine() -> TriggerEngine:
    """Get the shared trigger engine."""
    global _default_engine
    if _default_engine is None:
        _default_engine = TriggerEngine()
    return _default_engine


def evaluate_trigger(
    event_name: str,
    filters: FilterRecord,
    context: EventContext,
    changed_files: Sequence[str],
) -> TriggerEvaluation:
    """Evaluate a declared event with the shared engine."""
    return get_engine().evaluate(event_name, filters, context, changed_files)


def should_trigger(
    event_name: str,
    filters: FilterRecord,
    context: EventContext,
    changed_files: Sequence[str],
) -> bool:
    """Return True if the declared event fires for the context and files."""
    return evaluate_trigger(event_name, filters, context, changed_files).matches
