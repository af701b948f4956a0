#!/usr/bin/env python3
"""Detection of the workflows triggered by an event.

For each workflow definition, every declared event equal to the context's
event name is normalized and evaluated; workflows with at least one firing
event are reported in input order.

Example:
    >>> context = EventContext(name="workflow_dispatch")
    >>> matches = detect(definitions, context, [])
    >>> [m.to_dict() for m in matches]
    [{'name': 'manual', 'path': '.github/workflows/manual.yml', 'events': ['workflow_dispatch']}]
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from actioncheck.core.constants import DEFAULT_WORKFLOWS_DIR
from actioncheck.core.context import EventContext
from actioncheck.core.errors import MissingEventContext
from actioncheck.infrastructure.logger import Logger, LogLevel, get_logger
from actioncheck.rules.engine import TriggerEngine, get_engine
from actioncheck.rules.filters import normalize_filters
from actioncheck.rules.patterns import normalize_paths
from actioncheck.workflows.loader import WorkflowDefinition, load_workflow_definitions


@dataclass
class WorkflowMatch:
    """A workflow whose triggers match the event and changed files."""

    name: str
    path: str
    events: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Render as the machine-readable summary entry."""
        return {"name": self.name, "path": self.path, "events": list(self.events)}


def matching_events(
    definition: WorkflowDefinition,
    context: EventContext,
    changed_files: Sequence[str],
    engine: Optional[TriggerEngine] = None,
    logger: Optional[Logger] = None,
) -> List[str]:
    """List the declared events of a workflow that fire.

    Args:
        definition: Parsed workflow
        context: Current event context
        changed_files: Normalized changed paths
        engine: Trigger engine (shared engine by default)
        logger: Logger for per-event decisions

    Returns:
        Matched event names in declaration order
    """
    engine = engine or get_engine()
    matched = []

    for event_name, raw in definition.events.items():
        if event_name != context.name:
            continue

        filters = normalize_filters(raw)
        evaluation = engine.evaluate(event_name, filters, context, changed_files)

        if logger is not None and logger.is_enabled_for(LogLevel.DEBUG):
            if evaluation.matches:
                logger.debug(
                    "Event matched",
                    workflow=definition.path,
                    trigger=event_name,
                    files=len(evaluation.matched_files),
                )
            else:
                logger.debug(
                    "Event skipped",
                    workflow=definition.path,
                    trigger=event_name,
                    reasons="; ".join(evaluation.reasons),
                )

        if evaluation.matches:
            matched.append(event_name)

    return matched


def detect(
    definitions: Iterable[WorkflowDefinition],
    context: EventContext,
    changed_files: Iterable[str],
    logger: Optional[Logger] = None,
) -> List[WorkflowMatch]:
    """Select the workflows triggered by the event context.

    Args:
        definitions: Workflow definitions in discovery order
        context: Current event context
        changed_files: Changed paths (normalized and deduplicated here)
        logger: Optional logger; defaults to the global logger

    Returns:
        One match per triggered workflow, in input order

    Raises:
        MissingEventContext: If the context has no event name
    """
    if not context.name or not context.name.strip():
        raise MissingEventContext("event name is required")

    logger = logger or get_logger()
    files = normalize_paths(changed_files)
    engine = get_engine()

    matches = []
    for definition in definitions:
        events = matching_events(definition, context, files, engine, logger)
        if not events:
            continue
        matches.append(
            WorkflowMatch(name=definition.display_name, path=definition.path, events=events)
        )

    return matches


def detect_triggered_workflows(
    repo_root: Union[str, Path],
    context: EventContext,
    changed_files: Iterable[str],
    workflows_dir: str = DEFAULT_WORKFLOWS_DIR,
    logger: Optional[Logger] = None,
) -> List[WorkflowMatch]:
    """Load workflows from a repository and detect the triggered ones.

    Raises:
        MissingEventContext: If the context has no event name
        DefinitionReadError: If workflow files cannot be read
        DefinitionParseError: If a workflow cannot be parsed
    """
    if not context.name or not context.name.strip():
        raise MissingEventContext("event name is required")

    definitions = load_workflow_definitions(repo_root, workflows_dir)
    return detect(definitions, context, changed_files, logger=logger)
