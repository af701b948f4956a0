#!/usr/bin/env python3
"""Construction of the event context from the Actions runner.

The context is read once, from an explicit environment mapping and the
optional event payload document, and then passed by value to the engine.

Precedence for every field: explicit override > payload > environment.

Example:
    >>> context = build_event_context(os.environ)
    >>> context.name
    'pull_request'
"""

import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping, Optional

from actioncheck.core.constants import EnvVar
from actioncheck.core.context import EventContext
from actioncheck.core.errors import MissingEventContext
from actioncheck.infrastructure.logger import Logger, get_logger

# Fields that may be overridden from the command line
OVERRIDABLE_FIELDS = ("name", "action", "ref", "base_ref", "head_ref", "default_branch")


def _env(environ: Mapping[str, str], key: str) -> str:
    return (environ.get(key) or "").strip()


def _nested_string(payload: Any, *path: str) -> str:
    """Fetch a string from nested mappings, or "" when absent."""
    current = payload
    for segment in path:
        if not isinstance(current, dict):
            return ""
        current = current.get(segment)
    return current if isinstance(current, str) else ""


def load_event_payload(path: str, logger: Optional[Logger] = None) -> Optional[dict]:
    """Read the event payload document.

    The payload only refines the context, so an unreadable or malformed
    document is logged and skipped.

    Args:
        path: Path from GITHUB_EVENT_PATH
        logger: Logger for skipped payloads

    Returns:
        Payload mapping, or None
    """
    logger = logger or get_logger()
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        logger.warning("Event payload unreadable, skipping", path=path, error=str(e))
        return None
    except ValueError as e:
        logger.warning("Event payload is not valid JSON, skipping", path=path, error=str(e))
        return None

    if not isinstance(payload, dict):
        logger.warning("Event payload is not a JSON object, skipping", path=path)
        return None
    return payload


def apply_payload(context: EventContext, payload: Mapping[str, Any]) -> EventContext:
    """Refine context with values from the event payload.

    Args:
        context: Context built from the environment
        payload: Parsed event payload

    Returns:
        New context with payload values applied
    """
    updates = {}

    action = _nested_string(payload, "action")
    if action:
        updates["action"] = action

    default_branch = _nested_string(payload, "repository", "default_branch")
    if default_branch:
        updates["default_branch"] = default_branch

    if context.name in ("pull_request", "pull_request_target"):
        base = _nested_string(payload, "pull_request", "base", "ref")
        head = _nested_string(payload, "pull_request", "head", "ref")
        if base:
            updates["base_ref"] = base
        if head:
            updates["head_ref"] = head
    elif context.name == "merge_group":
        base = _nested_string(payload, "merge_group", "base_ref")
        head = _nested_string(payload, "merge_group", "head_ref")
        if base:
            updates["base_ref"] = base
        if head:
            updates["head_ref"] = head
    elif context.name == "push":
        ref = _nested_string(payload, "ref")
        if ref:
            updates["ref"] = ref

    return replace(context, **updates) if updates else context


def build_event_context(
    environ: Mapping[str, str],
    overrides: Optional[Mapping[str, Optional[str]]] = None,
    logger: Optional[Logger] = None,
) -> EventContext:
    """Build the event context for this run.

    Args:
        environ: Environment mapping (usually os.environ)
        overrides: Field -> value overrides; None or blank values are ignored
        logger: Logger for payload problems

    Returns:
        Immutable event context

    Raises:
        MissingEventContext: If no event name can be determined
    """
    overrides = {
        key: value.strip()
        for key, value in (overrides or {}).items()
        if key in OVERRIDABLE_FIELDS and value is not None and value.strip()
    }

    name = overrides.get("name") or _env(environ, EnvVar.EVENT_NAME)
    if not name:
        raise MissingEventContext(f"{EnvVar.EVENT_NAME} is not set")

    context = EventContext(
        name=name,
        ref=_env(environ, EnvVar.REF),
        base_ref=_env(environ, EnvVar.BASE_REF),
        head_ref=_env(environ, EnvVar.HEAD_REF),
        default_branch=_env(environ, EnvVar.DEFAULT_BRANCH),
    )

    payload_path = _env(environ, EnvVar.EVENT_PATH)
    if payload_path:
        payload = load_event_payload(payload_path, logger)
        if payload is not None:
            context = apply_payload(context, payload)

    if overrides:
        context = replace(context, **overrides)

    return context
