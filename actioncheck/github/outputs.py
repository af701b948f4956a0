#!/usr/bin/env python3
"""Reporting of detection results.

This module provides the output side of a run:
- Human-readable report lines for the job log
- Step outputs (``workflows`` JSON and ``count``) appended to GITHUB_OUTPUT
- A Markdown job summary rendered with Jinja2 into GITHUB_STEP_SUMMARY

Example:
    >>> for line in format_report(matches):
    ...     print(line)
    Detected 1 workflows to run:
     - ci (.github/workflows/ci.yml) via pull_request
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import jinja2

from actioncheck.core.constants import OUTPUT_COUNT, OUTPUT_WORKFLOWS
from actioncheck.core.context import EventContext
from actioncheck.core.errors import OutputError
from actioncheck.workflows.detector import WorkflowMatch

OUTPUT_DELIMITER = "EOF"

SUMMARY_TEMPLATE = """\
## Triggered workflows

Event `{{ context.name }}`
{%- if context.action %} (action `{{ context.action }}`){% endif %}
{%- if context.ref %}, ref `{{ context.ref }}`{% endif %}
{%- if context.base_ref %}, base `{{ context.base_ref }}`{% endif -%}
, {{ changed_files | length }} changed file(s).

{% if matches -%}
| Workflow | Path | Events |
| --- | --- | --- |
{% for match in matches -%}
| {{ match.name | cell }} | `{{ match.path }}` | {{ match.events | join(", ") }} |
{% endfor %}
{%- else -%}
No workflows match the current event and modified files.
{% endif %}
"""


def _table_cell(value: Any) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        autoescape=False,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["cell"] = _table_cell
    return env


def summarize(matches: Sequence[WorkflowMatch]) -> List[Dict[str, Any]]:
    """Machine-readable summary of the matches."""
    return [match.to_dict() for match in matches]


def format_report(matches: Sequence[WorkflowMatch]) -> List[str]:
    """Format the human-readable report.

    Args:
        matches: Triggered workflows

    Returns:
        Report lines
    """
    if not matches:
        return ["No workflows match the current event and modified files."]

    lines = [f"Detected {len(matches)} workflows to run:"]
    for match in matches:
        lines.append(f" - {match.name} ({match.path}) via {', '.join(match.events)}")
    return lines


def _append(path: Union[str, Path], text: str) -> None:
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise OutputError(f"write {path}: {e}") from e


def format_output(name: str, value: str) -> str:
    """Format one step output in the multi-line GITHUB_OUTPUT syntax."""
    return f"{name}<<{OUTPUT_DELIMITER}\n{value}\n{OUTPUT_DELIMITER}\n"


def export_outputs(
    matches: Sequence[WorkflowMatch], output_path: Optional[Union[str, Path]]
) -> bool:
    """Append `workflows` and `count` outputs to the GITHUB_OUTPUT file.

    Args:
        matches: Triggered workflows
        output_path: Output file path; nothing is written when empty

    Returns:
        True if outputs were written

    Raises:
        OutputError: If the file cannot be written
    """
    if not output_path:
        return False

    blob = json.dumps(summarize(matches), separators=(",", ":"))
    _append(
        output_path,
        format_output(OUTPUT_WORKFLOWS, blob) + format_output(OUTPUT_COUNT, str(len(matches))),
    )
    return True


def render_step_summary(
    matches: Sequence[WorkflowMatch], context: EventContext, changed_files: Iterable[str]
) -> str:
    """Render the Markdown job summary.

    Raises:
        OutputError: If the template fails to render
    """
    try:
        template = _environment().from_string(SUMMARY_TEMPLATE)
        return template.render(
            matches=list(matches), context=context, changed_files=list(changed_files)
        )
    except jinja2.TemplateError as e:
        raise OutputError(f"Template error: {e}") from e


def write_step_summary(
    matches: Sequence[WorkflowMatch],
    context: EventContext,
    changed_files: Iterable[str],
    summary_path: Optional[Union[str, Path]],
) -> bool:
    """Append the Markdown job summary to the GITHUB_STEP_SUMMARY file.

    Returns:
        True if the summary was written

    Raises:
        OutputError: If rendering or writing fails
    """
    if not summary_path:
        return False

    _append(summary_path, render_step_summary(matches, context, changed_files))
    return True
