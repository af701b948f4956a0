"""ActionCheck Workflows.

Loading of workflow definitions and detection of the triggered ones.
"""

from .detector import WorkflowMatch, detect, detect_triggered_workflows, matching_events
from .loader import WorkflowDefinition, load_workflow_definitions, parse_workflow

__all__ = [
    "WorkflowDefinition",
    "WorkflowMatch",
    "detect",
    "detect_triggered_workflows",
    "load_workflow_definitions",
    "matching_events",
    "parse_workflow",
]
