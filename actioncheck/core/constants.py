"""
ActionCheck Core: Constants

This module provides system-wide constants, error codes, event families and
the environment variable names the GitHub Actions runner exposes.
"""
from enum import Enum, IntEnum
from typing import FrozenSet

# Version information
ACTIONCHECK_VERSION = "1.0.0"


class ErrorCode(IntEnum):
    """Standardized error codes for ActionCheck operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad argument, malformed document
    NOT_FOUND = 2  # File or resource doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    INTERNAL_ERROR = 6  # Bug in ActionCheck


# Event names grouped by the filter semantics they use
PULL_REQUEST_EVENTS: FrozenSet[str] = frozenset(
    {"pull_request", "pull_request_target", "merge_group"}
)
PUSH_EVENTS: FrozenSet[str] = frozenset({"push"})


class EventFamily(Enum):
    """Filter semantics applied to a trigger event."""

    PULL_REQUEST = "pull_request"  # types + base branch + paths
    PUSH = "push"  # branch or tag + paths
    GENERIC = "generic"  # types only

    @classmethod
    def from_event(cls, event_name: str) -> "EventFamily":
        """Resolve the family for an event name."""
        if event_name in PULL_REQUEST_EVENTS:
            return cls.PULL_REQUEST
        if event_name in PUSH_EVENTS:
            return cls.PUSH
        return cls.GENERIC


# Git ref prefixes
BRANCH_REF_PREFIX = "refs/heads/"
TAG_REF_PREFIX = "refs/tags/"


# Recognized keys of an event declaration
class FilterKey:
    """Keys recognized inside an `on.<event>` mapping."""

    BRANCHES = "branches"
    BRANCHES_IGNORE = "branches-ignore"
    PATHS = "paths"
    PATHS_IGNORE = "paths-ignore"
    TAGS = "tags"
    TAGS_IGNORE = "tags-ignore"
    TYPES = "types"


# Workflow discovery
DEFAULT_WORKFLOWS_DIR = ".github/workflows"
WORKFLOW_SUFFIXES = (".yml", ".yaml")


class EnvVar:
    """Environment variables read from the Actions runner."""

    EVENT_NAME = "GITHUB_EVENT_NAME"
    EVENT_PATH = "GITHUB_EVENT_PATH"
    REF = "GITHUB_REF"
    BASE_REF = "GITHUB_BASE_REF"
    HEAD_REF = "GITHUB_HEAD_REF"
    DEFAULT_BRANCH = "GITHUB_DEFAULT_BRANCH"
    WORKSPACE = "GITHUB_WORKSPACE"
    OUTPUT = "GITHUB_OUTPUT"
    STEP_SUMMARY = "GITHUB_STEP_SUMMARY"
    MODIFIED_FILES = "INPUT_MODIFIED_FILES"


# Configuration keys (dot notation, see ConfigManager)
class ConfigKey:
    """Configuration keys used throughout ActionCheck."""

    WORKFLOWS_DIR = "actioncheck.workflows_dir"
    LOG_LEVEL = "actioncheck.logging.level"
    LOG_FILE = "actioncheck.logging.file"
    WRITE_OUTPUTS = "actioncheck.outputs.write_outputs"
    STEP_SUMMARY = "actioncheck.outputs.step_summary"


# Output names written to GITHUB_OUTPUT
OUTPUT_WORKFLOWS = "workflows"
OUTPUT_COUNT = "count"
