#!/usr/bin/env python3
"""Discovery and parsing of GitHub Actions workflow files.

This module provides the definition loader:
- Recursive discovery of *.yml / *.yaml files under the workflows directory
- YAML parsing with PyYAML into event -> raw declaration mappings
- Handling of the YAML 1.1 quirk that reads a bare ``on`` key as ``True``

A missing workflows directory yields no definitions. Unreadable storage and
unparseable documents abort the run.

Example:
    >>> definitions = load_workflow_definitions("/path/to/repo")
    >>> [d.path for d in definitions]
    ['.github/workflows/ci.yml']
"""

import errno
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from actioncheck.core.constants import DEFAULT_WORKFLOWS_DIR, WORKFLOW_SUFFIXES, ErrorCode
from actioncheck.core.errors import DefinitionParseError, DefinitionReadError

# PyYAML resolves an unquoted `on` key to the boolean True
_TRIGGER_KEYS = ("on", True)


@dataclass
class WorkflowDefinition:
    """A parsed workflow file reduced to what trigger matching needs."""

    path: str
    name: Optional[str] = None
    events: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        """Declared name, or the file name without its YAML suffix."""
        if self.name:
            return self.name
        base = self.path.rsplit("/", 1)[-1]
        # Both suffixes are stripped in turn, so "ci.yaml.yml" becomes "ci"
        if base.endswith(".yml"):
            base = base[: -len(".yml")]
        if base.endswith(".yaml"):
            base = base[: -len(".yaml")]
        return base


def is_workflow_file(name: str) -> bool:
    """Check if file name has a workflow suffix (case-insensitive)."""
    return name.lower().endswith(WORKFLOW_SUFFIXES)


def _parse_events(on_value: Any, path: str) -> Dict[str, Any]:
    """Turn the `on` value into an ordered event -> declaration mapping."""
    if on_value is None:
        return {}

    if isinstance(on_value, str):
        return {on_value.strip(): None} if on_value.strip() else {}

    if isinstance(on_value, list):
        events: Dict[str, Any] = {}
        for item in on_value:
            if isinstance(item, str) and item.strip():
                events[item.strip()] = None
            else:
                raise DefinitionParseError(
                    f"parse workflow {path}: event list entries must be strings, got {item!r}",
                    path,
                )
        return events

    if isinstance(on_value, dict):
        return {str(event): value for event, value in on_value.items()}

    raise DefinitionParseError(
        f"parse workflow {path}: unsupported `on` value of type {type(on_value).__name__}",
        path,
    )


def parse_workflow(path: str, content: Union[str, bytes]) -> WorkflowDefinition:
    """Parse workflow document into a WorkflowDefinition.

    Args:
        path: Repository-relative path used for reporting
        content: Raw YAML document

    Returns:
        Parsed workflow definition

    Raises:
        DefinitionParseError: If the document is not a YAML mapping
    """
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DefinitionParseError(f"parse workflow {path}: {e}", path) from e

    if not isinstance(document, dict):
        raise DefinitionParseError(
            f"parse workflow {path}: document must be a mapping, got "
            f"{type(document).__name__}",
            path,
        )

    on_value = None
    for key in _TRIGGER_KEYS:
        if key in document:
            on_value = document[key]
            break

    name = document.get("name")
    if name is not None:
        name = str(name).strip() or None

    return WorkflowDefinition(path=path, name=name, events=_parse_events(on_value, path))


def _discover(directory: Path) -> List[Path]:
    """List workflow files below directory in lexical walk order."""
    found: List[Path] = []
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as e:
        raise DefinitionReadError(f"read workflows directory {directory}: {e}", str(directory)) from e

    for entry in entries:
        if entry.is_symlink() and entry.is_dir():
            # Linked directories may point back up the tree
            continue
        if entry.is_dir():
            found.extend(_discover(entry))
        elif is_workflow_file(entry.name):
            found.append(entry)
    return found


def load_workflow_definitions(
    repo_root: Union[str, Path], workflows_dir: str = DEFAULT_WORKFLOWS_DIR
) -> List[WorkflowDefinition]:
    """Load and parse every workflow under the workflows directory.

    Args:
        repo_root: Repository root directory
        workflows_dir: Workflows directory relative to the root

    Returns:
        Workflow definitions in lexical path order

    Raises:
        DefinitionReadError: If the directory or a file cannot be read
        DefinitionParseError: If a workflow cannot be parsed
    """
    root = Path(repo_root)
    directory = root / workflows_dir

    try:
        directory.stat()
    except FileNotFoundError:
        return []
    except OSError as e:
        code = ErrorCode.PERMISSION_DENIED if e.errno == errno.EACCES else ErrorCode.INTERNAL_ERROR
        raise DefinitionReadError(
            f"read workflows directory: {e}", str(directory), error_code=code
        ) from e

    definitions = []
    for file_path in _discover(directory):
        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise DefinitionReadError(f"read workflow {file_path}: {e}", str(file_path)) from e

        rel = Path(os.path.relpath(file_path, root)).as_posix()
        definitions.append(parse_workflow(rel, content))

    return definitions
