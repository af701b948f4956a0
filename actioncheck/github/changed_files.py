#!/usr/bin/env python3
"""Parsing of the changed-file list handed to the action.

Accepted formats:
- a JSON array of strings: ``["src/a.py", "docs/b.md"]``
- comma and/or newline separated text: ``src/a.py, docs/b.md``

Normalization and deduplication happen later, in the detector.
"""

import json
import re
from pathlib import Path
from typing import List, Union

from actioncheck.core.constants import ErrorCode
from actioncheck.core.errors import ChangedFilesError

_SEPARATORS = re.compile(r"[,\r\n]")


def parse_modified_files(raw: str) -> List[str]:
    """Parse changed-file list.

    Args:
        raw: JSON array or comma/newline delimited text

    Returns:
        File paths in input order

    Raises:
        ChangedFilesError: If a JSON array is malformed
    """
    raw = (raw or "").strip()
    if not raw:
        return []

    if raw.startswith("["):
        try:
            values = json.loads(raw)
        except ValueError as e:
            raise ChangedFilesError(f"parse modified files: {e}") from e

        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ChangedFilesError("parse modified files: expected a JSON array of strings")
        return values

    return [part.strip() for part in _SEPARATORS.split(raw) if part.strip()]


def read_modified_files(path: Union[str, Path]) -> List[str]:
    """Read changed-file list from a file in any accepted format.

    Raises:
        ChangedFilesError: If the file cannot be read or parsed
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ChangedFilesError(
            f"read modified files {path}: {e}", ErrorCode.NOT_FOUND
        ) from e
    return parse_modified_files(content)
