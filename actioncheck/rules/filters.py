#!/usr/bin/env python3
"""Normalization of workflow trigger declarations.

A trigger declaration under ``on.<event>`` can take several shapes:

- null (``workflow_dispatch:``): no filters
- a string (``label: created``): shorthand for ``types``
- a list of strings: also shorthand for ``types``
- a mapping with ``branches``, ``paths``, ``tags``, their ``-ignore``
  variants and ``types``

This module maps every shape onto a :class:`FilterRecord`. Values of the
wrong shape are absorbed into empty lists instead of raising.

Example:
    >>> record = normalize_filters({"branches": "main", "paths": ["./src/**"]})
    >>> record.branches, record.paths
    (['main'], ['src/**'])
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from actioncheck.core.constants import FilterKey
from actioncheck.rules.patterns import normalize_path


@dataclass
class FilterRecord:
    """Normalized filters for one event declaration.

    Every list is ordered, contains only trimmed non-empty strings, and an
    empty list means the dimension is unconstrained.
    """

    branches: List[str] = field(default_factory=list)
    branches_ignore: List[str] = field(default_factory=list)
    paths: List[str] = field(default_factory=list)
    paths_ignore: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    tags_ignore: List[str] = field(default_factory=list)
    types: List[str] = field(default_factory=list)

    def is_unconstrained(self) -> bool:
        """Return True if no filter list carries any entry."""
        return not any(
            (
                self.branches,
                self.branches_ignore,
                self.paths,
                self.paths_ignore,
                self.tags,
                self.tags_ignore,
                self.types,
            )
        )

    @property
    def has_branch_filters(self) -> bool:
        return bool(self.branches or self.branches_ignore)

    @property
    def has_tag_filters(self) -> bool:
        return bool(self.tags or self.tags_ignore)

    @property
    def has_path_filters(self) -> bool:
        return bool(self.paths or self.paths_ignore)


# Mapping key -> FilterRecord attribute
_FIELD_BY_KEY: Dict[str, str] = {
    FilterKey.BRANCHES: "branches",
    FilterKey.BRANCHES_IGNORE: "branches_ignore",
    FilterKey.PATHS: "paths",
    FilterKey.PATHS_IGNORE: "paths_ignore",
    FilterKey.TAGS: "tags",
    FilterKey.TAGS_IGNORE: "tags_ignore",
    FilterKey.TYPES: "types",
}

# Attributes whose entries are repository paths
_PATH_FIELDS = frozenset({"paths", "paths_ignore"})


def _stringify(value: Any) -> str:
    """Render scalar the way it was spelled in YAML."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_string_list(value: Any) -> List[str]:
    """Coerce a declaration value to a list of trimmed strings.

    Args:
        value: null, scalar, or list

    Returns:
        List of non-empty strings; null elements are skipped
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        items = [_stringify(item).strip() for item in value if item is not None]
    else:
        items = [_stringify(value).strip()]

    return [item for item in items if item]


def _normalize_path_patterns(patterns: List[str]) -> List[str]:
    result = []
    for pattern in patterns:
        norm = normalize_path(pattern)
        if norm:
            result.append(norm)
    return result


def _from_mapping(raw: Mapping) -> FilterRecord:
    record = FilterRecord()
    for key, value in raw.items():
        attr = _FIELD_BY_KEY.get(_stringify(key).strip().lower())
        if attr is None:
            continue

        values = as_string_list(value)
        if attr in _PATH_FIELDS:
            values = _normalize_path_patterns(values)
        setattr(record, attr, values)
    return record


def normalize_filters(raw: Any) -> FilterRecord:
    """Convert raw event declaration into a FilterRecord.

    Args:
        raw: Value found under ``on.<event>`` in a parsed workflow

    Returns:
        Normalized filter record (never None)
    """
    if raw is None:
        return FilterRecord()

    if isinstance(raw, Mapping):
        return _from_mapping(raw)

    if isinstance(raw, str):
        return FilterRecord(types=as_string_list(raw))

    if isinstance(raw, (list, tuple)):
        return FilterRecord(types=as_string_list(raw))

    # Numbers and other scalars carry no recognizable filter
    return FilterRecord()
