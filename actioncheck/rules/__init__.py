"""ActionCheck Rules System.

This module provides the trigger-matching engine:
- Pattern matching: glob matching over branches, tags and paths
- Filters: normalization of `on.<event>` declarations into FilterRecords
- Engine: per-event-family trigger evaluation

The rules decide whether a declared workflow event fires for the current
event context and set of changed files.
"""

from .engine import TriggerEngine, TriggerEvaluation, evaluate_trigger, should_trigger
from .filters import FilterRecord, as_string_list, normalize_filters
from .patterns import (
    MultiMatcher,
    PatternEntry,
    PatternMatcher,
    compile_glob,
    matches_any,
    matches_pattern,
    normalize_path,
    normalize_paths,
)

__all__ = [
    # Pattern matching
    "PatternEntry",
    "PatternMatcher",
    "MultiMatcher",
    "compile_glob",
    "matches_pattern",
    "matches_any",
    "normalize_path",
    "normalize_paths",
    # Filters
    "FilterRecord",
    "as_string_list",
    "normalize_filters",
    # Engine
    "TriggerEngine",
    "TriggerEvaluation",
    "evaluate_trigger",
    "should_trigger",
]
