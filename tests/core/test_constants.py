#!/usr/bin/env python3
"""Tests for event families, ref handling and error types."""

import pytest

from actioncheck.core.constants import ErrorCode, EventFamily
from actioncheck.core.context import EventContext, split_ref
from actioncheck.core.errors import (
    ChangedFilesError,
    DefinitionParseError,
    DefinitionReadError,
    DetectionError,
    MissingEventContext,
    OutputError,
)


class TestEventFamily:
    """Tests for EventFamily.from_event."""

    @pytest.mark.parametrize("name", ["pull_request", "pull_request_target", "merge_group"])
    def test_pull_request_family(self, name):
        """Pull request style events share semantics."""
        assert EventFamily.from_event(name) == EventFamily.PULL_REQUEST

    def test_push_family(self):
        """Push has its own family."""
        assert EventFamily.from_event("push") == EventFamily.PUSH

    @pytest.mark.parametrize("name", ["workflow_dispatch", "issues", "schedule", "Push", ""])
    def test_generic_family(self, name):
        """Everything else, including differently cased names, is generic."""
        assert EventFamily.from_event(name) == EventFamily.GENERIC


class TestSplitRef:
    """Tests for splitting git refs."""

    @pytest.mark.parametrize(
        "ref,expected",
        [
            ("refs/heads/main", ("main", "")),
            ("refs/heads/feature/x", ("feature/x", "")),
            ("refs/tags/v1.2.3", ("", "v1.2.3")),
            ("main", ("main", "")),
            (" main ", ("main", "")),
            ("", ("", "")),
            ("refs/pull/1/merge", ("refs/pull/1/merge", "")),
        ],
    )
    def test_split_ref(self, ref, expected):
        """Branch refs, tag refs and bare names."""
        assert split_ref(ref) == expected
        assert EventContext(name="push", ref=ref).split_ref() == expected

    def test_context_is_frozen(self):
        """EventContext is immutable."""
        context = EventContext(name="push")
        with pytest.raises(AttributeError):
            context.name = "pull_request"


class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (MissingEventContext("x"), ErrorCode.INVALID_INPUT),
            (DefinitionReadError("x"), ErrorCode.PERMISSION_DENIED),
            (DefinitionParseError("x", "a.yml"), ErrorCode.INVALID_INPUT),
            (ChangedFilesError("x"), ErrorCode.INVALID_INPUT),
            (OutputError("x"), ErrorCode.INTERNAL_ERROR),
        ],
    )
    def test_codes_and_base_class(self, error, code):
        """Every error is a DetectionError with a code."""
        assert isinstance(error, DetectionError)
        assert error.error_code == code
        assert error.message == "x"
        assert str(error) == "x"

    def test_paths(self):
        """Definition errors carry the offending path."""
        assert DefinitionParseError("x", "a.yml").path == "a.yml"
        assert DefinitionReadError("x", "b.yml").path == "b.yml"
