#!/usr/bin/env python3
"""Tests for changed-file list parsing."""

import pytest

from actioncheck.core.constants import ErrorCode
from actioncheck.core.errors import ChangedFilesError
from actioncheck.github.changed_files import parse_modified_files, read_modified_files


class TestParseModifiedFiles:
    """Tests for parse_modified_files."""

    @pytest.mark.parametrize("raw", [None, "", "   \n"])
    def test_empty(self, raw):
        """Blank input yields no files."""
        assert parse_modified_files(raw) == []

    def test_json_array(self):
        """JSON arrays are taken verbatim and in order."""
        assert parse_modified_files('["src/a.go", "docs/b.md"]') == ["src/a.go", "docs/b.md"]

    def test_json_array_with_whitespace(self):
        """Leading whitespace before the array is fine."""
        assert parse_modified_files('  \n["a"]') == ["a"]

    def test_comma_separated(self):
        """Commas split entries and whitespace is trimmed."""
        assert parse_modified_files("src/a.go, docs/b.md ,,") == ["src/a.go", "docs/b.md"]

    def test_newline_separated(self):
        """Newlines (including CRLF) split entries."""
        assert parse_modified_files("src/a.go\r\ndocs/b.md\n\nc.txt") == [
            "src/a.go",
            "docs/b.md",
            "c.txt",
        ]

    def test_invalid_json(self):
        """A malformed array is an error."""
        with pytest.raises(ChangedFilesError):
            parse_modified_files('["a", ')

    def test_non_string_entries(self):
        """Array entries must be strings."""
        with pytest.raises(ChangedFilesError):
            parse_modified_files('["a", 1]')


class TestReadModifiedFiles:
    """Tests for read_modified_files."""

    def test_reads_file(self, tmp_path):
        """Files may use any accepted format."""
        path = tmp_path / "changed.txt"
        path.write_text("src/a.go\ndocs/b.md\n")
        assert read_modified_files(path) == ["src/a.go", "docs/b.md"]

    def test_missing_file(self, tmp_path):
        """A missing list file is NOT_FOUND."""
        with pytest.raises(ChangedFilesError) as exc_info:
            read_modified_files(tmp_path / "nope.txt")
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND
