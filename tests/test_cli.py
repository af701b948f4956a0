"""Tests for CLI argument parsing and configuration.

This module tests the command-line interface including:
- Argument parsing
- Configuration layering
- Validation logic
- Exit status of full runs
"""

import logging

import pytest
import yaml

from actioncheck.cli import (
    CLIError,
    build_config_from_args,
    load_configuration,
    main,
    parse_arguments,
    setup_logging,
)
from actioncheck.core.constants import ConfigKey
from actioncheck.core.validators import ValidationError
from actioncheck.infrastructure.logger import LogLevel, get_logger


class TestParseArguments:
    """Test argument parsing."""

    def test_defaults(self):
        """No arguments leaves everything to the environment."""
        args = parse_arguments([])
        assert args.repo_root is None
        assert args.modified_files is None
        assert args.modified_files_file is None
        assert args.event_name is None
        assert args.json is False
        assert args.no_outputs is False
        assert args.debug is False

    def test_event_overrides(self):
        """Event options are parsed."""
        args = parse_arguments(
            [
                "-e",
                "pull_request",
                "--action",
                "opened",
                "--base-ref",
                "main",
                "--head-ref",
                "fix",
                "--ref",
                "refs/pull/1/merge",
                "--default-branch",
                "main",
            ]
        )
        assert args.event_name == "pull_request"
        assert args.action == "opened"
        assert args.base_ref == "main"
        assert args.head_ref == "fix"
        assert args.ref == "refs/pull/1/merge"
        assert args.default_branch == "main"

    def test_repo_root(self, tmp_path):
        """An existing directory is accepted."""
        assert parse_arguments(["-r", str(tmp_path)]).repo_root == str(tmp_path)

    def test_repo_root_missing(self, tmp_path):
        """A missing repository root is rejected."""
        with pytest.raises(CLIError, match="does not exist"):
            parse_arguments(["--repo-root", str(tmp_path / "nope")])

    def test_repo_root_not_directory(self, tmp_path):
        """A file is not a repository root."""
        path = tmp_path / "file"
        path.write_text("x")
        with pytest.raises(CLIError, match="not a directory"):
            parse_arguments(["--repo-root", str(path)])

    def test_modified_files_file_missing(self, tmp_path):
        """The changed-file list file must exist."""
        with pytest.raises(CLIError):
            parse_arguments(["--modified-files-file", str(tmp_path / "nope.txt")])

    def test_modified_files_sources_exclusive(self, tmp_path):
        """Only one changed-file source may be given."""
        path = tmp_path / "changed.txt"
        path.write_text("a")
        with pytest.raises(SystemExit):
            parse_arguments(["-f", "a", "--modified-files-file", str(path)])

    def test_config_missing(self, tmp_path):
        """A missing configuration file is rejected."""
        with pytest.raises(CLIError, match="Configuration file does not exist"):
            parse_arguments(["-c", str(tmp_path / "nope.yaml")])

    def test_config_directory(self, tmp_path):
        """A directory is not a configuration file."""
        with pytest.raises(CLIError, match="not a file"):
            parse_arguments(["-c", str(tmp_path)])

    def test_version(self, capsys):
        """--version prints and exits."""
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["--version"])
        assert exc_info.value.code == 0
        assert "1.0.0" in capsys.readouterr().out


class TestBuildConfigFromArgs:
    """Test the CLI configuration layer."""

    def test_empty(self):
        """Unset flags contribute nothing."""
        assert build_config_from_args(parse_arguments([])) == {"actioncheck": {}}

    def test_all_options(self, tmp_path):
        """Every config-bearing flag lands in its section."""
        args = parse_arguments(
            [
                "--workflows-dir",
                "ci",
                "--debug",
                "--log-file",
                str(tmp_path / "run.log"),
                "--no-outputs",
                "--no-summary",
            ]
        )
        assert build_config_from_args(args) == {
            "actioncheck": {
                "workflows_dir": "ci",
                "logging": {"level": "DEBUG", "file": str(tmp_path / "run.log")},
                "outputs": {"write_outputs": False, "step_summary": False},
            }
        }


class TestLoadConfiguration:
    """Test configuration layering from the CLI."""

    def test_cli_overrides_file(self, tmp_path):
        """Flags beat the configuration file."""
        path = tmp_path / "actioncheck.yaml"
        path.write_text(yaml.safe_dump({"workflows_dir": "from-file", "logging": {"level": "ERROR"}}))

        config = load_configuration(
            parse_arguments(["-c", str(path), "--workflows-dir", "from-cli"]), environ={}
        )

        assert config.get(ConfigKey.WORKFLOWS_DIR) == "from-cli"
        assert config.get(ConfigKey.LOG_LEVEL) == "ERROR"

    def test_invalid_environment(self):
        """Invalid merged settings fail validation."""
        with pytest.raises(ValidationError):
            load_configuration(parse_arguments([]), environ={"ACTIONCHECK_LOGGING__LEVEL": "LOUD"})


class TestSetupLogging:
    """Test logger construction from configuration."""

    def test_level_and_global(self):
        """The configured level is applied and the logger installed globally."""
        config = load_configuration(parse_arguments(["--debug"]), environ={})
        logger = setup_logging(config)
        assert logger.is_enabled_for(LogLevel.DEBUG)
        assert get_logger() is logger

    def test_log_file(self, tmp_path):
        """A log file handler is attached when configured."""
        log_file = tmp_path / "run.log"
        config = load_configuration(parse_arguments(["--log-file", str(log_file)]), environ={})
        logger = setup_logging(config)
        logger.info("hello")

        file_handlers = [
            h for h in logger.logger.handlers if isinstance(h, logging.FileHandler)
        ]
        assert len(file_handlers) == 1
        for handler in file_handlers:
            handler.flush()
            logger.logger.removeHandler(handler)
            handler.close()
        assert "hello" in log_file.read_text()


class TestMain:
    """Test full CLI runs."""

    def test_success(self, repo_root, write_workflow, capsys):
        """A matching workflow is reported and the run succeeds."""
        write_workflow("ci.yml", "name: CI\non:\n  push:\n    branches: [main]\n")

        code = main(
            ["--repo-root", str(repo_root), "--no-summary"],
            environ={"GITHUB_EVENT_NAME": "push", "GITHUB_REF": "refs/heads/main"},
        )

        assert code == 0
        out = capsys.readouterr().out
        assert out.splitlines() == [
            "Detected 1 workflows to run:",
            " - CI (.github/workflows/ci.yml) via push",
        ]

    def test_zero_matches_is_success(self, repo_root, capsys):
        """No matches still exits 0."""
        code = main(["-r", str(repo_root), "-e", "push"], environ={})
        assert code == 0
        assert "No workflows match" in capsys.readouterr().out

    def test_missing_event_name(self, repo_root, capsys):
        """A missing event name is reported once with exit status 1."""
        code = main(["-r", str(repo_root)], environ={})
        assert code == 1
        assert "Error: GITHUB_EVENT_NAME is not set" in capsys.readouterr().err

    def test_parse_error(self, repo_root, write_workflow, capsys):
        """Malformed workflows abort with the offending path."""
        write_workflow("broken.yml", "on: [push\n")
        code = main(["-r", str(repo_root), "-e", "push"], environ={})
        assert code == 1
        assert ".github/workflows/broken.yml" in capsys.readouterr().err

    def test_cli_error(self, tmp_path, capsys):
        """Argument validation errors exit with status 1."""
        code = main(["-r", str(tmp_path / "missing")], environ={})
        assert code == 1
        assert "Repository root does not exist" in capsys.readouterr().err

    def test_bad_changed_files(self, repo_root, capsys):
        """Malformed changed-file lists are fatal."""
        code = main(["-r", str(repo_root), "-e", "push", "-f", '["a",'], environ={})
        assert code == 1
        assert "parse modified files" in capsys.readouterr().err
