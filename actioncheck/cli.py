#!/usr/bin/env python3
"""Command-line interface for ActionCheck.

This module provides the CLI for detecting which GitHub Actions workflows
an event triggers:
- Argument parsing and validation
- Configuration file loading and layering
- Logging setup
- Error reporting and exit status

Example:
    >>> from actioncheck.cli import parse_arguments
    >>> args = parse_arguments(["--event-name", "push", "--ref", "refs/heads/main"])
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from actioncheck.core.constants import ACTIONCHECK_VERSION, ConfigKey
from actioncheck.core.errors import DetectionError
from actioncheck.core.validators import ValidationError, validate_config
from actioncheck.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from actioncheck.infrastructure.logger import Logger, set_global_logger

VERSION = ACTIONCHECK_VERSION
DESCRIPTION = "ActionCheck - detect the GitHub Actions workflows an event triggers"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If argument values are inconsistent
    """
    parser = argparse.ArgumentParser(
        prog="actioncheck",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Inside a workflow step (reads GITHUB_* and INPUT_MODIFIED_FILES)
  actioncheck

  # Pull request opened against main
  actioncheck --event-name pull_request --action opened --base-ref main \\
      --modified-files "src/main.py,docs/index.md"

  # Tag push, JSON summary on stdout
  actioncheck --event-name push --ref refs/tags/v1.2.3 --json

  # Changed files from a file produced by git diff --name-only
  actioncheck --event-name push --ref refs/heads/main --modified-files-file changed.txt
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    # Repository options
    repo_group = parser.add_argument_group("repository options")

    repo_group.add_argument(
        "-r",
        "--repo-root",
        metavar="DIR",
        type=str,
        help="Repository root (default: $GITHUB_WORKSPACE, then the current directory)",
    )

    repo_group.add_argument(
        "--workflows-dir",
        metavar="DIR",
        type=str,
        help="Workflows directory relative to the root (default: .github/workflows)",
    )

    files_group = repo_group.add_mutually_exclusive_group()

    files_group.add_argument(
        "-f",
        "--modified-files",
        metavar="LIST",
        type=str,
        help="Changed files as a JSON array or comma/newline separated list "
        "(default: $INPUT_MODIFIED_FILES)",
    )

    files_group.add_argument(
        "--modified-files-file",
        metavar="FILE",
        type=str,
        help="Read the changed-file list from a file",
    )

    # Event overrides
    event_group = parser.add_argument_group("event options (override GITHUB_* values)")

    event_group.add_argument("-e", "--event-name", metavar="NAME", help="Event name")
    event_group.add_argument("--action", metavar="TYPE", help="Event action, e.g. opened")
    event_group.add_argument("--ref", metavar="REF", help="Git ref, e.g. refs/heads/main")
    event_group.add_argument("--base-ref", metavar="BRANCH", help="Pull request base branch")
    event_group.add_argument("--head-ref", metavar="BRANCH", help="Pull request head branch")
    event_group.add_argument("--default-branch", metavar="BRANCH", help="Default branch")

    # Output options
    output_group = parser.add_argument_group("output options")

    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print the JSON summary instead of the text report",
    )

    output_group.add_argument(
        "--no-outputs",
        action="store_true",
        help="Do not write step outputs to $GITHUB_OUTPUT",
    )

    output_group.add_argument(
        "--no-summary",
        action="store_true",
        help="Do not write a job summary to $GITHUB_STEP_SUMMARY",
    )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (explains skipped events)",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write logs to this file",
    )

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments namespace

    Raises:
        CLIError: If validation fails
    """
    if args.repo_root:
        root = Path(args.repo_root)
        if not root.exists():
            raise CLIError(f"Repository root does not exist: {args.repo_root}")
        if not root.is_dir():
            raise CLIError(f"Repository root is not a directory: {args.repo_root}")

    if args.modified_files_file and not Path(args.modified_files_file).is_file():
        raise CLIError(f"Modified files list does not exist: {args.modified_files_file}")

    if args.config:
        config_path = Path(args.config)

        if not config_path.exists():
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not config_path.is_file():
            raise CLIError(f"Configuration path is not a file: {args.config}")


def build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build the CLI configuration layer from command-line arguments.

    Only options that were given are included, so unset flags never mask
    values from the configuration file or environment.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration dictionary for the CLI_ARGS source
    """
    section: Dict[str, Any] = {}

    if args.workflows_dir:
        section["workflows_dir"] = args.workflows_dir

    logging_cfg: Dict[str, Any] = {}
    if args.debug:
        logging_cfg["level"] = "DEBUG"
    if args.log_file:
        logging_cfg["file"] = args.log_file
    if logging_cfg:
        section["logging"] = logging_cfg

    outputs_cfg: Dict[str, Any] = {}
    if args.no_outputs:
        outputs_cfg["write_outputs"] = False
    if args.no_summary:
        outputs_cfg["step_summary"] = False
    if outputs_cfg:
        section["outputs"] = outputs_cfg

    return {"actioncheck": section}


def load_configuration(
    args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None
) -> ConfigManager:
    """
    Build the layered configuration for this run.

    Args:
        args: Parsed arguments namespace
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated configuration manager

    Raises:
        ConfigError: If the configuration file cannot be loaded
        ValidationError: If the merged configuration is invalid
    """
    config = ConfigManager(config_file=args.config, environ=environ)
    config.load_dict(build_config_from_args(args), ConfigSource.CLI_ARGS)
    validate_config(config.get_all())
    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging based on configuration.

    Args:
        config: Configuration manager

    Returns:
        Configured logger instance, also installed as the global logger
    """
    logger = Logger("actioncheck", level=config.get(ConfigKey.LOG_LEVEL, "INFO"))

    log_file = config.get(ConfigKey.LOG_FILE)
    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))

    set_global_logger(logger)
    return logger


def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    """
    Main CLI entry point.

    Parses arguments, loads configuration, and hands control to
    :func:`actioncheck.main.run_actioncheck`.

    Returns:
        Exit status: 0 on success (including zero matches), 1 on errors
    """
    environ = os.environ if environ is None else environ

    try:
        args = parse_arguments(argv)
        config = load_configuration(args, environ)
        logger = setup_logging(config)

        from actioncheck.main import run_actioncheck

        return run_actioncheck(args, config, logger, environ)

    except (CLIError, ConfigError, ValidationError, DetectionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
