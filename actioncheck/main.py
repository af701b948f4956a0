#!/usr/bin/env python3
"""Main entry point for an ActionCheck run.

This module handles:
- Resolving the repository root and changed-file list
- Building the event context once from the environment
- Running detection
- Reporting results and exporting step outputs

Example:
    >>> from actioncheck.main import run_actioncheck
    >>> run_actioncheck(args, config, logger, os.environ)
"""

import argparse
import json
import os
import sys
from typing import List, Mapping, Optional

from actioncheck.core.constants import ConfigKey, DEFAULT_WORKFLOWS_DIR, EnvVar
from actioncheck.core.context import EventContext
from actioncheck.github.changed_files import parse_modified_files, read_modified_files
from actioncheck.github.context import build_event_context
from actioncheck.github.outputs import (
    export_outputs,
    format_report,
    summarize,
    write_step_summary,
)
from actioncheck.infrastructure.config_manager import ConfigManager
from actioncheck.infrastructure.logger import Logger
from actioncheck.workflows.detector import WorkflowMatch, detect_triggered_workflows


class ActionCheckMain:
    """
    Controller for one detection run.

    Collaborator errors (DetectionError subclasses) propagate to the caller,
    which reports them once and sets the exit status.
    """

    def __init__(
        self,
        args: argparse.Namespace,
        config: ConfigManager,
        logger: Logger,
        environ: Mapping[str, str],
        stdout=None,
    ):
        """
        Initialize run controller.

        Args:
            args: Parsed command-line arguments
            config: Layered configuration
            logger: Logger instance
            environ: Environment mapping, read once here
            stdout: Stream for the report (defaults to sys.stdout)
        """
        self.args = args
        self.config = config
        self.logger = logger
        self.environ = environ
        self.stdout = stdout or sys.stdout

    def resolve_repo_root(self) -> str:
        """Repository root: --repo-root, $GITHUB_WORKSPACE, or the cwd."""
        if self.args.repo_root:
            return self.args.repo_root
        workspace = (self.environ.get(EnvVar.WORKSPACE) or "").strip()
        if workspace:
            return workspace
        return os.getcwd()

    def resolve_modified_files(self) -> List[str]:
        """Changed files from --modified-files-file, --modified-files or the env."""
        if self.args.modified_files_file:
            return read_modified_files(self.args.modified_files_file)
        if self.args.modified_files is not None:
            return parse_modified_files(self.args.modified_files)
        return parse_modified_files(self.environ.get(EnvVar.MODIFIED_FILES, ""))

    def build_context(self) -> EventContext:
        """Build the event context, applying CLI overrides."""
        overrides = {
            "name": self.args.event_name,
            "action": self.args.action,
            "ref": self.args.ref,
            "base_ref": self.args.base_ref,
            "head_ref": self.args.head_ref,
            "default_branch": self.args.default_branch,
        }
        return build_event_context(self.environ, overrides, logger=self.logger)

    def report(self, matches: List[WorkflowMatch]) -> None:
        """Print the report (or JSON summary) to stdout."""
        if self.args.json:
            print(json.dumps(summarize(matches)), file=self.stdout)
            return
        for line in format_report(matches):
            print(line, file=self.stdout)

    def export(
        self, matches: List[WorkflowMatch], context: EventContext, modified: List[str]
    ) -> None:
        """Write step outputs and the job summary when enabled."""
        if self.config.get(ConfigKey.WRITE_OUTPUTS, True):
            if export_outputs(matches, self.environ.get(EnvVar.OUTPUT)):
                self.logger.debug("Step outputs written", path=self.environ.get(EnvVar.OUTPUT))

        if self.config.get(ConfigKey.STEP_SUMMARY, True):
            if write_step_summary(matches, context, modified, self.environ.get(EnvVar.STEP_SUMMARY)):
                self.logger.debug(
                    "Job summary written", path=self.environ.get(EnvVar.STEP_SUMMARY)
                )

    def run(self) -> int:
        """
        Run detection end to end.

        Returns:
            Exit code (0 for success, including zero matches)

        Raises:
            DetectionError: On fatal collaborator errors
        """
        modified = self.resolve_modified_files()
        context = self.build_context()
        repo_root = self.resolve_repo_root()
        workflows_dir = self.config.get(ConfigKey.WORKFLOWS_DIR, DEFAULT_WORKFLOWS_DIR)

        self.logger.info(
            "Evaluating workflows",
            event=context.name,
            action=context.action or "-",
            ref=context.ref or "-",
            base_ref=context.base_ref or "-",
            files=len(modified),
        )

        with self.logger.add_context(event=context.name):
            matches = detect_triggered_workflows(
                repo_root, context, modified, workflows_dir=workflows_dir, logger=self.logger
            )

        self.logger.info("Detection complete", matched=len(matches), root=repo_root)

        self.report(matches)
        self.export(matches, context, modified)
        return 0


def run_actioncheck(
    args: argparse.Namespace,
    config: ConfigManager,
    logger: Logger,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Main entry point for running a detection.

    Args:
        args: Parsed command-line arguments
        config: Configuration manager
        logger: Logger instance
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Exit code (0 for success)
    """
    controller = ActionCheckMain(args, config, logger, os.environ if environ is None else environ)
    return controller.run()


def main():
    """
    Entry point when run as standalone script.

    Typically called via cli.py, but can be run directly.
    """
    from actioncheck.cli import main as cli_main

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
