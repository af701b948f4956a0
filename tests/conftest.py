"""Shared pytest fixtures for ActionCheck tests."""
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from actioncheck.core.context import EventContext
from actioncheck.infrastructure import logger as logger_module


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Create a repository root with an empty workflows directory."""
    (tmp_path / ".github" / "workflows").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def write_workflow(repo_root: Path) -> Callable[[str, str], Path]:
    """Return a helper writing a workflow file under .github/workflows."""

    def _write(name: str, content: str) -> Path:
        path = repo_root / ".github" / "workflows" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def pr_context() -> EventContext:
    """Pull request opened against main."""
    return EventContext(name="pull_request", action="opened", base_ref="main")


@pytest.fixture
def push_context() -> EventContext:
    """Push to the main branch."""
    return EventContext(name="push", ref="refs/heads/main")


@pytest.fixture(autouse=True)
def reset_global_logger(monkeypatch):
    """Never share the global logger (and its captured stream) across tests."""
    monkeypatch.setattr(logger_module, "_global_logger", None)
    yield
