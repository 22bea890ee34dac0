"""Shared test fixtures for bare-ai.

Provides a captured console, a fixed clock, scripted operator input, a
recording shell, and a WorkspaceConfig rooted in tmp_path.
"""

from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone

import pytest
from rich.console import Console

from bare_ai.audit.writer import AuditLogWriter
from bare_ai.executor.gate import GatedExecutor
from bare_ai.executor.shell import HostShell
from bare_ai.models.config import WorkspaceConfig


class FakeClock:
    """Returns a fixed instant, optionally advancing by *step* per call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(0)) -> None:
        self.now = start or datetime(2025, 3, 14, 9, 26, 53, 589000, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


class ScriptedPrompt:
    """Answers prompts from a list; raises EOFError once it runs out."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


class RecordingShell:
    """Records commands; fakes matching prefixes, delegates the rest.

    With no delegate every command is faked with ``exit_code``.
    """

    def __init__(
        self,
        exit_code: int = 0,
        *,
        delegate: HostShell | None = None,
        fake_prefixes: dict[str, int] | None = None,
    ) -> None:
        self.exit_code = exit_code
        self.delegate = delegate
        self.fake_prefixes = fake_prefixes or {}
        self.commands: list[str] = []

    def run(self, command: str) -> int:
        self.commands.append(command)
        for prefix, code in self.fake_prefixes.items():
            if command.startswith(prefix):
                return code
        if self.delegate is not None:
            return self.delegate.run(command)
        return self.exit_code


def console_output(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture
def console() -> Console:
    """Console writing into a StringIO, wide enough that nothing wraps."""
    return Console(file=io.StringIO(), width=500, color_system=None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def log_dir(tmp_path):
    return tmp_path / "logs"


@pytest.fixture
def make_executor(console, clock, log_dir):
    """Factory: make_executor(*answers, shell=None, audit_dir=None) -> (executor, shell, prompt)."""

    def _make(*answers: str, shell=None, audit_dir=None):
        shell = shell if shell is not None else RecordingShell()
        prompt = ScriptedPrompt(*answers)
        executor = GatedExecutor(
            console,
            AuditLogWriter(audit_dir or log_dir),
            prompt_fn=prompt,
            shell=shell,
            clock=clock,
        )
        return executor, shell, prompt

    return _make


@pytest.fixture
def workspace_config(tmp_path) -> WorkspaceConfig:
    return WorkspaceConfig(
        workspace_dir=tmp_path / "home" / ".bare-ai",
        bashrc_path=tmp_path / "home" / ".bashrc",
        telemetry_url=None,
        container_marker=tmp_path / "dockerenv",
    )
