"""Tests for starting the agent CLI with today's constitution."""

from __future__ import annotations

from datetime import date

import pytest

from bare_ai.exceptions import DependencyMissingError, WorkspaceNotReadyError
from bare_ai.provision.launcher import build_agent_command, launch_agent, prepare_session
from bare_ai.provision.templates import render_constitution

TODAY = date(2025, 3, 14)


@pytest.fixture
def provisioned(workspace_config):
    workspace_config.workspace_dir.mkdir(parents=True)
    workspace_config.constitution_path.write_text(render_constitution(workspace_config))
    return workspace_config


class TestPrepareSession:
    def test_fills_in_date_and_creates_diary(self, provisioned):
        text, diary = prepare_session(provisioned, TODAY)

        assert "{{DATE}}" not in text
        assert f"{provisioned.diary_dir}/2025-03-14.md" in text
        assert diary == provisioned.diary_dir / "2025-03-14.md"
        assert diary.is_file()

    def test_existing_diary_is_untouched(self, provisioned):
        diary = provisioned.diary_dir / "2025-03-14.md"
        diary.parent.mkdir()
        diary.write_text("notes")
        prepare_session(provisioned, TODAY)
        assert diary.read_text() == "notes"

    def test_missing_constitution(self, workspace_config):
        with pytest.raises(WorkspaceNotReadyError) as exc_info:
            prepare_session(workspace_config, TODAY)
        assert exc_info.value.missing == workspace_config.constitution_path


class TestLaunchAgent:
    def test_runs_agent_with_model_and_constitution(self, provisioned):
        calls = []

        def runner(argv):
            calls.append(argv)
            return 3

        code = launch_agent(provisioned, today=TODAY, which=lambda _: "/usr/bin/gemini", runner=runner)

        assert code == 3
        [argv] = calls
        assert argv[:4] == ["gemini", "-m", "gemini-2.5-flash-lite", "-i"]
        assert argv[4].startswith("# MISSION")

    def test_missing_binary(self, provisioned):
        with pytest.raises(DependencyMissingError) as exc_info:
            launch_agent(provisioned, today=TODAY, which=lambda _: None, runner=lambda argv: 0)
        assert exc_info.value.program == "gemini"

    def test_build_agent_command_uses_config(self, workspace_config):
        config = workspace_config.model_copy(update={"model": "gemini-pro", "cli_binary": "gem"})
        assert build_agent_command(config, "text") == ["gem", "-m", "gemini-pro", "-i", "text"]
