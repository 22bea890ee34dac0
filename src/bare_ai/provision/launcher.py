"""Start the agent CLI with today's constitution.

Python counterpart of the ``bare()`` shell loader that setup writes into
the shell profile.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from bare_ai.exceptions import DependencyMissingError, WorkspaceNotReadyError
from bare_ai.provision.templates import DATE_PLACEHOLDER

if TYPE_CHECKING:
    from bare_ai.models.config import WorkspaceConfig

logger = logging.getLogger(__name__)

API_KEY_VAR = "GEMINI_API_KEY"


def prepare_session(config: WorkspaceConfig, today: date) -> tuple[str, Path]:
    """Ensure today's diary file exists and render the constitution.

    Returns:
        (constitution text with the date filled in, diary path)

    Raises:
        WorkspaceNotReadyError: If the constitution has not been created.
    """
    diary = config.diary_dir / f"{today.isoformat()}.md"
    diary.parent.mkdir(parents=True, exist_ok=True)
    diary.touch(exist_ok=True)

    if not config.constitution_path.is_file():
        raise WorkspaceNotReadyError(config.constitution_path)

    text = config.constitution_path.read_text(encoding="utf-8")
    return text.replace(DATE_PLACEHOLDER, today.isoformat()), diary


def build_agent_command(config: WorkspaceConfig, constitution: str) -> list[str]:
    return [config.cli_binary, "-m", config.model, "-i", constitution]


def launch_agent(
    config: WorkspaceConfig,
    *,
    today: date | None = None,
    which: Callable[[str], str | None] | None = None,
    runner: Callable[[list[str]], int] | None = None,
) -> int:
    """Run the agent CLI interactively and return its exit code.

    Raises:
        WorkspaceNotReadyError: If the constitution is missing.
        DependencyMissingError: If the agent CLI is not on PATH.
    """
    constitution, diary = prepare_session(config, today or date.today())
    which = which or shutil.which
    if not which(config.cli_binary):
        raise DependencyMissingError(
            "launch", config.cli_binary, hints=["Run 'bare-ai setup' to install it."]
        )
    argv = build_agent_command(config, constitution)
    logger.info("Launching %s with diary %s", config.cli_binary, diary)
    if runner is None:
        return subprocess.run(argv, check=False).returncode
    return runner(argv)
