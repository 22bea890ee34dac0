"""ProvisioningWorkflow: the ordered setup steps for a bare-ai workspace.

Each step checks whether its effect is already in place before proposing
a command, so running the workflow again converges instead of piling up
duplicate profile entries or identity lines. Every mutating command goes
through the GatedExecutor. Steps that later steps depend on raise
ProvisioningError when they do not complete; the rest only report.
"""

from __future__ import annotations

import enum
import logging
import shlex
import shutil
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from bare_ai.exceptions import DependencyMissingError, ProvisioningError
from bare_ai.formatting import format_info, format_success, format_warning
from bare_ai.models.action import ActionStatus, ProposedAction
from bare_ai.models.config import TROUBLESHOOTING_URL
from bare_ai.provision.templates import (
    COLOR_PROMPT_MARKERS,
    COLOR_PROMPT_SETTINGS,
    LOADER_MARKER,
    render_constitution,
    render_loader_function,
    render_readme,
)

if TYPE_CHECKING:
    from rich.console import Console

    from bare_ai.executor.gate import GatedExecutor
    from bare_ai.models.config import WorkspaceConfig

logger = logging.getLogger(__name__)

AGENT_ID_KEY = "AGENT_ID"


class StepOutcome(str, enum.Enum):
    """How a provisioning step ended."""

    DONE = "done"
    PRESENT = "already present"
    SKIPPED = "skipped"
    FAILED = "failed"
    WARNED = "warning"

    def __str__(self) -> str:
        return self.value


_ACTION_OUTCOMES = {
    ActionStatus.SUCCESS: StepOutcome.DONE,
    ActionStatus.FAILED: StepOutcome.FAILED,
    ActionStatus.SKIPPED: StepOutcome.SKIPPED,
}


@dataclass
class ProvisioningReport:
    """Ordered (step name, outcome) pairs from one workflow run."""

    steps: list[tuple[str, StepOutcome]] = field(default_factory=list)

    def add(self, name: str, outcome: StepOutcome) -> None:
        self.steps.append((name, outcome))

    def outcome(self, name: str) -> StepOutcome | None:
        for step_name, outcome in self.steps:
            if step_name == name:
                return outcome
        return None


def write_file_command(content: str, path: Path, *, append: bool = False) -> str:
    """Build a shell command that writes *content* verbatim to *path*."""
    redirect = ">>" if append else ">"
    return f"printf '%s\\n' {shlex.quote(content)} {redirect} {shlex.quote(str(path))}"


def file_contains(path: Path, needle: str, *, line_prefix: bool = False) -> bool:
    """Return True if *path* exists and contains *needle*.

    With ``line_prefix`` the needle must start a line.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return False
    if line_prefix:
        return any(line.startswith(needle) for line in text.splitlines())
    return needle in text


class ProvisioningWorkflow:
    """Runs the setup steps in order against one WorkspaceConfig.

    Args:
        config: Paths and names to provision.
        executor: Gate every mutating command passes through.
        console: Where progress messages go.
        which: PATH lookup, ``shutil.which`` by default.
        id_factory: Produces the installation's AGENT_ID.
    """

    def __init__(
        self,
        config: WorkspaceConfig,
        executor: GatedExecutor,
        console: Console,
        *,
        which: Callable[[str], str | None] | None = None,
        id_factory: Callable[[], uuid.UUID | str] = uuid.uuid4,
    ) -> None:
        self.config = config
        self.executor = executor
        self.console = console
        self._which = which or shutil.which
        self._id_factory = id_factory

    def run(self) -> ProvisioningReport:
        """Run every step, stopping at the first ProvisioningError."""
        report = ProvisioningReport()
        format_success("Starting BARE-AI setup...", self.console)
        inside = self.check_container()
        report.add("container", StepOutcome.PRESENT if inside else StepOutcome.WARNED)

        steps: list[tuple[str, Callable[[], StepOutcome]]] = [
            ("directories", self.create_directories),
            ("agent_cli", self.ensure_agent_cli),
            ("agent_id", self.write_agent_id),
            ("constitution", self.write_constitution),
            ("readme", self.write_readme),
            ("telemetry", self.ping_telemetry),
            ("color_prompt", self.ensure_color_prompt),
            ("loader", self.ensure_loader_function),
        ]
        for name, step in steps:
            outcome = step()
            logger.info("Provisioning step %s: %s", name, outcome)
            report.add(name, outcome)

        self.print_api_key_instructions()
        format_success("BARE-AI setup finished.", self.console)
        return report

    # -- Steps -----------------------------------------------------------

    def check_container(self) -> bool:
        """Warn when not running inside a container. Returns True if inside one."""
        if self.config.container_marker.exists():
            return True
        format_warning(
            "Warning: Running on host system. For enhanced security, "
            "run the setup inside a containerized environment such as Docker.",
            self.console,
        )
        return False

    def create_directories(self) -> StepOutcome:
        cfg = self.config
        required = (cfg.workspace_dir, cfg.diary_dir, cfg.log_dir)
        if all(d.is_dir() for d in required):
            return StepOutcome.PRESENT

        format_warning(f"Creating BARE-AI configuration directory: {cfg.workspace_dir}", self.console)
        outcome = self._propose(ProposedAction(
            command=f"mkdir -p {shlex.quote(str(cfg.diary_dir))} {shlex.quote(str(cfg.log_dir))}",
            description="Create BARE-AI diary and logs directories",
        ))
        if not all(d.is_dir() for d in required):
            raise ProvisioningError(
                "directories", "Failed to create BARE-AI directories."
            )
        format_success("BARE-AI directories created.", self.console)
        return outcome

    def ensure_agent_cli(self) -> StepOutcome:
        cfg = self.config
        if self._which(cfg.cli_binary):
            return StepOutcome.PRESENT

        format_warning(f"{cfg.cli_binary} CLI not found.", self.console)
        manual = f"npm install -g {cfg.cli_package}"
        if not self._which("npm"):
            raise DependencyMissingError(
                "agent_cli",
                "npm",
                hints=[f"Install Node.js and npm, then install the CLI manually: {manual}"],
            )

        outcome = self._propose(ProposedAction(
            command=f"sudo npm install -g {shlex.quote(cfg.cli_package)}",
            description=f"Install {cfg.cli_binary} CLI globally using npm",
        ))
        if outcome is not StepOutcome.DONE:
            raise ProvisioningError(
                "agent_cli",
                f"Failed to install {cfg.cli_binary} CLI via npm.",
                hints=[
                    "Ensure npm is installed and you have sufficient permissions, "
                    f"or install the CLI manually: {manual}",
                    f"Troubleshooting: {TROUBLESHOOTING_URL}",
                ],
            )
        format_success(f"Installed {cfg.cli_binary} CLI via npm.", self.console)
        return StepOutcome.DONE

    def write_agent_id(self) -> StepOutcome:
        cfg = self.config
        if file_contains(cfg.config_file, f"{AGENT_ID_KEY}=", line_prefix=True):
            return StepOutcome.PRESENT

        agent_id = str(self._id_factory())
        return self._propose(ProposedAction(
            command=write_file_command(f"{AGENT_ID_KEY}={agent_id}", cfg.config_file, append=True),
            description="Generate and save unique AGENT_ID to config file",
        ))

    def write_constitution(self) -> StepOutcome:
        return self._write_document(
            "constitution", self.config.constitution_path, render_constitution(self.config)
        )

    def write_readme(self) -> StepOutcome:
        return self._write_document("readme", self.config.readme_path, render_readme(self.config))

    def ping_telemetry(self) -> StepOutcome:
        url = self.config.telemetry_url
        if not url:
            return StepOutcome.SKIPPED
        return self._propose(ProposedAction(
            command=f"curl -s -o /dev/null -w '%{{http_code}}' {shlex.quote(url)}",
            description="Ping demo telemetry endpoint to demonstrate auditability",
        ))

    def ensure_color_prompt(self) -> StepOutcome:
        bashrc = self.config.bashrc_path
        if all(file_contains(bashrc, marker) for marker in COLOR_PROMPT_MARKERS):
            format_info(f"Terminal color prompt settings already exist in {bashrc}. Skipping.", self.console)
            return StepOutcome.PRESENT

        return self._propose(ProposedAction(
            command=write_file_command("\n" + COLOR_PROMPT_SETTINGS, bashrc, append=True),
            description=f"Add terminal color prompt settings to {bashrc}",
        ))

    def ensure_loader_function(self) -> StepOutcome:
        bashrc = self.config.bashrc_path
        if file_contains(bashrc, LOADER_MARKER, line_prefix=True):
            format_info(f"BARE-AI function 'bare()' already found in {bashrc}. Skipping.", self.console)
            return StepOutcome.PRESENT

        outcome = self._propose(ProposedAction(
            command=write_file_command("\n" + render_loader_function(self.config), bashrc, append=True),
            description=f"Append BARE-AI loader function to {bashrc}",
        ))
        if outcome is not StepOutcome.DONE:
            raise ProvisioningError("loader", f"Failed to append BARE-AI function to {bashrc}.")
        format_success(f"BARE-AI function added to {bashrc}.", self.console)
        format_warning(f"Run 'source {bashrc}' to activate the 'bare' command in your current session.", self.console)
        return StepOutcome.DONE

    def print_api_key_instructions(self) -> None:
        bashrc = self.config.bashrc_path
        self.console.print()
        for line in (
            "IMPORTANT: Gemini API Key Setup",
            "To let the Gemini CLI authenticate, set your API key as an environment variable.",
            f"Add the following line to '{bashrc}', replacing 'YOUR_GEMINI_API_KEY' with your actual key:",
            'export GEMINI_API_KEY="YOUR_GEMINI_API_KEY"',
            f"Then run 'source {bashrc}' in your terminal session.",
        ):
            format_warning(line, self.console)

    # -- Helpers ---------------------------------------------------------

    def _write_document(self, step: str, path: Path, content: str) -> StepOutcome:
        if path.is_file() and not self.config.overwrite_docs:
            return StepOutcome.PRESENT

        format_warning(f"Creating {path}...", self.console)
        outcome = self._propose(ProposedAction(
            command=write_file_command(content, path),
            description=f"Create {path.name}",
        ))
        if not path.is_file():
            raise ProvisioningError(step, f"Failed to create {path.name}.")
        return outcome

    def _propose(self, action: ProposedAction) -> StepOutcome:
        """Send *action* through the gate and map its audit status to an outcome."""
        return _ACTION_OUTCOMES[self.executor.run(action).status]
