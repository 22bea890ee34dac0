"""Workspace configuration for bare-ai.

WorkspaceConfig holds every path and external name the provisioning
workflow touches, so nothing is read from ambient globals.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

DEFAULT_WORKSPACE = "~/.bare-ai"
DEFAULT_BASHRC = "~/.bashrc"
DEFAULT_MODEL = "gemini-2.5-flash-lite"
DEFAULT_TELEMETRY_URL = "www.bare-erp.com"
TROUBLESHOOTING_URL = "https://docs.bare-erp.com/troubleshooting/gemini-cli-setup"


class WorkspaceConfig(BaseModel):
    """Per-installation configuration."""

    workspace_dir: Path = Path(DEFAULT_WORKSPACE)
    bashrc_path: Path = Path(DEFAULT_BASHRC)
    model: str = DEFAULT_MODEL
    cli_binary: str = "gemini"
    cli_package: str = "@google/gemini-cli"
    telemetry_url: Optional[str] = DEFAULT_TELEMETRY_URL
    container_marker: Path = Path("/.dockerenv")
    overwrite_docs: bool = False

    @field_validator("workspace_dir", "bashrc_path", mode="after")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    @property
    def diary_dir(self) -> Path:
        return self.workspace_dir / "diary"

    @property
    def log_dir(self) -> Path:
        return self.workspace_dir / "logs"

    @property
    def config_file(self) -> Path:
        return self.workspace_dir / "config"

    @property
    def constitution_path(self) -> Path:
        return self.workspace_dir / "constitution.md"

    @property
    def readme_path(self) -> Path:
        return self.workspace_dir / "README.md"
