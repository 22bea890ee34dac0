"""Text written into the workspace and the shell profile.

The constitution keeps a literal ``{{DATE}}`` placeholder; the loader
substitutes today's date each time the agent starts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bare_ai.models.config import WorkspaceConfig

DATE_PLACEHOLDER = "{{DATE}}"
LOADER_MARKER = "# The BARE-AI Loader"
COLOR_PROMPT_MARKERS = ("color_prompt=yes", "force_color_prompt=yes")

CONSTITUTION_TEMPLATE = """\
# MISSION
You are Bare-AI, an autonomous Linux Agent responsible for "Self-Healing" data pipelines.
Your goal is to fix data errors, convert formats, and verify integrity using standard Linux tools.

# OPERATIONAL RULES
1. **Tool First, Think Second:** Do not guess file contents. Use `head`, `file`, or `grep` to inspect them first.
2. **Verification:** Never assume a conversion worked. Always run a check command (e.g., `jq .` to verify JSON validity) before reporting success.
3. **Resource Efficiency:** Do not read files larger than 1MB into your context. Use `split`, `awk`, or `sed` to process them in chunks.
4. **Self-Correction:** If a command fails, read the error code, formulate a fix, and retry once. If it fails twice, report the error to NiFi.
5. **Use sudo DEBIAN_FRONTEND=noninteractive** for updates to prevent UI hangs.

# FORBIDDEN ACTIONS
- Do not use `rm` on files outside the `/tmp` directory.
- Do not hallucinate library availability. Use `dpkg -l` or `pip list` to check before importing.

# DIARY RULES
1. Log all learnings, a succinct summary of actions, and file names to {diary_dir}/{{{{DATE}}}}.md.
"""

COLOR_PROMPT_SETTINGS = """\
# enable color support of ls and some other commands
if [ -x /usr/bin/dircolors ]; then
    test -r ~/.dircolors && eval "$(dircolors -b ~/.dircolors)" || eval "$(dircolors -b)"
fi
# enable bash completion in interactive shells
if ! shopt -oq posix; then
    if [ -f /usr/share/bash-completion/bash_completion ]; then
        . /usr/share/bash-completion/bash_completion
    elif [ -f /etc/bash_completion ]; then
        . /etc/bash_completion
    fi
fi
# enable programmable completion features (e.g. for git)
if [ -d /etc/bash_completion.d ]; then
    for rc in /etc/bash_completion.d/*; do
        [ -r "$rc" ] && . "$rc"
    done
fi

# set a fancy prompt (non-essential but nice)
color_prompt=yes
force_color_prompt=yes
"""

_LOADER_TEMPLATE = """\
{marker}
bare() {{
    local TODAY=$(date +%Y-%m-%d)
    local CONSTITUTION="{constitution}"
    local DIARY="{diary_dir}/$TODAY.md"

    mkdir -p "$(dirname "$DIARY")"
    touch "$DIARY"

    if [ ! -f "$CONSTITUTION" ]; then
        echo "Error: Constitution file not found at $CONSTITUTION." >&2
        return 1
    fi

    # GEMINI_API_KEY must be exported for the CLI to authenticate.
    local constitution_content
    constitution_content=$(sed "s|{placeholder}|$TODAY|g" "$CONSTITUTION")
    {binary} -m {model} -i "$constitution_content"
}}
"""

_README_TEMPLATE = """\
# BARE-AI Setup and Configuration

This directory (`{workspace}`) stores the persistent configuration and memory for the BARE-AI agent.

## Directory Structure

- **`{workspace}/`**: The root directory for BARE-AI's configuration.
    - **`config`**: Holds the unique `AGENT_ID` of this installation.
    - **`constitution.md`**: Contains the core identity, mission, and operational rules for the BARE-AI agent.
    - **`diary/`**: Daily session notes. The filename format is `YYYY-MM-DD.md`.
    - **`logs/`**: One JSON audit record per proposed command, approved or not.

## Gemini CLI and API Key Setup

1.  **Gemini CLI Installation:** The setup checks for the `{binary}` command. If it is not found, it offers to install it with npm. If automatic installation fails, install it manually:
    *   `npm install -g {package}`
    Ensure the installation location is in your system's PATH.

2.  **API Key:** The Gemini CLI requires an API key. Add the following line to `{bashrc}`, replacing `YOUR_GEMINI_API_KEY` with your actual key:
    ```bash
    export GEMINI_API_KEY="YOUR_GEMINI_API_KEY"
    ```
    Then run `source {bashrc}` in your current terminal session.

## Shell Profile Modifications

The following function is added to `{bashrc}` to start the agent:

```bash
{loader}```

After sourcing `{bashrc}`, start the agent with `bare` (or `bare-ai launch`).

## Terminal Prompt Colors

If prompt colors are not appearing, ensure these lines are present and uncommented in `{bashrc}`:

```bash
{colors}```

## Audit Log

Review every approved, failed, and skipped command with `bare-ai history`.
"""


def render_constitution(config: WorkspaceConfig) -> str:
    return CONSTITUTION_TEMPLATE.format(diary_dir=config.diary_dir)


def double_quote_escape(value: object) -> str:
    """Escape *value* for use inside a double-quoted shell string."""
    text = str(value)
    for char in ("\\", "\"", "$", "`"):
        text = text.replace(char, "\\" + char)
    return text


def render_loader_function(config: WorkspaceConfig) -> str:
    """Render the ``bare()`` shell function for *config*'s workspace."""
    return _LOADER_TEMPLATE.format(
        marker=LOADER_MARKER,
        constitution=double_quote_escape(config.constitution_path),
        diary_dir=double_quote_escape(config.diary_dir),
        placeholder=DATE_PLACEHOLDER,
        binary=config.cli_binary,
        model=config.model,
    )


def render_readme(config: WorkspaceConfig) -> str:
    return _README_TEMPLATE.format(
        workspace=config.workspace_dir,
        bashrc=config.bashrc_path,
        binary=config.cli_binary,
        package=config.cli_package,
        loader=render_loader_function(config),
        colors=COLOR_PROMPT_SETTINGS,
    )
