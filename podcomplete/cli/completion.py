"""
Shell integration for podcomplete.

This module generates and installs the shell helpers that call
``podcomplete complete`` and apply the returned directive. Supported shells
include bash, zsh, and fish.

A completion script for another tool uses the helper like this (bash)::

    _mytool_rm() { _podcomplete_entry containers 2; }
    complete -F _mytool_rm mytool-rm

The second argument is the number of leading words (program and subcommand
names) that are not positional arguments. Further arguments such as
``--exact 2`` describe the command's argument count.
"""

import os
import platform
from pathlib import Path
from typing import Optional

import typer

APP_NAME = "podcomplete"
SUPPORTED_SHELLS = ["bash", "zsh", "fish"]


def detect_shell() -> str:
    """
    Detect the current shell.

    Returns:
        str: The detected shell (bash, zsh, fish), bash when unknown
    """
    shell_path = os.environ.get("SHELL", "")
    if shell_path:
        shell_name = os.path.basename(shell_path)
        if shell_name in SUPPORTED_SHELLS:
            return shell_name

    # Default to bash as fallback
    return "bash"


def generate_completion_script(shell: Optional[str] = None) -> str:
    """
    Generate the helper script for the specified shell.

    Args:
        shell: The shell to generate the script for (bash, zsh, fish)

    Returns:
        str: The script content
    """
    shell = shell or detect_shell()

    if shell == "bash":
        return generate_bash_completion()
    elif shell == "zsh":
        return generate_zsh_completion()
    elif shell == "fish":
        return generate_fish_completion()
    else:
        typer.echo(f"Unsupported shell: {shell}", err=True)
        raise typer.Exit(1)


def generate_bash_completion() -> str:
    """Generate the bash helper."""
    return f'''
# {APP_NAME} helper for bash
# usage: _{APP_NAME}_entry <entry-point> <words-to-skip> [--exact N|--min N|--max N]
_{APP_NAME}_entry() {{
    local entry=$1 skip=$2
    shift 2
    local cur=${{COMP_WORDS[COMP_CWORD]}}
    local -a words=("${{COMP_WORDS[@]:skip:COMP_CWORD-skip}}")
    local out directive line
    local -a candidates=()

    out=$({APP_NAME} complete "$@" "$entry" -- "${{words[@]}}" "$cur" 2>/dev/null)
    directive=${{out##*:}}
    out=${{out%:*}}

    # 1: error, 2: no space, 4: no file completion
    if (( directive & 1 )); then
        return
    fi
    if (( directive & 2 )); then
        compopt -o nospace
    fi
    if (( (directive & 4) == 0 )); then
        compopt -o default
    fi

    while IFS= read -r line; do
        [[ -n $line ]] && candidates+=("${{line%%$'\\t'*}}")
    done <<< "$out"

    local IFS=$'\\n'
    COMPREPLY=( $(compgen -W "${{candidates[*]}}" -- "$cur") )
}}
'''


def generate_zsh_completion() -> str:
    """Generate the zsh helper, built on bash completion emulation."""
    return f'''
# {APP_NAME} helper for zsh
autoload -U +X compinit && compinit
autoload -U +X bashcompinit && bashcompinit
{generate_bash_completion()}'''


def generate_fish_completion() -> str:
    """Generate the fish helper; fish renders the tab-separated descriptions itself."""
    return f'''
# {APP_NAME} helper for fish
# usage: complete -c mytool -f -a "(__{APP_NAME}_entry containers 1)"
function __{APP_NAME}_entry
    set -l entry $argv[1]
    set -l skip (math $argv[2] + 1)
    set -l words (commandline -opc)
    set -l cur (commandline -ct)
    set -l out ({APP_NAME} complete $argv[3..-1] $entry -- $words[$skip..-1] "$cur" 2>/dev/null)
    if test (count $out) -eq 0
        return
    end
    set -l directive (string replace ':' '' -- $out[-1])
    if test (math "$directive % 2") -eq 1
        return
    end
    if test (count $out) -gt 1
        printf '%s\\n' $out[1..-2]
    end
end
'''


def show_completion(shell: Optional[str] = None):
    """
    Show the helper script for the specified shell.

    Args:
        shell: The shell to generate the script for (bash, zsh, fish)
    """
    shell = shell or detect_shell()
    script = generate_completion_script(shell)
    typer.echo(script)

    typer.echo()
    typer.echo(f"# To install the helper for {shell}, run:")
    typer.echo(f"# {APP_NAME} completion --install --shell {shell}")
    if shell == "fish":
        typer.echo(f"# Or: {APP_NAME} completion --show --shell fish | source")
    else:
        typer.echo(f"# Or add this line to your ~/.{shell}rc:")
        typer.echo(f"# eval \"$({APP_NAME} completion --show --shell {shell})\"")


def default_install_path(shell: str) -> Path:
    """Per-user location where the helper is installed for ``shell``."""
    home = Path.home()
    if shell == "bash":
        if platform.system() == "Darwin":
            return home / ".bash_completion.d" / APP_NAME
        return home / ".local" / "share" / "bash-completion" / "completions" / APP_NAME
    elif shell == "zsh":
        return home / ".zsh" / "completions" / f"_{APP_NAME}"
    elif shell == "fish":
        return home / ".config" / "fish" / "conf.d" / f"{APP_NAME}.fish"
    raise ValueError(f"Unsupported shell: {shell}")


def install_completion(shell: Optional[str] = None, custom_path: Optional[Path] = None) -> Path:
    """
    Install the helper script for the specified shell.

    Args:
        shell: The shell to install the script for (bash, zsh, fish)
        custom_path: Custom path to install the script

    Returns:
        Path: Where the script was written
    """
    shell = shell or detect_shell()
    script = generate_completion_script(shell)

    completion_path = Path(custom_path) if custom_path else default_install_path(shell)
    completion_path.parent.mkdir(parents=True, exist_ok=True)
    completion_path.write_text(script)

    typer.echo(f"{shell} helper installed to {completion_path}")
    if shell == "zsh" and not custom_path:
        typer.echo("Make sure ~/.zsh/completions is in your fpath and sourced from ~/.zshrc")
    return completion_path
