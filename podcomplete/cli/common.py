"""
Common CLI options and callbacks for podcomplete.

This module provides reusable option classes and callbacks for CLI commands.
"""

import typer
from typing import Optional

from podcomplete.backends.podman import PodmanBackend
from podcomplete.core.accounts import AccountDatabase
from podcomplete.core.arity import ArityPolicy
from podcomplete.core.logging_utils import LOG_FORMATS, LOG_LEVELS, configure_logging
from podcomplete.core.settings import Settings, load_settings
from .completions import CompletionRouter


# ===== Option callbacks =====
# Click runs the callbacks of defaulted options after the explicit ones, so
# these only validate; logging is configured once all values are known.

def log_level_callback(value: Optional[str]) -> Optional[str]:
    """Typer callback to validate --log-level"""
    if value is None:
        return value
    value = value.lower()
    if value not in LOG_LEVELS:
        valid_levels = ", ".join(LOG_LEVELS.keys())
        raise typer.BadParameter(f"Log level must be one of: {valid_levels}")
    return value


def log_format_callback(value: str) -> str:
    """Typer callback to validate --log-format"""
    value = value.lower()
    if value not in LOG_FORMATS:
        raise typer.BadParameter(f"Log format must be one of: {', '.join(LOG_FORMATS)}")
    return value


def apply_logging_options(
    verbose: bool,
    quiet: bool,
    log_level: Optional[str],
    log_file: Optional[str],
    log_format: str,
) -> None:
    """
    Configure logging from the global options.

    Raises:
        typer.BadParameter: If the log file cannot be opened
    """
    try:
        configure_logging(
            level=log_level or "warning",
            log_file=log_file,
            quiet=quiet,
            verbose=verbose,
            json_format=log_format == "json",
        )
    except OSError as e:
        raise typer.BadParameter(f"Cannot write to log file: {e}", param_hint="--log-file")


class AppState:
    """Per-invocation state shared by the commands through ``ctx.obj``."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self._settings: Optional[Settings] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = load_settings(self.config_path)
        return self._settings

    def router(self) -> CompletionRouter:
        return build_router(self.settings)


def build_router(settings: Settings) -> CompletionRouter:
    """Wire a router to the podman backend and the host account databases."""
    return CompletionRouter(
        PodmanBackend(settings),
        AccountDatabase(settings.passwd_path, settings.group_path),
    )


class CommonOptions:
    """Base class for common command options."""

    @staticmethod
    def apply_to_app(app: typer.Typer):
        """Apply common options to the application."""

        @app.callback()
        def callback(
            ctx: typer.Context,
            verbose: bool = typer.Option(
                False, "--verbose", "-v", help="Enable debug output"
            ),
            quiet: bool = typer.Option(
                False, "--quiet", "-q", help="Suppress diagnostic output on stderr"
            ),
            log_level: Optional[str] = typer.Option(
                None,
                "--log-level",
                "-l",
                help="Set log level (debug, info, warning, error, critical) [default: warning]",
                callback=log_level_callback,
            ),
            log_file: Optional[str] = typer.Option(
                None, "--log-file", "-f", help="Log to file"
            ),
            log_format: str = typer.Option(
                "text", "--log-format", help="Log record format (text, json)", callback=log_format_callback
            ),
            config: Optional[str] = typer.Option(
                None,
                "--config",
                "-c",
                help="Settings file (default: $PODCOMPLETE_CONFIG or ~/.config/podcomplete/config.yaml)",
            ),
        ):
            """podcomplete: shell completion for container CLIs"""
            apply_logging_options(verbose, quiet, log_level, log_file, log_format)
            ctx.obj = AppState(config)


class ArityOptions:
    """Options describing how many positional arguments a command accepts."""

    @staticmethod
    def exact():
        return typer.Option(None, "--exact", min=0, help="Command takes exactly N arguments")

    @staticmethod
    def minimum():
        return typer.Option(None, "--min", min=0, help="Command takes at least N arguments")

    @staticmethod
    def maximum():
        return typer.Option(None, "--max", min=0, help="Command takes at most N arguments")

    @staticmethod
    def to_policy(
        exact: Optional[int], minimum: Optional[int], maximum: Optional[int]
    ) -> Optional[ArityPolicy]:
        """
        Build an ArityPolicy from the option values.

        Raises:
            typer.BadParameter: If --exact is combined with --min/--max or the bounds are inverted
        """
        if exact is not None:
            if minimum is not None or maximum is not None:
                raise typer.BadParameter("--exact cannot be combined with --min or --max")
            return ArityPolicy.exact(exact)
        if minimum is not None and maximum is not None:
            if maximum < minimum:
                raise typer.BadParameter(f"--max {maximum} is lower than --min {minimum}")
            return ArityPolicy.between(minimum, maximum)
        if minimum is not None:
            return ArityPolicy.minimum(minimum)
        if maximum is not None:
            return ArityPolicy.maximum(maximum)
        return None
