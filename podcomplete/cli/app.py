"""
Main CLI application for podcomplete.

This module provides the main Typer application and the global exception handler.
"""

import sys
import logging

import typer

from podcomplete.core.logging_utils import configure_logging
from .common import CommonOptions

app = typer.Typer(
    help="Shell completion engine for container CLIs",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

logger = logging.getLogger("podcomplete")

# Apply common options to the app
CommonOptions.apply_to_app(app)

# Diagnostics only; stdout belongs to the completion protocol
configure_logging(level="warning")

# ===== Exception Handler =====
def _global_exception_handler(exc_type, exc_value, exc_traceback):
    """
    Global exception handler for unhandled exceptions.
    Provides more user-friendly error messages for common issues.
    """
    from podcomplete.core.exceptions import (
        PodCompleteError, ConfigError, BackendQueryError, AccountLookupError
    )

    if isinstance(exc_value, PodCompleteError):
        if isinstance(exc_value, ConfigError):
            logger.error(f"Configuration error: {exc_value}")
        elif isinstance(exc_value, BackendQueryError):
            logger.error(f"Engine query failed: {exc_value}")
        elif isinstance(exc_value, AccountLookupError):
            logger.error(f"Account lookup failed: {exc_value}")
        else:
            logger.error(f"{exc_type.__name__}: {exc_value}")
        sys.exit(1)
    elif isinstance(exc_value, KeyboardInterrupt):
        sys.exit(130)
    elif isinstance(exc_value, ValueError):
        logger.error(f"Value error: {exc_value}")
        sys.exit(1)
    elif isinstance(exc_value, PermissionError):
        logger.error(f"Permission denied: {exc_value}")
        sys.exit(1)
    else:
        logger.error(f"Unexpected error: {exc_type.__name__}: {exc_value}")
        if logger.getEffectiveLevel() <= logging.DEBUG:
            import traceback
            logger.debug("Traceback:")
            for line in traceback.format_tb(exc_traceback):
                logger.debug(line.rstrip())
        sys.exit(1)

sys.excepthook = _global_exception_handler
