"""
CLI package for podcomplete.

This module organizes the command-line interface for podcomplete into a modular structure.
"""

from .app import app
from .common import CommonOptions
from .completions import CompletionRouter, as_autocompletion

# Import commands to register them with the CLI
# This must be after importing app to avoid circular imports
from .commands import (
    complete_commands,
    shell_commands,
)
