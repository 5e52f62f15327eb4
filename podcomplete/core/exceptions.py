"""
Exception classes for podcomplete.

This module defines custom exceptions used throughout the podcomplete library.
"""

class PodCompleteError(Exception):
    """
    Base exception class for all podcomplete errors.

    All custom exceptions in the library should inherit from this class.
    """
    pass

class ConfigError(PodCompleteError):
    """Exception raised when the settings file cannot be loaded or is invalid."""
    pass

class BackendQueryError(PodCompleteError):
    """Exception raised when the container engine cannot be queried."""

    def __init__(self, message, command=None):
        """
        Initialize a BackendQueryError.

        Args:
            message: Error message
            command: The engine command line that failed (optional)
        """
        super().__init__(message)
        self.command = list(command) if command else []

class ArityError(PodCompleteError):
    """Exception raised when a command receives the wrong number of arguments."""
    pass

class AccountLookupError(PodCompleteError):
    """Exception raised when the user or group database cannot be read."""
    pass
