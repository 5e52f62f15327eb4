"""
podcomplete

Shell tab-completion engine for container CLIs: containers, pods, images,
volumes, networks, registries and remote connections.
"""

__version__ = "0.1.0"

# Import core exceptions
from .core.exceptions import (
    PodCompleteError, ConfigError, BackendQueryError, ArityError, AccountLookupError
)

# Import core modules
from .core.directive import Directive, Suggestion, CompletionResult
from .core.models import (
    CompletionMode, EntityFilter, Container, Pod, Image, Volume, Network,
    Registry, Connection
)
from .core.arity import ArityPolicy, CommandContext, valid_current_cmd_line
from .core.key_value import Leaf, Nested, LEAF, complete_key_values
from .core.query import (
    QueryBackend, get_containers, get_pods, get_volumes, get_images,
    get_networks, get_registries, get_connections
)
from .core.accounts import AccountDatabase
from .core.settings import Settings, load_settings
from .core.logging_utils import configure_logging

__all__ = [
    # Exceptions
    "PodCompleteError", "ConfigError", "BackendQueryError", "ArityError", "AccountLookupError",

    # Results
    "Directive", "Suggestion", "CompletionResult",

    # Records
    "CompletionMode", "EntityFilter", "Container", "Pod", "Image", "Volume",
    "Network", "Registry", "Connection",

    # Completion engine
    "ArityPolicy", "CommandContext", "valid_current_cmd_line",
    "Leaf", "Nested", "LEAF", "complete_key_values",
    "QueryBackend", "get_containers", "get_pods", "get_volumes", "get_images",
    "get_networks", "get_registries", "get_connections",
    "AccountDatabase",

    # Configuration
    "Settings", "load_settings", "configure_logging",
]
