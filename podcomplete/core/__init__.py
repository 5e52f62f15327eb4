"""
Core functionality for podcomplete.

This package contains the completion engine: directives, records, prefix
matching, the key-value combinator, the arity gate and the query adapters.
"""

from .exceptions import (
    PodCompleteError,
    ConfigError,
    BackendQueryError,
    ArityError,
    AccountLookupError,
)
from .directive import Directive, Suggestion, CompletionResult
from .models import (
    CompletionMode,
    EntityFilter,
    Container,
    Pod,
    Image,
    Volume,
    Network,
    Registry,
    Connection,
)
from .arity import ArityPolicy, CommandContext, valid_current_cmd_line, parse_arity_message
from .key_value import Leaf, Nested, LEAF, complete_key_values, key_value_completer
from .query import (
    QueryBackend,
    get_containers,
    get_pods,
    get_volumes,
    get_images,
    get_networks,
    get_registries,
    get_connections,
)
from .accounts import AccountDatabase, complete_user_flag
from .settings import Settings, load_settings
