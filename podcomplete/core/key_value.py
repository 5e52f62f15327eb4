"""
Key-value completion for flags such as ``--security-opt label=type:...``.

A grammar maps literal keys (usually ending in ``=`` or ``:``) to either a
Leaf, offered as-is, or a Nested completer that completes whatever follows
the key. Grammars are plain dicts and are walked in declaration order.
"""

import logging
from typing import Callable, Dict, Union

from .directive import CompletionResult, Directive

logger = logging.getLogger("podcomplete")

Completer = Callable[[str], CompletionResult]

# Keys ending in one of these expect a value right after them
VALUE_SEPARATORS = ("=", ":")


class Leaf:
    """A key with nothing to complete after it."""

    __slots__ = ()

    def __repr__(self):
        return "Leaf()"

    def __eq__(self, other):
        return isinstance(other, Leaf)

    def __hash__(self):
        return hash(Leaf)


class Nested:
    """A key whose value is completed by another completer."""

    __slots__ = ("completer",)

    def __init__(self, completer: Completer):
        self.completer = completer

    def __call__(self, remainder: str) -> CompletionResult:
        return self.completer(remainder)

    def __repr__(self):
        name = getattr(self.completer, "__name__", repr(self.completer))
        return f"Nested({name})"


KeyCompleter = Union[Leaf, Nested]
KeyValueGrammar = Dict[str, KeyCompleter]

LEAF = Leaf()


def complete_key_values(partial: str, grammar: KeyValueGrammar) -> CompletionResult:
    """
    Complete a token against a key-value grammar.

    If the token already starts with a key, the first such key (in declaration
    order) gets the rest of the token and its suggestions come back prefixed
    with the key. Otherwise every key starting with the token is offered.

    Args:
        partial: The token being completed
        grammar: Ordered mapping of literal keys to Leaf or Nested

    Returns:
        CompletionResult; NO_SPACE is added when an offered key expects a value
    """
    for key, completer in grammar.items():
        if partial.startswith(key):
            if isinstance(completer, Nested):
                logger.debug(f"Delegating {partial!r} to the completer of {key!r}")
                return completer(partial[len(key):]).with_prefix(key)
            return CompletionResult.empty(Directive.NO_FILE_COMP)

    directive = Directive.NO_FILE_COMP
    suggestions = []
    for key in grammar:
        if key.startswith(partial):
            suggestions.append(key)
            if key.endswith(VALUE_SEPARATORS):
                directive |= Directive.NO_SPACE
    return CompletionResult(suggestions, directive)


def key_value_completer(grammar: KeyValueGrammar) -> Completer:
    """Turn a grammar into a completer, so grammars can nest inside each other."""
    def complete(partial: str) -> CompletionResult:
        return complete_key_values(partial, grammar)
    return complete
