"""
Completion directives and results.

A completion answer is a list of suggestions plus a directive telling the
shell what to do with them. Directive values are bit-compatible with the
cobra shell-completion protocol so the generated shell scripts can test
individual bits of the number printed after the suggestions.
"""

import enum
from typing import Iterable, Iterator, List, Optional, Tuple

ANNOTATION_SEPARATOR = "\t"


class Directive(enum.IntFlag):
    """Post-completion behaviour requested from the shell."""

    DEFAULT = 0
    ERROR = 1
    NO_SPACE = 2
    NO_FILE_COMP = 4

    # The shell ignores the suggestion list and completes filesystem paths
    FALLBACK_TO_PATHS = 0

    def describe(self) -> str:
        """Return a readable name such as ``NO_SPACE|NO_FILE_COMP``."""
        if self == Directive.DEFAULT:
            return "DEFAULT"
        names = [
            member.name
            for member in (Directive.ERROR, Directive.NO_SPACE, Directive.NO_FILE_COMP)
            if self & member
        ]
        return "|".join(names)


class Suggestion:
    """
    A single completion candidate.

    The text is what gets inserted on the command line; the optional
    annotation is shown as a description by shells that support it.
    """

    __slots__ = ("text", "annotation")

    def __init__(self, text: str, annotation: Optional[str] = None):
        if ANNOTATION_SEPARATOR in text:
            raise ValueError(f"Suggestion text must not contain a tab: {text!r}")
        self.text = text
        self.annotation = annotation or None

    def render(self) -> str:
        """Return the wire form ``text`` or ``text<TAB>annotation``."""
        if self.annotation:
            return f"{self.text}{ANNOTATION_SEPARATOR}{self.annotation}"
        return self.text

    def with_prefix(self, prefix: str) -> "Suggestion":
        return Suggestion(prefix + self.text, self.annotation)

    @classmethod
    def parse(cls, raw: str) -> "Suggestion":
        """Build a suggestion from its wire form, splitting on the first tab."""
        text, _, annotation = raw.partition(ANNOTATION_SEPARATOR)
        return cls(text, annotation)

    def __eq__(self, other):
        if not isinstance(other, Suggestion):
            return NotImplemented
        return (self.text, self.annotation) == (other.text, other.annotation)

    def __hash__(self):
        return hash((self.text, self.annotation))

    def __repr__(self):
        if self.annotation:
            return f"Suggestion({self.text!r}, {self.annotation!r})"
        return f"Suggestion({self.text!r})"


class CompletionResult:
    """
    The ``(suggestions, directive)`` pair returned by every completer.

    Unpacks like a tuple: ``suggestions, directive = result``.
    """

    __slots__ = ("suggestions", "directive")

    def __init__(self, suggestions: Iterable = (), directive: Directive = Directive.NO_FILE_COMP):
        items = tuple(
            item if isinstance(item, Suggestion) else Suggestion(item)
            for item in suggestions
        )
        directive = Directive(directive)
        if directive & Directive.ERROR:
            if directive != Directive.ERROR:
                raise ValueError(f"ERROR cannot be combined with other directives: {directive.describe()}")
            if items:
                raise ValueError("An ERROR result cannot carry suggestions")
        self.suggestions: Tuple[Suggestion, ...] = items
        self.directive = directive

    @classmethod
    def error(cls) -> "CompletionResult":
        return cls((), Directive.ERROR)

    @classmethod
    def empty(cls, directive: Directive = Directive.NO_FILE_COMP) -> "CompletionResult":
        return cls((), directive)

    @property
    def is_error(self) -> bool:
        return self.directive == Directive.ERROR

    def texts(self) -> List[str]:
        """Suggestion texts without annotations."""
        return [suggestion.text for suggestion in self.suggestions]

    def rendered(self) -> List[str]:
        """Suggestions in their wire form."""
        return [suggestion.render() for suggestion in self.suggestions]

    def with_prefix(self, prefix: str) -> "CompletionResult":
        return CompletionResult(
            [suggestion.with_prefix(prefix) for suggestion in self.suggestions],
            self.directive,
        )

    def __iter__(self) -> Iterator:
        return iter((list(self.suggestions), self.directive))

    def __eq__(self, other):
        if not isinstance(other, CompletionResult):
            return NotImplemented
        return (self.suggestions, self.directive) == (other.suggestions, other.directive)

    def __repr__(self):
        return f"CompletionResult({self.rendered()!r}, {self.directive.describe()})"
