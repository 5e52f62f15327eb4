"""
Argument-count checks that decide whether completion is attempted at all.

Commands describe how many positional arguments they take with an
ArityPolicy. Frameworks that only expose a validation callable are still
supported: the count is then recovered from the validator's error message.
"""

import logging
import re
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .exceptions import ArityError

logger = logging.getLogger("podcomplete")

ArgsValidator = Callable[[List[str]], None]

_ARITY_MESSAGE = re.compile(r"^(\d+) arg\(s\), received (\d+)")


class ArityKind(Enum):
    EXACT = "exact"
    MINIMUM = "minimum"
    RANGE = "range"


class ArityPolicy:
    """
    Declared positional-argument count of a command.

    ``upper`` is None for an unbounded minimum.
    """

    __slots__ = ("kind", "lower", "upper")

    def __init__(self, kind: ArityKind, lower: int, upper: Optional[int]):
        if lower < 0 or (upper is not None and upper < lower):
            raise ValueError(f"Invalid argument bounds: {lower}..{upper}")
        self.kind = kind
        self.lower = lower
        self.upper = upper

    @classmethod
    def exact(cls, count: int) -> "ArityPolicy":
        return cls(ArityKind.EXACT, count, count)

    @classmethod
    def minimum(cls, count: int) -> "ArityPolicy":
        return cls(ArityKind.MINIMUM, count, None)

    @classmethod
    def maximum(cls, count: int) -> "ArityPolicy":
        return cls(ArityKind.RANGE, 0, count)

    @classmethod
    def between(cls, lower: int, upper: int) -> "ArityPolicy":
        return cls(ArityKind.RANGE, lower, upper)

    @classmethod
    def none(cls) -> "ArityPolicy":
        return cls(ArityKind.EXACT, 0, 0)

    def admits(self, count: int) -> bool:
        """Return True unless ``count`` arguments is already too many."""
        return self.upper is None or count <= self.upper

    def validate(self, args: Sequence[str], command_name: str = "") -> None:
        """
        Check a full argument list.

        Raises:
            ArityError: With the same phrasing cobra-style frameworks use, so
                messages stay parseable by parse_arity_message
        """
        got = len(args)
        if self.kind is ArityKind.EXACT and self.upper == 0:
            if got:
                raise ArityError(f'unknown command "{args[0]}" for "{command_name}"')
        elif self.kind is ArityKind.EXACT:
            if got != self.lower:
                raise ArityError(f"accepts {self.lower} arg(s), received {got}")
        elif self.kind is ArityKind.MINIMUM:
            if got < self.lower:
                raise ArityError(f"requires at least {self.lower} arg(s), only received {got}")
        elif self.lower == 0:
            if got > self.upper:
                raise ArityError(f"accepts at most {self.upper} arg(s), received {got}")
        elif not self.lower <= got <= self.upper:
            raise ArityError(f"accepts between {self.lower} and {self.upper} arg(s), received {got}")

    def __eq__(self, other):
        if not isinstance(other, ArityPolicy):
            return NotImplemented
        return (self.kind, self.lower, self.upper) == (other.kind, other.lower, other.upper)

    def __hash__(self):
        return hash((self.kind, self.lower, self.upper))

    def __repr__(self):
        return f"ArityPolicy({self.kind.value}, {self.lower}, {self.upper})"


class CommandContext:
    """What the dispatching framework knows about the command being completed."""

    def __init__(
        self,
        name: str = "",
        arity: Optional[ArityPolicy] = None,
        args_validator: Optional[ArgsValidator] = None,
    ):
        self.name = name
        self.arity = arity
        self.args_validator = args_validator

    def __repr__(self):
        return f"CommandContext({self.name!r}, arity={self.arity!r})"


def parse_arity_message(message: str) -> Optional[Tuple[int, int]]:
    """
    Recover ``(need, got)`` from a validator's error message.

    Understands "requires at least N arg(s), only received M" and
    "accepts N arg(s), received M". Anything else returns None.
    """
    cleaned = message
    if cleaned.startswith("requires at least "):
        cleaned = cleaned[len("requires at least "):]
    cleaned = cleaned.replace("only received", "received")
    if cleaned.startswith("accepts "):
        cleaned = cleaned[len("accepts "):]
    match = _ARITY_MESSAGE.match(cleaned)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def valid_current_cmd_line(
    command: Optional[CommandContext], args: Sequence[str], partial: str
) -> bool:
    """
    Decide whether one more positional argument may be completed.

    Args:
        command: The command being completed, or None when unknown
        args: Positional arguments already on the line
        partial: The token being completed, counted as one more argument

    Returns:
        True if completion should be attempted
    """
    if command is None:
        return True
    candidate = list(args) + [partial]

    if command.arity is not None:
        return command.arity.admits(len(candidate))

    if command.args_validator is None:
        return True

    try:
        command.args_validator(candidate)
    except Exception as e:  # validators are third-party callables
        counts = parse_arity_message(str(e))
        if counts is None:
            logger.debug(f"Not completing {command.name or 'command'}: {e}")
            return False
        need, got = counts
        logger.debug(f"Argument count for {command.name or 'command'}: need={need}, got={got}")
        return need >= got
    return True
