"""
User and group completion for ``--user user[:group]``.

The account databases are read from the host: the image the container will
run is not known while the command line is still being typed.
"""

import logging
from typing import Iterator, List, Tuple

from .directive import CompletionResult, Directive
from .exceptions import AccountLookupError

logger = logging.getLogger("podcomplete")

DEFAULT_PASSWD_PATH = "/etc/passwd"
DEFAULT_GROUP_PATH = "/etc/group"


class AccountDatabase:
    """Reads ``name:x:id:...`` entries from passwd and group files."""

    def __init__(self, passwd_path: str = DEFAULT_PASSWD_PATH, group_path: str = DEFAULT_GROUP_PATH):
        self.passwd_path = passwd_path
        self.group_path = group_path

    @staticmethod
    def _entries(path: str) -> Iterator[Tuple[str, str]]:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.read().splitlines()
        except OSError as e:
            raise AccountLookupError(f"Cannot read {path}: {e}") from e

        for line in lines:
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            fields = line.split(":")
            if len(fields) < 3 or not fields[0]:
                logger.debug(f"Skipping malformed entry in {path}: {line!r}")
                continue
            yield fields[0], fields[2]

    def users(self) -> List[Tuple[str, str]]:
        """Return ``(name, uid)`` pairs."""
        return list(self._entries(self.passwd_path))

    def groups(self) -> List[Tuple[str, str]]:
        """Return ``(name, gid)`` pairs."""
        return list(self._entries(self.group_path))


def complete_user_flag(database: AccountDatabase, partial: str) -> CompletionResult:
    """
    Complete ``user`` or ``user:group``.

    Numeric IDs are only offered once something has been typed for the
    current part.

    Args:
        database: Where users and groups are read from
        partial: The token being completed

    Returns:
        ``name:`` suggestions with NO_SPACE before the colon, ``user:group``
        suggestions with NO_FILE_COMP after it, ERROR if a file is unreadable
    """
    try:
        if ":" in partial:
            user = partial.split(":", 1)[0]
            with_ids = len(partial) > len(user) + 1
            suggestions = []
            for name, gid in database.groups():
                suggestions.append(f"{user}:{name}")
                if with_ids:
                    suggestions.append(f"{user}:{gid}")
            return CompletionResult(suggestions, Directive.NO_FILE_COMP)

        suggestions = []
        for name, uid in database.users():
            suggestions.append(f"{name}:")
            if partial:
                suggestions.append(f"{uid}:")
        return CompletionResult(suggestions, Directive.NO_SPACE)
    except AccountLookupError as e:
        logger.error(str(e))
        return CompletionResult.error()
