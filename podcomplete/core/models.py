"""
Records returned by the container engine and the request types used to query it.

Records are read-only snapshots, valid for the duration of one completion call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class CompletionMode(Enum):
    """Which identifiers of an entity are eligible for prefix matching."""
    DEFAULT = "default"         # names always, IDs once enough characters are typed
    IDS_ONLY = "ids"
    NAMES_ONLY = "names"


@dataclass(frozen=True)
class EntityFilter:
    """Listing options for one backend query."""
    statuses: Tuple[str, ...] = ()
    all: bool = True
    include_pods: bool = True


@dataclass(frozen=True)
class Container:
    id: str
    names: Tuple[str, ...]
    pod_name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "names", tuple(self.names))
        if not self.names:
            raise ValueError(f"Container {self.id} has no names")

    @property
    def name(self) -> str:
        return self.names[0]


@dataclass(frozen=True)
class Pod:
    id: str
    name: str


@dataclass(frozen=True)
class Image:
    id: str
    repo_tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "repo_tags", tuple(self.repo_tags or ()))


@dataclass(frozen=True)
class Volume:
    name: str


@dataclass(frozen=True)
class Network:
    name: str


@dataclass(frozen=True)
class Registry:
    name: str


@dataclass(frozen=True)
class Connection:
    name: str
    uri: str
