"""
Entity query adapters.

Each adapter issues exactly one query against the container engine, applies
prefix matching and returns a CompletionResult. A failing query is reported on
the diagnostic channel (the ``podcomplete`` logger, which writes to stderr) and
answered with an ERROR directive; nothing is retried.
"""

import logging
from typing import List, Protocol

from .directive import CompletionResult, Directive, Suggestion
from .exceptions import BackendQueryError
from .matching import match_containers, match_images, match_names, match_pods
from .models import (
    CompletionMode,
    Connection,
    Container,
    EntityFilter,
    Image,
    Network,
    Pod,
    Registry,
    Volume,
)

logger = logging.getLogger("podcomplete")


class QueryBackend(Protocol):
    """
    Read-only view of the container engine.

    Implementations raise BackendQueryError when the engine cannot be queried.
    They are reused sequentially by one router and need not be thread-safe.
    """

    def list_containers(self, entity_filter: EntityFilter) -> List[Container]: ...

    def list_pods(self, entity_filter: EntityFilter) -> List[Pod]: ...

    def list_images(self, entity_filter: EntityFilter) -> List[Image]: ...

    def list_volumes(self, entity_filter: EntityFilter) -> List[Volume]: ...

    def list_networks(self, entity_filter: EntityFilter) -> List[Network]: ...

    def list_registries(self) -> List[Registry]: ...

    def list_connections(self) -> List[Connection]: ...


def _report(kind: str, error: BackendQueryError) -> CompletionResult:
    logger.error(f"Cannot list {kind}: {error}")
    if error.command:
        logger.debug(f"Failed engine command: {' '.join(error.command)}")
    return CompletionResult.error()


def get_containers(
    backend: QueryBackend,
    partial: str,
    mode: CompletionMode = CompletionMode.DEFAULT,
    *statuses: str
) -> CompletionResult:
    """
    Complete container IDs and names.

    Args:
        backend: Engine to query
        partial: The token being completed
        mode: Which identifiers are eligible for matching
        *statuses: Only list containers in one of these states

    Returns:
        CompletionResult with NO_FILE_COMP, or ERROR if the engine failed
    """
    entity_filter = EntityFilter(statuses=tuple(statuses), all=True, include_pods=True)
    try:
        containers = backend.list_containers(entity_filter)
    except BackendQueryError as e:
        return _report("containers", e)
    logger.debug(f"Matching {len(containers)} containers against {partial!r} ({mode.value})")
    return CompletionResult(match_containers(containers, partial, mode), Directive.NO_FILE_COMP)


def get_pods(
    backend: QueryBackend,
    partial: str,
    mode: CompletionMode = CompletionMode.DEFAULT,
    *statuses: str
) -> CompletionResult:
    """Complete pod IDs and names, optionally restricted to some states."""
    entity_filter = EntityFilter(statuses=tuple(statuses))
    try:
        pods = backend.list_pods(entity_filter)
    except BackendQueryError as e:
        return _report("pods", e)
    logger.debug(f"Matching {len(pods)} pods against {partial!r} ({mode.value})")
    return CompletionResult(match_pods(pods, partial, mode), Directive.NO_FILE_COMP)


def get_volumes(backend: QueryBackend, partial: str) -> CompletionResult:
    try:
        volumes = backend.list_volumes(EntityFilter())
    except BackendQueryError as e:
        return _report("volumes", e)
    return CompletionResult(match_names((v.name for v in volumes), partial), Directive.NO_FILE_COMP)


def get_images(backend: QueryBackend, partial: str) -> CompletionResult:
    """Complete image IDs and repository references (see match_images)."""
    try:
        images = backend.list_images(EntityFilter())
    except BackendQueryError as e:
        return _report("images", e)
    logger.debug(f"Matching {len(images)} images against {partial!r}")
    return CompletionResult(match_images(images, partial), Directive.NO_FILE_COMP)


def get_networks(backend: QueryBackend, partial: str) -> CompletionResult:
    try:
        networks = backend.list_networks(EntityFilter())
    except BackendQueryError as e:
        return _report("networks", e)
    return CompletionResult(match_names((n.name for n in networks), partial), Directive.NO_FILE_COMP)


def get_registries(backend: QueryBackend, partial: str) -> CompletionResult:
    try:
        registries = backend.list_registries()
    except BackendQueryError as e:
        return _report("registries", e)
    return CompletionResult(match_names((r.name for r in registries), partial), Directive.NO_FILE_COMP)


def get_connections(backend: QueryBackend) -> CompletionResult:
    """
    List every remote connection, annotated with its destination URI.

    Connections are not prefix-filtered; the shell does that.
    """
    try:
        connections = backend.list_connections()
    except BackendQueryError as e:
        return _report("system connections", e)
    suggestions = [
        Suggestion(connection.name, connection.uri)
        for connection in sorted(connections, key=lambda c: c.name)
    ]
    return CompletionResult(suggestions, Directive.NO_FILE_COMP)
