"""
Prefix matching of a partial token against entity identifiers.

Pure functions: they take records and return suggestions, without talking to
the container engine.
"""

from typing import Iterable, Iterator, List, Optional

from .directive import Suggestion
from .models import CompletionMode, Container, Image, Pod

# IDs are only offered once the user typed more than one character in default
# mode, otherwise every short hex prefix would flood the list.
ID_PREFIX_MIN_LENGTH = 2
SHORT_ID_LENGTH = 12


def short_id(entity_id: str) -> str:
    return entity_id[:SHORT_ID_LENGTH]


def id_eligible(partial: str, mode: CompletionMode) -> bool:
    """Return True if IDs may be matched for this partial token and mode."""
    if mode is CompletionMode.IDS_ONLY:
        return True
    return mode is CompletionMode.DEFAULT and len(partial) >= ID_PREFIX_MIN_LENGTH


def name_eligible(mode: CompletionMode) -> bool:
    return mode is not CompletionMode.IDS_ONLY


def _match_id_and_name(
    entity_id: str,
    name: str,
    partial: str,
    mode: CompletionMode,
    annotation: Optional[str] = None,
) -> Iterator[Suggestion]:
    if id_eligible(partial, mode) and entity_id.startswith(partial):
        yield Suggestion(short_id(entity_id), annotation)
    if name_eligible(mode) and name.startswith(partial):
        yield Suggestion(name, annotation)


def match_containers(
    containers: Iterable[Container], partial: str, mode: CompletionMode = CompletionMode.DEFAULT
) -> List[Suggestion]:
    """
    Match containers by ID and first name.

    Both kinds of suggestion carry the container's pod name as annotation.

    Args:
        containers: Container records in backend order
        partial: The token being completed
        mode: Which identifiers are eligible

    Returns:
        List of suggestions, ID before name for each container
    """
    suggestions = []
    for container in containers:
        suggestions.extend(
            _match_id_and_name(container.id, container.name, partial, mode, container.pod_name)
        )
    return suggestions


def match_pods(
    pods: Iterable[Pod], partial: str, mode: CompletionMode = CompletionMode.DEFAULT
) -> List[Suggestion]:
    """Match pods by ID and name, without annotation."""
    suggestions = []
    for pod in pods:
        suggestions.extend(_match_id_and_name(pod.id, pod.name, partial, mode))
    return suggestions


def match_names(names: Iterable[str], partial: str) -> List[Suggestion]:
    """Plain name prefix matching used for volumes, networks and registries."""
    return [Suggestion(name) for name in names if name.startswith(partial)]


def strip_tag(reference: str) -> str:
    """
    Remove the trailing ``@digest`` or ``:tag`` from an image reference.

    Only the last path segment is inspected, so a registry port such as
    ``localhost:5000/app`` is left alone.
    """
    head, slash, last = reference.rpartition("/")
    last = last.split("@", 1)[0].split(":", 1)[0]
    return f"{head}{slash}{last}"


def reference_candidates(repo_tag: str) -> Iterator[str]:
    """
    Yield every suggestion form of one repo tag.

    ``registry.fedoraproject.org/f29/httpd:latest`` yields
    ``registry.fedoraproject.org/f29/httpd:latest``,
    ``registry.fedoraproject.org/f29/httpd``, ``f29/httpd:latest``,
    ``f29/httpd``, ``httpd:latest`` and ``httpd``.
    """
    segments = repo_tag.split("/")
    for start in range(len(segments)):
        with_tag = "/".join(segments[start:])
        yield with_tag
        without_tag = strip_tag(with_tag)
        if without_tag != with_tag:
            yield without_tag


def match_image_references(repo_tags: Iterable[str], partial: str) -> List[Suggestion]:
    """
    Match the repo tags of one image.

    With nothing typed only the full references are offered; otherwise every
    path suffix, with and without its tag, is a candidate.
    """
    if not partial:
        return [Suggestion(repo_tag) for repo_tag in repo_tags]
    return [
        Suggestion(candidate)
        for repo_tag in repo_tags
        for candidate in reference_candidates(repo_tag)
        if candidate.startswith(partial)
    ]


def match_images(images: Iterable[Image], partial: str) -> List[Suggestion]:
    """Match images by short ID (default threshold) and by repo tag."""
    suggestions = []
    for image in images:
        if id_eligible(partial, CompletionMode.DEFAULT) and image.id.startswith(partial):
            suggestions.append(Suggestion(short_id(image.id)))
        suggestions.extend(match_image_references(image.repo_tags, partial))
    return suggestions
