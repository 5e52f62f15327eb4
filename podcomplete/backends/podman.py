"""
Query backend that reads listings from the ``podman`` command line.

Every listing runs one engine command with ``--format json`` and decodes the
result into records. Missing binaries, failing commands and undecodable
output all surface as BackendQueryError.
"""

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional

from podcomplete.core.exceptions import BackendQueryError
from podcomplete.core.models import (
    Connection,
    Container,
    EntityFilter,
    Image,
    Network,
    Pod,
    Registry,
    Volume,
)
from podcomplete.core.settings import Settings

logger = logging.getLogger("podcomplete")


def _status_filters(entity_filter: EntityFilter) -> List[str]:
    args = []
    for status in entity_filter.statuses:
        args.extend(["--filter", f"status={status}"])
    return args


def _field(item: Dict[str, Any], *names: str, default: Any = None) -> Any:
    """Return the first present field; podman renamed some keys between releases."""
    for name in names:
        if name in item and item[name] is not None:
            return item[name]
    return default


class PodmanBackend:
    """QueryBackend implementation on top of the podman CLI."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def _run_json(self, *args: str) -> Any:
        """Run an engine subcommand and decode its JSON output."""
        cmd = self.settings.engine_argv(*args)
        logger.debug(f"Running engine command: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
        except FileNotFoundError as e:
            raise BackendQueryError(f"Engine binary not found: {cmd[0]}", cmd) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise BackendQueryError(stderr or f"{cmd[0]} exited with status {e.returncode}", cmd) from e
        except OSError as e:
            raise BackendQueryError(f"Cannot run {cmd[0]}: {e}", cmd) from e

        output = result.stdout.strip()
        if not output:
            return []
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise BackendQueryError(f"Cannot decode engine output: {e}", cmd) from e

    def _run_json_list(self, *args: str) -> List[Dict[str, Any]]:
        data = self._run_json(*args)
        if not isinstance(data, list):
            raise BackendQueryError(f"Expected a JSON list from {' '.join(args)}", self.settings.engine_argv(*args))
        return [item for item in data if isinstance(item, dict)]

    def list_containers(self, entity_filter: EntityFilter) -> List[Container]:
        args = ["ps", "--format", "json"]
        if entity_filter.all:
            args.append("--all")
        if entity_filter.include_pods:
            args.append("--pod")
        args.extend(_status_filters(entity_filter))

        containers = []
        for item in self._run_json_list(*args):
            names = _field(item, "Names", default=[])
            if isinstance(names, str):
                names = [names]
            container_id = _field(item, "Id", "ID", default="")
            if not container_id or not names:
                logger.debug(f"Skipping container without ID or name: {item}")
                continue
            containers.append(Container(container_id, tuple(names), _field(item, "PodName", default="")))
        return containers

    def list_pods(self, entity_filter: EntityFilter) -> List[Pod]:
        args = ["pod", "ps", "--format", "json"]
        args.extend(_status_filters(entity_filter))
        return [
            Pod(_field(item, "Id", "ID", default=""), _field(item, "Name", default=""))
            for item in self._run_json_list(*args)
        ]

    def list_images(self, entity_filter: EntityFilter) -> List[Image]:
        images = []
        for item in self._run_json_list("images", "--format", "json"):
            repo_tags = _field(item, "RepoTags", "Names", default=[])
            images.append(Image(_field(item, "Id", "ID", default=""), tuple(repo_tags)))
        return images

    def list_volumes(self, entity_filter: EntityFilter) -> List[Volume]:
        return [
            Volume(_field(item, "Name", "name", default=""))
            for item in self._run_json_list("volume", "ls", "--format", "json")
        ]

    def list_networks(self, entity_filter: EntityFilter) -> List[Network]:
        return [
            Network(_field(item, "Name", "name", default=""))
            for item in self._run_json_list("network", "ls", "--format", "json")
        ]

    def list_registries(self) -> List[Registry]:
        """Search registries from the settings, else from ``podman info``."""
        if self.settings.registries:
            return [Registry(name) for name in self.settings.registries]

        info = self._run_json("info", "--format", "json")
        registries = info.get("registries", {}) if isinstance(info, dict) else {}
        search = registries.get("search", []) if isinstance(registries, dict) else []
        return [Registry(name) for name in search]

    def list_connections(self) -> List[Connection]:
        """Service destinations from the settings, else ``system connection list``."""
        if self.settings.service_destinations:
            return [
                Connection(name, uri)
                for name, uri in self.settings.service_destinations.items()
            ]
        return [
            Connection(_field(item, "Name", default=""), _field(item, "URI", "Uri", default=""))
            for item in self._run_json_list("system", "connection", "list", "--format", "json")
        ]
