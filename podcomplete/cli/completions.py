"""
Auto-completion entry points for the container CLI.

Every entry point takes ``(command, args, partial)`` and returns a
CompletionResult. Positional-argument entry points first ask the arity gate
whether one more argument fits; flag-value entry points do not, flag values
are not positional.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from podcomplete.core.accounts import AccountDatabase, complete_user_flag as complete_user_and_group
from podcomplete.core.arity import ArityPolicy, CommandContext, valid_current_cmd_line
from podcomplete.core.directive import CompletionResult, Directive
from podcomplete.core.key_value import LEAF, KeyValueGrammar, Nested, complete_key_values
from podcomplete.core.models import CompletionMode
from podcomplete.core.query import (
    QueryBackend,
    get_connections,
    get_containers,
    get_images,
    get_networks,
    get_pods,
    get_registries,
    get_volumes,
)

logger = logging.getLogger("podcomplete")

EntryPoint = Callable[[Optional[CommandContext], Sequence[str], str], CompletionResult]

ENTRY_POINT_PREFIX = "complete_"

# Closed vocabularies, in the order they are offered
CHANGE_INSTRUCTIONS = ["CMD", "ENTRYPOINT", "ENV", "EXPOSE", "LABEL", "ONBUILD", "STOPSIGNAL", "USER", "VOLUME", "WORKDIR"]
LOG_LEVELS = ["debug", "info", "warn", "error", "fatal", "panic"]
IMAGE_FORMATS = ["oci", "docker"]
ATTACH_STREAMS = ["stdin", "stdout", "stderr"]
CGROUP_MODES = ["enabled", "disabled", "no-conmon", "split"]
IMAGE_VOLUME_MODES = ["bind", "tmpfs", "ignore"]
LOG_DRIVERS = ["journald", "none", "k8s-file"]  # json-file is deliberately not offered
LOG_OPTIONS = ["path=", "tag="]
PULL_POLICIES = ["always", "missing", "never"]
RESTART_POLICIES = ["always", "no", "on-failure", "unless-stopped"]
STOP_SIGNALS = ["SIGHUP", "SIGINT", "SIGKILL", "SIGTERM"]
SYSTEMD_FLAG_VALUES = ["true", "false", "always"]
MOUNT_TYPES = ["type=bind,", "type=volume,", "type=tmpfs,"]
EVENT_FILTERS = ["container=", "event=", "image=", "pod=", "volume=", "type="]
SYSTEMD_RESTART_POLICIES = ["no", "on-success", "on-failure", "on-abnormal", "on-watchdog", "on-abort", "always"]
TRUST_TYPES = ["signedBy", "accept", "reject"]
IMAGE_SORT_KEYS = ["created", "id", "repository", "size", "tag"]
INSPECT_TYPES = ["container", "image", "all"]
MANIFEST_FORMATS = ["oci", "v2s2"]
NETWORK_DRIVERS = ["bridge"]
POD_SHARE_NAMESPACES = ["ipc", "net", "pid", "user", "uts", "cgroup", "none"]
POD_PS_SORT_KEYS = ["created", "id", "name", "status", "number"]
PS_SORT_KEYS = ["command", "created", "id", "image", "names", "runningfor", "size", "status"]
IMAGE_SAVE_FORMATS = ["oci-archive", "oci-dir", "docker-dir"]
WAIT_CONDITIONS = ["unknown", "configured", "created", "running", "stopped", "paused", "exited", "removing"]
CGROUP_MANAGERS = ["cgroupfs", "systemd"]
EVENT_BACKENDS = ["file", "journald", "none"]
SD_NOTIFY_MODES = ["container", "conmon", "ignore"]
CONTAINER_STATUSES = ["created", "running", "paused", "stopped", "exited", "unknown"]
POD_STATUSES = ["stopped", "running", "paused", "exited", "dead", "created", "degraded"]
HEALTH_STATES = ["healthy", "unhealthy"]
SELINUX_LABEL_OPTIONS = ["user:", "role:", "type:", "level:", "filetype:", "disable"]

DETACH_KEY_PREFIX = "ctrl-"


def _static(values: List[str], directive: Directive = Directive.NO_FILE_COMP) -> CompletionResult:
    return CompletionResult(values, directive)


def _paths(_: str) -> CompletionResult:
    """Let the shell complete filesystem paths."""
    return CompletionResult.empty(Directive.FALLBACK_TO_PATHS)


class CompletionRouter:
    """
    Named completion entry points wired to one query backend.

    Entry points are the ``complete_*`` methods; they are looked up by their
    dashed name, e.g. ``router.entry_point("containers-running")``.
    """

    def __init__(self, backend: QueryBackend, accounts: Optional[AccountDatabase] = None):
        self.backend = backend
        self.accounts = accounts or AccountDatabase()

    # ===== Entry point lookup =====

    @classmethod
    def entry_point_names(cls) -> List[str]:
        """Dashed names of every entry point, sorted."""
        return sorted(
            attr[len(ENTRY_POINT_PREFIX):].replace("_", "-")
            for attr in dir(cls)
            if attr.startswith(ENTRY_POINT_PREFIX) and callable(getattr(cls, attr))
        )

    @classmethod
    def describe_entry_points(cls) -> List[Tuple[str, str]]:
        """``(name, first docstring line)`` for every entry point."""
        descriptions = []
        for name in cls.entry_point_names():
            doc = getattr(cls, ENTRY_POINT_PREFIX + name.replace("-", "_")).__doc__ or ""
            descriptions.append((name, doc.strip().splitlines()[0] if doc.strip() else ""))
        return descriptions

    def entry_point(self, name: str) -> EntryPoint:
        """
        Return the entry point registered under ``name``.

        Raises:
            KeyError: If no entry point has that name
        """
        attr = ENTRY_POINT_PREFIX + name.replace("-", "_")
        if name not in self.entry_point_names():
            raise KeyError(f"Unknown completion entry point: {name}")
        return getattr(self, attr)

    def complete(
        self,
        name: str,
        args: Sequence[str],
        partial: str,
        command: Optional[CommandContext] = None,
    ) -> CompletionResult:
        """Run the entry point ``name``."""
        logger.debug(f"Completing {name} args={list(args)} partial={partial!r}")
        return self.entry_point(name)(command, args, partial)

    # ===== Positional arguments =====

    def complete_containers(self, command, args, partial):
        """All container names and IDs."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_containers(self.backend, partial, CompletionMode.DEFAULT)

    def complete_containers_created(self, command, args, partial):
        """Containers in the created state."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_containers(self.backend, partial, CompletionMode.DEFAULT, "created")

    def complete_containers_exited(self, command, args, partial):
        """Containers in the exited state."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_containers(self.backend, partial, CompletionMode.DEFAULT, "exited")

    def complete_containers_paused(self, command, args, partial):
        """Containers in the paused state."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_containers(self.backend, partial, CompletionMode.DEFAULT, "paused")

    def complete_containers_running(self, command, args, partial):
        """Containers in the running state."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_containers(self.backend, partial, CompletionMode.DEFAULT, "running")

    def complete_containers_startable(self, command, args, partial):
        """Containers that can be started (created or exited)."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_containers(self.backend, partial, CompletionMode.DEFAULT, "created", "exited")

    def complete_pods(self, command, args, partial):
        """All pod names and IDs."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_pods(self.backend, partial, CompletionMode.DEFAULT)

    def complete_pods_running(self, command, args, partial):
        """Running pods; degraded pods count as running."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_pods(self.backend, partial, CompletionMode.DEFAULT, "running", "degraded")

    def complete_containers_and_pods(self, command, args, partial):
        """Container names and pod names."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        containers = get_containers(self.backend, partial, CompletionMode.DEFAULT)
        pods = get_pods(self.backend, partial, CompletionMode.DEFAULT)
        return CompletionResult(containers.suggestions + pods.suggestions, Directive.NO_FILE_COMP)

    def complete_containers_and_images(self, command, args, partial):
        """Container names and image references."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        containers = get_containers(self.backend, partial, CompletionMode.DEFAULT)
        images = get_images(self.backend, partial)
        return CompletionResult(containers.suggestions + images.suggestions, Directive.NO_FILE_COMP)

    def complete_volumes(self, command, args, partial):
        """Volume names."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_volumes(self.backend, partial)

    def complete_images(self, command, args, partial):
        """Image IDs and references."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_images(self.backend, partial)

    def complete_create_run(self, command, args, partial):
        """An image for the first argument, then filesystem paths."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        if len(args) < 1:
            return get_images(self.backend, partial)
        # TODO: complete paths inside the image once the image can be inspected here
        return CompletionResult.empty(Directive.FALLBACK_TO_PATHS)

    def complete_registries(self, command, args, partial):
        """Configured search registries."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_registries(self.backend, partial)

    def complete_networks(self, command, args, partial):
        """Network names."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_networks(self.backend, partial)

    def complete_cp_command(self, command, args, partial):
        """Copy source and destination: a container (to be followed by :path) or a local path."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        if len(args) >= 2:
            return CompletionResult.empty()
        containers = get_containers(self.backend, partial, CompletionMode.DEFAULT)
        if any(text.startswith(partial) for text in containers.texts()):
            return CompletionResult(containers.suggestions, Directive.NO_SPACE)
        return CompletionResult.empty(Directive.FALLBACK_TO_PATHS)

    def complete_system_connections(self, command, args, partial):
        """Remote connections, described by their destination URI."""
        if not valid_current_cmd_line(command, args, partial):
            return CompletionResult.empty()
        return get_connections(self.backend)

    # ===== Flag values =====

    def complete_detach_keys(self, command, args, partial):
        """--detach-keys: key sequences starting with ctrl-."""
        if partial.endswith(","):
            return CompletionResult([partial + DETACH_KEY_PREFIX], Directive.NO_SPACE)
        return CompletionResult([DETACH_KEY_PREFIX], Directive.NO_SPACE)

    def complete_change_instructions(self, command, args, partial):
        """--change: Dockerfile instructions accepted by commit and import."""
        return _static(CHANGE_INSTRUCTIONS, Directive.NO_SPACE)

    def complete_image_format(self, command, args, partial):
        """--format for image builds and pushes."""
        return _static(IMAGE_FORMATS)

    def complete_create_attach(self, command, args, partial):
        """--attach streams."""
        return _static(ATTACH_STREAMS)

    def _namespace_grammar(self) -> KeyValueGrammar:
        return {
            "container:": Nested(lambda s: get_containers(self.backend, s, CompletionMode.DEFAULT)),
            "ns:": Nested(_paths),
            "host": LEAF,
            "private": LEAF,
        }

    def complete_namespace(self, command, args, partial):
        """Namespace modes: host, container:<name>, ns:<path>, private."""
        return complete_key_values(partial, self._namespace_grammar())

    def complete_user_namespace(self, command, args, partial):
        """--userns: namespace modes plus auto and keep-id."""
        grammar = self._namespace_grammar()
        grammar["auto"] = LEAF
        grammar["keep-id"] = LEAF
        return complete_key_values(partial, grammar)

    def complete_cgroup_mode(self, command, args, partial):
        """--cgroups modes."""
        return _static(CGROUP_MODES)

    def complete_image_volume(self, command, args, partial):
        """--image-volume modes."""
        return _static(IMAGE_VOLUME_MODES)

    def complete_log_driver(self, command, args, partial):
        """--log-driver values."""
        return _static(LOG_DRIVERS)

    def complete_log_opt(self, command, args, partial):
        """--log-opt keys; path= is followed by a filesystem path."""
        if partial.startswith("path="):
            return CompletionResult.empty(Directive.FALLBACK_TO_PATHS)
        return _static(LOG_OPTIONS, Directive.NO_FILE_COMP | Directive.NO_SPACE)

    def complete_pull_option(self, command, args, partial):
        """--pull policies."""
        return _static(PULL_POLICIES)

    def complete_restart_option(self, command, args, partial):
        """--restart policies."""
        return _static(RESTART_POLICIES)

    def complete_security_option(self, command, args, partial):
        """--security-opt keys, with SELinux label options after label=."""
        return complete_key_values(partial, {
            "apparmor=": LEAF,
            "no-new-privileges": LEAF,
            "seccomp=": Nested(_paths),
            "label=": Nested(_complete_selinux_label),
        })

    def complete_stop_signal(self, command, args, partial):
        """--stop-signal values."""
        return _static(STOP_SIGNALS)

    def complete_systemd_flag(self, command, args, partial):
        """--systemd values."""
        return _static(SYSTEMD_FLAG_VALUES)

    def complete_user_flag(self, command, args, partial):
        """--user: user[:group] from the host account databases."""
        return complete_user_and_group(self.accounts, partial)

    def complete_mount_flag(self, command, args, partial):
        """--mount types."""
        return _static(MOUNT_TYPES, Directive.NO_SPACE)

    def complete_volume_flag(self, command, args, partial):
        """--volume: volume names or host paths, then the container path."""
        volumes = get_volumes(self.backend, partial)
        directive = Directive.FALLBACK_TO_PATHS if ":" in partial else Directive.NO_SPACE
        return CompletionResult(volumes.suggestions, directive)

    def complete_json_format(self, command, args, partial):
        """--format for commands that only print JSON."""
        return _static(["json"])

    def complete_event_filter(self, command, args, partial):
        """events --filter keys."""
        return _static(EVENT_FILTERS, Directive.NO_SPACE)

    def complete_systemd_restart_options(self, command, args, partial):
        """generate systemd --restart-policy values."""
        return _static(SYSTEMD_RESTART_POLICIES)

    def complete_trust_type(self, command, args, partial):
        """image trust set --type values."""
        return _static(TRUST_TYPES)

    def complete_image_sort(self, command, args, partial):
        """images --sort keys."""
        return _static(IMAGE_SORT_KEYS)

    def complete_inspect_type(self, command, args, partial):
        """inspect --type values."""
        return _static(INSPECT_TYPES)

    def complete_manifest_format(self, command, args, partial):
        """manifest push --format values."""
        return _static(MANIFEST_FORMATS)

    def complete_network_driver(self, command, args, partial):
        """network create --driver values."""
        return _static(NETWORK_DRIVERS)

    def complete_pod_share_namespace(self, command, args, partial):
        """pod create --share namespaces."""
        return _static(POD_SHARE_NAMESPACES)

    def complete_pod_ps_sort(self, command, args, partial):
        """pod ps --sort keys."""
        return _static(POD_PS_SORT_KEYS)

    def complete_ps_sort(self, command, args, partial):
        """ps --sort keys."""
        return _static(PS_SORT_KEYS)

    def complete_image_save_format(self, command, args, partial):
        """save --format values."""
        return _static(IMAGE_SAVE_FORMATS)

    def complete_wait_condition(self, command, args, partial):
        """wait --condition states."""
        return _static(WAIT_CONDITIONS)

    def complete_cgroup_manager(self, command, args, partial):
        """--cgroup-manager values."""
        return _static(CGROUP_MANAGERS)

    def complete_event_backend(self, command, args, partial):
        """--events-backend values."""
        return _static(EVENT_BACKENDS)

    def complete_log_level(self, command, args, partial):
        """--log-level values."""
        return _static(LOG_LEVELS)

    def complete_sd_notify(self, command, args, partial):
        """--sdnotify modes."""
        return _static(SD_NOTIFY_MODES)

    def complete_ps_filters(self, command, args, partial):
        """ps --filter key=value pairs."""
        backend = self.backend
        return complete_key_values(partial, {
            "id=": Nested(lambda s: get_containers(backend, s, CompletionMode.IDS_ONLY)),
            "name=": Nested(lambda s: get_containers(backend, s, CompletionMode.NAMES_ONLY)),
            "status=": Nested(lambda _: _static(CONTAINER_STATUSES)),
            "ancestor=": Nested(lambda s: get_images(backend, s)),
            "before=": Nested(lambda s: get_containers(backend, s, CompletionMode.DEFAULT)),
            "since=": Nested(lambda s: get_containers(backend, s, CompletionMode.DEFAULT)),
            "volume=": Nested(lambda s: get_volumes(backend, s)),
            "health=": Nested(lambda _: _static(HEALTH_STATES)),
            "label=": LEAF,
            "exited=": LEAF,
            "until=": LEAF,
        })

    def complete_pod_ps_filters(self, command, args, partial):
        """pod ps --filter key=value pairs."""
        backend = self.backend
        return complete_key_values(partial, {
            "id=": Nested(lambda s: get_pods(backend, s, CompletionMode.IDS_ONLY)),
            "name=": Nested(lambda s: get_pods(backend, s, CompletionMode.NAMES_ONLY)),
            "status=": Nested(lambda _: _static(POD_STATUSES)),
            "ctr-ids=": Nested(lambda s: get_containers(backend, s, CompletionMode.IDS_ONLY)),
            "ctr-names=": Nested(lambda s: get_containers(backend, s, CompletionMode.NAMES_ONLY)),
            "ctr-number=": LEAF,
            "ctr-status=": Nested(lambda _: _static(CONTAINER_STATUSES)),
            "label=": LEAF,
        })


def _complete_selinux_label(partial: str) -> CompletionResult:
    if partial.startswith("d"):
        return _static(["disable"])
    return _static(SELINUX_LABEL_OPTIONS, Directive.NO_SPACE | Directive.NO_FILE_COMP)


def as_autocompletion(
    router_factory: Callable[[], CompletionRouter],
    name: str,
    arity: Optional[ArityPolicy] = None,
):
    """
    Adapt an entry point to a typer ``autocompletion=`` callback.

    The router is built lazily so the engine is only queried when the shell
    actually asks for completions.

    Args:
        router_factory: Builds the router (and its backend) on demand
        name: Entry point name
        arity: Positional-argument policy of the command being completed

    Returns:
        Callback returning ``(value, help)`` tuples
    """
    def autocomplete(args: List[str], incomplete: str) -> List[Tuple[str, str]]:
        command = CommandContext(name, arity=arity)
        result = router_factory().complete(name, args, incomplete, command)
        return [(s.text, s.annotation or "") for s in result.suggestions]
    return autocomplete
