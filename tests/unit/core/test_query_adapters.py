"""
Tests for the entity query adapters.
"""

import logging

from podcomplete.core.directive import Directive, Suggestion
from podcomplete.core.models import CompletionMode, EntityFilter
from podcomplete.core.query import (
    get_connections,
    get_containers,
    get_images,
    get_networks,
    get_pods,
    get_registries,
    get_volumes,
)
from tests.common import FakeBackend, sample_backend


class TestGetContainers:
    """Tests for get_containers."""

    def test_names_with_pod_annotation(self, backend):
        result = get_containers(backend, "", CompletionMode.DEFAULT)
        assert result.rendered() == ["web\tinfra", "db", "cache\tinfra"]
        assert result.directive == Directive.NO_FILE_COMP

    def test_filter_lists_all_with_pods(self, backend):
        get_containers(backend, "")
        assert backend.filters_for("containers") == [
            EntityFilter(statuses=(), all=True, include_pods=True)
        ]

    def test_status_filter_is_passed(self, backend):
        get_containers(backend, "", CompletionMode.DEFAULT, "created", "exited")
        assert backend.filters_for("containers")[0].statuses == ("created", "exited")

    def test_one_query_per_call(self, backend):
        get_containers(backend, "ab")
        assert backend.kinds_called() == ["containers"]

    def test_backend_failure(self, caplog):
        backend = sample_backend(failing=["containers"])
        with caplog.at_level(logging.ERROR, logger="podcomplete"):
            result = get_containers(backend, "w")
        assert result.is_error
        assert result.suggestions == ()
        assert "Cannot list containers" in caplog.text


class TestGetPods:
    """Tests for get_pods."""

    def test_ids_only(self, backend):
        result = get_pods(backend, "9f", CompletionMode.IDS_ONLY)
        assert result.texts() == ["9f8e7d6c5b4a", "9f00aa11bb22"]

    def test_running_filter(self, backend):
        get_pods(backend, "", CompletionMode.DEFAULT, "running", "degraded")
        assert backend.filters_for("pods")[0].statuses == ("running", "degraded")

    def test_failure(self):
        assert get_pods(sample_backend(failing=["pods"]), "").is_error


class TestNamedEntities:
    """Tests for volumes, networks and registries."""

    def test_volumes(self, backend):
        result = get_volumes(backend, "d")
        assert result.texts() == ["data", "dbstore"]
        assert result.directive == Directive.NO_FILE_COMP

    def test_networks(self, backend):
        assert get_networks(backend, "").texts() == ["podman", "backend", "frontend"]

    def test_registries_are_prefix_filtered(self, backend):
        assert get_registries(backend, "q").texts() == ["quay.io"]

    def test_empty_backend(self):
        result = get_volumes(FakeBackend(), "")
        assert result.suggestions == ()
        assert not result.is_error

    def test_failures(self):
        backend = sample_backend(failing=["volumes", "networks", "registries"])
        assert get_volumes(backend, "").is_error
        assert get_networks(backend, "").is_error
        assert get_registries(backend, "").is_error


class TestGetImages:
    """Tests for get_images."""

    def test_short_name(self, backend):
        assert get_images(backend, "alp").texts() == [
            "alpine:3.18", "alpine", "alpine:latest", "alpine"
        ]

    def test_full_references_for_empty_partial(self, backend):
        assert get_images(backend, "").texts() == [
            "registry.fedoraproject.org/f29/httpd:latest",
            "docker.io/library/alpine:3.18",
            "docker.io/library/alpine:latest",
        ]

    def test_failure(self):
        assert get_images(sample_backend(failing=["images"]), "").is_error


class TestGetConnections:
    """Tests for get_connections."""

    def test_sorted_and_annotated(self, backend):
        result = get_connections(backend)
        assert result.suggestions == (
            Suggestion("dev", "ssh://dev@localhost:2222/run/user/1000/podman/podman.sock"),
            Suggestion("prod", "ssh://core@prod.example.org:22/run/podman/podman.sock"),
        )
        assert result.directive == Directive.NO_FILE_COMP

    def test_failure(self):
        assert get_connections(sample_backend(failing=["connections"])).is_error
