"""
Tests for the podman command-line backend.
"""

import subprocess
from unittest.mock import patch

import pytest

from podcomplete.backends.podman import PodmanBackend
from podcomplete.core.exceptions import BackendQueryError
from podcomplete.core.models import Connection, Container, EntityFilter, Image, Pod, Registry
from podcomplete.core.query import get_containers
from podcomplete.core.settings import Settings
from tests.common import WEB_ID, EngineOutputFactory


@pytest.fixture
def podman():
    return PodmanBackend(Settings())


class TestRunJson:
    """Tests for running engine commands."""

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_global_args_are_inserted(self, mock_run):
        mock_run.return_value = EngineOutputFactory.completed([])
        backend = PodmanBackend(Settings(engine_command="podman-remote", engine_global_args=["--url", "unix:///tmp/s"]))
        backend.list_volumes(EntityFilter())
        cmd = mock_run.call_args[0][0]
        assert cmd == ["podman-remote", "--url", "unix:///tmp/s", "volume", "ls", "--format", "json"]
        assert mock_run.call_args[1]["check"] is True

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_missing_binary(self, mock_run, podman):
        mock_run.side_effect = FileNotFoundError("podman")
        with pytest.raises(BackendQueryError, match="not found") as excinfo:
            podman.list_volumes(EntityFilter())
        assert excinfo.value.command[0] == "podman"

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_engine_not_executable(self, mock_run, podman):
        mock_run.side_effect = PermissionError(13, "Permission denied", "podman")
        with pytest.raises(BackendQueryError, match="Cannot run podman") as excinfo:
            podman.list_containers(EntityFilter())
        assert excinfo.value.command[0] == "podman"

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_engine_not_executable_answers_error(self, mock_run, podman):
        mock_run.side_effect = PermissionError(13, "Permission denied", "podman")
        result = get_containers(podman, "")
        assert result.is_error
        assert result.suggestions == ()

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_failing_command_uses_stderr(self, mock_run, podman):
        mock_run.side_effect = subprocess.CalledProcessError(
            125, ["podman", "ps"], stderr="Error: cannot connect to Podman socket\n"
        )
        with pytest.raises(BackendQueryError, match="cannot connect to Podman socket"):
            podman.list_containers(EntityFilter())

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_failing_command_without_stderr(self, mock_run, podman):
        mock_run.side_effect = subprocess.CalledProcessError(125, ["podman", "ps"], stderr="")
        with pytest.raises(BackendQueryError, match="exited with status 125"):
            podman.list_containers(EntityFilter())

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_undecodable_output(self, mock_run, podman):
        mock_run.return_value = EngineOutputFactory.completed(stdout="not json")
        with pytest.raises(BackendQueryError, match="Cannot decode"):
            podman.list_networks(EntityFilter())

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_empty_output_is_empty_list(self, mock_run, podman):
        mock_run.return_value = EngineOutputFactory.completed(stdout="\n")
        assert podman.list_networks(EntityFilter()) == []

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_non_list_output(self, mock_run, podman):
        mock_run.return_value = EngineOutputFactory.completed({"Name": "data"})
        with pytest.raises(BackendQueryError, match="Expected a JSON list"):
            podman.list_volumes(EntityFilter())


class TestListings:
    """Tests for decoding engine listings."""

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_containers(self, mock_run, podman):
        mock_run.return_value = EngineOutputFactory.completed([
            EngineOutputFactory.ps_entry(WEB_ID, ["web"], "infra"),
            {"ID": "0123456789ab", "Names": "db"},
            {"Id": "", "Names": ["ghost"]},
        ])
        containers = podman.list_containers(EntityFilter(statuses=("created", "exited")))
        assert containers == [
            Container(WEB_ID, ("web",), "infra"),
            Container("0123456789ab", ("db",), ""),
        ]
        cmd = mock_run.call_args[0][0]
        assert cmd == [
            "podman", "ps", "--format", "json", "--all", "--pod",
            "--filter", "status=created", "--filter", "status=exited",
        ]

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_pods(self, mock_run, podman):
        mock_run.return_value = EngineOutputFactory.completed([{"Id": "9f8e7d6c5b4a", "Name": "infra"}])
        assert podman.list_pods(EntityFilter(statuses=("running",))) == [Pod("9f8e7d6c5b4a", "infra")]
        assert mock_run.call_args[0][0][1:] == ["pod", "ps", "--format", "json", "--filter", "status=running"]

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_images(self, mock_run, podman):
        mock_run.return_value = EngineOutputFactory.completed([
            {"Id": "f29a", "RepoTags": ["registry.fedoraproject.org/f29/httpd:latest"]},
            {"Id": "a1b2", "Names": ["docker.io/library/alpine:3.18"]},
            {"Id": "dead", "RepoTags": None},
        ])
        assert podman.list_images(EntityFilter()) == [
            Image("f29a", ("registry.fedoraproject.org/f29/httpd:latest",)),
            Image("a1b2", ("docker.io/library/alpine:3.18",)),
            Image("dead", ()),
        ]

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_registries_from_info(self, mock_run, podman):
        mock_run.return_value = EngineOutputFactory.completed(
            {"registries": {"search": ["registry.fedoraproject.org", "docker.io"]}}
        )
        assert podman.list_registries() == [Registry("registry.fedoraproject.org"), Registry("docker.io")]
        assert mock_run.call_args[0][0][1:] == ["info", "--format", "json"]

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_registries_from_settings(self, mock_run):
        backend = PodmanBackend(Settings(registries=["quay.io"]))
        assert backend.list_registries() == [Registry("quay.io")]
        mock_run.assert_not_called()

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_connections(self, mock_run, podman):
        mock_run.return_value = EngineOutputFactory.completed([
            {"Name": "prod", "URI": "ssh://core@prod.example.org:22/run/podman/podman.sock", "Default": True},
        ])
        assert podman.list_connections() == [
            Connection("prod", "ssh://core@prod.example.org:22/run/podman/podman.sock")
        ]
        assert mock_run.call_args[0][0][1:] == ["system", "connection", "list", "--format", "json"]

    @patch("podcomplete.backends.podman.subprocess.run")
    def test_connections_from_settings(self, mock_run):
        backend = PodmanBackend(Settings(service_destinations={"dev": "unix:///run/podman/podman.sock"}))
        assert backend.list_connections() == [Connection("dev", "unix:///run/podman/podman.sock")]
        mock_run.assert_not_called()
