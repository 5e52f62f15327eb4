"""
Tests for the YAML settings loader.
"""


import pytest

from podcomplete.core.exceptions import ConfigError
from podcomplete.core.settings import Settings, load_settings

SAMPLE_SETTINGS = """
engine:
  command: /usr/local/bin/podman
  global_args: ["--remote", "--connection", "prod"]
  service_destinations:
    prod: ssh://core@prod.example.org:22/run/podman/podman.sock
    dev:
      uri: ssh://dev@localhost:2222/run/user/1000/podman/podman.sock
registries:
  - quay.io
  - docker.io
accounts:
  passwd: /srv/passwd
  group: /srv/group
"""


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(SAMPLE_SETTINGS)
    return str(path)


class TestLoadSettings:
    """Tests for load_settings."""

    def test_explicit_file(self, settings_file):
        settings = load_settings(settings_file)
        assert settings.engine_command == "/usr/local/bin/podman"
        assert settings.engine_global_args == ["--remote", "--connection", "prod"]
        assert settings.registries == ["quay.io", "docker.io"]
        assert settings.passwd_path == "/srv/passwd"
        assert settings.group_path == "/srv/group"
        assert settings.source == settings_file

    def test_both_destination_shapes(self, settings_file):
        settings = load_settings(settings_file)
        assert settings.service_destinations == {
            "prod": "ssh://core@prod.example.org:22/run/podman/podman.sock",
            "dev": "ssh://dev@localhost:2222/run/user/1000/podman/podman.sock",
        }

    def test_environment_variable_path(self, settings_file, monkeypatch):
        monkeypatch.setenv("PODCOMPLETE_CONFIG", settings_file)
        assert load_settings().engine_command == "/usr/local/bin/podman"

    def test_missing_default_file_gives_defaults(self):
        settings = load_settings()
        assert settings.engine_command == "podman"
        assert settings.source is None
        assert settings.passwd_path == "/etc/passwd"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(str(tmp_path / "nope.yaml"))

    def test_default_location(self, tmp_path):
        config_dir = tmp_path / "home" / ".config" / "podcomplete"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("engine:\n  command: docker\n")
        assert load_settings().engine_command == "docker"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("engine: [unclosed\n")
        with pytest.raises(ConfigError, match="Error parsing YAML"):
            load_settings(str(path))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(str(path)).engine_command == "podman"

    def test_engine_override(self, settings_file, monkeypatch):
        monkeypatch.setenv("PODCOMPLETE_ENGINE", "docker")
        assert load_settings(settings_file).engine_command == "docker"


class TestSettingsFromDict:
    """Tests for Settings.from_dict validation."""

    @pytest.mark.parametrize("data", [
        ["not", "a", "mapping"],
        {"engine": "podman"},
        {"engine": {"command": ""}},
        {"engine": {"global_args": "--remote"}},
        {"engine": {"service_destinations": ["prod"]}},
        {"engine": {"service_destinations": {"prod": {"identity": "/key"}}}},
        {"registries": "quay.io"},
        {"accounts": {"passwd": 5}},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ConfigError):
            Settings.from_dict(data)

    def test_engine_argv(self):
        settings = Settings(engine_command="podman", engine_global_args=["--remote"])
        assert settings.engine_argv("ps", "--format", "json") == [
            "podman", "--remote", "ps", "--format", "json"
        ]
