"""
Tests for configuration loading, environment resolution and validation.
"""

import logging

import pytest

import config_loader
import server_runner
from config_loader import (
    default_config,
    get_nested_value,
    load_server_config,
    merge_config,
    set_nested_value,
    validate_config,
)

CONFIG_ENV_VARS = ("SERVER_HOST", "SERVER_PORT", "LOG_LEVEL", "LOG_FILE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path, text, name="server.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


class TestDefaults:
    def test_defaults_are_valid(self):
        cfg = load_server_config()
        assert cfg == default_config()
        assert cfg["server"]["port"] == 8080
        assert cfg["logging"]["level"] == "INFO"

    def test_default_config_is_a_fresh_copy(self):
        first = default_config()
        first["server"]["port"] = 1
        assert default_config()["server"]["port"] == 8080


class TestLoadFile:
    def test_file_overrides_defaults(self, tmp_path):
        path = _write(tmp_path, "server:\n  port: 9000\nlogging:\n  level: DEBUG\n")
        cfg = load_server_config(path)

        assert cfg["server"]["port"] == 9000
        assert cfg["server"]["host"] == "0.0.0.0"
        assert cfg["logging"]["level"] == "DEBUG"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = _write(tmp_path, "")
        assert load_server_config(path) == default_config()

    def test_non_mapping_file(self, tmp_path):
        path = _write(tmp_path, "- just\n- a list\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_server_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_server_config(str(tmp_path / "absent.yaml"))

    def test_env_placeholder(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INSTRUCTION_SERVICE_HOST", "127.0.0.1")
        path = _write(tmp_path, "server:\n  host: ${INSTRUCTION_SERVICE_HOST}\n")
        assert load_server_config(path)["server"]["host"] == "127.0.0.1"

    def test_unset_env_placeholder(self, tmp_path, monkeypatch):
        monkeypatch.delenv("INSTRUCTION_SERVICE_UNSET", raising=False)
        path = _write(tmp_path, "server:\n  host: ${INSTRUCTION_SERVICE_UNSET}\n")
        with pytest.raises(ValueError, match="INSTRUCTION_SERVICE_UNSET"):
            load_server_config(path)

    def test_env_file_is_loaded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INSTRUCTION_SERVICE_NAME", "before-dotenv")
        (tmp_path / "service.env").write_text("INSTRUCTION_SERVICE_NAME=from-dotenv\n")
        path = _write(tmp_path, "env_file: service.env\nname: ${INSTRUCTION_SERVICE_NAME}\n")
        assert load_server_config(path)["name"] == "from-dotenv"

    @pytest.mark.parametrize(
        "text, message",
        [
            ("server:\n  port: 70000\n", "server.port"),
            ("server:\n  port: '8080'\n", "server.port"),
            ("server:\n  port: true\n", "server.port"),
            ("server:\n  max_body_bytes: 0\n", "max_body_bytes"),
            ("logging:\n  level: VERBOSE\n", "logging.level"),
            ("server:\n  host: 42\n", "server.host"),
        ],
    )
    def test_invalid_values(self, tmp_path, text, message):
        path = _write(tmp_path, text)
        with pytest.raises(ValueError, match=message):
            load_server_config(path)


class TestEnvOverrides:
    def test_port_override(self, monkeypatch):
        monkeypatch.setenv("SERVER_PORT", "9100")
        assert load_server_config()["server"]["port"] == 9100

    def test_environment_beats_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        path = _write(tmp_path, "logging:\n  level: DEBUG\n")
        assert load_server_config(path)["logging"]["level"] == "WARNING"

    def test_non_numeric_port(self, monkeypatch):
        monkeypatch.setenv("SERVER_PORT", "eighty")
        with pytest.raises(ValueError, match="SERVER_PORT"):
            load_server_config()

    def test_blank_value_is_ignored(self, monkeypatch):
        monkeypatch.setenv("SERVER_HOST", "")
        assert load_server_config()["server"]["host"] == "0.0.0.0"


class TestHelpers:
    def test_nested_get_and_set(self):
        cfg = {}
        set_nested_value(cfg, "a.b.c", 3)
        assert get_nested_value(cfg, "a.b.c") == 3

    def test_missing_key(self):
        with pytest.raises(ValueError, match="Missing required config key: a.b"):
            get_nested_value({"a": {}}, "a.b")

    def test_merge_is_deep(self):
        base = {"server": {"host": "h", "port": 1}}
        merge_config(base, {"server": {"port": 2}})
        assert base == {"server": {"host": "h", "port": 2}}

    def test_missing_required_field(self):
        cfg = default_config()
        del cfg["name"]
        with pytest.raises(ValueError, match="name"):
            validate_config(cfg)

    def test_summary_logs(self, caplog):
        with caplog.at_level(logging.INFO, logger=config_loader.logger.name):
            config_loader.print_config_summary(default_config())
        assert "0.0.0.0:8080" in caplog.text


class TestRunnerArgs:
    def test_command_line_overrides(self, tmp_path):
        path = _write(tmp_path, "server:\n  port: 9000\n")
        args = server_runner.parse_args(
            ["--config", path, "--host", "127.0.0.1", "--port", "9001", "--log-file", "svc.log"]
        )
        cfg = server_runner.build_config(args)

        assert cfg["server"]["host"] == "127.0.0.1"
        assert cfg["server"]["port"] == 9001
        assert cfg["logging"]["file"] == "svc.log"

    def test_no_arguments(self):
        cfg = server_runner.build_config(server_runner.parse_args([]))
        assert cfg == default_config()

    def test_out_of_range_port_argument(self):
        args = server_runner.parse_args(["--port", "99999"])
        with pytest.raises(ValueError, match="server.port"):
            server_runner.build_config(args)
