"""Tests for configuration loading and client creation from config."""

import io
import json
from unittest.mock import MagicMock

import pydantic
import pytest
import structlog
from fakes import BASE_URL

from cloudcontrol_client import config
from cloudcontrol_client.cloudcontrol import DEFAULT_TIMEOUT, CloudControlClient


@pytest.fixture
def config_file(tmp_path):
    """A valid configuration file."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "base_url": BASE_URL,
                "user_name": "jsmith",
                "password": "secret",
                "log_level": "DEBUG",
            },
        ),
    )
    return path


def test_load_config_reads_file(config_file):
    """Values are read from the JSON file, with defaults for the rest."""
    cfg = config.load_config(config_file)

    assert cfg.base_url == BASE_URL
    assert cfg.user_name == "jsmith"
    assert cfg.timeout == DEFAULT_TIMEOUT
    assert cfg.log_level == "DEBUG"


def test_load_config_missing_file(tmp_path):
    """A missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="not found"):
        config.load_config(tmp_path / "missing.json")


def test_config_rejects_empty_password():
    """Credentials are required in configuration."""
    with pytest.raises(pydantic.ValidationError):
        config.ClientConfig(base_url=BASE_URL, user_name="jsmith", password="")


def test_config_rejects_non_positive_timeout():
    """Timeout must be positive."""
    with pytest.raises(pydantic.ValidationError):
        config.ClientConfig(
            base_url=BASE_URL,
            user_name="jsmith",
            password="secret",
            timeout=0,
        )


def test_config_repr_hides_password():
    """The password does not appear in the config repr."""
    cfg = config.ClientConfig(base_url=BASE_URL, user_name="jsmith", password="hunter2")

    assert "hunter2" not in repr(cfg)


def test_create_client(config_file):
    """A client is built from the configuration."""
    cc_client = config.create_client(config.load_config(config_file))

    assert isinstance(cc_client, CloudControlClient)
    assert str(cc_client.base_url) == BASE_URL


def test_create_client_from_file_uses_env_var(config_file, monkeypatch):
    """The config path falls back to the environment variable."""
    configure_logging = MagicMock()
    monkeypatch.setattr(config, "configure_logging", configure_logging)
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(config_file))

    cc_client = config.create_client_from_file()

    assert str(cc_client.base_url) == BASE_URL
    configure_logging.assert_called_once_with("DEBUG", "logfmt")


def test_create_client_from_file_without_path(monkeypatch):
    """Without a path or environment variable, creation fails."""
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)

    with pytest.raises(ValueError, match=config.CONFIG_ENV_VAR):
        config.create_client_from_file()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture
def restore_structlog():
    """Undo global structlog configuration after the test."""
    yield
    structlog.reset_defaults()


def test_configure_logging_json_to_stream(restore_structlog):
    """JSON output goes to the given stream with level and timestamp."""
    stream = io.StringIO()
    config.configure_logging("info", log_format="json", stream=stream)

    structlog.get_logger("test").info("Fetched account", organization="org-1")

    record = json.loads(stream.getvalue())
    assert record["event"] == "Fetched account"
    assert record["organization"] == "org-1"
    assert record["level"] == "info"
    assert "timestamp" in record


def test_configure_logging_logfmt_filters_level(restore_structlog):
    """Events below the configured level are dropped; logfmt uses msg."""
    stream = io.StringIO()
    config.configure_logging("WARNING", stream=stream)

    log = structlog.get_logger("test")
    log.info("hidden")
    log.warning("shown", status_code=503)

    output = stream.getvalue()
    assert "hidden" not in output
    assert "level=warning msg=shown" in output
    assert "status_code=503" in output


def test_load_config_rejects_invalid_json(tmp_path):
    """A file that is not JSON fails validation."""
    path = tmp_path / "config.json"
    path.write_text("base_url = nope")

    with pytest.raises(pydantic.ValidationError):
        config.load_config(path)


def test_config_rejects_unknown_log_format():
    """Only the supported log formats are accepted."""
    with pytest.raises(pydantic.ValidationError):
        config.ClientConfig(
            base_url=BASE_URL,
            user_name="jsmith",
            password="secret",
            log_format="xml",
        )
