"""Configuration and logging setup for CloudControl clients."""

import logging
import os
import pathlib
import sys
from typing import IO, Literal

import pydantic
import structlog
from structlog.typing import Processor

from .cloudcontrol import DEFAULT_TIMEOUT, CloudControlClient
from .metrics import ClientMetrics

CONFIG_ENV_VAR = "CLOUDCONTROL_CLIENT_CONFIG_PATH"
logger = structlog.get_logger(__name__)

LogFormat = Literal["logfmt", "json", "console"]


class ClientConfig(pydantic.BaseModel):
    """Configuration for a CloudControl client."""

    base_url: str = pydantic.Field(
        min_length=1,
        description="Base URL for the CloudControl API, including the API version",
    )
    user_name: str = pydantic.Field(min_length=1, description="CloudControl user name")
    password: str = pydantic.Field(
        min_length=1,
        description="CloudControl password",
        repr=False,
    )
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")
    log_format: LogFormat = pydantic.Field(
        "logfmt",
        description="Log output format: logfmt, json or console",
    )


def _renderer(log_format: LogFormat) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.LogfmtRenderer(key_order=("timestamp", "level", "msg"))


def configure_logging(
    log_level_name: str,
    log_format: LogFormat = "logfmt",
    stream: IO[str] | None = None,
) -> None:
    """Configure structlog output for applications using the client.

    The client only emits events; applications that already configure
    structlog should not call this.

    Args:
        log_level_name: Minimum level name (e.g. "DEBUG"); unknown names
            fall back to INFO.
        log_format: Output format, one of "logfmt", "json" or "console".
        stream: Text stream to write to (default: sys.stderr).
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    # "msg" key only for logfmt, where it reads better than "event"
    key_processors = (
        [structlog.processors.EventRenamer("msg")] if log_format == "logfmt" else []
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *key_processors,
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


def load_config(config_path: str | pathlib.Path) -> ClientConfig:
    """Load and validate configuration from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the file is not valid JSON or a value
            is missing or invalid.
    """
    path = pathlib.Path(config_path)
    if not path.is_file():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    return ClientConfig.model_validate_json(path.read_text(encoding="utf-8"))


def create_client(
    config: ClientConfig,
    metrics: ClientMetrics | None = None,
) -> CloudControlClient:
    """Construct a CloudControl client from validated config."""
    client = CloudControlClient.create(
        base_url=config.base_url,
        user_name=config.user_name,
        password=config.password,
        timeout=config.timeout,
        metrics=metrics,
    )
    logger.info("Created CloudControl client", base_url=config.base_url)
    return client


def create_client_from_file(
    config_path: str | pathlib.Path | None = None,
    metrics: ClientMetrics | None = None,
) -> CloudControlClient:
    """Create a client using a config path or the environment default.

    Raises:
        ValueError: If no path is given and the environment variable is unset.
        FileNotFoundError: If the configuration file does not exist.
    """
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not resolved_path:
        msg = f"No configuration path given and {CONFIG_ENV_VAR} is not set"
        raise ValueError(msg)

    config = load_config(resolved_path)
    configure_logging(config.log_level, config.log_format)
    return create_client(config, metrics=metrics)
