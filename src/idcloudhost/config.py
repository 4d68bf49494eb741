"""Configuration and logging setup for the IDCloudHost client."""

import json
import logging
import os
import pathlib

import pydantic
import structlog

from . import restapi

CONFIG_ENV_VAR = "IDCLOUDHOST_CONFIG_PATH"
logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for the IDCloudHost API client."""

    api_key: str = pydantic.Field("", description="API key sent in the apikey header")
    base_url: str = pydantic.Field(
        restapi.DEFAULT_BASE_URL,
        description="Base URL for the IDCloudHost REST API",
        min_length=1,
    )
    timeout: float = pydantic.Field(
        restapi.DEFAULT_TIMEOUT,
        description="Default transport timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a configuration with the API key taken from the environment."""
        return cls(api_key=os.environ.get(restapi.API_KEY_ENV_VAR, ""))


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output."""
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str) -> ClientConfig:
    """Load configuration from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the content is not a valid config.
    """
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with path.open("r") as f:
        data = json.load(f)

    return ClientConfig.model_validate(data)


def create_client(config: ClientConfig) -> restapi.Client:
    """Configure logging at ``config.log_level`` and construct the API client."""
    configure_logging(config.log_level)
    client = restapi.Client(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
    )
    logger.info("Created API client", base_url=config.base_url)
    return client


def create_client_from_file(config_path: str | None = None) -> restapi.Client:
    """Create the API client from a config file path or environment default.

    The path falls back to ``IDCLOUDHOST_CONFIG_PATH``. Without either, the
    configuration comes from the environment alone (see
    ``ClientConfig.from_env``).
    """
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    config = load_config(resolved_path) if resolved_path else ClientConfig.from_env()
    return create_client(config)
