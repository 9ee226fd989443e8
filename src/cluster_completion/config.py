"""Completion settings.

Settings are merged from (lowest to highest precedence) model defaults, an
optional JSON file, ``CLUSTER_COMPLETION_*`` environment variables (a
``.env`` file is honoured) and explicit overrides from the command line.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from cluster_completion.logger import get_logger
from cluster_completion.utils import get_config_dir

logger = get_logger("config")

ENV_PREFIX = "CLUSTER_COMPLETION_"
CONFIG_PATH_ENV = "CLUSTER_COMPLETION_CONFIG"
CONFIG_FILE_NAME = "config.json"

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class CompletionSettings(BaseModel):
    """Session scope and cluster access settings for one completion call."""

    namespace: str = Field("default", description="Namespace (project) used to scope listings")
    application: str = Field("app", description="Application whose components are listed")
    component: str = Field("", description="Current component (link/unlink source)")
    kube_context: Optional[str] = Field(None, description="kubeconfig context to use")
    kubeconfig: Optional[str] = Field(None, description="Path to a kubeconfig file")
    request_timeout: float = Field(2.0, gt=0, description="Per-request timeout in seconds")
    log_level: str = Field("WARNING", description="loguru level for the completion log")
    log_file: Optional[str] = Field(None, description="Log file path (defaults to the state dir)")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level

    class Config:
        """Pydantic configuration."""

        frozen = True


def _read_config_file(config_path: Optional[str | Path]) -> dict[str, Any]:
    if config_path is None:
        env_path = os.getenv(CONFIG_PATH_ENV)
        if env_path:
            config_path = Path(env_path)
        else:
            config_path = get_config_dir() / CONFIG_FILE_NAME
            if not config_path.exists():
                # The default file is optional
                return {}
    config_path = Path(config_path)

    if not config_path.exists():
        error_msg = f"Completion configuration file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    logger.debug(f"Loading completion configuration from: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in configuration file {config_path}: {e}")
        raise

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {config_path} must contain a JSON object")
    return data


def _read_environment() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field_name in CompletionSettings.model_fields:
        raw = os.getenv(ENV_PREFIX + field_name.upper())
        if raw is not None and raw != "":
            values[field_name] = raw
    return values


def load_settings(
    config_path: Optional[str | Path] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> CompletionSettings:
    """
    Build the effective settings.

    Args:
        config_path: Explicit JSON file. If None, ``$CLUSTER_COMPLETION_CONFIG``
            or ``~/.config/cluster-completion/config.json`` is used when present.
        overrides: Values given on the command line; ``None`` entries are ignored.

    Returns:
        CompletionSettings: Validated, frozen settings

    Raises:
        FileNotFoundError: If an explicitly requested file doesn't exist
        json.JSONDecodeError: If the JSON file is invalid
        ValidationError: If a value is invalid
    """
    load_dotenv()

    data = _read_config_file(config_path)
    data.update(_read_environment())
    if overrides:
        data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        settings = CompletionSettings(**data)
    except ValidationError as e:
        logger.error(f"Invalid completion configuration: {e}")
        raise

    logger.debug(
        f"Settings: namespace={settings.namespace!r} application={settings.application!r} "
        f"component={settings.component!r} timeout={settings.request_timeout}"
    )
    return settings
