"""
Configuration loading and logging setup.

Settings are resolved in three layers, later layers winning:

1. defaults declared on ``Settings``
2. an optional YAML file
3. environment variables
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Environment variable -> Settings field
ENVIRONMENT_VARIABLES = {
    "ENTITY_STORE_BACKEND": "backend",
    "LOG_LEVEL": "log_level",
    "LOG_FORMAT": "log_format",
    "MINIO_ENDPOINT": "minio_endpoint",
    "MINIO_ROOT_USER": "minio_access_key",
    "MINIO_ROOT_PASSWORD": "minio_secret_key",
    "MINIO_SECURE": "minio_secure",
    "MINIO_BUCKET_NAME": "minio_bucket_name",
}


class StorageBackend(str, Enum):
    """Available Repository implementations."""

    MEMORY = "memory"
    MINIO = "minio"


class Settings(BaseModel):
    """Runtime configuration for entity storage."""

    backend: StorageBackend = Field(
        StorageBackend.MEMORY, description="Which repository to construct"
    )
    log_level: str = Field("INFO", description="Root logging level name")
    log_format: str = Field(DEFAULT_LOG_FORMAT)
    minio_endpoint: str = Field("localhost:9000")
    minio_access_key: str = Field("minioadmin")
    minio_secret_key: str = Field("minioadmin")
    minio_secure: bool = Field(False)
    minio_bucket_name: str = Field("entities", min_length=3)


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    with open(config_path, "r") as f:
        config_data = yaml.safe_load(f)

    if config_data is None:
        logger.warning(
            f"Configuration file is empty: {config_path}",
        )
        return {}

    if not isinstance(config_data, dict):
        raise ValueError(
            f"Configuration file must contain a YAML dictionary: "
            f"{config_path}"
        )

    return config_data


def load_settings(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build Settings from defaults, an optional YAML file and the environment.

    Args:
        config_path: Path to a YAML file, supports ~ expansion. A missing
            file is an error when a path is given explicitly.
        environ: Environment mapping; defaults to ``os.environ``

    Raises:
        FileNotFoundError: If config_path does not exist
        ValueError: If the file is not a YAML dictionary
        pydantic.ValidationError: If any value is invalid
    """
    if environ is None:
        environ = os.environ

    values: Dict[str, Any] = {}
    if config_path:
        path = Path(config_path).expanduser()
        values.update(_read_config_file(path))
        logger.debug(
            "Loaded configuration file",
            extra={"config_path": str(path), "keys": sorted(values)},
        )

    for variable, field_name in ENVIRONMENT_VARIABLES.items():
        if variable in environ:
            values[field_name] = environ[variable]

    return Settings(**values)


def setup_logging(settings: Settings) -> None:
    """Configure logging from settings"""
    log_level = settings.log_level.upper()

    numeric_level = getattr(logging, log_level, None)
    valid_level = isinstance(numeric_level, int)
    if not valid_level:
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=settings.log_format,
        force=True,  # Override any existing configuration
    )

    if not valid_level:
        logger.warning(
            f"Invalid log level: {settings.log_level}, defaulting to INFO"
        )

    logger.info(
        "Logging configured",
        extra={"log_level": log_level, "numeric_level": numeric_level},
    )
