"""Comparison configuration using Pydantic for validation."""
from enum import Enum
from typing import Union
import logging
import os

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "METRICDATATEST_"


class Option(str, Enum):
    """Comparison switches a caller can turn on."""
    IGNORE_TIMESTAMP = "ignore_timestamp"
    IGNORE_VALUE = "ignore_value"
    IGNORE_EXEMPLARS = "ignore_exemplars"


class Config(BaseModel):
    """
    Fields left out of a comparison.

    Only timestamps, the measured values and exemplars can be ignored.
    Attributes and identity fields (names, units, temporality, monotonicity,
    scale, offsets, bucket bounds) are always compared.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    ignore_timestamp: bool = False
    ignore_value: bool = False
    ignore_exemplars: bool = False


def new_config(*options: Union[Option, str]) -> Config:
    """Build a Config with every given option switched on."""
    return Config(**{Option(option).value: True for option in options})


def load_config(config_path: str) -> Config:
    """Load and validate comparison configuration from a YAML file."""
    import yaml

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f) or {}

    if not isinstance(raw_config, dict):
        raise ValueError(f"Configuration validation failed: expected a mapping in {config_path}")

    # Environment variables take precedence over the file
    for option in Option:
        if (env_value := os.getenv(f"{ENV_PREFIX}{option.name}")) is not None:
            raw_config[option.value] = env_value

    try:
        config = Config(**raw_config)
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}")

    logger.info(f"Comparison configuration loaded from {config_path}: {config}")
    return config
