"""Manages configuration variables.

This module provides:
- Settings: a base class for pulling environment variables
- DevelopmentSettings: a dev settings class with verbose logging
- ProductionSettings: a settings class for production
- TestingSettings: a settings class that keeps logs off the disk
- settings: a dict for getting settings depending on environment
- parse_int: a function to turn a raw environment value into an integer
"""

import os

from dotenv import load_dotenv

from .utils.errors import InvalidConfigError

load_dotenv()

DEFAULT_EPOCH_MS = 1704067200000  # 2024-01-01T00:00:00Z


class Settings:
    """Base class for pulling environment variables."""

    SHARD_ID = os.getenv("SHARD_ID", "1")
    EPOCH_MS = os.getenv("EPOCH_MS", str(DEFAULT_EPOCH_MS))
    SEQUENCE_BITS = os.getenv("SEQUENCE_BITS", "10")
    SHARD_BITS = os.getenv("SHARD_BITS", "5")

    MAX_WAIT_MS = os.getenv("MAX_WAIT_MS", "1000")

    LOG_PATH = os.getenv("LOG_PATH", "logs/shardflake.log")
    LOG_GENERATION = os.getenv("LOG_GENERATION", "False").lower() == "true"


class DevelopmentSettings(Settings):
    """Settings class with DEBUG on."""

    DEBUG = True


class ProductionSettings(Settings):
    """Settings class with DEBUG off."""

    DEBUG = False


class TestingSettings(Settings):
    """Settings class with DEBUG on and no log file."""

    DEBUG = True
    LOG_PATH = None


settings = {
    "development": DevelopmentSettings,
    "production": ProductionSettings,
    "testing": TestingSettings,
}


def parse_int(name, value):
    """Turns a raw environment value into an integer.

    Non-string values are passed through as they are.

    Args:
        name (str): The setting name, for the error message
        value (str | int): The raw value
    Returns:
        int: The parsed value
    Raises:
        InvalidConfigError: If the string is not an integer
    """
    if not isinstance(value, str):
        return value
    try:
        return int(value.strip())
    except ValueError:
        raise InvalidConfigError(f"{name} must be an integer, got {value!r}") from None
