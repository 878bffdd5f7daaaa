"""Pulls pieces together into a ready-to-use shard ID generator.

This module provides:
- create_generator: a function to get an IdGenerator considering a dev/prod environment
"""

import logging

from .config import parse_int, settings
from .ids import Config, IdGenerator
from .utils.logging import setup_logging


def create_generator(config_name="development", clock=None):
    """Initializes an IdGenerator from environment settings.

    Args:
        config_name (str): A key of ``shardflake.config.settings``
        clock (Callable[[], int] | None): Overrides the millisecond wall clock
    Returns:
        IdGenerator: A generator for the configured shard
    Raises:
        InvalidConfigError: If the environment describes an invalid layout
    """
    env = settings[config_name]

    logger = logging.getLogger(__name__)
    setup_logging(logger, env.DEBUG, env.LOG_PATH)

    config = Config.from_settings(env)
    kwargs = {"clock": clock} if clock is not None else {}
    generator = IdGenerator(
        config,
        max_wait_ms=parse_int("MAX_WAIT_MS", env.MAX_WAIT_MS),
        log_generation=env.LOG_GENERATION,
        **kwargs,
    )
    logger.info(
        "Generator ready for shard %d (epoch %d, %d sequence bits, %d shard bits)",
        config.shard_id,
        config.epoch_ms,
        config.sequence_bits,
        config.shard_bits,
    )
    return generator
