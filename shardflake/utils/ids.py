"""Pulls IDs apart again.

This module provides:
- DecodedId: a named tuple of the three fields packed into an ID
- decode_timestamp: a function to get the millisecond an ID was issued at
- decode_datetime: the same as decode_timestamp, but as an aware UTC datetime
- decode_shard: a function to get the shard that issued an ID
- decode_sequence: a function to get the per-millisecond sequence number of an ID
- decode: a function to get all of the above at once

The results only make sense for IDs issued under the same layout.
"""

from datetime import UTC, datetime, timedelta
from typing import NamedTuple

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class DecodedId(NamedTuple):
    """Fields of an ID."""

    timestamp_ms: int
    shard_id: int
    sequence: int


def decode_timestamp(snowflake: int, config) -> int:
    """Gets the absolute timestamp of an ID.

    Args:
        snowflake (int): The ID
        config (Config): The layout the ID was issued under
    Returns:
        int: Milliseconds since the Unix epoch
    """
    return config.epoch_ms + (snowflake >> config.timestamp_shift)


def decode_datetime(snowflake: int, config) -> datetime:
    """Gets the timestamp of an ID as a timezone-aware datetime in UTC."""
    return UNIX_EPOCH + timedelta(milliseconds=decode_timestamp(snowflake, config))


def decode_shard(snowflake: int, config) -> int:
    return (snowflake >> config.shard_shift) & config.shard_mask


def decode_sequence(snowflake: int, config) -> int:
    return snowflake & config.max_sequence


def decode(snowflake: int, config) -> DecodedId:
    """Splits an ID into its timestamp, shard and sequence."""
    return DecodedId(
        decode_timestamp(snowflake, config),
        decode_shard(snowflake, config),
        decode_sequence(snowflake, config),
    )
