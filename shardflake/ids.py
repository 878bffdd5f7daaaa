"""A module for handling unique ID generation.

This module provides:
- Config: an immutable, validated bit layout for one shard
- IdGenerator: a class that spits out unique, time-sortable IDs for a shard
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from threading import Lock
from time import monotonic, sleep, time_ns

from .config import DEFAULT_EPOCH_MS, parse_int
from .utils.errors import (
    ClockBeforeEpochError,
    ClockMovedBackwardsError,
    IdOverflowError,
    InvalidConfigError,
    SequenceExhaustedError,
)
from .utils.ids import DecodedId, decode, decode_sequence, decode_shard, decode_timestamp

ID_BITS = 63
MIN_TIMESTAMP_BITS = 40
MAX_LAYOUT_BITS = ID_BITS - MIN_TIMESTAMP_BITS  # 23, shared by sequence and shard

WAIT_INTERVAL = 0.0001  # seconds between clock checks while a millisecond is used up


def current_millis() -> int:
    """Reads the wall clock in whole milliseconds since the Unix epoch."""
    return time_ns() // 1_000_000


def _check_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Config:
    """Bit layout and identity of a single shard.

    Attributes:
        shard_id (int): The shard this generator speaks for, ``0 <= shard_id < 2 ** shard_bits``
        epoch_ms (int): Reference point in milliseconds since the Unix epoch
        sequence_bits (int): Width of the per-millisecond counter
        shard_bits (int): Width of the shard field
    Raises:
        InvalidConfigError: If any of the fields is out of bounds
    """

    shard_id: int
    epoch_ms: int = DEFAULT_EPOCH_MS
    sequence_bits: int = 10
    shard_bits: int = 5

    shard_shift: int = field(init=False, repr=False)
    timestamp_shift: int = field(init=False, repr=False)
    max_sequence: int = field(init=False, repr=False)
    shard_mask: int = field(init=False, repr=False)
    max_timestamp_delta: int = field(init=False, repr=False)

    def __post_init__(self):
        for name in ("shard_id", "epoch_ms", "sequence_bits", "shard_bits"):
            _check_int(name, getattr(self, name))
        if self.sequence_bits <= 0:
            raise InvalidConfigError("sequence_bits must be positive")
        if self.shard_bits <= 0:
            raise InvalidConfigError("shard_bits must be positive")
        if self.sequence_bits + self.shard_bits > MAX_LAYOUT_BITS:
            raise InvalidConfigError(
                f"sequence_bits + shard_bits must not exceed {MAX_LAYOUT_BITS}, "
                f"got {self.sequence_bits + self.shard_bits}"
            )
        if not 0 <= self.shard_id < 1 << self.shard_bits:
            raise InvalidConfigError(
                f"shard_id must be between 0 and {(1 << self.shard_bits) - 1}, got {self.shard_id}"
            )
        if self.epoch_ms < 0:
            raise InvalidConfigError("epoch_ms cannot be negative")

        timestamp_shift = self.sequence_bits + self.shard_bits
        object.__setattr__(self, "shard_shift", self.sequence_bits)
        object.__setattr__(self, "timestamp_shift", timestamp_shift)
        object.__setattr__(self, "max_sequence", (1 << self.sequence_bits) - 1)
        object.__setattr__(self, "shard_mask", (1 << self.shard_bits) - 1)
        object.__setattr__(self, "max_timestamp_delta", (1 << (ID_BITS - timestamp_shift)) - 1)

    @classmethod
    def from_settings(cls, settings) -> "Config":
        """Builds a layout out of a settings class.

        Args:
            settings (type[Settings]): One of the classes in ``shardflake.config``
        Returns:
            Config: The validated layout
        Raises:
            InvalidConfigError: If a setting is not an integer or the layout is invalid
        """
        return cls(
            shard_id=parse_int("SHARD_ID", settings.SHARD_ID),
            epoch_ms=parse_int("EPOCH_MS", settings.EPOCH_MS),
            sequence_bits=parse_int("SEQUENCE_BITS", settings.SEQUENCE_BITS),
            shard_bits=parse_int("SHARD_BITS", settings.SHARD_BITS),
        )


class IdGenerator:
    """A class that spits out unique IDs for one shard."""

    def __init__(
            self,
            config: Config,
            clock: Callable[[], int] = current_millis,
            max_wait_ms: int = 1000,
            log_generation: bool = False
    ):
        """Sets reference variables for enforcing uniqueness.

        Args:
            config (Config): A validated layout
            clock (Callable[[], int]): Returns the current time in milliseconds
            max_wait_ms (int): How long to wait for the next millisecond once
                the sequence space of the current one is used up
            log_generation (bool): True to log every issued ID at DEBUG
        """
        if max_wait_ms < 0:
            raise InvalidConfigError("max_wait_ms cannot be negative")
        self.config = config
        self.clock = clock
        self.max_wait_ms = max_wait_ms
        self.log_generation = log_generation
        self.last_timestamp = 0
        self.sequence = 0
        self.overflowed = False
        self.lock = Lock()
        self.logger = logging.getLogger(__name__)

    def next_id(self) -> int:
        """Generates a 63-bit Snowflake ID.

        The layout from most to least significant bits is the timestamp delta
        since the epoch, the shard ID and the sequence number.

        Returns:
            int: The ID
        Raises:
            ClockBeforeEpochError: If the clock reads earlier than the epoch
            ClockMovedBackwardsError: If the clock reads earlier than the last ID
            IdOverflowError: If the timestamp delta no longer fits
            SequenceExhaustedError: If the clock did not tick within ``max_wait_ms``
        """
        deadline = None
        while True:
            with self.lock:
                result, timestamp = self._advance()
            if result is not None:
                if self.log_generation:
                    self.logger.debug("Issued ID %d", result)
                return result
            if deadline is None:
                self.logger.debug(
                    "Sequence space of shard %d used up at %d, waiting for the next millisecond",
                    self.config.shard_id,
                    timestamp,
                )
                deadline = monotonic() + self.max_wait_ms / 1000
            elif monotonic() >= deadline:
                raise SequenceExhaustedError(
                    f"Clock did not advance past {timestamp} within {self.max_wait_ms} ms"
                )
            sleep(WAIT_INTERVAL)

    def _advance(self) -> tuple[int | None, int]:
        """Moves the state forward by one ID. Must be called under ``self.lock``.

        Returns:
            tuple[int | None, int]: The packed ID, or None if the current
                millisecond has no sequence numbers left, and that millisecond
        """
        if self.overflowed:
            raise IdOverflowError("The epoch of this generator is used up")
        config = self.config
        now = self.clock()
        if now < config.epoch_ms:
            raise ClockBeforeEpochError(f"Clock reads {now}, earlier than epoch {config.epoch_ms}")
        if now < self.last_timestamp:
            self.logger.warning(
                "Clock moved backwards by %d ms on shard %d",
                self.last_timestamp - now,
                config.shard_id,
            )
            raise ClockMovedBackwardsError(
                f"Clock reads {now}, earlier than the last ID at {self.last_timestamp}"
            )
        if now == self.last_timestamp:
            if self.sequence >= config.max_sequence:
                return None, now
            self.sequence += 1
        else:
            self.sequence = 0
            self.last_timestamp = now

        delta = now - config.epoch_ms
        if delta > config.max_timestamp_delta:
            self.overflowed = True
            self.logger.error("Timestamp delta %d overflows shard %d", delta, config.shard_id)
            raise IdOverflowError(f"Timestamp delta {delta} does not fit into the ID")
        snowflake = (delta << config.timestamp_shift) | (config.shard_id << config.shard_shift) | self.sequence
        return snowflake, now

    def decode_timestamp(self, snowflake: int) -> int:
        """Returns the absolute timestamp in milliseconds an ID was issued at."""
        return decode_timestamp(snowflake, self.config)

    def decode_shard(self, snowflake: int) -> int:
        return decode_shard(snowflake, self.config)

    def decode_sequence(self, snowflake: int) -> int:
        return decode_sequence(snowflake, self.config)

    def decode(self, snowflake: int) -> DecodedId:
        return decode(snowflake, self.config)
