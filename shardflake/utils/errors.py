"""Errors tailored for this project.

This module provides:
- InvalidConfigError: An error if a bit layout or shard id is invalid
- ClockBeforeEpochError: An error if the wall clock reads earlier than the epoch
- ClockMovedBackwardsError: An error if the wall clock went back in time
- IdOverflowError: An error if an ID no longer fits into 63 bits
- SequenceExhaustedError: An error if a millisecond ran out of sequence numbers for too long
"""


class InvalidConfigError(ValueError):
    """A shard id, epoch or bit width is out of bounds."""

class ClockBeforeEpochError(RuntimeError):
    """The clock reads a time earlier than the configured epoch."""

class ClockMovedBackwardsError(RuntimeError):
    """The clock went back in time since the last ID."""

class IdOverflowError(OverflowError):
    """The timestamp no longer fits. The epoch is used up."""

class SequenceExhaustedError(TimeoutError):
    """The clock did not tick forward in time to free up sequence numbers."""
