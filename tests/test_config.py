import pytest

from shardflake.config import DEFAULT_EPOCH_MS, DevelopmentSettings
from shardflake.ids import Config
from shardflake.utils.errors import InvalidConfigError


def test_defaults():
    config = Config(shard_id=1)
    assert config.epoch_ms == DEFAULT_EPOCH_MS
    assert config.sequence_bits == 10
    assert config.shard_bits == 5


def test_derived_masks():
    config = Config(shard_id=3, epoch_ms=0, sequence_bits=10, shard_bits=5)
    assert config.shard_shift == 10
    assert config.timestamp_shift == 15
    assert config.max_sequence == 1023
    assert config.shard_mask == 31
    assert config.max_timestamp_delta == (1 << 48) - 1


def test_bit_budget_rejected():
    with pytest.raises(InvalidConfigError):
        Config(shard_id=0, sequence_bits=12, shard_bits=12)


def test_bit_budget_at_limit():
    config = Config(shard_id=0, sequence_bits=12, shard_bits=11)
    assert config.max_timestamp_delta == (1 << 40) - 1


@pytest.mark.parametrize("sequence_bits, shard_bits", [(0, 5), (10, 0), (-1, 5), (10, -3)])
def test_non_positive_widths_rejected(sequence_bits, shard_bits):
    with pytest.raises(InvalidConfigError):
        Config(shard_id=0, sequence_bits=sequence_bits, shard_bits=shard_bits)


@pytest.mark.parametrize("shard_id", [-1, 32, 1000])
def test_shard_id_out_of_range(shard_id):
    with pytest.raises(InvalidConfigError):
        Config(shard_id=shard_id, shard_bits=5)


def test_largest_shard_id_allowed():
    assert Config(shard_id=31, shard_bits=5).shard_id == 31


def test_negative_epoch_rejected():
    with pytest.raises(InvalidConfigError):
        Config(shard_id=0, epoch_ms=-1)


@pytest.mark.parametrize("field", ["shard_id", "epoch_ms", "sequence_bits", "shard_bits"])
def test_non_integers_rejected(field):
    kwargs = {"shard_id": 1, "epoch_ms": 0, "sequence_bits": 10, "shard_bits": 5}
    kwargs[field] = "7"
    with pytest.raises(InvalidConfigError):
        Config(**kwargs)


def test_bools_rejected():
    with pytest.raises(InvalidConfigError):
        Config(shard_id=True)


def test_invalid_config_is_a_value_error():
    with pytest.raises(ValueError):
        Config(shard_id=0, sequence_bits=20, shard_bits=20)


def test_config_is_immutable(config):
    with pytest.raises(AttributeError):
        config.shard_id = 4


def test_from_settings():
    class Settings(DevelopmentSettings):
        SHARD_ID = 7
        EPOCH_MS = 1000
        SEQUENCE_BITS = 8
        SHARD_BITS = 4

    config = Config.from_settings(Settings)
    assert config == Config(shard_id=7, epoch_ms=1000, sequence_bits=8, shard_bits=4)


def test_from_settings_validates():
    class Settings(DevelopmentSettings):
        SHARD_ID = 64
        SHARD_BITS = 5

    with pytest.raises(InvalidConfigError):
        Config.from_settings(Settings)


def test_from_settings_parses_strings():
    class Settings(DevelopmentSettings):
        SHARD_ID = "7"
        EPOCH_MS = "1000"
        SEQUENCE_BITS = " 8 "
        SHARD_BITS = "4"

    assert Config.from_settings(Settings) == Config(shard_id=7, epoch_ms=1000, sequence_bits=8, shard_bits=4)


def test_from_settings_rejects_non_integer_strings():
    class Settings(DevelopmentSettings):
        SHARD_ID = "one"

    with pytest.raises(InvalidConfigError, match="SHARD_ID"):
        Config.from_settings(Settings)
