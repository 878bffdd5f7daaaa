"""A dev entrypoint for poking at shardflake."""

import os

from shardflake import create_generator
from shardflake.utils.ids import decode_datetime

generator = create_generator(os.getenv("ENV", "development"))

if __name__ == "__main__":
    snowflake = generator.next_id()
    timestamp_ms, shard_id, sequence = generator.decode(snowflake)
    print(f"{snowflake} -> {decode_datetime(snowflake, generator.config).isoformat()} "
          f"({timestamp_ms} ms), shard {shard_id}, sequence {sequence}")
