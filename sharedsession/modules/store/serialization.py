"""
Binary layout of a whole session stored as one cache value.

    version (1 byte) | entry count (3 bytes, big endian)
    then per entry:
    key length (2 bytes) | UTF-8 key | value length (4 bytes) | value
"""

import logging
import struct
from typing import Dict, Optional

logger = logging.getLogger(__name__)

SERIALIZATION_VERSION = 2
KEY_LENGTH_LIMIT = 0xFFFF
ENTRY_COUNT_LIMIT = 0xFFFFFF


def serialize(entries: Dict[str, bytes]) -> bytes:
    """Serialize session entries, preserving insertion order."""
    if len(entries) > ENTRY_COUNT_LIMIT:
        raise ValueError(f"Too many session entries: {len(entries)}")

    parts = [bytes([SERIALIZATION_VERSION]), len(entries).to_bytes(3, "big")]
    for name, value in entries.items():
        encoded_name = name.encode("utf-8")
        if len(encoded_name) > KEY_LENGTH_LIMIT:
            raise ValueError(f"Session entry name exceeds {KEY_LENGTH_LIMIT} bytes")
        parts.append(struct.pack(">H", len(encoded_name)))
        parts.append(encoded_name)
        parts.append(struct.pack(">I", len(value)))
        parts.append(bytes(value))

    return b"".join(parts)


def deserialize(data: Optional[bytes]) -> Dict[str, bytes]:
    """
    Deserialize a cache value into session entries.

    Unknown versions and truncated data yield an empty session.
    """
    if not data:
        return {}

    if data[0] != SERIALIZATION_VERSION:
        logger.warning(f"Ignoring session data with unknown version {data[0]}")
        return {}

    if len(data) < 4:
        logger.warning("Ignoring truncated session data")
        return {}

    count = int.from_bytes(data[1:4], "big")
    entries: Dict[str, bytes] = {}
    offset = 4

    try:
        for _ in range(count):
            (name_length,) = struct.unpack_from(">H", data, offset)
            offset += 2
            name = data[offset:offset + name_length].decode("utf-8")
            offset += name_length
            (value_length,) = struct.unpack_from(">I", data, offset)
            offset += 4
            value = data[offset:offset + value_length]
            if len(value) != value_length:
                raise ValueError("value truncated")
            offset += value_length
            entries[name] = value
    except (struct.error, UnicodeDecodeError, ValueError) as e:
        logger.warning(f"Ignoring malformed session data: {e}")
        return {}

    return entries
