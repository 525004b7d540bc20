"""
Codec Module - Black Box Interface

Purpose: Convert JSON object values to and from session entry bytes
Interface: encode(), decode()
Hidden: Text encoding, JSON serialization settings

Any application that reads the session entries only needs to agree on
"UTF-8 text of one JSON object per entry".
"""

from .codec import decode, encode

__all__ = ["encode", "decode"]
