"""
Protection Module - Black Box Interface

Purpose: Protect session keys carried in cookies
Interface: ProtectionProvider.create_protector(), protect_session_key(),
           unprotect_session_key(), load_or_create_master_key()
Hidden: Cipher, key derivation, key file format

All applications sharing sessions must use the same master key and the
same purpose string, or cookies issued by one are rejected by another.
"""

from .cookies import SESSION_PROTECTOR_PURPOSE, protect_session_key, unprotect_session_key
from .protector import (
    AesGcmProtectionProvider,
    KeyProtector,
    ProtectionProvider,
    load_or_create_master_key,
)

__all__ = [
    "SESSION_PROTECTOR_PURPOSE",
    "AesGcmProtectionProvider",
    "KeyProtector",
    "ProtectionProvider",
    "load_or_create_master_key",
    "protect_session_key",
    "unprotect_session_key",
]
