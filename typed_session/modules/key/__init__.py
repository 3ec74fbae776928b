"""
Key Module - Black Box Interface

Purpose: Bind session identifiers to value types
Interface: SessionKey(identifier, value_type), as_str(), SessionKeyRegistry
Hidden: Serializability check of the value type

Keys are pure descriptors; they hold no reference to any session store.
"""

from .key import SessionKey, SessionKeyRegistry

__all__ = ["SessionKey", "SessionKeyRegistry"]
