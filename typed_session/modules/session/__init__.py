"""
Session Module - Black Box Interface

Purpose: Untyped session state keyed by string identifiers
Interface: get(), insert(), remove(), remove_as()
Hidden: JSON serialization, Redis hash layout, TTL refresh

Any object with the same get/insert/remove_as surface can stand in for
these stores under the typed access layer.
"""

from .session import RedisSession, Session, SessionStatus

__all__ = ["Session", "RedisSession", "SessionStatus"]
