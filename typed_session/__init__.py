"""
typed-session - Typed access to web session stores

Binds string session keys to a fixed value type so that reads and writes
are checked instead of relying on ad-hoc casts.

Architecture:
- Each module is self-contained with clear interfaces
- The typed layer only delegates; it owns no state
- Any store exposing get/insert/remove_as can be wrapped

Modules:
- key: Typed session keys and the optional key registry
- session: Untyped session stores (in-memory and Redis)
- ext: Typed access layer (mixins and adapters)
- config: Environment configuration
- storage: Redis connection management
- api: Request/response models for the demo API
"""

from typed_session.exceptions import (
    DuplicateSessionKeyError,
    SessionError,
    SessionGetError,
    SessionInsertError,
    SessionRemoveError,
)
from typed_session.modules.ext import (
    AsyncSessionExt,
    AsyncTypedSession,
    SessionExt,
    TypedSession,
)
from typed_session.modules.key import SessionKey, SessionKeyRegistry
from typed_session.modules.session import RedisSession, Session, SessionStatus

__version__ = "1.0.0"

__all__ = [
    "SessionKey",
    "SessionKeyRegistry",
    "SessionExt",
    "AsyncSessionExt",
    "TypedSession",
    "AsyncTypedSession",
    "Session",
    "RedisSession",
    "SessionStatus",
    "SessionError",
    "SessionGetError",
    "SessionInsertError",
    "SessionRemoveError",
    "DuplicateSessionKeyError",
]
