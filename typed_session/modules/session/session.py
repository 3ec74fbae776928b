import logging
from enum import Enum
from typing import Any, Dict, Iterator, Optional

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError
from redis.exceptions import RedisError

from typed_session.exceptions import (
    SessionGetError,
    SessionInsertError,
    SessionRemoveError,
)

from .codec import dumps, loads

logger = logging.getLogger(__name__)

_SERIALIZATION_ERRORS = (PydanticSerializationError, ValueError, TypeError)


class SessionStatus(str, Enum):
    """Whether session state needs writing back."""

    UNCHANGED = "unchanged"
    CHANGED = "changed"


def _encode(key: str, value: Any, value_type: Any) -> str:
    try:
        raw = dumps(value, value_type)
    except _SERIALIZATION_ERRORS as e:
        logger.debug(f"Failed to serialize session value '{key}': {e}")
        raise SessionInsertError(key, f"Failed to serialize session value '{key}': {e}") from e

    # NaN and infinities serialize as null, which no float key can read back
    try:
        loads(raw, value_type)
    except ValidationError as e:
        logger.debug(f"Serialized session value '{key}' does not read back: {e}")
        raise SessionInsertError(
            key, f"Session value '{key}' cannot be represented as JSON: {e}"
        ) from e
    return raw


def _decode_for_get(key: str, raw: Any, value_type: Any) -> Any:
    try:
        return loads(raw, value_type)
    except ValidationError as e:
        logger.debug(f"Failed to deserialize session value '{key}': {e}")
        raise SessionGetError(key, f"Failed to deserialize session value '{key}': {e}") from e


def _decode_for_remove(key: str, raw: Any, value_type: Any) -> Any:
    try:
        return loads(raw, value_type)
    except ValidationError as e:
        logger.debug(f"Removed session value '{key}' could not be deserialized: {e}")
        raise SessionRemoveError(
            key,
            f"Removed session value '{key}' could not be deserialized: {e}",
            raw_value=raw,
        ) from e


class Session:
    """
    Request-scoped untyped session state.

    Maps identifiers to JSON text, the shape a cookie-backed session keeps
    between requests. Values are serialized on insert and deserialized on
    read, so a read with the wrong type fails instead of returning garbage.
    """

    def __init__(self, state: Optional[Dict[str, str]] = None):
        """
        Initialize session state.

        Args:
            state: Previously persisted identifier -> JSON text entries
        """
        self._state: Dict[str, str] = dict(state or {})
        self.status = SessionStatus.UNCHANGED

    def get(self, key: str, value_type: Any = Any) -> Optional[Any]:
        """
        Get a value from the session.

        Returns:
            The value decoded as ``value_type``, or None if absent

        Raises:
            SessionGetError: If the stored text does not decode as ``value_type``
        """
        raw = self._state.get(key)
        if raw is None:
            return None
        return _decode_for_get(key, raw, value_type)

    def insert(self, key: str, value: Any, value_type: Any = Any) -> None:
        """
        Insert a value, replacing whatever is stored under ``key``.

        Raises:
            SessionInsertError: If the value cannot be serialized
        """
        self._state[key] = _encode(key, value, value_type)
        self.status = SessionStatus.CHANGED

    def remove(self, key: str) -> Optional[str]:
        """Remove an entry and return its raw JSON text."""
        raw = self._state.pop(key, None)
        if raw is not None:
            self.status = SessionStatus.CHANGED
        return raw

    def remove_as(self, key: str, value_type: Any = Any) -> Optional[Any]:
        """
        Remove an entry and decode its previous value.

        The entry is removed even when decoding fails.

        Raises:
            SessionRemoveError: If the removed text does not decode as ``value_type``
        """
        raw = self.remove(key)
        if raw is None:
            return None
        return _decode_for_remove(key, raw, value_type)

    def clear(self) -> None:
        """Remove every entry."""
        if self._state:
            self._state.clear()
            self.status = SessionStatus.CHANGED

    def entries(self) -> Dict[str, str]:
        """Get a copy of the raw identifier -> JSON text entries."""
        return self._state.copy()

    def __contains__(self, key: object) -> bool:
        return key in self._state

    def __len__(self) -> int:
        return len(self._state)

    def __iter__(self) -> Iterator[str]:
        return iter(self._state.copy())


class RedisSession:
    def __init__(self, redis_client, session_id: str, ttl: int = 3600):
        """
        Initialize a Redis-backed session.

        Args:
            redis_client: Async Redis client
            session_id: Session identifier (usually from the session cookie)
            ttl: Session time-to-live in seconds, refreshed on every insert
        """
        self.redis = redis_client
        self.session_id = session_id
        self.ttl = ttl
        self.redis_key = f"session:{session_id}"

    async def get(self, key: str, value_type: Any = Any) -> Optional[Any]:
        """
        Get a value from the session hash.

        Raises:
            SessionGetError: If Redis fails or the value does not decode
        """
        try:
            raw = await self.redis.hget(self.redis_key, key)
        except RedisError as e:
            logger.warning(f"Failed to read session {self.session_id}: {e}")
            raise SessionGetError(key, f"Failed to read session value '{key}': {e}") from e

        if raw is None:
            return None
        return _decode_for_get(key, raw, value_type)

    async def insert(self, key: str, value: Any, value_type: Any = Any) -> None:
        """
        Insert a value and extend the session TTL.

        Raises:
            SessionInsertError: If the value cannot be serialized or Redis fails
        """
        raw = _encode(key, value, value_type)
        try:
            await self.redis.hset(self.redis_key, key, raw)
            await self.redis.expire(self.redis_key, self.ttl)
        except RedisError as e:
            logger.warning(f"Failed to write session {self.session_id}: {e}")
            raise SessionInsertError(key, f"Failed to write session value '{key}': {e}") from e

    async def remove(self, key: str) -> Optional[str]:
        """
        Remove an entry and return its raw JSON text.

        Raises:
            SessionRemoveError: If Redis fails
        """
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                raw, _ = await pipe.hget(self.redis_key, key).hdel(self.redis_key, key).execute()
        except RedisError as e:
            logger.warning(f"Failed to remove from session {self.session_id}: {e}")
            raise SessionRemoveError(key, f"Failed to remove session value '{key}': {e}") from e
        return raw

    async def remove_as(self, key: str, value_type: Any = Any) -> Optional[Any]:
        """
        Remove an entry and decode its previous value.

        The entry is removed even when decoding fails.

        Raises:
            SessionRemoveError: If Redis fails or the removed value does not decode
        """
        raw = await self.remove(key)
        if raw is None:
            return None
        return _decode_for_remove(key, raw, value_type)

    async def entries(self) -> Dict[str, str]:
        """Get all raw identifier -> JSON text entries."""
        return await self.redis.hgetall(self.redis_key)

    async def clear(self) -> None:
        """Delete the whole session hash."""
        await self.redis.delete(self.redis_key)
