"""
Typed access layer.

SessionExt and AsyncSessionExt add typed get/insert/remove to any class
that already exposes untyped ``get``, ``insert`` and ``remove_as``. Every
operation is a single delegation using the key's identifier and value
type; errors raised by the store propagate unchanged.

Mix into a store class:

    class AppSession(Session, SessionExt):
        pass

or wrap an existing store without touching its class:

    typed = TypedSession(session)
    typed.insert_by_key(USER_KEY, "Dupont")
"""

from typing import Any, Optional, TypeVar

from typed_session.modules.key import SessionKey

from .interfaces import AsyncSessionStore, SessionStore

T = TypeVar("T")


class SessionExt:
    """Typed alternatives to a session store's get/insert/remove."""

    def get_by_key(self, key: SessionKey[T]) -> Optional[T]:
        """
        Get a value from the session by ``key``.

        Returns:
            The stored value, or None if absent

        Raises:
            SessionGetError: If the value is not of the key's type
        """
        return self.get(key.as_str(), key.value_type)

    def insert_by_key(self, key: SessionKey[T], value: T) -> None:
        """
        Insert a value into the session by ``key``.

        Raises:
            SessionInsertError: If the value cannot be serialized
        """
        self.insert(key.as_str(), value, key.value_type)

    def remove_by_key(self, key: SessionKey[T]) -> Optional[T]:
        """
        Remove a value from the session by ``key``.

        Raises:
            SessionRemoveError: If the removed value is not of the key's type
        """
        return self.remove_as(key.as_str(), key.value_type)


class AsyncSessionExt:
    """Coroutine versions of SessionExt for asynchronous stores."""

    async def get_by_key(self, key: SessionKey[T]) -> Optional[T]:
        return await self.get(key.as_str(), key.value_type)

    async def insert_by_key(self, key: SessionKey[T], value: T) -> None:
        await self.insert(key.as_str(), value, key.value_type)

    async def remove_by_key(self, key: SessionKey[T]) -> Optional[T]:
        return await self.remove_as(key.as_str(), key.value_type)


class TypedSession(SessionExt):
    """Adapter giving any SessionStore the typed operations."""

    def __init__(self, store: SessionStore):
        self.store = store

    def get(self, key: str, value_type: Any = Any) -> Optional[Any]:
        return self.store.get(key, value_type)

    def insert(self, key: str, value: Any, value_type: Any = Any) -> None:
        self.store.insert(key, value, value_type)

    def remove_as(self, key: str, value_type: Any = Any) -> Optional[Any]:
        return self.store.remove_as(key, value_type)


class AsyncTypedSession(AsyncSessionExt):
    """Adapter giving any AsyncSessionStore the typed operations."""

    def __init__(self, store: AsyncSessionStore):
        self.store = store

    async def get(self, key: str, value_type: Any = Any) -> Optional[Any]:
        return await self.store.get(key, value_type)

    async def insert(self, key: str, value: Any, value_type: Any = Any) -> None:
        await self.store.insert(key, value, value_type)

    async def remove_as(self, key: str, value_type: Any = Any) -> Optional[Any]:
        return await self.store.remove_as(key, value_type)
