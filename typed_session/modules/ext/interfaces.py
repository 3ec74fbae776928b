"""Session store interfaces the typed access layer binds onto."""
from typing import Any, Optional, Protocol


class SessionStore(Protocol):
    """Protocol for synchronous untyped session stores."""

    def get(self, key: str, value_type: Any = Any) -> Optional[Any]:
        """
        Get the value stored under ``key`` decoded as ``value_type``.

        Returns None if absent; raises SessionGetError if not decodable.
        """
        ...

    def insert(self, key: str, value: Any, value_type: Any = Any) -> None:
        """Serialize ``value`` as ``value_type``; raises SessionInsertError."""
        ...

    def remove_as(self, key: str, value_type: Any = Any) -> Optional[Any]:
        """
        Remove ``key`` and decode its previous value.

        Removal is unconditional; raises SessionRemoveError if decoding fails.
        """
        ...


class AsyncSessionStore(Protocol):
    """Protocol for asynchronous untyped session stores."""

    async def get(self, key: str, value_type: Any = Any) -> Optional[Any]:
        ...

    async def insert(self, key: str, value: Any, value_type: Any = Any) -> None:
        ...

    async def remove_as(self, key: str, value_type: Any = Any) -> Optional[Any]:
        ...
