"""
Typed session keys.

A SessionKey binds a raw session identifier to the type of the value
stored under it. Declare keys once, as module-level constants:

    USER_KEY: SessionKey[str] = SessionKey("user", str)
    TIMESTAMP_KEY: SessionKey[int] = SessionKey("timestamp", int)

Static type checkers use the generic parameter to check call sites; the
runtime ``value_type`` drives serialization in the session stores.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Generic, Iterator, Optional, Type, TypeVar

from typed_session.exceptions import DuplicateSessionKeyError
from typed_session.modules.session.codec import adapter_for

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SessionKey(Generic[T]):
    """
    A session identifier bound to its value type.

    Avoids the usual pitfalls of raw keys:
    - Mistyped key on insertion or retrieval
    - Wrong type assumed on retrieval

    The identifier is not validated. Empty and non-ASCII identifiers are
    accepted, and nothing stops two keys sharing an identifier with
    different types unless they are declared through a SessionKeyRegistry.
    """

    identifier: str
    value_type: Type[T]

    def __post_init__(self):
        try:
            adapter_for(self.value_type)
        except TypeError as e:
            raise TypeError(
                f"Session key '{self.identifier}' has a value type that cannot be "
                f"serialized: {self.value_type!r}"
            ) from e

    def as_str(self) -> str:
        """Return the raw key as a string."""
        return self.identifier


class SessionKeyRegistry:
    """
    Opt-in registry rejecting conflicting key declarations.

    Registering an identifier twice with the same value type is allowed
    and returns the key unchanged; a different value type raises
    DuplicateSessionKeyError.
    """

    def __init__(self):
        self._keys: Dict[str, SessionKey] = {}

    def register(self, key: SessionKey[T]) -> SessionKey[T]:
        existing = self._keys.get(key.identifier)
        if existing is not None and existing.value_type != key.value_type:
            raise DuplicateSessionKeyError(key.identifier, existing.value_type, key.value_type)

        self._keys[key.identifier] = key
        logger.debug(f"Registered session key '{key.identifier}'")
        return key

    def declare(self, identifier: str, value_type: Type[T]) -> SessionKey[T]:
        """Create a key and register it in one step."""
        return self.register(SessionKey(identifier, value_type))

    def get(self, identifier: str) -> Optional[SessionKey]:
        return self._keys.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._keys

    def __iter__(self) -> Iterator[SessionKey]:
        return iter(list(self._keys.values()))

    def __len__(self) -> int:
        return len(self._keys)
