"""Session exception classes.

Every failure surfaced by a session store or the typed layer derives from
SessionError, so request handlers can convert them in one place.
"""

from typing import Optional, get_args


class SessionError(Exception):
    """Base exception for session access errors.

    Attributes:
        key: Raw session identifier the operation targeted
        message: Human-readable error description
    """

    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message
        super().__init__(message)


class SessionGetError(SessionError):
    """Raised when a stored value cannot be read back as the requested type."""


class SessionInsertError(SessionError):
    """Raised when a value cannot be serialized into the session."""


class SessionRemoveError(SessionError):
    """Raised when a removed value cannot be decoded as the requested type.

    The entry is already gone from the store when this is raised; the raw
    serialized text is kept on ``raw_value`` so callers can inspect it.
    """

    def __init__(self, key: str, message: str, raw_value: Optional[str] = None):
        super().__init__(key, message)
        self.raw_value = raw_value


class DuplicateSessionKeyError(SessionError):
    """Raised when an identifier is registered twice with different types."""

    def __init__(self, key: str, existing_type: object, new_type: object):
        super().__init__(
            key,
            f"Session key '{key}' is already registered as {_type_name(existing_type)}, "
            f"cannot register it as {_type_name(new_type)}",
        )
        self.existing_type = existing_type
        self.new_type = new_type


def _type_name(value_type: object) -> str:
    if isinstance(value_type, type) and not get_args(value_type):
        return value_type.__name__
    return repr(value_type)
