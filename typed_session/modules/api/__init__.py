"""
API Module - Black Box Interface

Purpose: Shapes of the demo API's requests and responses
Interface: Pydantic models
Hidden: Nothing

The API only orchestrates - session logic lives in the session and ext modules.
"""

from .models import (
    ErrorResponse,
    LoggedAtResponse,
    LoginRequest,
    LogoutResponse,
    MessageResponse,
    WhoAmIResponse,
)

__all__ = [
    "LoginRequest",
    "MessageResponse",
    "LoggedAtResponse",
    "WhoAmIResponse",
    "LogoutResponse",
    "ErrorResponse",
]
