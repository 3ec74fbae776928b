"""
Request and response models for the demo API.
"""

from datetime import UTC, datetime
from typing import Optional

from pydantic import BaseModel, Field


# Request Models (API Input)


class LoginRequest(BaseModel):
    """Request to log a user into the current session."""

    username: str = Field(..., min_length=1, max_length=100, description="Name stored in the session")


# Response Models (API Output)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class LoggedAtResponse(BaseModel):
    """When the session's user logged in."""

    message: str
    timestamp: int = Field(..., description="Login time as epoch seconds, 0 if never logged in")


class WhoAmIResponse(BaseModel):
    """User bound to the current session."""

    user: Optional[str] = None


class LogoutResponse(BaseModel):
    """Result of clearing the login from the session."""

    message: str
    user: Optional[str] = Field(default=None, description="User that was logged out, if any")


# Error Models


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    key: Optional[str] = Field(default=None, description="Session key involved")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
