#!/usr/bin/env python3
"""
typed-session - Demo API

Thin FastAPI application showing the typed access layer consumed by
request handlers:
1. Loads configuration
2. Connects the Redis storage module
3. Serves login/logout endpoints that read and write typed session keys

Session ids travel in a cookie; state lives in one Redis hash per session.
"""

import logging
import logging.config as log_config
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import redis.asyncio as redis
import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from typed_session.exceptions import SessionError
from typed_session.logging_config import get_logging_config
from typed_session.modules.api import (
    ErrorResponse,
    LoggedAtResponse,
    LoginRequest,
    LogoutResponse,
    MessageResponse,
    WhoAmIResponse,
)
from typed_session.modules.config import get_config
from typed_session.modules.ext import AsyncTypedSession
from typed_session.modules.key import SessionKeyRegistry
from typed_session.modules.session import RedisSession
from typed_session.modules.storage import StorageModule

config = get_config()

log_config.dictConfig(get_logging_config(config.get("log_level"), config.get("session_log_level")))
logger = logging.getLogger(__name__)

# Session keys used by the handlers below
session_keys = SessionKeyRegistry()
USER_KEY = session_keys.declare("user", str)
TIMESTAMP_KEY = session_keys.declare("timestamp", int)

# Initialized at startup
storage: Optional[StorageModule] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    global storage

    logger.info("Starting typed-session API...")
    storage = StorageModule.from_config(config)
    await storage.connect()
    logger.info("typed-session API started successfully")

    yield

    logger.info("Shutting down typed-session API...")
    await storage.disconnect()
    storage = None
    logger.info("typed-session API shutdown complete")


app = FastAPI(
    title="typed-session API",
    description="Typed session keys over a Redis-backed session store",
    version="1.0.0",
    lifespan=lifespan,
)


# Dependency injection helpers


async def get_redis() -> redis.Redis:
    """Get the Redis client backing sessions."""
    if not storage:
        raise HTTPException(503, "Service not initialized")
    return await storage.connect()


async def get_session(
    request: Request,
    response: Response,
    redis_client: redis.Redis = Depends(get_redis),
) -> AsyncTypedSession:
    """
    Resolve the caller's session from its cookie.

    A request without a session cookie is given a fresh session id.
    """
    cookie_name = config.get("session_cookie_name")
    ttl = config.get("session_ttl")

    session_id = request.cookies.get(cookie_name)
    if not session_id:
        session_id = str(uuid.uuid4())
        response.set_cookie(cookie_name, session_id, max_age=ttl, httponly=True, samesite="lax")
        logger.debug(f"Started session {session_id}")

    return AsyncTypedSession(RedisSession(redis_client, session_id, ttl=ttl))


# Endpoints


@app.post("/login", response_model=MessageResponse)
async def login(request: LoginRequest, session: AsyncTypedSession = Depends(get_session)):
    """Store the user and login time in the session."""
    await session.insert_by_key(USER_KEY, request.username)
    await session.insert_by_key(TIMESTAMP_KEY, int(time.time()))

    return MessageResponse(message="logged in")


@app.get("/logged_at", response_model=LoggedAtResponse)
async def logged_at(session: AsyncTypedSession = Depends(get_session)):
    """Report when the session's user logged in."""
    timestamp = await session.get_by_key(TIMESTAMP_KEY) or 0

    return LoggedAtResponse(message=f"logged at {timestamp}", timestamp=timestamp)


@app.get("/whoami", response_model=WhoAmIResponse)
async def whoami(session: AsyncTypedSession = Depends(get_session)):
    """Report the user bound to the session."""
    return WhoAmIResponse(user=await session.get_by_key(USER_KEY))


@app.post("/logout", response_model=LogoutResponse)
async def logout(session: AsyncTypedSession = Depends(get_session)):
    """Remove the login from the session."""
    user = await session.remove_by_key(USER_KEY)
    await session.remove_by_key(TIMESTAMP_KEY)

    return LogoutResponse(message="logged out" if user else "not logged in", user=user)


@app.get("/health")
async def health_check(redis_client: redis.Redis = Depends(get_redis)):
    """
    Health check endpoint.

    Returns:
        200: Service healthy
        503: Redis unreachable
    """
    try:
        await redis_client.ping()
    except RedisError as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "unhealthy", "redis": "disconnected"})

    return {"status": "healthy", "redis": "connected", "version": "1.0.0"}


# Error handlers


@app.exception_handler(SessionError)
async def session_error_handler(request, exc: SessionError):
    """
    Handle typed session errors.

    Returns:
        503: The session store lost its Redis connection
        500: Any other session error
    """
    if isinstance(exc.__cause__, RedisConnectionError):
        logger.error(f"Redis connection error on '{exc.key}': {exc.__cause__}")
        body = ErrorResponse(error="Database connection failed", key=exc.key)
        return JSONResponse(status_code=503, content=body.model_dump(mode="json"))

    logger.error(f"Session error on '{exc.key}': {exc.message}")
    body = ErrorResponse(error=exc.message, key=exc.key)
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


if __name__ == "__main__":
    uvicorn.run(
        "typed_session.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level"), config.get("session_log_level")),
    )
