"""
Ext Module - Black Box Interface

Purpose: Typed get/insert/remove over untyped session stores
Interface: get_by_key(), insert_by_key(), remove_by_key()
Hidden: Nothing - pure delegation to the wrapped store

Works with any store matching SessionStore or AsyncSessionStore.
"""

from .ext import AsyncSessionExt, AsyncTypedSession, SessionExt, TypedSession
from .interfaces import AsyncSessionStore, SessionStore

__all__ = [
    "SessionExt",
    "AsyncSessionExt",
    "TypedSession",
    "AsyncTypedSession",
    "SessionStore",
    "AsyncSessionStore",
]
