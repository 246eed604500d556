"""Request context management using contextvars.

This module provides context variables for tracking the current user,
role and language throughout a request lifecycle.
"""

import contextvars
import uuid

from smtp_settings.config import settings

# Context variables for request-scoped data
_current_user_id: contextvars.ContextVar[uuid.UUID | None] = contextvars.ContextVar(
    "current_user_id", default=None
)
_current_user_role: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "current_user_role", default=None
)
_current_language: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "current_language", default=None
)


# === User Context ===

def get_current_user_id_or_none() -> uuid.UUID | None:
    """Get the current user ID or None if not set."""
    return _current_user_id.get()


def set_current_user_id(uid: uuid.UUID | None) -> None:
    """Set the current user ID."""
    _current_user_id.set(uid)


# === Role Context ===

def get_current_user_role() -> str | None:
    """Get the current user's role."""
    return _current_user_role.get()


def set_current_user_role(role: str | None) -> None:
    """Set the current user's role."""
    _current_user_role.set(role)


# === Language Context ===

def get_current_language() -> str:
    """Get the current language code (defaults to the configured language)."""
    return _current_language.get() or settings.default_language


def set_current_language(lang: str | None) -> None:
    """Set the current language code."""
    _current_language.set(lang)


# === Utility Functions ===

def clear_user_context() -> None:
    """Clear the user context.

    Call this at the end of each request to prevent context leakage.
    """
    _current_user_id.set(None)
    _current_user_role.set(None)
