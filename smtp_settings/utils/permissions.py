"""Roles, capabilities and the permission decorator for admin actions."""

import uuid
from dataclasses import dataclass
from enum import Enum
from functools import wraps
from typing import Callable

from smtp_settings.exceptions import ForbiddenException, UnauthorizedException
from smtp_settings.utils.request_context import (
    get_current_user_id_or_none,
    get_current_user_role,
)


class Role(str, Enum):
    """User roles carried in access tokens."""

    ADMINISTRATOR = "ADMINISTRATOR"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"


class Capability(str, Enum):
    """Actions a role may be granted."""

    MANAGE_OPTIONS = "manage_options"


ROLE_CAPABILITIES: dict[str, frozenset[str]] = {
    Role.ADMINISTRATOR.value: frozenset({Capability.MANAGE_OPTIONS.value}),
    Role.EDITOR.value: frozenset(),
    Role.VIEWER.value: frozenset(),
}


@dataclass(frozen=True)
class Principal:
    """The authenticated actor invoking an action."""

    user_id: uuid.UUID | None
    role: str | None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def can(self, capability: Capability | str) -> bool:
        """Check whether the principal's role grants a capability."""
        value = capability.value if isinstance(capability, Capability) else capability
        return value in ROLE_CAPABILITIES.get(self.role or "", frozenset())


def get_current_principal() -> Principal:
    """Build the principal for the current request from the request context."""
    return Principal(
        user_id=get_current_user_id_or_none(),
        role=get_current_user_role(),
    )


def require_capability(capability: Capability | str) -> Callable:
    """Decorator that enforces a capability on an endpoint.

    Usage:
        @router.get("/smtp-settings")
        @require_capability(Capability.MANAGE_OPTIONS)
        async def render_settings(...):
            ...
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            principal = get_current_principal()
            if not principal.is_authenticated:
                raise UnauthorizedException()
            if not principal.can(capability):
                raise ForbiddenException()
            return await func(*args, **kwargs)

        return wrapper

    return decorator
