"""Bearer-token authentication middleware and role guards.

Two static tokens come from Settings:
- ``admin_token`` authenticates as role "admin" (every route)
- ``read_token`` authenticates as role "reader" (read routes only)

Authentication runs as a litestar middleware for every request outside the
excluded paths; authorization is a guard attached per route, so resource
handlers carry no role logic of their own.
"""

import hmac
from typing import Literal

import msgspec
from litestar.connection import ASGIConnection
from litestar.exceptions import NotAuthorizedException, PermissionDeniedException
from litestar.handlers.base import BaseRouteHandler
from litestar.middleware import (
    AbstractAuthenticationMiddleware,
    AuthenticationResult,
    DefineMiddleware,
)
from typing_extensions import override

from confhub.config import Settings

Role = Literal["admin", "reader"]

# Paths reachable without a token (regex patterns matched against the path)
AUTH_EXCLUDE_PATHS = ["^/health", "^/schema"]

_BEARER_PREFIX = "bearer "


class Principal(msgspec.Struct, frozen=True):
    """The authenticated caller."""

    name: str
    role: Role


class TokenAuthMiddleware(AbstractAuthenticationMiddleware):
    """Authenticates requests by comparing the bearer token with Settings."""

    @override
    async def authenticate_request(
        self, connection: ASGIConnection
    ) -> AuthenticationResult:
        header = connection.headers.get("authorization", "")
        if not header.lower().startswith(_BEARER_PREFIX):
            raise NotAuthorizedException("Missing bearer token")

        token = header[len(_BEARER_PREFIX) :].strip()
        settings: Settings = connection.app.state.settings  # pyright: ignore[reportAny]

        principal = resolve_principal(token, settings)
        if principal is None:
            raise NotAuthorizedException("Invalid bearer token")
        return AuthenticationResult(user=principal, auth=token)


def resolve_principal(token: str, settings: Settings, /) -> Principal | None:
    """Map a bearer token to a Principal, or None if it matches nothing.

    Comparison is constant-time for each configured token.
    """
    if token and hmac.compare_digest(token.encode(), settings.admin_token.encode()):
        return Principal(name="admin", role="admin")
    if (
        token
        and settings.read_token is not None
        and hmac.compare_digest(token.encode(), settings.read_token.encode())
    ):
        return Principal(name="reader", role="reader")
    return None


def require_admin(connection: ASGIConnection, _: BaseRouteHandler) -> None:
    """Guard that only lets admin principals through."""
    user = connection.scope.get("user")  # pyright: ignore[reportUnknownMemberType]
    if not isinstance(user, Principal) or user.role != "admin":
        raise PermissionDeniedException("Admin privileges required")


auth_middleware = DefineMiddleware(TokenAuthMiddleware, exclude=AUTH_EXCLUDE_PATHS)
