"""Bearer-token authentication.

Tokens are issued by the account service; this module only verifies them and
exposes the caller on ``flask.g.user``.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import jwt
from flask import current_app, g, request

from lotto_pro.errors import ForbiddenError, UnauthorizedError

ROLE_STORE_OWNER = "store_owner"
ROLE_STORE_ACCOUNT = "store_account"
ROLE_SUPER_ADMIN = "super_admin"

STORE_ROLES = (ROLE_STORE_OWNER, ROLE_STORE_ACCOUNT)


@dataclass(frozen=True)
class AuthUser:
    id: int
    email: str
    full_name: str
    role: str


def generate_token(user: AuthUser, *, secret: str, algorithm: str = "HS256", expires_in: int = 3600) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": user.id,
        "email": user.email,
        "full_name": user.full_name,
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, *, secret: str, algorithm: str = "HS256") -> AuthUser:
    try:
        claims: dict[str, Any] = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid or expired token") from exc

    try:
        return AuthUser(
            id=int(claims["id"]),
            email=str(claims.get("email", "")),
            full_name=str(claims.get("full_name", "")),
            role=str(claims["role"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise UnauthorizedError("Invalid or expired token") from exc


def _authenticate() -> AuthUser:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        raise UnauthorizedError("No token provided")

    return decode_token(
        header[len("Bearer "):].strip(),
        secret=current_app.config["JWT_SECRET"],
        algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"),
    )


def require_roles(*roles: str) -> Callable:
    """Reject the request unless it carries a valid token with one of ``roles``."""

    def decorator(view: Callable) -> Callable:
        @functools.wraps(view)
        def wrapper(*args: Any, **kwargs: Any):
            user = _authenticate()
            if roles and user.role not in roles:
                raise ForbiddenError(f"Access denied for role \"{user.role}\"")
            g.user = user
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_user() -> AuthUser | None:
    return getattr(g, "user", None)
