"""JWT token creation and verification for caller identity.

Uses dossierhub.core.config for secret and algorithm.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from dossierhub.application.dtos.identity import Actor
from dossierhub.core.config import get_settings
from dossierhub.domain.enums import ActorRole
from dossierhub.domain.exceptions import AuthenticationException


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (sub, role, optional client_id).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    if expires_delta is not None:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes
        )
    to_encode["exp"] = expire
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


class JwtIdentityService:
    """IIdentityService backed by signed JWTs carrying sub, role and client_id."""

    def resolve(self, token: str) -> Actor:
        try:
            payload = verify_token(token)
        except ValueError as e:
            raise AuthenticationException(str(e)) from e
        try:
            role = ActorRole(payload.get("role", ""))
        except ValueError as e:
            raise AuthenticationException("Token has an unknown role") from e
        client_id = payload.get("client_id")
        if role == ActorRole.CLIENT and not client_id:
            raise AuthenticationException("Client token missing claim: client_id")
        return Actor(user_id=str(payload["sub"]), role=role, client_id=client_id)
