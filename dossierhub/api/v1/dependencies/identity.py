"""Identity dependencies: resolve the acting client or accountant from the bearer token."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dossierhub.application.dtos.identity import Actor
from dossierhub.application.interfaces.services import IIdentityService
from dossierhub.application.services.authorization_service import require_accountant
from dossierhub.domain.exceptions import AuthenticationException
from dossierhub.infrastructure.security.jwt import JwtIdentityService

_http_bearer = HTTPBearer(auto_error=False)


def get_identity_service() -> IIdentityService:
    """Identity resolver (composition root)."""
    return JwtIdentityService()


async def get_current_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    identity: Annotated[IIdentityService, Depends(get_identity_service)],
) -> Actor:
    """Return the caller; raise 401 if the token is missing or invalid."""
    if not credentials:
        raise AuthenticationException("Not authenticated")
    return identity.resolve(credentials.credentials)


async def get_current_accountant(
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> Actor:
    """Return the caller if it is an accountant; raise 403 otherwise."""
    require_accountant(actor, "dossier", "manage")
    return actor
