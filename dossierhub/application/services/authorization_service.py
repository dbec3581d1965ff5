"""Role and ownership checks for the acting client or accountant."""

from dossierhub.application.dtos.dossier import DossierResult
from dossierhub.application.dtos.identity import Actor
from dossierhub.domain.exceptions import AuthorizationException


def require_accountant(actor: Actor, resource: str, action: str) -> None:
    """Raise AuthorizationException unless the actor is an accountant."""
    if not actor.is_accountant:
        raise AuthorizationException(resource, action)


def ensure_client_access(actor: Actor, client_id: str, resource: str, action: str) -> None:
    """Clients may only act on their own records; accountants pass."""
    if actor.is_accountant:
        return
    if actor.client_id != client_id:
        raise AuthorizationException(resource, action)


def ensure_dossier_access(actor: Actor, dossier: DossierResult, action: str) -> None:
    """Accountants see their own dossiers; clients see dossiers addressed to them."""
    if actor.is_accountant:
        if dossier.accountant_id != actor.user_id:
            raise AuthorizationException("dossier", action)
        return
    ensure_client_access(actor, dossier.client_id, "dossier", action)
