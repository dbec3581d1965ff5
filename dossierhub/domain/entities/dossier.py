"""Dossier lifecycle guards.

A VALIDATED dossier is archived: it is read-only from then on.
"""

from dossierhub.domain.enums import DossierStatus
from dossierhub.domain.exceptions import (
    AlreadyFinalizedException,
    InvalidStateTransitionException,
)


def ensure_not_finalized(dossier_id: str, status: DossierStatus) -> None:
    """Raise AlreadyFinalizedException when the dossier is VALIDATED."""
    if status == DossierStatus.VALIDATED:
        raise AlreadyFinalizedException(dossier_id)


def ensure_finalizable(dossier_id: str, status: DossierStatus) -> None:
    """Raise unless the dossier is COMPLETE and may move to VALIDATED.

    Raises:
        AlreadyFinalizedException: If already VALIDATED.
        InvalidStateTransitionException: If not COMPLETE.
    """
    ensure_not_finalized(dossier_id, status)
    if status != DossierStatus.COMPLETE:
        raise InvalidStateTransitionException(
            "dossier", status.value, DossierStatus.VALIDATED.value
        )
