"""Validation processor: accountant review decisions on individual uploads."""

from __future__ import annotations

from dossierhub.application.dtos.dossier import DocumentUploadResult
from dossierhub.application.dtos.notification import Notification
from dossierhub.application.interfaces.repositories import (
    IDocumentRequestRepository,
    IDocumentUploadRepository,
    IDossierRepository,
)
from dossierhub.application.interfaces.services import INotificationDispatcher
from dossierhub.application.services.notifications import dispatch_safely
from dossierhub.application.use_cases.dossiers.recompute_dossier_state import (
    RecomputeDossierStateUseCase,
)
from dossierhub.domain.entities.document_upload import (
    DECIDABLE_UPLOAD_STATUSES,
    ensure_upload_transition,
)
from dossierhub.domain.entities.dossier import ensure_not_finalized
from dossierhub.domain.enums import (
    DossierStatus,
    NotificationKind,
    UploadDecision,
    UploadStatus,
)
from dossierhub.domain.exceptions import (
    InvalidStateTransitionException,
    ResourceNotFoundException,
)
from dossierhub.shared.telemetry.logging import get_logger
from dossierhub.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_DECISION_NOTIFICATION = {
    UploadStatus.APPROVED: NotificationKind.UPLOAD_APPROVED,
    UploadStatus.REJECTED: NotificationKind.UPLOAD_REJECTED,
}


class _UploadDecisionBase:
    """Shared lookups for upload-level transitions."""

    def __init__(
        self,
        upload_repo: IDocumentUploadRepository,
        request_repo: IDocumentRequestRepository,
        dossier_repo: IDossierRepository,
    ) -> None:
        self._upload_repo = upload_repo
        self._request_repo = request_repo
        self._dossier_repo = dossier_repo

    async def _load(self, upload_id: str) -> tuple[DocumentUploadResult, str]:
        """Return the upload and its dossier id; refuse uploads of a VALIDATED dossier."""
        upload = await self._upload_repo.get_by_id(upload_id)
        if not upload:
            raise ResourceNotFoundException("document_upload", upload_id)
        request = await self._request_repo.get_by_id(upload.request_id)
        if not request:
            raise ResourceNotFoundException("document_request", upload.request_id)
        status = await self._dossier_repo.get_status(request.dossier_id)
        ensure_not_finalized(request.dossier_id, status or DossierStatus.PENDING)
        return upload, request.dossier_id

    async def _reload(self, upload_id: str) -> DocumentUploadResult:
        upload = await self._upload_repo.get_by_id(upload_id)
        if not upload:
            raise ResourceNotFoundException("document_upload", upload_id)
        return upload


class DecideUploadUseCase(_UploadDecisionBase):
    """Approve or reject a PENDING / IN_REVIEW upload, then re-derive request and dossier."""

    def __init__(
        self,
        upload_repo: IDocumentUploadRepository,
        request_repo: IDocumentRequestRepository,
        dossier_repo: IDossierRepository,
        recompute: RecomputeDossierStateUseCase,
        notifier: INotificationDispatcher | None = None,
    ) -> None:
        super().__init__(upload_repo, request_repo, dossier_repo)
        self._recompute = recompute
        self._notifier = notifier

    async def execute(
        self,
        upload_id: str,
        decision: UploadDecision,
        comment: str | None = None,
        decided_by: str | None = None,
    ) -> DocumentUploadResult:
        """Apply the decision.

        Repeating the decision already recorded is a no-op returning the current
        upload (no recomputation, no notification).

        Raises:
            ResourceNotFoundException: If the upload does not exist.
            AlreadyFinalizedException: If the dossier is VALIDATED.
            InvalidStateTransitionException: If the upload is not PENDING or IN_REVIEW.
        """
        upload, dossier_id = await self._load(upload_id)
        target = decision.target_status
        if upload.status == target:
            return upload
        ensure_upload_transition(upload.status, target)

        swapped = await self._upload_repo.compare_and_set_status(
            upload_id,
            DECIDABLE_UPLOAD_STATUSES,
            target,
            comment=comment,
            decided_at=utc_now(),
            decided_by=decided_by,
        )
        if not swapped:
            # Lost the race to a concurrent decision on the same upload.
            current = await self._reload(upload_id)
            if current.status == target:
                return current
            raise InvalidStateTransitionException(
                "document_upload", current.status.value, target.value
            )

        outcome = await self._recompute.execute(dossier_id)
        decided = await self._reload(upload_id)
        logger.info(
            "Upload %s %s -> %s", upload_id, upload.status.value, decided.status.value
        )
        notifications = [
            Notification(
                kind=_DECISION_NOTIFICATION[target],
                dossier_id=dossier_id,
                client_id=outcome.dossier.client_id,
                request_id=decided.request_id,
                upload_id=upload_id,
                occurred_at=decided.decided_at or utc_now(),
                details={"comment": comment} if comment else {},
            )
        ]
        notifications.extend(outcome.transition_notifications())
        await dispatch_safely(self._notifier, notifications)
        return decided


class StartReviewUseCase(_UploadDecisionBase):
    """Mark a PENDING upload as IN_REVIEW (idempotent when already IN_REVIEW)."""

    async def execute(self, upload_id: str, reviewer_id: str | None = None) -> DocumentUploadResult:
        upload, _ = await self._load(upload_id)
        if upload.status == UploadStatus.IN_REVIEW:
            return upload
        ensure_upload_transition(upload.status, UploadStatus.IN_REVIEW)
        swapped = await self._upload_repo.compare_and_set_status(
            upload_id,
            frozenset({UploadStatus.PENDING}),
            UploadStatus.IN_REVIEW,
            decided_by=reviewer_id,
        )
        current = await self._reload(upload_id)
        if not swapped and current.status != UploadStatus.IN_REVIEW:
            raise InvalidStateTransitionException(
                "document_upload", current.status.value, UploadStatus.IN_REVIEW.value
            )
        return current
