"""Upload ledger: record client submissions against a document request."""

from __future__ import annotations

from dossierhub.application.dtos.dossier import DocumentRequestResult
from dossierhub.application.dtos.notification import Notification
from dossierhub.application.dtos.upload import (
    QuotaHint,
    QuotaRejection,
    SubmitUploadsResult,
)
from dossierhub.application.interfaces.repositories import (
    IDocumentRequestRepository,
    IDocumentUploadRepository,
    IDossierRepository,
)
from dossierhub.application.interfaces.services import INotificationDispatcher
from dossierhub.application.services.notifications import dispatch_safely
from dossierhub.application.services.quota_guard import evaluate_quota, quota_hint
from dossierhub.application.services.request_status_deriver import derive_request_status
from dossierhub.application.use_cases.dossiers.recompute_dossier_state import (
    RecomputeDossierStateUseCase,
)
from dossierhub.domain.entities.dossier import ensure_not_finalized
from dossierhub.domain.enums import DossierStatus, NotificationKind, RequestStatus
from dossierhub.domain.exceptions import (
    InvalidStateTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from dossierhub.domain.value_objects import AcceptedFormats, FileRef
from dossierhub.shared.telemetry.logging import get_logger
from dossierhub.shared.utils.datetime import utc_now

logger = get_logger(__name__)


def check_file_constraints(request: DocumentRequestResult, files: list[FileRef]) -> None:
    """Reject the whole submission if any file has a refused format or is too large.

    Raises:
        ValidationException: On the first offending file.
    """
    formats = AcceptedFormats(request.accepted_formats)
    for file in files:
        if not formats.accepts(file):
            raise ValidationException(
                f"File '{file.name}' is not an accepted format ({request.accepted_formats})",
                field="files",
            )
        if not AcceptedFormats.size_allowed(file, request.max_size_mb):
            raise ValidationException(
                f"File '{file.name}' exceeds the maximum size of {request.max_size_mb} MB",
                field="files",
            )


class SubmitUploadsUseCase:
    """Evaluates the quota guard and appends uploads as one step per request."""

    def __init__(
        self,
        request_repo: IDocumentRequestRepository,
        upload_repo: IDocumentUploadRepository,
        dossier_repo: IDossierRepository,
        recompute: RecomputeDossierStateUseCase,
        notifier: INotificationDispatcher | None = None,
    ) -> None:
        self._request_repo = request_repo
        self._upload_repo = upload_repo
        self._dossier_repo = dossier_repo
        self._recompute = recompute
        self._notifier = notifier

    async def execute(
        self,
        request_id: str,
        files: list[FileRef],
        submitted_by: str | None = None,
    ) -> SubmitUploadsResult:
        """Record files as PENDING uploads, replacing the oldest rejected uploads first.

        All files are accepted or none: when the quota guard refuses, nothing is
        recorded and the result carries a QuotaRejection.

        Args:
            request_id: Target document request.
            files: References returned by the file store.
            submitted_by: Acting user id, if known.

        Returns:
            Accepted uploads, or an empty list with the quota rejection.

        Raises:
            ResourceNotFoundException: If the request does not exist.
            AlreadyFinalizedException: If the dossier is VALIDATED.
            InvalidStateTransitionException: If the request is EXPIRED.
            ValidationException: If no files, or a file breaks format/size constraints.
        """
        if not files:
            raise ValidationException("At least one file must be submitted", field="files")

        async with self._request_repo.locked(request_id) as request:
            if request is None:
                raise ResourceNotFoundException("document_request", request_id)
            dossier_status = await self._dossier_repo.get_status(request.dossier_id)
            ensure_not_finalized(request.dossier_id, dossier_status or DossierStatus.PENDING)
            now = utc_now()
            if derive_request_status(request, now) == RequestStatus.EXPIRED:
                raise InvalidStateTransitionException(
                    "document_request", RequestStatus.EXPIRED.value, "upload"
                )
            check_file_constraints(request, files)

            decision = evaluate_quota(request, len(files))
            if decision.exceeded:
                logger.warning(
                    "Quota refused for request %s: requested=%d allowed=%d",
                    request_id,
                    decision.requested,
                    decision.allowed,
                )
                return SubmitUploadsResult(
                    request_id=request_id,
                    accepted=[],
                    rejected=QuotaRejection(
                        request_id=request_id,
                        allowed=decision.allowed,
                        requested=decision.requested,
                    ),
                )

            accepted = []
            for index, file in enumerate(files):
                upload = await self._upload_repo.append(
                    request_id, file, submitted_at=now, submitted_by=submitted_by
                )
                if index < len(decision.replacing):
                    replaced_id = decision.replacing[index]
                    if not await self._upload_repo.mark_replaced(replaced_id, upload.id):
                        raise InvalidStateTransitionException(
                            "document_upload", "unknown", "REPLACED"
                        )
                accepted.append(upload)
            outcome = await self._recompute.execute(request.dossier_id)

        logger.info(
            "Recorded %d upload(s) on request %s (%d replacement(s))",
            len(accepted),
            request_id,
            len(decision.replacing),
        )
        notifications = [
            Notification(
                kind=NotificationKind.UPLOAD_SUBMITTED,
                dossier_id=request.dossier_id,
                client_id=outcome.dossier.client_id,
                request_id=request_id,
                upload_id=upload.id,
                occurred_at=upload.submitted_at,
                details={"file_name": upload.file.name, "replacing": list(decision.replacing)},
            )
            for upload in accepted
        ]
        notifications.extend(outcome.transition_notifications())
        await dispatch_safely(self._notifier, notifications)
        return SubmitUploadsResult(request_id=request_id, accepted=accepted)


class GetQuotaHintUseCase:
    """Read-only quota summary for a request (what the client may submit now)."""

    def __init__(
        self,
        request_repo: IDocumentRequestRepository,
        warning_remaining: int = 1,
    ) -> None:
        self._request_repo = request_repo
        self._warning_remaining = warning_remaining

    async def execute(self, request_id: str) -> tuple[DocumentRequestResult, QuotaHint]:
        request = await self._request_repo.get_by_id(request_id)
        if not request:
            raise ResourceNotFoundException("document_request", request_id)
        return request, quota_hint(request, self._warning_remaining)
