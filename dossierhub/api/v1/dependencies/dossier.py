"""Dossier, upload and template dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dossierhub.application.interfaces.services import IFileStore, INotificationDispatcher
from dossierhub.application.use_cases.dossiers import (
    CreateDossierUseCase,
    CreateDossiersBatchUseCase,
    DossierQueryService,
    DossierTemplateService,
    DuplicateDossierUseCase,
    FinalizeDossierUseCase,
    RecomputeDossierStateUseCase,
)
from dossierhub.application.use_cases.uploads import (
    DecideUploadUseCase,
    GetQuotaHintUseCase,
    StartReviewUseCase,
    SubmitUploadsUseCase,
)
from dossierhub.core.config import get_settings
from dossierhub.infrastructure.external.storage import LocalFileStore
from dossierhub.infrastructure.persistence.database import get_db, get_db_transactional
from dossierhub.infrastructure.persistence.repositories import (
    ClientRepository,
    DocumentRequestRepository,
    DocumentUploadRepository,
    DossierRepository,
    DossierTemplateRepository,
)
from dossierhub.infrastructure.services import LogOnlyNotificationDispatcher


def get_notification_dispatcher() -> INotificationDispatcher:
    """Notification channel (log-only until a delivery channel is configured)."""
    return LogOnlyNotificationDispatcher(enabled=get_settings().notifications_enabled)


def get_file_store() -> IFileStore:
    """File store for upload bytes (composition root)."""
    return LocalFileStore(get_settings().storage_root)


def _recompute(db: AsyncSession) -> RecomputeDossierStateUseCase:
    return RecomputeDossierStateUseCase(
        dossier_repo=DossierRepository(db),
        request_repo=DocumentRequestRepository(db),
    )


async def get_dossier_query_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DossierQueryService:
    """Read-side dossier queries."""
    return DossierQueryService(
        DossierRepository(db), due_soon_days=get_settings().due_soon_days
    )


async def get_request_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DocumentRequestRepository:
    """Document request repository for read operations (access checks)."""
    return DocumentRequestRepository(db)


async def get_upload_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DocumentUploadRepository:
    """Upload repository for read operations (access checks)."""
    return DocumentUploadRepository(db)


async def get_quota_hint_use_case(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> GetQuotaHintUseCase:
    return GetQuotaHintUseCase(
        DocumentRequestRepository(db),
        warning_remaining=get_settings().quota_warning_remaining,
    )


async def get_template_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DossierTemplateService:
    """Template listing, creation and expansion (same transaction as dossier writes)."""
    return DossierTemplateService(DossierTemplateRepository(db))


async def get_create_dossier_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> CreateDossierUseCase:
    return CreateDossierUseCase(
        dossier_repo=DossierRepository(db),
        client_repo=ClientRepository(db),
        recompute=_recompute(db),
    )


async def get_batch_create_use_case(
    create_dossier: Annotated[CreateDossierUseCase, Depends(get_create_dossier_use_case)],
) -> CreateDossiersBatchUseCase:
    return CreateDossiersBatchUseCase(create_dossier)


async def get_duplicate_dossier_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    batch: Annotated[CreateDossiersBatchUseCase, Depends(get_batch_create_use_case)],
) -> DuplicateDossierUseCase:
    return DuplicateDossierUseCase(DossierRepository(db), batch)


async def get_finalize_dossier_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    notifier: Annotated[INotificationDispatcher, Depends(get_notification_dispatcher)],
) -> FinalizeDossierUseCase:
    return FinalizeDossierUseCase(
        dossier_repo=DossierRepository(db),
        recompute=_recompute(db),
        notifier=notifier,
    )


async def get_submit_uploads_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    notifier: Annotated[INotificationDispatcher, Depends(get_notification_dispatcher)],
) -> SubmitUploadsUseCase:
    """Submission runs in one transaction holding the request row lock."""
    return SubmitUploadsUseCase(
        request_repo=DocumentRequestRepository(db),
        upload_repo=DocumentUploadRepository(db),
        dossier_repo=DossierRepository(db),
        recompute=_recompute(db),
        notifier=notifier,
    )


async def get_decide_upload_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    notifier: Annotated[INotificationDispatcher, Depends(get_notification_dispatcher)],
) -> DecideUploadUseCase:
    return DecideUploadUseCase(
        upload_repo=DocumentUploadRepository(db),
        request_repo=DocumentRequestRepository(db),
        dossier_repo=DossierRepository(db),
        recompute=_recompute(db),
        notifier=notifier,
    )


async def get_start_review_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> StartReviewUseCase:
    return StartReviewUseCase(
        upload_repo=DocumentUploadRepository(db),
        request_repo=DocumentRequestRepository(db),
        dossier_repo=DossierRepository(db),
    )
