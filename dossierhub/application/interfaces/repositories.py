"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from dossierhub.domain.enums import DossierStatus, RequestStatus, UploadStatus

if TYPE_CHECKING:
    from dossierhub.application.dtos.dossier import (
        ClientResult,
        DocumentRequestResult,
        DocumentRequestTemplate,
        DocumentUploadResult,
        DossierDraft,
        DossierResult,
        DossierTemplateResult,
    )
    from dossierhub.domain.value_objects import FileRef


# Client repository interface
class IClientRepository(Protocol):
    """Protocol for client lookups (owner of dossiers)."""

    async def get_by_id(self, client_id: str) -> ClientResult | None:
        """Return client by ID."""

    async def list_by_accountant(self, accountant_id: str) -> list[ClientResult]:
        """Return clients followed by the accountant."""


# Dossier repository interface
class IDossierRepository(Protocol):
    """Protocol for dossier persistence (DIP)."""

    async def get_by_id(self, dossier_id: str) -> DossierResult | None:
        """Return dossier with requests and their uploads, or None."""

    async def get_status(self, dossier_id: str) -> DossierStatus | None:
        """Return the stored status of the dossier, or None if it does not exist."""

    async def list_by_client(self, client_id: str) -> list[DossierResult]:
        """Return the client's dossiers (newest first)."""

    async def list_by_accountant(self, accountant_id: str) -> list[DossierResult]:
        """Return the accountant's dossiers (newest first)."""

    async def list_due_between(
        self, start: datetime, end: datetime
    ) -> list[DossierResult]:
        """Return non-validated dossiers whose due date falls in [start, end]."""

    async def create_dossier(
        self,
        client_id: str,
        accountant_id: str,
        draft: DossierDraft,
    ) -> DossierResult:
        """Create the dossier and its requests (all AWAITING, dossier PENDING)."""

    async def update_derived_state(
        self,
        dossier_id: str,
        status: DossierStatus,
        documents_requis: int,
        documents_upload: int,
        pourcentage: int,
        completed_at: datetime | None,
    ) -> None:
        """Persist recomputed status and counters. Never touches a VALIDATED dossier."""

    async def mark_validated(
        self, dossier_id: str, validated_at: datetime, comment: str | None
    ) -> bool:
        """Move COMPLETE -> VALIDATED (compare-and-set). Return False if status was not COMPLETE."""


# Document request repository interface
class IDocumentRequestRepository(Protocol):
    """Protocol for document request persistence (DIP)."""

    async def get_by_id(self, request_id: str) -> DocumentRequestResult | None:
        """Return request with its uploads (oldest first), or None."""

    def locked(
        self, request_id: str
    ) -> AbstractAsyncContextManager[DocumentRequestResult | None]:
        """Hold the per-request write lock; yield a fresh snapshot (None if missing).

        Quota evaluation and upload append for the same request must run inside
        this context so two submitters cannot both observe free quota.
        """

    async def update_status(self, request_id: str, status: RequestStatus) -> None:
        """Persist the derived request status."""


# Document upload repository interface
class IDocumentUploadRepository(Protocol):
    """Protocol for the append-only upload ledger (DIP)."""

    async def get_by_id(self, upload_id: str) -> DocumentUploadResult | None:
        """Return upload by ID."""

    async def append(
        self,
        request_id: str,
        file: FileRef,
        submitted_at: datetime,
        submitted_by: str | None = None,
    ) -> DocumentUploadResult:
        """Record a new PENDING upload."""

    async def mark_replaced(
        self, upload_id: str, replaced_by_id: str
    ) -> bool:
        """Move REJECTED -> REPLACED (compare-and-set). Return False if not REJECTED."""

    async def compare_and_set_status(
        self,
        upload_id: str,
        expected: frozenset[UploadStatus],
        new_status: UploadStatus,
        *,
        comment: str | None = None,
        decided_at: datetime | None = None,
        decided_by: str | None = None,
    ) -> bool:
        """Set new_status only if the current status is in expected. Return whether it changed."""


# Dossier template repository interface
class IDossierTemplateRepository(Protocol):
    """Protocol for reusable dossier templates (DIP)."""

    async def get_by_id(self, template_id: str) -> DossierTemplateResult | None:
        """Return template with its items, or None."""

    async def list_templates(
        self, accountant_id: str | None = None
    ) -> list[DossierTemplateResult]:
        """Return shared templates plus those owned by the accountant."""

    async def create_template(
        self,
        name: str,
        items: list[DocumentRequestTemplate],
        accountant_id: str | None = None,
    ) -> DossierTemplateResult:
        """Create a template with its items in order."""
