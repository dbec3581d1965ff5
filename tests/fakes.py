"""In-memory implementations of the repository and service protocols for tests.

Snapshots are rebuilt from flat tables on every read, like the SQL repositories.
The per-request lock is an asyncio.Lock, standing in for SELECT ... FOR UPDATE.
"""

from __future__ import annotations

import asyncio
import itertools
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime
from typing import BinaryIO

from dossierhub.application.dtos.dossier import (
    ClientResult,
    DocumentRequestResult,
    DocumentRequestTemplate,
    DocumentUploadResult,
    DossierDraft,
    DossierResult,
    DossierTemplateResult,
)
from dossierhub.application.dtos.notification import Notification
from dossierhub.domain.enums import DossierStatus, RequestStatus, UploadStatus
from dossierhub.domain.value_objects import FileRef
from dossierhub.infrastructure.security.jwt import create_access_token
from dossierhub.shared.utils.datetime import utc_now


class InMemoryStore:
    """Flat tables shared by the fake repositories."""

    def __init__(self) -> None:
        self.clients: dict[str, ClientResult] = {}
        self.dossiers: dict[str, DossierResult] = {}
        self.requests: dict[str, DocumentRequestResult] = {}
        self.uploads: dict[str, DocumentUploadResult] = {}
        self.templates: dict[str, DossierTemplateResult] = {}
        self.locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self.writes = 0
        self._ids = itertools.count(1)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    def request_snapshot(self, request_id: str) -> DocumentRequestResult:
        uploads = sorted(
            (u for u in self.uploads.values() if u.request_id == request_id),
            key=lambda u: u.sequence,
        )
        return replace(self.requests[request_id], uploads=uploads)

    def dossier_snapshot(self, dossier_id: str) -> DossierResult:
        requests = sorted(
            (
                self.request_snapshot(r.id)
                for r in self.requests.values()
                if r.dossier_id == dossier_id
            ),
            key=lambda r: r.position,
        )
        return replace(self.dossiers[dossier_id], requests=requests)

    # Seeding helpers

    def add_client(self, client_id: str, accountant_id: str = "acc1") -> ClientResult:
        client = ClientResult(
            id=client_id,
            accountant_id=accountant_id,
            company_name=f"Company {client_id}",
            email=f"{client_id}@example.com",
        )
        self.clients[client_id] = client
        return client

    def add_dossier(
        self,
        client_id: str = "c1",
        accountant_id: str = "acc1",
        *,
        name: str = "Annual accounts",
        status: DossierStatus = DossierStatus.PENDING,
        due_date: datetime | None = None,
    ) -> str:
        dossier_id = self.next_id("d")
        self.dossiers[dossier_id] = DossierResult(
            id=dossier_id,
            client_id=client_id,
            accountant_id=accountant_id,
            name=name,
            status=status,
            created_at=utc_now(),
            due_date=due_date,
        )
        return dossier_id

    def add_request(
        self,
        dossier_id: str,
        *,
        quantite_min: int = 1,
        quantite_max: int = 1,
        obligatoire: bool = True,
        accepted_formats: str = "*",
        max_size_mb: float | None = None,
        due_date: datetime | None = None,
        status: RequestStatus = RequestStatus.AWAITING,
    ) -> str:
        request_id = self.next_id("r")
        position = sum(1 for r in self.requests.values() if r.dossier_id == dossier_id)
        self.requests[request_id] = DocumentRequestResult(
            id=request_id,
            dossier_id=dossier_id,
            title=f"Document {position + 1}",
            document_type="invoice",
            obligatoire=obligatoire,
            quantite_min=quantite_min,
            quantite_max=quantite_max,
            status=status,
            accepted_formats=accepted_formats,
            max_size_mb=max_size_mb,
            due_date=due_date,
            position=position,
        )
        return request_id

    def add_upload(
        self,
        request_id: str,
        status: UploadStatus = UploadStatus.PENDING,
        *,
        name: str = "scan.pdf",
        size: int = 1024,
    ) -> str:
        upload_id = self.next_id("u")
        sequence = 1 + sum(1 for u in self.uploads.values() if u.request_id == request_id)
        self.uploads[upload_id] = DocumentUploadResult(
            id=upload_id,
            request_id=request_id,
            file=FileRef(id=f"f-{upload_id}", name=name, size=size, mime_type="application/pdf"),
            status=status,
            submitted_at=utc_now(),
            sequence=sequence,
        )
        return upload_id


class FakeClientRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, client_id: str) -> ClientResult | None:
        return self.store.clients.get(client_id)

    async def list_by_accountant(self, accountant_id: str) -> list[ClientResult]:
        return [c for c in self.store.clients.values() if c.accountant_id == accountant_id]


class FakeDossierRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, dossier_id: str) -> DossierResult | None:
        if dossier_id not in self.store.dossiers:
            return None
        return self.store.dossier_snapshot(dossier_id)

    async def get_status(self, dossier_id: str) -> DossierStatus | None:
        dossier = self.store.dossiers.get(dossier_id)
        return dossier.status if dossier else None

    async def list_by_client(self, client_id: str) -> list[DossierResult]:
        return [
            self.store.dossier_snapshot(d.id)
            for d in self.store.dossiers.values()
            if d.client_id == client_id
        ]

    async def list_by_accountant(self, accountant_id: str) -> list[DossierResult]:
        return [
            self.store.dossier_snapshot(d.id)
            for d in self.store.dossiers.values()
            if d.accountant_id == accountant_id
        ]

    async def list_due_between(self, start: datetime, end: datetime) -> list[DossierResult]:
        return [
            self.store.dossier_snapshot(d.id)
            for d in self.store.dossiers.values()
            if d.due_date is not None
            and start <= d.due_date <= end
            and d.status != DossierStatus.VALIDATED
        ]

    async def create_dossier(
        self, client_id: str, accountant_id: str, draft: DossierDraft
    ) -> DossierResult:
        self.store.writes += 1
        dossier_id = self.store.add_dossier(
            client_id, accountant_id, name=draft.name, due_date=draft.due_date
        )
        self.store.dossiers[dossier_id] = replace(
            self.store.dossiers[dossier_id],
            description=draft.description,
            period=draft.period,
        )
        for item in draft.requests:
            request_id = self.store.add_request(
                dossier_id,
                quantite_min=item.quantite_min,
                quantite_max=item.quantite_max,
                obligatoire=item.obligatoire,
                accepted_formats=item.accepted_formats,
                max_size_mb=item.max_size_mb,
                due_date=item.due_date or draft.due_date,
            )
            self.store.requests[request_id] = replace(
                self.store.requests[request_id],
                title=item.title,
                document_type=item.document_type,
                description=item.description,
                instructions=item.instructions,
            )
        return self.store.dossier_snapshot(dossier_id)

    async def update_derived_state(
        self,
        dossier_id: str,
        status: DossierStatus,
        documents_requis: int,
        documents_upload: int,
        pourcentage: int,
        completed_at: datetime | None,
    ) -> None:
        current = self.store.dossiers[dossier_id]
        if current.status == DossierStatus.VALIDATED:
            return
        self.store.writes += 1
        self.store.dossiers[dossier_id] = replace(
            current,
            status=status,
            documents_requis=documents_requis,
            documents_upload=documents_upload,
            pourcentage=pourcentage,
            completed_at=completed_at,
        )

    async def mark_validated(
        self, dossier_id: str, validated_at: datetime, comment: str | None
    ) -> bool:
        current = self.store.dossiers.get(dossier_id)
        if current is None or current.status != DossierStatus.COMPLETE:
            return False
        self.store.writes += 1
        self.store.dossiers[dossier_id] = replace(
            current,
            status=DossierStatus.VALIDATED,
            validated_at=validated_at,
            validation_comment=comment,
        )
        return True


class FakeDocumentRequestRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, request_id: str) -> DocumentRequestResult | None:
        if request_id not in self.store.requests:
            return None
        return self.store.request_snapshot(request_id)

    @asynccontextmanager
    async def locked(self, request_id: str) -> AsyncIterator[DocumentRequestResult | None]:
        async with self.store.locks[request_id]:
            # Yield to the loop so concurrent submitters actually contend.
            await asyncio.sleep(0)
            yield await self.get_by_id(request_id)

    async def update_status(self, request_id: str, status: RequestStatus) -> None:
        self.store.writes += 1
        self.store.requests[request_id] = replace(self.store.requests[request_id], status=status)


class FakeDocumentUploadRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, upload_id: str) -> DocumentUploadResult | None:
        return self.store.uploads.get(upload_id)

    async def append(
        self,
        request_id: str,
        file: FileRef,
        submitted_at: datetime,
        submitted_by: str | None = None,
    ) -> DocumentUploadResult:
        await asyncio.sleep(0)
        self.store.writes += 1
        upload_id = self.store.add_upload(request_id)
        upload = replace(
            self.store.uploads[upload_id],
            file=file,
            submitted_at=submitted_at,
            submitted_by=submitted_by,
        )
        self.store.uploads[upload_id] = upload
        return upload

    async def mark_replaced(self, upload_id: str, replaced_by_id: str) -> bool:
        current = self.store.uploads.get(upload_id)
        if current is None or current.status != UploadStatus.REJECTED:
            return False
        self.store.writes += 1
        self.store.uploads[upload_id] = replace(
            current, status=UploadStatus.REPLACED, replaced_by_id=replaced_by_id
        )
        return True

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
        current = self.store.uploads.get(upload_id)
        if current is None or current.status not in expected:
            return False
        self.store.writes += 1
        self.store.uploads[upload_id] = replace(
            current,
            status=new_status,
            reviewer_comment=comment if comment is not None else current.reviewer_comment,
            decided_at=decided_at if decided_at is not None else current.decided_at,
            decided_by=decided_by if decided_by is not None else current.decided_by,
        )
        return True


class FakeDossierTemplateRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, template_id: str) -> DossierTemplateResult | None:
        return self.store.templates.get(template_id)

    async def list_templates(self, accountant_id: str | None = None) -> list[DossierTemplateResult]:
        return [
            t
            for t in self.store.templates.values()
            if t.accountant_id is None or t.accountant_id == accountant_id
        ]

    async def create_template(
        self,
        name: str,
        items: list[DocumentRequestTemplate],
        accountant_id: str | None = None,
    ) -> DossierTemplateResult:
        template = DossierTemplateResult(
            id=self.store.next_id("t"),
            name=name,
            items=list(items),
            accountant_id=accountant_id,
        )
        self.store.templates[template.id] = template
        return template


class RecordingDispatcher:
    """INotificationDispatcher that keeps every notification it receives."""

    def __init__(self) -> None:
        self.sent: list[Notification] = []

    async def dispatch(self, notification: Notification) -> None:
        self.sent.append(notification)

    def kinds(self) -> list[str]:
        return [n.kind.value for n in self.sent]


class FailingDispatcher:
    async def dispatch(self, notification: Notification) -> None:
        raise RuntimeError("notification channel down")


class MemoryFileStore:
    """IFileStore keeping bytes in a dict; records deletions."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self._ids = itertools.count(1)

    async def save(self, file_data: BinaryIO, filename: str, mime_type: str) -> FileRef:
        content = file_data.read()
        file_id = f"blob{next(self._ids)}"
        self.files[file_id] = content
        return FileRef(id=file_id, name=filename, size=len(content), mime_type=mime_type)

    async def delete(self, file_id: str) -> bool:
        self.deleted.append(file_id)
        return self.files.pop(file_id, None) is not None


def bearer(sub: str, role: str, client_id: str | None = None) -> dict[str, str]:
    """Authorization header carrying a signed token for the given actor."""
    claims = {"sub": sub, "role": role}
    if client_id:
        claims["client_id"] = client_id
    return {"Authorization": f"Bearer {create_access_token(claims)}"}
