"""Integration tests for the SQL repositories and the upload workflow on Postgres.

Requires a migrated database (alembic upgrade head); see the db_session fixture.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from dossierhub.application.dtos.dossier import DocumentRequestTemplate, DossierDraft
from dossierhub.application.use_cases.dossiers import (
    CreateDossierUseCase,
    FinalizeDossierUseCase,
    RecomputeDossierStateUseCase,
)
from dossierhub.application.use_cases.uploads import DecideUploadUseCase, SubmitUploadsUseCase
from dossierhub.domain.enums import DossierStatus, RequestStatus, UploadDecision, UploadStatus
from dossierhub.domain.value_objects import FileRef
from dossierhub.shared.utils.datetime import utc_now
from dossierhub.infrastructure.persistence.repositories import (
    ClientRepository,
    DocumentRequestRepository,
    DocumentUploadRepository,
    DossierRepository,
    DossierTemplateRepository,
)

pytestmark = pytest.mark.requires_db


def _file(name: str) -> FileRef:
    return FileRef(id=f"blob-{name}", name=name, size=100, mime_type="application/pdf")


async def _dossier_with_one_request(db: AsyncSession, maximum: int = 1) -> tuple[str, str]:
    client = await ClientRepository(db).create_client("acc-it", "Integration Ltd")
    dossier_repo = DossierRepository(db)
    create = CreateDossierUseCase(
        dossier_repo,
        ClientRepository(db),
        RecomputeDossierStateUseCase(dossier_repo, DocumentRequestRepository(db)),
    )
    dossier = await create.execute(
        client.id,
        DossierDraft(
            name="Integration dossier",
            requests=[
                DocumentRequestTemplate(
                    title="Statements", document_type="bank_statement", quantite_max=maximum
                )
            ],
        ),
        "acc-it",
    )
    return dossier.id, dossier.requests[0].id


async def test_create_dossier_persists_requests(db_session: AsyncSession) -> None:
    dossier_id, request_id = await _dossier_with_one_request(db_session, maximum=3)

    dossier = await DossierRepository(db_session).get_by_id(dossier_id)

    assert dossier is not None
    assert dossier.status == DossierStatus.PENDING
    assert dossier.documents_requis == 1
    assert dossier.requests[0].id == request_id
    assert dossier.requests[0].status == RequestStatus.AWAITING
    assert await DossierRepository(db_session).get_status(dossier_id) == DossierStatus.PENDING


async def test_ledger_sequence_and_compare_and_set(db_session: AsyncSession) -> None:
    _, request_id = await _dossier_with_one_request(db_session, maximum=3)
    uploads = DocumentUploadRepository(db_session)
    requests = DocumentRequestRepository(db_session)

    async with requests.locked(request_id) as snapshot:
        assert snapshot is not None
        first = await uploads.append(request_id, _file("a.pdf"), utc_now())
        second = await uploads.append(request_id, _file("b.pdf"), utc_now())

    assert (first.sequence, second.sequence) == (1, 2)
    decidable = frozenset({UploadStatus.PENDING, UploadStatus.IN_REVIEW})
    assert await uploads.compare_and_set_status(first.id, decidable, UploadStatus.REJECTED)
    assert not await uploads.compare_and_set_status(first.id, decidable, UploadStatus.APPROVED)
    assert await uploads.mark_replaced(first.id, second.id)
    assert not await uploads.mark_replaced(first.id, second.id)

    refreshed = await requests.get_by_id(request_id)
    assert refreshed is not None
    assert [u.status for u in refreshed.uploads] == [UploadStatus.REPLACED, UploadStatus.PENDING]
    assert refreshed.uploads[0].replaced_by_id == second.id


async def test_full_workflow_to_validation(db_session: AsyncSession) -> None:
    dossier_id, request_id = await _dossier_with_one_request(db_session)
    dossier_repo = DossierRepository(db_session)
    request_repo = DocumentRequestRepository(db_session)
    upload_repo = DocumentUploadRepository(db_session)
    recompute = RecomputeDossierStateUseCase(dossier_repo, request_repo)

    submitted = await SubmitUploadsUseCase(
        request_repo, upload_repo, dossier_repo, recompute
    ).execute(request_id, [_file("statement.pdf")])
    refused = await SubmitUploadsUseCase(
        request_repo, upload_repo, dossier_repo, recompute
    ).execute(request_id, [_file("extra.pdf")])
    await DecideUploadUseCase(upload_repo, request_repo, dossier_repo, recompute).execute(
        submitted.accepted[0].id, UploadDecision.APPROVE
    )
    validated = await FinalizeDossierUseCase(dossier_repo, recompute).execute(dossier_id)

    assert refused.rejected is not None
    assert refused.rejected.allowed == 0
    assert validated.status == DossierStatus.VALIDATED
    assert validated.pourcentage == 100
    assert validated.requests[0].status == RequestStatus.APPROVED
    assert not await dossier_repo.mark_validated(dossier_id, utc_now(), None)


async def test_templates_visibility(db_session: AsyncSession) -> None:
    repo = DossierTemplateRepository(db_session)
    items = [DocumentRequestTemplate(title="Payslips", document_type="payslip")]
    shared = await repo.create_template("Shared payroll", items)
    own = await repo.create_template("Own payroll", items, accountant_id="acc-it")
    await repo.create_template("Other payroll", items, accountant_id="acc-other")

    visible = {t.id for t in await repo.list_templates("acc-it")}

    assert {shared.id, own.id} <= visible
    assert all(t.accountant_id in (None, "acc-it") for t in await repo.list_templates("acc-it"))
    fetched = await repo.get_by_id(own.id)
    assert fetched is not None
    assert [i.title for i in fetched.items] == ["Payslips"]
