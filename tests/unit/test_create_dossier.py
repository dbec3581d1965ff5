"""Tests for dossier creation: single, batch (best effort) and duplication."""

import pytest

from dossierhub.application.dtos.dossier import DocumentRequestTemplate, DossierDraft
from dossierhub.application.use_cases.dossiers import (
    CreateDossierUseCase,
    CreateDossiersBatchUseCase,
    DuplicateDossierUseCase,
    draft_from_dossier,
    validate_draft,
)
from dossierhub.domain.enums import DossierStatus, RequestStatus, UploadStatus
from dossierhub.domain.exceptions import ResourceNotFoundException, ValidationException
from tests.fakes import InMemoryStore


def _draft(name: str = "2025 annual accounts", **item_overrides) -> DossierDraft:
    items = [
        DocumentRequestTemplate(
            **{
                "title": "Bank statements",
                "document_type": "bank_statement",
                "quantite_min": 1,
                "quantite_max": 12,
                **item_overrides,
            }
        ),
        DocumentRequestTemplate(
            title="Payroll summary", document_type="payroll", obligatoire=False
        ),
    ]
    return DossierDraft(name=name, period="2025", requests=items)


async def test_create_dossier_starts_pending(
    store: InMemoryStore,
    create_uc: CreateDossierUseCase,
) -> None:
    dossier = await create_uc.execute("c1", _draft(), "acc1")

    assert dossier.status == DossierStatus.PENDING
    assert dossier.documents_requis == 2
    assert dossier.documents_upload == 0
    assert dossier.pourcentage == 0
    assert [r.title for r in dossier.requests] == ["Bank statements", "Payroll summary"]
    assert all(r.status == RequestStatus.AWAITING for r in dossier.requests)
    assert dossier.accountant_id == "acc1"


async def test_create_for_unknown_client(create_uc: CreateDossierUseCase) -> None:
    with pytest.raises(ResourceNotFoundException):
        await create_uc.execute("999", _draft(), "acc1")


async def test_create_for_another_accountants_client(
    store: InMemoryStore,
    create_uc: CreateDossierUseCase,
) -> None:
    store.add_client("c9", accountant_id="acc2")

    with pytest.raises(ResourceNotFoundException):
        await create_uc.execute("c9", _draft(), "acc1")
    assert store.dossiers == {}


async def test_invalid_quantities_are_rejected(create_uc: CreateDossierUseCase) -> None:
    with pytest.raises(ValidationException):
        await create_uc.execute("c1", _draft(quantite_min=3, quantite_max=2), "acc1")


def test_validate_draft_requires_name_and_requests() -> None:
    with pytest.raises(ValidationException, match="name"):
        validate_draft(DossierDraft(name="  ", requests=_draft().requests))
    with pytest.raises(ValidationException, match="at least one"):
        validate_draft(DossierDraft(name="Q1 VAT", requests=[]))
    with pytest.raises(ValidationException, match="positive"):
        validate_draft(_draft(max_size_mb=0))


async def test_batch_isolates_missing_client(
    store: InMemoryStore,
    batch_uc: CreateDossiersBatchUseCase,
) -> None:
    store.add_client("1")
    store.add_client("2")

    result = await batch_uc.execute(["1", "2", "999"], _draft(), "acc1")

    assert [d.client_id for d in result.created] == ["1", "2"]
    assert len(result.errors) == 1
    assert result.errors[0].client_id == "999"
    assert result.errors[0].reason == "not found"


async def test_batch_creates_duplicated_client_once(
    store: InMemoryStore,
    batch_uc: CreateDossiersBatchUseCase,
) -> None:
    result = await batch_uc.execute(["c1", "c1"], _draft(), "acc1")

    assert len(result.created) == 1
    assert len(store.dossiers) == 1


async def test_batch_with_invalid_draft_creates_nothing(
    store: InMemoryStore,
    batch_uc: CreateDossiersBatchUseCase,
) -> None:
    with pytest.raises(ValidationException):
        await batch_uc.execute(["c1"], DossierDraft(name="", requests=[]), "acc1")
    with pytest.raises(ValidationException):
        await batch_uc.execute([], _draft(), "acc1")
    assert store.dossiers == {}


async def test_duplicate_copies_requests_without_uploads(
    store: InMemoryStore,
    create_uc: CreateDossierUseCase,
    duplicate_uc: DuplicateDossierUseCase,
) -> None:
    store.add_client("c2")
    source = await create_uc.execute("c1", _draft(), "acc1")
    store.add_upload(source.requests[0].id, UploadStatus.APPROVED)

    result = await duplicate_uc.execute(source.id, ["c2", "404"], "acc1", new_name="Copy")

    (copy,) = result.created
    assert copy.client_id == "c2"
    assert copy.name == "Copy"
    assert [r.title for r in copy.requests] == [r.title for r in source.requests]
    assert all(r.uploads == [] for r in copy.requests)
    assert copy.status == DossierStatus.PENDING
    assert result.errors[0].client_id == "404"


async def test_duplicate_unknown_source(duplicate_uc: DuplicateDossierUseCase) -> None:
    with pytest.raises(ResourceNotFoundException):
        await duplicate_uc.execute("missing", ["c1"], "acc1")


def test_draft_from_dossier_keeps_request_settings(store: InMemoryStore) -> None:
    dossier_id = store.add_dossier(name="Source")
    store.add_request(dossier_id, quantite_min=2, quantite_max=4, accepted_formats="PDF")

    draft = draft_from_dossier(store.dossier_snapshot(dossier_id))

    assert draft.name == "Source"
    (item,) = draft.requests
    assert (item.quantite_min, item.quantite_max) == (2, 4)
    assert item.accepted_formats == "PDF"
