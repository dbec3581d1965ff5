"""Tests for SubmitUploadsUseCase: all-or-nothing quota, replacements and guards."""

import asyncio
from datetime import timedelta

import pytest

from dossierhub.application.use_cases.dossiers import RecomputeDossierStateUseCase
from dossierhub.application.use_cases.uploads import SubmitUploadsUseCase
from dossierhub.domain.enums import (
    DossierStatus,
    NotificationKind,
    RequestStatus,
    UploadStatus,
)
from dossierhub.domain.exceptions import (
    AlreadyFinalizedException,
    InvalidStateTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from dossierhub.domain.value_objects import FileRef
from dossierhub.shared.utils.datetime import utc_now
from tests.fakes import (
    FailingDispatcher,
    FakeDocumentRequestRepository,
    FakeDocumentUploadRepository,
    FakeDossierRepository,
    InMemoryStore,
    RecordingDispatcher,
)


def _files(*names: str, size: int = 2048) -> list[FileRef]:
    return [
        FileRef(id=f"file-{name}", name=name, size=size, mime_type="application/octet-stream")
        for name in names
    ]


def _valid_count(store: InMemoryStore, request_id: str) -> int:
    return sum(
        1
        for u in store.uploads.values()
        if u.request_id == request_id
        and u.status in (UploadStatus.PENDING, UploadStatus.IN_REVIEW, UploadStatus.APPROVED)
    )


async def test_two_files_are_received(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
    notifier: RecordingDispatcher,
) -> None:
    dossier_id = store.add_dossier()
    request_id = store.add_request(dossier_id, quantite_min=1, quantite_max=3)

    result = await submit_uc.execute(request_id, _files("a.pdf", "b.pdf"), submitted_by="c1")

    assert result.rejected is None
    assert [u.sequence for u in result.accepted] == [1, 2]
    assert all(u.status == UploadStatus.PENDING for u in result.accepted)
    assert result.accepted[0].submitted_by == "c1"
    assert store.requests[request_id].status == RequestStatus.RECEIVED
    dossier = store.dossiers[dossier_id]
    assert dossier.status == DossierStatus.IN_PROGRESS
    assert dossier.documents_upload == 1
    assert notifier.kinds() == ["UPLOAD_SUBMITTED", "UPLOAD_SUBMITTED"]


async def test_over_quota_records_nothing(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
    notifier: RecordingDispatcher,
) -> None:
    dossier_id = store.add_dossier()
    request_id = store.add_request(dossier_id, quantite_min=1, quantite_max=2)
    store.add_upload(request_id)

    result = await submit_uc.execute(request_id, _files("a.pdf", "b.pdf"))

    assert result.accepted == []
    assert result.rejected is not None
    assert result.rejected.allowed == 1
    assert result.rejected.requested == 2
    assert _valid_count(store, request_id) == 1
    assert notifier.sent == []


async def test_replacement_supersedes_rejected_upload(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
) -> None:
    dossier_id = store.add_dossier()
    request_id = store.add_request(dossier_id, quantite_min=1, quantite_max=1)
    rejected_id = store.add_upload(request_id, UploadStatus.REJECTED)

    result = await submit_uc.execute(request_id, _files("fixed.pdf"))

    assert len(result.accepted) == 1
    new_id = result.accepted[0].id
    assert store.uploads[rejected_id].status == UploadStatus.REPLACED
    assert store.uploads[rejected_id].replaced_by_id == new_id
    assert store.requests[request_id].status == RequestStatus.RECEIVED


async def test_second_submission_after_replacement_is_refused(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
) -> None:
    """min=max=1 with one rejection: concurrent submissions, one wins with allowed=0 for the other."""
    dossier_id = store.add_dossier()
    request_id = store.add_request(dossier_id, quantite_min=1, quantite_max=1)
    store.add_upload(request_id, UploadStatus.REJECTED)

    first, second = await asyncio.gather(
        submit_uc.execute(request_id, _files("one.pdf")),
        submit_uc.execute(request_id, _files("two.pdf")),
    )

    outcomes = sorted([first, second], key=lambda r: len(r.accepted))
    assert outcomes[0].accepted == []
    assert outcomes[0].rejected is not None
    assert outcomes[0].rejected.allowed == 0
    assert len(outcomes[1].accepted) == 1
    assert _valid_count(store, request_id) == 1


async def test_concurrent_submissions_never_exceed_maximum(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
) -> None:
    dossier_id = store.add_dossier()
    request_id = store.add_request(dossier_id, quantite_min=1, quantite_max=3)

    results = await asyncio.gather(
        *(submit_uc.execute(request_id, _files(f"doc-{i}.pdf")) for i in range(6))
    )

    assert sum(len(r.accepted) for r in results) == 3
    assert sum(1 for r in results if r.rejected is not None) == 3
    assert _valid_count(store, request_id) == 3


async def test_expired_request_refuses_uploads(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
) -> None:
    dossier_id = store.add_dossier()
    request_id = store.add_request(dossier_id, due_date=utc_now() - timedelta(days=2))

    with pytest.raises(InvalidStateTransitionException):
        await submit_uc.execute(request_id, _files("late.pdf"))
    assert store.uploads == {}


async def test_validated_dossier_refuses_uploads(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
) -> None:
    dossier_id = store.add_dossier(status=DossierStatus.VALIDATED)
    request_id = store.add_request(dossier_id)

    with pytest.raises(AlreadyFinalizedException):
        await submit_uc.execute(request_id, _files("a.pdf"))


async def test_refused_format_rejects_whole_submission(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
) -> None:
    dossier_id = store.add_dossier()
    request_id = store.add_request(dossier_id, quantite_max=3, accepted_formats="PDF,JPG")

    with pytest.raises(ValidationException, match="not an accepted format"):
        await submit_uc.execute(request_id, _files("a.pdf", "b.docx"))
    assert store.uploads == {}


async def test_oversized_file_is_rejected(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
) -> None:
    dossier_id = store.add_dossier()
    request_id = store.add_request(dossier_id, max_size_mb=1)

    with pytest.raises(ValidationException, match="maximum size"):
        await submit_uc.execute(request_id, _files("big.pdf", size=2 * 1024 * 1024))


async def test_empty_submission_is_invalid(submit_uc: SubmitUploadsUseCase) -> None:
    with pytest.raises(ValidationException):
        await submit_uc.execute("r-any", [])


async def test_unknown_request(submit_uc: SubmitUploadsUseCase) -> None:
    with pytest.raises(ResourceNotFoundException):
        await submit_uc.execute("missing", _files("a.pdf"))


async def test_notification_failure_does_not_fail_submission(store: InMemoryStore) -> None:
    dossier_repo = FakeDossierRepository(store)
    request_repo = FakeDocumentRequestRepository(store)
    submit_uc = SubmitUploadsUseCase(
        request_repo,
        FakeDocumentUploadRepository(store),
        dossier_repo,
        RecomputeDossierStateUseCase(dossier_repo, request_repo),
        FailingDispatcher(),
    )
    dossier_id = store.add_dossier()
    request_id = store.add_request(dossier_id)

    result = await submit_uc.execute(request_id, _files("a.pdf"))

    assert len(result.accepted) == 1


async def test_submission_notifications_carry_context(
    store: InMemoryStore,
    submit_uc: SubmitUploadsUseCase,
    notifier: RecordingDispatcher,
) -> None:
    dossier_id = store.add_dossier(client_id="c1")
    request_id = store.add_request(dossier_id)

    result = await submit_uc.execute(request_id, _files("a.pdf"))

    (sent,) = notifier.sent
    assert sent.kind == NotificationKind.UPLOAD_SUBMITTED
    assert sent.dossier_id == dossier_id
    assert sent.client_id == "c1"
    assert sent.upload_id == result.accepted[0].id
    assert sent.details["file_name"] == "a.pdf"
