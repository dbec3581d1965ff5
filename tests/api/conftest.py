"""API fixtures: the app wired to in-memory repositories through dependency overrides."""

import pytest

from dossierhub.api.v1.dependencies import (
    get_batch_create_use_case,
    get_create_dossier_use_case,
    get_decide_upload_use_case,
    get_dossier_query_service,
    get_duplicate_dossier_use_case,
    get_file_store,
    get_finalize_dossier_use_case,
    get_quota_hint_use_case,
    get_request_repo,
    get_start_review_use_case,
    get_submit_uploads_use_case,
    get_template_service,
    get_upload_repo,
)
from dossierhub.application.use_cases.dossiers import (
    CreateDossierUseCase,
    CreateDossiersBatchUseCase,
    DossierQueryService,
    DossierTemplateService,
    DuplicateDossierUseCase,
    FinalizeDossierUseCase,
)
from dossierhub.application.use_cases.uploads import (
    DecideUploadUseCase,
    GetQuotaHintUseCase,
    StartReviewUseCase,
    SubmitUploadsUseCase,
)
from dossierhub.main import app
from tests.fakes import (
    FakeDocumentRequestRepository,
    FakeDocumentUploadRepository,
    FakeDossierTemplateRepository,
    InMemoryStore,
    MemoryFileStore,
    bearer,
)


@pytest.fixture
def accountant_headers() -> dict[str, str]:
    return bearer("acc1", "accountant")


@pytest.fixture
def client_headers() -> dict[str, str]:
    return bearer("user-c1", "client", client_id="c1")


@pytest.fixture
def file_store() -> MemoryFileStore:
    return MemoryFileStore()


@pytest.fixture
def wired(
    store: InMemoryStore,
    file_store: MemoryFileStore,
    query_svc: DossierQueryService,
    submit_uc: SubmitUploadsUseCase,
    decide_uc: DecideUploadUseCase,
    start_review_uc: StartReviewUseCase,
    finalize_uc: FinalizeDossierUseCase,
    create_uc: CreateDossierUseCase,
    batch_uc: CreateDossiersBatchUseCase,
    duplicate_uc: DuplicateDossierUseCase,
) -> InMemoryStore:
    """Override every database-backed dependency with the in-memory fakes."""
    overrides = {
        get_dossier_query_service: lambda: query_svc,
        get_request_repo: lambda: FakeDocumentRequestRepository(store),
        get_upload_repo: lambda: FakeDocumentUploadRepository(store),
        get_quota_hint_use_case: lambda: GetQuotaHintUseCase(
            FakeDocumentRequestRepository(store)
        ),
        get_file_store: lambda: file_store,
        get_submit_uploads_use_case: lambda: submit_uc,
        get_decide_upload_use_case: lambda: decide_uc,
        get_start_review_use_case: lambda: start_review_uc,
        get_finalize_dossier_use_case: lambda: finalize_uc,
        get_create_dossier_use_case: lambda: create_uc,
        get_batch_create_use_case: lambda: batch_uc,
        get_duplicate_dossier_use_case: lambda: duplicate_uc,
        get_template_service: lambda: DossierTemplateService(
            FakeDossierTemplateRepository(store)
        ),
    }
    app.dependency_overrides.update(overrides)
    yield store
    app.dependency_overrides.clear()
