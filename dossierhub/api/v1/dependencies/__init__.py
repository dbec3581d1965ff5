"""API v1 dependencies (composition root). Routes import from here only."""

from dossierhub.api.v1.dependencies.access import (
    authorize_dossier,
    authorize_request,
    authorize_upload,
)
from dossierhub.api.v1.dependencies.dossier import (
    get_batch_create_use_case,
    get_create_dossier_use_case,
    get_decide_upload_use_case,
    get_dossier_query_service,
    get_duplicate_dossier_use_case,
    get_file_store,
    get_finalize_dossier_use_case,
    get_notification_dispatcher,
    get_quota_hint_use_case,
    get_request_repo,
    get_start_review_use_case,
    get_submit_uploads_use_case,
    get_template_service,
    get_upload_repo,
)
from dossierhub.api.v1.dependencies.identity import (
    get_current_accountant,
    get_current_actor,
    get_identity_service,
)

__all__ = [
    "authorize_dossier",
    "authorize_request",
    "authorize_upload",
    "get_batch_create_use_case",
    "get_create_dossier_use_case",
    "get_current_accountant",
    "get_current_actor",
    "get_decide_upload_use_case",
    "get_dossier_query_service",
    "get_duplicate_dossier_use_case",
    "get_file_store",
    "get_finalize_dossier_use_case",
    "get_identity_service",
    "get_notification_dispatcher",
    "get_quota_hint_use_case",
    "get_request_repo",
    "get_start_review_use_case",
    "get_submit_uploads_use_case",
    "get_template_service",
    "get_upload_repo",
]
