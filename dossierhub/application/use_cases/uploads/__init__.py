"""Upload ledger and validation processor use cases."""

from dossierhub.application.use_cases.uploads.decide_upload import (
    DecideUploadUseCase,
    StartReviewUseCase,
)
from dossierhub.application.use_cases.uploads.submit_uploads import (
    GetQuotaHintUseCase,
    SubmitUploadsUseCase,
)

__all__ = [
    "DecideUploadUseCase",
    "GetQuotaHintUseCase",
    "StartReviewUseCase",
    "SubmitUploadsUseCase",
]
