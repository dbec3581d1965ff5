"""DTOs for quota evaluation and upload submission."""

from dataclasses import dataclass

from dossierhub.application.dtos.dossier import DocumentUploadResult


@dataclass(frozen=True)
class QuotaDecision:
    """How many new uploads a request accepts and which rejected uploads they replace."""

    request_id: str
    requested: int
    allowed: int
    replacing: tuple[str, ...] = ()  # rejected upload ids, oldest first
    reason: str | None = None  # set when requested > allowed

    @property
    def exceeded(self) -> bool:
        return self.requested > self.allowed


@dataclass(frozen=True)
class QuotaHint:
    """Read-only quota summary shown before a client submits files."""

    request_id: str
    valid_count: int
    refused_count: int
    available_slots: int
    max_acceptable: int
    level: str  # ok | near_limit | at_limit | replacements_available
    message: str | None


@dataclass(frozen=True)
class QuotaRejection:
    """Typed quota refusal reported in-band by submit_uploads."""

    request_id: str
    allowed: int
    requested: int


@dataclass(frozen=True)
class SubmitUploadsResult:
    """Result of submitting files to a request: all accepted, or none with a rejection."""

    request_id: str
    accepted: list[DocumentUploadResult]
    rejected: QuotaRejection | None = None
