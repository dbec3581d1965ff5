"""Dossier manager: single, batch and duplicate creation."""

from __future__ import annotations

from dossierhub.application.dtos.dossier import (
    BatchCreateError,
    BatchCreateResult,
    DocumentRequestTemplate,
    DossierDraft,
    DossierResult,
)
from dossierhub.application.interfaces.repositories import (
    IClientRepository,
    IDossierRepository,
)
from dossierhub.application.use_cases.dossiers.recompute_dossier_state import (
    RecomputeDossierStateUseCase,
)
from dossierhub.domain.exceptions import (
    DossierHubException,
    ResourceNotFoundException,
    ValidationException,
)
from dossierhub.domain.value_objects import QuantityRange
from dossierhub.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def validate_draft(draft: DossierDraft) -> None:
    """Check name, presence of requests and 1 <= quantite_min <= quantite_max on each.

    Raises:
        ValidationException: On the first invalid field.
    """
    if not draft.name or not draft.name.strip():
        raise ValidationException("Dossier name is required", field="name")
    if not draft.requests:
        raise ValidationException(
            "A dossier needs at least one document request", field="document_requests"
        )
    for item in draft.requests:
        if not item.title or not item.title.strip():
            raise ValidationException("Document request title is required", field="title")
        QuantityRange(item.quantite_min, item.quantite_max)
        if item.max_size_mb is not None and item.max_size_mb <= 0:
            raise ValidationException("Maximum size must be positive", field="max_size_mb")


class CreateDossierUseCase:
    """Creates one dossier for a client from a draft (request blueprints)."""

    def __init__(
        self,
        dossier_repo: IDossierRepository,
        client_repo: IClientRepository,
        recompute: RecomputeDossierStateUseCase,
    ) -> None:
        self._dossier_repo = dossier_repo
        self._client_repo = client_repo
        self._recompute = recompute

    async def execute(
        self,
        client_id: str,
        draft: DossierDraft,
        accountant_id: str,
        *,
        validated: bool = False,
    ) -> DossierResult:
        """Create the dossier with its requests and initial derived counters.

        Args:
            client_id: Owning client.
            draft: Name, period, due date and request blueprints.
            accountant_id: Owning accountant.
            validated: Skip draft validation (caller already validated it).

        Raises:
            ValidationException: If the draft is invalid.
            ResourceNotFoundException: If the client does not exist or belongs to
                another accountant.
        """
        if not validated:
            validate_draft(draft)
        client = await self._client_repo.get_by_id(client_id)
        if not client or client.accountant_id != accountant_id:
            raise ResourceNotFoundException("client", client_id)
        dossier = await self._dossier_repo.create_dossier(
            client_id=client_id,
            accountant_id=accountant_id,
            draft=draft,
        )
        outcome = await self._recompute.execute(dossier.id)
        logger.info(
            "Created dossier %s for client %s with %d request(s)",
            dossier.id,
            client_id,
            len(draft.requests),
        )
        return outcome.dossier


class CreateDossiersBatchUseCase:
    """Best-effort creation of one dossier per client; failures are isolated per client."""

    def __init__(self, create_dossier: CreateDossierUseCase) -> None:
        self._create_dossier = create_dossier

    async def execute(
        self,
        client_ids: list[str],
        draft: DossierDraft,
        accountant_id: str,
    ) -> BatchCreateResult:
        """Create the draft for every client; report successes and per-client errors.

        An invalid draft fails the whole call (it is invalid for every client).
        Duplicate client ids are created once.

        Raises:
            ValidationException: If the draft or client list is invalid.
        """
        if not client_ids:
            raise ValidationException("At least one client is required", field="client_ids")
        validate_draft(draft)
        created: list[DossierResult] = []
        errors: list[BatchCreateError] = []
        for client_id in dict.fromkeys(client_ids):
            try:
                dossier = await self._create_dossier.execute(
                    client_id, draft, accountant_id, validated=True
                )
            except ResourceNotFoundException:
                errors.append(BatchCreateError(client_id=client_id, reason="not found"))
            except DossierHubException as exc:
                errors.append(BatchCreateError(client_id=client_id, reason=exc.message))
            else:
                created.append(dossier)
        logger.info(
            "Batch dossier creation: %d created, %d failed",
            len(created),
            len(errors),
        )
        return BatchCreateResult(created=created, errors=errors)


def draft_from_dossier(dossier: DossierResult, name: str | None = None) -> DossierDraft:
    """Build a draft that recreates the dossier's requests (without uploads)."""
    return DossierDraft(
        name=name or dossier.name,
        description=dossier.description,
        period=dossier.period,
        due_date=dossier.due_date,
        requests=[
            DocumentRequestTemplate(
                title=r.title,
                description=r.description,
                document_type=r.document_type,
                obligatoire=r.obligatoire,
                quantite_min=r.quantite_min,
                quantite_max=r.quantite_max,
                accepted_formats=r.accepted_formats,
                max_size_mb=r.max_size_mb,
                instructions=r.instructions,
                due_date=r.due_date,
            )
            for r in dossier.requests
        ],
    )


class DuplicateDossierUseCase:
    """Copies a dossier's requests to new dossiers for other clients."""

    def __init__(
        self,
        dossier_repo: IDossierRepository,
        batch: CreateDossiersBatchUseCase,
    ) -> None:
        self._dossier_repo = dossier_repo
        self._batch = batch

    async def execute(
        self,
        dossier_id: str,
        target_client_ids: list[str],
        accountant_id: str,
        new_name: str | None = None,
    ) -> BatchCreateResult:
        source = await self._dossier_repo.get_by_id(dossier_id)
        if not source:
            raise ResourceNotFoundException("dossier", dossier_id)
        return await self._batch.execute(
            target_client_ids, draft_from_dossier(source, new_name), accountant_id
        )
