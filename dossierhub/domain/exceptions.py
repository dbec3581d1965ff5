"""Domain exceptions for dossier collection.

Business-rule failures (quota, state transitions, missing resources,
finalized dossiers) are distinct from infrastructure failures, which are
fatal and surfaced upward without retry. The presentation layer maps each
error_code to an HTTP response in exception handlers.
"""

from typing import Any


class DossierHubException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the typed error body used at the HTTP boundary."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DossierHubException):
    """Raised when input validation fails (e.g. quantities, file format or size)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(DossierHubException):
    """Raised when the caller cannot be identified (missing or invalid token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(DossierHubException):
    """Raised when the caller lacks the role or ownership required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'dossier', 'upload').
            action: Optional action that was attempted (e.g. 'finalize').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(DossierHubException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'dossier', 'client').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class QuotaExceededException(DossierHubException):
    """Raised when a submission asks for more uploads than the request can accept."""

    def __init__(self, request_id: str, allowed: int, requested: int) -> None:
        """Initialize with request and counts.

        Args:
            request_id: Document request that refused the submission.
            allowed: Number of uploads the request could accept right now.
            requested: Number of uploads that were submitted.
        """
        self.request_id = request_id
        self.allowed = allowed
        self.requested = requested
        super().__init__(
            f"Request {request_id} accepts at most {allowed} upload(s); {requested} submitted",
            "QUOTA_EXCEEDED",
            {"request_id": request_id, "allowed": allowed, "requested": requested},
        )


class InvalidStateTransitionException(DossierHubException):
    """Raised when an entity cannot move from its current state to the attempted one."""

    def __init__(self, entity: str, from_state: str, attempted_to: str) -> None:
        """Initialize with entity kind and both states.

        Args:
            entity: Entity kind (e.g. 'document_upload', 'dossier').
            from_state: Current state value.
            attempted_to: State (or action) that was attempted.
        """
        super().__init__(
            f"Cannot move {entity} from {from_state} to {attempted_to}",
            "INVALID_STATE_TRANSITION",
            {"entity": entity, "from": from_state, "attempted_to": attempted_to},
        )


class AlreadyFinalizedException(DossierHubException):
    """Raised when a VALIDATED dossier would be mutated or finalized again."""

    def __init__(self, dossier_id: str) -> None:
        super().__init__(
            f"Dossier {dossier_id} is already validated",
            "ALREADY_FINALIZED",
            {"dossier_id": dossier_id},
        )


class InfrastructureException(DossierHubException):
    """Raised when persistence or storage is unavailable. Fatal; never retried in the core."""

    def __init__(self, message: str = "Infrastructure unavailable") -> None:
        super().__init__(message, "SERVICE_UNAVAILABLE")


class SqlNotConfiguredException(InfrastructureException):
    """Raised when an operation requires the SQL database but it is not configured."""

    def __init__(self) -> None:
        super().__init__("This operation requires a SQL database that is not configured.")
