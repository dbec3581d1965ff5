"""Domain layer: enums, exceptions, entities and value objects.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from dossierhub.domain.enums import (
    ActorRole,
    DossierStatus,
    NotificationKind,
    RequestStatus,
    UploadDecision,
    UploadStatus,
)
from dossierhub.domain.exceptions import (
    AlreadyFinalizedException,
    AuthenticationException,
    AuthorizationException,
    DossierHubException,
    InfrastructureException,
    InvalidStateTransitionException,
    QuotaExceededException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)
from dossierhub.domain.value_objects import AcceptedFormats, FileRef, QuantityRange

__all__ = [
    # Enums
    "ActorRole",
    "DossierStatus",
    "NotificationKind",
    "RequestStatus",
    "UploadDecision",
    "UploadStatus",
    # Exceptions
    "AlreadyFinalizedException",
    "AuthenticationException",
    "AuthorizationException",
    "DossierHubException",
    "InfrastructureException",
    "InvalidStateTransitionException",
    "QuotaExceededException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
    # Value objects
    "AcceptedFormats",
    "FileRef",
    "QuantityRange",
]
