"""spaceapi.client - Space HTTP API client with server-side response shaping."""

from .api import ApiRequest, BatchApiRequest, ObjectApiRequest, SpaceService
from .core import (
    ApiError,
    AuthError,
    AuthScheme,
    BatchInterruptedError,
    HttpMethod,
    InvalidSelectionError,
    MultipleMultiValueParametersError,
    NotFoundError,
    PaginationLimitError,
    ReservedParameterError,
    RetriesExhaustedError,
    SpaceConfig,
    SpaceError,
    StructureDiscoveryError,
    TransientServerError,
    TransportError,
)
from .fields import (
    PRIMITIVE,
    DatatypeStructure,
    FieldSpecs,
    LiteralObjectStructure,
    ReferenceStructure,
    discover,
)
from .models import BatchResponse, SpaceObject
from .runtime.chunking import ChunkPolicy, PagePolicy
from .runtime.rest import (
    AiohttpTransport,
    RawResponse,
    RequestExecutor,
    RetryPolicy,
    ServiceCredentials,
    Transport,
)

__version__ = "0.1.0"

__all__ = [
    "SpaceService",
    "SpaceConfig",
    "ApiRequest",
    "ObjectApiRequest",
    "BatchApiRequest",
    "SpaceObject",
    "BatchResponse",
    "DatatypeStructure",
    "PRIMITIVE",
    "LiteralObjectStructure",
    "ReferenceStructure",
    "FieldSpecs",
    "discover",
    "RequestExecutor",
    "RetryPolicy",
    "ChunkPolicy",
    "PagePolicy",
    "ServiceCredentials",
    "Transport",
    "AiohttpTransport",
    "RawResponse",
    "AuthScheme",
    "HttpMethod",
    "SpaceError",
    "InvalidSelectionError",
    "StructureDiscoveryError",
    "ReservedParameterError",
    "MultipleMultiValueParametersError",
    "TransportError",
    "ApiError",
    "NotFoundError",
    "TransientServerError",
    "AuthError",
    "RetriesExhaustedError",
    "PaginationLimitError",
    "BatchInterruptedError",
]
