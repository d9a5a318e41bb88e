"""Core components."""

from .config import SpaceConfig
from .enums import AuthScheme, HttpMethod
from .exceptions import (
    ApiError,
    AuthError,
    BatchInterruptedError,
    InvalidSelectionError,
    MultipleMultiValueParametersError,
    NotFoundError,
    PaginationLimitError,
    ReservedParameterError,
    RetriesExhaustedError,
    SpaceError,
    StructureDiscoveryError,
    TransientServerError,
    TransportError,
)

__all__ = [
    "SpaceConfig",
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
