"""REST runtime abstractions."""

from .auth import BearerToken, ServiceCredentials, TokenManager
from .executor import RequestExecutor, RetryPolicy, is_transient_status
from .query import stringify, to_json_body, to_query_string
from .transport import AiohttpTransport, RawResponse, Transport

__all__ = [
    "AiohttpTransport",
    "RawResponse",
    "Transport",
    "BearerToken",
    "ServiceCredentials",
    "TokenManager",
    "RequestExecutor",
    "RetryPolicy",
    "is_transient_status",
    "stringify",
    "to_json_body",
    "to_query_string",
]
