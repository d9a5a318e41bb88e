"""Public request builders and the service facade."""

from .request import ApiRequest, BatchApiRequest, ObjectApiRequest
from .service import SpaceService

__all__ = [
    "ApiRequest",
    "ObjectApiRequest",
    "BatchApiRequest",
    "SpaceService",
]
