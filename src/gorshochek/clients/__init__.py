"""Network clients for remote page sources."""

from .exceptions import (
    APIError,
    ClientError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
)
from .source_client import SourceClient

__all__ = [
    "SourceClient",
    "ClientError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "NotFoundError",
]
