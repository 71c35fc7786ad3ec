# Base exception class
from .base import TeamRegistryError

# Domain-specific exceptions
from .domain_exceptions import (
    AmbiguousOwnerError,
    ConflictError,
    ConnectionError,
    CredentialUnavailableError,
    ItemNotFoundError,
    NotFoundError,
    RecordNotFoundError,
    RetryableError,
    TransactionFailedError,
    ValidationError,
)

__all__ = [
    # Base exception
    "TeamRegistryError",

    # Domain exceptions (alphabetically ordered)
    "AmbiguousOwnerError",
    "ConflictError",
    "ConnectionError",
    "CredentialUnavailableError",
    "ItemNotFoundError",
    "NotFoundError",
    "RecordNotFoundError",
    "RetryableError",
    "TransactionFailedError",
    "ValidationError",
]
