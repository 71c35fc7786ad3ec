"""
Team Registry

A registry of the DNS records and health checks each team may edit, kept
in a DynamoDB table and accessed through boto3 and Pydantic with separate
read and write APIs. Store credentials are read from AWS Secrets Manager.
"""

from .config import RegistryConfig
from .exceptions import (
    AmbiguousOwnerError,
    ConflictError,
    ConnectionError,
    CredentialUnavailableError,
    ItemNotFoundError,
    NotFoundError,
    RecordNotFoundError,
    RetryableError,
    TeamRegistryError,
    TransactionFailedError,
    ValidationError,
)
from .models import (
    StoreCredentials,
    TeamAssets,
)
from .core import (
    SecretsGateway,
    TableGateway,
    create_table_gateway,
    load_store_credentials,
)
from .handlers.team_assets import (
    TeamAssetsReadApi,
    TeamAssetsWriteApi,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "RegistryConfig",

    # Exceptions
    "AmbiguousOwnerError",
    "ConflictError",
    "ConnectionError",
    "CredentialUnavailableError",
    "ItemNotFoundError",
    "NotFoundError",
    "RecordNotFoundError",
    "RetryableError",
    "TeamRegistryError",
    "TransactionFailedError",
    "ValidationError",

    # Models
    "StoreCredentials",
    "TeamAssets",

    # Gateways
    "SecretsGateway",
    "TableGateway",
    "create_table_gateway",
    "load_store_credentials",

    # CQRS APIs
    "TeamAssetsReadApi",
    "TeamAssetsWriteApi",
]
