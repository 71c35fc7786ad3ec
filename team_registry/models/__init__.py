# Base mixins
from .base import DynamoDBMixin

# Core domain models
from .domain_models import (
    StoreCredentials,
    TableMeta,
    TeamAssets,
)

__all__ = [
    "DynamoDBMixin",
    "StoreCredentials",
    "TableMeta",
    "TeamAssets",
]
