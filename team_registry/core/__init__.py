"""
Core infrastructure components for the registry.

This module contains the foundational components used by the handlers:
- TableGateway: Thin wrapper over boto3 DynamoDB operations
- SecretsGateway: Reads credentials from AWS Secrets Manager
- Factory functions for creating gateways
"""

from .secrets_gateway import SecretsGateway, load_store_credentials
from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error

__all__ = [
    "SecretsGateway",
    "TableGateway",
    "create_table_gateway",
    "load_store_credentials",
    "map_dynamodb_error",
]
