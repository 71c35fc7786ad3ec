import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()

DEFAULT_SECRET_BASE_PATH = "secret/sre/datastore/carl-demo"
DEFAULT_SECRET_FIELD = "config"


class RegistryConfig(BaseModel):
    """Configuration for the registry's DynamoDB and Secrets Manager access."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    aws_session_token: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SESSION_TOKEN"),
        description="AWS session token for temporary credentials"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    # Service endpoints
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    secrets_endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("SECRETS_ENDPOINT_URL"),
        description="Secrets Manager endpoint URL (for local development)"
    )

    # Table configuration
    table_prefix: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_TABLE_PREFIX", ""),
        description="Prefix to add to all table names"
    )

    # Credential source
    secret_base_path: str = Field(
        default_factory=lambda: os.getenv("REGISTRY_SECRET_PATH", DEFAULT_SECRET_BASE_PATH),
        description="Secret id holding the store credentials"
    )

    secret_field: str = Field(
        default_factory=lambda: os.getenv("REGISTRY_SECRET_FIELD", DEFAULT_SECRET_FIELD),
        description="Field of the secret containing the JSON credential blob"
    )

    # Scan settings
    scan_page_size: int = Field(
        default=100,
        gt=0,
        description="Items evaluated per Scan page"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of retry attempts for failed requests"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Environment settings
    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, test, staging, prod)"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("REGISTRY_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for registry operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'test', 'staging', 'prod']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator('secret_base_path', 'secret_field')
    @classmethod
    def validate_secret_location(cls, v):
        if not v or not v.strip():
            raise ValueError("Secret path and field must not be empty")
        return v

    def get_table_name(self, base_name: str) -> str:
        """Get the full table name with prefix and environment.

        Args:
            base_name: Base table name

        Returns:
            Full table name with prefix and environment
        """
        parts = []

        if self.table_prefix:
            parts.append(self.table_prefix)

        if self.environment != "prod":
            parts.append(self.environment)

        parts.append(base_name)

        return "_".join(parts)

    def with_credentials(self, credentials) -> 'RegistryConfig':
        """Return a copy of this configuration using secret-sourced credentials.

        Args:
            credentials: StoreCredentials loaded from the secrets store

        Returns:
            New RegistryConfig; the region is only replaced when the
            credentials carry one
        """
        updates = {
            'aws_access_key_id': credentials.aws_access_key_id,
            'aws_secret_access_key': credentials.aws_secret_access_key,
            'aws_session_token': credentials.aws_session_token,
        }
        if credentials.region_name:
            updates['region_name'] = credentials.region_name
        return self.model_copy(update=updates)

    @classmethod
    def from_env(cls) -> 'RegistryConfig':
        """Create configuration from environment variables.

        Returns:
            RegistryConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls) -> 'RegistryConfig':
        """Create configuration for local DynamoDB development.

        Returns:
            RegistryConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url="http://localhost:8000",
            environment="dev",
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
