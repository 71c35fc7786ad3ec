import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from team_registry.config import DEFAULT_SECRET_BASE_PATH, RegistryConfig
from team_registry.models import StoreCredentials


class TestRegistryConfig:
    """Test cases for RegistryConfig."""

    def test_default_config(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2"}):
            config = RegistryConfig()

            assert config.region_name == "us-west-2"
            assert config.max_pool_connections == 50
            assert config.retries == 3
            assert config.timeout_seconds == 30.0
            assert config.scan_page_size == 100

    def test_config_from_env_vars(self):
        """Test configuration from environment variables."""
        env_vars = {
            "AWS_ACCESS_KEY_ID": "test_key",
            "AWS_SECRET_ACCESS_KEY": "test_secret",
            "AWS_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
            "SECRETS_ENDPOINT_URL": "http://localhost:4566",
            "DYNAMODB_TABLE_PREFIX": "test",
            "ENVIRONMENT": "staging",
            "REGISTRY_SECRET_PATH": "secret/other/path",
            "REGISTRY_SECRET_FIELD": "creds",
            "REGISTRY_DEBUG_LOGGING": "true",
        }

        with patch.dict(os.environ, env_vars):
            config = RegistryConfig.from_env()

            assert config.aws_access_key_id == "test_key"
            assert config.aws_secret_access_key == "test_secret"
            assert config.region_name == "eu-west-1"
            assert config.endpoint_url == "http://localhost:8000"
            assert config.secrets_endpoint_url == "http://localhost:4566"
            assert config.table_prefix == "test"
            assert config.environment == "staging"
            assert config.secret_base_path == "secret/other/path"
            assert config.secret_field == "creds"
            assert config.enable_debug_logging is True

    def test_secret_location_defaults(self):
        """Test the credential secret defaults."""
        with patch.dict(os.environ, {}, clear=True):
            config = RegistryConfig()

            assert config.secret_base_path == DEFAULT_SECRET_BASE_PATH
            assert config.secret_field == "config"

    def test_table_name_generation(self):
        """Test table name generation with prefix and environment."""
        config = RegistryConfig(table_prefix="myapp", environment="dev")

        assert config.get_table_name("sgune") == "myapp_dev_sgune"

    def test_table_name_generation_prod(self):
        """Test table name generation in production (no environment suffix)."""
        config = RegistryConfig(table_prefix="myapp", environment="prod")

        assert config.get_table_name("sgune") == "myapp_sgune"

    def test_table_name_generation_no_prefix(self):
        """Test table name generation without prefix."""
        config = RegistryConfig(table_prefix="", environment="test")

        assert config.get_table_name("sgune") == "test_sgune"

    def test_invalid_environment(self):
        """Test that unknown environments are rejected."""
        with pytest.raises(ValidationError):
            RegistryConfig(environment="qa")

    def test_blank_secret_field_rejected(self):
        with pytest.raises(ValidationError):
            RegistryConfig(secret_field="  ")

    def test_local_development_config(self):
        """Test local development configuration."""
        config = RegistryConfig.for_local_development()

        assert config.aws_access_key_id == "local"
        assert config.aws_secret_access_key == "local"
        assert config.endpoint_url == "http://localhost:8000"
        assert config.environment == "dev"
        assert config.enable_debug_logging is True

    def test_with_credentials(self):
        """Test applying secret-sourced credentials."""
        config = RegistryConfig(
            aws_access_key_id="ambient",
            aws_secret_access_key="ambient",
            region_name="us-east-1",
            environment="dev"
        )
        credentials = StoreCredentials(
            aws_access_key_id="from_secret",
            aws_secret_access_key="from_secret_too",
            aws_session_token="token",
            region_name="eu-central-1"
        )

        store_config = config.with_credentials(credentials)

        assert store_config.aws_access_key_id == "from_secret"
        assert store_config.aws_secret_access_key == "from_secret_too"
        assert store_config.aws_session_token == "token"
        assert store_config.region_name == "eu-central-1"
        assert store_config.environment == "dev"
        # Original is unchanged
        assert config.aws_access_key_id == "ambient"

    def test_with_credentials_keeps_region_when_absent(self):
        config = RegistryConfig(region_name="ap-southeast-2")
        credentials = StoreCredentials(aws_access_key_id="a", aws_secret_access_key="b")

        assert config.with_credentials(credentials).region_name == "ap-southeast-2"
