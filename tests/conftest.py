"""
Test configuration and fixtures for the team registry.

Provides common fixtures for testing the read/write APIs and the secrets
gateway against moto's in-memory DynamoDB and Secrets Manager.
"""

import json
import sys
from pathlib import Path

# Add parent directory to path so we can import team_registry
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from team_registry import (
    RegistryConfig,
    TeamAssets,
    TeamAssetsReadApi,
    TeamAssetsWriteApi,
)
from team_registry.config import DEFAULT_SECRET_BASE_PATH


REGION = "us-east-1"


@pytest.fixture
def mock_registry_config():
    """Registry configuration for mocked testing."""
    return RegistryConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        aws_session_token=None,
        region_name=REGION,
        endpoint_url=None,  # Use default AWS endpoint for moto
        secrets_endpoint_url=None,
        environment="test",
        table_prefix="",
        secret_base_path=DEFAULT_SECRET_BASE_PATH,
        secret_field="config",
    )


@pytest.fixture
def mock_aws_services():
    """Activate moto for every AWS service."""
    with mock_aws():
        yield


@pytest.fixture
def mock_dynamodb_resource(mock_aws_services):
    """Mock DynamoDB resource."""
    return boto3.resource('dynamodb', region_name=REGION)


@pytest.fixture
def team_assets_table(mock_dynamodb_resource):
    """Create the test_sgune table for testing."""
    table = mock_dynamodb_resource.create_table(
        TableName='test_sgune',
        KeySchema=[
            {'AttributeName': 'team_name', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'team_name', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def read_api(mock_registry_config, team_assets_table):
    """Team assets read API with mocked DynamoDB."""
    return TeamAssetsReadApi(mock_registry_config)


@pytest.fixture
def write_api(mock_registry_config, team_assets_table):
    """Team assets write API with mocked DynamoDB."""
    return TeamAssetsWriteApi(mock_registry_config)


@pytest.fixture
def secretsmanager_client(mock_aws_services):
    """Mock Secrets Manager client."""
    return boto3.client('secretsmanager', region_name=REGION)


@pytest.fixture
def credential_blob():
    """Credential blob stored in the 'config' field of the secret."""
    return {
        "aws_access_key_id": "secret_key_id",
        "aws_secret_access_key": "secret_access_key",
        "region_name": REGION,
    }


@pytest.fixture
def store_secret(secretsmanager_client, credential_blob):
    """Create the credentials secret at the default path."""
    secretsmanager_client.create_secret(
        Name=DEFAULT_SECRET_BASE_PATH,
        SecretString=json.dumps({"config": json.dumps(credential_blob)})
    )
    return DEFAULT_SECRET_BASE_PATH


# Sample Data Fixtures

@pytest.fixture
def mars_volta():
    """Sample team record."""
    return TeamAssets(
        team_name="marsVolta",
        dns_records=["deloused.in.the.comatorium", "bedlam.in.goliath"],
        health_checks=["eriatarka", "wax.simulacra"],
    )


@pytest.fixture
def karnivool():
    """Sample team record."""
    return TeamAssets(
        team_name="karnivool",
        dns_records=["sound.awake", "themata"],
        health_checks=["simple.boy", "shutterspeed"],
    )
