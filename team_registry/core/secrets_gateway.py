"""
Secrets Manager Gateway

Reads service credentials from AWS Secrets Manager. A secret is addressed
by a path (the secret id) and a field: the secret string is a JSON object
and the field names one of its keys.

The registry uses this only at startup, to obtain the JSON credential blob
for the document store.
"""

import json
import logging
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError as PydanticValidationError

from ..config import RegistryConfig
from ..exceptions import CredentialUnavailableError
from ..models import StoreCredentials

logger = logging.getLogger(__name__)


class SecretsGateway:
    """Thin gateway over the Secrets Manager GetSecretValue call."""

    def __init__(self, config: RegistryConfig):
        self.config = config
        self._client = None

    @property
    def client(self):
        """Lazy initialization of the Secrets Manager client."""
        if self._client is None:
            session = boto3.Session(
                aws_access_key_id=self.config.aws_access_key_id,
                aws_secret_access_key=self.config.aws_secret_access_key,
                aws_session_token=self.config.aws_session_token,
                region_name=self.config.region_name
            )
            client_kwargs = {
                'region_name': self.config.region_name,
                'config': Config(
                    retries={'max_attempts': self.config.retries},
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )
            }
            if self.config.secrets_endpoint_url:
                client_kwargs['endpoint_url'] = self.config.secrets_endpoint_url
            self._client = session.client('secretsmanager', **client_kwargs)
        return self._client

    def get_secret_field(self, path: str, field: str) -> str:
        """
        Read one field of a JSON secret.

        Args:
            path: Secret id
            field: Key inside the secret's JSON object

        Returns:
            The field's value; non-string values are re-serialised as JSON

        Raises:
            CredentialUnavailableError: The secret or field cannot be read
        """
        try:
            response = self.client.get_secret_value(SecretId=path)
        except ClientError as e:
            code = e.response['Error']['Code']
            raise CredentialUnavailableError(path, field, f"{code}: {e.response['Error']['Message']}", e) from e
        except BotoCoreError as e:
            raise CredentialUnavailableError(path, field, str(e), e) from e

        secret_string = response.get('SecretString')
        if secret_string is None:
            raise CredentialUnavailableError(path, field, "secret has no string value")

        try:
            secret = json.loads(secret_string)
        except ValueError as e:
            raise CredentialUnavailableError(path, field, "secret is not a JSON object", e) from e

        if not isinstance(secret, dict):
            raise CredentialUnavailableError(path, field, "secret is not a JSON object")
        if field not in secret:
            raise CredentialUnavailableError(path, field, "field not present in secret")

        value = secret[field]
        logger.info(f"Loaded secret field {path}/{field}")
        if isinstance(value, str):
            return value
        return json.dumps(value)


def load_store_credentials(
    config: RegistryConfig,
    gateway: Optional[SecretsGateway] = None
) -> StoreCredentials:
    """
    Fetch and validate the document store credentials.

    Reads ``config.secret_base_path`` / ``config.secret_field`` and parses
    the field as a JSON credential blob.

    Args:
        config: Registry configuration naming the secret
        gateway: Secrets gateway to use (built from config if None)

    Returns:
        Validated StoreCredentials

    Raises:
        CredentialUnavailableError: Lookup failed or the blob is invalid
    """
    gateway = gateway or SecretsGateway(config)
    path, field = config.secret_base_path, config.secret_field
    blob = gateway.get_secret_field(path, field)

    try:
        return StoreCredentials.model_validate_json(blob)
    except PydanticValidationError as e:
        raise CredentialUnavailableError(path, field, f"invalid credential blob: {e.error_count()} error(s)", e) from e
