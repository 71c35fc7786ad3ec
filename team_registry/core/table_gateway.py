"""
Thin DynamoDB Table Gateway

This module provides a lightweight wrapper around boto3 DynamoDB operations
for the registry table. The gateway:

1. Exposes only the DynamoDB operations the registry consumes
   (GetItem, Scan, TransactWriteItems)
2. Maps botocore errors to registry exceptions
3. Is a building block for the read and write APIs, not a client-facing API

The gateway focuses on:
- Creating boto3 Table handles
- Common helpers (pagination, error mapping)
- Conditional transaction wrappers

Transactions, consistency and query execution stay with DynamoDB; the
gateway adds no retry, caching or locking of its own.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import RegistryConfig
from ..exceptions import (
    ConnectionError,
    ConflictError,
    RetryableError,
    TeamRegistryError,
    TransactionFailedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_REASONS_IN_MESSAGE = re.compile(r"\[([^\]]*)\]\s*$")


def extract_cancellation_reasons(error: ClientError) -> List[str]:
    """Get the per-item reason codes of a cancelled transaction.

    botocore places modeled ``CancellationReasons`` at the top level of the
    error response. When they are absent the codes are read from the
    message, which DynamoDB formats as ``"... reasons [Code1, Code2]"``.

    Args:
        error: ClientError raised by TransactWriteItems

    Returns:
        Reason codes in transaction item order (``'None'`` for items that
        did not fail), or an empty list when none are reported
    """
    reasons = error.response.get('CancellationReasons')
    if reasons is None:
        reasons = error.response.get('Error', {}).get('CancellationReasons')
    if reasons:
        return [str(reason.get('Code', 'None')) for reason in reasons]

    message = error.response.get('Error', {}).get('Message', '')
    match = _REASONS_IN_MESSAGE.search(message)
    if not match:
        return []
    return [code.strip() for code in match.group(1).split(',') if code.strip()]


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map DynamoDB ClientError to domain-specific exceptions.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "GetItem", "Scan")
        table_name: The DynamoDB table name
        resource_id: Optional resource identifier for context

    Returns:
        Appropriate domain exception:
        ConnectionError for network/service/auth issues,
        ConflictError for conditional check failures,
        ValidationError for rejected requests,
        RetryableError for throttling/capacity issues,
        TransactionFailedError for transaction cancellations and conflicts
    """
    error_code = error.response['Error']['Code']
    error_message = error.response['Error']['Message']

    # Build context for error message
    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code == 'ConditionalCheckFailedException':
        return ConflictError(f"Conditional check failed - {full_message}", resource_id, original_error=error)

    elif error_code == 'TransactionCanceledException':
        return TransactionFailedError(
            f"Transaction cancelled - {full_message}",
            extract_cancellation_reasons(error),
            resource_id,
            original_error=error
        )

    elif error_code in ['TransactionConflictException', 'TransactionInProgressException']:
        return TransactionFailedError(f"Transaction conflict - {full_message}", None, resource_id, original_error=error)

    # Missing items are reported as empty responses, so this is always the table
    elif error_code == 'ResourceNotFoundException':
        return ConnectionError(f"Table not found - {full_message}", original_error=error)

    elif error_code in ['TableNotFoundException', 'IndexNotFoundException']:
        return ConnectionError(f"Table or index not found - {full_message}", original_error=error)

    elif error_code == 'ValidationException':
        return ValidationError(f"Validation failed - {full_message}", original_error=error)

    elif error_code in ['ProvisionedThroughputExceededException', 'RequestLimitExceeded']:
        return RetryableError(f"Throttling - {full_message}", original_error=error)

    elif error_code in ['InternalServerError', 'ServiceUnavailable']:
        return RetryableError(f"Service unavailable - {full_message}", original_error=error)

    elif error_code in ['UnrecognizedClientException', 'AccessDeniedException']:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    elif error_code == 'ItemCollectionSizeLimitExceededException':
        return ValidationError(f"Item collection size limit exceeded - {full_message}", original_error=error)

    elif error_code == 'ResourceInUseException':
        return ConflictError(f"Resource in use - {full_message}", resource_id, original_error=error)

    elif error_code == 'IdempotentParameterMismatchException':
        return ValidationError(f"Idempotent parameter mismatch - {full_message}", original_error=error)

    elif error_code in ['InvalidEndpointException', 'IncompleteSignatureException', 'InvalidSignatureException']:
        return ConnectionError(f"Invalid endpoint or signature - {full_message}", original_error=error)

    elif error_code == 'ExpiredTokenException':
        return ConnectionError(f"Token expired - {full_message}", original_error=error)

    elif error_code == 'RequestExpired':
        return RetryableError(f"Request expired - {full_message}", original_error=error)

    elif error_code in ['ThrottlingException', 'LimitExceededException']:
        return RetryableError(f"Throttling/rate limiting - {full_message}", original_error=error)

    elif error_code in ['InternalFailure', 'ServiceUnavailableException']:
        return RetryableError(f"Service error - {full_message}", original_error=error)

    # Default to ConnectionError for unknown errors
    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


class TableGateway:
    """
    Thin gateway for DynamoDB table operations.

    Designed to be used by the read/write APIs rather than directly by
    clients. Holds no domain state: the only cached objects are the boto3
    resource and table handles.
    """

    def __init__(self, config: RegistryConfig, table_name: str):
        """Initialize table gateway.

        Args:
            config: Registry configuration
            table_name: Name of the DynamoDB table
        """
        self.config = config
        self.table_name = table_name
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    aws_session_token=self.config.aws_session_token,
                    region_name=self.config.region_name
                )

                dynamodb_config = {
                    'region_name': self.config.region_name
                }

                if self.config.endpoint_url:
                    dynamodb_config['endpoint_url'] = self.config.endpoint_url

                # Retries and timeouts are the SDK's; the registry adds none
                boto_config = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )
                dynamodb_config['config'] = boto_config

                self._dynamodb = session.resource('dynamodb', **dynamodb_config)
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    @property
    def table(self):
        """Get boto3 DynamoDB Table resource."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except TeamRegistryError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table

    def get_item(self, key: Dict[str, Any], consistent_read: bool = True, **kwargs) -> Optional[Dict[str, Any]]:
        """
        Get a single item by primary key.

        Args:
            key: Primary key of the item
            consistent_read: Use a strongly consistent read
            **kwargs: Extra boto3 get_item parameters (e.g. ProjectionExpression)

        Returns:
            The stored item, or None when no item has this key
        """
        resource_id = next(iter(key.values()), None)
        try:
            response = self.table.get_item(Key=key, ConsistentRead=consistent_read, **kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, resource_id) from e
        except BotoCoreError as e:
            logger.error(f"GetItem on {self.table_name} failed: {e}")
            raise ConnectionError(f"GetItem on {self.table_name} (resource: {resource_id}) failed: {e}", e) from e
        return response.get('Item')

    def scan(self, **kwargs) -> Dict[str, Any]:
        """
        Execute a single DynamoDB Scan page.

        Scans read the whole table; always pass a ProjectionExpression so
        only the needed attributes are transferred.

        Args:
            **kwargs: All boto3 scan parameters

        Returns:
            Raw DynamoDB response
        """
        try:
            if 'ProjectionExpression' not in kwargs:
                logger.warning(f"Scan on {self.table_name} without ProjectionExpression - consider adding one")
            if 'Limit' not in kwargs:
                logger.warning(f"Scan on {self.table_name} without Limit - consider adding one")

            return self.table.scan(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Scan", self.table_name) from e
        except BotoCoreError as e:
            logger.error(f"Scan on {self.table_name} failed: {e}")
            raise ConnectionError(f"Scan on {self.table_name} failed: {e}", e) from e

    def scan_all(self, **kwargs) -> List[Dict[str, Any]]:
        """
        Scan every page and return all matching items.

        Follows LastEvaluatedKey until DynamoDB reports no further pages.
        ``Limit`` bounds the items evaluated per page, not the total.

        Args:
            **kwargs: All boto3 scan parameters except ExclusiveStartKey

        Returns:
            Items from all pages, in store order
        """
        kwargs.setdefault('Limit', self.config.scan_page_size)
        items: List[Dict[str, Any]] = []
        pages = 0
        while True:
            response = self.scan(**kwargs)
            items.extend(response.get('Items', []))
            pages += 1
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            kwargs['ExclusiveStartKey'] = last_key

        logger.debug(f"Scanned {pages} page(s) of {self.table_name}: {len(items)} item(s)")
        return items

    def transact_write_items(self, transact_items: List[Dict[str, Any]], resource_id: Optional[str] = None) -> None:
        """
        Execute transactional write operations.

        Every failure, whatever its cause, surfaces as TransactionFailedError
        with the store's cancellation reasons and the mapped cause kept.

        Args:
            transact_items: List of transaction items
            resource_id: Optional resource identifier for error context

        Example:
            gateway.transact_write_items([
                {
                    'Put': {
                        'TableName': 'dev_sgune',
                        'Item': {...},
                        'ConditionExpression': 'attribute_not_exists(#pk)',
                        'ExpressionAttributeNames': {'#pk': 'team_name'}
                    }
                }
            ])
        """
        try:
            self.dynamodb.meta.client.transact_write_items(
                TransactItems=transact_items
            )
            logger.info(f"Transaction completed on {self.table_name}")
        except ClientError as e:
            mapped = map_dynamodb_error(e, "TransactWriteItems", self.table_name, resource_id)
            if isinstance(mapped, TransactionFailedError):
                raise mapped from e
            raise TransactionFailedError(
                f"Transaction failed - {mapped.message}",
                None,
                resource_id,
                original_error=mapped
            ) from e
        except BotoCoreError as e:
            logger.error(f"TransactWriteItems on {self.table_name} failed: {e}")
            raise TransactionFailedError(
                f"Transaction failed - TransactWriteItems on {self.table_name}: {e}",
                None,
                resource_id,
                original_error=e
            ) from e

    def transact_put(
        self,
        item: Dict[str, Any],
        condition_expression: Optional[str] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
        resource_id: Optional[str] = None
    ) -> None:
        """
        Write one item inside a single-item transaction.

        Args:
            item: Item to store
            condition_expression: Optional condition string for the Put
            expression_attribute_names: Names used by the condition
            resource_id: Optional resource identifier for error context
        """
        put = {
            'TableName': self.table_name,
            'Item': item
        }
        if condition_expression is not None:
            put['ConditionExpression'] = condition_expression
        if expression_attribute_names:
            put['ExpressionAttributeNames'] = expression_attribute_names

        self.transact_write_items([{'Put': put}], resource_id=resource_id)


def create_table_gateway(config: RegistryConfig, table_name: str) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: Registry configuration
        table_name: Base table name (prefixed via config.get_table_name())

    Returns:
        Configured TableGateway instance
    """
    full_table_name = config.get_table_name(table_name)
    return TableGateway(config, full_table_name)
