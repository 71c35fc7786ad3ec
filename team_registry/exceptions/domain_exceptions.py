"""
Domain-Specific Exceptions for the Team Registry

This module consolidates all domain-specific exceptions that extend the base
TeamRegistryError. Every failure an operation can surface is a distinct,
inspectable type so callers decide what is fatal.

Organized by category:
1. Data Validation Errors
2. Resource Not Found Errors
3. Record Ownership Errors
4. Conflict and Transaction Errors
5. Infrastructure and Credential Errors
"""

from typing import Any, Dict, List, Optional

from .base import TeamRegistryError


# =============================================================================
# Data Validation Errors
# =============================================================================

class ValidationError(TeamRegistryError):
    """Raised when data validation fails.

    Used for:
    - Pydantic model validation failures
    - Items read from the store that do not match the model
    - Mismatched team names on update
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {
            'validation_errors': self.errors
        }
        super().__init__(message, original_error, context)


# =============================================================================
# Resource Not Found Errors
# =============================================================================

class NotFoundError(TeamRegistryError):
    """Raised when a registry resource is not found.

    Base class for both not-found cases (missing key, empty filter result)
    so callers can handle them together.
    """

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """Initialize not found error.

        Args:
            message: Human-readable error message
            resource_type: Type of resource not found (e.g., 'table', 'item', 'dns_record')
            resource_name: Name of the resource not found
            original_error: The original exception that caused this error
            context: Additional context, replaces the resource_type/resource_name context
        """
        self.resource_type = resource_type
        self.resource_name = resource_name
        if context is None:
            context = {}
            if resource_type:
                context['resource_type'] = resource_type
            if resource_name:
                context['resource_name'] = resource_name
        super().__init__(message, original_error, context)


class ItemNotFoundError(NotFoundError):
    """Raised when no item is stored under a primary key.

    Used for:
    - GetItem operations that return no results
    - Updates of teams that were never created
    """

    def __init__(self, table_name: str, key: dict, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            table_name: Name of the DynamoDB table
            key: The key that was not found
            original_error: The original exception that caused this error
        """
        self.table_name = table_name
        self.key = key
        message = f"Item not found in table '{table_name}' with key: {key}"
        context = {
            'table_name': table_name,
            'key': key
        }
        super().__init__(message, 'item', None, original_error, context)


class RecordNotFoundError(NotFoundError):
    """Raised when no team owns the queried DNS record."""

    def __init__(self, record: str, original_error: Optional[Exception] = None):
        self.record = record
        super().__init__(f"no dns record found for {record}", 'dns_record', record, original_error)


# =============================================================================
# Record Ownership Errors
# =============================================================================

class AmbiguousOwnerError(TeamRegistryError):
    """Raised when a DNS record is listed by more than one team.

    Record ownership must be unambiguous; a value found in several team
    records is a data-integrity fault, never a normal lookup result.
    """

    def __init__(self, record: str, team_names: List[str]):
        """Initialize ambiguous owner error.

        Args:
            record: The DNS record that was queried
            team_names: Every team whose record list contains it
        """
        self.record = record
        self.team_names = list(team_names)
        context = {
            'record': record,
            'teams': self.team_names
        }
        super().__init__(f"dns record {record} is NOT unique among teams", None, context)


# =============================================================================
# Conflict and Transaction Errors
# =============================================================================

class ConflictError(TeamRegistryError):
    """Raised when a conditional operation fails due to existing data.

    Used for:
    - ConditionalCheckFailedException from single-item writes
    - Resources already in use or already existing
    """

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize conflict error.

        Args:
            message: Human-readable error message
            resource_id: ID of the conflicting resource (e.g., team_name)
            original_error: The original exception that caused this error
        """
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


class TransactionFailedError(TeamRegistryError):
    """Raised when a store transaction is cancelled or cannot be committed.

    Used for:
    - TransactionCanceledException (condition failures, conflicts, throttling)
    - TransactionConflictException and TransactionInProgressException
    - Any other error raised while submitting TransactWriteItems
    """

    CONDITION_FAILED = 'ConditionalCheckFailed'

    def __init__(
        self,
        message: str,
        cancellation_reasons: Optional[List[str]] = None,
        resource_id: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        """Initialize transaction failed error.

        Args:
            message: Human-readable error message
            cancellation_reasons: Per-item reason codes reported by the store
            resource_id: ID of the resource written by the transaction
            original_error: The original exception that caused this error
        """
        self.cancellation_reasons = list(cancellation_reasons or [])
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        if self.cancellation_reasons:
            context['cancellation_reasons'] = self.cancellation_reasons
        super().__init__(message, original_error, context)

    @property
    def condition_failed(self) -> bool:
        """True when the only reason for cancellation was a failed condition."""
        failures = [code for code in self.cancellation_reasons if code and code != 'None']
        return bool(failures) and all(code == self.CONDITION_FAILED for code in failures)


# =============================================================================
# Infrastructure and Credential Errors
# =============================================================================

class ConnectionError(TeamRegistryError):
    """Raised when connection to an AWS service fails.

    Used for:
    - Network connectivity issues
    - Authentication/authorization failures
    - Missing tables
    - Invalid endpoint configurations
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(TeamRegistryError):
    """Raised when an operation fails due to temporary/throttling issues.

    The registry never retries on its own; the SDK's retry configuration
    has already been exhausted when this is raised.
    """

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        """Initialize retryable error.

        Args:
            message: Human-readable error message
            retry_after_seconds: Suggested retry delay in seconds
            original_error: The original exception that caused this error
        """
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)


class CredentialUnavailableError(TeamRegistryError):
    """Raised when service credentials cannot be read from the secrets store."""

    def __init__(self, path: str, field: str, reason: str, original_error: Optional[Exception] = None):
        """Initialize credential unavailable error.

        Args:
            path: Secret path (secret id) that was requested
            field: Field inside the secret that was requested
            reason: Why the lookup failed
            original_error: The original exception that caused this error
        """
        self.path = path
        self.field = field
        message = f"unable to load secret {path}/{field}: {reason}"
        context = {
            'path': path,
            'field': field
        }
        super().__init__(message, original_error, context)
