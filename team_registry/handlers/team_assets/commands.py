"""
Team Assets Write API

This module provides the two mutations of the registry, both executed as
single-item DynamoDB transactions with a condition on the partition key:

- populate_datastore: Put guarded by attribute_not_exists (first write wins)
- update_team_assets: Put guarded by attribute_exists (full replace, never creates)

Isolation between concurrent writers comes from the store; no locking or
retry happens here.
"""

import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from ...config import RegistryConfig
from ...core import create_table_gateway
from ...exceptions import ItemNotFoundError, TransactionFailedError, ValidationError
from ...models import TeamAssets
from ...utils import build_existence_condition

logger = logging.getLogger(__name__)


def _as_team_assets(data: Union[TeamAssets, Mapping[str, Any]]) -> TeamAssets:
    if isinstance(data, TeamAssets):
        return data
    try:
        return TeamAssets(**data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid team assets: {e}", original_error=e) from e


class TeamAssetsWriteApi:
    """
    Write-only API for team asset records.

    Records are created only if absent and replaced only if present.
    Records are never deleted.
    """

    def __init__(self, config: RegistryConfig):
        """Initialize write API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config, TeamAssets.Meta.table_name)

    def populate_datastore(self, team_assets: Union[TeamAssets, Mapping[str, Any]]) -> bool:
        """
        Create a team's record if no record exists under its team name.

        DynamoDB Operation: TransactWriteItems with one conditional Put
        Condition: attribute_not_exists(team_name)

        Safe to call repeatedly: an existing record is left untouched and
        the call succeeds as a no-op.

        Args:
            team_assets: Candidate record

        Returns:
            True if the record was written, False if it already existed

        Raises:
            ValidationError: Invalid record data
            TransactionFailedError: The store rejected the transaction for any
                reason other than the record already existing
        """
        team = _as_team_assets(team_assets)
        condition, names = build_existence_condition(TeamAssets, must_exist=False)

        try:
            self.gateway.transact_put(
                team.to_dynamodb_item(),
                condition_expression=condition,
                expression_attribute_names=names,
                resource_id=team.team_name
            )
        except TransactionFailedError as e:
            if e.condition_failed:
                logger.info(f"Team assets for {team.team_name} already exist, left untouched")
                return False
            raise

        logger.info(f"Created team assets: {team.team_name}")
        return True

    def update_team_assets(
        self,
        team_name: str,
        team_assets: Union[TeamAssets, Mapping[str, Any]]
    ) -> TeamAssets:
        """
        Replace an existing team's record with a new one.

        DynamoDB Operation: TransactWriteItems with one conditional Put
        Condition: attribute_exists(team_name)

        The replacement is written whole; lists are not merged with the
        stored ones. Updates never create a record.

        Args:
            team_name: Team whose record is replaced
            team_assets: Replacement record, its team_name must equal team_name

        Returns:
            The stored TeamAssets

        Raises:
            ValidationError: Invalid record data or mismatched team name
            ItemNotFoundError: No record exists for team_name
            TransactionFailedError: The transaction could not be committed
        """
        team = _as_team_assets(team_assets)
        if team.team_name != team_name:
            raise ValidationError(
                f"Replacement record is for team '{team.team_name}', expected '{team_name}'",
                errors={'team_name': team.team_name}
            )

        condition, names = build_existence_condition(TeamAssets, must_exist=True)

        try:
            self.gateway.transact_put(
                team.to_dynamodb_item(),
                condition_expression=condition,
                expression_attribute_names=names,
                resource_id=team_name
            )
        except TransactionFailedError as e:
            if e.condition_failed:
                raise ItemNotFoundError(self.gateway.table_name, team.key(), original_error=e) from e
            raise

        logger.info(f"Updated team assets: {team_name}")
        return team
