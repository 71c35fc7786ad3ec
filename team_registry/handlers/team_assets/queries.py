"""
Team Assets Read API

This module provides the read operations of the registry:
- Point read of one team's record by primary key
- Keys-only enumeration of every team name
- Owner lookup of a DNS record through a filtered scan

DNS records live inside a list attribute, which DynamoDB cannot index, so
the owner lookup is a filtered Scan that is drained page by page before
any decision is made.
"""

import logging
from typing import List

from boto3.dynamodb.conditions import Attr

from ...config import RegistryConfig
from ...core import create_table_gateway
from ...exceptions import AmbiguousOwnerError, ItemNotFoundError, RecordNotFoundError
from ...models import TeamAssets
from ...utils import build_model_key, build_projection_expression

logger = logging.getLogger(__name__)


class TeamAssetsReadApi:
    """
    Read-only API for team asset records.

    Every method is a single request/response against the table (scans
    being drained across pages) and keeps no state between calls.
    """

    def __init__(self, config: RegistryConfig):
        """Initialize read API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config, TeamAssets.Meta.table_name)

    def get_asset(self, team_name: str) -> TeamAssets:
        """
        Get one team's record by team name.

        DynamoDB Operation: GetItem (strongly consistent) on the partition key

        Args:
            team_name: Team name, the record's primary key

        Returns:
            The stored TeamAssets

        Raises:
            ItemNotFoundError: No record is stored under team_name
        """
        key = build_model_key(TeamAssets, team_name=team_name)
        item = self.gateway.get_item(key)

        if item is None:
            raise ItemNotFoundError(self.gateway.table_name, key)

        return TeamAssets.from_dynamodb_item(item)

    def get_all_keys(self) -> List[str]:
        """
        List the primary key of every record.

        DynamoDB Operation: Scan projected to the partition key, all pages

        Returns:
            Team names in store order; empty list for an empty table
        """
        partition_key = TeamAssets.Meta.partition_key
        proj_expr, expr_names = build_projection_expression([partition_key])

        items = self.gateway.scan_all(
            ProjectionExpression=proj_expr,
            ExpressionAttributeNames=expr_names
        )
        return [item[partition_key] for item in items]

    def get_record_team(self, record: str) -> str:
        """
        Find the team that owns a DNS record.

        DynamoDB Operation: Scan with FilterExpression contains(dns_records, record)

        The full result set is read before deciding, so a record listed by
        several teams is always detected.

        Args:
            record: DNS record value

        Returns:
            team_name of the single owning team

        Raises:
            RecordNotFoundError: No team lists the record
            AmbiguousOwnerError: More than one team lists the record
        """
        partition_key = TeamAssets.Meta.partition_key
        proj_expr, expr_names = build_projection_expression([partition_key])

        items = self.gateway.scan_all(
            FilterExpression=Attr('dns_records').contains(record),
            ProjectionExpression=proj_expr,
            ExpressionAttributeNames=expr_names
        )
        owners = [item[partition_key] for item in items]

        if len(owners) > 1:
            logger.error(f"DNS record {record} is listed by {len(owners)} teams: {owners}")
            raise AmbiguousOwnerError(record, owners)
        if not owners:
            raise RecordNotFoundError(record)

        return owners[0]
