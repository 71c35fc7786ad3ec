"""
Domain Models for the Team Registry

This module holds the business entities of the registry:

1. Team Asset Models - which DNS records and health checks a team may edit
2. Credential Models - the service credentials read from the secrets store

Table layout (partition key, table name) is declared on each persisted
model through its nested ``Meta`` class.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import DynamoDBMixin


# =============================================================================
# DynamoDB Table Metadata Classes
# =============================================================================

class TableMeta:
    """Base class for table metadata definitions."""
    table_name: str
    partition_key: str
    sort_key: Optional[str] = None


# =============================================================================
# Team Asset Domain
# =============================================================================

class TeamAssets(DynamoDBMixin, BaseModel):
    """
    The DNS records and health checks a team has permission to edit.

    ``team_name`` is both a data field and the record's primary key; a
    record is always addressed by its team name.
    """

    team_name: str = Field(..., min_length=1, description="Unique team name, also the partition key")
    dns_records: List[str] = Field(default_factory=list, description="DNS records owned by the team")
    health_checks: List[str] = Field(default_factory=list, description="Health checks owned by the team")

    model_config = ConfigDict(
        validate_assignment=True
    )

    @field_validator('team_name')
    @classmethod
    def validate_team_name(cls, v):
        """Reject blank team names."""
        if not v.strip():
            raise ValueError("team_name must not be blank")
        return v

    def key(self) -> dict:
        """DynamoDB primary key of this record."""
        return {self.Meta.partition_key: self.team_name}

    class Meta(TableMeta):
        table_name = "sgune"
        partition_key = "team_name"
        sort_key = None


# =============================================================================
# Credential Domain
# =============================================================================

class StoreCredentials(BaseModel):
    """
    AWS credentials for the document store, as stored in the secrets store.

    The secret field holds this object as a JSON blob, e.g.
    ``{"aws_access_key_id": "...", "aws_secret_access_key": "...", "region_name": "us-east-1"}``.
    """

    aws_access_key_id: str = Field(..., min_length=1)
    aws_secret_access_key: str = Field(..., min_length=1, repr=False)
    aws_session_token: Optional[str] = Field(None, repr=False)
    region_name: Optional[str] = None
