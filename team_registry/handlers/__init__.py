"""
Handler Layer for the Team Registry

This module contains the application layer handlers that implement the
Command Query Responsibility Segregation (CQRS) pattern for registry
operations.

Organization:
- Each domain has its own subdirectory (team_assets)
- Each domain follows CQRS with queries.py (read) and commands.py (write)

Architecture:
handlers/ (this layer) -> core/ (infrastructure) -> DynamoDB
handlers/ (this layer) <- models/ (domain models)
"""

from .team_assets.queries import TeamAssetsReadApi
from .team_assets.commands import TeamAssetsWriteApi

__all__ = [
    'TeamAssetsReadApi',
    'TeamAssetsWriteApi',
]
