"""
Team Assets CQRS APIs

This module provides separate read and write APIs for team asset records,
following Command Query Responsibility Segregation (CQRS) principles.

Read API:
- Point reads by team name
- Keys-only enumeration
- DNS record owner lookup with uniqueness check

Write API:
- Create-if-absent with a conditional transaction
- Full-record replace of existing teams

Usage:
    from .queries import TeamAssetsReadApi
    from .commands import TeamAssetsWriteApi

    read_api = TeamAssetsReadApi(config)
    write_api = TeamAssetsWriteApi(config)
"""

from .queries import TeamAssetsReadApi
from .commands import TeamAssetsWriteApi

__all__ = [
    "TeamAssetsReadApi",
    "TeamAssetsWriteApi",
]
