"""
Team Registry Utilities

Helpers shared by the read and write handlers:

- Query building (projections, key-condition strings)
- Model-agnostic key building using the model's Meta class
"""

import logging
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

logger = logging.getLogger(__name__)


# =============================================================================
# Query Building Utilities
# =============================================================================

def build_projection_expression(fields: Optional[List[str]]) -> tuple[Optional[str], Optional[Dict[str, str]]]:
    """Build ProjectionExpression with ExpressionAttributeNames for DynamoDB operations.

    This helper safely handles DynamoDB reserved words by using expression attribute names.

    Args:
        fields: List of field names to project, None for all fields

    Returns:
        Tuple of (ProjectionExpression, ExpressionAttributeNames) or (None, None)

    Example:
        >>> build_projection_expression(['team_name', 'dns_records'])
        ('#f0, #f1', {'#f0': 'team_name', '#f1': 'dns_records'})
    """
    if not fields:
        return None, None

    expression_names = {}
    projection_parts = []

    for i, field in enumerate(fields):
        attr_name = f"#f{i}"
        expression_names[attr_name] = field
        projection_parts.append(attr_name)

    projection_expression = ', '.join(projection_parts)
    return projection_expression, expression_names


def build_existence_condition(model_class: Type[BaseModel], must_exist: bool) -> tuple[str, Dict[str, str]]:
    """Build a condition string on the model's partition key.

    Args:
        model_class: Pydantic BaseModel class with Meta class
        must_exist: True for attribute_exists, False for attribute_not_exists

    Returns:
        Tuple of (ConditionExpression, ExpressionAttributeNames)

    Example:
        >>> build_existence_condition(TeamAssets, must_exist=False)
        ('attribute_not_exists(#pk)', {'#pk': 'team_name'})
    """
    partition_key = extract_model_metadata(model_class)['partition_key']
    function = 'attribute_exists' if must_exist else 'attribute_not_exists'
    return f"{function}(#pk)", {'#pk': partition_key}


# =============================================================================
# Domain Model Introspection (Meta Class Only)
# =============================================================================

def extract_model_metadata(model_class: Type[BaseModel]) -> Dict[str, Any]:
    """Extract metadata from a Pydantic model's Meta class.

    Args:
        model_class: Pydantic BaseModel class with Meta class

    Returns:
        Dictionary with model metadata

    Raises:
        ValueError: If model doesn't have required Meta class attributes

    Example:
        >>> extract_model_metadata(TeamAssets)['partition_key']
        'team_name'
    """
    if not hasattr(model_class, 'Meta'):
        raise ValueError(f"Model {model_class.__name__} must have a Meta class with table_name and partition_key attributes")

    meta = model_class.Meta

    table_name = getattr(meta, 'table_name', None)
    partition_key = getattr(meta, 'partition_key', None)
    sort_key = getattr(meta, 'sort_key', None)

    if not partition_key:
        raise ValueError(f"Model {model_class.__name__}.Meta must define partition_key")
    if not table_name:
        raise ValueError(f"Model {model_class.__name__}.Meta must define table_name")

    return {
        'table_name': table_name,
        'partition_key': partition_key,
        'sort_key': sort_key,
        'primary_key_fields': [k for k in [partition_key, sort_key] if k],
        'available_fields': list(model_class.model_fields.keys()),
    }


def build_model_key(model_class: Type[BaseModel], **key_values: Any) -> Dict[str, Any]:
    """Build a DynamoDB key using domain model Meta class definitions.

    Args:
        model_class: Pydantic BaseModel class with Meta class
        **key_values: Key-value pairs for the key fields

    Returns:
        DynamoDB key dictionary

    Examples:
        >>> build_model_key(TeamAssets, team_name="karnivool")
        {'team_name': 'karnivool'}

    Raises:
        ValueError: If model lacks Meta class, or required key fields are missing
    """
    metadata = extract_model_metadata(model_class)
    key = {}

    partition_key = metadata['partition_key']
    if partition_key in key_values:
        key[partition_key] = key_values[partition_key]
    else:
        raise ValueError(f"Missing partition key '{partition_key}' for {model_class.__name__}")

    sort_key = metadata['sort_key']
    if sort_key:
        if sort_key in key_values:
            key[sort_key] = key_values[sort_key]
        else:
            raise ValueError(f"Missing sort key '{sort_key}' for {model_class.__name__}")

    return key


__all__ = [
    "build_projection_expression",
    "build_existence_condition",
    "extract_model_metadata",
    "build_model_key",
]
