"""
Base Model Components and Mixins

This module provides the functionality shared by every model that is
persisted in the registry table.

## DynamoDBMixin

Models inheriting from ``DynamoDBMixin`` convert themselves to and from
DynamoDB items:

```python
item = team.to_dynamodb_item()          # dict ready for PutItem
team = TeamAssets.from_dynamodb_item(item)
```

Lists are stored as DynamoDB lists (``L``) so their order is preserved and
empty lists survive a round trip. Attributes the store adds that the model
does not declare are ignored on read.
"""

import logging
from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class DynamoDBMixin(BaseModel):
    """
    Mixin providing DynamoDB serialization and deserialization functionality.

    Features:
    - Complete DynamoDB item serialization (to_dynamodb_item)
    - Complete DynamoDB item deserialization (from_dynamodb_item)
    - Decimal to int/float conversion for DynamoDB Number types
    - Recursive nested structure handling
    """

    def to_dynamodb_item(self) -> Dict[str, Any]:
        """
        Convert model to DynamoDB-compatible item.

        None values are excluded; empty lists are kept so a full-record
        replace clears lists the new record leaves empty.

        Returns:
            DynamoDB-compatible dictionary ready for storage
        """
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_dynamodb_item(cls, item: Dict[str, Any]):
        """
        Create model instance from DynamoDB item.

        Args:
            item: DynamoDB item dictionary with DynamoDB-specific types

        Returns:
            Model instance with properly converted Python types

        Raises:
            ValidationError: If item data is invalid for the model
        """
        try:
            def convert_dynamodb_types(obj):
                """Recursively convert DynamoDB types to Python types."""
                if isinstance(obj, dict):
                    return {k: convert_dynamodb_types(v) for k, v in obj.items()}
                elif isinstance(obj, (list, set)):
                    return [convert_dynamodb_types(list_item) for list_item in obj]
                elif isinstance(obj, Decimal):
                    return int(obj) if obj == obj.to_integral_value() else float(obj)
                else:
                    return obj

            known_fields = set(cls.model_fields)
            converted_item = {
                k: convert_dynamodb_types(v)
                for k, v in item.items()
                if k in known_fields
            }
            return cls(**converted_item)

        except Exception as e:
            logger.error(f"Failed to convert DynamoDB item to {cls.__name__}: {e}")
            from ..exceptions import ValidationError
            raise ValidationError(f"Failed to convert DynamoDB item to {cls.__name__}: {e}") from e
