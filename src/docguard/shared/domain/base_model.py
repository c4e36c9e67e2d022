"""
Base domain model with UI JSON compatibility.

Provides automatic camelCase ↔ snake_case conversion so validation results
can be handed to the editor/chat surfaces unchanged.
Domain models should be dataclasses inheriting from BaseDomainModel.
"""

from __future__ import annotations

import dataclasses
import types
from dataclasses import fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Type, TypeVar, Union, get_args, get_origin, get_type_hints

T = TypeVar("T", bound="BaseDomainModel")


def to_camel_case(snake_str: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        >>> to_camel_case("base_dir")
        'baseDir'
        >>> to_camel_case("workspace_root")
        'workspaceRoot'
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _serialize(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, BaseDomainModel):
        return value.to_json()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    return value


def _unwrap_optional(field_type: Any) -> Any:
    if get_origin(field_type) in (Union, types.UnionType):
        args = [arg for arg in get_args(field_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return field_type


class BaseDomainModel:
    """
    Mixin for dataclass domain models.

    - to_json() serializes to camelCase
    - from_json() deserializes camelCase JSON
    - Enum values are serialized by value
    - Nested models (including Optional ones) are rebuilt by from_json()
    - Dates are serialized as ISO 8601 strings

    Not a dataclass itself, so frozen and non-frozen dataclasses can both
    inherit from it.
    """

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to UI-compatible JSON (camelCase).

        Returns:
            Dictionary with camelCase keys
        """
        return {
            to_camel_case(field.name): _serialize(getattr(self, field.name))
            for field in fields(self)
        }

    @classmethod
    def from_json(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Deserialize from camelCase JSON to the Python model.

        Raises:
            ValueError: If required fields are missing
        """
        kwargs: Dict[str, Any] = {}
        hints = get_type_hints(cls)

        for field in fields(cls):
            json_key = to_camel_case(field.name)

            if json_key not in data:
                if field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING:  # type: ignore[attr-defined]
                    continue
                raise ValueError(f"Missing required field: {json_key}")

            value = data[json_key]
            field_type = _unwrap_optional(hints.get(field.name))

            if value is not None and isinstance(field_type, type) and issubclass(field_type, Enum):
                kwargs[field.name] = field_type(value)
            elif isinstance(value, dict) and isinstance(field_type, type) and issubclass(field_type, BaseDomainModel):
                kwargs[field.name] = field_type.from_json(value)
            else:
                kwargs[field.name] = value

        return cls(**kwargs)
