"""
Base domain model with camelCase JSON export.

Report consumers (CI dashboards, the JSON export of the violation sink)
expect camelCase keys; Python code keeps snake_case fields.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict


def to_camel_case(snake_str: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        >>> to_camel_case("xml_report_path")
        'xmlReportPath'
        >>> to_camel_case("variant")
        'variant'
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _to_json_value(value: Any) -> Any:
    if isinstance(value, BaseDomainModel):
        return value.to_json()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {k: _to_json_value(v) for k, v in value.items()}
    return value


@dataclass
class BaseDomainModel:
    """
    Base class for serializable domain models.

    - to_json() serializes to camelCase
    - Enum values are serialized as their values
    - Dates are serialized as ISO 8601 strings, paths as strings
    """

    def to_json(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        return {to_camel_case(field.name): _to_json_value(getattr(self, field.name)) for field in fields(self)}
