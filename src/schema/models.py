"""Models for PowerSchool student payloads."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Action(str, Enum):
    """Bulk endpoint action for a student record."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"


# Database extension namespaces, in the order they are sent
STUDENTS_USER_FIELDS = "u_studentsuserfields"  # built-in PowerSchool extension
STUDENTS_EXTENSION = "u_students_extension"  # school defined extension
EXTENSION_NAMESPACES = (STUDENTS_USER_FIELDS, STUDENTS_EXTENSION)


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class TableExtension:
    """One database extension table attached to a student record."""

    name: str
    fields: Dict[str, Any] = field(default_factory=dict)
    record_found: bool = False
    field_type: str = "String"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the `_table_extension` entry format."""
        return {
            "name": self.name,
            "recordFound": self.record_found,
            "_field": [
                {
                    "name": _stringify(key),
                    "type": self.field_type,
                    "value": _stringify(value),
                }
                for key, value in self.fields.items()
            ],
        }


@dataclass
class ApiResponse:
    """Response returned by the PowerSchool client."""

    code: int
    parsed_response: Optional[Any] = None
    response: str = ""
