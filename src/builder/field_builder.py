"""
Field Builder - Constructs individual PowerSchool fields and nested blocks

Supports:
- Direct field mapping (input key → API field), copied only when present
- Fallback source keys (e.g. physical_state_province → physical_state)
- Paired fields that must be present together (emergency/doctor contacts)
- Database extension tables (u_studentsuserfields, u_students_extension)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from src.schema.models import TableExtension


def is_present(source_data: Mapping[str, Any], key: Optional[str]) -> bool:
    """True when the key exists and carries a non-empty value."""
    return key is not None and source_data.get(key) not in (None, "")


@dataclass
class FieldMapping:
    """Maps an input key to a field of the PowerSchool student object"""

    source: str  # Input key (e.g. "physical_street")
    target: str  # API field name (e.g. "street")
    fallback: Optional[str] = None  # Input key used when source is absent

    def resolve_source(self, source_data: Dict[str, Any]) -> Optional[str]:
        """Return the input key that carries the value, if any"""
        if is_present(source_data, self.source):
            return self.source
        if is_present(source_data, self.fallback):
            return self.fallback
        return None


class FieldBuilder:
    """Builds fields and blocks for PowerSchool student payloads"""

    @staticmethod
    def build_field(
        mapping: FieldMapping,
        source_data: Dict[str, Any],
    ) -> tuple[str, Any]:
        """
        Build a single field

        Returns:
            Tuple of (target_field_name, field_value); value is None when absent
        """
        key = mapping.resolve_source(source_data)
        if key is None:
            return mapping.target, None
        return mapping.target, source_data[key]

    def build_block(
        self,
        mappings: List[FieldMapping],
        source_data: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Build a nested block from the fields present in the input

        Example:
            mappings = [FieldMapping("gender", "gender"), FieldMapping("ssn", "ssn")]
            source_data = {"gender": "F"}
            → {"gender": "F"}
        """
        block = {}
        for mapping in mappings:
            target, value = self.build_field(mapping, source_data)
            if value is not None:
                block[target] = value
        return block

    def build_pair(
        self,
        mappings: List[FieldMapping],
        source_data: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Build fields that are only sent together; a partial pair yields {}"""
        block = self.build_block(mappings, source_data)
        if len(block) != len(mappings):
            return {}
        return block

    @staticmethod
    def build_table_extension(name: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Build a database extension entry

        Transforms:
            {"preferredname": "Joe"}
        Into:
            {
                "name": "u_students_extension",
                "recordFound": False,
                "_field": [{"name": "preferredname", "type": "String", "value": "Joe"}]
            }
        """
        return TableExtension(name=name, fields=dict(data)).to_dict()
