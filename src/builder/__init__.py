"""
Payload Builder Module

Builds nested PowerSchool student payloads from flat student dictionaries with:
- Action-dependent fields (INSERT creates enrollment, UPDATE targets a dcid)
- Optional nested blocks (address, contact, demographics, schedule setup)
- Database extension tables (u_studentsuserfields, u_students_extension)
- Recursive pruning of empty entries
"""

from .payload_builder import StudentPayloadBuilder, build_insert_payloads, build_update_payloads
from .field_builder import FieldBuilder, FieldMapping
from .cleanup import prune_empty

__all__ = [
    "StudentPayloadBuilder",
    "FieldBuilder",
    "FieldMapping",
    "prune_empty",
    "build_insert_payloads",
    "build_update_payloads",
]
