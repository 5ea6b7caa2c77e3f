"""
Payload Builder - Builds PowerSchool student payloads for the bulk endpoint

Integrates:
- DataValidator: request/action/student shape checks
- FieldBuilder: field-level and block-level construction
- prune_empty: final removal of None, "" and {} entries

Input format (one dict per student):
    {"students": [{"student_id": 23456, "last_name": "Doe", ...}, ...]}

Output format (one dict per student):
    {"action": "INSERT", "client_uid": "23456", "local_id": 23456,
     "name": {...}, "school_enrollment": {...}, "_extension_data": {...}}
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Union

from src.schema.models import Action, EXTENSION_NAMESPACES
from src.validator.data_validator import DataValidator, InvalidArgument

from .cleanup import prune_empty
from .field_builder import FieldBuilder, FieldMapping, is_present


def _address_mappings(kind: str) -> List[FieldMapping]:
    return [
        FieldMapping(f"{kind}_street", "street"),
        FieldMapping(f"{kind}_city", "city"),
        FieldMapping(f"{kind}_state_province", "state_province", fallback=f"{kind}_state"),
        FieldMapping(f"{kind}_postal_code", "postal_code"),
        FieldMapping(f"{kind}_grid_location", "grid_location"),
    ]


class StudentPayloadBuilder:
    """
    Builds PowerSchool student payloads from flat student dictionaries

    Usage:
    ```python
    builder = StudentPayloadBuilder()
    students = builder.build_batch("INSERT", {"students": [{"student_id": 23456}]})
    # Returns: [{"action": "INSERT", "client_uid": "23456", "local_id": 23456}]
    ```
    """

    NAME_FIELDS = [
        FieldMapping("last_name", "last_name"),
        FieldMapping("first_name", "first_name"),
        FieldMapping("middle_name", "middle_name"),
    ]

    SCHOOL_ENROLLMENT_FIELDS = [
        FieldMapping("grade_level", "grade_level"),
        FieldMapping("entry_date", "entry_date"),
        FieldMapping("exit_date", "exit_date"),
        FieldMapping("school_number", "school_number"),
        FieldMapping("school_id", "school_id"),
    ]

    PHYSICAL_ADDRESS_FIELDS = _address_mappings("physical")
    MAILING_ADDRESS_FIELDS = _address_mappings("mailing")

    # Sent only as complete pairs
    CONTACT_PAIRS = [
        [FieldMapping("emergency_phone1", "emergency_phone1"),
         FieldMapping("emergency_contact_name1", "emergency_contact_name1")],
        [FieldMapping("emergency_phone2", "emergency_phone2"),
         FieldMapping("emergency_contact_name2", "emergency_contact_name2")],
        [FieldMapping("doctor_phone", "doctor_phone"),
         FieldMapping("doctor_name", "doctor_name")],
    ]

    CONTACT_FIELDS = [
        FieldMapping("guardian_email", "guardian_email"),
        FieldMapping("guardian_fax", "guardian_fax"),
        FieldMapping("mother", "mother"),
        FieldMapping("father", "father"),
    ]

    DEMOGRAPHICS_FIELDS = [
        FieldMapping("gender", "gender"),
        FieldMapping("birth_date", "birth_date"),
        FieldMapping("projected_graduation_year", "projected_graduation_year"),
        FieldMapping("ssn", "ssn"),
    ]

    SCHEDULE_SETUP_FIELDS = [
        FieldMapping("home_room", "home_room"),
        FieldMapping("next_school", "next_school"),
        FieldMapping("sched_next_year_grade", "sched_next_year_grade"),
    ]

    INITIAL_ENROLLMENT_FIELDS = [
        FieldMapping("school_entry_date", "school_entry_date"),
        FieldMapping("school_entry_grade_level", "school_entry_grade_level"),
        FieldMapping("district_entry_date", "district_entry_date"),
        FieldMapping("district_entry_grade_level", "district_entry_grade_level"),
    ]

    def __init__(self):
        self.field_builder = FieldBuilder()
        self.validator = DataValidator()

    def build_batch(
        self,
        action: Union[Action, str],
        params: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """
        Build payloads for every student of a request

        Args:
            action: "INSERT" or "UPDATE"
            params: {"students": [{student_data1}, {student_data2}]}

        Returns:
            List of student payloads, in input order

        Raises:
            InvalidArgument: if the request, action or any student is malformed
        """
        self.validator.validate_request(params)
        action = self.validator.validate_action(action)
        return [self.build(action, student) for student in params["students"]]

    def build(
        self,
        action: Union[Action, str],
        student: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Build the payload of one student

        Args:
            action: "INSERT" or "UPDATE"
            student: flat student attributes

        Returns:
            Student payload without empty entries
        """
        student = self.validator.validate_student(student)
        action = self.validator.validate_action(action)

        attribs: Dict[str, Any] = {
            "action": action.value,
            "client_uid": str(student["student_id"]),
        }
        if is_present(student, "username"):
            attribs["student_username"] = student["username"]

        if action is Action.INSERT:
            attribs.update(self._build_insert_fields(student))
        else:
            attribs.update(self._build_update_fields(student))

        attribs["address"] = self._build_address(student)
        attribs["contact"] = self._build_contact(student)
        attribs["demographics"] = self.field_builder.build_block(self.DEMOGRAPHICS_FIELDS, student)
        attribs["schedule_setup"] = self.field_builder.build_block(self.SCHEDULE_SETUP_FIELDS, student)
        attribs["initial_enrollment"] = self.field_builder.build_block(self.INITIAL_ENROLLMENT_FIELDS, student)
        if is_present(student, "email"):
            attribs["contact_info"] = {"email": student["email"]}
        if is_present(student, "mobile"):
            attribs["phone"] = {"main": {"number": student["mobile"]}}
        attribs["_extension_data"] = self._build_extension_data(student)

        return prune_empty(attribs)

    def _build_insert_fields(self, student: Dict[str, Any]) -> Dict[str, Any]:
        """local_id, name and school_enrollment; enrollment can only be set on INSERT"""
        fields: Dict[str, Any] = {}

        id_key = "local_id" if is_present(student, "local_id") else "student_id"
        try:
            fields["local_id"] = int(student[id_key])
        except (TypeError, ValueError):
            raise InvalidArgument(
                f"{id_key} must be an integer - NOT OK: {student[id_key]!r}"
            ) from None

        # an account needs both first and last name
        name = {}
        if is_present(student, "last_name") or is_present(student, "first_name"):
            name["last_name"] = student.get("last_name")
            name["first_name"] = student.get("first_name")
        if is_present(student, "middle_name"):
            name["middle_name"] = student["middle_name"]
        fields["name"] = name

        enrollment = {}
        if is_present(student, "enroll_status_code"):
            enrollment["enroll_status_code"] = student["enroll_status_code"]
        elif is_present(student, "status_code"):
            enrollment["status_code"] = student["status_code"]
        enrollment.update(self.field_builder.build_block(self.SCHOOL_ENROLLMENT_FIELDS, student))
        fields["school_enrollment"] = enrollment

        return fields

    def _build_update_fields(self, student: Dict[str, Any]) -> Dict[str, Any]:
        """id (dcid) and only the name parts that are present"""
        return {
            "id": student.get("id") if is_present(student, "id") else student.get("dcid"),
            "name": self.field_builder.build_block(self.NAME_FIELDS, student),
        }

    def _build_address(self, student: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "physical": self.field_builder.build_block(self.PHYSICAL_ADDRESS_FIELDS, student),
            "mailing": self.field_builder.build_block(self.MAILING_ADDRESS_FIELDS, student),
        }

    def _build_contact(self, student: Dict[str, Any]) -> Dict[str, Any]:
        contact = {}
        for pair in self.CONTACT_PAIRS:
            contact.update(self.field_builder.build_pair(pair, student))
        contact.update(self.field_builder.build_block(self.CONTACT_FIELDS, student))
        return contact

    def _build_extension_data(self, student: Dict[str, Any]) -> Dict[str, Any]:
        """
        Build `_extension_data` for the database extension namespaces present

        Returns {} when no namespace is present, so the wrapper is pruned.
        """
        tables = []
        for namespace in EXTENSION_NAMESPACES:
            if not is_present(student, namespace):
                continue
            data = student[namespace]
            if not isinstance(data, Mapping):
                raise InvalidArgument(
                    f"{namespace} format is: {{field1: data1, field2: data2}} - NOT OK: {data!r}"
                )
            tables.append(self.field_builder.build_table_extension(namespace, data))

        if not tables:
            return {}
        return {"_table_extension": tables}


# ============================================================================
# Builder convenience functions
# ============================================================================


def build_insert_payloads(params: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Build INSERT payloads for every student of a request"""
    return StudentPayloadBuilder().build_batch(Action.INSERT, params)


def build_update_payloads(params: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Build UPDATE payloads for every student of a request"""
    return StudentPayloadBuilder().build_batch(Action.UPDATE, params)
