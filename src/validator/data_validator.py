"""Request validation."""
from collections.abc import Mapping, Sequence
from typing import Any

from src.schema.models import Action


class InvalidArgument(ValueError):
    """Raised when a request does not have the expected shape."""


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


class DataValidator:
    """Validates student requests before any payload is built."""

    REQUEST_FORMAT = "{students: [{student_data1}, {student_data2}]}"

    def validate_request(self, params: Any) -> None:
        """Check the top-level request shape."""
        if (
            not isinstance(params, Mapping)
            or not _is_sequence(params.get("students"))
            or not params["students"]
            or not isinstance(params["students"][0], Mapping)
        ):
            raise InvalidArgument(
                f"PARAMS format is: {self.REQUEST_FORMAT} - NOT OK: {params!r}"
            )

    def validate_action(self, action: Any) -> Action:
        """Check the action tag and return it as an Action."""
        if isinstance(action, Action):
            return action
        if not isinstance(action, str) or action not in {a.value for a in Action}:
            raise InvalidArgument(
                f"ACTION must be: 'INSERT' or 'UPDATE' - NOT OK: {action!r}"
            )
        return Action(action)

    def validate_student(self, student: Any) -> Mapping:
        """Check a single student record."""
        if not isinstance(student, Mapping) or not student:
            raise InvalidArgument(
                f"STUDENT format is: {self.REQUEST_FORMAT} - NOT OK: {student!r}"
            )
        if student.get("student_id") in (None, ""):
            raise InvalidArgument(
                f"STUDENT requires a student_id - NOT OK: {student!r}"
            )
        return student
