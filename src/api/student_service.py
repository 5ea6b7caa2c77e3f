"""Create and update students through the PowerSchool bulk endpoint."""
import json
from typing import Any, Dict, List, Optional, Union

from src.builder.payload_builder import StudentPayloadBuilder
from src.schema.models import Action

STUDENT_ENDPOINT = "/ws/v1/student"


class StudentService:
    """
    Sends student payloads to PowerSchool.

    The client only needs a `post(path, options)` method returning an object
    with `code`, `parsed_response` and `response` (see PowerSchoolClient).

    Successful calls return the PowerSchool result, e.g.:
        {"results": {"update_count": 2,
                     "result": [{"client_uid": "124", "status": "SUCCESS",
                                 "action": "INSERT",
                                 "success_message": {"id": 442, "ref": "..."}}]}}
    Any other status returns {"errorMessage": <raw response text>}.
    """

    def __init__(self, client: Any, builder: Optional[StudentPayloadBuilder] = None):
        """
        Initialize service.

        Args:
            client: PowerSchool HTTP client
            builder: payload builder (a default one is created if omitted)
        """
        self.client = client
        self.builder = builder or StudentPayloadBuilder()

    def create_students(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create (INSERT) new students.

        Required per student: student_id, last_name, first_name, entry_date,
        exit_date, school_number, grade_level. `id` is chosen by PowerSchool
        and ignored here.
        """
        students = self.builder.build_batch(Action.INSERT, params)
        return self._send(students)

    def update_students(self, params: Dict[str, Any]) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """
        Update existing students.

        Required per student: id (dcid) and student_id. Enrollment fields
        (grade_level, entry_date, exit_date, school_number, school_id) are ignored.
        """
        students = self.builder.build_batch(Action.UPDATE, params)
        if not students:
            return students
        return self._send(students)

    create_student = create_students
    update_student = update_students

    @staticmethod
    def build_request_body(students: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Wrap student payloads in the bulk endpoint envelope."""
        return {"students": {"student": students}}

    def _send(self, students: List[Dict[str, Any]]) -> Dict[str, Any]:
        options = {"body": json.dumps(self.build_request_body(students), default=str)}
        answer = self.client.post(STUDENT_ENDPOINT, options)

        if str(answer.code) == "200":
            return answer.parsed_response
        return {"errorMessage": f"{answer.response}"}
