from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

from libs.http import HttpClient
from student_records.app.schemas import StudentInput
from student_records.app.settings import Endpoints, Settings


StudentPayload = Union[StudentInput, Mapping[str, Any]]

# python field name -> backend field name, e.g. roll_no -> rollNo
_WIRE_NAMES = {name: field.alias or name for name, field in StudentInput.model_fields.items()}


def _to_payload(data: StudentPayload) -> Dict[str, Any]:
    if isinstance(data, StudentInput):
        return data.to_wire()
    # renamed only, not validated; id travels in the path only
    return {_WIRE_NAMES.get(k, k): v for k, v in data.items() if k != "id"}


class StudentClient:
    """
    Binds HttpClient to the /students resource family.
    Each method is one request; errors from HttpClient propagate unchanged.
    """

    def __init__(self, http: HttpClient, endpoints: Optional[Endpoints] = None) -> None:
        self._http = http
        self._endpoints = endpoints or Endpoints()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "StudentClient":
        return cls(HttpClient.from_settings(settings, **kwargs), settings.endpoints)

    def _detail_path(self, student_id: str) -> str:
        return self._endpoints.student_detail.format(id=quote(str(student_id), safe=""))

    def get_all_students(self) -> List[Dict[str, Any]]:
        return self._http.get(self._endpoints.students)

    def get_student_by_id(self, student_id: str) -> Dict[str, Any]:
        return self._http.get(self._detail_path(student_id))

    def create_student(self, data: StudentPayload) -> Dict[str, Any]:
        return self._http.post(self._endpoints.students, _to_payload(data))

    def update_student(self, student_id: str, data: StudentPayload) -> Dict[str, Any]:
        """Whole-record replace; send every field, not a partial patch."""
        return self._http.put(self._detail_path(student_id), _to_payload(data))

    def delete_student(self, student_id: str) -> Any:
        """Returns None for an empty (204) response, else whatever the server acknowledged."""
        return self._http.delete(self._detail_path(student_id))

    def search_students(self, query: str) -> List[Dict[str, Any]]:
        return self._http.get(self._endpoints.student_search, params={"q": query})
