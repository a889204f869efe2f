"""Per-resource clients built on libs.http."""

from .student_client import StudentClient

__all__ = ["StudentClient"]
