"""Assignments feature package: the assignment saga."""

from .models import Assignment, AssignmentRole, AssignmentStatus
from .repository import AssignmentRepository, get_assignment_repository
from .schemas import AssignmentDTO
from .service import AssignmentService

__all__ = [
    "Assignment",
    "AssignmentDTO",
    "AssignmentRepository",
    "AssignmentRole",
    "AssignmentService",
    "AssignmentStatus",
    "get_assignment_repository",
]
