"""Read models for the assignments feature."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict

from matchday_service.features.assignments.models import AssignmentRole, AssignmentStatus


class AssignmentDTO(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    fixture_id: uuid.UUID
    referee_id: uuid.UUID
    role: AssignmentRole
    status: AssignmentStatus
