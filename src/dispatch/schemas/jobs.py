"""Job status request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class StatusTransitionRequest(BaseModel):
    current_status: str = Field(..., description="Status currently persisted on the job.")
    requested_status: str = Field(..., description="Status the client wants to move the job to.")


class StatusTransitionResponse(BaseModel):
    valid: bool
    from_status: str
    to_status: str
    timestamp_field: Optional[str] = Field(
        default=None,
        description="Job timestamp the caller should record when applying the change.",
    )
    allowed_next: List[str]


class StatusDescriptionModel(BaseModel):
    status: str
    label: str
    terminal: bool
    next_statuses: List[str]
