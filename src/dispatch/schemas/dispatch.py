"""Technician suggestion request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .common import CoordinateModel


class TechnicianModel(BaseModel):
    id: Union[int, str]
    name: Optional[str] = None
    specialties: List[str] = Field(default_factory=list)
    location: Optional[CoordinateModel] = None
    location_updated_at: Optional[datetime] = None
    is_active: bool = True


class DayJobModel(BaseModel):
    id: Union[int, str]
    technician_id: Optional[Union[int, str]] = None
    status: str
    scheduled_date: Optional[date] = Field(
        default=None,
        description="When set, jobs on other dates are ignored for workload counting.",
    )


class SuggestionRequest(BaseModel):
    service_type: str = Field(..., description="Service type such as 'hvac_repair'.")
    scheduled_date: date
    customer_location: Optional[CoordinateModel] = None
    technicians: List[TechnicianModel]
    jobs: List[DayJobModel] = Field(default_factory=list, description="Jobs already scheduled that day.")


class SuggestionModel(BaseModel):
    technician_id: Union[int, str]
    name: Optional[str] = None
    score: int
    reasons: List[str]
    distance_miles: Optional[float] = None
    jobs_scheduled: int
