"""Domain models for jobs, technicians and locations."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

JobId = Union[int, str]
TechnicianId = Union[int, str]


class JobStatus(str, Enum):
    """Lifecycle status of a field-service job."""

    SCHEDULED = "scheduled"
    ASSIGNED = "assigned"
    EN_ROUTE = "en_route"
    ARRIVED = "arrived"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees; either part may be unknown."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def is_known(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def as_pair(self) -> tuple[float, float]:
        if not self.is_known:
            raise ValueError("Coordinate is missing latitude or longitude.")
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class TechnicianCandidate:
    """Snapshot of an active technician considered for a job."""

    technician_id: TechnicianId
    specialties: frozenset[str] = field(default_factory=frozenset)
    location: Optional[Coordinate] = None
    jobs_scheduled: int = 0
    location_updated_at: Optional[datetime] = None
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DayJob:
    """A job already on the schedule for the day being dispatched."""

    job_id: JobId
    technician_id: Optional[TechnicianId]
    status: str
