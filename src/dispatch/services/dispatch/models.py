"""Dispatch domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ...models.domain import TechnicianId


@dataclass(slots=True)
class ScoredSuggestion:
    technician_id: TechnicianId
    score: int
    reasons: List[str] = field(default_factory=list)
    distance_miles: Optional[float] = None
    jobs_scheduled: int = 0
