"""Technician suggestion orchestration service."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from ...models.domain import DayJob, TechnicianCandidate
from ...schemas.dispatch import DayJobModel, SuggestionModel, SuggestionRequest, TechnicianModel
from .scorer import count_jobs_by_technician, suggest_technicians

logger = logging.getLogger(__name__)


def _day_jobs(payload: SuggestionRequest) -> list[DayJob]:
    jobs: Sequence[DayJobModel] = payload.jobs
    return [
        DayJob(job_id=job.id, technician_id=job.technician_id, status=job.status)
        for job in jobs
        if job.scheduled_date is None or job.scheduled_date == payload.scheduled_date
    ]


def _candidate(technician: TechnicianModel, workload: dict) -> TechnicianCandidate:
    return TechnicianCandidate(
        technician_id=technician.id,
        name=technician.name,
        specialties=frozenset(technician.specialties),
        location=technician.location.to_domain() if technician.location else None,
        jobs_scheduled=workload.get(technician.id, 0),
        location_updated_at=technician.location_updated_at,
    )


def suggest_for_request(payload: SuggestionRequest, *, now: datetime | None = None) -> list[SuggestionModel]:
    workload = count_jobs_by_technician(_day_jobs(payload))
    active = [technician for technician in payload.technicians if technician.is_active]
    if len(active) != len(payload.technicians):
        logger.info("Skipping %d inactive technician(s)", len(payload.technicians) - len(active))

    candidates = [_candidate(technician, workload) for technician in active]
    names = {candidate.technician_id: candidate.name for candidate in candidates}
    customer_location = payload.customer_location.to_domain() if payload.customer_location else None

    suggestions = suggest_technicians(
        service_type=payload.service_type,
        customer_location=customer_location,
        technicians=candidates,
        now=now,
    )
    return [
        SuggestionModel(
            technician_id=suggestion.technician_id,
            name=names.get(suggestion.technician_id),
            score=suggestion.score,
            reasons=suggestion.reasons,
            distance_miles=suggestion.distance_miles,
            jobs_scheduled=suggestion.jobs_scheduled,
        )
        for suggestion in suggestions
    ]
