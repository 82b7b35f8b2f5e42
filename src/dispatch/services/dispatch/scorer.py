"""Technician suggestion scoring."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence

from ...config import settings
from ...models.domain import Coordinate, DayJob, JobStatus, TechnicianCandidate, TechnicianId
from ..geospatial import distance_between
from ..jobs.state_machine import parse_status
from .models import ScoredSuggestion

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScoringWeights:
    base_score: int = field(default_factory=lambda: settings.base_score)
    specialty_match_bonus: int = field(default_factory=lambda: settings.specialty_match_bonus)
    workload_penalty_per_job: int = field(default_factory=lambda: settings.workload_penalty_per_job)
    heavy_workload_threshold: int = field(default_factory=lambda: settings.heavy_workload_threshold)
    proximity_near_miles: float = field(default_factory=lambda: settings.proximity_near_miles)
    proximity_mid_miles: float = field(default_factory=lambda: settings.proximity_mid_miles)
    proximity_near_bonus: int = field(default_factory=lambda: settings.proximity_near_bonus)
    proximity_mid_bonus: int = field(default_factory=lambda: settings.proximity_mid_bonus)
    location_freshness_minutes: int = field(default_factory=lambda: settings.location_freshness_minutes)
    location_freshness_bonus: int = field(default_factory=lambda: settings.location_freshness_bonus)
    suggestion_limit: int = field(default_factory=lambda: settings.suggestion_limit)


def service_category(service_type: str | None) -> str:
    """Return the category prefix of a service type (``hvac_repair`` -> ``hvac``)."""

    return (service_type or "").split("_", 1)[0].strip().lower()


def count_jobs_by_technician(day_jobs: Iterable[DayJob]) -> dict[TechnicianId, int]:
    """Count the day's assigned jobs per technician, ignoring cancelled ones."""

    counts: Counter = Counter()
    for job in day_jobs:
        if job.technician_id is None:
            continue
        if parse_status(job.status) is JobStatus.CANCELLED:
            continue
        counts[job.technician_id] += 1
    return dict(counts)


def _workload_reason(jobs_scheduled: int, heavy_threshold: int) -> str:
    if jobs_scheduled == 0:
        return "No jobs scheduled that day"
    if jobs_scheduled < heavy_threshold:
        return f"{jobs_scheduled} job(s) scheduled"
    return f"Heavy workload: {jobs_scheduled} jobs"


def _as_aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _location_is_fresh(updated_at: datetime | None, now: datetime, window_minutes: int) -> bool:
    if updated_at is None:
        return False
    return _as_aware(now) - _as_aware(updated_at) < timedelta(minutes=window_minutes)


def score_technician(
    technician: TechnicianCandidate,
    *,
    category: str,
    customer_location: Coordinate | None,
    now: datetime,
    weights: ScoringWeights,
) -> ScoredSuggestion:
    score = weights.base_score
    reasons: list[str] = []

    specialties = {tag.strip().lower() for tag in technician.specialties}
    if category and category in specialties:
        score += weights.specialty_match_bonus
        reasons.append(f"Specialized in {category}")

    jobs_scheduled = max(0, technician.jobs_scheduled)
    score -= weights.workload_penalty_per_job * jobs_scheduled
    reasons.append(_workload_reason(jobs_scheduled, weights.heavy_workload_threshold))

    distance = distance_between(customer_location, technician.location)
    distance_miles: float | None = None
    if distance is not None:
        distance_miles = round(distance, 1)
        if distance < weights.proximity_near_miles:
            score += weights.proximity_near_bonus
            reasons.append(f"Very close: {distance_miles:.1f} mi away")
        elif distance < weights.proximity_mid_miles:
            score += weights.proximity_mid_bonus
            reasons.append(f"Nearby: {distance_miles:.1f} mi away")
        else:
            reasons.append(f"{distance_miles:.1f} mi away")

    if _location_is_fresh(technician.location_updated_at, now, weights.location_freshness_minutes):
        score += weights.location_freshness_bonus
        reasons.append("Location updated recently")

    return ScoredSuggestion(
        technician_id=technician.technician_id,
        score=score,
        reasons=reasons,
        distance_miles=distance_miles,
        jobs_scheduled=jobs_scheduled,
    )


def suggest_technicians(
    *,
    service_type: str,
    customer_location: Coordinate | None,
    technicians: Sequence[TechnicianCandidate],
    now: datetime | None = None,
    weights: ScoringWeights | None = None,
) -> list[ScoredSuggestion]:
    """Rank technicians for a job and return the best few.

    Scores are additive from a base of 100: specialty match, same-day workload,
    proximity to the customer and location freshness. Sorting is stable, so
    equally scored technicians keep their roster order.
    """

    if technicians is None:
        raise ValueError("A technician roster is required to compute suggestions.")
    weights = weights or ScoringWeights()
    now = now or datetime.now(timezone.utc)
    category = service_category(service_type)

    scored = [
        score_technician(
            technician,
            category=category,
            customer_location=customer_location,
            now=now,
            weights=weights,
        )
        for technician in technicians
    ]
    ranked = sorted(scored, key=lambda suggestion: -suggestion.score)
    logger.debug(
        "Scored %d technician(s) for category '%s'; returning top %d",
        len(scored),
        category,
        min(len(ranked), weights.suggestion_limit),
    )
    return ranked[: weights.suggestion_limit]
