"""Job status state machine.

Decides whether a proposed status change is legal independently of storage.
Jobs may move forward through the visit lifecycle, step back one stage when a
technician is redispatched, and be cancelled from any non-terminal state.
Cancelled jobs can be rescheduled; completed jobs are final.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ...models.domain import JobStatus

StatusLike = Union[JobStatus, str]

VALID_TRANSITIONS: dict[JobStatus, tuple[JobStatus, ...]] = {
    JobStatus.SCHEDULED: (JobStatus.ASSIGNED, JobStatus.EN_ROUTE, JobStatus.CANCELLED),
    JobStatus.ASSIGNED: (JobStatus.EN_ROUTE, JobStatus.SCHEDULED, JobStatus.CANCELLED),
    JobStatus.EN_ROUTE: (JobStatus.ARRIVED, JobStatus.ASSIGNED, JobStatus.SCHEDULED, JobStatus.CANCELLED),
    JobStatus.ARRIVED: (JobStatus.IN_PROGRESS, JobStatus.EN_ROUTE, JobStatus.CANCELLED),
    JobStatus.IN_PROGRESS: (JobStatus.COMPLETED, JobStatus.ARRIVED, JobStatus.CANCELLED),
    JobStatus.COMPLETED: (),
    JobStatus.CANCELLED: (JobStatus.SCHEDULED,),
}

STATUS_TIMESTAMP_FIELDS: dict[JobStatus, str] = {
    JobStatus.ASSIGNED: "assigned_at",
    JobStatus.EN_ROUTE: "en_route_at",
    JobStatus.ARRIVED: "arrived_at",
    JobStatus.IN_PROGRESS: "started_at",
    JobStatus.COMPLETED: "completed_at",
}


@dataclass(frozen=True, slots=True)
class TransitionResult:
    valid: bool
    message: Optional[str] = None


def parse_status(value: StatusLike | None) -> JobStatus | None:
    """Return the matching JobStatus, or None for unknown values."""

    if isinstance(value, JobStatus):
        return value
    if value is None:
        return None
    try:
        return JobStatus(str(value).strip().lower())
    except ValueError:
        return None


def _label(value: StatusLike | None) -> str:
    return value.value if isinstance(value, JobStatus) else str(value)


def get_valid_next_statuses(current: StatusLike) -> tuple[JobStatus, ...]:
    status = parse_status(current)
    if status is None:
        return ()
    return VALID_TRANSITIONS[status]


def is_valid_transition(current: StatusLike, requested: StatusLike) -> bool:
    origin = parse_status(current)
    target = parse_status(requested)
    if origin is not None and origin is target:
        return True
    if origin is None and _label(current) == _label(requested):
        return True
    return target is not None and target in get_valid_next_statuses(current)


def validate_status_transition(current: StatusLike, requested: StatusLike) -> TransitionResult:
    """Check a status change and describe the allowed alternatives when it is illegal.

    Never raises: an illegal transition is a normal outcome the caller reports
    to the user (the HTTP layer answers 409 Conflict with the message).
    """

    if is_valid_transition(current, requested):
        return TransitionResult(valid=True)

    allowed = ", ".join(status.value for status in get_valid_next_statuses(current)) or "none"
    if parse_status(current) is None:
        return TransitionResult(
            valid=False,
            message=f'Unknown status "{_label(current)}". Allowed transitions: {allowed}',
        )
    return TransitionResult(
        valid=False,
        message=(
            f'Cannot transition from "{_label(current)}" to "{_label(requested)}". '
            f"Allowed transitions: {allowed}"
        ),
    )


def is_terminal(status: StatusLike) -> bool:
    parsed = parse_status(status)
    return parsed is not None and not VALID_TRANSITIONS[parsed]


def status_timestamp_field(status: StatusLike) -> str | None:
    """Name of the job timestamp recorded when a job enters ``status``."""

    parsed = parse_status(status)
    if parsed is None:
        return None
    return STATUS_TIMESTAMP_FIELDS.get(parsed)


def format_status(status: StatusLike) -> str:
    # in_progress -> In Progress
    return " ".join(part.capitalize() for part in _label(status).split("_") if part)
