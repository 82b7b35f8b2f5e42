"""Job status orchestration service."""

from __future__ import annotations

from ...models.domain import JobStatus
from ...schemas.jobs import StatusDescriptionModel, StatusTransitionRequest, StatusTransitionResponse
from .state_machine import (
    format_status,
    get_valid_next_statuses,
    is_terminal,
    parse_status,
    status_timestamp_field,
    validate_status_transition,
)


class InvalidTransitionError(Exception):
    """Raised when a requested status change is not allowed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def check_status_change(payload: StatusTransitionRequest) -> StatusTransitionResponse:
    verdict = validate_status_transition(payload.current_status, payload.requested_status)
    if not verdict.valid:
        raise InvalidTransitionError(verdict.message or "Invalid status transition")

    origin = parse_status(payload.current_status)
    target = parse_status(payload.requested_status)
    # a self-loop is a no-op, nothing to timestamp
    changed = target is not None and target is not origin
    return StatusTransitionResponse(
        valid=True,
        from_status=origin.value if origin else payload.current_status,
        to_status=target.value if target else payload.requested_status,
        timestamp_field=status_timestamp_field(target) if changed else None,
        allowed_next=[status.value for status in get_valid_next_statuses(payload.requested_status)],
    )


def describe_status(status: JobStatus) -> StatusDescriptionModel:
    return StatusDescriptionModel(
        status=status.value,
        label=format_status(status),
        terminal=is_terminal(status),
        next_statuses=[item.value for item in get_valid_next_statuses(status)],
    )


def describe_all_statuses() -> list[StatusDescriptionModel]:
    return [describe_status(status) for status in JobStatus]


def describe_status_by_name(name: str) -> StatusDescriptionModel:
    status = parse_status(name)
    if status is None:
        raise LookupError(f"Unknown job status '{name}'.")
    return describe_status(status)
