"""Request status values, allowed transitions and the page decisions derived from them."""

from typing import Dict, List, Tuple, Union
from app.models.client_request import RequestStatus
from app.exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)

REVIEWABLE_STATUSES = {RequestStatus.PENDING, RequestStatus.SUBMITTED}
FINANCIAL_APPROVAL_STATUSES = {
    RequestStatus.ACCEPTED,
    RequestStatus.CLIENT_APPROVED,
    RequestStatus.IMPLEMENTATION,
}
INVOICE_STATUSES = {RequestStatus.CLIENT_APPROVED, RequestStatus.IMPLEMENTATION}

ALLOWED_TRANSITIONS: Dict[RequestStatus, set] = {
    RequestStatus.PENDING: {RequestStatus.SUBMITTED, RequestStatus.ACCEPTED, RequestStatus.REJECTED},
    RequestStatus.SUBMITTED: {RequestStatus.ACCEPTED, RequestStatus.REJECTED},
    RequestStatus.ACCEPTED: {RequestStatus.CLIENT_APPROVED},
    RequestStatus.CLIENT_APPROVED: {RequestStatus.IMPLEMENTATION},
    RequestStatus.REJECTED: set(),
    RequestStatus.IMPLEMENTATION: set(),
}

WORKFLOW_STEPS = [
    "Request Submitted",
    "AI Analysis",
    "Development Review",
    "Finance Review",
    "Client Approval",
    "Implementation",
]

# Index of the step that is in progress for each status
_CURRENT_STEP = {
    RequestStatus.PENDING: 1,
    RequestStatus.SUBMITTED: 1,
    RequestStatus.ACCEPTED: 3,
    RequestStatus.CLIENT_APPROVED: 5,
    RequestStatus.IMPLEMENTATION: 5,
}

_BADGES: Dict[RequestStatus, Tuple[str, str]] = {
    RequestStatus.PENDING: ("Pending", "bg-yellow-100 text-yellow-800"),
    RequestStatus.SUBMITTED: ("Pending", "bg-yellow-100 text-yellow-800"),
    RequestStatus.ACCEPTED: ("Accepted", "bg-green-100 text-green-800"),
    RequestStatus.REJECTED: ("Rejected", "bg-red-100 text-red-800"),
    RequestStatus.CLIENT_APPROVED: ("Client Approved", "bg-blue-100 text-blue-800"),
    RequestStatus.IMPLEMENTATION: ("Implementation", "bg-purple-100 text-purple-800"),
}


def parse_status(value: Union[str, RequestStatus]) -> RequestStatus:
    """Convert a caller-supplied string into a RequestStatus or raise ValidationError."""
    if isinstance(value, RequestStatus):
        return value
    normalized = value.strip().lower() if isinstance(value, str) else value
    try:
        return RequestStatus(normalized)
    except ValueError:
        allowed = ", ".join(status.value for status in RequestStatus)
        raise ValidationError(
            [{"field": "status", "message": f"Invalid status '{value}'. Allowed values: {allowed}"}]
        )


def can_transition(current: RequestStatus, target: RequestStatus) -> bool:
    """Transitions only move forward; re-applying the current status is allowed."""
    if current == target:
        return True
    return target in ALLOWED_TRANSITIONS.get(current, set())


def validate_transition(current: RequestStatus, target: RequestStatus) -> None:
    if not can_transition(current, target):
        logger.warning(f"⚠️ Rejected status transition {current.value} -> {target.value}")
        raise ValidationError(
            [{"field": "status",
              "message": f"Cannot move a request from '{current.value}' to '{target.value}'"}]
        )


def shows_review_controls(status: Union[str, RequestStatus]) -> bool:
    """Accept/Reject buttons are shown only while the request awaits review."""
    return parse_status(status) in REVIEWABLE_STATUSES


def shows_financial_approval(status: Union[str, RequestStatus]) -> bool:
    return parse_status(status) in FINANCIAL_APPROVAL_STATUSES


def invoice_unlocked(status: Union[str, RequestStatus]) -> bool:
    return parse_status(status) in INVOICE_STATUSES


def status_badge(status: Union[str, RequestStatus]) -> Tuple[str, str]:
    """Return (display name, css classes) for a status badge."""
    return _BADGES[parse_status(status)]


def workflow_steps(status: Union[str, RequestStatus]) -> List[Dict[str, str]]:
    """
    Progress tracker shown on the request detail page.

    Steps before the current one are completed. A rejected request stops at
    Development Review, which is marked rejected.
    """
    status = parse_status(status)
    if status == RequestStatus.REJECTED:
        current, marker = 2, "rejected"
    else:
        current, marker = _CURRENT_STEP[status], "current"

    steps = []
    for index, title in enumerate(WORKFLOW_STEPS):
        if index < current:
            step_status = "completed"
        elif index == current:
            step_status = marker
        else:
            step_status = "pending"
        steps.append({"id": index + 1, "title": title, "status": step_status})
    return steps
