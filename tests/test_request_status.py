import pytest
from app.helpers.request_status import (
    parse_status,
    can_transition,
    validate_transition,
    shows_review_controls,
    shows_financial_approval,
    invoice_unlocked,
    status_badge,
    workflow_steps,
)
from app.models.client_request import RequestStatus
from app.exceptions import ValidationError


@pytest.mark.parametrize("value, expected", [
    ("pending", RequestStatus.PENDING),
    (" Accepted ", RequestStatus.ACCEPTED),
    ("client approved", RequestStatus.CLIENT_APPROVED),
    (RequestStatus.IMPLEMENTATION, RequestStatus.IMPLEMENTATION),
])
def test_parse_status(value, expected):
    assert parse_status(value) == expected


@pytest.mark.parametrize("value", ["done", "", "client_approved"])
def test_parse_status_rejects_unknown_values(value):
    with pytest.raises(ValidationError) as exc_info:
        parse_status(value)
    assert exc_info.value.fields == ["status"]


@pytest.mark.parametrize("current, target, allowed", [
    (RequestStatus.PENDING, RequestStatus.ACCEPTED, True),
    (RequestStatus.PENDING, RequestStatus.REJECTED, True),
    (RequestStatus.SUBMITTED, RequestStatus.ACCEPTED, True),
    (RequestStatus.ACCEPTED, RequestStatus.CLIENT_APPROVED, True),
    (RequestStatus.CLIENT_APPROVED, RequestStatus.IMPLEMENTATION, True),
    (RequestStatus.ACCEPTED, RequestStatus.ACCEPTED, True),
    (RequestStatus.PENDING, RequestStatus.CLIENT_APPROVED, False),
    (RequestStatus.ACCEPTED, RequestStatus.PENDING, False),
    (RequestStatus.REJECTED, RequestStatus.ACCEPTED, False),
    (RequestStatus.IMPLEMENTATION, RequestStatus.CLIENT_APPROVED, False),
])
def test_can_transition(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_validate_transition_raises():
    with pytest.raises(ValidationError):
        validate_transition(RequestStatus.REJECTED, RequestStatus.IMPLEMENTATION)


def test_review_controls_only_while_awaiting_review():
    assert shows_review_controls("pending")
    assert shows_review_controls("submitted")
    for status in ("accepted", "rejected", "client approved", "implementation"):
        assert not shows_review_controls(status)


def test_financial_approval_and_invoice_visibility():
    assert not shows_financial_approval("pending")
    assert shows_financial_approval("accepted")
    assert shows_financial_approval("implementation")

    assert not invoice_unlocked("accepted")
    assert invoice_unlocked("client approved")
    assert invoice_unlocked("implementation")


def test_submitted_displays_as_pending():
    assert status_badge("submitted") == status_badge("pending")
    assert status_badge("client approved")[0] == "Client Approved"


def test_workflow_steps_for_pending():
    steps = workflow_steps("pending")
    assert [s["status"] for s in steps] == [
        "completed", "current", "pending", "pending", "pending", "pending"
    ]
    assert steps[0]["title"] == "Request Submitted"


def test_workflow_steps_for_rejected():
    steps = workflow_steps(RequestStatus.REJECTED)
    assert steps[2]["status"] == "rejected"
    assert steps[2]["title"] == "Development Review"
    assert [s["status"] for s in steps[3:]] == ["pending"] * 3


def test_workflow_steps_for_client_approved():
    steps = workflow_steps("client approved")
    assert [s["status"] for s in steps[:5]] == ["completed"] * 4 + ["current"]
