"""
Tests for the client request store.
"""
import json
import pytest
from sqlmodel import select
from sqlalchemy.exc import SQLAlchemyError
from app.crud.client_request import (
    generate_request_id,
    create_client_request,
    get_client_request,
    list_client_requests,
    update_client_request_status,
    attach_ai_summary,
    count_requests_by_status,
)
from app.models.client_request import ClientRequest, RequestStatus, RequestPriority, AISummaryPayload
from app.exceptions import ValidationError, NotFoundError, PersistenceError


def _summary(**overrides):
    values = dict(
        executiveSummary="Short summary",
        technicalAnalysis="Uses the existing API",
        implementationStrategy="Two sprints",
        financialOptimization="Quarterly billing",
        riskAssessment="Low",
        nextSteps=["Review", "Kickoff"],
        complexityScore=4.5,
        feasibilityScore=8.0,
        recommendedAction="review",
    )
    values.update(overrides)
    return AISummaryPayload.model_validate(values)


class TestGenerateRequestId:

    def test_format(self):
        request_id = generate_request_id()
        prefix, millis, suffix = request_id.split("-")
        assert prefix == "REQ"
        assert millis.isdigit()
        assert len(suffix) == 12

    def test_ten_thousand_ids_are_unique(self):
        ids = {generate_request_id() for _ in range(10000)}
        assert len(ids) == 10000


class TestCreateClientRequest:

    def test_create_sets_defaults(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)

        assert record.id is not None
        assert record.request_id.startswith("REQ-")
        assert record.status == RequestStatus.PENDING
        assert record.priority == RequestPriority.MEDIUM
        assert record.source == "website"
        assert record.created_at == record.updated_at
        assert record.full_name == "Aisyah Rahman"
        assert record.project_title == "Inventory dashboard"
        assert not record.has_ai_summary

    def test_create_accepts_snake_case_fields(self, db_session):
        record = create_client_request(db_session, {
            "full_name": "Lee Wei",
            "email": "lee@example.com",
            "request_type": "bug-report",
            "project_title": "Login issue",
            "description": "Users are logged out after every refresh.",
            "priority": "urgent",
        })
        assert record.priority == RequestPriority.URGENT
        assert record.company is None

    def test_missing_fields_are_all_reported_and_nothing_is_stored(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            create_client_request(db_session, {"fullName": "Only A Name"})

        fields = exc_info.value.fields
        for field in ("email", "requestType", "projectTitle", "description"):
            assert field in fields
        assert db_session.exec(select(ClientRequest)).all() == []

    def test_invalid_email_is_rejected(self, db_session, valid_request_data):
        valid_request_data["email"] = "not-an-email"
        with pytest.raises(ValidationError) as exc_info:
            create_client_request(db_session, valid_request_data)
        assert exc_info.value.fields == ["email"]

    def test_short_description_is_rejected(self, db_session, valid_request_data):
        valid_request_data["description"] = "too short"
        with pytest.raises(ValidationError) as exc_info:
            create_client_request(db_session, valid_request_data)
        assert "description" in exc_info.value.fields

    def test_commit_failure_raises_persistence_error(self, mock_db_session, valid_request_data):
        mock_db_session.commit.side_effect = SQLAlchemyError("disk full")

        with pytest.raises(PersistenceError):
            create_client_request(mock_db_session, valid_request_data)
        mock_db_session.rollback.assert_called_once()


class TestUpdateStatus:

    def test_accept_with_report_location(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)

        updated = update_client_request_status(
            db_session, record.request_id, "accepted", report_location="s3://reports/a.json"
        )
        assert updated.status == RequestStatus.ACCEPTED
        assert updated.report_location == "s3://reports/a.json"

    def test_invalid_status_leaves_record_unchanged(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)

        with pytest.raises(ValidationError) as exc_info:
            update_client_request_status(db_session, record.request_id, "done")
        assert exc_info.value.fields == ["status"]

        stored = get_client_request(db_session, record.request_id)
        assert stored.status == RequestStatus.PENDING

    def test_unknown_request_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            update_client_request_status(db_session, "REQ-0-MISSING", "accepted")

    def test_backward_transition_is_refused(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)
        update_client_request_status(db_session, record.request_id, "accepted")

        with pytest.raises(ValidationError):
            update_client_request_status(db_session, record.request_id, "pending")
        assert get_client_request(db_session, record.request_id).status == RequestStatus.ACCEPTED

    def test_updated_at_strictly_increases(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)
        stamps = [record.updated_at]

        for status in ("submitted", "submitted", "accepted"):
            record = update_client_request_status(db_session, record.request_id, status)
            stamps.append(record.updated_at)

        assert all(earlier < later for earlier, later in zip(stamps, stamps[1:]))

    def test_full_lifecycle(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)
        for status in ("accepted", "client approved", "implementation"):
            record = update_client_request_status(db_session, record.request_id, status)
        assert record.status == RequestStatus.IMPLEMENTATION


class TestListClientRequests:

    def test_status_filter_newest_first(self, db_session, valid_request_data):
        created = [create_client_request(db_session, valid_request_data) for _ in range(3)]
        update_client_request_status(db_session, created[1].request_id, "accepted")

        pending, total = list_client_requests(db_session, status="pending")

        assert total == 2
        assert [r.request_id for r in pending] == [created[2].request_id, created[0].request_id]

    def test_pagination(self, db_session, valid_request_data):
        for _ in range(5):
            create_client_request(db_session, valid_request_data)

        first, total = list_client_requests(db_session, page=1, limit=2)
        last, _ = list_client_requests(db_session, page=3, limit=2)

        assert total == 5
        assert len(first) == 2
        assert len(last) == 1

    def test_email_filter(self, db_session, valid_request_data):
        create_client_request(db_session, valid_request_data)
        valid_request_data["email"] = "other@example.com"
        create_client_request(db_session, valid_request_data)

        results, total = list_client_requests(db_session, email="other@example.com")
        assert total == 1
        assert results[0].email == "other@example.com"

    def test_invalid_page_and_limit(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            list_client_requests(db_session, page=0, limit=0)
        assert exc_info.value.fields == ["page", "limit"]

    def test_unknown_status_filter(self, db_session):
        with pytest.raises(ValidationError):
            list_client_requests(db_session, status="archived")

    def test_counts_by_status(self, db_session, valid_request_data):
        records = [create_client_request(db_session, valid_request_data) for _ in range(3)]
        update_client_request_status(db_session, records[0].request_id, "rejected")

        counts = count_requests_by_status(db_session)
        assert counts == {"pending": 2, "rejected": 1}


class TestAttachAISummary:

    def test_attach_sets_all_fields(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)

        updated = attach_ai_summary(db_session, record.request_id, _summary())

        assert updated.has_ai_summary
        assert updated.ai_executive_summary == "Short summary"
        assert json.loads(updated.ai_next_steps) == ["Review", "Kickoff"]
        assert updated.to_dict()["ai_next_steps"] == ["Review", "Kickoff"]
        assert updated.status == RequestStatus.PENDING

    def test_attach_replaces_previous_summary(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)
        attach_ai_summary(db_session, record.request_id, _summary())

        updated = attach_ai_summary(
            db_session, record.request_id,
            _summary(nextSteps=["Only step"], complexityScore=None, recommendedAction=None),
        )
        assert json.loads(updated.ai_next_steps) == ["Only step"]
        assert updated.ai_complexity_score is None
        assert updated.ai_recommended_action is None

    def test_attach_with_status(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)
        updated = attach_ai_summary(db_session, record.request_id, _summary(), status="accepted")
        assert updated.status == RequestStatus.ACCEPTED

    def test_attach_with_invalid_status_changes_nothing(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)

        with pytest.raises(ValidationError):
            attach_ai_summary(db_session, record.request_id, _summary(), status="finished")
        assert not get_client_request(db_session, record.request_id).has_ai_summary

    def test_attach_with_report_location(self, db_session, valid_request_data):
        record = create_client_request(db_session, valid_request_data)

        updated = attach_ai_summary(db_session, record.request_id, _summary(), status="accepted",
                                    report_location="s3://client-data/reports/r.json")
        assert updated.report_location == "s3://client-data/reports/r.json"
        assert updated.has_ai_summary


def test_count_failure_raises_persistence_error(mock_db_session):
    mock_db_session.exec.side_effect = SQLAlchemyError("connection lost")

    with pytest.raises(PersistenceError):
        count_requests_by_status(mock_db_session)
