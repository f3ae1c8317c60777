from sqlmodel import Session, select, func
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as SchemaValidationError
from app.models.client_request import (
    ClientRequest, ClientRequestCreate, AISummaryPayload, RequestPriority, RequestStatus
)
from app.helpers.request_status import parse_status, validate_transition
from app.exceptions import ValidationError, NotFoundError, PersistenceError
from datetime import datetime, timedelta
from typing import Optional, Tuple, List, Union
import secrets
import json
import time
import logging

logger = logging.getLogger(__name__)

REQUEST_ID_PREFIX = "REQ"


def generate_request_id() -> str:
    """Time based identifier: prefix, epoch milliseconds and a random suffix."""
    return f"{REQUEST_ID_PREFIX}-{int(time.time() * 1000)}-{secrets.token_hex(6).upper()}"


def _field_errors(error: SchemaValidationError) -> List[dict]:
    errors = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "body"
        errors.append({"field": field, "message": item["msg"]})
    return errors


def validate_client_request(data: Union[dict, ClientRequestCreate]) -> ClientRequestCreate:
    """Validate submission input, collecting every missing or invalid field."""
    if isinstance(data, ClientRequestCreate):
        return data
    try:
        return ClientRequestCreate.model_validate(data)
    except SchemaValidationError as e:
        errors = _field_errors(e)
        logger.warning(f"⚠️ Client request rejected, invalid fields: {[err['field'] for err in errors]}")
        raise ValidationError(errors)


def _touch(record: ClientRequest) -> None:
    """Stamp updated_at, keeping it strictly increasing."""
    now = datetime.utcnow()
    if record.updated_at and now <= record.updated_at:
        now = record.updated_at + timedelta(microseconds=1)
    record.updated_at = now


def _commit(db: Session, record: ClientRequest, action: str) -> ClientRequest:
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
        return record
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to {action} client request {record.request_id}: {str(e)}")
        db.rollback()
        raise PersistenceError(f"Failed to {action} client request")


def create_client_request(db: Session, data: Union[dict, ClientRequestCreate]) -> ClientRequest:
    """Create a new client request with status pending."""
    validated = validate_client_request(data)

    client_request = ClientRequest(
        request_id=generate_request_id(),
        full_name=validated.full_name,
        email=validated.email,
        company=validated.company or None,
        phone_number=validated.phone_number or None,
        request_type=validated.request_type,
        project_title=validated.project_title,
        description=validated.description,
        timeline=validated.timeline or None,
        budget=validated.budget or None,
        technical_requirements=validated.technical_requirements or None,
        business_goals=validated.business_goals or None,
        current_challenges=validated.current_challenges or None,
        expected_outcome=validated.expected_outcome or None,
        status=RequestStatus.PENDING,
        priority=validated.priority or RequestPriority.MEDIUM,
        source="website",
    )
    client_request.updated_at = client_request.created_at

    client_request = _commit(db, client_request, "create")
    logger.info(f"✅ Created client request {client_request.request_id} for {client_request.email}")
    return client_request


def get_client_request(db: Session, request_id: str) -> Optional[ClientRequest]:
    """Get a single client request by its public identifier."""
    try:
        return db.exec(
            select(ClientRequest).where(ClientRequest.request_id == request_id)
        ).first()
    except SQLAlchemyError as e:
        logger.error(f"Failed to get client request {request_id}: {str(e)}")
        raise PersistenceError("Failed to read client request")


def list_client_requests(
    db: Session,
    status: Optional[Union[str, RequestStatus]] = None,
    email: Optional[str] = None,
    page: int = 1,
    limit: int = 10
) -> Tuple[List[ClientRequest], int]:
    """Return one page of client requests, newest first, plus the total match count."""
    errors = []
    if page < 1:
        errors.append({"field": "page", "message": "page must be at least 1"})
    if limit < 1:
        errors.append({"field": "limit", "message": "limit must be at least 1"})
    if errors:
        raise ValidationError(errors)

    query = select(ClientRequest)
    count_query = select(func.count()).select_from(ClientRequest)

    if status:
        status = parse_status(status)
        query = query.where(ClientRequest.status == status)
        count_query = count_query.where(ClientRequest.status == status)
        logger.info(f"🔍 Filtering client requests by status: {status.value}")

    if email:
        query = query.where(ClientRequest.email == email)
        count_query = count_query.where(ClientRequest.email == email)

    query = (query.order_by(ClientRequest.created_at.desc(), ClientRequest.id.desc())
                  .offset((page - 1) * limit)
                  .limit(limit))

    try:
        results = db.exec(query).all()
        total = db.exec(count_query).one()
    except SQLAlchemyError as e:
        logger.error(f"Failed to list client requests: {str(e)}")
        raise PersistenceError("Failed to read client requests")

    logger.info(f"Retrieved {len(results)} of {total} client requests (page {page})")
    return results, total


def _get_or_raise(db: Session, request_id: str) -> ClientRequest:
    client_request = get_client_request(db, request_id)
    if not client_request:
        logger.error(f"Client request {request_id} not found")
        raise NotFoundError(f"Request {request_id} not found")
    return client_request


def update_client_request_status(
    db: Session,
    request_id: str,
    status: Union[str, RequestStatus],
    report_location: Optional[str] = None
) -> ClientRequest:
    """Move a request to a new status, optionally recording its report location."""
    new_status = parse_status(status)
    client_request = _get_or_raise(db, request_id)
    validate_transition(client_request.status, new_status)

    previous = client_request.status
    client_request.status = new_status
    if report_location:
        client_request.report_location = report_location
    _touch(client_request)

    client_request = _commit(db, client_request, "update")
    logger.info(f"Updated client request {request_id} status {previous.value} -> {new_status.value}")
    return client_request


def attach_ai_summary(
    db: Session,
    request_id: str,
    summary: AISummaryPayload,
    status: Optional[Union[str, RequestStatus]] = None,
    report_location: Optional[str] = None
) -> ClientRequest:
    """Replace the AI enhanced summary of a request as a whole, optionally moving its status."""
    new_status = parse_status(status) if status else None
    client_request = _get_or_raise(db, request_id)
    if new_status:
        validate_transition(client_request.status, new_status)
        client_request.status = new_status
    if report_location:
        client_request.report_location = report_location

    client_request.ai_executive_summary = summary.executive_summary
    client_request.ai_technical_analysis = summary.technical_analysis
    client_request.ai_implementation_strategy = summary.implementation_strategy
    client_request.ai_financial_optimization = summary.financial_optimization
    client_request.ai_risk_assessment = summary.risk_assessment
    client_request.ai_next_steps = json.dumps(summary.next_steps)
    client_request.ai_complexity_score = summary.complexity_score
    client_request.ai_feasibility_score = summary.feasibility_score
    client_request.ai_recommended_action = summary.recommended_action
    client_request.ai_processed_at = datetime.utcnow()
    _touch(client_request)

    client_request = _commit(db, client_request, "attach AI summary to")
    logger.info(f"🤖 Attached AI summary to client request {request_id}")
    return client_request


def count_requests_by_status(db: Session) -> dict:
    """Counts per status for the admin dashboard cards."""
    try:
        rows = db.exec(
            select(ClientRequest.status, func.count(ClientRequest.id)).group_by(ClientRequest.status)
        ).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to count client requests: {str(e)}")
        raise PersistenceError("Failed to count client requests")
    return {status.value if isinstance(status, RequestStatus) else status: count for status, count in rows}
