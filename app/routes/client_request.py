import math
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Body, BackgroundTasks
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaValidationError
from sqlmodel import Session
from app.database import get_db
from app.crud.client_request import (
    create_client_request,
    get_client_request,
    list_client_requests,
    update_client_request_status,
    attach_ai_summary,
)
from app.helpers.ai_processing import build_request_summary
from app.helpers.notifications import forward_request_update
from app.models.client_request import StatusUpdateRequest
from app.exceptions import ValidationError, NotFoundError

router = APIRouter(prefix="/api/requests", tags=["requests"])

# Set up a module-level logger
logger = logging.getLogger(__name__)


@router.post("/client")
async def submit_client_request(data: dict = Body(...),
                                db: Session = Depends(get_db)):
    """Create a client request from the submission form."""
    client_request = create_client_request(db, data)

    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "message": "Request submitted successfully",
            "requestId": client_request.request_id,
            "data": client_request.to_dict(),
        }
    )


@router.get("/client")
async def fetch_client_requests(requestId: Optional[str] = None,
                                status: Optional[str] = None,
                                email: Optional[str] = None,
                                page: int = 1,
                                limit: int = 10,
                                db: Session = Depends(get_db)):
    """Return one request by id, or a page of requests newest first."""
    if requestId:
        logger.info(f"🔍 Fetching client request {requestId}")
        client_request = get_client_request(db, requestId)
        records = [client_request] if client_request else []
        total = len(records)
    else:
        records, total = list_client_requests(db, status=status, email=email, page=page, limit=limit)

    return {
        "success": True,
        "data": [record.to_dict() for record in records],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
        }
    }


@router.patch("/client")
async def update_client_request(background_tasks: BackgroundTasks,
                                data: dict = Body(...),
                                db: Session = Depends(get_db)):
    """
    Update a request's status.

    With an ``aiSummary`` payload the summary is attached as well and the updated
    record is forwarded to the notification webhook after the response.
    """
    try:
        update = StatusUpdateRequest.model_validate(data)
    except SchemaValidationError as e:
        raise ValidationError([
            {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
            for error in e.errors()
        ])

    if update.ai_summary:
        client_request = attach_ai_summary(db, update.request_id, update.ai_summary,
                                           status=update.status, report_location=update.report_location)
        background_tasks.add_task(forward_request_update, client_request.to_dict())
    else:
        client_request = update_client_request_status(
            db, update.request_id, update.status, report_location=update.report_location
        )

    return {"success": True, "data": client_request.to_dict()}


@router.post("/process-ai")
async def process_request_with_ai(background_tasks: BackgroundTasks,
                                  data: dict = Body(...),
                                  db: Session = Depends(get_db)):
    """Run the mock analysis on a stored request and attach the summary."""
    request_id = data.get("requestId")
    if not request_id:
        raise ValidationError([{"field": "requestId", "message": "requestId is required"}])

    client_request = get_client_request(db, request_id)
    if not client_request:
        raise NotFoundError(f"Request {request_id} not found")

    if client_request.has_ai_summary:
        return {"success": True, "message": "AI summary already exists", "data": client_request.to_dict()}

    summary = build_request_summary(client_request)
    client_request = attach_ai_summary(db, request_id, summary)
    background_tasks.add_task(forward_request_update, client_request.to_dict())

    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "message": "AI processing completed successfully",
            "data": client_request.to_dict(),
        }
    )
