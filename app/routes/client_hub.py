import json
import logging
from typing import Optional
from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from fastapi.concurrency import run_in_threadpool
from sqlmodel import Session
from app.database import get_db
from app.crud.client_request import get_client_request, list_client_requests, update_client_request_status
from app.crud.company_settings import get_company_settings
from app.helpers import request_status
from app.helpers.invoice import build_invoice
from app.helpers.report_storage import resolve_report
from app.models.client_request import RequestStatus
from app.exceptions import ValidationError

router = APIRouter()
templates = Jinja2Templates(directory="app/templates")
templates.env.globals["status_badge"] = request_status.status_badge

# Set up a module-level logger
logger = logging.getLogger(__name__)

ACTIVE_STATUSES = {RequestStatus.PENDING, RequestStatus.SUBMITTED,
                   RequestStatus.ACCEPTED, RequestStatus.CLIENT_APPROVED}


@router.get("/clienthub", name="client_hub", response_class=HTMLResponse)
async def client_hub(request: Request,
                     email: Optional[str] = None,
                     page: int = 1,
                     db: Session = Depends(get_db)):
    """List the requests submitted with an email address."""
    requests, total = ([], 0)
    if email:
        logger.info(f"🔍 Loading client hub for {email}")
        requests, total = list_client_requests(db, email=email, page=max(page, 1), limit=20)

    return templates.TemplateResponse(
        "client_hub.html",
        {
            "request": request,
            "email": email,
            "active_requests": [r for r in requests if r.status in ACTIVE_STATUSES],
            "closed_requests": [r for r in requests if r.status not in ACTIVE_STATUSES],
            "total": total,
        }
    )


@router.get("/requestdetail", name="request_detail", response_class=HTMLResponse)
async def request_detail(request: Request,
                         id: str,
                         tab: str = "overview",
                         db: Session = Depends(get_db)):
    """Show progress, financial approval and invoice views for one request."""
    client_request = get_client_request(db, id)
    if not client_request:
        logger.warning(f"⚠ No client request found for id: {id}")
        raise HTTPException(status_code=404, detail=f"Request {id} not found")

    show_financial = request_status.shows_financial_approval(client_request.status)
    report = None
    if show_financial:
        # storage download runs off the event loop
        report = await run_in_threadpool(resolve_report, client_request.report_location)
    invoice = None
    if request_status.invoice_unlocked(client_request.status):
        invoice = build_invoice(client_request, get_company_settings(db))

    return templates.TemplateResponse(
        "request_detail.html",
        {
            "request": request,
            "client_request": client_request,
            "tab": "invoices" if tab == "invoices" else "overview",
            "steps": request_status.workflow_steps(client_request.status),
            "show_financial_approval": show_financial,
            "can_approve": client_request.status == RequestStatus.ACCEPTED,
            "report": report,
            "invoice": invoice,
            "next_steps": json.loads(client_request.ai_next_steps) if client_request.ai_next_steps else [],
        }
    )


@router.post("/requestdetail/{request_id}/approve")
async def approve_request(request_id: str, db: Session = Depends(get_db)):
    """Client approves the financial proposal of an accepted request."""
    try:
        update_client_request_status(db, request_id, RequestStatus.CLIENT_APPROVED)
    except ValidationError as e:
        logger.warning(f"⚠️ Client approval refused for {request_id}: {e.errors}")
        raise HTTPException(status_code=400, detail=e.errors)

    logger.info(f"✅ Client approved request {request_id}")
    return RedirectResponse(url=f"/requestdetail?id={request_id}&tab=invoices", status_code=303)
