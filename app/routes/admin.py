import json
import math
import logging
from io import BytesIO
from typing import Optional
from openpyxl import Workbook
from fastapi import APIRouter, Request, Depends, Form, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse, StreamingResponse
from fastapi.templating import Jinja2Templates
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as SchemaValidationError
from sqlmodel import Session
from app.database import get_db
from app.crud.client_request import (
    get_client_request, list_client_requests, update_client_request_status, count_requests_by_status
)
from app.crud.company_settings import (
    get_company_settings, update_company_info, update_feature_pricing, update_payment_terms
)
from app.helpers import request_status
from app.helpers.report_storage import resolve_report
from app.models.client_request import RequestStatus
from app.models.company_settings import CompanyInfo, FeaturePricing, ComplexityMultiplier, PaymentTerms
from app.exceptions import ValidationError

router = APIRouter(prefix="/admin", tags=["admin"])
templates = Jinja2Templates(directory="app/templates")
templates.env.globals["status_badge"] = request_status.status_badge

# Set up a module-level logger
logger = logging.getLogger(__name__)

EXPORT_PAGE_SIZE = 500


@router.get("/dashboard", name="admin_dashboard", response_class=HTMLResponse)
async def admin_dashboard(request: Request,
                          status: Optional[str] = None,
                          page: int = 1,
                          limit: int = 20,
                          db: Session = Depends(get_db)):
    """List client requests for review, newest first."""
    requests, total = list_client_requests(db, status=status or None, page=page, limit=limit)

    return templates.TemplateResponse(
        "admin_dashboard.html",
        {
            "request": request,
            "client_requests": requests,
            "counts": count_requests_by_status(db),
            "statuses": [s.value for s in RequestStatus],
            "status_filter": status,
            "page": page,
            "pages": math.ceil(total / limit),
            "total": total,
        }
    )


@router.get("/report", name="admin_report", response_class=HTMLResponse)
async def admin_report(request: Request,
                       requestId: str,
                       db: Session = Depends(get_db)):
    """Financial report and review controls for one request."""
    client_request = get_client_request(db, requestId)
    if not client_request:
        logger.warning(f"⚠ No client request found for id: {requestId}")
        raise HTTPException(status_code=404, detail=f"Request {requestId} not found")

    report = await run_in_threadpool(resolve_report, client_request.report_location)
    return templates.TemplateResponse(
        "admin_report.html",
        {
            "request": request,
            "client_request": client_request,
            "report": report,
            "show_review_controls": request_status.shows_review_controls(client_request.status),
            "can_start_implementation": client_request.status == RequestStatus.CLIENT_APPROVED,
            "next_steps": json.loads(client_request.ai_next_steps) if client_request.ai_next_steps else [],
        }
    )


@router.post("/report/{request_id}/status")
async def admin_update_status(request_id: str,
                              status: str = Form(...),
                              report_location: Optional[str] = Form(None),
                              db: Session = Depends(get_db)):
    """Accept, reject or move a request forward from the report page."""
    try:
        update_client_request_status(db, request_id, status, report_location=report_location or None)
    except ValidationError as e:
        logger.warning(f"⚠️ Status update refused for {request_id}: {e.errors}")
        raise HTTPException(status_code=400, detail=e.errors)

    return RedirectResponse(url=f"/admin/report?requestId={request_id}", status_code=303)


@router.get("/settings", name="admin_settings", response_class=HTMLResponse)
async def admin_settings(request: Request, db: Session = Depends(get_db)):
    settings = get_company_settings(db)
    return templates.TemplateResponse(
        "admin_settings.html",
        {
            "request": request,
            "company_info": settings.company_info(),
            "feature_pricing": settings.feature_pricing(),
            "payment_terms": settings.payment_terms(),
            "errors": [],
        }
    )


def _settings_error(request: Request, db: Session, error: SchemaValidationError):
    settings = get_company_settings(db)
    errors = [{"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"]} for e in error.errors()]
    return templates.TemplateResponse(
        "admin_settings.html",
        {
            "request": request,
            "company_info": settings.company_info(),
            "feature_pricing": settings.feature_pricing(),
            "payment_terms": settings.payment_terms(),
            "errors": errors,
        },
        status_code=400,
    )


@router.post("/settings/company-info")
async def save_company_info(request: Request,
                            company_name: str = Form(...),
                            industry: str = Form(""),
                            business_model: str = Form(""),
                            minimum_revenue: float = Form(0),
                            base_currency: str = Form("MYR"),
                            tax_rate: float = Form(0),
                            default_discount: float = Form(0),
                            db: Session = Depends(get_db)):
    try:
        info = CompanyInfo(company_name=company_name, industry=industry, business_model=business_model,
                           minimum_revenue=minimum_revenue, base_currency=base_currency,
                           tax_rate=tax_rate, default_discount=default_discount)
    except SchemaValidationError as e:
        return _settings_error(request, db, e)

    update_company_info(db, info)
    return RedirectResponse(url="/admin/settings", status_code=303)


@router.post("/settings/feature-pricing")
async def save_feature_pricing(request: Request,
                               base_price: float = Form(...),
                               development_hourly_rate: float = Form(...),
                               multiplier_low: float = Form(1.0),
                               multiplier_medium: float = Form(1.5),
                               multiplier_high: float = Form(2.5),
                               db: Session = Depends(get_db)):
    try:
        pricing = FeaturePricing(
            base_price=base_price,
            development_hourly_rate=development_hourly_rate,
            complexity_multiplier=ComplexityMultiplier(
                low=multiplier_low, medium=multiplier_medium, high=multiplier_high
            ),
        )
    except SchemaValidationError as e:
        return _settings_error(request, db, e)

    update_feature_pricing(db, pricing)
    return RedirectResponse(url="/admin/settings", status_code=303)


@router.post("/settings/payment-terms")
async def save_payment_terms(request: Request,
                             default_payment_days: int = Form(...),
                             installment_options: str = Form(""),
                             early_payment_discount: float = Form(0),
                             db: Session = Depends(get_db)):
    # "2, 3, 6, 12" -> [2, 3, 6, 12]; entries that are not numbers are dropped
    options = [int(part) for part in (p.strip() for p in installment_options.split(",")) if part.isdigit()]
    try:
        terms = PaymentTerms(default_payment_days=default_payment_days,
                             installment_options=options,
                             early_payment_discount=early_payment_discount)
    except SchemaValidationError as e:
        return _settings_error(request, db, e)

    update_payment_terms(db, terms)
    return RedirectResponse(url="/admin/settings", status_code=303)


@router.get("/export/requests")
async def export_requests(status: Optional[str] = None, db: Session = Depends(get_db)):
    """Export client requests to an Excel file."""
    logger.info(f"🔍 Exporting client requests (status filter: {status}) to Excel.")

    wb = Workbook()
    ws = wb.active
    ws.title = "Client Requests"

    # Write header
    ws.append([
        "Request ID", "Full Name", "Email", "Company", "Request Type", "Project Title",
        "Timeline", "Budget", "Status", "Priority", "Created At", "Updated At"
    ])

    page = 1
    while True:
        requests, total = list_client_requests(db, status=status or None, page=page, limit=EXPORT_PAGE_SIZE)
        for result in requests:
            ws.append([
                result.request_id,
                result.full_name,
                result.email,
                result.company or "",
                result.request_type,
                result.project_title,
                result.timeline or "",
                result.budget or "",
                result.status.value,
                result.priority.value,
                result.created_at.strftime("%Y-%m-%d %H:%M:%S"),
                result.updated_at.strftime("%Y-%m-%d %H:%M:%S"),
            ])
        if page * EXPORT_PAGE_SIZE >= total:
            break
        page += 1

    # Save to in-memory bytes buffer
    output = BytesIO()
    wb.save(output)
    output.seek(0)

    response = StreamingResponse(
        output,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    response.headers["Content-Disposition"] = "attachment; filename=client_requests.xlsx"
    return response
