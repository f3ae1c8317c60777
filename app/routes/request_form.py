import logging
from fastapi import APIRouter, Request, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError as SchemaValidationError
from sqlmodel import Session
from app.database import get_db
from app.crud.client_request import create_client_request
from app.helpers.ai_processing import build_draft_preview
from app.models.draft_request import DraftRequest, UserTypes
from app.exceptions import ValidationError

router = APIRouter()
templates = Jinja2Templates(directory="app/templates")

# Set up a module-level logger
logger = logging.getLogger(__name__)

DRAFT_TEXT_FIELDS = (
    "full_name", "email", "company", "feature_description", "priority_level",
    "expected_timeline", "business_justification", "payment_preference",
    "monthly_revenue", "seasonal_patterns", "preferred_payment_months",
    "budget_constraints", "financial_year_cycle",
)


def _int_field(form, name: str) -> int:
    value = (form.get(name) or "").strip()
    return int(value) if value.isdigit() else 0


def draft_from_form(form) -> DraftRequest:
    """Build a draft from the enterprise request form fields."""
    values = {name: form.get(name) or None for name in DRAFT_TEXT_FIELDS}
    values["full_name"] = values["full_name"] or ""
    values["email"] = values["email"] or ""
    values["feature_description"] = values["feature_description"] or ""
    values["priority_level"] = values["priority_level"] or "medium"

    return DraftRequest(
        number_of_seats=_int_field(form, "number_of_seats"),
        user_types=UserTypes(
            admin=_int_field(form, "admin_users"),
            standard=_int_field(form, "standard_users"),
            viewer=_int_field(form, "viewer_users"),
        ),
        **values,
    )


def _render_form(request: Request, draft: DraftRequest = None, errors: list = None, status_code: int = 200):
    return templates.TemplateResponse(
        "request_form.html",
        {"request": request, "draft": draft or DraftRequest(), "errors": errors or []},
        status_code=status_code,
    )


@router.get("/request", name="request_form", response_class=HTMLResponse)
async def request_form(request: Request):
    """Display the enterprise feature request form."""
    return _render_form(request)


@router.post("/request/preview", response_class=HTMLResponse)
async def preview_request(request: Request):
    """Show the confirmation page for a draft without storing anything."""
    form = await request.form()
    draft = draft_from_form(form)
    preview = build_draft_preview(draft)

    logger.info(f"📝 Previewing draft request for {draft.email or 'anonymous requester'}")
    return templates.TemplateResponse(
        "request_confirmation.html",
        {
            "request": request,
            "draft": draft,
            "draft_json": draft.model_dump_json(),
            "preview": preview,
        }
    )


@router.post("/request/edit", response_class=HTMLResponse)
async def edit_request(request: Request, draft: str = Form(...)):
    """Return to the form with the draft filled in."""
    try:
        draft_request = DraftRequest.model_validate_json(draft)
    except SchemaValidationError:
        draft_request = None
    return _render_form(request, draft=draft_request)


@router.post("/request/commit")
async def commit_request(request: Request,
                         draft: str = Form(...),
                         db: Session = Depends(get_db)):
    """Store a confirmed draft as a client request."""
    try:
        draft_request = DraftRequest.model_validate_json(draft)
    except SchemaValidationError as e:
        logger.warning(f"⚠️ Received a malformed draft: {e}")
        return _render_form(request, errors=[{"field": "draft", "message": "Draft could not be read"}],
                            status_code=400)

    try:
        client_request = create_client_request(db, draft_request.to_request_data())
    except ValidationError as e:
        return _render_form(request, draft=draft_request, errors=e.errors, status_code=400)

    logger.info(f"✅ Draft committed as client request {client_request.request_id}")
    return RedirectResponse(url=f"/requestdetail?id={client_request.request_id}", status_code=303)
