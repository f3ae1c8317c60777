from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from app.helpers.pricing import PRICING_PLANS

router = APIRouter()
templates = Jinja2Templates(directory="app/templates")


@router.get("/", name="home", response_class=HTMLResponse)
async def home(request: Request):
    """Serve the landing page with the pricing section."""
    return templates.TemplateResponse("home.html", {"request": request, "plans": PRICING_PLANS})


@router.get("/pricing", name="pricing", response_class=HTMLResponse)
async def pricing(request: Request):
    """Serve the pricing page."""
    return templates.TemplateResponse("pricing.html", {"request": request, "plans": PRICING_PLANS})
