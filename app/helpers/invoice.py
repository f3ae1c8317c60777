"""Invoice preview for requests the client has approved."""

from datetime import datetime, timedelta
from typing import Dict, Optional
from app.models.client_request import ClientRequest
from app.models.company_settings import CompanySettings
from app.helpers.ai_processing import HOURS_PER_COMPLEXITY_POINT, risk_level
from app.helpers.request_status import invoice_unlocked
import logging

logger = logging.getLogger(__name__)


def _money(amount: float) -> float:
    return round(amount, 2)


def build_invoice(request: ClientRequest, settings: CompanySettings,
                  issued_at: Optional[datetime] = None) -> Optional[Dict]:
    """
    Price a request from the company settings.

    Returns None while the invoice view is locked for the request's status.
    Development hours come from the AI complexity score when one is attached.
    """
    if not invoice_unlocked(request.status):
        return None

    pricing = settings.feature_pricing()
    info = settings.company_info()
    terms = settings.payment_terms()

    complexity = request.ai_complexity_score or 5.0
    level = risk_level(complexity)
    multiplier = getattr(pricing.complexity_multiplier, level)

    hours = round(complexity * HOURS_PER_COMPLEXITY_POINT)
    lines = [
        {"description": f"Base feature price ({level} complexity x{multiplier})",
         "amount": _money(pricing.base_price * multiplier)},
        {"description": f"Development ({hours} hours at {pricing.development_hourly_rate}/hour)",
         "amount": _money(hours * pricing.development_hourly_rate)},
    ]

    subtotal = sum(line["amount"] for line in lines)
    discount = _money(subtotal * info.default_discount / 100)
    taxable = subtotal - discount
    tax = _money(taxable * info.tax_rate / 100)
    total = _money(taxable + tax)

    issued_at = issued_at or datetime.utcnow()
    installments = [
        {"months": months, "monthly_amount": _money(total / months)}
        for months in terms.installment_options if months > 0
    ]

    logger.info(f"🧾 Built invoice preview for {request.request_id}: total {total} {info.base_currency}")
    return {
        "invoice_number": f"INV-{request.request_id}",
        "currency": info.base_currency,
        "issued_at": issued_at.strftime("%Y-%m-%d"),
        "due_at": (issued_at + timedelta(days=terms.default_payment_days)).strftime("%Y-%m-%d"),
        "lines": lines,
        "subtotal": _money(subtotal),
        "discount": discount,
        "tax_rate": info.tax_rate,
        "tax": tax,
        "total": total,
        "early_payment_total": _money(total * (1 - terms.early_payment_discount / 100)),
        "installments": installments,
    }
