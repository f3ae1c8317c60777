# Import all models here to ensure they are registered with SQLModel
from .client_request import (
    ClientRequest, ClientRequestCreate, RequestStatus, RequestPriority,
    AISummaryPayload, StatusUpdateRequest
)
from .company_settings import (
    CompanySettings, CompanyInfo, FeaturePricing, ComplexityMultiplier, PaymentTerms
)
from .draft_request import DraftRequest, UserTypes
from .report import NormalizedReport, FlatReportDocument, WrappedReportDocument

__all__ = [
    "ClientRequest",
    "ClientRequestCreate",
    "RequestStatus",
    "RequestPriority",
    "AISummaryPayload",
    "StatusUpdateRequest",
    "CompanySettings",
    "CompanyInfo",
    "FeaturePricing",
    "ComplexityMultiplier",
    "PaymentTerms",
    "DraftRequest",
    "UserTypes",
    "NormalizedReport",
    "FlatReportDocument",
    "WrappedReportDocument",
]
