from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from app.models.client_request import RequestPriority


class UserTypes(BaseModel):
    admin: int = Field(default=0, ge=0)
    standard: int = Field(default=0, ge=0)
    viewer: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.admin + self.standard + self.viewer


class DraftRequest(BaseModel):
    """
    Enterprise request form contents that have not been committed yet.

    The draft is carried from the form to the confirmation page and back to the
    commit step; nothing is stored until the commit step hands `to_request_data` to the store.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = ""
    email: str = ""
    company: Optional[str] = None

    number_of_seats: int = Field(default=0, ge=0)
    user_types: UserTypes = Field(default_factory=UserTypes)

    feature_description: str = ""
    priority_level: str = "medium"
    expected_timeline: Optional[str] = None
    business_justification: Optional[str] = None

    payment_preference: Optional[str] = None  # "installment", "lump_sum", ...

    monthly_revenue: Optional[str] = None
    seasonal_patterns: Optional[str] = None
    preferred_payment_months: Optional[str] = None
    budget_constraints: Optional[str] = None
    financial_year_cycle: Optional[str] = None

    @property
    def project_title(self) -> str:
        return f"{self.priority_level.upper()} Priority Enterprise Solution - {self.number_of_seats} Seats"

    def enterprise_profile(self) -> str:
        """Seat counts and payment details, one "Label: value" line each."""
        lines = [
            f"Seats: {self.number_of_seats}",
            f"Admin users: {self.user_types.admin}",
            f"Standard users: {self.user_types.standard}",
            f"Viewer users: {self.user_types.viewer}",
        ]
        optional = [
            ("Payment preference", self.payment_preference),
            ("Seasonal patterns", self.seasonal_patterns),
            ("Preferred payment months", self.preferred_payment_months),
            ("Budget constraints", self.budget_constraints),
            ("Financial year cycle", self.financial_year_cycle),
        ]
        lines += [f"{label}: {value}" for label, value in optional if value]
        return "\n".join(lines)

    def to_request_data(self) -> dict:
        """Input for the request store; validation happens on create."""
        priority = self.priority_level.lower()
        return dict(
            full_name=self.full_name,
            email=self.email,
            company=self.company,
            request_type="enterprise-solution",
            project_title=self.project_title,
            description=self.feature_description,
            timeline=self.expected_timeline,
            budget=self.monthly_revenue or "TBD",
            business_goals=self.business_justification,
            technical_requirements=self.enterprise_profile(),
            priority=priority if priority in RequestPriority._value2member_map_ else None,
        )
