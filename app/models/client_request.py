from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as SchemaField
from enum import Enum
import json
import re

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_DESCRIPTION_LENGTH = 10


class RequestStatus(str, Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"  # legacy, treated as pending
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CLIENT_APPROVED = "client approved"
    IMPLEMENTATION = "implementation"


class RequestPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ClientRequest(SQLModel, table=True):
    """A customer-submitted project or feature request."""
    id: Optional[int] = Field(default=None, primary_key=True)
    request_id: str = Field(index=True, unique=True, max_length=64)

    full_name: str
    email: str = Field(index=True)
    company: Optional[str] = None
    phone_number: Optional[str] = None
    request_type: str
    project_title: str
    description: str
    timeline: Optional[str] = None
    budget: Optional[str] = None
    technical_requirements: Optional[str] = None
    business_goals: Optional[str] = None
    current_challenges: Optional[str] = None
    expected_outcome: Optional[str] = None

    status: RequestStatus = Field(default=RequestStatus.PENDING, index=True)
    priority: RequestPriority = Field(default=RequestPriority.MEDIUM)
    source: str = Field(default="website")
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    report_location: Optional[str] = None

    # AI enhanced summary, replaced as a whole on every attach
    ai_executive_summary: Optional[str] = None
    ai_technical_analysis: Optional[str] = None
    ai_implementation_strategy: Optional[str] = None
    ai_financial_optimization: Optional[str] = None
    ai_risk_assessment: Optional[str] = None
    ai_next_steps: Optional[str] = None  # JSON string of ordered next steps
    ai_complexity_score: Optional[float] = None
    ai_feasibility_score: Optional[float] = None
    ai_recommended_action: Optional[str] = None
    ai_processed_at: Optional[datetime] = None

    @property
    def has_ai_summary(self) -> bool:
        return self.ai_processed_at is not None

    def to_dict(self) -> dict:
        """Serialize the record for JSON responses and webhook payloads."""
        data = self.model_dump(mode="json")
        data["ai_next_steps"] = json.loads(self.ai_next_steps) if self.ai_next_steps else []
        return data


class ClientRequestCreate(BaseModel):
    """Input accepted when a client submits a request."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    full_name: str = SchemaField(min_length=1, alias="fullName")
    email: str = SchemaField(min_length=1)
    company: Optional[str] = None
    phone_number: Optional[str] = SchemaField(default=None, alias="phoneNumber")
    request_type: str = SchemaField(min_length=1, alias="requestType")
    project_title: str = SchemaField(min_length=1, alias="projectTitle")
    description: str = SchemaField(min_length=MIN_DESCRIPTION_LENGTH)
    timeline: Optional[str] = None
    budget: Optional[str] = None
    technical_requirements: Optional[str] = SchemaField(default=None, alias="technicalRequirements")
    business_goals: Optional[str] = SchemaField(default=None, alias="businessGoals")
    current_challenges: Optional[str] = SchemaField(default=None, alias="currentChallenges")
    expected_outcome: Optional[str] = SchemaField(default=None, alias="expectedOutcome")
    priority: Optional[RequestPriority] = None

    @field_validator("email")
    @classmethod
    def email_must_look_valid(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Valid email is required")
        return value


class AISummaryPayload(BaseModel):
    """AI enhanced summary attached to a request."""
    model_config = ConfigDict(populate_by_name=True)

    executive_summary: str = SchemaField(alias="executiveSummary")
    technical_analysis: str = SchemaField(alias="technicalAnalysis")
    implementation_strategy: str = SchemaField(alias="implementationStrategy")
    financial_optimization: str = SchemaField(alias="financialOptimization")
    risk_assessment: str = SchemaField(alias="riskAssessment")
    next_steps: list[str] = SchemaField(default_factory=list, alias="nextSteps")
    complexity_score: Optional[float] = SchemaField(default=None, alias="complexityScore")
    feasibility_score: Optional[float] = SchemaField(default=None, alias="feasibilityScore")
    recommended_action: Optional[str] = SchemaField(default=None, alias="recommendedAction")


class StatusUpdateRequest(BaseModel):
    """Body of the status update endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    request_id: str = SchemaField(alias="requestId")
    status: str
    report_location: Optional[str] = SchemaField(default=None, alias="reportLocation")
    ai_summary: Optional[AISummaryPayload] = SchemaField(default=None, alias="aiSummary")
