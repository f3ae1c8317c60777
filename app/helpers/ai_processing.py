"""Mock AI analysis of client requests.

Keyword scoring stands in for a real model. Every function here is pure so the
results are reproducible for the same input.
"""

from typing import Dict, Optional
from app.models.client_request import ClientRequest, AISummaryPayload
from app.models.draft_request import DraftRequest
import logging

logger = logging.getLogger(__name__)

AI_MODEL = "mock-ai-v1.0"
HOURLY_RATE = 150
HOURS_PER_COMPLEXITY_POINT = 40

COMPLEXITY_KEYWORDS = {
    "high": ["ai", "machine learning", "blockchain", "real-time", "big data", "microservices"],
    "medium": ["integration", "api", "dashboard", "analytics", "mobile", "security"],
    "low": ["simple", "basic", "standard", "minimal", "straightforward"],
}
KEYWORD_WEIGHTS = {"high": 1.5, "medium": 0.5, "low": -0.5}

NEXT_STEPS = [
    "Technical architecture review (1-2 business days)",
    "Resource allocation and team assignment",
    "Detailed project timeline creation",
    "Final cost estimation and contract preparation",
    "Client approval and project kickoff",
]


def _clamp(score: float) -> float:
    return max(1.0, min(10.0, score))


def calculate_complexity(description: Optional[str]) -> float:
    """Score 1-10 from the keywords found in the description, 5 when none match."""
    text = (description or "").lower()
    score = 5.0
    for level, keywords in COMPLEXITY_KEYWORDS.items():
        for keyword in keywords:
            if keyword in text:
                score += KEYWORD_WEIGHTS[level]
    return _clamp(score)


def calculate_feasibility(timeline: Optional[str], budget: Optional[str]) -> float:
    score = 7.0

    timeline = (timeline or "").lower()
    if "urgent" in timeline or "asap" in timeline:
        score -= 2
    elif "6 months" in timeline or "year" in timeline:
        score += 1

    budget = (budget or "").lower()
    if "unlimited" in budget or "flexible" in budget:
        score += 1
    elif "tight" in budget or "limited" in budget:
        score -= 1

    return _clamp(score)


def risk_level(complexity: float) -> str:
    if complexity > 7:
        return "high"
    if complexity > 4:
        return "medium"
    return "low"


def recommended_action(complexity: float, feasibility: float) -> str:
    if feasibility < 4:
        return "reject"
    if complexity > 8 or feasibility < 6:
        return "request-more-info"
    if complexity <= 3 and feasibility >= 8:
        return "approve"
    return "review"


def recommended_approach(complexity: float) -> str:
    if complexity > 7:
        return ("Recommended phased approach with MVP first, followed by iterative improvements. "
                "Consider proof-of-concept phase.")
    if complexity > 4:
        return "Standard development approach with regular milestones and stakeholder reviews."
    return "Straightforward implementation approach with standard methodologies."


def analyze_request(request: ClientRequest) -> Dict:
    """Score a stored request the way the enrichment step does."""
    complexity = calculate_complexity(request.description)
    feasibility = calculate_feasibility(request.timeline, request.budget)
    estimated_hours = round(complexity * HOURS_PER_COMPLEXITY_POINT)

    return {
        "complexity_score": complexity,
        "feasibility_score": feasibility,
        "estimated_hours": estimated_hours,
        "estimated_cost": estimated_hours * HOURLY_RATE,
        "risk_assessment": risk_level(complexity),
        "recommended_action": recommended_action(complexity, feasibility),
        "auto_approval_eligible": complexity <= 3 and feasibility >= 8,
        "confidence_level": min(0.95, 0.6 + (feasibility / 10) * 0.4),
        "ai_model": AI_MODEL,
    }


def build_request_summary(request: ClientRequest) -> AISummaryPayload:
    """Narrative summary attached to a stored request after analysis."""
    analysis = analyze_request(request)
    complexity = analysis["complexity_score"]
    kind = "complex" if complexity > 6 else "standard"

    logger.info(f"🤖 Mock analysis for {request.request_id}: complexity={complexity}, "
                f"feasibility={analysis['feasibility_score']}")

    return AISummaryPayload(
        executive_summary=(
            f"{request.request_id}: {request.project_title} for "
            f"{request.company or request.full_name}. Recommended action: "
            f"{analysis['recommended_action']}."
        ),
        technical_analysis=(
            f'Technical analysis of "{request.project_title}": The request involves '
            f"{request.description[:100]}... This appears to be a {kind} implementation "
            f"requiring careful planning and execution."
        ),
        implementation_strategy=recommended_approach(complexity),
        financial_optimization=(
            f"Estimated effort of {analysis['estimated_hours']} hours "
            f"(about {analysis['estimated_cost']} at {HOURLY_RATE}/hour). "
            f"Budget noted: {request.budget or 'not specified'}."
        ),
        risk_assessment=(
            f"{analysis['risk_assessment'].capitalize()} complexity risk profile with "
            f"feasibility {analysis['feasibility_score']}/10."
        ),
        next_steps=list(NEXT_STEPS),
        complexity_score=complexity,
        feasibility_score=analysis["feasibility_score"],
        recommended_action=analysis["recommended_action"],
    )


def _payment_strategy(preference: Optional[str], installment: str, lump_sum: str, other: str) -> str:
    if preference == "installment":
        return installment
    if preference == "lump_sum":
        return lump_sum
    return other


def build_draft_preview(draft: DraftRequest, reference: str = "Draft") -> AISummaryPayload:
    """Summary shown on the confirmation page before the draft is committed."""
    priority = draft.priority_level or "medium"
    timeline = draft.expected_timeline or "a timeline to be agreed"

    executive = (
        f"{reference}: Enterprise-grade solution for {draft.user_types.total} users with "
        f"{priority} priority implementation targeting {timeline}. Our AI analysis indicates this "
        f"project aligns with modern scalability requirements and estimated "
        + _payment_strategy(draft.payment_preference, "flexible payment structure",
                            "upfront investment model", "optimized payment strategy")
        + "."
    )

    technical = (
        f"Based on your requirements for {draft.number_of_seats} licenses, our AI recommends a "
        f"scalable architecture supporting {draft.user_types.admin} administrators, "
        f"{draft.user_types.standard} standard users, and {draft.user_types.viewer} viewers. "
        f"The proposed solution incorporates enterprise-grade security, role-based access "
        f"controls, and seamless integration capabilities."
    )

    implementation = (
        f"Priority {priority.upper()} classification ensures dedicated resource allocation. "
        f"Target completion: {timeline}. Recommended approach: Agile methodology with bi-weekly "
        f"sprints, continuous integration, and user acceptance testing phases."
    )

    if draft.monthly_revenue:
        financial = (
            f"Revenue analysis ({draft.monthly_revenue}) suggests "
            + _payment_strategy(
                draft.payment_preference,
                "quarterly payment schedule aligning with cash flow patterns",
                "upfront payment with enterprise discount eligibility",
                "AI-optimized payment structure based on seasonal patterns",
            )
            + "."
        )
        if draft.preferred_payment_months:
            financial += (f" Preferred payment months ({draft.preferred_payment_months}) "
                          f"incorporated into financial planning.")
    else:
        financial = "Custom payment structure to be determined based on final scope."

    if draft.budget_constraints:
        risk = (f"Low complexity risk profile. Standard implementation timeline. Budget constraints "
                f"({draft.budget_constraints}) accommodate recommended solution scope.")
    else:
        risk = ("Low complexity risk profile. Standard implementation timeline. "
                "Flexible budget allocation recommended.")

    complexity = calculate_complexity(draft.feature_description)
    feasibility = calculate_feasibility(draft.expected_timeline, draft.budget_constraints)

    return AISummaryPayload(
        executive_summary=executive,
        technical_analysis=technical,
        implementation_strategy=implementation,
        financial_optimization=financial,
        risk_assessment=risk,
        next_steps=list(NEXT_STEPS),
        complexity_score=complexity,
        feasibility_score=feasibility,
        recommended_action=recommended_action(complexity, feasibility),
    )
