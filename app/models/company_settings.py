from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from pydantic import Field as SchemaField
import json


class CompanyInfo(BaseModel):
    """Company information group of the admin settings form."""
    company_name: str = SchemaField(default="Saas E", min_length=1)
    industry: str = "Software as a Service"
    business_model: str = "B2B SaaS"
    minimum_revenue: float = SchemaField(default=50000, ge=0)
    base_currency: str = SchemaField(default="MYR", min_length=3, max_length=3)
    tax_rate: float = SchemaField(default=6, ge=0, le=100)  # percent
    default_discount: float = SchemaField(default=0, ge=0, le=100)  # percent


class ComplexityMultiplier(BaseModel):
    low: float = SchemaField(default=1.0, gt=0)
    medium: float = SchemaField(default=1.5, gt=0)
    high: float = SchemaField(default=2.5, gt=0)


class FeaturePricing(BaseModel):
    base_price: float = SchemaField(default=5000, ge=0)
    development_hourly_rate: float = SchemaField(default=150, ge=0)
    complexity_multiplier: ComplexityMultiplier = SchemaField(default_factory=ComplexityMultiplier)


class PaymentTerms(BaseModel):
    default_payment_days: int = SchemaField(default=30, ge=0)
    installment_options: list[int] = SchemaField(default_factory=lambda: [2, 3, 6, 12])
    early_payment_discount: float = SchemaField(default=5, ge=0, le=100)  # percent


class CompanySettings(SQLModel, table=True):
    """Singleton row with the pricing configuration used for invoices."""
    id: Optional[int] = Field(default=None, primary_key=True)

    company_name: str = Field(default="Saas E")
    industry: str = Field(default="Software as a Service")
    business_model: str = Field(default="B2B SaaS")
    minimum_revenue: float = Field(default=50000)
    base_currency: str = Field(default="MYR", max_length=3)
    tax_rate: float = Field(default=6)
    default_discount: float = Field(default=0)

    base_price: float = Field(default=5000)
    development_hourly_rate: float = Field(default=150)
    complexity_multiplier_low: float = Field(default=1.0)
    complexity_multiplier_medium: float = Field(default=1.5)
    complexity_multiplier_high: float = Field(default=2.5)

    default_payment_days: int = Field(default=30)
    installment_options: str = Field(default="[2, 3, 6, 12]")  # JSON list of months
    early_payment_discount: float = Field(default=5)

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def company_info(self) -> CompanyInfo:
        return CompanyInfo(
            company_name=self.company_name,
            industry=self.industry,
            business_model=self.business_model,
            minimum_revenue=self.minimum_revenue,
            base_currency=self.base_currency,
            tax_rate=self.tax_rate,
            default_discount=self.default_discount,
        )

    def feature_pricing(self) -> FeaturePricing:
        return FeaturePricing(
            base_price=self.base_price,
            development_hourly_rate=self.development_hourly_rate,
            complexity_multiplier=ComplexityMultiplier(
                low=self.complexity_multiplier_low,
                medium=self.complexity_multiplier_medium,
                high=self.complexity_multiplier_high,
            ),
        )

    def payment_terms(self) -> PaymentTerms:
        return PaymentTerms(
            default_payment_days=self.default_payment_days,
            installment_options=json.loads(self.installment_options),
            early_payment_discount=self.early_payment_discount,
        )

    def set_company_info(self, info: CompanyInfo) -> None:
        self.company_name = info.company_name
        self.industry = info.industry
        self.business_model = info.business_model
        self.minimum_revenue = info.minimum_revenue
        self.base_currency = info.base_currency.upper()
        self.tax_rate = info.tax_rate
        self.default_discount = info.default_discount

    def set_feature_pricing(self, pricing: FeaturePricing) -> None:
        self.base_price = pricing.base_price
        self.development_hourly_rate = pricing.development_hourly_rate
        self.complexity_multiplier_low = pricing.complexity_multiplier.low
        self.complexity_multiplier_medium = pricing.complexity_multiplier.medium
        self.complexity_multiplier_high = pricing.complexity_multiplier.high

    def set_payment_terms(self, terms: PaymentTerms) -> None:
        self.default_payment_days = terms.default_payment_days
        self.installment_options = json.dumps(sorted(set(terms.installment_options)))
        self.early_payment_discount = terms.early_payment_discount
