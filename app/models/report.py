from typing import Optional, Literal, Union, Annotated
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, Discriminator, Tag


class ReportInputs(BaseModel):
    """Payment inputs of a present value report."""
    model_config = ConfigDict(extra="ignore")

    current_payment: float = Field(validation_alias=AliasChoices("current_payment", "current_payment_MYR"))
    current_frequency: str
    new_frequency: str
    remaining_years: float


class CalculationResults(BaseModel):
    model_config = ConfigDict(extra="ignore")

    original_present_value: float = Field(
        validation_alias=AliasChoices("original_present_value", "original_present_value_MYR")
    )
    new_equivalent_payment: float = Field(
        validation_alias=AliasChoices("new_equivalent_payment", "new_equivalent_payment_MYR")
    )


class EconomicAssumptions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    inflation_rate: Optional[float] = None
    risk_free_rate: Optional[float] = None


class FlatReportDocument(BaseModel):
    """Report fields present at the top level of the document."""
    model_config = ConfigDict(extra="ignore")

    kind: Literal["flat"] = "flat"
    status: Optional[str] = None
    inputs: ReportInputs
    calculation_results: CalculationResults
    economic_assumptions: EconomicAssumptions = Field(default_factory=EconomicAssumptions)


class WrappedReportDocument(BaseModel):
    """Report fields nested under a ``report_data`` key."""
    model_config = ConfigDict(extra="ignore")

    kind: Literal["wrapped"] = "wrapped"
    status: Optional[str] = None
    report_data: FlatReportDocument
    s3_location: Optional[str] = None


def _document_kind(document) -> str:
    if isinstance(document, dict):
        return "wrapped" if "report_data" in document else "flat"
    return getattr(document, "kind", "flat")


ReportDocument = Annotated[
    Union[
        Annotated[FlatReportDocument, Tag("flat")],
        Annotated[WrappedReportDocument, Tag("wrapped")],
    ],
    Discriminator(_document_kind),
]


class NormalizedReport(BaseModel):
    """Single shape used to render a report, whatever the stored document looked like."""
    status: str = "Success"
    current_payment: float
    current_frequency: str
    new_frequency: str
    remaining_years: float
    original_present_value: float
    new_equivalent_payment: float
    inflation_rate: Optional[float] = None
    risk_free_rate: Optional[float] = None
    storage_location: Optional[str] = None
    is_fallback: bool = False

    @classmethod
    def from_document(cls, document: Union[FlatReportDocument, WrappedReportDocument],
                      storage_location: Optional[str] = None) -> "NormalizedReport":
        if isinstance(document, WrappedReportDocument):
            body = document.report_data
            status = document.status or body.status
            storage_location = storage_location or document.s3_location
        else:
            body = document
            status = document.status

        return cls(
            status=status or "Success",
            current_payment=body.inputs.current_payment,
            current_frequency=body.inputs.current_frequency,
            new_frequency=body.inputs.new_frequency,
            remaining_years=body.inputs.remaining_years,
            original_present_value=body.calculation_results.original_present_value,
            new_equivalent_payment=body.calculation_results.new_equivalent_payment,
            inflation_rate=body.economic_assumptions.inflation_rate,
            risk_free_rate=body.economic_assumptions.risk_free_rate,
            storage_location=storage_location,
        )


class ReportFetchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    storage_location: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("storageLocation", "storage_location", "s3Location")
    )
