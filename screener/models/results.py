"""Result models produced by the scoring layer."""

from typing import Literal, Optional
from pydantic import BaseModel, Field

from .financials import FinancialTrendReport

Confidence = Literal["high", "medium", "low"]


class ScoreFactor(BaseModel):
    """One component of the investment score."""

    name: str
    value: float = Field(description="Raw measured value (years, count, km, GBP)")
    points: float = Field(ge=0.0, le=25.0)


class InvestmentScore(BaseModel):
    """Weighted acquisition-attractiveness score."""

    score: float = Field(ge=0.0, le=100.0)
    factors: list[ScoreFactor] = Field(default_factory=list)
    location_distance_km: Optional[float] = Field(
        default=None,
        description="Resolved distance, for the caller to cache on the record",
    )


class MSPIndicator(BaseModel):
    """Evidence found for one classifier category."""

    category: str
    found: bool
    evidence: list[str] = Field(default_factory=list)


class MSPLikelihood(BaseModel):
    """Likelihood that a company is an IT managed service provider."""

    score: int = Field(ge=0, le=100)
    confidence: Confidence
    context_penalty: float = 1.0
    is_specialized: bool = False
    indicators: list[MSPIndicator] = Field(default_factory=list)
    vocabulary_version: Optional[str] = None


class CriterionResult(BaseModel):
    name: str
    met: bool
    detail: str


class ThesisMatch(BaseModel):
    """Per-criterion thesis report and the aggregate verdict."""

    matches: bool
    criteria: list[CriterionResult] = Field(default_factory=list)

    @property
    def failed(self) -> list[CriterionResult]:
        return [c for c in self.criteria if not c.met]


class ScreeningResult(BaseModel):
    """All screening outputs for a single company."""

    company_number: str
    company_name: str
    investment_score: InvestmentScore
    msp_likelihood: MSPLikelihood
    thesis_match: ThesisMatch
    financial_trends: Optional[FinancialTrendReport] = None
    red_flags: list[str] = Field(default_factory=list)
