"""Company record models."""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class Address(BaseModel):
    """Structured registered address."""

    address_line_1: Optional[str] = None
    address_line_2: Optional[str] = None
    care_of: Optional[str] = None
    premises: Optional[str] = None
    po_box: Optional[str] = None
    locality: Optional[str] = None
    postal_code: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None

    def to_query(self) -> str:
        """Join the address parts used for geocoding into a single line."""
        parts = [
            self.address_line_1,
            self.address_line_2,
            self.locality,
            self.postal_code,
            self.region,
            self.country,
        ]
        return ", ".join(p for p in parts if p)


class FinancialSnapshot(BaseModel):
    """Latest known headline financials for a company."""

    revenue: Optional[float] = Field(default=None, description="Annual revenue in GBP")
    profit: Optional[float] = Field(default=None, description="Profit after tax in GBP")
    ebitda: Optional[float] = Field(default=None, description="EBITDA in GBP")
    employees: Optional[int] = Field(default=None, description="Employee count")


class EnrichmentSignals(BaseModel):
    """Pre-extracted website and document signals."""

    website: Optional[str] = None
    headcount: Optional[int] = Field(default=None, description="Headcount from external sources")
    business_keywords: list[str] = Field(default_factory=list)
    services: list[str] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list, description="Technology vendor mentions")
    business_description: Optional[str] = None


class CompanyRecord(BaseModel):
    """A validated registry record with enrichment signals."""

    # Identity
    company_number: str = Field(description="Registry company number")
    company_name: str
    company_status: Optional[str] = None
    date_of_incorporation: date

    # Registry flags
    has_insolvency_history: Optional[bool] = None
    has_been_liquidated: Optional[bool] = None
    insolvency_case_count: int = 0
    unsatisfied_charges: int = 0
    accounts_overdue: bool = False

    # Classification
    sic_codes: list[str] = Field(default_factory=list)

    # Address
    registered_address: Optional[str] = None
    registered_address_structured: Optional[Address] = None

    financials: FinancialSnapshot = Field(default_factory=FinancialSnapshot)
    enrichment: EnrichmentSignals = Field(default_factory=EnrichmentSignals)

    # Cached from a previous scoring run
    location_distance_km: Optional[float] = Field(
        default=None,
        description="Distance from the reference point in km",
    )

    @property
    def employee_count(self) -> Optional[int]:
        """Employee count from accounts, falling back to enrichment headcount."""
        return self.financials.employees or self.enrichment.headcount
