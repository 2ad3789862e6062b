"""Red flag detection for registry records."""

from datetime import date
from typing import Optional

from screener.models import DEFAULT_THESIS, CompanyRecord
from .scorer import years_active


def get_red_flags(company: CompanyRecord) -> list[str]:
    """List registry warning signs for a company."""
    flags = []

    if company.has_been_liquidated:
        flags.append("Company has been liquidated")

    if company.has_insolvency_history:
        flags.append("Has insolvency history")

    if company.insolvency_case_count > 0:
        flags.append(f"Has {company.insolvency_case_count} insolvency case(s)")

    if company.unsatisfied_charges > 0:
        flags.append(f"{company.unsatisfied_charges} unsatisfied charge(s)")

    if company.accounts_overdue:
        flags.append("Accounts are overdue")

    if company.company_status != DEFAULT_THESIS.active_status:
        flags.append(f"Company status: {company.company_status or 'unknown'}")

    return flags


def is_high_value_target(company: CompanyRecord, as_of: Optional[date] = None) -> bool:
    """Old enough, clean, and with some financial or enrichment data."""
    if years_active(company.date_of_incorporation, as_of) < DEFAULT_THESIS.min_years_active:
        return False

    if company.has_insolvency_history or company.has_been_liquidated:
        return False

    has_financials = bool(company.financials.revenue or company.financials.profit)
    has_enrichment = bool(company.enrichment.website or company.enrichment.headcount)

    return has_financials or has_enrichment
