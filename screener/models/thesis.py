"""Acquisition thesis profile schema."""

from typing import Optional
from pydantic import BaseModel, Field


class SizeBand(BaseModel):
    """Inclusive range for a size dimension."""

    min: float
    max: float

    def contains(self, value: Optional[float]) -> bool:
        return value is not None and self.min <= value <= self.max

    def partial_credit(self, value: float, full: float = 15.0) -> float:
        """Credit for a value outside the band, tapering with distance from it."""
        if value < self.min:
            return max(0.0, (value / self.min) * full)
        if value > self.max:
            return max(0.0, full - ((value - self.max) / self.max) * full)
        return 0.0


class DistanceStep(BaseModel):
    """Points awarded when the distance is at most ``max_km``."""

    max_km: float
    points: float


class ThesisProfile(BaseModel):
    """The fixed acquisition-target profile used to score and gate companies."""

    name: str = "AI-Enabled MSP Platform"

    # Age
    min_years_active: float = 3.0
    points_per_year: float = 8.33

    # Registry
    active_status: str = "active"
    target_sic_codes: list[str] = Field(default_factory=lambda: ["62020", "62090"])

    # Size bands, checked in this priority order
    employees: SizeBand = Field(default_factory=lambda: SizeBand(min=15, max=40))
    revenue: SizeBand = Field(default_factory=lambda: SizeBand(min=3_000_000, max=6_000_000))
    ebitda: SizeBand = Field(default_factory=lambda: SizeBand(min=500_000, max=1_000_000))

    # Technology alignment
    vendor_keywords: list[str] = Field(
        default_factory=lambda: [
            "microsoft", "azure", "office365", "m365",
            "sharepoint", "teams", "power", "dynamics",
        ],
        description="Preferred vendor stack terms (substring match)",
    )
    points_per_vendor_match: float = 8.33

    # Location
    distance_steps: list[DistanceStep] = Field(
        default_factory=lambda: [
            DistanceStep(max_km=25, points=25),
            DistanceStep(max_km=50, points=20),
            DistanceStep(max_km=100, points=15),
            DistanceStep(max_km=150, points=10),
            DistanceStep(max_km=200, points=5),
        ]
    )

    # Each factor is capped at this many points
    factor_max_points: float = 25.0

    def matching_vendors(self, tech_stack: list[str]) -> list[str]:
        """Tech stack entries that mention any preferred vendor term."""
        return [
            tech for tech in tech_stack
            if any(keyword in tech.lower() for keyword in self.vendor_keywords)
        ]

    def location_points(self, distance_km: Optional[float]) -> float:
        if distance_km is None:
            return 0.0
        for step in self.distance_steps:
            if distance_km <= step.max_km:
                return step.points
        return 0.0


DEFAULT_THESIS = ThesisProfile()
