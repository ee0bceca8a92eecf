"""
Reciprocity schemas.

Result models returned by the reciprocity engine and its API.
"""

from pydantic import BaseModel, Field

from ccwmap.core.ontology.jurisdiction import ReciprocityStatus


class ReciprocitySummary(BaseModel):
    """Aggregate reach statistics for one state's permit."""

    can_carry_in: int = Field(..., ge=0, description="States a resident permit holder may carry in")
    honors_count: int = Field(..., ge=0, description="Permits this state accepts")
    honored_by_count: int = Field(..., ge=0, description="States that accept this state's permit")


class ReciprocityBreakdown(BaseModel):
    """Every other state grouped by its status for one home state."""

    home_state: str
    permitless: list[str] = Field(default_factory=list)
    full: list[str] = Field(default_factory=list)
    partial: list[str] = Field(default_factory=list)
    none: list[str] = Field(default_factory=list)
    can_carry_count: int = Field(..., ge=1, description="Includes the home state")


class LegendItem(BaseModel):
    color: str
    label: str


class NationalOverview(BaseModel):
    """Headline counts across all jurisdictions."""

    total_states: int
    permitless_carry: int
    shall_issue: int
    may_issue: int
    red_flag_laws: int


# API responses


class StatusResponse(BaseModel):
    home_state: str
    target_state: str
    status: ReciprocityStatus
    label: str
    color: str


class HonoringResponse(BaseModel):
    state_code: str
    states: list[str]
    count: int


class SummaryResponse(ReciprocitySummary):
    state_code: str
    carry_reach_count: int


class MapResponse(BaseModel):
    selected_state: str | None = None
    colors: dict[str, str]
    legend: list[LegendItem]
