"""Comparison schemas."""

from pydantic import BaseModel, Field

from ccwmap.core.ontology.jurisdiction import ReciprocityStatus, StateLaw


class ComparisonField(BaseModel):
    """One compared attribute with both states' display values."""

    label: str
    value_a: str
    value_b: str
    is_different: bool
    warning: str | None = Field(None, description="Caution shown only when values differ")


class StateComparison(BaseModel):
    """Side-by-side comparison of two jurisdictions."""

    state_a: StateLaw
    state_b: StateLaw
    fields: list[ComparisonField]
    warnings: list[str] = Field(default_factory=list)
    difference_count: int = Field(..., ge=0)
    status_a_to_b: ReciprocityStatus = Field(..., description="Status in B for an A permit")
    status_b_to_a: ReciprocityStatus = Field(..., description="Status in A for a B permit")
