"""Law table API schemas."""

from pydantic import BaseModel, Field

from ccwmap.core.ontology.jurisdiction import PermitType, StateLaw


class StateRow(BaseModel):
    """Compact listing row for the all-states view."""

    state_code: str
    state_name: str
    permit_type: PermitType
    permitless_carry: bool
    stand_your_ground: bool
    magazine_restriction: int | None = None
    honored_by_count: int = Field(..., ge=0)


class StatesListResponse(BaseModel):
    states: list[StateRow]
    total: int


class StateDetailResponse(BaseModel):
    law: StateLaw
    can_carry_in: int
    honors_count: int
    honored_by_count: int
