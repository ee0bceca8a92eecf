"""Law table API endpoints."""

from typing import Literal

from fastapi import APIRouter, HTTPException, Query

from ccwmap.core.errors import UnknownStateError
from ccwmap.reciprocity.schemas import NationalOverview
from ccwmap.reciprocity.service import get_engine

from .schemas import StateDetailResponse, StateRow, StatesListResponse

router = APIRouter(prefix="/states", tags=["states"])


@router.get("", response_model=StatesListResponse)
async def list_states(
    sort: Literal["name", "code"] = Query("name", description="Sort order"),
) -> StatesListResponse:
    """List every jurisdiction with its headline attributes."""
    engine = get_engine()
    if sort == "name":
        laws = engine.law_table.states_sorted_by_name()
    else:
        laws = sorted(engine.get_all_states(), key=lambda law: law.state_code)

    rows = [
        StateRow(
            state_code=law.state_code,
            state_name=law.state_name,
            permit_type=law.permit_type,
            permitless_carry=law.permitless_carry,
            stand_your_ground=law.stand_your_ground,
            magazine_restriction=law.magazine_restriction,
            honored_by_count=engine.reciprocity_summary(law.state_code).honored_by_count,
        )
        for law in laws
    ]
    return StatesListResponse(states=rows, total=len(rows))


@router.get("/overview", response_model=NationalOverview)
async def national_overview() -> NationalOverview:
    """Headline counts across all jurisdictions."""
    return get_engine().national_overview()


@router.get("/{state_code}", response_model=StateDetailResponse)
async def get_state(state_code: str) -> StateDetailResponse:
    """Full law record for one state."""
    engine = get_engine()
    try:
        law = engine.get_law(state_code)
    except UnknownStateError as e:
        raise HTTPException(status_code=404, detail=str(e))
    summary = engine.reciprocity_summary(law.state_code)
    return StateDetailResponse(law=law, **summary.model_dump())
