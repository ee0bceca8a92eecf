"""Reciprocity API endpoints."""

from fastapi import APIRouter, HTTPException, Query

from ccwmap.core.errors import UnknownStateError

from .schemas import (
    HonoringResponse,
    MapResponse,
    ReciprocityBreakdown,
    StatusResponse,
    SummaryResponse,
)
from .service import get_engine, status_label

router = APIRouter(prefix="/reciprocity", tags=["reciprocity"])


def _not_found(e: UnknownStateError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


@router.get("/map", response_model=MapResponse)
async def map_colors(
    selected: str | None = Query(None, description="Home state whose permit drives the coloring"),
) -> MapResponse:
    """Fill color for every state, plus the matching legend."""
    engine = get_engine()
    try:
        selected_code = engine.law_table.require(selected) if selected else None
        colors = engine.map_colors(selected_code)
    except UnknownStateError as e:
        raise _not_found(e)
    return MapResponse(
        selected_state=selected_code,
        colors=colors,
        legend=engine.legend(selected_code),
    )


@router.get("/{home_state}/status/{target_state}", response_model=StatusResponse)
async def resolve_status(home_state: str, target_state: str) -> StatusResponse:
    """Carry status in the target state for a home-state permit holder."""
    engine = get_engine()
    try:
        status = engine.resolve_status(home_state, target_state)
        home = engine.law_table.require(home_state)
        target = engine.law_table.require(target_state)
    except UnknownStateError as e:
        raise _not_found(e)
    return StatusResponse(
        home_state=home,
        target_state=target,
        status=status,
        label=status_label(status),
        color=engine.state_color(target, home),
    )


@router.get("/{state_code}/honoring", response_model=HonoringResponse)
async def states_honoring_permit(state_code: str) -> HonoringResponse:
    """States where this state's permit may be used."""
    engine = get_engine()
    try:
        states = engine.states_honoring_permit(state_code)
        code = engine.law_table.require(state_code)
    except UnknownStateError as e:
        raise _not_found(e)
    return HonoringResponse(state_code=code, states=states, count=len(states))


@router.get("/{state_code}/summary", response_model=SummaryResponse)
async def reciprocity_summary(state_code: str) -> SummaryResponse:
    engine = get_engine()
    try:
        summary = engine.reciprocity_summary(state_code)
        reach = engine.carry_reach_count(state_code)
        code = engine.law_table.require(state_code)
    except UnknownStateError as e:
        raise _not_found(e)
    return SummaryResponse(state_code=code, carry_reach_count=reach, **summary.model_dump())


@router.get("/{state_code}/breakdown", response_model=ReciprocityBreakdown)
async def reciprocity_breakdown(state_code: str) -> ReciprocityBreakdown:
    """Every other state grouped by status, for the reciprocity list view."""
    try:
        return get_engine().group_by_status(state_code)
    except UnknownStateError as e:
        raise _not_found(e)
