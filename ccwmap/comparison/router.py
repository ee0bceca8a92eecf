"""Comparison API endpoints."""

from fastapi import APIRouter, HTTPException

from ccwmap.core.errors import UnknownStateError
from ccwmap.reciprocity.service import get_engine

from . import service
from .schemas import StateComparison

router = APIRouter(prefix="/compare", tags=["compare"])


@router.get("/{state_a}/{state_b}", response_model=StateComparison)
async def compare_states(state_a: str, state_b: str) -> StateComparison:
    """
    Compare two states' carry laws.

    Returns the field-by-field diff, travel warnings and the reciprocity
    status in each direction.
    """
    try:
        return service.compare_states(state_a, state_b, engine=get_engine())
    except UnknownStateError as e:
        raise HTTPException(status_code=404, detail=str(e))
