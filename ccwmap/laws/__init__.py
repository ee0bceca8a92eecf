"""Law table domain - per-state carry law records.

The ``/states`` router lives in ``ccwmap.laws.router``; it depends on the
reciprocity engine and is imported by the app factory.
"""

from .service import LawTable, load_law_table
from .schemas import StateRow, StatesListResponse, StateDetailResponse

__all__ = [
    # Service
    "LawTable",
    "load_law_table",
    # Schemas
    "StateRow",
    "StatesListResponse",
    "StateDetailResponse",
]
