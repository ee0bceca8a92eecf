"""Reciprocity domain - status resolution, reach statistics and map data."""

from .router import router
from .graph import GraphAudit, ReciprocityGraph, load_reciprocity_graph
from .service import (
    ReciprocityEngine,
    build_engine,
    get_engine,
    status_label,
    resolve_status,
    states_honoring_permit,
    reciprocity_summary,
    carry_reach_count,
    get_law,
    get_all_states,
)
from .schemas import (
    ReciprocitySummary,
    ReciprocityBreakdown,
    LegendItem,
    NationalOverview,
    StatusResponse,
    HonoringResponse,
    SummaryResponse,
    MapResponse,
)
from .constants import (
    DEFAULT_COLOR,
    STATUS_COLORS,
    STATUS_LABELS,
    PERMIT_TYPE_COLORS,
    PERMIT_TYPE_LABELS,
    PERMITLESS_CARRY_COLOR,
)

__all__ = [
    # Router
    "router",
    # Graph
    "GraphAudit",
    "ReciprocityGraph",
    "load_reciprocity_graph",
    # Engine
    "ReciprocityEngine",
    "build_engine",
    "get_engine",
    "status_label",
    # Function-call surface
    "resolve_status",
    "states_honoring_permit",
    "reciprocity_summary",
    "carry_reach_count",
    "get_law",
    "get_all_states",
    # Schemas
    "ReciprocitySummary",
    "ReciprocityBreakdown",
    "LegendItem",
    "NationalOverview",
    "StatusResponse",
    "HonoringResponse",
    "SummaryResponse",
    "MapResponse",
    # Constants
    "DEFAULT_COLOR",
    "STATUS_COLORS",
    "STATUS_LABELS",
    "PERMIT_TYPE_COLORS",
    "PERMIT_TYPE_LABELS",
    "PERMITLESS_CARRY_COLOR",
]
