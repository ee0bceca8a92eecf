"""Comparison domain - pairwise law diff and travel warnings."""

from .router import router
from .service import (
    COMPARISON_FIELDS,
    compare_laws,
    compare_states,
    travel_warnings,
    format_enum_label,
    format_bool,
    format_required,
    format_magazine_limit,
)
from .schemas import ComparisonField, StateComparison

__all__ = [
    # Router
    "router",
    # Service functions
    "compare_laws",
    "compare_states",
    "travel_warnings",
    # Formatting
    "format_enum_label",
    "format_bool",
    "format_required",
    "format_magazine_limit",
    # Schemas
    "ComparisonField",
    "StateComparison",
    # Constants
    "COMPARISON_FIELDS",
]
