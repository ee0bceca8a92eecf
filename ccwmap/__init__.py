"""CCW Reciprocity Map - carry-permit reciprocity engine.

Decides which carry status applies for any (home state, target state) pair,
derives reach statistics, and compares two states' carry laws. The law and
reciprocity tables are static YAML data loaded and validated once.

Environment Variables:
    CCWMAP_DATA_DIR: Directory holding state_laws.yaml and reciprocity.yaml.
    CCWMAP_STRICT_GRAPH_SYMMETRY: Set to "true" to reject asymmetric
                                  honors/honoredBy data instead of logging it.
"""

# Core types
from .core import Settings, get_settings, UnknownStateError, ReciprocityDataError, configure_logging
from .core.ontology import (
    PermitType,
    CarryType,
    ReciprocityStatus,
    StateLaw,
    ReciprocityEntry,
    STATE_NAMES,
    state_code_for_name,
)

# Law table
from .laws import LawTable, load_law_table

# Reciprocity engine
from .reciprocity import (
    GraphAudit,
    ReciprocityGraph,
    ReciprocityEngine,
    ReciprocitySummary,
    build_engine,
    get_engine,
    resolve_status,
    states_honoring_permit,
    reciprocity_summary,
    carry_reach_count,
    get_law,
    get_all_states,
)

# Comparison
from .comparison import ComparisonField, StateComparison, compare_laws, compare_states, travel_warnings

__version__ = "0.1.0"

__all__ = [
    # Core
    "Settings",
    "get_settings",
    "UnknownStateError",
    "ReciprocityDataError",
    "configure_logging",
    # Ontology
    "PermitType",
    "CarryType",
    "ReciprocityStatus",
    "StateLaw",
    "ReciprocityEntry",
    "STATE_NAMES",
    "state_code_for_name",
    # Law table
    "LawTable",
    "load_law_table",
    # Reciprocity
    "GraphAudit",
    "ReciprocityGraph",
    "ReciprocityEngine",
    "ReciprocitySummary",
    "build_engine",
    "get_engine",
    "resolve_status",
    "states_honoring_permit",
    "reciprocity_summary",
    "carry_reach_count",
    "get_law",
    "get_all_states",
    # Comparison
    "ComparisonField",
    "StateComparison",
    "compare_laws",
    "compare_states",
    "travel_warnings",
]
