"""Core ontology types for carry-permit reciprocity."""

from .jurisdiction import (
    PermitType,
    CarryType,
    ReciprocityStatus,
    CARRY_ALLOWED_STATUSES,
    STATE_NAMES,
    StateLaw,
    ReciprocityEntry,
    normalize_state_code,
    state_code_for_name,
)

__all__ = [
    # Enums
    "PermitType",
    "CarryType",
    "ReciprocityStatus",
    "CARRY_ALLOWED_STATUSES",
    # Names
    "STATE_NAMES",
    "normalize_state_code",
    "state_code_for_name",
    # Records
    "StateLaw",
    "ReciprocityEntry",
]
