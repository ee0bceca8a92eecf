"""Map colors and labels for reciprocity display."""

from ccwmap.core.ontology.jurisdiction import PermitType, ReciprocityStatus

DEFAULT_COLOR = "#333355"

# Selected-state view: one color per status
STATUS_COLORS: dict[ReciprocityStatus, str] = {
    ReciprocityStatus.HOME: "#4a90d9",
    ReciprocityStatus.PERMITLESS: "#8bc34a",
    ReciprocityStatus.FULL: "#4caf50",
    ReciprocityStatus.PARTIAL: "#ff9800",
    ReciprocityStatus.NONE: "#f44336",
}

STATUS_LABELS: dict[ReciprocityStatus, str] = {
    ReciprocityStatus.HOME: "Home",
    ReciprocityStatus.PERMITLESS: "Permitless",
    ReciprocityStatus.FULL: "Honored",
    ReciprocityStatus.PARTIAL: "Partial",
    ReciprocityStatus.NONE: "Not Honored",
}

# No-selection view: permitless-carry states first, then by permit type
PERMITLESS_CARRY_COLOR = "#4caf50"

PERMIT_TYPE_COLORS: dict[PermitType, str] = {
    PermitType.UNRESTRICTED: "#2e7d32",
    PermitType.SHALL_ISSUE: "#ff9800",
    PermitType.MAY_ISSUE: "#f44336",
    PermitType.NO_ISSUE: "#b71c1c",
}

PERMIT_TYPE_LABELS: dict[PermitType, str] = {
    PermitType.UNRESTRICTED: "Unrestricted",
    PermitType.SHALL_ISSUE: "Shall-Issue",
    PermitType.MAY_ISSUE: "May-Issue",
    PermitType.NO_ISSUE: "No-Issue",
}

RECIPROCITY_LEGEND: list[tuple[str, str]] = [
    (STATUS_COLORS[ReciprocityStatus.HOME], "Home State"),
    (STATUS_COLORS[ReciprocityStatus.FULL], "Full Reciprocity"),
    (STATUS_COLORS[ReciprocityStatus.PERMITLESS], "Permitless (No Permit Needed)"),
    (STATUS_COLORS[ReciprocityStatus.NONE], "No Reciprocity"),
]

PERMIT_TYPE_LEGEND: list[tuple[str, str]] = [
    (PERMITLESS_CARRY_COLOR, "Permitless Carry"),
    *((PERMIT_TYPE_COLORS[t], PERMIT_TYPE_LABELS[t]) for t in PermitType),
]
