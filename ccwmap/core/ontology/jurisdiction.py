"""
Jurisdiction types for carry-permit reciprocity.

One StateLaw per U.S. state plus D.C., and one ReciprocityEntry per state
describing whose permits that state's law accepts.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ccwmap.core.errors import UnknownStateError


class PermitType(str, Enum):
    """How a state issues carry permits to its residents."""
    UNRESTRICTED = "unrestricted"
    SHALL_ISSUE = "shall-issue"
    MAY_ISSUE = "may-issue"
    NO_ISSUE = "no-issue"


class CarryType(str, Enum):
    """Rules for open or concealed carry."""
    PERMITLESS = "permitless"
    PERMIT_REQUIRED = "permit-required"
    RESTRICTED = "restricted"
    PROHIBITED = "prohibited"


class ReciprocityStatus(str, Enum):
    """Carry status of a target state for a holder of a home-state permit.

    PARTIAL is never produced by the resolver; it is kept for manually
    curated conditional agreements.
    """
    HOME = "home"
    PERMITLESS = "permitless"
    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


# Statuses under which a home-state permit holder may carry in the target.
CARRY_ALLOWED_STATUSES: frozenset[ReciprocityStatus] = frozenset({
    ReciprocityStatus.FULL,
    ReciprocityStatus.PERMITLESS,
})


STATE_NAMES: dict[str, str] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho",
    "IL": "Illinois", "IN": "Indiana", "IA": "Iowa", "KS": "Kansas",
    "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma",
    "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming", "DC": "District of Columbia",
}

_NAME_TO_CODE: dict[str, str] = {name.lower(): code for code, name in STATE_NAMES.items()}


def normalize_state_code(code: str) -> str:
    """Normalize user input to the canonical two-letter form."""
    return code.strip().upper()


def state_code_for_name(name: str) -> str:
    """Map a display name (as used by boundary features) to its state code."""
    code = _NAME_TO_CODE.get(name.strip().lower())
    if code is None:
        raise UnknownStateError(name)
    return code


class StateLaw(BaseModel):
    """Carry-law attributes of one jurisdiction."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    state_code: str = Field(..., alias="stateCode", min_length=2, max_length=2)
    state_name: str = Field(..., alias="stateName")
    permit_type: PermitType = Field(..., alias="permitType")
    open_carry: CarryType = Field(..., alias="openCarry")
    concealed_carry: CarryType = Field(..., alias="concealedCarry")
    permitless_carry: bool = Field(..., alias="permitlessCarry")
    permit_required_for_purchase: bool = Field(False, alias="permitRequiredForPurchase")
    universal_background_checks: bool = Field(False, alias="universalBackgroundChecks")
    red_flag_law: bool = Field(False, alias="redFlagLaw")
    stand_your_ground: bool = Field(False, alias="standYourGround")
    castle_doctrine: bool = Field(False, alias="castleDoctrine")
    duty_to_retreat: bool = Field(False, alias="dutyToRetreat")
    preemption: bool = False
    magazine_restriction: int | None = Field(
        None, alias="magazineRestriction", gt=0, description="Round limit; None means no limit"
    )
    transport_requirements: str | None = Field(None, alias="transportRequirements")
    ammo_restrictions: str | None = Field(None, alias="ammoRestrictions")

    # Informational only
    source_url: str = Field("", alias="sourceUrl")
    summary: str = ""
    key_provisions: tuple[str, ...] = Field(default_factory=tuple, alias="keyProvisions")
    last_updated: date | None = Field(None, alias="lastUpdated")

    @field_validator("state_code", mode="before")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return normalize_state_code(v) if isinstance(v, str) else v


class ReciprocityEntry(BaseModel):
    """Adjacency lists for one state as recorded in the reciprocity dataset."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    state_code: str = Field(..., alias="stateCode", min_length=2, max_length=2)
    honors: frozenset[str] = Field(
        default_factory=frozenset, description="States whose permits this state accepts"
    )
    honored_by: frozenset[str] = Field(
        default_factory=frozenset,
        alias="honoredBy",
        description="States that accept this state's permit",
    )

    @field_validator("state_code", mode="before")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return normalize_state_code(v) if isinstance(v, str) else v

    @field_validator("honors", "honored_by", mode="before")
    @classmethod
    def upper_codes(cls, v):
        if v is None:
            return frozenset()
        if not isinstance(v, (list, tuple, set, frozenset)):
            return v
        return [normalize_state_code(c) if isinstance(c, str) else c for c in v]
