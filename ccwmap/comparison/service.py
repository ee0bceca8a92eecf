"""
Pairwise law comparison.

Builds a field-by-field diff of two jurisdictions and the travel warnings
a permit holder crossing between them needs to see.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

from ccwmap.core.ontology.jurisdiction import CarryType, ReciprocityStatus, StateLaw
from ccwmap.reciprocity.service import ReciprocityEngine, get_engine

from .schemas import ComparisonField, StateComparison


# =============================================================================
# Formatting
# =============================================================================


def format_enum_label(value: str) -> str:
    """'shall-issue' -> 'Shall issue', 'permit-required' -> 'Permit required'."""
    text = value.replace("-", " ", 1)
    return text[:1].upper() + text[1:]


def format_bool(value: bool, true_label: str = "Yes", false_label: str = "No") -> str:
    return true_label if value else false_label


def format_required(value: bool) -> str:
    return format_bool(value, "Required", "Not required")


def format_magazine_limit(value: int | None) -> str:
    return f"{value} rounds" if value else "No limit"


class _FieldSpec(NamedTuple):
    label: str
    render: Callable[[StateLaw], str]
    warning: str | None = None


# Fixed, ordered field list
COMPARISON_FIELDS: list[_FieldSpec] = [
    _FieldSpec(
        "Permit Type",
        lambda law: format_enum_label(law.permit_type.value),
        "Different permit systems. Check if your permit transfers.",
    ),
    _FieldSpec(
        "Concealed Carry",
        lambda law: format_enum_label(law.concealed_carry.value),
        "Concealed carry rules differ. Verify you can legally carry.",
    ),
    _FieldSpec(
        "Open Carry",
        lambda law: format_enum_label(law.open_carry.value),
        "Open carry laws change across the border and could be illegal.",
    ),
    _FieldSpec(
        "Permitless Carry",
        lambda law: format_bool(law.permitless_carry),
        "One state requires a permit. Do not assume permitless carry.",
    ),
    _FieldSpec(
        "Stand Your Ground",
        lambda law: format_bool(law.stand_your_ground),
        "Self-defense rights differ and a duty to retreat may apply.",
    ),
    _FieldSpec("Castle Doctrine", lambda law: format_bool(law.castle_doctrine)),
    _FieldSpec(
        "Duty to Retreat",
        lambda law: format_bool(law.duty_to_retreat),
        "Duty to retreat applies in one state. Know your obligation.",
    ),
    _FieldSpec(
        "Magazine Limit",
        lambda law: format_magazine_limit(law.magazine_restriction),
        "Magazine capacity limits differ. You may need to swap magazines at the border.",
    ),
    _FieldSpec("Red Flag Law", lambda law: format_bool(law.red_flag_law)),
    _FieldSpec("Background Checks", lambda law: format_required(law.universal_background_checks)),
    _FieldSpec("Permit to Purchase", lambda law: format_required(law.permit_required_for_purchase)),
    _FieldSpec(
        "Preemption",
        lambda law: format_bool(law.preemption),
        "Local ordinances may apply in one state. Check city and county laws.",
    ),
]


def compare_laws(a: StateLaw, b: StateLaw) -> list[ComparisonField]:
    """Compare two jurisdictions field by field, in fixed order.

    Difference detection uses the display strings, so it does not depend
    on argument order.
    """
    fields = []
    for spec in COMPARISON_FIELDS:
        value_a = spec.render(a)
        value_b = spec.render(b)
        is_different = value_a != value_b
        fields.append(ComparisonField(
            label=spec.label,
            value_a=value_a,
            value_b=value_b,
            is_different=is_different,
            warning=spec.warning if is_different else None,
        ))
    return fields


# =============================================================================
# Travel warnings
# =============================================================================


def _reciprocity_warnings(a: StateLaw, b: StateLaw, engine: ReciprocityEngine) -> list[str]:
    warnings = []
    if engine.resolve_status(a.state_code, b.state_code) == ReciprocityStatus.NONE:
        warnings.append(
            f"{b.state_name} does NOT honor {a.state_name} permits. "
            f"You cannot legally carry with a {a.state_code} permit in {b.state_code}."
        )
    # Reciprocity is directional; check the reverse independently
    if engine.resolve_status(b.state_code, a.state_code) == ReciprocityStatus.NONE:
        warnings.append(
            f"{a.state_name} does NOT honor {b.state_name} permits. "
            f"You cannot legally carry with a {b.state_code} permit in {a.state_code}."
        )
    return warnings


def _permitless_warning(a: StateLaw, b: StateLaw) -> str | None:
    if a.permitless_carry == b.permitless_carry:
        return None
    free, strict = (a, b) if a.permitless_carry else (b, a)
    return (
        f"{free.state_name} allows permitless carry but {strict.state_name} does not. "
        f"You MUST have a valid permit to carry in {strict.state_code}."
    )


def _magazine_warning(a: StateLaw, b: StateLaw) -> str | None:
    if a.magazine_restriction == b.magazine_restriction:
        return None
    limited = [law for law in (a, b) if law.magazine_restriction is not None]
    if not limited:
        return None
    strictest = min(limited, key=lambda law: law.magazine_restriction)
    return (
        f"{strictest.state_name} limits magazines to {strictest.magazine_restriction} rounds. "
        "Ensure compliance before crossing the border."
    )


def _duty_to_retreat_warning(a: StateLaw, b: StateLaw) -> str | None:
    if a.duty_to_retreat == b.duty_to_retreat:
        return None
    retreat = a if a.duty_to_retreat else b
    return (
        f"{retreat.state_name} has a duty to retreat. Stand Your Ground does not apply; "
        "you must attempt to retreat before using force."
    )


def _open_carry_warning(a: StateLaw, b: StateLaw) -> str | None:
    if a.open_carry == b.open_carry:
        return None
    prohibited = [law for law in (a, b) if law.open_carry == CarryType.PROHIBITED]
    if len(prohibited) != 1:
        return None
    return f"Open carry is prohibited in {prohibited[0].state_name}. Keep your firearm concealed."


def _preemption_warning(a: StateLaw, b: StateLaw) -> str | None:
    if a.preemption == b.preemption:
        return None
    local = b if a.preemption else a
    return (
        f"{local.state_name} does not have state preemption. Local cities and counties "
        "may have stricter gun laws. Research your specific destination."
    )


def travel_warnings(
    a: StateLaw,
    b: StateLaw,
    engine: ReciprocityEngine | None = None,
) -> list[str]:
    """Warnings for a permit holder travelling between ``a`` and ``b``.

    Checks run in a fixed order and each contributes at most one warning;
    every check that fires is included.
    """
    engine = engine or get_engine()
    warnings = _reciprocity_warnings(a, b, engine)
    for check in (
        _permitless_warning,
        _magazine_warning,
        _duty_to_retreat_warning,
        _open_carry_warning,
        _preemption_warning,
    ):
        warning = check(a, b)
        if warning:
            warnings.append(warning)
    return warnings


def compare_states(
    code_a: str,
    code_b: str,
    engine: ReciprocityEngine | None = None,
) -> StateComparison:
    """Full comparison of two states by code.

    Raises:
        UnknownStateError: If either code is not in the law table.
    """
    engine = engine or get_engine()
    a = engine.get_law(code_a)
    b = engine.get_law(code_b)
    fields = compare_laws(a, b)
    return StateComparison(
        state_a=a,
        state_b=b,
        fields=fields,
        warnings=travel_warnings(a, b, engine),
        difference_count=sum(1 for field in fields if field.is_different),
        status_a_to_b=engine.resolve_status(a.state_code, b.state_code),
        status_b_to_a=engine.resolve_status(b.state_code, a.state_code),
    )
