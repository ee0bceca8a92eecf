"""Pytest fixtures for test suite."""

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from ccwmap.core.ontology import ReciprocityEntry, StateLaw
from ccwmap.laws import LawTable, load_law_table
from ccwmap.reciprocity import ReciprocityEngine, ReciprocityGraph, build_engine, load_reciprocity_graph


# =============================================================================
# Bundled Data Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def data_dir() -> Path:
    """Path to the bundled data tables."""
    return Path(__file__).parent.parent / "ccwmap" / "data"


@pytest.fixture(scope="session")
def law_table(data_dir: Path) -> LawTable:
    """Law table loaded from the bundled state_laws.yaml."""
    return load_law_table(data_dir / "state_laws.yaml")


@pytest.fixture(scope="session")
def graph(data_dir: Path) -> ReciprocityGraph:
    """Reciprocity graph loaded from the bundled reciprocity.yaml."""
    return load_reciprocity_graph(data_dir / "reciprocity.yaml")


@pytest.fixture(scope="session")
def engine(data_dir: Path) -> ReciprocityEngine:
    """Validated engine over the bundled tables (lenient symmetry)."""
    return build_engine(
        data_dir / "state_laws.yaml",
        data_dir / "reciprocity.yaml",
        strict_symmetry=False,
    )


# =============================================================================
# Synthetic Table Fixtures
# =============================================================================


@pytest.fixture
def make_law() -> Callable[..., StateLaw]:
    """Factory for StateLaw records with neutral defaults."""

    def _make(code: str, **overrides: Any) -> StateLaw:
        record = {
            "state_code": code,
            "state_name": f"State {code}",
            "permit_type": "shall-issue",
            "open_carry": "permit-required",
            "concealed_carry": "permit-required",
            "permitless_carry": False,
            "stand_your_ground": True,
            "castle_doctrine": True,
            "duty_to_retreat": False,
            "preemption": True,
            "magazine_restriction": None,
        }
        record.update(overrides)
        return StateLaw.model_validate(record)

    return _make


@pytest.fixture
def travel_laws(make_law) -> LawTable:
    """Six-state table for directional reciprocity scenarios.

    AZ is the only permitless-carry state; VT is an ordinary state here.
    """
    return LawTable([
        make_law("TX", state_name="Texas"),
        make_law("VT", state_name="Vermont"),
        make_law("FL", state_name="Florida"),
        make_law("GA", state_name="Georgia"),
        make_law(
            "CA",
            state_name="California",
            permit_type="may-issue",
            open_carry="prohibited",
            concealed_carry="restricted",
            stand_your_ground=False,
            duty_to_retreat=True,
            magazine_restriction=10,
            preemption=False,
        ),
        make_law(
            "AZ",
            state_name="Arizona",
            permit_type="unrestricted",
            open_carry="permitless",
            concealed_carry="permitless",
            permitless_carry=True,
        ),
    ])


@pytest.fixture
def travel_graph() -> ReciprocityGraph:
    """Directional edges for the travel_laws table.

    FL does not honor GA while GA honors FL, so FL->GA and GA->FL differ.
    """
    entries = [
        ReciprocityEntry(state_code="TX", honors=["FL", "GA", "AZ"]),
        ReciprocityEntry(state_code="VT", honors=[]),
        ReciprocityEntry(state_code="FL", honors=["TX"]),
        ReciprocityEntry(state_code="GA", honors=["FL", "TX"]),
        ReciprocityEntry(state_code="CA", honors=[]),
        ReciprocityEntry(state_code="AZ", honors=["TX", "FL", "GA"]),
    ]
    return ReciprocityGraph(entries, permitless_states=["AZ"])


@pytest.fixture
def travel_engine(travel_laws: LawTable, travel_graph: ReciprocityGraph) -> ReciprocityEngine:
    """Engine over the synthetic six-state tables."""
    return ReciprocityEngine(travel_laws, travel_graph)


@pytest.fixture
def write_tables(tmp_path: Path) -> Callable[..., tuple[Path, Path]]:
    """Write law and reciprocity tables to YAML files under tmp_path."""

    def _write(laws: list[dict[str, Any]], reciprocity: dict[str, Any]) -> tuple[Path, Path]:
        laws_path = tmp_path / "state_laws.yaml"
        reciprocity_path = tmp_path / "reciprocity.yaml"
        laws_path.write_text(yaml.safe_dump(laws, sort_keys=False), encoding="utf-8")
        reciprocity_path.write_text(yaml.safe_dump(reciprocity, sort_keys=False), encoding="utf-8")
        return laws_path, reciprocity_path

    return _write


@pytest.fixture
def two_state_records() -> list[dict[str, Any]]:
    """Minimal camelCase law records, as they appear in state_laws.yaml."""
    return [
        {
            "stateCode": "AA",
            "stateName": "Alpha",
            "permitType": "shall-issue",
            "openCarry": "permit-required",
            "concealedCarry": "permit-required",
            "permitlessCarry": False,
        },
        {
            "stateCode": "BB",
            "stateName": "Bravo",
            "permitType": "unrestricted",
            "openCarry": "permitless",
            "concealedCarry": "permitless",
            "permitlessCarry": True,
        },
    ]
