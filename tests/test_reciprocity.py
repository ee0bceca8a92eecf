"""Tests for the reciprocity engine: status resolution and reach statistics."""

import pytest

from ccwmap.core.errors import ReciprocityDataError, UnknownStateError
from ccwmap.core.ontology import CARRY_ALLOWED_STATUSES, PermitType, ReciprocityEntry, ReciprocityStatus
from ccwmap.laws import LawTable
from ccwmap.reciprocity import (
    DEFAULT_COLOR,
    PERMIT_TYPE_COLORS,
    PERMITLESS_CARRY_COLOR,
    STATUS_COLORS,
    STATUS_LABELS,
    ReciprocityEngine,
    ReciprocityGraph,
    status_label,
)


# =============================================================================
# Status Resolution
# =============================================================================


class TestResolveStatus:
    """Directional scenarios over the synthetic six-state tables."""

    def test_target_with_empty_honors_is_none(self, travel_engine):
        """A target that honors no one gives none."""
        assert travel_engine.resolve_status("TX", "VT") == ReciprocityStatus.NONE

    def test_permitless_target_ignores_home_permit_system(self, travel_engine):
        """Permitless targets are reachable from any home state."""
        assert travel_engine.resolve_status("CA", "AZ") == ReciprocityStatus.PERMITLESS

    def test_target_honors_lookup_decides(self, travel_engine):
        """The target state's honors list decides full reciprocity."""
        assert travel_engine.resolve_status("FL", "GA") == ReciprocityStatus.FULL
        # Reverse direction reads FL's honors list, which omits GA
        assert travel_engine.resolve_status("GA", "FL") == ReciprocityStatus.NONE

    def test_same_state_is_home(self, travel_engine):
        """A state resolved against itself is home."""
        assert travel_engine.resolve_status("AZ", "AZ") == ReciprocityStatus.HOME
        assert travel_engine.resolve_status("CA", "CA") == ReciprocityStatus.HOME

    def test_codes_are_normalized(self, travel_engine):
        """Lowercase and padded codes resolve."""
        assert travel_engine.resolve_status("fl", " ga ") == ReciprocityStatus.FULL
        assert travel_engine.resolve_status("tx", "TX") == ReciprocityStatus.HOME

    def test_unknown_home_state(self, travel_engine):
        """An unknown home code raises UnknownStateError."""
        with pytest.raises(UnknownStateError):
            travel_engine.resolve_status("ZZ", "TX")

    def test_unknown_target_state(self, travel_engine):
        """An unknown target code raises UnknownStateError naming it."""
        with pytest.raises(UnknownStateError) as exc_info:
            travel_engine.resolve_status("TX", "ZZ")
        assert exc_info.value.state_code == "ZZ"

    def test_partial_is_never_produced(self, engine):
        """No pair in the bundled data resolves to partial."""
        for home in engine.law_table.state_codes():
            assert ReciprocityStatus.PARTIAL not in engine.status_map(home).values()


class TestMissingGraphEntry:
    @pytest.fixture
    def unvalidated_engine(self, travel_laws, make_law):
        laws = LawTable([*travel_laws, make_law("NM", state_name="New Mexico")])
        graph = ReciprocityGraph(
            [ReciprocityEntry(state_code="TX", honors=["NM"]), ReciprocityEntry(state_code="AZ")],
            permitless_states=["AZ"],
        )
        return ReciprocityEngine(laws, graph, validate=False)

    def test_target_without_entry_is_none(self, unvalidated_engine):
        """A target with no graph entry gives none."""
        assert unvalidated_engine.resolve_status("TX", "NM") == ReciprocityStatus.NONE

    def test_permitless_takes_precedence_over_missing_entry(self, make_law):
        """A permitless target with no entry is still permitless."""
        laws = LawTable([make_law("AA"), make_law("BB", permitless_carry=True)])
        graph = ReciprocityGraph([ReciprocityEntry(state_code="AA")], permitless_states=["BB"])
        engine = ReciprocityEngine(laws, graph, validate=False)
        assert engine.resolve_status("AA", "BB") == ReciprocityStatus.PERMITLESS

    def test_validated_engine_rejects_missing_entry(self, travel_laws, make_law):
        """Validation rejects a law record with no graph entry."""
        laws = LawTable([*travel_laws, make_law("NM")])
        graph = ReciprocityGraph([ReciprocityEntry(state_code=code) for code in travel_laws.state_codes()])
        with pytest.raises(ReciprocityDataError, match="state NM has no reciprocity entry"):
            ReciprocityEngine(laws, graph)


class TestBundledStatuses:
    def test_reflexivity(self, engine):
        """Every state is home to itself."""
        for code in engine.law_table.state_codes():
            assert engine.resolve_status(code, code) == ReciprocityStatus.HOME

    def test_permitless_precedence(self, engine):
        """Every permitless target is permitless for every other home."""
        for target in engine.graph.permitless_states:
            for home in engine.law_table.state_codes():
                if home != target:
                    assert engine.resolve_status(home, target) == ReciprocityStatus.PERMITLESS

    def test_known_pairs(self, engine):
        """Spot-check bundled pairs."""
        assert engine.resolve_status("TX", "CA") == ReciprocityStatus.NONE
        assert engine.resolve_status("FL", "CO") == ReciprocityStatus.FULL
        assert engine.resolve_status("TX", "VT") == ReciprocityStatus.PERMITLESS
        assert engine.resolve_status("CA", "AZ") == ReciprocityStatus.PERMITLESS
        assert engine.resolve_status("CA", "CO") == ReciprocityStatus.NONE

    def test_status_map_covers_table(self, engine):
        """The status map covers every state once."""
        statuses = engine.status_map("CO")
        assert list(statuses) == engine.law_table.state_codes()
        assert statuses["CO"] == ReciprocityStatus.HOME


# =============================================================================
# Reach Aggregates
# =============================================================================


class TestStatesHonoringPermit:
    def test_sorted_union_of_permitless_and_derived(self, travel_engine):
        """Honoring states are permitless states plus derived honors."""
        # AZ is permitless; FL, GA and AZ list TX in honors
        assert travel_engine.states_honoring_permit("TX") == ["AZ", "FL", "GA"]

    def test_never_contains_self(self, engine):
        """A permit is never listed as honored by its own state."""
        for code in engine.law_table.state_codes():
            assert code not in engine.states_honoring_permit(code)

    def test_sorted_ascending(self, engine):
        """Honoring states are sorted by code."""
        honoring = engine.states_honoring_permit("PA")
        assert honoring == sorted(honoring)

    def test_unhonored_permit_reaches_permitless_states_only(self, engine):
        """An unhonored permit reaches only permitless states."""
        assert engine.states_honoring_permit("CA") == sorted(engine.graph.permitless_states)

    def test_unknown_state(self, engine):
        """Unknown codes raise UnknownStateError."""
        with pytest.raises(UnknownStateError):
            engine.states_honoring_permit("ZZ")


class TestReciprocitySummary:
    def test_aggregate_consistency(self, engine):
        """Summary counts agree with the underlying lists."""
        for code in engine.law_table.state_codes():
            summary = engine.reciprocity_summary(code)
            assert summary.honored_by_count == len(engine.states_honoring_permit(code))
            assert summary.honors_count == len(engine.graph.honors(code))

    def test_non_permitless_state_adds_home(self, engine):
        """canCarryIn counts the home state for permit states."""
        summary = engine.reciprocity_summary("CA")
        assert summary.honors_count == 0
        assert summary.honored_by_count == 29
        assert summary.can_carry_in == 30

    def test_permitless_state_does_not_add_home(self, engine):
        """canCarryIn leaves out a permitless home state."""
        summary = engine.reciprocity_summary("AZ")
        assert summary.can_carry_in == summary.honored_by_count

    def test_permitless_state_summary_differs_from_reach_count(self, engine):
        """A permitless home state counts itself only in carry reach."""
        # canCarryIn leaves the permitless home state uncounted; carry_reach_count counts it
        assert engine.reciprocity_summary("AZ").can_carry_in == engine.carry_reach_count("AZ") - 1

    def test_synthetic_summary(self, travel_engine):
        """Summary of the synthetic Texas record."""
        summary = travel_engine.reciprocity_summary("TX")
        assert summary.honors_count == 3
        assert summary.honored_by_count == 3
        assert summary.can_carry_in == 4


class TestCarryReachCount:
    def test_includes_home(self, travel_engine):
        """Carry reach counts the home state."""
        # FL and GA (full), AZ (permitless), TX itself
        assert travel_engine.carry_reach_count("TX") == 4

    def test_matches_status_map(self, engine):
        """Carry reach equals carry-allowed statuses plus home."""
        for code in ("CA", "CO", "TX", "NY", "PA"):
            statuses = engine.status_map(code).values()
            allowed = sum(1 for status in statuses if status in CARRY_ALLOWED_STATUSES)
            assert engine.carry_reach_count(code) == allowed + 1

    def test_unhonored_permit(self, engine):
        """A New York permit reaches the permitless states and New York."""
        assert engine.carry_reach_count("NY") == 30


class TestGroupByStatus:
    def test_breakdown(self, travel_engine):
        """Targets are grouped by status."""
        breakdown = travel_engine.group_by_status("TX")
        assert breakdown.home_state == "TX"
        assert breakdown.permitless == ["AZ"]
        assert breakdown.full == ["FL", "GA"]
        assert breakdown.partial == []
        assert breakdown.none == ["CA", "VT"]
        assert breakdown.can_carry_count == travel_engine.carry_reach_count("TX")

    def test_home_state_excluded(self, engine):
        """The home state is left out of the breakdown."""
        breakdown = engine.group_by_status("co")
        groups = breakdown.permitless + breakdown.full + breakdown.none
        assert "CO" not in groups
        assert len(groups) == len(engine.law_table) - 1


class TestNationalOverview:
    def test_bundled_counts(self, engine):
        """Bundled overview counts."""
        overview = engine.national_overview()
        assert overview.total_states == 51
        assert overview.permitless_carry == 29
        assert overview.shall_issue == 14
        assert overview.may_issue == 8
        assert overview.red_flag_laws == 22


# =============================================================================
# Map Presentation
# =============================================================================


class TestMapColors:
    def test_no_selection_colors_by_law(self, travel_engine):
        """Without a selection, states color by permit system."""
        assert travel_engine.state_color("AZ") == PERMITLESS_CARRY_COLOR
        assert travel_engine.state_color("TX") == PERMIT_TYPE_COLORS[PermitType.SHALL_ISSUE]
        assert travel_engine.state_color("CA") == PERMIT_TYPE_COLORS[PermitType.MAY_ISSUE]

    def test_selection_colors_by_status(self, travel_engine):
        """With a selection, states color by reciprocity status."""
        assert travel_engine.state_color("TX", "TX") == STATUS_COLORS[ReciprocityStatus.HOME]
        assert travel_engine.state_color("GA", "TX") == STATUS_COLORS[ReciprocityStatus.FULL]
        assert travel_engine.state_color("AZ", "TX") == STATUS_COLORS[ReciprocityStatus.PERMITLESS]
        assert travel_engine.state_color("VT", "TX") == STATUS_COLORS[ReciprocityStatus.NONE]

    def test_map_colors_cover_every_state(self, engine):
        """Map colors cover every state."""
        colors = engine.map_colors("TX")
        assert set(colors) == set(engine.law_table.state_codes())
        assert DEFAULT_COLOR not in colors.values()

    def test_unknown_selection(self, engine):
        """An unknown selection raises UnknownStateError."""
        with pytest.raises(UnknownStateError):
            engine.map_colors("ZZ")

    def test_legend_switches_with_selection(self, engine):
        """The legend follows the selection mode."""
        assert [item.label for item in engine.legend("TX")][0] == "Home State"
        labels = [item.label for item in engine.legend()]
        assert labels[0] == "Permitless Carry"
        assert len(labels) == 5


class TestStatusLabel:
    def test_every_status_has_label(self):
        """Every status has a display label."""
        for status in ReciprocityStatus:
            assert status_label(status) == STATUS_LABELS[status]

    def test_labels(self):
        """Display labels for full and none."""
        assert status_label(ReciprocityStatus.FULL) == "Honored"
        assert status_label(ReciprocityStatus.NONE) == "Not Honored"

    def test_every_status_has_color(self):
        """Every status has a color."""
        assert set(STATUS_COLORS) == set(ReciprocityStatus)
