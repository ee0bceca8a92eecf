"""
Reciprocity engine.

Decides, for an ordered (home, target) pair of states, which carry status
applies, and derives reach statistics and map presentation data from it.
Every query takes the home or selected state explicitly.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import structlog

from ccwmap.core.config import get_settings
from ccwmap.core.ontology.jurisdiction import (
    CARRY_ALLOWED_STATUSES,
    PermitType,
    ReciprocityStatus,
    StateLaw,
)
from ccwmap.laws.service import LawTable, load_law_table

from .constants import (
    DEFAULT_COLOR,
    PERMIT_TYPE_COLORS,
    PERMIT_TYPE_LEGEND,
    PERMITLESS_CARRY_COLOR,
    RECIPROCITY_LEGEND,
    STATUS_COLORS,
    STATUS_LABELS,
)
from .graph import GraphAudit, ReciprocityGraph, load_reciprocity_graph
from .schemas import LegendItem, NationalOverview, ReciprocityBreakdown, ReciprocitySummary

logger = structlog.get_logger(__name__)


class ReciprocityEngine:
    """Status resolution and aggregation over a law table and reciprocity graph.

    The graph is validated against the law table on construction unless
    ``validate`` is False.
    """

    def __init__(
        self,
        law_table: LawTable,
        graph: ReciprocityGraph,
        strict_symmetry: bool = False,
        validate: bool = True,
    ):
        self.law_table = law_table
        self.graph = graph
        if validate:
            self.audit: GraphAudit = graph.validate(law_table, strict_symmetry=strict_symmetry)
        else:
            self.audit = graph.audit(law_table)

    # =========================================================================
    # Jurisdiction lookup
    # =========================================================================

    def get_law(self, code: str) -> StateLaw:
        return self.law_table.get_law(code)

    def get_all_states(self) -> list[StateLaw]:
        return self.law_table.get_all_states()

    # =========================================================================
    # Status resolution
    # =========================================================================

    def resolve_status(self, home_state: str, target_state: str) -> ReciprocityStatus:
        """Resolve the carry status in ``target_state`` for a ``home_state`` permit.

        Rules apply in order and the first match wins:
        same state, permitless-carry target, target without graph entry,
        target honors home, otherwise none.

        Raises:
            UnknownStateError: If either code is not in the law table.
        """
        home = self.law_table.require(home_state)
        target = self.law_table.require(target_state)

        if home == target:
            return ReciprocityStatus.HOME

        # Visitor-blind: applies even when the home state issues no permits
        if self.graph.is_permitless(target):
            return ReciprocityStatus.PERMITLESS

        if not self.graph.has_entry(target):
            return ReciprocityStatus.NONE

        if home in self.graph.honors(target):
            return ReciprocityStatus.FULL

        return ReciprocityStatus.NONE

    def status_map(self, home_state: str) -> dict[str, ReciprocityStatus]:
        """Status of every state for a ``home_state`` permit, in table order."""
        home = self.law_table.require(home_state)
        return {code: self.resolve_status(home, code) for code in self.law_table.state_codes()}

    # =========================================================================
    # Aggregates
    # =========================================================================

    def states_honoring_permit(self, state: str) -> list[str]:
        """All other states in which a holder of ``state``'s permit may carry, sorted."""
        code = self.law_table.require(state)
        honoring = set(self.graph.permitless_states) | set(self.graph.honored_by(code))
        honoring.discard(code)
        return sorted(honoring)

    def reciprocity_summary(self, state: str) -> ReciprocitySummary:
        """Reach statistics for ``state``'s permit.

        ``can_carry_in`` adds one for the home state unless the state is
        itself permitless-carry. For permitless states this means the home
        state is not counted at all, unlike ``carry_reach_count``.
        """
        code = self.law_table.require(state)
        honoring = self.states_honoring_permit(code)
        home_bonus = 0 if self.graph.is_permitless(code) else 1
        return ReciprocitySummary(
            can_carry_in=len(honoring) + home_bonus,
            honors_count=len(self.graph.honors(code)),
            honored_by_count=len(honoring),
        )

    def carry_reach_count(self, home_state: str) -> int:
        """Number of states, home included, where a ``home_state`` permit holder may carry."""
        statuses = self.status_map(home_state)
        return sum(1 for status in statuses.values() if status in CARRY_ALLOWED_STATUSES) + 1

    def group_by_status(self, home_state: str) -> ReciprocityBreakdown:
        """Group every other state by status for the reciprocity list view."""
        home = self.law_table.require(home_state)
        groups: dict[ReciprocityStatus, list[str]] = {status: [] for status in ReciprocityStatus}
        for code, status in self.status_map(home).items():
            groups[status].append(code)

        return ReciprocityBreakdown(
            home_state=home,
            permitless=sorted(groups[ReciprocityStatus.PERMITLESS]),
            full=sorted(groups[ReciprocityStatus.FULL]),
            partial=sorted(groups[ReciprocityStatus.PARTIAL]),
            none=sorted(groups[ReciprocityStatus.NONE]),
            can_carry_count=len(groups[ReciprocityStatus.PERMITLESS])
            + len(groups[ReciprocityStatus.FULL])
            + 1,
        )

    def national_overview(self) -> NationalOverview:
        laws = self.law_table.get_all_states()
        return NationalOverview(
            total_states=len(laws),
            permitless_carry=sum(1 for law in laws if law.permitless_carry),
            shall_issue=sum(1 for law in laws if law.permit_type == PermitType.SHALL_ISSUE),
            may_issue=sum(1 for law in laws if law.permit_type == PermitType.MAY_ISSUE),
            red_flag_laws=sum(1 for law in laws if law.red_flag_law),
        )

    # =========================================================================
    # Map presentation
    # =========================================================================

    def state_color(self, state: str, selected_state: str | None = None) -> str:
        """Fill color for ``state`` on the map.

        Without a selection states are colored by their own law; with one,
        by their reciprocity status for the selected state's permit.
        """
        if selected_state is None:
            law = self.law_table.get_law(state)
            if law.permitless_carry:
                return PERMITLESS_CARRY_COLOR
            return PERMIT_TYPE_COLORS.get(law.permit_type, DEFAULT_COLOR)

        return STATUS_COLORS[self.resolve_status(selected_state, state)]

    def map_colors(self, selected_state: str | None = None) -> dict[str, str]:
        return {
            code: self.state_color(code, selected_state)
            for code in self.law_table.state_codes()
        }

    @staticmethod
    def legend(selected_state: str | None = None) -> list[LegendItem]:
        items = RECIPROCITY_LEGEND if selected_state else PERMIT_TYPE_LEGEND
        return [LegendItem(color=color, label=label) for color, label in items]


def status_label(status: ReciprocityStatus) -> str:
    return STATUS_LABELS[status]


def build_engine(
    state_laws_path: str | Path | None = None,
    reciprocity_path: str | Path | None = None,
    strict_symmetry: bool | None = None,
) -> ReciprocityEngine:
    """Load both tables and build a validated engine.

    Raises:
        ReciprocityDataError: If either table fails validation.
    """
    settings = get_settings()
    law_table = load_law_table(state_laws_path)
    graph = load_reciprocity_graph(reciprocity_path)
    if strict_symmetry is None:
        strict_symmetry = settings.strict_graph_symmetry

    engine = ReciprocityEngine(law_table, graph, strict_symmetry=strict_symmetry)
    logger.info(
        "reciprocity_engine_ready",
        states=len(law_table),
        symmetric=engine.audit.is_symmetric,
        permitless_flag_mismatches=len(engine.audit.permitless_flag_mismatches),
    )
    return engine


@lru_cache
def get_engine() -> ReciprocityEngine:
    """Get the process-wide engine built from the configured data files."""
    return build_engine()


# =============================================================================
# Function-call surface over the process-wide engine
# =============================================================================


def resolve_status(home_state: str, target_state: str) -> ReciprocityStatus:
    return get_engine().resolve_status(home_state, target_state)


def states_honoring_permit(state: str) -> list[str]:
    return get_engine().states_honoring_permit(state)


def reciprocity_summary(state: str) -> ReciprocitySummary:
    return get_engine().reciprocity_summary(state)


def carry_reach_count(home_state: str) -> int:
    return get_engine().carry_reach_count(home_state)


def get_law(code: str) -> StateLaw:
    return get_engine().get_law(code)


def get_all_states() -> list[StateLaw]:
    return get_engine().get_all_states()
