"""
Reciprocity graph: directed "honors" edges plus the permitless-carry set.

The graph keeps one source of truth per edge. ``honors`` lists from the
dataset are authoritative and ``honored_by`` is derived by inverting them.
The hand-maintained ``honoredBy`` lists are kept only so the audit can
report where they disagree with the derived edges.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError

from ccwmap.core.config import get_settings
from ccwmap.core.errors import ReciprocityDataError
from ccwmap.core.ontology.jurisdiction import ReciprocityEntry, normalize_state_code
from ccwmap.laws.service import LawTable

logger = structlog.get_logger(__name__)


class GraphAudit(BaseModel):
    """Data-quality findings that do not by themselves block loading."""

    # state -> states that honor it per the honors lists but are absent from its honoredBy list
    undeclared_honored_by: dict[str, list[str]] = Field(default_factory=dict)
    # state -> states listed in its honoredBy list that do not list it in their honors
    unbacked_honored_by: dict[str, list[str]] = Field(default_factory=dict)
    # states whose permitless_carry flag disagrees with permitless-set membership
    permitless_flag_mismatches: list[str] = Field(default_factory=list)

    @property
    def is_symmetric(self) -> bool:
        return not self.undeclared_honored_by and not self.unbacked_honored_by

    def asymmetry_problems(self) -> list[str]:
        problems = []
        for code, others in sorted(self.undeclared_honored_by.items()):
            problems.append(f"{code} honoredBy is missing {', '.join(others)}")
        for code, others in sorted(self.unbacked_honored_by.items()):
            problems.append(f"{code} honoredBy lists {', '.join(others)} which do not honor {code}")
        return problems


class ReciprocityGraph:
    """Immutable reciprocity adjacency data."""

    def __init__(
        self,
        entries: Iterable[ReciprocityEntry],
        permitless_states: Iterable[str] = (),
    ):
        self._entries: dict[str, ReciprocityEntry] = {}
        duplicates = []
        for entry in entries:
            if entry.state_code in self._entries:
                duplicates.append(f"duplicate reciprocity entry {entry.state_code}")
                continue
            self._entries[entry.state_code] = entry
        if duplicates:
            raise ReciprocityDataError("Invalid reciprocity graph", duplicates)

        self._permitless: frozenset[str] = frozenset(
            normalize_state_code(code) for code in permitless_states
        )

        inverse: dict[str, set[str]] = defaultdict(set)
        for code, entry in self._entries.items():
            for honored in entry.honors:
                inverse[honored].add(code)
        self._honored_by: dict[str, frozenset[str]] = {
            code: frozenset(states) for code, states in inverse.items()
        }

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> ReciprocityGraph:
        """Build a graph from the reciprocity file structure.

        Expected keys: ``permitlessCarryStates`` (list of codes) and
        ``entries`` (list of ``{stateCode, honors, honoredBy}``).
        """
        raw_entries = data.get("entries") or []
        if not isinstance(raw_entries, list):
            raise ReciprocityDataError("Reciprocity 'entries' must be a list")

        entries = []
        problems = []
        for index, raw in enumerate(raw_entries):
            try:
                entries.append(ReciprocityEntry.model_validate(raw))
            except ValidationError as e:
                code = raw.get("stateCode") if isinstance(raw, dict) else None
                problems.append(f"{code or f'#{index}'}: {e.error_count()} invalid field(s)")
        if problems:
            raise ReciprocityDataError("Invalid reciprocity graph", problems)

        permitless = data.get("permitlessCarryStates", data.get("permitless_carry_states")) or []
        if not isinstance(permitless, list) or not all(isinstance(code, str) for code in permitless):
            raise ReciprocityDataError("Reciprocity 'permitlessCarryStates' must be a list of state codes")
        return cls(entries, permitless)

    @classmethod
    def load_file(cls, path: str | Path) -> ReciprocityGraph:
        """Load the reciprocity graph from YAML."""
        path = Path(path)
        if not path.exists():
            raise ReciprocityDataError(f"Reciprocity file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ReciprocityDataError(f"Malformed reciprocity file {path}: {e}") from e

        if not isinstance(content, dict):
            raise ReciprocityDataError(f"Reciprocity file {path} must be a mapping")

        graph = cls.from_mapping(content)
        logger.info(
            "reciprocity_graph_loaded",
            path=str(path),
            entries=len(graph),
            permitless_states=len(graph.permitless_states),
        )
        return graph

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def permitless_states(self) -> frozenset[str]:
        return self._permitless

    def is_permitless(self, code: str) -> bool:
        return code in self._permitless

    def has_entry(self, code: str) -> bool:
        return code in self._entries

    def honors(self, code: str) -> frozenset[str]:
        """States whose permits ``code`` accepts. Empty when ``code`` has no entry."""
        entry = self._entries.get(code)
        return entry.honors if entry else frozenset()

    def honored_by(self, code: str) -> frozenset[str]:
        """States that accept ``code``'s permit, derived from the honors lists."""
        return self._honored_by.get(code, frozenset())

    def declared_honored_by(self, code: str) -> frozenset[str]:
        """The hand-maintained honoredBy list, for auditing only."""
        entry = self._entries.get(code)
        return entry.honored_by if entry else frozenset()

    def codes(self) -> list[str]:
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)

    # =========================================================================
    # Validation
    # =========================================================================

    def referential_problems(self, law_table: LawTable) -> list[str]:
        """Problems that make the graph unusable with this law table."""
        problems = []

        for code, entry in self._entries.items():
            if code not in law_table:
                problems.append(f"reciprocity entry {code} has no law record")
            if code in entry.honors:
                problems.append(f"{code} lists itself in honors")
            for other in sorted(entry.honors | entry.honored_by):
                if other not in law_table:
                    problems.append(f"{code} references unknown state {other}")

        for code in law_table.state_codes():
            if code not in self._entries:
                problems.append(f"state {code} has no reciprocity entry")

        for code in sorted(self._permitless):
            if code not in law_table:
                problems.append(f"permitless-carry state {code} has no law record")

        return problems

    def audit(self, law_table: LawTable | None = None) -> GraphAudit:
        """Compare declared honoredBy lists with the derived ones."""
        audit = GraphAudit()

        for code in self._entries:
            derived = self.honored_by(code)
            declared = self.declared_honored_by(code)
            undeclared = sorted(derived - declared)
            unbacked = sorted(declared - derived - {code})
            if undeclared:
                audit.undeclared_honored_by[code] = undeclared
            if unbacked:
                audit.unbacked_honored_by[code] = unbacked

        if law_table is not None:
            for law in law_table:
                if law.permitless_carry != self.is_permitless(law.state_code):
                    audit.permitless_flag_mismatches.append(law.state_code)

        return audit

    def validate(self, law_table: LawTable, strict_symmetry: bool = False) -> GraphAudit:
        """Validate the graph against the law table.

        Raises:
            ReciprocityDataError: On referential problems, or on asymmetric
                edges when ``strict_symmetry`` is set.
        """
        problems = self.referential_problems(law_table)
        if problems:
            raise ReciprocityDataError("Reciprocity graph does not match law table", problems)

        audit = self.audit(law_table)

        if not audit.is_symmetric:
            if strict_symmetry:
                raise ReciprocityDataError("Asymmetric reciprocity edges", audit.asymmetry_problems())
            for code, others in sorted(audit.undeclared_honored_by.items()):
                logger.warning("reciprocity_asymmetry", state=code, kind="undeclared_honored_by", states=others)
            for code, others in sorted(audit.unbacked_honored_by.items()):
                logger.warning("reciprocity_asymmetry", state=code, kind="unbacked_honored_by", states=others)

        for code in audit.permitless_flag_mismatches:
            logger.warning(
                "permitless_flag_mismatch",
                state=code,
                law_flag=law_table.get_law(code).permitless_carry,
                in_permitless_set=self.is_permitless(code),
            )

        return audit


def load_reciprocity_graph(path: str | Path | None = None) -> ReciprocityGraph:
    """Load the reciprocity graph from the configured data directory."""
    return ReciprocityGraph.load_file(path or get_settings().reciprocity_path)
