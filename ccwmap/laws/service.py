"""Law table service layer - loading and lookup of per-state carry laws."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from ccwmap.core.config import get_settings
from ccwmap.core.errors import ReciprocityDataError, UnknownStateError
from ccwmap.core.ontology.jurisdiction import StateLaw, normalize_state_code

logger = structlog.get_logger(__name__)


class LawTable:
    """Read-only, indexed table of StateLaw records.

    Enumeration order is the order records were supplied in and is stable
    across calls; callers sort as needed.
    """

    def __init__(self, laws: Iterable[StateLaw]):
        self._laws: dict[str, StateLaw] = {}
        duplicates = []
        for law in laws:
            if law.state_code in self._laws:
                duplicates.append(f"duplicate state code {law.state_code}")
                continue
            self._laws[law.state_code] = law
        if duplicates:
            raise ReciprocityDataError("Invalid law table", duplicates)

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> LawTable:
        """Build a table from raw records (camelCase or snake_case keys)."""
        laws = []
        problems = []
        for index, record in enumerate(records):
            try:
                laws.append(StateLaw.model_validate(record))
            except ValidationError as e:
                code = None
                if isinstance(record, dict):
                    code = record.get("stateCode") or record.get("state_code")
                code = code or f"#{index}"
                problems.append(f"{code}: {e.error_count()} invalid field(s) ({_first_error(e)})")
        if problems:
            raise ReciprocityDataError("Invalid law table", problems)
        return cls(laws)

    @classmethod
    def load_file(cls, path: str | Path) -> LawTable:
        """Load the law table from a YAML list of jurisdiction records."""
        path = Path(path)
        if not path.exists():
            raise ReciprocityDataError(f"Law table file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ReciprocityDataError(f"Malformed law table {path}: {e}") from e

        if isinstance(content, dict) and "states" in content:
            content = content["states"]
        if not isinstance(content, list):
            raise ReciprocityDataError(f"Law table {path} must contain a list of state records")

        table = cls.from_records(content)
        logger.info("law_table_loaded", path=str(path), states=len(table))
        return table

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_law(self, code: str) -> StateLaw:
        """Get the law record for a state code.

        Raises:
            UnknownStateError: If the code is not in the table.
        """
        law = self._laws.get(normalize_state_code(code))
        if law is None:
            raise UnknownStateError(code)
        return law

    def require(self, code: str) -> str:
        """Normalize a code and check that it is in the table."""
        return self.get_law(code).state_code

    def has_state(self, code: str) -> bool:
        return normalize_state_code(code) in self._laws

    def get_all_states(self) -> list[StateLaw]:
        return list(self._laws.values())

    def state_codes(self) -> list[str]:
        return list(self._laws.keys())

    def states_sorted_by_name(self) -> list[StateLaw]:
        return sorted(self._laws.values(), key=lambda law: law.state_name)

    def __len__(self) -> int:
        return len(self._laws)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.has_state(code)

    def __iter__(self) -> Iterator[StateLaw]:
        return iter(self._laws.values())


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}"


def load_law_table(path: str | Path | None = None) -> LawTable:
    """Load the law table from the configured data directory."""
    return LawTable.load_file(path or get_settings().state_laws_path)
