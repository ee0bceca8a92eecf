"""Domain exceptions for the reciprocity engine."""

from __future__ import annotations


class UnknownStateError(LookupError):
    """Raised when a state code (or name) is not in the law table."""

    def __init__(self, state_code: str):
        self.state_code = state_code
        super().__init__(f"Unknown state: {state_code!r}")


class ReciprocityDataError(ValueError):
    """Raised when the bundled law or reciprocity tables fail validation.

    Fatal at startup: the engine is never built from inconsistent data.
    """

    def __init__(self, message: str, problems: list[str] | None = None):
        self.problems = problems or []
        if self.problems:
            message = f"{message}: " + "; ".join(self.problems)
        super().__init__(message)
