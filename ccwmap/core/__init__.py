"""Core package - shared configuration, logging, errors and domain types."""

from .config import Settings, get_settings
from .errors import UnknownStateError, ReciprocityDataError
from .logging import configure_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "UnknownStateError",
    "ReciprocityDataError",
    # Logging
    "configure_logging",
]
