"""Core infrastructure: logging, settings loading, naming, identifiers."""

from ormock.core.config_loader import deep_merge, load_settings
from ormock.core.identifiers import IdCounter
from ormock.core.logging import configure_logging, get_logger

__all__ = [
    "IdCounter",
    "configure_logging",
    "deep_merge",
    "get_logger",
    "load_settings",
]
