"""Core types: errors, configuration and the table container."""

from trajlib.core.errors import (
    TrajectoryError,
    LoadError,
    ParseError,
    TableIOError,
    SchemaError,
    SpacingError,
    RolloutUnavailableError,
    TrajectoryIndexError,
)
from trajlib.core.config import LoaderConfig, ParseFailurePolicy
from trajlib.core.table import Table

__all__ = [
    "TrajectoryError",
    "LoadError",
    "ParseError",
    "TableIOError",
    "SchemaError",
    "SpacingError",
    "RolloutUnavailableError",
    "TrajectoryIndexError",
    "LoaderConfig",
    "ParseFailurePolicy",
    "Table",
]
