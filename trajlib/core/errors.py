"""Exception hierarchy for trajectory loading and access."""


class TrajectoryError(Exception):
    """Base class for all trajlib errors."""


class LoadError(TrajectoryError):
    """A trajectory could not be loaded. Nothing partial is ever returned."""


class ParseError(LoadError, ValueError):
    """A value that must be numeric is not (trajectory id suffix or table field)."""


class TableIOError(LoadError, OSError):
    """A table file is unreadable or its header row is missing."""


class SchemaError(LoadError):
    """Column or row counts are inconsistent across the trajectory tables."""


class SpacingError(LoadError):
    """
    Timestamps are not evenly spaced.

    Attributes:
        source: Table the violation was found in
        row: Offending row index (None for a cross-table mismatch)
        residual: Observed step minus expected dt
    """

    def __init__(self, message: str, source: str = "", row=None, residual: float = 0.0):
        super().__init__(message)
        self.source = source
        self.row = row
        self.residual = residual


class RolloutUnavailableError(TrajectoryError):
    """Rollout data requested from a trajectory that has none."""


class TrajectoryIndexError(TrajectoryError, IndexError):
    """Explicit row index outside the loaded table."""
