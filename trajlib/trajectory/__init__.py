"""Trajectory data model, loading and time-indexed access."""

from trajlib.trajectory.trajectory import Trajectory
from trajlib.trajectory.indexing import index_from_time
from trajlib.trajectory.gain import unpack_gain_row, unpack_gain_rows, is_time_invariant
from trajlib.trajectory.validation import validate_tables
from trajlib.trajectory.loading import load_trajectory, parse_trajectory_id
from trajlib.trajectory.diagnostics import format_trajectory, print_trajectory

__all__ = [
    "Trajectory",
    "index_from_time",
    "unpack_gain_row",
    "unpack_gain_rows",
    "is_time_invariant",
    "validate_tables",
    "load_trajectory",
    "parse_trajectory_id",
    "format_trajectory",
    "print_trajectory",
]
