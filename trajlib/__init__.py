"""
trajlib: precomputed fixed-timestep trajectories for feedback controllers.

A trajectory bundles, at a constant sample period:
- Nominal state and control paths
- A time-varying linear feedback gain K(t)
- An affine feedforward offset
- An optional simulated rollout (time-invariant gains only)

Tables are loaded from <prefix>-x.csv, -u.csv, -controller.csv,
-affine.csv and -rollout.csv, validated together, and then queried by time
with nearest-sample lookup.
"""

__version__ = "0.1.0"

from trajlib.core.config import LoaderConfig, ParseFailurePolicy
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
from trajlib.core.table import Table
from trajlib.trajectory.trajectory import Trajectory
from trajlib.trajectory.loading import load_trajectory

__all__ = [
    "LoaderConfig",
    "ParseFailurePolicy",
    "TrajectoryError",
    "LoadError",
    "ParseError",
    "TableIOError",
    "SchemaError",
    "SpacingError",
    "RolloutUnavailableError",
    "TrajectoryIndexError",
    "Table",
    "Trajectory",
    "load_trajectory",
]
