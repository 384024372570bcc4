"""Fixed-timestep trajectory with time-varying linear feedback."""

from dataclasses import dataclass, field
from typing import Optional, TextIO
from numpy.typing import NDArray

from trajlib.core.config import LoaderConfig
from trajlib.core.errors import RolloutUnavailableError, TrajectoryIndexError
from trajlib.core.table import Table
from trajlib.io.protocols import TableLoader
from trajlib.trajectory.gain import unpack_gain_rows
from trajlib.trajectory.indexing import index_from_time
from trajlib.trajectory.validation import validate_tables

DEFAULT_SPACING_TOLERANCE = LoaderConfig().spacing_tolerance


@dataclass(frozen=True, eq=False, repr=False)
class Trajectory:
    """
    Nominal state/control path with feedback gain and affine offset.

    All tables share one sample period dt and (except the rollout) one row
    count. Construction validates the tables and either succeeds fully or
    raises a LoadError; the result is read-only.

    The rollout is a previously simulated closed-loop run of the same
    path. It is only present for time-invariant trajectories and is
    sampled on its own time base.
    """

    states: Table               # (N, 1 + n)
    controls: Table             # (N, 1 + m)
    gains: Table                # (N, 1 + m*n), row-major K per row
    affine: Table               # (N, 1 + m)
    rollout: Optional[Table] = None
    trajectory_id: int = -1
    filename_prefix: str = ""
    spacing_tolerance: float = DEFAULT_SPACING_TOLERANCE

    state_dim: int = field(init=False)
    control_dim: int = field(init=False)
    dt: float = field(init=False)
    is_time_invariant: bool = field(init=False)
    gain_matrices: NDArray = field(init=False)  # (N, m, n)

    def __post_init__(self):
        layout = validate_tables(
            self.states,
            self.controls,
            self.gains,
            self.affine,
            self.rollout,
            self.spacing_tolerance,
            name=self.filename_prefix,
        )
        gain_matrices = unpack_gain_rows(
            self.gains.values, layout.control_dim, layout.state_dim
        )
        gain_matrices.flags.writeable = False

        object.__setattr__(self, "state_dim", layout.state_dim)
        object.__setattr__(self, "control_dim", layout.control_dim)
        object.__setattr__(self, "dt", layout.dt)
        object.__setattr__(self, "is_time_invariant", layout.time_invariant)
        object.__setattr__(self, "gain_matrices", gain_matrices)

    @classmethod
    def load(
        cls,
        filename_prefix: str,
        quiet: bool = False,
        loader: Optional[TableLoader] = None,
        config: Optional[LoaderConfig] = None,
    ) -> "Trajectory":
        """Load from <prefix>-x.csv, -u, -controller, -affine (and -rollout)."""
        from trajlib.trajectory.loading import load_trajectory

        return load_trajectory(filename_prefix, quiet=quiet, loader=loader, config=config)

    @property
    def num_points(self) -> int:
        """Number of samples in the nominal tables."""
        return self.states.rows

    @property
    def has_rollout(self) -> bool:
        return self.rollout is not None

    def __len__(self) -> int:
        return self.num_points

    def __repr__(self) -> str:
        return (
            f"Trajectory(id={self.trajectory_id}, state_dim={self.state_dim}, "
            f"control_dim={self.control_dim}, dt={self.dt!r}, points={self.num_points}, "
            f"rollout={self.has_rollout})"
        )

    # ---------------------------------------------------------
    # Time indexing
    # ---------------------------------------------------------
    def index_from_time(self, t: float, use_rollout: bool = False) -> int:
        """
        Row index of the sample nearest to t.

        Args:
            t: Query time
            use_rollout: Use the rollout table's time bounds instead of the state table's

        Returns:
            Row index, clamped to the table
        """
        table = self._rollout_table() if use_rollout else self.states
        return index_from_time(t, table.t0, table.tf, self.dt, table.rows)

    def time_at_index(self, index: int) -> float:
        """Timestamp stored at row index of the state table."""
        if not 0 <= index < self.num_points:
            raise TrajectoryIndexError(
                f"Index {index} out of range for trajectory with {self.num_points} points"
            )
        return float(self.states.values[index, 0])

    def max_time(self) -> float:
        """Last timestamp of the state table."""
        return self.states.tf

    # ---------------------------------------------------------
    # Sample accessors
    # ---------------------------------------------------------
    def state(self, t: float) -> NDArray:
        """Nominal state x(t), shape (n,)."""
        return self.states.data[self.index_from_time(t)]

    def control_command(self, t: float) -> NDArray:
        """Nominal control u(t), shape (m,)."""
        return self.controls.data[self.index_from_time(t)]

    def affine_command(self, t: float) -> NDArray:
        """Affine feedforward offset at t, shape (m,)."""
        return self.affine.data[self.index_from_time(t)]

    def gain_matrix(self, t: float) -> NDArray:
        """Feedback gain K(t), shape (m, n)."""
        return self.gain_matrices[self.index_from_time(t)]

    def rollout_state(self, t: float) -> NDArray:
        """Simulated rollout state at t: every rollout column after time."""
        rollout = self._rollout_table()
        return rollout.data[self.index_from_time(t, use_rollout=True)]

    def _rollout_table(self) -> Table:
        if self.rollout is None:
            raise RolloutUnavailableError(
                f"Trajectory {self.trajectory_id} has no rollout "
                f"(time-invariant: {self.is_time_invariant})"
            )
        return self.rollout

    def print(self, file: Optional[TextIO] = None) -> None:
        """Dump metadata and every table in readable form."""
        from trajlib.trajectory.diagnostics import print_trajectory

        print_trajectory(self, file=file)
