"""Human-readable dump of a loaded trajectory."""

import sys
from typing import Optional, TextIO
import pandas as pd

from trajlib.core.table import Table
from trajlib.trajectory.trajectory import Trajectory


def _format_table(title: str, table: Table) -> str:
    frame = pd.DataFrame(table.values, columns=list(table.columns))
    body = frame.to_string(index=False) if table.rows else "(empty)"
    return f"------------- {title} ----------------\n{body}"


def format_trajectory(trajectory: Trajectory) -> str:
    """Metadata header followed by every table, headers included."""
    lines = [
        "------------ Trajectory print -------------",
        f"Filename: {trajectory.filename_prefix}",
        f"Trajectory number: {trajectory.trajectory_id}",
        f"Dimension: {trajectory.state_dim}",
        f"u-dimension: {trajectory.control_dim}",
        f"dt: {trajectory.dt!r}",
        f"Time span: [{trajectory.states.t0!r}, {trajectory.max_time()!r}] "
        f"({trajectory.num_points} points)",
        f"Time-invariant: {trajectory.is_time_invariant}",
        _format_table("x points", trajectory.states),
        _format_table("u points", trajectory.controls),
        _format_table("k points", trajectory.gains),
        _format_table("affine points", trajectory.affine),
    ]
    if trajectory.rollout is not None:
        lines.append(_format_table("rollout points", trajectory.rollout))
    return "\n".join(lines)


def print_trajectory(trajectory: Trajectory, file: Optional[TextIO] = None) -> None:
    """Write format_trajectory(trajectory) to file (stdout by default)."""
    print(format_trajectory(trajectory), file=file if file is not None else sys.stdout)
