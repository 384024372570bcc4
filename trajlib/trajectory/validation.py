"""Consistency checks across the tables of one trajectory."""

from dataclasses import dataclass
from typing import Optional

from trajlib.core.errors import SchemaError, SpacingError
from trajlib.core.table import Table
from trajlib.trajectory.gain import is_time_invariant


@dataclass
class TableLayout:
    """Dimensions inferred from a validated set of tables."""

    state_dim: int
    control_dim: int
    dt: float
    time_invariant: bool


def check_table_spacing(table: Table, tolerance: float) -> float:
    """Constant, positive spacing within one table. Returns its dt."""
    dt = table.check_spacing(tolerance)
    if dt <= 0.0:
        raise SpacingError(
            f"{table.source or 'table'}: timestamps must increase, got dt = {dt!r}",
            source=table.source,
            row=1,
            residual=dt,
        )
    return dt


def validate_tables(
    states: Table,
    controls: Table,
    gains: Table,
    affine: Table,
    rollout: Optional[Table],
    tolerance: float,
    name: str = "",
) -> TableLayout:
    """
    Validate the state, control, gain, affine (and rollout) tables together.

    Checks run in load order: spacing of each table, column counts, row
    counts, shared sample rate, then the rollout.

    Raises:
        SpacingError: non-constant or non-positive dt, or dt mismatch between tables
        SchemaError: column or row count mismatch
    """
    required = [("x", states), ("u", controls), ("controller", gains), ("affine", affine)]
    dts = {label: check_table_spacing(table, tolerance) for label, table in required}

    state_dim = states.cols - 1  # minus 1 because of time column
    control_dim = controls.cols - 1

    if state_dim < 1 or control_dim < 1:
        raise SchemaError(
            f"Error: {name}-x and {name}-u need at least one column besides time, "
            f"found {states.cols} and {controls.cols}"
        )

    if gains.cols - 1 != state_dim * control_dim:
        raise SchemaError(
            f"Error: expected to have {state_dim}*{control_dim}+1 = "
            f"{state_dim * control_dim + 1} columns in {name}-controller but found {gains.cols}"
        )

    if affine.cols - 1 != control_dim:
        raise SchemaError(
            f"Error: expected to have {control_dim}+1 = {control_dim + 1} columns in "
            f"{name}-affine but found {affine.cols}"
        )

    row_counts = {label: table.rows for label, table in required}
    if len(set(row_counts.values())) != 1:
        listing = "\n".join(f"\t{name}-{label}: {rows}" for label, rows in row_counts.items())
        raise SchemaError(f"Error: inconsistent number of rows in tables:\n{listing}")

    dt = dts["x"]
    for label, table in required:
        if abs(dts[label] - dt) > _dt_tolerance(tolerance, states, table):
            raise SpacingError(
                f"Error: {name}-{label} has dt = {dts[label]!r} but {name}-x has dt = {dt!r}",
                source=f"{name}-{label}",
                residual=dts[label] - dt,
            )

    time_invariant = is_time_invariant(gains.values)

    if rollout is not None:
        _validate_rollout(rollout, states, dt, time_invariant, tolerance, name)

    return TableLayout(
        state_dim=state_dim,
        control_dim=control_dim,
        dt=dt,
        time_invariant=time_invariant,
    )


def _dt_tolerance(tolerance: float, *tables: Table) -> float:
    """Tolerance for comparing dt values inferred from the first two rows of each table."""
    scale = max(max(1.0, abs(table.t0), abs(float(table.times[1]))) for table in tables)
    return tolerance * scale


def _validate_rollout(
    rollout: Table,
    states: Table,
    dt: float,
    time_invariant: bool,
    tolerance: float,
    name: str,
) -> None:
    """
    Rollout keeps its own row and column counts and time base.

    Only the sample rate is shared, and only when there are two rows to
    define one.
    """
    if not time_invariant:
        raise SchemaError(
            f"Error: {name} has a time-varying gain; a rollout is only defined "
            f"for time-invariant trajectories"
        )

    if rollout.rows == 0:
        raise SchemaError(f"Error: {name}-rollout has no rows")

    if rollout.rows < 2:
        return

    rollout_dt = check_table_spacing(rollout, tolerance)
    if abs(rollout_dt - dt) > _dt_tolerance(tolerance, states, rollout):
        raise SpacingError(
            f"Error: {name}-rollout has dt = {rollout_dt!r} but {name}-x has dt = {dt!r}",
            source=f"{name}-rollout",
            residual=rollout_dt - dt,
        )
