"""Tests for loading trajectories from CSV files."""

import logging
from pathlib import Path

import numpy as np
import pytest

from trajlib import (
    LoaderConfig,
    ParseError,
    RolloutUnavailableError,
    SchemaError,
    SpacingError,
    TableIOError,
    Trajectory,
    load_trajectory,
)
from trajlib.io.memory import ArrayTableLoader
from trajlib.trajectory.loading import parse_trajectory_id

from conftest import make_tables


def test_load_time_invariant_with_rollout(write_trajectory):
    """Test 12 states, 3 controls, dt 0.05, 100 rows, constant gain."""
    prefix = write_trajectory(traj_id=42)

    traj = load_trajectory(prefix, quiet=True)

    assert traj.trajectory_id == 42
    assert traj.filename_prefix == prefix
    assert traj.state_dim == 12
    assert traj.control_dim == 3
    assert traj.dt == pytest.approx(0.05)
    assert traj.num_points == 100
    assert traj.is_time_invariant is True
    assert traj.has_rollout is True
    assert traj.rollout.rows == 40

    expected = make_tables()
    assert np.allclose(traj.state(0.0), expected["x"][0, 1:])
    assert traj.state(0.0).shape == (12,)
    assert np.allclose(traj.state(5.1), expected["x"][99, 1:])


def test_load_row_counts_and_columns(write_trajectory):
    """Test the cross-table invariants on a valid load."""
    traj = load_trajectory(write_trajectory(), quiet=True)

    assert traj.states.rows == traj.controls.rows == traj.gains.rows == traj.affine.rows
    assert traj.gains.cols - 1 == traj.state_dim * traj.control_dim
    assert traj.affine.cols - 1 == traj.control_dim


def test_load_time_varying_skips_rollout(write_trajectory):
    """Test that a time-varying gain does not load a rollout."""
    prefix = write_trajectory(time_invariant=False)

    traj = load_trajectory(prefix, quiet=True)

    assert traj.is_time_invariant is False
    assert traj.has_rollout is False
    assert traj.rollout is None
    with pytest.raises(RolloutUnavailableError):
        traj.rollout_state(0.1)


def test_load_missing_rollout_is_fatal(write_trajectory):
    """Test that a time-invariant trajectory requires its rollout file."""
    prefix = write_trajectory(rollout=False)

    with pytest.raises(TableIOError, match="-rollout.csv"):
        load_trajectory(prefix, quiet=True)


def test_load_gain_row_count_mismatch(write_trajectory):
    """Test 101 gain rows against 100 state rows."""
    gains = make_tables(n_points=101)["controller"]
    prefix = write_trajectory(tables={"controller": gains})

    with pytest.raises(SchemaError) as excinfo:
        load_trajectory(prefix, quiet=True)

    message = str(excinfo.value)
    assert "inconsistent number of rows" in message
    assert "-x: 100" in message
    assert "-controller: 101" in message


def test_load_spacing_break(write_trajectory):
    """Test state timestamps [0, 0.05, 0.1, 0.2]."""
    x = np.array([[0.0, 1.0], [0.05, 1.0], [0.1, 1.0], [0.2, 1.0]])
    prefix = write_trajectory(tables={"x": x})

    with pytest.raises(SpacingError) as excinfo:
        load_trajectory(prefix, quiet=True)

    assert excinfo.value.row == 3
    assert excinfo.value.residual == pytest.approx(0.05)
    assert excinfo.value.source.endswith("-x.csv")


def test_load_gain_column_mismatch(write_trajectory):
    """Test a gain table with one column too few."""
    gains = make_tables()["controller"][:, :-1]
    prefix = write_trajectory(tables={"controller": gains})

    with pytest.raises(SchemaError, match="12\\*3\\+1 = 37 columns .* but found 36"):
        load_trajectory(prefix, quiet=True)


def test_load_affine_column_mismatch(write_trajectory):
    """Test an affine table with an extra column."""
    affine = make_tables()["affine"]
    affine = np.hstack([affine, affine[:, -1:]])
    prefix = write_trajectory(tables={"affine": affine})

    with pytest.raises(SchemaError, match="3\\+1 = 4 columns .* but found 5"):
        load_trajectory(prefix, quiet=True)


def test_load_missing_required_file(write_trajectory):
    """Test that a missing control file fails the load."""
    prefix = write_trajectory(tables={"u": None})

    with pytest.raises(TableIOError, match="-u.csv"):
        load_trajectory(prefix, quiet=True)


def test_load_bad_trajectory_number(tmp_path):
    """Test that the id must be numeric."""
    with pytest.raises(ParseError):
        load_trajectory(str(tmp_path / "traj-abcde"), quiet=True)


def test_parse_trajectory_id():
    """Test id parsing from the last five characters."""
    assert parse_trajectory_id("lib/traj-00042") == 42
    assert parse_trajectory_id("12345") == 12345
    assert parse_trajectory_id("x-0007", width=4) == 7

    with pytest.raises(ParseError):
        parse_trajectory_id("traj-0a042")
    with pytest.raises(ParseError):
        parse_trajectory_id("42")


def test_load_logging(write_trajectory, caplog):
    """Test informational logging and its suppression by quiet."""
    prefix = write_trajectory()

    with caplog.at_level(logging.INFO, logger="trajlib"):
        load_trajectory(prefix)
    assert f"Loading trajectory: {prefix}" in caplog.text
    assert f"Loading {prefix}-controller.csv" in caplog.text
    assert f"Loading {prefix}-rollout.csv" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="trajlib"):
        load_trajectory(prefix, quiet=True)
    assert caplog.records == []


def test_quiet_does_not_relax_validation(write_trajectory):
    """Test that quiet and verbose loads fail the same way."""
    gains = make_tables(n_points=101)["controller"]
    prefix = write_trajectory(tables={"controller": gains})

    for quiet in (True, False):
        with pytest.raises(SchemaError):
            load_trajectory(prefix, quiet=quiet)


def test_load_classmethod(write_trajectory):
    """Test Trajectory.load as an alias of load_trajectory."""
    prefix = write_trajectory(traj_id=3)

    traj = Trajectory.load(prefix, quiet=True)

    assert traj.trajectory_id == 3
    assert traj.has_rollout


def test_load_custom_suffixes():
    """Test a config with other suffixes and an in-memory loader."""
    data = make_tables(n_points=5, state_dim=2, control_dim=1, dt=0.1, time_invariant=False)
    config = LoaderConfig(
        state_suffix="_state",
        control_suffix="_input",
        gain_suffix="_K",
        affine_suffix="_k0",
        extension=".dat",
    )
    loader = ArrayTableLoader({
        "run-00001_state.dat": data["x"],
        "run-00001_input.dat": data["u"],
        "run-00001_K.dat": data["controller"],
        "run-00001_k0.dat": data["affine"],
    })

    traj = load_trajectory("run-00001", quiet=True, loader=loader, config=config)

    assert traj.trajectory_id == 1
    assert traj.state_dim == 2
    assert traj.control_dim == 1
    assert traj.num_points == 5


def test_load_rollout_dt_mismatch():
    """Test that the rollout must share the nominal sample rate."""
    data = make_tables(n_points=5, state_dim=2, control_dim=1, dt=0.1)
    rollout = np.column_stack([0.2 * np.arange(6), np.zeros((6, 2))])
    loader = ArrayTableLoader({
        "run-00001-x.csv": data["x"],
        "run-00001-u.csv": data["u"],
        "run-00001-controller.csv": data["controller"],
        "run-00001-affine.csv": data["affine"],
        "run-00001-rollout.csv": rollout,
    })

    with pytest.raises(SpacingError, match="rollout"):
        load_trajectory("run-00001", quiet=True, loader=loader)


def test_load_long_unrounded_timestamps(write_trajectory):
    """Test 400 samples whose times are written as raw k*dt doubles."""
    prefix = write_trajectory(n_points=400, round_times=False, rollout=False, time_invariant=False)

    traj = load_trajectory(prefix, quiet=True)

    assert traj.num_points == 400
    assert traj.dt == pytest.approx(0.05)
    assert traj.max_time() == pytest.approx(19.95)


def test_load_wider_and_single_row_rollouts(write_trajectory):
    """Test that rollout rows and columns need not match the state table."""
    wide = np.column_stack([0.05 * np.arange(10), np.ones((10, 20))])
    traj = load_trajectory(write_trajectory(traj_id=1, tables={"rollout": wide}), quiet=True)
    assert traj.state_dim == 12
    assert traj.rollout_state(0.2).shape == (20,)

    single = np.array([[0.0] + [4.0] * 12])
    traj = load_trajectory(write_trajectory(traj_id=2, tables={"rollout": single}), quiet=True)
    assert traj.rollout.rows == 1
    assert np.allclose(traj.rollout_state(3.0), 4.0)


def test_path_prefix(write_trajectory):
    """Test that pathlib prefixes parse and load like strings."""
    prefix = write_trajectory(traj_id=42)

    assert parse_trajectory_id(Path("lib/traj-00042")) == 42
    with pytest.raises(ParseError):
        parse_trajectory_id(Path("traj-abcde"))

    traj = load_trajectory(Path(prefix), quiet=True)
    assert traj.trajectory_id == 42
    assert traj.filename_prefix == prefix
