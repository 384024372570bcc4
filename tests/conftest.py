"""
Pytest configuration and shared fixtures for trajlib tests.
"""

import numpy as np
import pandas as pd
import pytest


def make_tables(
    n_points=100,
    state_dim=12,
    control_dim=3,
    dt=0.05,
    t0=0.0,
    time_invariant=True,
    round_times=True,
):
    """Arrays for the x, u, controller and affine tables of one trajectory."""
    t = t0 + dt * np.arange(n_points)
    if round_times:
        # Short decimal form in the CSV text
        t = np.round(t, 10)
    t = t[:, None]
    k = np.arange(n_points)[:, None]

    x = np.hstack([t, k + 0.01 * np.arange(1, state_dim + 1)])
    u = np.hstack([t, -k - 0.1 * np.arange(1, control_dim + 1)])

    K = np.tile(np.arange(1.0, control_dim * state_dim + 1), (n_points, 1))
    if not time_invariant:
        K = K * (1.0 + k)
    gains = np.hstack([t, K])

    affine = np.hstack([t, np.full((n_points, control_dim), 0.5)])

    return {"x": x, "u": u, "controller": gains, "affine": affine}


def write_table(path, values, prefix_letter="c"):
    """Write values as a headered CSV (time column first)."""
    columns = ["t"] + [f"{prefix_letter}{i}" for i in range(1, values.shape[1])]
    pd.DataFrame(values, columns=columns).to_csv(path, index=False)


@pytest.fixture
def write_trajectory(tmp_path):
    """
    Factory writing <tmp>/traj-<id>-{x,u,controller,affine[,rollout]}.csv.

    Returns the filename prefix. `tables` entries override the generated
    arrays; an entry set to None is not written. A rollout is written for
    time-invariant gains unless `rollout` is False.
    """

    def _write(traj_id=7, tables=None, rollout=True, rollout_points=40, **kwargs):
        prefix = str(tmp_path / f"traj-{traj_id:05d}")
        data = make_tables(**kwargs)
        data.update(tables or {})

        letters = {"x": "x", "u": "u", "controller": "k", "affine": "a", "rollout": "x"}
        if rollout and kwargs.get("time_invariant", True) and "rollout" not in data:
            state = data["x"]
            dt = kwargs.get("dt", 0.05)
            t = np.round(dt * np.arange(rollout_points), 10)[:, None]
            data["rollout"] = np.hstack(
                [t, 2.0 + np.zeros((rollout_points, state.shape[1] - 1)) + np.arange(rollout_points)[:, None]]
            )

        for name, values in data.items():
            if values is not None:
                write_table(f"{prefix}-{name}.csv", np.asarray(values, dtype=float), letters[name])

        return prefix

    return _write


@pytest.fixture
def small_tables():
    """Two states, one control, four samples at dt = 0.5, constant gain."""
    return make_tables(n_points=4, state_dim=2, control_dim=1, dt=0.5)
