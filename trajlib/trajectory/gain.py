"""Feedback gain table layout.

Each row of a gain table is [t, K[0, :], K[1, :], ..., K[m-1, :]]: the
(control_dim, state_dim) gain matrix flattened row-major by control index,
after a leading time column.
"""

import numpy as np
from numpy.typing import NDArray


def unpack_gain_row(row: NDArray, control_dim: int, state_dim: int) -> NDArray:
    """
    Rebuild the gain matrix stored in one gain table row.

    Row i of the result occupies columns [i*state_dim + 1, i*state_dim + state_dim]
    of the table row.

    Args:
        row: Table row of length 1 + control_dim*state_dim
        control_dim: Number of controls m
        state_dim: Number of states n

    Returns:
        K of shape (m, n)
    """
    row = np.asarray(row, dtype=np.float64)
    expected = control_dim * state_dim + 1
    if row.shape != (expected,):
        raise ValueError(
            f"Gain row must have {control_dim}*{state_dim}+1 = {expected} entries, "
            f"got shape {row.shape}"
        )

    K = np.empty((control_dim, state_dim))
    for i in range(control_dim):
        # +1 because column 0 is time
        start = i * state_dim + 1
        K[i] = row[start:start + state_dim]

    return K


def unpack_gain_rows(values: NDArray, control_dim: int, state_dim: int) -> NDArray:
    """
    Rebuild every gain matrix of a gain table at once.

    Same layout as unpack_gain_row.

    Returns:
        Array of shape (rows, m, n)
    """
    values = np.asarray(values, dtype=np.float64)
    if values.ndim != 2 or values.shape[1] != control_dim * state_dim + 1:
        raise ValueError(
            f"Gain table must have {control_dim * state_dim + 1} columns, "
            f"got shape {values.shape}"
        )
    return values[:, 1:].reshape(values.shape[0], control_dim, state_dim).copy()


def is_time_invariant(values: NDArray) -> bool:
    """True when every gain row (time column excluded) is identical."""
    gains = np.asarray(values)[:, 1:]
    if gains.shape[0] == 0:
        return True
    return bool(np.all(gains == gains[0]))
