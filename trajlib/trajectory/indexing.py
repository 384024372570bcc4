"""Nearest-sample mapping from continuous time to row index."""

import math


def index_from_time(t: float, t0: float, tf: float, dt: float, rows: int) -> int:
    """
    Index of the sample nearest to t, assuming a constant dt.

    Times before t0 clamp to the first row and times after tf clamp to
    the last. Inside the bounds the number of whole dt steps from t0 is
    rounded up when the leftover is at least half a step, so an exact
    tie goes to the later sample. All arithmetic is double precision.

    Args:
        t: Query time
        t0: First timestamp of the table
        tf: Last timestamp of the table
        dt: Sample period (> 0)
        rows: Number of rows in the table

    Returns:
        Row index in [0, rows - 1]
    """
    if math.isnan(t):
        raise ValueError("Query time is NaN")

    if t < t0:
        return 0
    if t > tf:
        return rows - 1

    num_dts, remainder = divmod(t - t0, dt)
    index = int(num_dts)
    if remainder >= 0.5 * dt:
        index += 1

    # Float noise near tf can push one step past the end
    return min(max(index, 0), rows - 1)
