"""Rectangular numeric table with a leading time column."""

from dataclasses import dataclass
from typing import Sequence
import numpy as np
from numpy.typing import NDArray

from trajlib.core.errors import SchemaError, SpacingError


@dataclass(frozen=True, eq=False)
class Table:
    """
    One loaded table. Column 0 is time, the rest are data.

    The values array is copied to float64 and made read-only on
    construction.
    """

    values: NDArray              # (rows, cols)
    columns: tuple[str, ...] = ()
    source: str = ""

    def __post_init__(self):
        values = np.array(self.values, dtype=np.float64)
        if values.ndim != 2:
            raise SchemaError(
                f"{self.source or 'table'}: expected a 2-D table, got shape {values.shape}"
            )
        values.flags.writeable = False
        object.__setattr__(self, "values", values)

        if not self.columns:
            names = ("t",) + tuple(f"c{i}" for i in range(1, values.shape[1]))
            object.__setattr__(self, "columns", names)
        elif len(self.columns) != values.shape[1]:
            raise SchemaError(
                f"{self.source or 'table'}: header has {len(self.columns)} fields "
                f"but rows have {values.shape[1]}"
            )
        else:
            object.__setattr__(self, "columns", tuple(str(c) for c in self.columns))

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[float]],
        columns: Sequence[str] = (),
        source: str = "",
    ) -> "Table":
        """Build a table from nested sequences."""
        return cls(values=np.asarray(rows, dtype=np.float64), columns=tuple(columns), source=source)

    @property
    def rows(self) -> int:
        """Number of samples."""
        return self.values.shape[0]

    @property
    def cols(self) -> int:
        """Number of columns, time included."""
        return self.values.shape[1]

    @property
    def times(self) -> NDArray:
        """Time column."""
        return self.values[:, 0]

    @property
    def data(self) -> NDArray:
        """All columns except time."""
        return self.values[:, 1:]

    @property
    def t0(self) -> float:
        return float(self.values[0, 0])

    @property
    def tf(self) -> float:
        return float(self.values[-1, 0])

    @property
    def dt(self) -> float:
        """Sample period from the first two timestamps."""
        if self.rows < 2:
            raise SchemaError(
                f"{self.source or 'table'}: need at least 2 rows to infer dt, found {self.rows}"
            )
        return float(self.values[1, 0] - self.values[0, 0])

    def check_spacing(self, tolerance: float) -> float:
        """
        Check that successive timestamps differ by a constant dt.

        dt is taken from the first two rows. The allowed residual at each
        step is tolerance * max(1, |t0|, |t[k-1]|, |t[k]|).

        Args:
            tolerance: Allowed |step - dt| per unit of timestamp magnitude

        Returns:
            The table dt

        Raises:
            SpacingError: naming the first offending row and its residual
        """
        dt = self.dt
        steps = np.diff(self.times)
        residuals = steps - dt
        t = np.abs(self.times)
        scale = np.maximum(1.0, np.maximum(np.maximum(t[:-1], t[1:]), abs(self.t0)))
        bad = np.flatnonzero(np.abs(residuals) > tolerance * scale)
        if bad.size:
            row = int(bad[0]) + 1
            residual = float(residuals[bad[0]])
            raise SpacingError(
                f"{self.source or 'table'}: non-constant dt. Expected dt = {dt!r} but got "
                f"t[{row}] - t[{row - 1}] = {float(steps[bad[0]])!r} "
                f"(residual = {residual!r})",
                source=self.source,
                row=row,
                residual=residual,
            )
        return dt
