"""Delimited text table backend using pandas."""

import logging
import numpy as np
import pandas as pd

from trajlib.core.config import ParseFailurePolicy
from trajlib.core.errors import ParseError, TableIOError
from trajlib.core.table import Table

logger = logging.getLogger(__name__)


class CsvTableLoader:
    """pandas implementation of TableLoader for headered CSV files."""

    def __init__(
        self,
        delimiter: str = ",",
        parse_failure: ParseFailurePolicy = ParseFailurePolicy.WARN,
    ):
        """
        Initialize CSV loader.

        Args:
            delimiter: Field separator
            parse_failure: Handling of fields that are not numbers
        """
        self.delimiter = delimiter
        self.parse_failure = parse_failure

    def read_table(self, path: str) -> Table:
        """
        Read a CSV file whose first row is a header.

        Fields are read as text first so that non-numeric entries can be
        reported by location instead of disappearing inside pandas.
        """
        try:
            raw = pd.read_csv(
                path,
                sep=self.delimiter,
                header=0,
                index_col=False,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
            )
        except pd.errors.EmptyDataError as e:
            raise TableIOError(f"{path}: missing header row") from e
        except pd.errors.ParserError as e:
            raise TableIOError(f"{path}: malformed table: {e}") from e
        except OSError as e:
            raise TableIOError(f"{path}: cannot read file: {e}") from e

        if raw.empty:
            values = np.zeros((0, len(raw.columns)))
            return Table(values=values, columns=tuple(raw.columns), source=str(path))

        numeric = pd.DataFrame(
            {name: pd.to_numeric(raw[name].map(_strip), errors="coerce") for name in raw.columns},
            index=raw.index,
        )
        bad = numeric.isna().to_numpy()

        if bad.any():
            self._report_bad_fields(path, raw, bad)

        values = numeric.fillna(0.0).to_numpy(dtype=np.float64)
        return Table(values=values, columns=tuple(raw.columns), source=str(path))

    def _report_bad_fields(self, path: str, raw: pd.DataFrame, bad: np.ndarray) -> None:
        """Apply the parse-failure policy to non-numeric fields."""
        rows, cols = np.nonzero(bad)
        row, col = int(rows[0]), int(cols[0])
        where = (
            f"row {row} column {col} ({raw.columns[col]!r}) value {raw.iat[row, col]!r}"
        )

        if self.parse_failure == ParseFailurePolicy.RAISE:
            raise ParseError(f"{path}: non-numeric field at {where}")

        if self.parse_failure == ParseFailurePolicy.WARN:
            logger.warning(
                "%s: %d non-numeric field(s) read as 0.0, first at %s",
                path,
                len(rows),
                where,
            )


def _strip(value):
    return value.strip() if isinstance(value, str) else value
