"""In-memory table backend."""

from typing import Mapping, Sequence, Union
import numpy as np
from numpy.typing import NDArray

from trajlib.core.errors import TableIOError
from trajlib.core.table import Table


class ArrayTableLoader:
    """Serves tables from a mapping of path -> array (or Table)."""

    def __init__(self, tables: Mapping[str, Union[NDArray, Sequence, Table]]):
        self._tables = dict(tables)

    def read_table(self, path: str) -> Table:
        if path not in self._tables:
            raise TableIOError(f"{path}: no such table")

        table = self._tables[path]
        if isinstance(table, Table):
            return table
        return Table(values=np.asarray(table, dtype=np.float64), source=path)
