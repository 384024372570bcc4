"""Table loading protocol."""

from typing import Protocol

from trajlib.core.table import Table


class TableLoader(Protocol):
    """
    Protocol for reading one rectangular numeric table.
    Allows swapping between CSV files, in-memory arrays, or other sources.
    """

    def read_table(self, path: str) -> Table:
        """
        Read the table stored at path.

        Args:
            path: Location of the table

        Returns:
            Table whose column count comes from the header row

        Raises:
            TableIOError: if the path is unreadable or the header is missing
        """
        ...
