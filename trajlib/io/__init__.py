"""Table loading backends."""

from trajlib.io.protocols import TableLoader
from trajlib.io.csv_loader import CsvTableLoader
from trajlib.io.memory import ArrayTableLoader

__all__ = [
    "TableLoader",
    "CsvTableLoader",
    "ArrayTableLoader",
]
