"""Loader configuration."""

from dataclasses import dataclass
from enum import Enum, auto
import numpy as np


class ParseFailurePolicy(Enum):
    """What to do with a table field that is not a number."""
    ZERO = auto()   # Coerce to 0.0 silently
    WARN = auto()   # Coerce to 0.0 and log a warning
    RAISE = auto()  # Fail the load with ParseError


@dataclass(frozen=True)
class LoaderConfig:
    """File naming and tolerance settings for loading a trajectory."""

    delimiter: str = ","
    extension: str = ".csv"

    # Suffixes appended to the filename prefix
    state_suffix: str = "-x"
    control_suffix: str = "-u"
    gain_suffix: str = "-controller"
    affine_suffix: str = "-affine"
    rollout_suffix: str = "-rollout"

    id_width: int = 5  # trailing characters holding the trajectory id
    spacing_tolerance: float = 5 * float(np.finfo(np.float64).eps)
    parse_failure: ParseFailurePolicy = ParseFailurePolicy.WARN

    def path_for(self, filename_prefix: str, suffix: str) -> str:
        """File path for one table of the trajectory."""
        return f"{filename_prefix}{suffix}{self.extension}"
