"""Loading a trajectory from its family of CSV files."""

import dataclasses
import logging
from os import PathLike
from typing import Optional, Union

from trajlib.core.config import LoaderConfig
from trajlib.core.errors import ParseError
from trajlib.core.table import Table
from trajlib.io.csv_loader import CsvTableLoader
from trajlib.io.protocols import TableLoader
from trajlib.trajectory.trajectory import Trajectory
from trajlib.trajectory.validation import check_table_spacing

logger = logging.getLogger(__name__)


def parse_trajectory_id(filename_prefix: Union[str, PathLike], width: int = 5) -> int:
    """
    Integer id held in the last `width` characters of the prefix.

    "lib/traj-00042" -> 42
    """
    filename_prefix = str(filename_prefix)
    suffix = filename_prefix[-width:] if width > 0 else ""
    digits = suffix.strip().lstrip("+-")
    if len(filename_prefix) < width or not digits.isdigit():
        raise ParseError(
            f"Cannot parse trajectory number from {filename_prefix!r}: "
            f"last {width} characters {suffix!r} are not an integer"
        )
    try:
        return int(suffix)
    except ValueError as e:
        raise ParseError(f"Cannot parse trajectory number from {suffix!r}") from e


def load_trajectory(
    filename_prefix: Union[str, PathLike],
    quiet: bool = False,
    loader: Optional[TableLoader] = None,
    config: Optional[LoaderConfig] = None,
) -> Trajectory:
    """
    Load and validate one trajectory.

    Reads <prefix>-x, -u, -controller and -affine. When the gain is the same
    at every sample, <prefix>-rollout is read as well. Either a fully
    validated Trajectory is returned or a LoadError is raised.

    Args:
        filename_prefix: Common path prefix; its last characters are the id
        quiet: Suppress informational logging (validation is unchanged)
        loader: Table source (defaults to CSV files via pandas)
        config: Suffixes, delimiter and tolerances

    Returns:
        Validated, read-only Trajectory

    Raises:
        ParseError, TableIOError, SchemaError, SpacingError
    """
    filename_prefix = str(filename_prefix)
    if config is None:
        config = LoaderConfig()
    if loader is None:
        loader = CsvTableLoader(config.delimiter, config.parse_failure)

    if not quiet:
        logger.info("Loading trajectory: %s", filename_prefix)

    trajectory_id = parse_trajectory_id(filename_prefix, config.id_width)

    def read(suffix: str, check_spacing: bool = True) -> Table:
        path = config.path_for(filename_prefix, suffix)
        if not quiet:
            logger.info("Loading %s", path)
        table = loader.read_table(path)
        if check_spacing:
            check_table_spacing(table, config.spacing_tolerance)
        return table

    states = read(config.state_suffix)
    controls = read(config.control_suffix)
    gains = read(config.gain_suffix)
    affine = read(config.affine_suffix)

    trajectory = Trajectory(
        states=states,
        controls=controls,
        gains=gains,
        affine=affine,
        trajectory_id=trajectory_id,
        filename_prefix=filename_prefix,
        spacing_tolerance=config.spacing_tolerance,
    )

    if trajectory.is_time_invariant:
        # also load a precomputed rollout; validate_tables checks its spacing
        rollout = read(config.rollout_suffix, check_spacing=False)
        trajectory = dataclasses.replace(trajectory, rollout=rollout)

    if not quiet:
        logger.info(
            "Loaded trajectory %d: %d points, state_dim=%d, control_dim=%d, dt=%g%s",
            trajectory.trajectory_id,
            trajectory.num_points,
            trajectory.state_dim,
            trajectory.control_dim,
            trajectory.dt,
            " (time-invariant, with rollout)" if trajectory.has_rollout else "",
        )

    return trajectory
