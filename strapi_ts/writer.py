"""Persist generated units to disk.

Units are written under the output directory by their relative path.
A failure stops the run; units already written are left in place.
"""

from pathlib import Path, PurePosixPath
from typing import Iterable, List, Union

from .core.generator import OutputUnit
from .logging_config import get_logger

logger = get_logger(__name__)


class WriteError(Exception):
    """Exception raised when a unit cannot be written."""

    pass


def write_units(units: Iterable[OutputUnit], output_dir: Union[str, Path]) -> List[Path]:
    """Write every unit below ``output_dir``.

    Args:
        units: Units to persist.
        output_dir: Root folder, created if missing.

    Returns:
        Paths of the written files, in write order.

    Raises:
        WriteError: On the first file-system failure, or for a unit path
            that is absolute or climbs out of ``output_dir``.
    """
    root = Path(output_dir)
    written: List[Path] = []

    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create output directory {root}: {e}")
        raise WriteError(f"Cannot create output directory {root}: {e}") from e

    resolved_root = root.resolve()
    for unit in units:
        target = root / unit.filename
        if PurePosixPath(unit.path).is_absolute() or not target.resolve().is_relative_to(
            resolved_root
        ):
            logger.error(f"Unit path {unit.path!r} is outside {root}")
            raise WriteError(f"Unit path {unit.path!r} is outside {root}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(unit.content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error writing {target}: {e}")
            raise WriteError(f"Error writing {target}: {e}") from e
        logger.debug(f"Wrote {target}")
        written.append(target)

    return written
