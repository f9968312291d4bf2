"""
Registration result export

Writes the merged beacon cloud and the resolved scanner positions as plain
integer text files and reads them back.
"""

from pathlib import Path
from typing import Dict, List, Set, TYPE_CHECKING

import numpy as np

from ..geometry.vector import Vector3, array_to_vectors, vectors_to_array
from ..utils.logging import setup_logger

if TYPE_CHECKING:
    from .merger import RegistrationResult

logger = setup_logger(__name__)

BEACONS_FILENAME = "beacons.txt"
POSITIONS_FILENAME = "scanner_positions.txt"


def save_registration(result: "RegistrationResult", output_dir: str) -> Dict[str, str]:
    """Save beacons (sorted) and scanner positions (input order) to `output_dir`.

    Args:
        result: Merged registration result
        output_dir: Directory to create/write into

    Returns:
        Mapping with 'beacons' and 'positions' file paths
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    beacons_path = output_dir / BEACONS_FILENAME
    positions_path = output_dir / POSITIONS_FILENAME

    np.savetxt(beacons_path, vectors_to_array(sorted(result.beacons)), fmt="%d", header="x y z")
    np.savetxt(positions_path, vectors_to_array(result.positions), fmt="%d", header="x y z (scanner order)")

    logger.info(f"Saved {len(result.beacons)} beacons to {beacons_path}")
    logger.info(f"Saved {len(result.positions)} scanner positions to {positions_path}")
    return {"beacons": str(beacons_path), "positions": str(positions_path)}


def _load_vectors(input_file: str) -> List[Vector3]:
    points = np.loadtxt(input_file, dtype=np.int64, ndmin=2)
    if points.size and points.shape[1] != 3:
        raise ValueError(f"Expected 3 columns in {input_file}, got {points.shape[1]}")
    return array_to_vectors(points)


def load_beacons(input_file: str) -> Set[Vector3]:
    """Load a beacon cloud written by save_registration."""
    beacons = set(_load_vectors(input_file))
    logger.info(f"Loaded {len(beacons)} beacons from {input_file}")
    return beacons


def load_positions(input_file: str) -> List[Vector3]:
    """Load scanner positions written by save_registration, in scanner order."""
    positions = _load_vectors(input_file)
    logger.info(f"Loaded {len(positions)} scanner positions from {input_file}")
    return positions
