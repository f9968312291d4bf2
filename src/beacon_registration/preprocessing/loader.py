"""
Scanner Report Loader

This module parses scanner reports into Scanner objects. A report is a sequence
of blocks separated by blank lines. Each block optionally starts with a header
such as ``--- scanner 3 ---`` followed by one ``x,y,z`` integer line per beacon.
"""

import re
from pathlib import Path
from typing import List, Optional

from ..geometry.scanner import Scanner
from ..geometry.vector import Vector3
from ..utils.logging import setup_logger

logger = setup_logger(__name__)

_HEADER_RE = re.compile(r"^---\s*scanner\s+(-?\d+)\s*---$", re.IGNORECASE)
_BEACON_RE = re.compile(r"^(-?\d+)\s*,\s*(-?\d+)\s*,\s*(-?\d+)$")


class ScanParseError(ValueError):
    """Raised for a malformed header or coordinate line."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


def parse_beacon(line: str, line_number: Optional[int] = None) -> Vector3:
    """Parse a single ``x,y,z`` line."""
    match = _BEACON_RE.match(line.strip())
    if match is None:
        raise ScanParseError(f"Malformed beacon coordinates: {line.strip()!r}", line_number)
    x, y, z = (int(g) for g in match.groups())
    return Vector3(x, y, z)


def parse_scanners(text: str) -> List[Scanner]:
    """
    Parse a full scanner report.

    Args:
        text: Report text

    Returns:
        List of Scanner in report order

    Raises:
        ScanParseError: If any line is malformed (no partial result is returned)
    """
    scanners: List[Scanner] = []
    block: List[tuple] = []

    lines = text.replace("\r\n", "\n").split("\n")
    for number, raw in enumerate(lines, start=1):
        if raw.strip():
            block.append((number, raw.strip()))
            continue
        if block:
            scanners.append(_parse_block(block, default_id=len(scanners)))
            block = []
    if block:
        scanners.append(_parse_block(block, default_id=len(scanners)))

    logger.debug(f"Parsed {len(scanners)} scanners")
    return scanners


def _parse_block(block: List[tuple], *, default_id: int) -> Scanner:
    scanner_id = default_id
    first_number, first_line = block[0]
    if first_line.startswith("---"):
        header = _HEADER_RE.match(first_line)
        if header is None:
            raise ScanParseError(f"Malformed scanner header: {first_line!r}", first_number)
        scanner_id = int(header.group(1))
        block = block[1:]

    beacons = [parse_beacon(line, number) for number, line in block]
    scanner = Scanner(scanner_id, beacons)
    if len(scanner) != len(beacons):
        logger.debug(
            f"Scanner {scanner_id}: collapsed {len(beacons) - len(scanner)} duplicate beacon(s)"
        )
    return scanner


class ScannerLoader:
    """
    Load scanner reports from text files.

    Example:
        scanners = ScannerLoader().load("data/scanners.txt")
    """

    def __init__(self, *, encoding: str = "utf-8"):
        self.encoding = encoding

    def load(self, file_path: str) -> List[Scanner]:
        """
        Read and parse a scanner report file.

        Args:
            file_path: Path to the report

        Returns:
            List of Scanner

        Raises:
            FileNotFoundError: If the file does not exist
            ScanParseError: If the file content is malformed
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        logger.info(f"Loading scanner report from {file_path}")
        scanners = parse_scanners(file_path.read_text(encoding=self.encoding))
        total = sum(len(s) for s in scanners)
        logger.info(f"Loaded {len(scanners)} scanners with {total} beacon reports")
        return scanners
