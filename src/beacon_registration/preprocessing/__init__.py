"""
Scanner Report Preprocessing Module

Parsing of scanner report text into Scanner beacon sets.
"""

from .loader import ScannerLoader, ScanParseError, parse_beacon, parse_scanners

__all__ = [
    "ScannerLoader",
    "ScanParseError",
    "parse_beacon",
    "parse_scanners",
]
