"""
Scanner Alignment Module

This module aligns scanners with unknown orientation and translation by exact
beacon matching over the 24 cube rotations, and merges them into one global
beacon set.
"""

from .matcher import BeaconMatcher, MatchResult, count_overlap, find_match
from .merger import NoConvergenceError, RegistrationResult, ScannerMerger, combine_scanners
from .result_io import save_registration, load_beacons, load_positions

__all__ = [
    "BeaconMatcher",
    "MatchResult",
    "count_overlap",
    "find_match",
    "NoConvergenceError",
    "RegistrationResult",
    "ScannerMerger",
    "combine_scanners",
    "save_registration",
    "load_beacons",
    "load_positions",
]
