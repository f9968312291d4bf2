"""
Beacon Registration Package

A Python package for registering scanners with unknown orientation and
translation from the beacons they report. Every scanner is aligned to the
frame of the first one by exact matching over the 24 cube rotations and
integer offsets; the beacons are merged into one deduplicated global cloud
and the position of every scanner is reported.
"""

__version__ = "0.1.0"

from .geometry import *
from .preprocessing import *
from .alignment import *
from .acceleration import *
from .analysis import *
from .utils import *
from .visualization import *

__all__ = [
    "geometry",
    "preprocessing",
    "alignment",
    "acceleration",
    "analysis",
    "utils",
    "visualization",
]
