"""
Visualization Module

Interactive plotly views of registration results.
"""

from .point_cloud import RegistrationVisualizer

__all__ = [
    "RegistrationVisualizer",
]
