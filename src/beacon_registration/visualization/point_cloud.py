"""
Registration Visualization Tools

Plots the merged beacon cloud together with the resolved scanner positions.
"""

from typing import Optional, TYPE_CHECKING

import numpy as np
import plotly.graph_objects as go

from ..geometry.vector import vectors_to_array

if TYPE_CHECKING:
    from ..alignment.merger import RegistrationResult


class RegistrationVisualizer:
    """A class for visualizing registration results."""

    def __init__(self, backend: str = 'plotly'):
        if backend != 'plotly':
            raise ValueError(f"Unsupported backend: '{backend}'. Choose 'plotly'.")
        self.backend = backend

    # ----------------- Public API -----------------
    def build_figure(self, result: "RegistrationResult", title: Optional[str] = None) -> go.Figure:
        beacons = vectors_to_array(sorted(result.beacons))
        positions = vectors_to_array(result.positions)
        labels = [str(i) for i in range(len(positions))]

        fig = go.Figure()
        fig.add_trace(self._scatter(beacons, name='beacons', marker=dict(size=2)))
        fig.add_trace(self._scatter(
            positions,
            name='scanners',
            marker=dict(size=6, symbol='diamond'),
            text=labels,
            mode='markers+text',
        ))
        fig.update_layout(
            title=title or f"{len(beacons)} beacons, {len(positions)} scanners",
            scene=dict(aspectmode='data'),
            margin=dict(l=0, r=0, t=40, b=0),
        )
        return fig

    def visualize_registration(self, result: "RegistrationResult", title: Optional[str] = None) -> go.Figure:
        fig = self.build_figure(result, title=title)
        fig.show(renderer="browser")
        return fig

    # ----------------- Internal helpers -----------------
    @staticmethod
    def _scatter(points: np.ndarray, *, name: str, marker: dict, text=None, mode: str = 'markers') -> go.Scatter3d:
        return go.Scatter3d(
            x=points[:, 0], y=points[:, 1], z=points[:, 2],
            mode=mode,
            marker=marker,
            text=text,
            name=name,
        )
