"""Quadrilateral range-gate footprints.

A Bin holds the four corners of one gate plus its scalar value. Corners are
stored as a (4, 4) float array whose rows are A, B, C, D and whose columns are
x, y, z and an unused time slot. Viewed from the radar:

- A: near edge, left  (theta + half beam)
- B: near edge, right (theta - half beam)
- C: far edge, left
- D: far edge, right

The array is overwritten in place as the bin moves from the radar-relative
frame through ECEF to geographic coordinates.
"""

from typing import TYPE_CHECKING, Iterable, List

import numpy as np
from shapely.geometry import Polygon, mapping

if TYPE_CHECKING:
    from pyproj import Transformer
    from nexrad_json.radar.transforms import TransformChain

__all__ = ['Bin', 'forward_bins', 'RING_ORDER']

# A -> B -> D -> C -> A is counter-clockwise seen from above.
RING_ORDER = (0, 1, 3, 2, 0)


class Bin:
    """One gate footprint and its product value."""

    __slots__ = ("corners", "value")

    def __init__(self, corners: np.ndarray, value: float):
        corners = np.asarray(corners, dtype=np.float64)
        if corners.shape == (4, 3):
            corners = np.column_stack([corners, np.zeros(4)])
        self.corners = corners
        self.value = float(value)

    @property
    def a(self) -> np.ndarray:
        return self.corners[0, :3]

    @property
    def b(self) -> np.ndarray:
        return self.corners[1, :3]

    @property
    def c(self) -> np.ndarray:
        return self.corners[2, :3]

    @property
    def d(self) -> np.ndarray:
        return self.corners[3, :3]

    def forward(self, chain: "TransformChain", handle: "Transformer") -> "Bin":
        """Carry all four corners through one transform handle in place."""
        self.corners[:, :3] = chain.apply_many(handle, self.corners[:, :3])
        return self

    def ring(self) -> List[tuple]:
        """Closed exterior ring in A, B, D, C, A order."""
        return [tuple(self.corners[i, :3]) for i in RING_ORDER]

    def to_polygon(self) -> Polygon:
        return Polygon(self.ring())

    def to_feature(self) -> dict:
        """GeoJSON Feature dict carrying the gate value as a property."""
        return {
            "type": "Feature",
            "geometry": mapping(self.to_polygon()),
            "properties": {"value": self.value},
        }

    def __repr__(self):
        return f"Bin(value={self.value!r}, corners={self.corners[:, :3].tolist()!r})"


def forward_bins(bins: Iterable[Bin], chain: "TransformChain", handle: "Transformer") -> None:
    """Transform the corners of many bins through one handle in a single call.

    Corners are stacked into one array, transformed together and written back
    into each bin's own corner array. Corner order within each bin is kept.
    """
    bins = list(bins)
    if not bins:
        return

    stacked = np.stack([b.corners[:, :3] for b in bins]).reshape(-1, 3)
    moved = chain.apply_many(handle, stacked).reshape(len(bins), 4, 3)

    for b, corners in zip(bins, moved):
        b.corners[:, :3] = corners
