"""Bin stage contracts.

Rasterized bins must carry four finite corners. After the transform chain
every corner must be a valid longitude/latitude.
"""

from typing import Sequence

import numpy as np

from nexrad_json.contracts.base import require


def assert_radar_relative(bins: Sequence) -> None:
    """Enforce the rasterizer contract: (4, 4) finite corner arrays."""
    for b in bins:
        require(
            b.corners.shape == (4, 4),
            f"Bin contract violated: corners shape {b.corners.shape}, expected (4, 4)"
        )
    if bins:
        stacked = np.stack([b.corners for b in bins])
        require(
            bool(np.all(np.isfinite(stacked))),
            "Bin contract violated: non-finite radar-relative corner"
        )


def assert_geographic(bins: Sequence) -> None:
    """Enforce the transform contract: lon in [-180, 180], lat in [-90, 90]."""
    if not bins:
        return
    stacked = np.stack([b.corners[:, :3] for b in bins])
    lon = stacked[..., 0]
    lat = stacked[..., 1]
    require(
        bool(np.all((lon >= -180.0) & (lon <= 180.0))),
        "Geographic contract violated: longitude outside [-180, 180]"
    )
    require(
        bool(np.all((lat >= -90.0) & (lat <= 90.0))),
        "Geographic contract violated: latitude outside [-90, 90]"
    )
