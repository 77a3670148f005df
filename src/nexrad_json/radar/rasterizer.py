"""Turn one radial of range gates into radar-relative Bins.

Each surviving gate becomes a quadrilateral in the local tangent plane at the
radar: two range edges (near, far) times two azimuth edges (theta plus and
minus half the beam width), converted from spherical to Cartesian.

Filtering (in this order):
1. value equals the below-threshold sentinel -> skipped
2. value equals the folded sentinel -> skipped
3. value strictly below the configured minimum -> skipped

The running range advances by one gate spacing for every gate, skipped or not.
"""

import logging
from typing import List

import numpy as np

from nexrad_json.radar.bins import Bin
from nexrad_json.radar.volume import BELOW_THRESHOLD, FOLDED, Radial

__all__ = ['radial_to_bins', 'math_angle', 'gate_mask', 'radial_corners']

logger = logging.getLogger(__name__)


def math_angle(azimuth: float) -> float:
    """Convert a radar azimuth (clockwise from north) to a math angle in [0, 360).

    >>> math_angle(0.0) == math_angle(360.0) == 90.0
    True
    >>> math_angle(359.5)
    90.5
    """
    theta = (90.0 - float(azimuth)) % 360.0
    # float modulo of a tiny negative rounds up to the divisor
    return 0.0 if theta >= 360.0 else theta


def gate_mask(gates: np.ndarray, minimum: float) -> np.ndarray:
    """Boolean mask of gates that produce a Bin."""
    gates = np.asarray(gates)
    return (gates != BELOW_THRESHOLD) & (gates != FOLDED) & ~(gates < minimum)


def radial_corners(radial: Radial, ngates: int) -> np.ndarray:
    """Corner coordinates for every gate of a radial.

    Returns
    -------
    np.ndarray
        Shape (ngates, 4, 4): rows A, B, C, D; columns x, y, z, t (t = 0).
    """
    phi = np.deg2rad(90.0 - float(radial.elevation))
    theta = np.deg2rad(math_angle(radial.azimuth))
    half_beam = np.deg2rad(float(radial.azimuth_resolution)) / 2.0

    near = float(radial.first_gate_range) + float(radial.gate_spacing) * np.arange(ngates, dtype=np.float64)
    far = near + float(radial.gate_spacing)

    sin_phi = np.sin(phi)
    cos_phi = np.cos(phi)
    left = theta + half_beam
    right = theta - half_beam

    corners = np.zeros((ngates, 4, 4), dtype=np.float64)
    for row, (rho, angle) in enumerate(((near, left), (near, right), (far, left), (far, right))):
        corners[:, row, 0] = rho * sin_phi * np.cos(angle)
        corners[:, row, 1] = rho * sin_phi * np.sin(angle)
        corners[:, row, 2] = rho * cos_phi
    return corners


def radial_to_bins(radial: Radial, product: str, minimum: float) -> List[Bin]:
    """Rasterize one radial into radar-relative Bins.

    Parameters
    ----------
    radial : Radial
        Decoded radial record.
    product : str
        Product identifier (ref, vel, sw, rho).
    minimum : float
        Gates strictly below this value are skipped. ``value == minimum``
        still produces a Bin.

    Returns
    -------
    list of Bin
        Possibly empty. Bins appear in increasing range order.

    Raises
    ------
    UnsupportedProductError
        If the radial cannot provide ``product``.
    """
    gates = np.asarray(radial.scaled_data(product))
    if gates.size == 0:
        return []

    keep = gate_mask(gates, minimum)
    if not keep.any():
        return []

    corners = radial_corners(radial, gates.size)[keep]
    values = gates[keep]

    return [Bin(corners[i], values[i]) for i in range(values.size)]
