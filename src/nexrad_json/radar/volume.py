"""Decoded radial records and the volume that groups them by elevation.

These are the read-only records the rasterizer consumes. They are produced
by :mod:`nexrad_json.radar.loader` from a Py-ART ``Radar`` object.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

import numpy as np

from nexrad_json.contracts import InputOpenError, UnsupportedProductError

__all__ = [
    'BELOW_THRESHOLD',
    'FOLDED',
    'PRODUCT_FIELDS',
    'Radial',
    'RadarVolume',
]

# Reserved gate values. Never real measurements.
BELOW_THRESHOLD = 999.0
FOLDED = 998.0

# Product identifier -> Py-ART field name
PRODUCT_FIELDS = {
    "ref": "reflectivity",
    "vel": "velocity",
    "sw": "spectrum_width",
    "rho": "cross_correlation_ratio",
}


@dataclass(frozen=True, eq=False)
class Radial:
    """One beam of range gates at a fixed azimuth and elevation.

    Attributes
    ----------
    azimuth : float
        Degrees clockwise from north, 0-360.
    elevation : float
        Degrees above the horizon.
    azimuth_resolution : float
        Beam width in degrees.
    first_gate_range : float
        Range to the first gate in metres.
    gate_spacing : float
        Range increment between gates in metres.
    latitude, longitude : float
        Radar site in degrees.
    moments : mapping of str to np.ndarray
        Py-ART field name -> 1D gate array (views into sweep arrays).
    """

    azimuth: float
    elevation: float
    azimuth_resolution: float
    first_gate_range: float
    gate_spacing: float
    latitude: float
    longitude: float
    moments: Mapping[str, np.ndarray] = field(default_factory=dict)

    def scaled_data(self, product: str) -> np.ndarray:
        """Return gate values for ``product`` (ref, vel, sw, rho).

        Raises
        ------
        UnsupportedProductError
            If the identifier is unknown or the field is absent for this radial.
        """
        field_name = PRODUCT_FIELDS.get(product)
        if field_name is None:
            raise UnsupportedProductError(
                f"Unsupported product '{product}'. Expected one of {sorted(PRODUCT_FIELDS)}"
            )
        try:
            return self.moments[field_name]
        except KeyError:
            raise UnsupportedProductError(
                f"Product '{product}' ({field_name}) not present in radial at azimuth {self.azimuth:.2f}"
            ) from None


@dataclass
class RadarVolume:
    """Radials grouped by 1-based elevation index."""

    elevation_scans: Dict[int, List[Radial]] = field(default_factory=dict)

    def __contains__(self, index: int) -> bool:
        return index in self.elevation_scans

    def __getitem__(self, index: int) -> List[Radial]:
        return self.elevation_scans[index]

    def __len__(self) -> int:
        return len(self.elevation_scans)

    def indices(self) -> List[int]:
        return sorted(self.elevation_scans)

    def site_location(self) -> Tuple[float, float]:
        """Latitude and longitude from the first radial of the lowest elevation."""
        for index in self.indices():
            radials = self.elevation_scans[index]
            if radials:
                return radials[0].latitude, radials[0].longitude
        raise InputOpenError("Volume contains no radials; radar location unknown")
