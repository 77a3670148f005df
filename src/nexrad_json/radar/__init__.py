"""Radar-side geometry modules.

- loader: Read NEXRAD archives into radial records
- volume: Radial and RadarVolume records, sentinels, product names
- bins: Quadrilateral gate footprints
- rasterizer: Radial -> radar-relative bins
- transforms: Local tangent plane -> ECEF -> geographic chain
"""

from nexrad_json.radar.loader import RadarDataLoader, volume_from_radar
from nexrad_json.radar.volume import BELOW_THRESHOLD, FOLDED, PRODUCT_FIELDS, Radial, RadarVolume
from nexrad_json.radar.bins import Bin, forward_bins
from nexrad_json.radar.rasterizer import radial_to_bins
from nexrad_json.radar.transforms import TransformChain

__all__ = [
    "RadarDataLoader",
    "volume_from_radar",
    "BELOW_THRESHOLD",
    "FOLDED",
    "PRODUCT_FIELDS",
    "Radial",
    "RadarVolume",
    "Bin",
    "forward_bins",
    "radial_to_bins",
    "TransformChain",
]
