"""Assemble one elevation sweep into a GeoJSON feature collection.

Steps:
1. Rasterize every radial into radar-relative bins
2. Carry all corners through local tangent plane -> ECEF
3. Carry all corners through ECEF -> geographic
4. One polygon feature per bin, value as a property

Any transform failure aborts the run; a partial collection is never returned.
"""

import logging
from typing import TYPE_CHECKING, List, Sequence

from nexrad_json.contracts import (
    assert_feature_collection,
    assert_geographic,
    assert_radar_relative,
)
from nexrad_json.pipeline.features import FeatureCollection
from nexrad_json.radar.bins import Bin, forward_bins
from nexrad_json.radar.rasterizer import radial_to_bins

if TYPE_CHECKING:
    from nexrad_json.radar.transforms import TransformChain
    from nexrad_json.radar.volume import Radial

__all__ = ['scan_to_feature_collection', 'scan_to_bins']

logger = logging.getLogger(__name__)


def scan_to_bins(radials: Sequence["Radial"], product: str, minimum: float) -> List[Bin]:
    """Rasterize every radial of a sweep and concatenate the bins."""
    bins: List[Bin] = []
    for radial in radials:
        bins.extend(radial_to_bins(radial, product, minimum))
    return bins


def scan_to_feature_collection(radials: Sequence["Radial"], chain: "TransformChain",
                               product: str, minimum: float) -> FeatureCollection:
    """Convert one elevation sweep into a geographic FeatureCollection.

    Parameters
    ----------
    radials : sequence of Radial
        All radials of the sweep.
    chain : TransformChain
        Shared, read-only transform handles for the radar site.
    product : str
        Product identifier (ref, vel, sw, rho).
    minimum : float
        Minimum gate value to keep.

    Returns
    -------
    FeatureCollection
        Possibly empty.

    Raises
    ------
    UnsupportedProductError
        If any radial lacks the product.
    TransformError
        If any corner fails either transform stage.
    """
    bins = scan_to_bins(radials, product, minimum)
    assert_radar_relative(bins)
    logger.debug("Rasterized %d radial(s) into %d bin(s)", len(radials), len(bins))

    forward_bins(bins, chain, chain.ltp_to_ecef)
    forward_bins(bins, chain, chain.ecef_to_geographic)
    assert_geographic(bins)

    collection = FeatureCollection()
    for b in bins:
        collection.add_feature(b.to_feature())

    assert_feature_collection(collection)
    return collection
