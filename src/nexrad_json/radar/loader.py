"""Read NEXRAD Level-II archives into radial records.

Decoding the archive is delegated to Py-ART. This module only adapts the
resulting ``pyart.core.Radar`` object into :class:`RadarVolume`: one list of
:class:`Radial` records per sweep, keyed by 1-based elevation index.

Py-ART masks both the "below threshold" and the "range folded" raw codes.
Masked and non-finite gates are filled with the below-threshold sentinel so
the rasterizer drops them.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Dict, List
import logging

import numpy as np
import pyart

from nexrad_json.contracts import InputOpenError
from nexrad_json.radar.volume import BELOW_THRESHOLD, PRODUCT_FIELDS, Radial, RadarVolume

if TYPE_CHECKING:
    from nexrad_json.schemas import InternalConfig

__all__ = ['RadarDataLoader', 'volume_from_radar']

logger = logging.getLogger(__name__)


def _scalar(attr: dict, index: int = 0) -> float:
    """First (or ray-specific) value of a Py-ART metadata dict."""
    data = np.ravel(attr['data'])
    if data.size == 1:
        return float(data[0])
    return float(data[index])


def _sweep_resolution(radar, sweep: int, azimuths: np.ndarray) -> float:
    """Azimuthal beam width for one sweep, in degrees."""
    ray_angle_res = getattr(radar, 'ray_angle_res', None)
    if ray_angle_res is not None:
        res = np.ravel(ray_angle_res['data'])
        if res.size:
            return float(res[min(sweep, res.size - 1)])

    if azimuths.size < 2:
        return 1.0
    steps = np.abs(np.diff(azimuths))
    steps = np.minimum(steps, 360.0 - steps)
    steps = steps[steps > 0]
    return float(np.median(steps)) if steps.size else 1.0


def _gate_geometry(radar) -> tuple:
    """First gate range and gate spacing, in metres."""
    rng = radar.range
    first = rng.get('meters_to_center_of_first_gate')
    spacing = rng.get('meters_between_gates')
    data = np.ravel(rng['data'])

    if first is None:
        first = data[0] if data.size else 0.0
    if spacing is None:
        spacing = (data[1] - data[0]) if data.size > 1 else 0.0
    return float(np.ravel(first)[0]), float(np.ravel(spacing)[0])


def _filled_field(field: dict) -> np.ndarray:
    """Gate values with masked and non-finite gates set to BELOW_THRESHOLD."""
    data = np.ma.masked_invalid(np.ma.asarray(field['data'], dtype=np.float64))
    return np.ma.filled(data, BELOW_THRESHOLD)


def volume_from_radar(radar) -> RadarVolume:
    """Adapt a Py-ART ``Radar`` object into a :class:`RadarVolume`.

    Parameters
    ----------
    radar : pyart.core.Radar
        Decoded volume. Only the product fields listed in ``PRODUCT_FIELDS``
        are carried over.

    Returns
    -------
    RadarVolume
        Sweep ``i`` becomes elevation index ``i + 1``.

    Notes
    -----
    A sweep that did not record a product (velocity on surveillance cuts,
    for example) comes back from Py-ART fully masked. Its gates become
    sentinels, so that elevation yields an empty collection instead of
    ``UnsupportedProductError``. Only a field missing from the whole volume
    makes ``Radial.scaled_data`` raise.
    """
    first_gate, spacing = _gate_geometry(radar)

    fields = {
        name: _filled_field(radar.fields[name])
        for name in PRODUCT_FIELDS.values()
        if name in radar.fields
    }

    azimuth = np.asarray(radar.azimuth['data'], dtype=np.float64)
    elevation = np.asarray(radar.elevation['data'], dtype=np.float64)
    starts = np.ravel(radar.sweep_start_ray_index['data'])
    ends = np.ravel(radar.sweep_end_ray_index['data'])

    scans: Dict[int, List[Radial]] = {}
    for sweep, (start, end) in enumerate(zip(starts, ends)):
        rays = range(int(start), int(end) + 1)
        resolution = _sweep_resolution(radar, sweep, azimuth[rays.start:rays.stop])

        scans[sweep + 1] = [
            Radial(
                azimuth=float(azimuth[ray]),
                elevation=float(elevation[ray]),
                azimuth_resolution=resolution,
                first_gate_range=first_gate,
                gate_spacing=spacing,
                latitude=_scalar(radar.latitude, ray),
                longitude=_scalar(radar.longitude, ray),
                moments={name: data[ray] for name, data in fields.items()},
            )
            for ray in rays
        ]
        logger.debug("Sweep %d: %d radials, resolution %.2f deg", sweep + 1, len(rays), resolution)

    return RadarVolume(scans)


class RadarDataLoader:
    """Load NEXRAD archive files into :class:`RadarVolume` objects.

    Examples
    --------
    >>> loader = RadarDataLoader(config)
    >>> volume = loader.load("KTLX20130520_201643_V06.gz")
    >>> volume.indices()
    [1, 2, 3, ...]
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.file_format = config.reader.file_format

    def read(self, filepath: Path | str):
        """Read an archive into a Py-ART Radar object.

        Raises
        ------
        InputOpenError
            If the file is missing or Py-ART cannot decode it.
        """
        filepath = Path(filepath)
        if not filepath.is_file():
            raise InputOpenError(f"Radar file not found: {filepath}")

        try:
            if self.file_format == "nexrad_archive":
                radar = pyart.io.read_nexrad_archive(str(filepath))
            else:
                raise InputOpenError(f"Unsupported file format: {self.file_format}")
        except InputOpenError:
            raise
        except Exception as e:
            raise InputOpenError(f"Failed to read radar file {filepath}: {e}") from e

        logger.debug("Successfully read radar file: %s", filepath)
        return radar

    def load(self, filepath: Path | str) -> RadarVolume:
        """Read and adapt in one call."""
        volume = volume_from_radar(self.read(filepath))
        if len(volume) == 0:
            raise InputOpenError(f"No sweeps found in {filepath}")
        logger.info("Loaded %s: %d elevation(s)", Path(filepath).name, len(volume))
        return volume
