"""Two-stage coordinate transform chain anchored at the radar site.

Bins are computed in an orthographic local tangent plane centred on the
radar. This module builds the pyproj pipelines that carry those points to
earth-centred earth-fixed coordinates and from there to WGS84 longitude,
latitude and height.

The chain is built once per input file and then shared read-only by every
elevation task.
"""

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

import numpy as np
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from nexrad_json.contracts import ProjectionSetupError, TransformError

if TYPE_CHECKING:
    from nexrad_json.schemas import InternalConfig

__all__ = ['TransformChain']

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TransformChain:
    """Immutable pair of transform handles for one radar site.

    Attributes
    ----------
    latitude, longitude : float
        Radar site in degrees. Origin of the local tangent plane.
    ltp_to_ecef : pyproj.Transformer
        Local tangent plane (metres) -> geocentric ECEF (metres).
    ecef_to_geographic : pyproj.Transformer
        Geocentric ECEF -> longitude, latitude (degrees), height (metres).
    """

    latitude: float
    longitude: float
    ltp_to_ecef: Transformer
    ecef_to_geographic: Transformer

    @classmethod
    def from_location(cls, latitude: float, longitude: float,
                      config: "InternalConfig") -> "TransformChain":
        """Build both handles for a radar at ``latitude``/``longitude``.

        Parameters
        ----------
        latitude, longitude : float
            Radar location in degrees.
        config : InternalConfig
            Supplies the PROJ definitions under ``config.projection``. The
            tangent-plane template is formatted with ``lat`` and ``lon``.

        Returns
        -------
        TransformChain

        Raises
        ------
        ProjectionSetupError
            If the location is not a finite lat/lon or PROJ rejects any of
            the definitions.
        """
        try:
            latitude = float(latitude)
            longitude = float(longitude)
        except (TypeError, ValueError) as e:
            raise ProjectionSetupError(f"Invalid radar location: {latitude!r}, {longitude!r}") from e

        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise ProjectionSetupError(f"Radar location is not finite: {latitude}, {longitude}")
        if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
            raise ProjectionSetupError(f"Radar location out of range: {latitude}, {longitude}")

        projection = config.projection
        ltp_def = projection.ltp_template.format(lat=latitude, lon=longitude)

        try:
            ltp = CRS.from_user_input(ltp_def)
            ecef = CRS.from_user_input(projection.ecef)
            geographic = CRS.from_user_input(projection.geographic)

            ltp_to_ecef = Transformer.from_crs(ltp, ecef, always_xy=True)
            ecef_to_geographic = Transformer.from_crs(ecef, geographic, always_xy=True)
        except (CRSError, ProjError) as e:
            raise ProjectionSetupError(f"Failed to build transform chain: {e}") from e

        logger.debug("Transform chain ready: ltp=%s", ltp_def)
        return cls(latitude, longitude, ltp_to_ecef, ecef_to_geographic)

    def apply(self, handle: Transformer, point: Sequence[float]) -> Tuple[float, float, float]:
        """Transform one 3D point through ``handle``.

        Raises
        ------
        TransformError
            If PROJ reports a failure or returns non-finite coordinates.
        """
        x, y, z = self.apply_many(handle, np.asarray(point, dtype=np.float64).reshape(1, 3))[0]
        return float(x), float(y), float(z)

    def apply_many(self, handle: Transformer, points: np.ndarray) -> np.ndarray:
        """Transform an (N, 3) array of points through ``handle``.

        Returns a new (N, 3) array in the same row order.
        """
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 3:
            raise TransformError(f"Expected (N, 3) points, got shape {points.shape}")
        if points.shape[0] == 0:
            return points.copy()

        try:
            x, y, z = handle.transform(points[:, 0], points[:, 1], points[:, 2], errcheck=True)
        except ProjError as e:
            raise TransformError(f"Point transform failed: {e}") from e

        out = np.column_stack([x, y, z]).astype(np.float64)
        if not np.all(np.isfinite(out)):
            bad = int(np.count_nonzero(~np.isfinite(out).all(axis=1)))
            raise TransformError(f"Point transform produced {bad} non-finite point(s)")
        return out

    def to_geographic(self, point: Sequence[float]) -> Tuple[float, float, float]:
        """Carry one tangent-plane point through both stages."""
        return self.apply(self.ecef_to_geographic, self.apply(self.ltp_to_ecef, point))
