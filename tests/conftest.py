"""Root-level pytest fixtures for the nexrad-json test suite.

Provides shared configuration fixtures and a Py-ART-like fake radar so no
real Level-II archive is needed. All tests must use these fixtures instead
of creating raw dict configs.
"""

import logging
import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest

from nexrad_json.radar.loader import volume_from_radar
from nexrad_json.radar.transforms import TransformChain
from nexrad_json.radar.volume import Radial
from nexrad_json.schemas import ParamConfig, resolve_config


# Oklahoma City (KTLX)
RADAR_LAT = 35.3331
RADAR_LON = -97.2778


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Accepts CLIConfig-compatible kwargs.

    Examples
    --------
    >>> def test_custom_minimum(make_config):
    ...     config = make_config(minimum=10, product="vel")
    ...     assert config.scan.minimum == 10.0
    """
    def _make(**cli_overrides):
        return resolve_config(param_config, None, cli_overrides or None)

    return _make


@pytest.fixture
def radar_site():
    """Latitude and longitude of the fake radar."""
    return RADAR_LAT, RADAR_LON


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def restore_root_logging():
    """Undo root logger changes made by setup_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


# =============================================================================
# Fake Py-ART radar
# =============================================================================

class FakeRadar:
    """Minimal stand-in for ``pyart.core.Radar``.

    Exposes only the attributes the loader reads: site location, per-ray
    azimuth/elevation, range metadata, sweep ray indices and fields.
    """

    def __init__(self, nsweeps=5, rays_per_sweep=36, ngates=4,
                 latitude=RADAR_LAT, longitude=RADAR_LON,
                 first_gate=2125.0, gate_spacing=250.0,
                 fields=("reflectivity",), value=20.0, ray_angle_res=None):
        nrays = nsweeps * rays_per_sweep
        azimuths = np.tile(np.arange(rays_per_sweep) * (360.0 / rays_per_sweep), nsweeps)
        elevations = np.repeat(0.5 * (np.arange(nsweeps) + 1), rays_per_sweep)

        self.latitude = {'data': np.array([latitude])}
        self.longitude = {'data': np.array([longitude])}
        self.azimuth = {'data': azimuths.astype(np.float32)}
        self.elevation = {'data': elevations.astype(np.float32)}
        self.range = {
            'data': (first_gate + gate_spacing * np.arange(ngates)).astype(np.float32),
            'meters_to_center_of_first_gate': first_gate,
            'meters_between_gates': gate_spacing,
        }
        self.sweep_start_ray_index = {'data': np.arange(nsweeps) * rays_per_sweep}
        self.sweep_end_ray_index = {'data': np.arange(nsweeps) * rays_per_sweep + rays_per_sweep - 1}
        self.ray_angle_res = (
            None if ray_angle_res is None
            else {'data': np.full(nsweeps, ray_angle_res, dtype=np.float32)}
        )
        self.nsweeps = nsweeps
        self.nrays = nrays
        self.ngates = ngates

        self.fields = {}
        for name in fields:
            data = np.ma.array(np.full((nrays, ngates), value, dtype=np.float32))
            if ngates:
                # First gate of every ray is below threshold
                data[:, 0] = np.ma.masked
            self.fields[name] = {'data': data}


@pytest.fixture
def fake_radar():
    """Factory for FakeRadar instances."""
    return FakeRadar


@pytest.fixture
def make_radial(radar_site):
    """Factory for single Radial records (reflectivity only by default)."""
    lat, lon = radar_site

    def _make(gates=(10.0, 20.0, 30.0), azimuth=90.0, elevation=0.0,
              azimuth_resolution=1.0, first_gate_range=1000.0, gate_spacing=250.0,
              field="reflectivity"):
        return Radial(
            azimuth=azimuth,
            elevation=elevation,
            azimuth_resolution=azimuth_resolution,
            first_gate_range=first_gate_range,
            gate_spacing=gate_spacing,
            latitude=lat,
            longitude=lon,
            moments={field: np.asarray(gates, dtype=np.float64)},
        )

    return _make


@pytest.fixture
def chain(internal_config, radar_site):
    """Real pyproj transform chain at the test radar site."""
    return TransformChain.from_location(*radar_site, internal_config)


@pytest.fixture
def fake_volume(fake_radar):
    """Five-elevation volume adapted from a FakeRadar."""
    return volume_from_radar(fake_radar())
