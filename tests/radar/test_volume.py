import pytest

from nexrad_json.contracts import InputOpenError
from nexrad_json.radar.volume import RadarVolume

pytestmark = [pytest.mark.unit, pytest.mark.radar]


def test_indices_are_sorted(make_radial):
    volume = RadarVolume({3: [make_radial()], 1: [make_radial()], 2: []})

    assert volume.indices() == [1, 2, 3]
    assert 2 in volume
    assert 4 not in volume
    assert len(volume) == 3


def test_site_location_skips_empty_sweeps(make_radial, radar_site):
    volume = RadarVolume({1: [], 2: [make_radial()]})
    assert volume.site_location() == radar_site


def test_empty_volume_has_no_location():
    with pytest.raises(InputOpenError):
        RadarVolume().site_location()
