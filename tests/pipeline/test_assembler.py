import json

import pytest
from shapely.geometry import shape

from nexrad_json.contracts import TransformError, UnsupportedProductError
from nexrad_json.pipeline.assembler import scan_to_bins, scan_to_feature_collection

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


def test_one_feature_per_kept_gate(fake_volume, chain):
    """36 radials x 3 unmasked gates."""
    collection = scan_to_feature_collection(fake_volume[1], chain, "ref", 0.0)

    assert len(collection) == 36 * 3
    assert all(f["properties"]["value"] == 20.0 for f in collection)


def test_minimum_above_all_values_gives_empty_collection(fake_volume, chain):
    collection = scan_to_feature_collection(fake_volume[1], chain, "ref", 25.0)

    assert len(collection) == 0
    assert collection.to_dict() == {"type": "FeatureCollection", "features": []}


def test_features_are_geographic_near_site(fake_volume, chain, radar_site):
    """Gates 2-3 km out stay within a few hundredths of a degree."""
    collection = scan_to_feature_collection(fake_volume[1], chain, "ref", 0.0)

    for feature in collection:
        for lon, lat, *_ in feature["geometry"]["coordinates"][0]:
            assert abs(lat - radar_site[0]) < 0.05
            assert abs(lon - radar_site[1]) < 0.05


def test_polygons_are_valid_and_counter_clockwise(fake_volume, chain):
    collection = scan_to_feature_collection(fake_volume[2], chain, "ref", 0.0)

    for feature in collection:
        polygon = shape(feature["geometry"])
        assert polygon.is_valid
        assert polygon.exterior.is_ccw


def test_collection_is_json_serializable(fake_volume, chain):
    collection = scan_to_feature_collection(fake_volume[1], chain, "ref", 0.0)
    decoded = json.loads(json.dumps(collection.to_dict()))
    assert decoded["features"][0]["geometry"]["type"] == "Polygon"


def test_missing_product_raises(fake_volume, chain):
    with pytest.raises(UnsupportedProductError):
        scan_to_feature_collection(fake_volume[1], chain, "vel", 0.0)


def test_unreachable_corner_aborts_scan(make_radial, chain):
    """A gate beyond the earth's limb cannot be transformed."""
    radials = [make_radial(), make_radial(first_gate_range=5e7)]

    with pytest.raises(TransformError):
        scan_to_feature_collection(radials, chain, "ref", 0.0)


def test_scan_to_bins_concatenates_radials(make_radial):
    radials = [make_radial(gates=[10.0, 999.0]), make_radial(gates=[5.0, 6.0, 7.0])]
    assert len(scan_to_bins(radials, "ref", 0.0)) == 4


def test_empty_scan(chain):
    assert len(scan_to_feature_collection([], chain, "ref", 0.0)) == 0
