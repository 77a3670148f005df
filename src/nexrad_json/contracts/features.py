"""Feature collection contract.

Every feature written must be a single closed polygon ring of five
positions with a numeric ``value`` property.
"""

from nexrad_json.contracts.base import require


def assert_feature_collection(collection) -> None:
    """Enforce the assembly contract on a FeatureCollection."""
    for i, feature in enumerate(collection.features):
        geometry = feature.get("geometry") or {}
        require(
            geometry.get("type") == "Polygon",
            f"Feature contract violated: feature {i} is {geometry.get('type')!r}, expected 'Polygon'"
        )
        rings = geometry.get("coordinates") or ()
        require(
            len(rings) == 1 and len(rings[0]) == 5,
            f"Feature contract violated: feature {i} ring must have 5 positions"
        )
        require(
            tuple(rings[0][0]) == tuple(rings[0][-1]),
            f"Feature contract violated: feature {i} ring is not closed"
        )
        require(
            "value" in (feature.get("properties") or {}),
            f"Feature contract violated: feature {i} missing 'value' property"
        )
