"""Pipeline modules.

- assembler: One elevation sweep -> FeatureCollection
- features: FeatureCollection and file writer
- orchestrator: Elevation selection and two-phase fan-out/join
"""

from nexrad_json.pipeline.assembler import scan_to_feature_collection
from nexrad_json.pipeline.features import FeatureCollection, write_collection
from nexrad_json.pipeline.orchestrator import ElevationOrchestrator

__all__ = [
    "scan_to_feature_collection",
    "FeatureCollection",
    "write_collection",
    "ElevationOrchestrator",
]
