"""`nexrad-json` - GeoJSON polygons from NEXRAD Level-II volume scans.

Subpackages:
- radar: Archive reading, radial rasterization, coordinate transforms
- pipeline: Scan assembly, elevation orchestration, GeoJSON output
- schemas: Layered pydantic configuration
- contracts: Error taxonomy and stage invariants
"""

__version__ = "0.1.0"
