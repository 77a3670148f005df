"""Error taxonomy and fail-fast enforcement of stage invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- pyproj and Py-ART failures are wrapped into the run's own error types
"""

from nexrad_json.contracts.failure import (
    NexradJsonError,
    ConfigError,
    MissingElevationError,
    InputOpenError,
    ProjectionSetupError,
    UnsupportedProductError,
    TransformError,
    OutputWriteError,
    ContractViolation,
)
from nexrad_json.contracts.base import require
from nexrad_json.contracts.bins import assert_radar_relative, assert_geographic
from nexrad_json.contracts.features import assert_feature_collection

__all__ = [
    "NexradJsonError",
    "ConfigError",
    "MissingElevationError",
    "InputOpenError",
    "ProjectionSetupError",
    "UnsupportedProductError",
    "TransformError",
    "OutputWriteError",
    "ContractViolation",
    "require",
    "assert_radar_relative",
    "assert_geographic",
    "assert_feature_collection",
]
