"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and immutable.
"""

from typing import Literal, Optional
from pydantic import ConfigDict, Field
from nexrad_json.schemas.base import NexradJsonBaseModel
from nexrad_json.schemas.param import LogLevel, Product


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalReaderConfig(NexradJsonBaseModel):
    """Runtime reader configuration."""
    file_format: Literal["nexrad_archive"]


class InternalScanConfig(NexradJsonBaseModel):
    """Runtime scan selection."""
    product: Product
    elevation: int = Field(ge=1)
    elevations_til: int = Field(ge=-1)
    minimum: float


class InternalOutputConfig(NexradJsonBaseModel):
    """Runtime output configuration."""
    name: str
    filename_pattern: str
    indent: Optional[int]


class InternalProjectionConfig(NexradJsonBaseModel):
    """Runtime PROJ definitions."""
    ltp_template: str
    ecef: str
    geographic: str


class InternalProcessingConfig(NexradJsonBaseModel):
    """Runtime worker pool configuration."""
    threads: int = Field(ge=1)


class InternalLoggingConfig(NexradJsonBaseModel):
    """Runtime logging configuration."""
    level: LogLevel
    file: Optional[str]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(NexradJsonBaseModel):
    """Authoritative runtime configuration.

    Runtime modules receive InternalConfig and access fields directly:

        minimum = config.scan.minimum        # NOT .get()
        threads = config.processing.threads

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation in runtime code
    """

    reader: InternalReaderConfig
    scan: InternalScanConfig
    output: InternalOutputConfig
    projection: InternalProjectionConfig
    processing: InternalProcessingConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )

    @property
    def batch_mode(self) -> bool:
        """True when ``elevations_til`` selects a range of elevations."""
        return self.scan.elevations_til >= 0

    def output_path(self, elevation: int) -> str:
        """Output file name for one elevation index."""
        return self.output.filename_pattern.format(
            output=self.output.name,
            product=self.scan.product,
            elevation=elevation,
        )
