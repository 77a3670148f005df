"""ParamConfig: Expert defaults for nexrad-json.

This module defines the complete default configuration. ALL run parameters
must have defaults here. No runtime code should define fallback values.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

import os
from typing import Literal, Optional
from pydantic import Field, field_validator
from nexrad_json.schemas.base import NexradJsonBaseModel
from nexrad_json.schemas._levels import normalize_elevations_til, normalize_log_level, normalize_product


Product = Literal["ref", "vel", "sw", "rho"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Nested Configuration Models
# =============================================================================

class ReaderConfig(NexradJsonBaseModel):
    """Radar file reader configuration."""
    file_format: Literal["nexrad_archive"] = "nexrad_archive"


class ScanConfig(NexradJsonBaseModel):
    """Which product and elevations to convert."""
    product: Product = "ref"
    elevation: int = Field(1, ge=1, description="Elevation index for single-elevation mode")
    elevations_til: int = Field(-1, description="Upper elevation index for batch mode; negative disables")
    minimum: float = Field(0.0, description="Gates strictly below this value are dropped")

    @field_validator("product", mode="before")
    @classmethod
    def normalize_product_name(cls, v):
        return normalize_product(v)

    @field_validator("elevations_til")
    @classmethod
    def clamp_elevations_til(cls, v):
        return normalize_elevations_til(v)

    @field_validator("minimum", mode="before")
    @classmethod
    def coerce_minimum_to_float(cls, v):
        """Allow int or float for minimum."""
        return float(v)


class OutputConfig(NexradJsonBaseModel):
    """Output file configuration."""
    name: str = Field("radar", min_length=1, description="Base name for output files")
    filename_pattern: str = "{output}-{product}-elev-{elevation}.json"
    indent: Optional[int] = Field(None, ge=0)


class ProjectionConfig(NexradJsonBaseModel):
    """PROJ definitions for the transform chain.

    ``ltp_template`` is formatted with the radar ``lat`` and ``lon``.
    """
    ltp_template: str = (
        "+proj=ortho +lat_0={lat} +lon_0={lon} +x_0=0 +y_0=0 "
        "+ellps=WGS84 +units=m +no_defs +type=crs"
    )
    ecef: str = "+proj=geocent +datum=WGS84 +units=m +no_defs +type=crs"
    geographic: str = "+proj=longlat +ellps=WGS84 +datum=WGS84 +no_defs +type=crs"


class ProcessingConfig(NexradJsonBaseModel):
    """Worker pool configuration."""
    threads: int = Field(default_factory=lambda: os.cpu_count() or 1, ge=1)


class LoggingConfig(NexradJsonBaseModel):
    """Logging configuration."""
    level: LogLevel = "WARNING"
    file: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return normalize_log_level(v)


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(NexradJsonBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all run parameters.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
