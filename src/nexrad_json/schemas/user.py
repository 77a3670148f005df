"""UserConfig: Forgiving, minimal user-facing configuration.

Loaded from an optional Python file holding a ``CONFIG`` dict. Accepts
upper-case aliases (PRODUCT -> product, MINIMUM -> minimum) as well as
nested sections for advanced users.
"""

from typing import Any, Optional
from pydantic import Field, field_validator
from nexrad_json.schemas.base import NexradJsonBaseModel
from nexrad_json.schemas._levels import normalize_elevations_til, normalize_log_level, normalize_product


class UserOutputConfig(NexradJsonBaseModel):
    """User-facing output config."""
    name: Optional[str] = None
    filename_pattern: Optional[str] = None
    indent: Optional[int] = None


class UserProjectionConfig(NexradJsonBaseModel):
    """User-facing projection config."""
    ltp_template: Optional[str] = None
    ecef: Optional[str] = None
    geographic: Optional[str] = None


class UserConfig(NexradJsonBaseModel):
    """User-facing configuration schema.

    Users only specify what they want to override from ParamConfig defaults.

    Usage
    -----
        user_cfg = UserConfig(PRODUCT="vel", ELEVATIONS_TIL=4, MINIMUM=-30)
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Flat aliases
    product: Optional[str] = Field(None, alias="PRODUCT")
    elevation: Optional[int] = Field(None, alias="ELEVATION")
    elevations_til: Optional[int] = Field(None, alias="ELEVATIONS_TIL")
    minimum: Optional[float] = Field(None, alias="MINIMUM")
    output_name: Optional[str] = Field(None, alias="OUTPUT")
    threads: Optional[int] = Field(None, alias="THREADS")
    log_level: Optional[str] = Field(None, alias="LOG_LEVEL")
    log_file: Optional[str] = Field(None, alias="LOG_FILE")

    # Nested overrides (advanced users)
    output: Optional[UserOutputConfig] = None
    projection: Optional[UserProjectionConfig] = None

    model_config = NexradJsonBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("product", mode="before")
    @classmethod
    def normalize_product_name(cls, v):
        return normalize_product(v)

    @field_validator("elevations_til")
    @classmethod
    def clamp_elevations_til(cls, v):
        return normalize_elevations_til(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return normalize_log_level(v)

    @field_validator("minimum", mode="before")
    @classmethod
    def coerce_minimum(cls, v):
        """Accept int or float for minimum."""
        if v is not None:
            return float(v)
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure."""
        overrides: dict[str, Any] = {}

        scan = {}
        for key in ("product", "elevation", "elevations_til", "minimum"):
            value = getattr(self, key)
            if value is not None:
                scan[key] = value
        if scan:
            overrides["scan"] = scan

        output = {}
        if self.output_name is not None:
            output["name"] = self.output_name
        if self.output is not None:
            output.update(self.output.model_dump(exclude_none=True))
        if output:
            overrides["output"] = output

        if self.projection is not None:
            projection = self.projection.model_dump(exclude_none=True)
            if projection:
                overrides["projection"] = projection

        if self.threads is not None:
            overrides["processing"] = {"threads": self.threads}

        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.log_file is not None:
            logging_cfg["file"] = self.log_file
        if logging_cfg:
            overrides["logging"] = logging_cfg

        return overrides
