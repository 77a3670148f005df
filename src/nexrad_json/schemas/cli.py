"""CLIConfig: Command-line operational overrides.

Holds the flags of the ``nexrad-json`` command. Every field is optional;
only values the user actually passed override the lower layers.
"""

from typing import Optional
from pydantic import Field, field_validator
from nexrad_json.schemas.base import NexradJsonBaseModel
from nexrad_json.schemas.param import LogLevel, Product
from nexrad_json.schemas._levels import normalize_elevations_til, normalize_log_level, normalize_product


class CLIConfig(NexradJsonBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(product="vel", elevations_til=3, log_level="info")
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    output: Optional[str] = Field(None, min_length=1)
    product: Optional[Product] = None
    elevation: Optional[int] = Field(None, ge=1)
    elevations_til: Optional[int] = None
    minimum: Optional[float] = None
    threads: Optional[int] = Field(None, ge=1)
    log_level: Optional[LogLevel] = None
    log_file: Optional[str] = None

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
        """Accept debug/info/warn/error in any case."""
        return normalize_log_level(v)

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        scan = {}
        if self.product is not None:
            scan["product"] = self.product
        if self.elevation is not None:
            scan["elevation"] = self.elevation
        if self.elevations_til is not None:
            scan["elevations_til"] = self.elevations_til
        if self.minimum is not None:
            scan["minimum"] = self.minimum
        if scan:
            overrides["scan"] = scan

        if self.output is not None:
            overrides["output"] = {"name": self.output}

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
