"""Pydantic configuration schemas for nexrad-json.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
load_user_config_dict : function
    Read the CONFIG dict from a user Python file
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from nexrad_json.schemas.resolve import resolve_config, load_user_config_dict
from nexrad_json.schemas.internal import InternalConfig
from nexrad_json.schemas.param import ParamConfig
from nexrad_json.schemas.user import UserConfig
from nexrad_json.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'load_user_config_dict',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
