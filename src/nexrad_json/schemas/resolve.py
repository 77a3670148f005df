"""Configuration resolution and merging logic.

Single entrypoint: resolve_config(). Merges ParamConfig, UserConfig, and
CLIConfig in precedence order and returns a validated InternalConfig.

Precedence (highest to lowest):
1. CLIConfig (command-line overrides)
2. UserConfig (user file)
3. ParamConfig (expert defaults)
"""

import importlib.util
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from nexrad_json.contracts import ConfigError
from nexrad_json.schemas.param import ParamConfig
from nexrad_json.schemas.user import UserConfig
from nexrad_json.schemas.cli import CLIConfig
from nexrad_json.schemas.internal import InternalConfig


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Deep merge multiple dictionaries.

    Later dictionaries override earlier ones. Nested dictionaries are
    merged recursively; other values are replaced.

    Examples
    --------
    >>> base = {"a": 1, "b": {"c": 2, "d": 3}}
    >>> override = {"b": {"d": 4, "e": 5}, "f": 6}
    >>> deep_merge(base, override)
    {'a': 1, 'b': {'c': 2, 'd': 4, 'e': 5}, 'f': 6}
    """
    result = base.copy()

    for override in overrides:
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            else:
                result[key] = value

    return result


def load_user_config_dict(config_path: Union[str, Path]) -> dict:
    """Load the ``CONFIG`` dict from a user Python file.

    Raises
    ------
    ConfigError
        If the file does not exist, cannot be imported, or holds no CONFIG dict.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("nexrad_json_user_config", path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Could not load config module from {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigError(f"Failed to execute config file {path}: {e}") from e

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ConfigError(f"No CONFIG dict found in {path}")


def resolve_config(
    param_cfg: Union[dict, ParamConfig],
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Resolve final runtime configuration from param, user, and CLI configs.

    Parameters
    ----------
    param_cfg : dict or ParamConfig
        Expert configuration with complete defaults. Required.
    user_cfg : dict or UserConfig, optional
        User configuration with overrides.
    cli_cfg : dict or CLIConfig, optional
        Command-line overrides.

    Returns
    -------
    InternalConfig
        Fully validated, immutable runtime configuration

    Raises
    ------
    ConfigError
        If any layer fails Pydantic validation. The original
        ``ValidationError`` is chained as the cause.

    Examples
    --------
    >>> config = resolve_config(ParamConfig(), {"PRODUCT": "vel"}, {"minimum": 5})
    >>> config.scan.product, config.scan.minimum
    ('vel', 5.0)
    """
    try:
        param = param_cfg if isinstance(param_cfg, ParamConfig) else ParamConfig.model_validate(param_cfg)

        if user_cfg is None or (isinstance(user_cfg, dict) and not user_cfg):
            user = UserConfig()
        elif not isinstance(user_cfg, UserConfig):
            user = UserConfig.model_validate(user_cfg)
        else:
            user = user_cfg

        if cli_cfg is None or (isinstance(cli_cfg, dict) and not cli_cfg):
            cli = CLIConfig()
        elif not isinstance(cli_cfg, CLIConfig):
            cli = CLIConfig.model_validate(cli_cfg)
        else:
            cli = cli_cfg

        merged = deep_merge(
            param.model_dump(),
            user.to_internal_overrides(),
            cli.to_internal_overrides(),
        )

        return InternalConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
