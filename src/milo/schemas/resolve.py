"""Merge the configuration layers into one InternalConfig.

Layers, lowest to highest precedence:

1. ParamConfig: expert defaults, complete
2. UserConfig: the user's CONFIG file
3. CLIConfig: command-line flags

Each layer may be passed as a model or as a plain dict; ``None`` or an
empty dict means "no overrides from this layer".
"""

import logging
from typing import Optional, Type, Union

from pydantic import BaseModel

from milo.schemas.cli import CLIConfig
from milo.schemas.internal import InternalConfig
from milo.schemas.param import ParamConfig
from milo.schemas.user import UserConfig

logger = logging.getLogger(__name__)


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Recursively merge ``overrides`` into a copy of ``base``.

    Dict values are merged key by key; any other value replaces what was
    there. Later overrides win.

    Examples
    --------
    >>> deep_merge({"report": {"sheets": ["sum"], "output_val": "percent_area"}},
    ...            {"report": {"output_val": "kernel_area"}})
    {'report': {'sheets': ['sum'], 'output_val': 'kernel_area'}}
    """
    merged = dict(base)
    for override in overrides:
        for key, value in override.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[key] = deep_merge(current, value)
            else:
                merged[key] = value
    return merged


def _as_layer(value, model: Type[BaseModel]) -> BaseModel:
    if isinstance(value, model):
        return value
    return model.model_validate(value or {})


def _unique_sheets(merged: dict) -> None:
    # A key listed twice would write two worksheets with the same title
    report = merged.get("report", {})
    sheets = report.get("sheets")
    if isinstance(sheets, list):
        report["sheets"] = list(dict.fromkeys(sheets))


def resolve_config(
    param_cfg: Union[dict, ParamConfig],
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Build the frozen runtime configuration from the three layers.

    Parameters
    ----------
    param_cfg : dict or ParamConfig
        Expert defaults.
    user_cfg : dict or UserConfig, optional
        Overrides from the user's config file.
    cli_cfg : dict or CLIConfig, optional
        Overrides from the command line.

    Returns
    -------
    InternalConfig
        Validated, immutable configuration.

    Raises
    ------
    pydantic.ValidationError
        If a layer, or the merged result, is invalid.

    Examples
    --------
    >>> user = UserConfig(output_val="area1", base_dir="/tmp/milo")
    >>> config = resolve_config(ParamConfig(), user)
    >>> config.report.output_val
    'kernel_area'
    """
    param = _as_layer(param_cfg, ParamConfig)
    user = _as_layer(user_cfg, UserConfig)
    cli = _as_layer(cli_cfg, CLIConfig)

    user_overrides = user.to_internal_overrides()
    cli_overrides = cli.to_internal_overrides()
    logger.debug("Config overrides: user=%s cli=%s", user_overrides, cli_overrides)

    merged = deep_merge(param.model_dump(), user_overrides, cli_overrides)
    _unique_sheets(merged)

    return InternalConfig.model_validate(merged)
