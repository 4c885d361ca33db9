"""Configuration schemas for Milo.

Three input layers are merged by :func:`resolve_config` into one frozen
:class:`InternalConfig`:

- ParamConfig: expert defaults for the reader, report, workbook and logging
- UserConfig: the user's CONFIG file, forgiving about key case and the
  spelling of measured quantities
- CLIConfig: command-line flags, applied last
"""

from milo.schemas.resolve import resolve_config
from milo.schemas.internal import InternalConfig
from milo.schemas.param import ParamConfig
from milo.schemas.user import UserConfig
from milo.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
