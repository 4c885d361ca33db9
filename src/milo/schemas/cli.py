"""CLIConfig: flags given on the milo-report command line.

Only what changes from run to run: output directory, measured quantity,
workbook name and log level.
"""

from typing import Literal, Optional
from pydantic import field_validator
from milo.schemas.base import MiloBaseModel
from milo.schemas.user import normalize_output_val


class CLIConfig(MiloBaseModel):
    """Command-line configuration overrides.

    Operational-only settings that override user and param configs.
    Highest priority in config resolution.

    Notes
    -----
    ``output_name`` is not part of InternalConfig: it names a single run's
    workbook and is consumed by the runner directly. When given, it is
    turned into a filename pattern override so the runner never has to
    look at CLIConfig.

    Usage
    -----
        cli_cfg = CLIConfig(
            base_dir="/scratch/milo_output",
            output_val="area1",
            log_level="DEBUG",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    base_dir: Optional[str] = None
    output_val: Optional[Literal["kernel_area", "endosperm_area", "percent_area"]] = None
    output_name: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    @field_validator("output_val", mode="before")
    @classmethod
    def normalize_output(cls, v):
        return normalize_output_val(v)

    @field_validator("output_name")
    @classmethod
    def ensure_xlsx_suffix(cls, v):
        """Append the workbook suffix when the user left it off."""
        if v is not None and not v.lower().endswith(".xlsx"):
            return v + ".xlsx"
        return v

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)

        report_overrides = {}
        if self.output_val is not None:
            report_overrides["output_val"] = self.output_val
        if self.output_name is not None:
            # Literal braces in a user-supplied name must survive str.format
            report_overrides["filename_pattern"] = (
                self.output_name.replace("{", "{{").replace("}", "}}")
            )

        if report_overrides:
            overrides["report"] = report_overrides

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
