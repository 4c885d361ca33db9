"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., BASE_DIR → base_dir, OUTPUT_VAL → output_val).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient to accept
both uppercase and lowercase keys and the several spellings lab staff use
for the measured quantities ("%Area2", "area1", "kernel", ...).
"""

from typing import Optional
from pydantic import Field, field_validator
from milo.schemas.base import MiloBaseModel


_OUTPUT_VAL_ALIASES = {
    "kernel_area": "kernel_area",
    "kernelarea": "kernel_area",
    "kernel": "kernel_area",
    "area1": "kernel_area",
    "area_1": "kernel_area",
    "endosperm_area": "endosperm_area",
    "endospermarea": "endosperm_area",
    "endosperm": "endosperm_area",
    "area2": "endosperm_area",
    "area_2": "endosperm_area",
    "percent_area": "percent_area",
    "percentarea": "percent_area",
    "percent": "percent_area",
    "%area2": "percent_area",
    "perc_area2": "percent_area",
    "percent_area2": "percent_area",
}


def normalize_output_val(v):
    """Map the accepted spellings of a measured quantity to its config name.

    Unknown spellings are returned lowercased so that validation against
    the literal set reports them.
    """
    if isinstance(v, str):
        key = v.lower().strip().replace(" ", "_").replace("-", "_")
        return _OUTPUT_VAL_ALIASES.get(key, key)
    return v


class UserReaderConfig(MiloBaseModel):
    """User-facing reader config."""
    model_config = MiloBaseModel.model_config.copy()
    # Tab delimiters must survive
    model_config.update({"str_strip_whitespace": False})

    delimiter: Optional[str] = None
    encoding: Optional[str] = None
    min_header_columns: Optional[int] = None
    min_data_columns: Optional[int] = None
    int_sentinel: Optional[int] = None
    float_sentinel: Optional[float] = None


class UserReportConfig(MiloBaseModel):
    """User-facing report config."""
    output_val: Optional[str] = None
    sheets: Optional[list[str]] = None
    sheet_names: Optional[dict[str, str]] = None
    filename_pattern: Optional[str] = None
    fallback_sample_id: Optional[str] = None

    @field_validator("output_val", mode="before")
    @classmethod
    def normalize_output(cls, v):
        return normalize_output_val(v)

    @field_validator("sheets", mode="before")
    @classmethod
    def normalize_sheets(cls, v):
        """Normalize sheet keys to lowercase."""
        if isinstance(v, (list, tuple)):
            return [s.lower().strip() if isinstance(s, str) else s for s in v]
        return v


class UserWorkbookConfig(MiloBaseModel):
    """User-facing workbook config."""
    chunk_gap_rows: Optional[int] = None
    header_bold: Optional[bool] = None
    align: Optional[str] = None
    non_finite_text: Optional[str] = None


class UserConfig(MiloBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    Usage
    -----
        user_cfg = UserConfig(
            base_dir="~/milo_output",
            output_val="%Area2",
        )

        # Or with legacy uppercase keys from a config file:
        user_cfg = UserConfig.model_validate({
            "BASE_DIR": "~/milo_output",
            "OUTPUT_VAL": "area1",
            "SHEETS": ["Stats", "Sum"],
        })

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Top-level operational settings
    base_dir: Optional[str] = Field(None, alias="BASE_DIR")
    log_level: Optional[str] = Field(None, alias="LOG_LEVEL")

    # Report settings (flat aliases)
    output_val: Optional[str] = Field(None, alias="OUTPUT_VAL")
    sheets: Optional[list[str]] = Field(None, alias="SHEETS")
    filename_pattern: Optional[str] = Field(None, alias="FILENAME_PATTERN")

    # Nested overrides (advanced users)
    reader: Optional[UserReaderConfig] = None
    report: Optional[UserReportConfig] = None
    workbook: Optional[UserWorkbookConfig] = None

    model_config = MiloBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("output_val", mode="before")
    @classmethod
    def normalize_output(cls, v):
        return normalize_output_val(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Normalize log levels to uppercase."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("sheets", mode="before")
    @classmethod
    def normalize_sheets(cls, v):
        """Normalize sheet keys to lowercase."""
        if isinstance(v, (list, tuple)):
            return [s.lower().strip() if isinstance(s, str) else s for s in v]
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        # Reader section
        if self.reader is not None:
            reader = self.reader.model_dump(exclude_none=True)
            if reader:
                overrides["reader"] = reader

        # Report section
        report = {}
        if self.output_val is not None:
            report["output_val"] = self.output_val
        if self.sheets is not None:
            report["sheets"] = self.sheets
        if self.filename_pattern is not None:
            report["filename_pattern"] = self.filename_pattern

        # Merge with explicit report config
        if self.report is not None:
            report.update(self.report.model_dump(exclude_none=True))

        if report:
            overrides["report"] = report

        # Workbook section
        if self.workbook is not None:
            workbook = self.workbook.model_dump(exclude_none=True)
            if workbook:
                overrides["workbook"] = workbook

        return overrides
