"""ParamConfig: Expert defaults for Milo report generation.

This module defines the complete default configuration. ALL tunable
parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from string import Formatter
from typing import Iterable, Literal, Optional
from pydantic import Field, field_validator
from milo.schemas.base import MiloBaseModel


OutputValName = Literal["kernel_area", "endosperm_area", "percent_area"]
SheetKey = Literal["stats", "sum", "sorted", "pivots", "labelled"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_SHEETS = ["stats", "sum", "sorted", "pivots", "labelled"]
DEFAULT_SHEET_NAMES = {
    "stats": "Stats",
    "sum": "Sum",
    "sorted": "Sorted",
    "pivots": "Pivots",
    "labelled": "Labelled",
}

# Fields a report filename pattern may use
FILENAME_FIELDS = ("sample_id",)


def check_filename_pattern(pattern: str) -> str:
    """Reject filename patterns that ``str.format(sample_id=...)`` cannot fill.

    Raises
    ------
    ValueError
        On malformed braces or a field other than ``{sample_id}``.
    """
    fields = [name for _, name, _, _ in Formatter().parse(pattern) if name is not None]
    unknown = [name for name in fields if name not in FILENAME_FIELDS]
    if unknown:
        raise ValueError(
            f"Unknown field(s) {unknown} in filename pattern {pattern!r}; "
            f"allowed: {list(FILENAME_FIELDS)}"
        )
    return pattern


def check_sheet_titles(titles: Iterable[tuple[str, str]]) -> None:
    """Raise ValueError unless every ``(key, title)`` pair has a usable, distinct title.

    Worksheet titles hold 1 to 31 characters. Two keys sharing a title,
    compared case-insensitively as spreadsheet programs do, would write
    into the same worksheet.
    """
    seen = {}
    for key, title in titles:
        if not title or len(title) > 31:
            raise ValueError(f"Invalid worksheet title for '{key}': {title!r}")
        other = seen.setdefault(title.casefold(), key)
        if other != key:
            raise ValueError(f"Sheets '{other}' and '{key}' share the worksheet title {title!r}")


# =============================================================================
# Nested Configuration Models
# =============================================================================

class ReaderConfig(MiloBaseModel):
    """CSV export reader configuration."""
    delimiter: str = Field(",", min_length=1, max_length=1)
    encoding: str = "utf-8"
    min_header_columns: int = Field(5, ge=1, description="Header is the first line with MORE columns than this")
    min_data_columns: int = Field(5, ge=5, description="Data lines with fewer columns are skipped")
    int_sentinel: int = Field(-2, description="Substituted for unparseable integer fields")
    float_sentinel: float = Field(-2.0, description="Substituted for unparseable float fields")

    model_config = MiloBaseModel.model_config.copy()
    # Tab delimiters must survive
    model_config.update({"str_strip_whitespace": False})

    @field_validator("float_sentinel", mode="before")
    @classmethod
    def coerce_float_sentinel(cls, v):
        """Allow int or float for the float sentinel."""
        return float(v)


class ReportConfig(MiloBaseModel):
    """Report content configuration."""
    output_val: OutputValName = "percent_area"
    sheets: list[SheetKey] = Field(default_factory=lambda: list(DEFAULT_SHEETS))
    sheet_names: dict[SheetKey, str] = Field(default_factory=lambda: dict(DEFAULT_SHEET_NAMES))
    filename_pattern: str = "{sample_id}_summary.xlsx"
    fallback_sample_id: str = Field("milo", min_length=1)

    @field_validator("sheet_names")
    @classmethod
    def check_sheet_names(cls, v):
        """Worksheet titles are limited to 31 characters and must be distinct."""
        check_sheet_titles(v.items())
        return v

    @field_validator("filename_pattern")
    @classmethod
    def check_pattern(cls, v):
        return check_filename_pattern(v)


class WorkbookConfig(MiloBaseModel):
    """Spreadsheet rendering configuration."""
    chunk_gap_rows: int = Field(2, ge=0)
    header_bold: bool = True
    align: Literal["center", "left", "right", "general"] = "center"
    non_finite_text: str = "#DIV/0!"


class LoggingConfig(MiloBaseModel):
    """Logging configuration."""
    level: LogLevel = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(MiloBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all report parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    base_dir: Optional[str] = None
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    workbook: WorkbookConfig = Field(default_factory=WorkbookConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
