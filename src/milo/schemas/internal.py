"""InternalConfig: the resolved settings every runtime module reads.

Produced only by :func:`milo.schemas.resolve_config`. Every field is
required, so readers, builders and the workbook writer take values straight
from the model instead of carrying their own defaults.
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict, field_validator, model_validator
from milo.schemas.base import MiloBaseModel
from milo.schemas.param import (
    OutputValName, SheetKey, LogLevel, check_filename_pattern, check_sheet_titles,
)


class InternalReaderConfig(MiloBaseModel):
    """CSV export parsing."""
    delimiter: str
    encoding: str
    min_header_columns: int
    min_data_columns: int
    int_sentinel: int
    float_sentinel: float

    model_config = MiloBaseModel.model_config.copy()
    model_config.update({"str_strip_whitespace": False})


class InternalReportConfig(MiloBaseModel):
    """Which sheets and quantity go into the workbook, and its file name."""
    output_val: OutputValName
    sheets: list[SheetKey] = Field(min_length=1)
    sheet_names: dict[SheetKey, str]
    filename_pattern: str
    fallback_sample_id: str

    @field_validator("sheet_names")
    @classmethod
    def check_sheet_names(cls, v):
        check_sheet_titles(v.items())
        return v

    @field_validator("filename_pattern")
    @classmethod
    def check_pattern(cls, v):
        return check_filename_pattern(v)

    @model_validator(mode="after")
    def check_selected_titles(self):
        """Each selected sheet must land in its own worksheet."""
        check_sheet_titles((key, self.sheet_title(key)) for key in self.sheets)
        return self

    def sheet_title(self, key: str) -> str:
        """Worksheet title for a sheet key (the capitalized key if unnamed)."""
        return self.sheet_names.get(key, key.capitalize())


class InternalWorkbookConfig(MiloBaseModel):
    """Cell styling and layout of the written workbook."""
    chunk_gap_rows: int
    header_bold: bool
    align: Literal["center", "left", "right", "general"]
    non_finite_text: str


class InternalLoggingConfig(MiloBaseModel):
    """Root logger level for a run."""
    level: LogLevel


class InternalConfig(MiloBaseModel):
    """Resolved, frozen configuration for one report run.

    Examples
    --------
    >>> config = resolve_config(ParamConfig(), {"OUTPUT_VAL": "area2"})
    >>> config.report.output_val
    'endosperm_area'
    >>> config.reader.float_sentinel
    -2.0
    """

    base_dir: Optional[str] = None
    reader: InternalReaderConfig
    report: InternalReportConfig
    workbook: InternalWorkbookConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,
    )
