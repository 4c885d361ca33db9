"""Render report chunks into an .xlsx workbook.

Each sheet holds a vertical stack of chunks: a bold header row, the chunk's
rows, then a gap of blank rows. A column's number format comes from its
header triple: ``"0."`` followed by one ``0`` per decimal place, plus ``%``
for percent columns. Only float cells are number-formatted; integers and
strings use the plain centered style.

The xlsx format has no NaN or infinity, so non-finite floats are written as
a spreadsheet error value (``#DIV/0!`` by default).
"""

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Mapping, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

from milo.report.chunk import DataChunk

if TYPE_CHECKING:
    from milo.schemas import InternalConfig

__all__ = ['number_format', 'ReportWriter', 'write_report']

logger = logging.getLogger(__name__)


def number_format(decimal_places: int, is_percent: bool) -> str:
    """Excel number format for a header triple.

    Examples
    --------
    >>> number_format(1, False)
    '0.0'
    >>> number_format(2, True)
    '0.00%'
    """
    fmt = "0." + "0" * decimal_places
    if is_percent:
        fmt += "%"
    return fmt


class ReportWriter:
    """Write sheets of :class:`DataChunk` into one openpyxl workbook.

    Parameters
    ----------
    config : InternalConfig
        Fully validated runtime configuration (``workbook`` section).

    Examples
    --------
    >>> writer = ReportWriter(config)
    >>> writer.write_sheet("Sum", [sum_chunk])
    >>> writer.save("ag05_summary.xlsx")
    """

    def __init__(self, config: "InternalConfig"):
        self.chunk_gap_rows = config.workbook.chunk_gap_rows
        self.non_finite_text = config.workbook.non_finite_text
        self.alignment = Alignment(horizontal=config.workbook.align)
        self.header_font = Font(bold=config.workbook.header_bold)

        self.workbook = Workbook()
        # Drop the default sheet; every sheet is added by write_sheet
        self.workbook.remove(self.workbook.active)

    def write_sheet(self, title: str, chunks: Sequence[DataChunk]) -> None:
        """Append a worksheet holding ``chunks`` stacked top to bottom."""
        sheet = self.workbook.create_sheet(title=title)

        row = 1
        for chunk in chunks:
            for col, (name, _, _) in enumerate(chunk.headers, start=1):
                cell = sheet.cell(row=row, column=col, value=name)
                cell.font = self.header_font
                cell.alignment = self.alignment

            formats = [number_format(decimals, is_percent) for _, decimals, is_percent in chunk.headers]

            row += 1
            for cells in chunk.rows:
                for col, value in enumerate(cells, start=1):
                    self._write_cell(sheet, row, col, value, formats)
                row += 1

            row += self.chunk_gap_rows

        logger.debug("Sheet %s: %d chunks, %d rows", title, len(chunks), row - 1)

    def _write_cell(self, sheet, row: int, col: int, value, formats: list[str]) -> None:
        cell = sheet.cell(row=row, column=col)
        cell.alignment = self.alignment
        if isinstance(value, float):
            if math.isfinite(value):
                cell.value = value
                if col <= len(formats):
                    cell.number_format = formats[col - 1]
            else:
                cell.value = self.non_finite_text
        else:
            cell.value = value

    def save(self, path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.workbook.save(path)
        return path


def write_report(report: Mapping[str, Sequence[DataChunk]], path, config: "InternalConfig") -> Path:
    """Write an ordered ``{sheet title: chunks}`` mapping to ``path``.

    Returns
    -------
    Path
        The saved workbook path.
    """
    writer = ReportWriter(config)
    for title, chunks in report.items():
        writer.write_sheet(title, chunks)
    if not report:
        # openpyxl cannot save a workbook without sheets
        writer.workbook.create_sheet(title="Report")
    saved = writer.save(path)
    logger.info("Report written: %s (%d sheets)", saved, len(report))
    return saved
