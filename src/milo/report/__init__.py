"""Report building modules.

- chunk: Ragged report tables
- stats: Mean, population std and coefficient of variation
- aggregate: Report tables built from a batch of sample files
- workbook: Spreadsheet rendering
"""

from milo.report.chunk import DataChunk, ensure_row
from milo.report.aggregate import (
    extract_labelled_chunks,
    extract_sorted_chunks,
    extract_pivot_chunks,
    extract_sum_chunk,
    extract_stats_chunk,
)
from milo.report.workbook import ReportWriter, write_report

__all__ = [
    "DataChunk",
    "ensure_row",
    "extract_labelled_chunks",
    "extract_sorted_chunks",
    "extract_pivot_chunks",
    "extract_sum_chunk",
    "extract_stats_chunk",
    "ReportWriter",
    "write_report",
]
