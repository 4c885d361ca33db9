"""Report tables built from a batch of sample files.

Every cross-file table is laid out in canonical sample order: the rows are
seeded with the AB15 labels (AB110 when the batch holds ten-sample plates),
each file's records are put in AB15 order with
:meth:`SampleFile.canonical_records`, and each file appends one block of
columns to the rows. Before a file appends to a row, :func:`ensure_row`
pads the row with placeholders up to that file's column block, so a file
longer than an earlier one never slides into the earlier file's columns.
Rows past the last file's data stay short.

Entry points
------------
extract_labelled_chunks
    One detail table per file, in the file's own export order.
extract_sorted_chunks
    Area1/Area2/%Area2 side by side, one table per ordering in the batch.
extract_pivot_chunks
    One table per measured quantity, one column per file.
extract_sum_chunk
    One quantity across files with per-row mean, std and CV.
extract_stats_chunk
    Per-position mean, std and CV plus a/b split statistics.
"""

import logging
from typing import Optional, Sequence

from milo.contracts import assert_chunk
from milo.report import stats
from milo.report.chunk import PLACEHOLDER, DataChunk, ensure_row
from milo.samples.order import SampleOrder
from milo.samples.records import OutputVal, SampleFile
from milo.samples.sample_id import guess_sample_id

__all__ = [
    'canonical_labels',
    'extract_labelled_chunks',
    'extract_sorted_chunks',
    'extract_pivot_chunks',
    'extract_sum_chunk',
    'extract_stats_chunk',
]

logger = logging.getLogger(__name__)

# Quantity order of the pivot tables
PIVOT_ORDER = (OutputVal.PERCENT_AREA, OutputVal.KERNEL_AREA, OutputVal.ENDOSPERM_AREA)

# Stats vector entry for a file with no record at a position
MISSING_VALUE = -1.0


def canonical_labels(files: Sequence[SampleFile]) -> tuple[str, ...]:
    """Row label frame for a batch: AB110 if any file is a ten-sample plate."""
    if any(f.ordering.is_long for f in files):
        return SampleOrder.AB110.labels()
    return SampleOrder.AB15.labels()


def _seeded_chunk(files: Sequence[SampleFile], prefix: str = "") -> DataChunk:
    return DataChunk(rows=[[prefix + label] for label in canonical_labels(files)])


def _floats(cells) -> list[float]:
    return [c for c in cells if isinstance(c, float)]


def extract_labelled_chunks(files: Sequence[SampleFile]) -> list[DataChunk]:
    """One detail table per file, rows in export order.

    Rows carry the file's own position labels (no reordering), so a
    misclassified file shows up as mislabelled rows. Records past the end of
    the label sequence are labelled ``"???"``.
    """
    chunks = []
    for sample_file in files:
        chunk = DataChunk()
        chunk.add_header("Sample")
        chunk.add_header("FileID")
        chunk.add_header("GridIdx")
        chunk.add_header("Area1")
        chunk.add_header("Area2")
        chunk.add_header("%Area2", 1)

        for label, record in zip(sample_file.labels(), sample_file.records):
            chunk.rows.append([
                label,
                sample_file.file_id,
                record.grid_index,
                record.area1,
                record.area2,
                record.percent_area2,
            ])

        assert_chunk(chunk)
        chunks.append(chunk)
    return chunks


def _sorted_chunk(files: Sequence[SampleFile]) -> DataChunk:
    chunk = _seeded_chunk(files)
    chunk.add_header("Sample")
    for _ in files:
        chunk.add_header("")
        chunk.add_header("Area1")
        chunk.add_header("Area2")
        chunk.add_header("%Area2", 1)

    trailer = ["FileID"]
    for col_idx, sample_file in enumerate(files):
        pad_width = 1 + 4 * col_idx
        for row_idx, record in enumerate(sample_file.canonical_records()):
            chunk.row(row_idx, pad_width).extend(
                ["", record.area1, record.area2, record.percent_area2]
            )
        trailer.extend(["", "", sample_file.file_id, ""])
    chunk.rows.append(trailer)
    return chunk


def extract_sorted_chunks(files: Sequence[SampleFile]) -> list[DataChunk]:
    """Area1, Area2 and %Area2 of every file side by side.

    Files are grouped by ordering and each group gets its own table, so
    orderings can be compared against each other after canonicalization.
    Groups appear in :class:`SampleOrder` declaration order.
    """
    chunks = []
    for ordering in SampleOrder:
        group = [f for f in files if f.ordering == ordering]
        if not group:
            continue
        logger.debug("Sorted table for %s: %d files", ordering.name, len(group))
        chunk = _sorted_chunk(group)
        assert_chunk(chunk)
        chunks.append(chunk)
    return chunks


def _pivot_chunk(files: Sequence[SampleFile], output_val: OutputVal) -> DataChunk:
    chunk = _seeded_chunk(files)
    chunk.add_header("Sample")
    for _ in files:
        chunk.add_header(output_val.header, 1)

    trailer = ["FileID"]
    for col_idx, sample_file in enumerate(files):
        for row_idx, record in enumerate(sample_file.canonical_records()):
            chunk.row(row_idx, col_idx + 1).append(getattr(record, output_val.field))
        trailer.append(sample_file.file_id)
    chunk.rows.append(trailer)
    return chunk


def extract_pivot_chunks(
    files: Sequence[SampleFile],
    output_vals: Optional[Sequence[OutputVal]] = None,
) -> list[DataChunk]:
    """One table per measured quantity with a column per file.

    Parameters
    ----------
    files : sequence of SampleFile
        Batch, in column order.
    output_vals : sequence of OutputVal, optional
        Quantities to tabulate. Defaults to %Area2, Area1, Area2.
    """
    chunks = []
    for output_val in output_vals or PIVOT_ORDER:
        chunk = _pivot_chunk(files, OutputVal(output_val))
        assert_chunk(chunk)
        chunks.append(chunk)
    return chunks


def extract_sum_chunk(files: Sequence[SampleFile], output_val: OutputVal) -> DataChunk:
    """One quantity of every file plus per-row Avg, Std and CV.

    Every row is padded to one cell per file before its statistics are
    appended, so Avg, Std and CV always sit in the same columns. Statistics
    run over the numeric cells after the label column; padding placeholders
    are skipped. A row without numbers gets NaN statistics.
    """
    output_val = OutputVal(output_val)
    chunk = _seeded_chunk(files)
    chunk.add_header("Sample")
    for _ in files:
        chunk.add_header(output_val.header, 1)
    chunk.add_header("")
    chunk.add_header("Avg", 1)
    chunk.add_header("Std", 2)
    chunk.add_header("CV", 2, True)

    for col_idx, sample_file in enumerate(files):
        for row_idx, record in enumerate(sample_file.canonical_records()):
            chunk.row(row_idx, col_idx + 1).append(output_val.value_of(record))

    value_width = 1 + len(files)
    for row in chunk.rows:
        if len(row) < value_width:
            row.extend([PLACEHOLDER] * (value_width - len(row)))
        values = _floats(row[1:])
        row.extend(["", stats.avg(values), stats.std(values), stats.cv(values)])

    assert_chunk(chunk)
    return chunk


def extract_stats_chunk(files: Sequence[SampleFile], output_val: OutputVal) -> DataChunk:
    """Per-position statistics across files plus a/b split statistics.

    Rows are labelled ``<sample id>-<position>`` when the file ids share a
    sample id. Each position that received data gets Avg, Std and CV of its
    values across files. Every "a" row (even index) additionally gets the
    split statistics against the following "b" row, or four blank cells
    when the batch has no "b" row for it.

    A file with no record at a position contributes -1.0 to that position's
    vector, and the -1.0 is counted in the statistics like a measured value.
    Batches mixing plate sizes therefore get skewed statistics on the
    positions only the larger plates reach.
    """
    output_val = OutputVal(output_val)
    sample_id = guess_sample_id([f.file_id for f in files])
    chunk = _seeded_chunk(files, f"{sample_id}-" if sample_id else "")
    chunk.add_header("Sample", 1)
    chunk.add_header("Avg", 1)
    chunk.add_header("Std", 1)
    chunk.add_header("CV", 1, True)
    chunk.add_header("", 1)
    chunk.add_header("Split Diff", 1)
    chunk.add_header("Split Std", 1)
    chunk.add_header("Split Avg", 1)
    chunk.add_header("Split CV", 1, True)

    # One vector of values per canonical position, one entry per file,
    # -1.0 where a file has no record there
    per_position = []
    for col_idx, sample_file in enumerate(files):
        for row_idx, record in enumerate(sample_file.canonical_records()):
            cells = ensure_row(per_position, row_idx, col_idx, placeholder=MISSING_VALUE)
            cells.append(output_val.value_of(record))

    for i, values in enumerate(per_position):
        row = chunk.row(i, 1)
        row.extend([stats.avg(values), stats.std(values), stats.cv(values), ""])

        if i % 2 == 0:
            if i + 1 < len(per_position):
                row.extend(stats.split_stats(values, per_position[i + 1]))
            else:
                row.extend(["", "", "", ""])

    logger.debug("Stats table: %d positions, sample id %r", len(per_position), sample_id)
    assert_chunk(chunk)
    return chunk
