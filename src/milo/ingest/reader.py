"""Read image-analysis CSV exports into sample files.

The export starts with a few lines of free text, followed by a header line
and one line per measured grid region::

    FileID,GridIdx,Area1,Area2,%Area2,...
    ns-ag05-131-ab15.tif,0,10512,3120,29.68,...
    ns-ag05-131-ab15.tif,1,9876,2954,29.91,...
    ns-ag05-132-ba51.tif,0,10233,3001,29.33,...

The header is the first line with more than ``min_header_columns`` fields.
Later lines with fewer than ``min_data_columns`` fields are skipped.
Consecutive lines sharing a FileID make up one :class:`SampleFile`.

Numbers that fail to parse are replaced by the configured sentinels
(``-2`` / ``-2.0``) instead of failing the file.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

import numpy as np
import pandas as pd

from milo.samples.records import MeasurementRecord, SampleFile

if TYPE_CHECKING:
    from milo.schemas import InternalConfig

__all__ = ['InputReadError', 'SampleCsvReader']

logger = logging.getLogger(__name__)

COLUMNS = ["file_id", "grid_index", "area1", "area2", "percent_area2"]


class InputReadError(OSError):
    """An input export could not be read or holds no header line."""


class SampleCsvReader:
    """Load CSV exports into :class:`SampleFile` objects.

    Parameters
    ----------
    config : InternalConfig
        Fully validated runtime configuration (``reader`` section).

    Notes
    -----
    - :meth:`read` raises :class:`InputReadError`; :meth:`load` logs the
      failure and returns None so one bad export does not stop a batch.
    - Whole-number grid indices only; ``"3.5"`` becomes the sentinel.
    - Areas are parsed as numbers and truncated toward zero.

    Examples
    --------
    >>> reader = SampleCsvReader(config)
    >>> files = reader.load("ag05_export.csv")
    >>> [f.ordering.name for f in files]
    ['AB15', 'BA51']
    """

    def __init__(self, config: "InternalConfig"):
        self.delimiter = config.reader.delimiter
        self.encoding = config.reader.encoding
        self.min_header_columns = config.reader.min_header_columns
        self.min_data_columns = config.reader.min_data_columns
        self.int_sentinel = config.reader.int_sentinel
        self.float_sentinel = config.reader.float_sentinel

    def read(self, path) -> list[SampleFile]:
        """Parse one export.

        Raises
        ------
        InputReadError
            If the file cannot be read or decoded, or has no header line.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(f"Cannot read {path}: {e}") from e

        lines = text.split("\n")
        header_idx = self._find_header(lines)
        if header_idx is None:
            raise InputReadError(
                f"No header line with more than {self.min_header_columns} columns in {path}"
            )

        rows = []
        for line_no, line in enumerate(lines[header_idx + 1:], start=header_idx + 2):
            cols = line.split(self.delimiter)
            if len(cols) < self.min_data_columns:
                if line.strip():
                    logger.debug("%s:%d: skipping short line %r", path.name, line_no, line)
                continue
            rows.append(cols[:len(COLUMNS)])

        if not rows:
            logger.warning("No data lines after the header in %s", path)
            return []

        frame = pd.DataFrame(rows, columns=COLUMNS)
        return self._group(self._parse(frame))

    def load(self, path) -> Optional[list[SampleFile]]:
        """Parse one export, logging and returning None on failure."""
        try:
            files = self.read(path)
        except InputReadError:
            logger.exception("Failed to read %s", path)
            return None

        n_records = sum(len(f.records) for f in files)
        logger.info("Read %s: %d files, %d records", Path(path).name, len(files), n_records)
        return files

    def load_many(self, paths: Iterable) -> tuple[list[SampleFile], list[Path]]:
        """Load several exports in order.

        Returns
        -------
        tuple
            ``(files, failed)``: the concatenated sample files of every
            readable export, and the paths that could not be read.
        """
        files, failed = [], []
        for path in paths:
            loaded = self.load(path)
            if loaded is None:
                failed.append(Path(path))
            else:
                files.extend(loaded)
        return files, failed

    def _find_header(self, lines: list[str]) -> Optional[int]:
        for idx, line in enumerate(lines):
            if len(line.split(self.delimiter)) > self.min_header_columns:
                return idx
        return None

    def _parse(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Convert text columns to numbers, substituting sentinels."""
        frame = frame.apply(lambda col: col.str.strip())

        grid = pd.to_numeric(frame["grid_index"], errors="coerce")
        frame["grid_index"] = grid.where((grid % 1) == 0, self.int_sentinel).astype("int64")

        for name in ("area1", "area2"):
            area = pd.to_numeric(frame[name], errors="coerce")
            area = area.where(np.isfinite(area), self.int_sentinel)
            frame[name] = np.trunc(area).astype("int64")

        percent = pd.to_numeric(frame["percent_area2"], errors="coerce")
        frame["percent_area2"] = percent.fillna(self.float_sentinel).astype("float64")
        return frame

    @staticmethod
    def _group(frame: pd.DataFrame) -> list[SampleFile]:
        """Split rows into runs of consecutive equal file ids."""
        if frame.empty:
            return []

        run_id = (frame["file_id"] != frame["file_id"].shift()).cumsum()
        files = []
        for _, run in frame.groupby(run_id, sort=True):
            records = [
                MeasurementRecord(
                    grid_index=int(row.grid_index),
                    area1=int(row.area1),
                    area2=int(row.area2),
                    percent_area2=float(row.percent_area2),
                )
                for row in run.itertuples(index=False)
            ]
            files.append(SampleFile(file_id=run["file_id"].iloc[0], records=records))
        return files
