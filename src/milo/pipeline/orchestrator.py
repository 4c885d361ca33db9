"""Batch report orchestration.

Runs one batch from start to finish: read every export, build the report
tables in canonical sample order, and write them to a workbook. Processing
is sequential; a file that cannot be read is logged and left out without
touching the tables built from the other files.
"""

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from milo.ingest.reader import InputReadError, SampleCsvReader
from milo.report.aggregate import (
    extract_labelled_chunks,
    extract_pivot_chunks,
    extract_sorted_chunks,
    extract_stats_chunk,
    extract_sum_chunk,
)
from milo.report.chunk import DataChunk
from milo.report.workbook import write_report
from milo.samples.order import SampleOrder
from milo.samples.records import OutputVal, SampleFile
from milo.samples.sample_id import guess_sample_id
from milo.setup_directories import get_log_path, get_report_path, setup_output_directories

if TYPE_CHECKING:
    from milo.schemas import InternalConfig

__all__ = ['ReportOrchestrator', 'run_report']

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\s]')


class ReportOrchestrator:
    """Turn a batch of CSV exports into one summary workbook.

    **Stages:**

    1. **Read**: each export is parsed into :class:`SampleFile` objects;
       the file's ordering is classified from its FileID.

    2. **Build**: for every configured sheet key (``stats``, ``sum``,
       ``sorted``, ``pivots``, ``labelled``) the matching table builder runs
       over the whole batch.

    3. **Write**: sheets are written in configured order to
       ``reports/<sample id>_summary.xlsx``.

    **Logging:**

    :meth:`run` sends output to both the console and a timestamped file
    in ``logs/``, named after the sample id shared by the input file names. Level comes from ``config.logging.level``.

    Example usage::

        from milo.schemas import resolve_config, ParamConfig
        from milo.pipeline import ReportOrchestrator

        config = resolve_config(ParamConfig(), {"base_dir": "/tmp/milo"})
        report_path = ReportOrchestrator(config).run(["plate1.csv", "plate2.csv"])
    """

    def __init__(self, config: "InternalConfig", output_dirs: Optional[dict] = None):
        self.config = config
        self.output_dirs = output_dirs or setup_output_directories(config.base_dir)
        self.reader = SampleCsvReader(config)
        self.output_val = OutputVal(config.report.output_val)

    def _setup_logging(self, sample_id: Optional[str] = None) -> Path:
        """Configure root logger with file and console handlers.

        ``sample_id``, when given, goes into the log file name.
        """
        log_level = getattr(logging, self.config.logging.level, logging.INFO)
        if sample_id:
            sample_id = _UNSAFE_FILENAME_CHARS.sub("_", sample_id)
        log_path = get_log_path(self.output_dirs, sample_id)

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        root = logging.getLogger()
        root.setLevel(log_level)
        for handler in root.handlers[:]:
            root.removeHandler(handler)

        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        logger.info("Logging: level=%s, file=%s", self.config.logging.level, log_path)
        return log_path

    def build_report(self, files: Sequence[SampleFile]) -> dict[str, list[DataChunk]]:
        """Build every configured sheet for ``files``.

        Returns
        -------
        dict
            Worksheet title -> chunks, in configured sheet order.
        """
        builders = {
            "stats": lambda: [extract_stats_chunk(files, self.output_val)],
            "sum": lambda: [extract_sum_chunk(files, self.output_val)],
            "sorted": lambda: extract_sorted_chunks(files),
            "pivots": lambda: extract_pivot_chunks(files),
            "labelled": lambda: extract_labelled_chunks(files),
        }

        report = {}
        for key in self.config.report.sheets:
            title = self.config.report.sheet_title(key)
            report[title] = builders[key]()
            logger.info("Sheet %s: %d chunks", title, len(report[title]))
        return report

    def report_filename(self, files: Sequence[SampleFile]) -> str:
        """Workbook file name from the batch's shared sample id."""
        sample_id = guess_sample_id([f.file_id for f in files])
        if not sample_id:
            logger.warning("No shared sample id in %d file ids, using '%s'",
                           len(files), self.config.report.fallback_sample_id)
            sample_id = self.config.report.fallback_sample_id
        sample_id = _UNSAFE_FILENAME_CHARS.sub("_", sample_id)
        return self.config.report.filename_pattern.format(sample_id=sample_id)

    def run(self, paths: Iterable, configure_logging: bool = True) -> Path:
        """Read, aggregate and write one batch.

        Parameters
        ----------
        paths : iterable of str or Path
            CSV exports, in the column order the report should use.
        configure_logging : bool, optional
            Install the file and console log handlers (default True).

        Returns
        -------
        Path
            Path of the written workbook.

        Raises
        ------
        ValueError
            If no input paths are given.
        InputReadError
            If none of the inputs could be read.
        """
        paths = [Path(p) for p in paths]
        if not paths:
            raise ValueError("No input files given")

        if configure_logging:
            # File ids are only known after reading; name the log after the inputs
            self._setup_logging(guess_sample_id([p.stem for p in paths]))

        logger.info("=" * 60)
        logger.info("Milo report: %d inputs, output value %s", len(paths), self.output_val.value)
        logger.info("=" * 60)

        files, failed = self.reader.load_many(paths)
        if failed and len(failed) == len(paths):
            raise InputReadError(f"None of the {len(paths)} inputs could be read")
        if failed:
            logger.warning("Skipped %d unreadable inputs: %s",
                           len(failed), ", ".join(p.name for p in failed))

        for sample_file in files:
            if sample_file.ordering is SampleOrder.UNKNOWN:
                logger.warning("No sample order in %s; rows left in export order",
                               sample_file.file_id)

        report = self.build_report(files)
        report_path = get_report_path(self.output_dirs, self.report_filename(files))
        return write_report(report, report_path, self.config)


def run_report(paths: Iterable, config: "InternalConfig",
               output_dirs: Optional[dict] = None) -> Path:
    """Plain-function entry point: one batch in, one workbook path out."""
    return ReportOrchestrator(config, output_dirs).run(paths)
