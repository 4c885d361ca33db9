"""
Directory setup for Milo reports.

Flat layout under one base directory:
- reports/: generated workbooks
- logs/: one log file per run, timestamped
"""

import logging
from pathlib import Path
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def setup_output_directories(base_output_dir=None):
    """
    Set up the output directory structure.

    Parameters
    ----------
    base_output_dir : str or Path, optional
        Base output directory. If None, ``./milo_output`` is used.

    Returns
    -------
    dict
        Dictionary with paths: 'base', 'reports', 'logs'
    """
    if base_output_dir is None:
        base_output_dir = Path.cwd() / "milo_output"

    base_output_dir = Path(base_output_dir).expanduser().resolve()

    directories = {
        "base": base_output_dir,
        "reports": base_output_dir / "reports",
        "logs": base_output_dir / "logs",
    }

    for path in directories.values():
        path.mkdir(parents=True, exist_ok=True)

    logger.debug("Output directories: %s", {k: str(v) for k, v in directories.items()})
    return directories


def get_report_path(output_dirs, filename):
    """
    Get the workbook path for a report.

    Parameters
    ----------
    output_dirs : dict
        Output directories from setup_output_directories()
    filename : str
        Workbook file name (e.g., 'ag05_summary.xlsx')

    Returns
    -------
    Path
        Full path: reports/filename
    """
    report_dir = Path(output_dirs["reports"])
    report_dir.mkdir(parents=True, exist_ok=True)
    return report_dir / filename


def get_log_path(output_dirs, sample_id=None):
    """
    Get a timestamped log file path.

    Parameters
    ----------
    output_dirs : dict
        Output directories from setup_output_directories()
    sample_id : str, optional
        Sample id to include in the file name

    Returns
    -------
    Path
        Full path: logs/milo_[SAMPLE_]YYYYMMDD_HHMMSS.log
    """
    log_dir = Path(output_dirs["logs"])
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")

    if sample_id:
        filename = f"milo_{sample_id}_{timestamp}.log"
    else:
        filename = f"milo_{timestamp}.log"

    return log_dir / filename
