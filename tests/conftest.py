"""Root-level pytest fixtures for the Milo test suite.

Provides shared configuration fixtures following the Pydantic-based
configuration layers, plus builders for measurement records and sample files.
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from milo.schemas import ParamConfig, UserConfig, resolve_config
from milo.samples import MeasurementRecord, SampleFile


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Examples
    --------
    >>> def test_area1(make_config):
    ...     config = make_config(output_val="area1")
    ...     assert config.report.output_val == "kernel_area"
    """
    def _make(**user_overrides):
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def output_dirs(temp_dir):
    """Standard Milo output directory structure."""
    dirs = {
        "base": temp_dir,
        "reports": temp_dir / "reports",
        "logs": temp_dir / "logs",
    }
    for d in dirs.values():
        d.mkdir(parents=True, exist_ok=True)
    return dirs


# =============================================================================
# Sample Fixtures
# =============================================================================

def record(n, area1=None, area2=None, percent=None):
    """Record whose fields are derived from ``n`` unless given."""
    return MeasurementRecord(
        grid_index=n,
        area1=100 + n if area1 is None else area1,
        area2=50 + n if area2 is None else area2,
        percent_area2=float(n) if percent is None else percent,
    )


@pytest.fixture
def make_file():
    """Factory for sample files.

    ``make_file("ns-ag05-131-ab15.tif", 10)`` builds a file with records
    0..9; ``make_file(fid, percents=[...])`` builds one record per value.
    """
    def _make(file_id, n_records=10, percents=None):
        if percents is not None:
            records = [record(i, percent=p) for i, p in enumerate(percents)]
        else:
            records = [record(i) for i in range(n_records)]
        return SampleFile(file_id=file_id, records=records)

    return _make


@pytest.fixture
def make_record():
    """Factory for single measurement records (see ``record``)."""
    return record
