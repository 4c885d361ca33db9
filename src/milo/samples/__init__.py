"""Sample records, orderings and identifiers.

- records: Measurement records and per-image sample files
- order: Sample-order classification and canonical reordering
- sample_id: Shared sample id inference
"""

from milo.samples.order import SampleOrder
from milo.samples.records import (
    INT_SENTINEL,
    FLOAT_SENTINEL,
    MeasurementRecord,
    SampleFile,
    OutputVal,
)
from milo.samples.sample_id import guess_sample_id

__all__ = [
    "SampleOrder",
    "INT_SENTINEL",
    "FLOAT_SENTINEL",
    "MeasurementRecord",
    "SampleFile",
    "OutputVal",
    "guess_sample_id",
]
