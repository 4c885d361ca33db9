"""Measurement records and per-file sample groups.

A :class:`MeasurementRecord` is one grid region measured in one image; a
:class:`SampleFile` is the run of consecutive records the image analysis
exported for one image, together with the :class:`SampleOrder` derived from
the image's file identifier.

Unparseable numbers are carried as the sentinel ``-2`` / ``-2.0``. Records
never reject a sentinel: it flows through to the report, where it shows up
as an obviously wrong value rather than a missing row.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from milo.contracts import assert_canonicalized
from milo.samples.order import SampleOrder

__all__ = [
    'INT_SENTINEL',
    'FLOAT_SENTINEL',
    'MeasurementRecord',
    'SampleFile',
    'OutputVal',
]

INT_SENTINEL = -2
FLOAT_SENTINEL = -2.0


class MeasurementRecord(BaseModel):
    """One measured grid region.

    Attributes
    ----------
    grid_index : int
        Index of the grid cell within the image.
    area1 : int
        Kernel area in pixels.
    area2 : int
        Endosperm area in pixels.
    percent_area2 : float
        Endosperm area as a percentage of the kernel area.
    """

    grid_index: int = INT_SENTINEL
    area1: int = INT_SENTINEL
    area2: int = INT_SENTINEL
    percent_area2: float = FLOAT_SENTINEL

    model_config = ConfigDict(frozen=True, extra='forbid')


class SampleFile(BaseModel):
    """All records exported for one image, in the order they were exported.

    ``ordering`` is derived from ``file_id`` when the file is built and
    cannot be supplied or changed afterwards.

    Examples
    --------
    >>> f = SampleFile(file_id="ns-ag05-131-ab15.tif", records=[])
    >>> f.ordering
    <SampleOrder.AB15: 'ab15'>
    """

    file_id: str
    records: tuple[MeasurementRecord, ...] = ()
    ordering: SampleOrder = SampleOrder.UNKNOWN

    model_config = ConfigDict(frozen=True, extra='forbid')

    @model_validator(mode="before")
    @classmethod
    def derive_ordering(cls, data):
        """Classify the file from its identifier."""
        if isinstance(data, dict) and "file_id" in data:
            data = dict(data)
            data["ordering"] = SampleOrder.from_file_id(str(data["file_id"]))
        return data

    def labels(self) -> list[str]:
        """Position label of every record in export order."""
        return [self.ordering.label_for(i) for i in range(len(self.records))]

    def canonical_records(self) -> list[MeasurementRecord]:
        """Records permuted into canonical AB15 order."""
        reordered = self.ordering.to_ab15(self.records)
        assert_canonicalized(self.records, reordered)
        return reordered


class OutputVal(str, Enum):
    """Which measured quantity feeds a single-value table."""

    KERNEL_AREA = "kernel_area"
    ENDOSPERM_AREA = "endosperm_area"
    PERCENT_AREA = "percent_area"

    @property
    def header(self) -> str:
        """Column heading used in the exported spreadsheet."""
        return _HEADERS[self]

    @property
    def field(self) -> str:
        """Name of the MeasurementRecord attribute holding the quantity."""
        return _FIELDS[self]

    def value_of(self, record: MeasurementRecord) -> float:
        """The selected quantity of ``record`` as a float."""
        return float(getattr(record, self.field))


_HEADERS = {
    OutputVal.KERNEL_AREA: "Area1",
    OutputVal.ENDOSPERM_AREA: "Area2",
    OutputVal.PERCENT_AREA: "%Area2",
}

_FIELDS = {
    OutputVal.KERNEL_AREA: "area1",
    OutputVal.ENDOSPERM_AREA: "area2",
    OutputVal.PERCENT_AREA: "percent_area2",
}
