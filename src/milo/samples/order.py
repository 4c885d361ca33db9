"""Sample-order classification and canonical reordering.

Each scanned plate holds five (or ten) split samples, every sample cut into
an "a" and a "b" half. Depending on how a run was set up, the image analysis
exports the halves top-to-bottom or bottom-to-top, and a-first or b-first.
The run's orientation is encoded in the image file name, e.g.
``ns-ag05-131-ab15.tif`` or ``ns-ag05-132-ba51.tif``.

This module turns a file identifier into a :class:`SampleOrder` and
permutes a file's records into the canonical AB15 layout
(1a, 1b, 2a, 2b, ...) so files from different runs line up row by row.

All per-variant behavior lives in three lookup tables at the bottom of the
module: the label sequence, the indicator tokens (in precedence order) and
the reordering strategy.
"""

import logging
import re
from enum import Enum
from typing import Sequence

__all__ = ['SampleOrder', 'split_file_id', 'UNLABELLED']

logger = logging.getLogger(__name__)

# Label shown for records past the end of an ordering's label sequence
UNLABELLED = "???"

_TOKEN_SEPARATORS = re.compile(r"[-.]")


def split_file_id(file_id: str) -> list[str]:
    """Split a file identifier into its ``-``/``.`` separated tokens."""
    return _TOKEN_SEPARATORS.split(file_id)


class SampleOrder(str, Enum):
    """Physical row order of the samples in one exported file.

    The first two letters give which half comes first within a sample
    (a-first or b-first); the digits give the direction the samples run
    (1 to 5, 5 to 1, 1 to 10, 10 to 1).

    Examples
    --------
    >>> SampleOrder.from_file_id("ns-ag05-132-ba51.tif")
    <SampleOrder.BA51: 'ba51'>
    >>> SampleOrder.BA51.labels()[:4]
    ('5b', '5a', '4b', '4a')
    """

    AB15 = "ab15"
    BA51 = "ba51"
    AB51 = "ab51"
    BA15 = "ba15"
    AB110 = "ab110"
    BA101 = "ba101"
    UNKNOWN = "unknown"

    @classmethod
    def from_file_id(cls, file_id: str) -> "SampleOrder":
        """Classify a file identifier.

        The identifier is split on ``-`` and ``.``; each variant is found
        when any of its indicator tokens appears among the tokens. Tokens
        are compared exactly, so ``BA51`` is not ``ba51``. When several
        variants are found the first one in precedence order wins: AB15, BA51, AB110, BA101, AB51, BA15.
        Identifiers carrying no indicator are UNKNOWN.
        """
        tokens = set(split_file_id(file_id))
        for order, indicators in _INDICATORS:
            if tokens & indicators:
                logger.debug("Classified %s as %s", file_id, order.name)
                return order
        logger.debug("No ordering indicator in %s", file_id)
        return cls.UNKNOWN

    def labels(self) -> tuple[str, ...]:
        """Position labels in this ordering's physical row order."""
        return _LABELS[self]

    def label_for(self, index: int) -> str:
        """Label of the record at ``index``, ``"???"`` past the last label."""
        labels = _LABELS[self]
        return labels[index] if 0 <= index < len(labels) else UNLABELLED

    @property
    def is_long(self) -> bool:
        """True for the ten-sample (20-position) plate layouts."""
        return self in (SampleOrder.AB110, SampleOrder.BA101)

    def to_ab15(self, records: Sequence) -> list:
        """Reorder records from this ordering into canonical AB15 order.

        AB15/AB110 and UNKNOWN are left as they are, BA51/BA101 are
        reversed, and AB51/BA15 have each adjacent pair swapped (BA15 is
        then reversed as a whole as well).

        Notes
        -----
        The AB51 branch does not end in ascending order: ``5a,5b,4a,4b,...``
        comes out as ``5b,5a,4b,4a,...``. Downstream tables rely on the
        current behavior, so it is kept as is.
        """
        return _STRATEGIES[self](records)


# =============================================================================
# Lookup tables
# =============================================================================

def _ascending(n_samples: int) -> tuple[str, ...]:
    return tuple(f"{i}{half}" for i in range(1, n_samples + 1) for half in "ab")


def _identity(records: Sequence) -> list:
    return list(records)


def _reverse(records: Sequence) -> list:
    return list(reversed(records))


def _pair_swap(records: Sequence) -> list:
    # A trailing unpaired record keeps its place
    swapped = []
    for i in range(0, len(records), 2):
        swapped.extend(reversed(records[i:i + 2]))
    return swapped


def _pair_swap_reversed(records: Sequence) -> list:
    return _reverse(_pair_swap(records))


_LABELS = {
    SampleOrder.AB15: _ascending(5),
    SampleOrder.BA51: tuple(reversed(_ascending(5))),
    SampleOrder.AB51: tuple(f"{i}{half}" for i in range(5, 0, -1) for half in "ab"),
    SampleOrder.BA15: tuple(f"{i}{half}" for i in range(1, 6) for half in "ba"),
    SampleOrder.AB110: _ascending(10),
    SampleOrder.BA101: tuple(reversed(_ascending(10))),
    SampleOrder.UNKNOWN: ("??",) * 10,
}

# Precedence order: first variant with a matching token wins
_INDICATORS = (
    (SampleOrder.AB15, frozenset({"ab15"})),
    (SampleOrder.BA51, frozenset({"ba51"})),
    (SampleOrder.AB110, frozenset({"ab110"})),
    (SampleOrder.BA101, frozenset({"ba101"})),
    (SampleOrder.AB51, frozenset({"ab51", "up", "uc"})),
    (SampleOrder.BA15, frozenset({"ba15", "dn", "dc"})),
)

_STRATEGIES = {
    SampleOrder.AB15: _identity,
    SampleOrder.AB110: _identity,
    SampleOrder.BA51: _reverse,
    SampleOrder.BA101: _reverse,
    SampleOrder.AB51: _pair_swap,
    SampleOrder.BA15: _pair_swap_reversed,
    SampleOrder.UNKNOWN: _identity,
}
