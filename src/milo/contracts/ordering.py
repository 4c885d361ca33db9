"""Canonical reordering contract.

Enforces the guarantee that reordering a file into canonical sample
order only permutes its records: nothing is dropped, duplicated or invented.
"""

from collections import Counter

from milo.contracts.base import require


def assert_canonicalized(original, reordered) -> None:
    """Enforce the canonical reordering contract.

    Parameters
    ----------
    original : sequence of MeasurementRecord
        Records in the file's native order.

    reordered : sequence of MeasurementRecord
        Output of ``SampleOrder.to_ab15()``.

    Raises
    ------
    ContractViolation
        If the reordering is not a permutation of the input.
    """
    require(
        len(reordered) == len(original),
        f"Ordering contract violated: {len(original)} records in, {len(reordered)} out"
    )
    require(
        Counter(reordered) == Counter(original),
        "Ordering contract violated: reordered records are not a permutation of the input"
    )
