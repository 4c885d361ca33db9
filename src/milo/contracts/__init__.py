"""Report contracts: fail-fast enforcement of stage invariants.

Contracts fail immediately and loudly when a stage doesn't produce its
promised invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate report-building correctness
- Statistics let degenerate numbers (NaN, inf) through untouched
"""

from milo.contracts.failure import ContractViolation
from milo.contracts.base import require
from milo.contracts.ordering import assert_canonicalized
from milo.contracts.chunk import assert_chunk

__all__ = [
    "ContractViolation",
    "require",
    "assert_canonicalized",
    "assert_chunk",
]
