"""The one enforcement primitive every report contract is built on."""

from milo.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Raise :class:`ContractViolation` with ``message`` unless ``condition`` holds.

    Examples
    --------
    >>> require(len(reordered) == len(records), "Ordering contract: length changed")
    """
    if not condition:
        raise ContractViolation(message)
