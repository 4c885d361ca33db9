"""Exception raised when report building breaks one of its own invariants."""


class ContractViolation(RuntimeError):
    """A report-building stage did not deliver what it promised.

    This is a bug in Milo, never a problem with the input: malformed
    measurements become sentinels and unreadable exports raise
    ``InputReadError``; configuration mistakes surface as pydantic
    ``ValidationError``.
    """
