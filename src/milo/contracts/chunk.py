"""Report chunk contract.

Enforces the guarantee that every chunk handed to the renderer carries
well-formed header triples and only renderable cells. Rows may be ragged.
"""

from milo.contracts.base import require


def assert_chunk(chunk) -> None:
    """Enforce the report chunk contract.

    Called before a chunk leaves the aggregation layer.

    Parameters
    ----------
    chunk : DataChunk
        Table produced by one of the ``extract_*`` entry points.

    Raises
    ------
    ContractViolation
        If a header is not a ``(name, decimal_places, is_percent)`` triple
        or a cell is not a str, int or float.
    """
    for index, header in enumerate(chunk.headers):
        name, decimals, is_percent = header
        require(
            isinstance(name, str),
            f"Chunk contract violated: header {index} name is {type(name).__name__}, expected str"
        )
        require(
            isinstance(decimals, int) and not isinstance(decimals, bool) and decimals >= 0,
            f"Chunk contract violated: header {index} decimal places must be a non-negative int, got {decimals!r}"
        )
        require(
            isinstance(is_percent, bool),
            f"Chunk contract violated: header {index} percent flag must be bool, got {is_percent!r}"
        )

    for row_idx, row in enumerate(chunk.rows):
        for col_idx, cell in enumerate(row):
            require(
                isinstance(cell, (str, int, float)) and not isinstance(cell, bool),
                f"Chunk contract violated: cell ({row_idx}, {col_idx}) is {type(cell).__name__}"
            )
