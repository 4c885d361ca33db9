"""Generic report tables with ragged rows.

A :class:`DataChunk` is a block of headers plus rows of cells (str, int or
float). Rows are allowed to differ in length: a file with fewer samples
than its neighbours simply leaves its later rows short.

Tables grow row by row as files contribute data. :func:`ensure_row` is the
one place that creates rows on demand; it pads each newly created row with
placeholders so that data appended afterwards lands in the right column
block.
"""

from typing import Union

__all__ = ['Cell', 'Header', 'DataChunk', 'PLACEHOLDER', 'ensure_row']

Cell = Union[str, int, float]
Header = tuple[str, int, bool]

# Cell written where a file has no value for a position
PLACEHOLDER = "??"


def ensure_row(rows: list, index: int, pad_width: int, placeholder=PLACEHOLDER) -> list:
    """Return ``rows[index]`` padded to at least ``pad_width`` cells.

    Missing rows up to ``index`` are created. A row shorter than
    ``pad_width``, new or seeded earlier with a label, is filled up with
    placeholders so the next value lands in the column block of the file
    that contributes it. Longer rows are left as they are.

    Parameters
    ----------
    rows : list of list
        Table rows, grown in place.
    index : int
        Zero-based row position to fetch.
    pad_width : int
        Number of cells the row must hold before the caller appends.
    placeholder : Cell, optional
        Padding cell (default ``"??"``).

    Returns
    -------
    list
        The row at ``index``.

    Examples
    --------
    >>> rows = [["1a", 10], ["1b", 11], ["2a"]]
    >>> ensure_row(rows, 2, 2).append(12)
    >>> ensure_row(rows, 3, 2).append(13)
    >>> rows
    [['1a', 10], ['1b', 11], ['2a', '??', 12], ['??', '??', 13]]
    """
    while len(rows) <= index:
        rows.append([placeholder] * pad_width)
    row = rows[index]
    if len(row) < pad_width:
        row.extend([placeholder] * (pad_width - len(row)))
    return row


class DataChunk:
    """One report table: header triples and ragged rows of cells.

    Each header is ``(name, decimal_places, is_percent)``; the renderer
    derives the column's number format from it.

    Examples
    --------
    >>> chunk = DataChunk()
    >>> chunk.add_header("Sample")
    >>> chunk.add_header("%Area2", 1)
    >>> chunk.rows.append(["1a", 42.5])
    >>> chunk.width
    2
    """

    def __init__(self, headers=None, rows=None):
        self.headers: list[Header] = list(headers or [])
        self.rows: list[list[Cell]] = [list(row) for row in rows or []]

    def add_header(self, name: str, decimal_places: int = 0, is_percent: bool = False) -> None:
        self.headers.append((name, decimal_places, is_percent))

    def row(self, index: int, pad_width: int) -> list:
        """Fetch a row, creating padded rows as needed (see :func:`ensure_row`)."""
        return ensure_row(self.rows, index, pad_width)

    @property
    def width(self) -> int:
        """Number of header columns."""
        return len(self.headers)

    def __eq__(self, other):
        if not isinstance(other, DataChunk):
            return NotImplemented
        return self.headers == other.headers and self.rows == other.rows

    def __repr__(self):
        return f"DataChunk(headers={len(self.headers)}, rows={len(self.rows)})"
