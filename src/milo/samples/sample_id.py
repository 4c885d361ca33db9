"""Infer the sample identifier shared by a batch of image names.

Image names are dash-separated, e.g. ``ns-ag05-131-ab15.tif``: a prefix, the
sample id, a running image number and the orientation tag. All images of
one batch come from one sample, so the id is whatever every name has in
common.
"""

import logging
from typing import Optional, Sequence

from milo.samples.order import split_file_id

__all__ = ['guess_sample_id']

logger = logging.getLogger(__name__)


def guess_sample_id(filenames: Sequence[str]) -> Optional[str]:
    """Guess the sample id common to every name in ``filenames``.

    The first name is split on ``-`` and ``.``; a token is a match when it
    occurs as a substring of every name. A single match is returned as is.
    With several matches, the one containing a numeric character
    (``str.isnumeric``, which also accepts fractions like "½") is preferred;
    if there is no such token, or more than one, all matches are joined
    with ``-`` in their original order.

    Parameters
    ----------
    filenames : sequence of str
        File identifiers of one batch.

    Returns
    -------
    str or None
        The guessed id, or None for an empty batch or when no token is
        shared by every name.

    Examples
    --------
    >>> guess_sample_id(["ns-ag05-ab15.tif", "ns-ag05-ba51", "ns-ag05-ab15"])
    'ag05'
    >>> guess_sample_id(["ns-ag05-131-ab15.tif", "ns-ag05-132-ab15.tif"])
    'ns-ag05-ab15-tif'
    >>> guess_sample_id([]) is None
    True
    """
    if not filenames:
        return None

    full_matches = [
        token for token in split_file_id(filenames[0])
        if all(token in name for name in filenames)
    ]

    if not full_matches:
        logger.debug("No token shared by all %d file names", len(filenames))
        return None
    if len(full_matches) == 1:
        return full_matches[0]

    with_digits = [token for token in full_matches if any(ch.isnumeric() for ch in token)]
    if len(with_digits) == 1:
        return with_digits[0]
    return "-".join(full_matches)
