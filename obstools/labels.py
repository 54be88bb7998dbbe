"""Label bookkeeping for the stratified and balanced algorithms."""

from collections import Counter

import numpy as np


def _as_key(y):
    # array labels (one-hot vectors for instance) are not hashable
    if isinstance(y, np.ndarray):
        return y.item() if y.ndim == 0 else tuple(_as_key(v) for v in y)
    elif isinstance(y, np.generic):
        return y.item()
    elif isinstance(y, list):
        return tuple(_as_key(v) for v in y)
    return y


def labelmap(labels):
    """Map each distinct label to the positions where it appears.

    Labels are ordered by first appearance.

    Example:

        >>> labelmap(['a', 'b', 'b', 'a', 'c'])
        {'a': [0, 3], 'b': [1, 2], 'c': [4]}
    """
    lm = {}
    for i, y in enumerate(labels):
        lm.setdefault(_as_key(y), []).append(i)
    return lm


def labelfreq(labels):
    """Return a :class:`python:collections.Counter` of the labels."""
    return Counter(_as_key(y) for y in labels)


def label(labels):
    """Return the distinct labels in order of first appearance."""
    return list(labelmap(labels).keys())


def nlabel(labels):
    """Return the number of distinct labels."""
    return len(labelmap(labels))
