"""Miscellaneous tools for internal use."""

import logging
import numbers
from logging import NullHandler

import numpy as np

from .errors import BoundsError


def isint(x):
    """Return wether `x` is an integral number."""
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


def get_logger(name):
    logger = logging.getLogger(name)
    logger.addHandler(NullHandler())
    return logger


def basic_getitem(func):
    """Decorate a `__getitem__` method to add slicing support.

    Args:
        func (Callable[[Sequence, int], Any]):
            A `__getitem__` method that only accepts positive integer
            indices.

    Return:
        A `__getitem__` method that accepts negative indexing, slicing
        and integer arrays. Non scalar keys are forwarded to the
        `_subview` method of the object with a sequence of positive
        indices.
    """
    def getitem(self, key):
        if isinstance(key, slice):
            return self._subview(range(*key.indices(len(self))))

        elif isint(key):
            if key < -len(self) or key >= len(self):
                raise BoundsError(
                    self.__class__.__name__ + " index out of range")
            if key < 0:
                key = len(self) + key

            return func(self, int(key))

        elif isinstance(key, (range, list, np.ndarray)):
            key = as_indices(key)
            check_bounds(key, len(self))
            return self._subview(key)

        else:
            raise TypeError(
                self.__class__.__name__ + " indices must be integers, "
                "integer arrays or slices, not " + key.__class__.__name__)

    return getitem


# Index selections ------------------------------------------------------------

def as_indices(indices, n=None):
    """Normalize an index selection.

    Return an :class:`int`, a :class:`range` or a 1D integer array.
    Slices and `None` (all observations) require the number of
    observations `n`.
    """
    if indices is None:
        return range(n)
    elif isinstance(indices, slice):
        return range(*indices.indices(n))
    elif isint(indices):
        return int(indices)
    elif isinstance(indices, range):
        return indices

    indices = np.asarray(indices)
    if indices.size == 0:
        return np.zeros((0,), dtype=np.intp)
    if indices.ndim != 1 or not np.issubdtype(indices.dtype, np.integer):
        raise TypeError(
            "observation indices must be integers or 1D integer arrays")

    return indices


def nindices(indices):
    return 1 if isint(indices) else len(indices)


def check_bounds(indices, n):
    """Raise :class:`BoundsError` unless all indices are in `[0, n)`."""
    if isint(indices):
        lo = hi = indices
    elif len(indices) == 0:
        return
    else:
        lo, hi = min(indices), max(indices)

    if lo < 0 or hi >= n:
        raise BoundsError(
            "attempt to access {} observations at index {}".format(
                n, lo if lo < 0 else hi))


def compose_indices(parent, indices):
    """Map `indices` relative to `parent` into the indexing of `parent`."""
    n = nindices(parent)
    indices = as_indices(indices, n)
    check_bounds(indices, n)

    if isint(parent):
        return parent if isint(indices) else np.full(len(indices), parent)
    elif isint(indices):
        return int(parent[indices])
    elif isinstance(parent, range) and isinstance(indices, range) \
            and len(indices) > 0:
        stop = indices.stop if indices.stop >= 0 else None
        return parent[indices.start:stop:indices.step]
    else:
        return np.asarray(parent)[np.asarray(indices, dtype=np.intp)]


def indices_equal(a, b):
    if isint(a) or isint(b):
        return isint(a) and isint(b) and a == b
    return len(a) == len(b) and bool(np.all(np.asarray(a) == np.asarray(b)))
