"""Sequences of observations and batches."""

import math

import numpy as np

from .container import fillobs, getobs, getobs_into, nobs
from .errors import ArgumentError
from .obsdim import ObsDim, as_obsdim, resolve_obsdim
from .subset import datasubset
from .utils import (as_indices, basic_getitem, compose_indices, get_logger,
                    isint)


logger = get_logger(__name__)


class DataView(object):
    """Base class of the lazy sequence views over a data container.

    A view is itself a data container whose observations are the
    elements of the view.
    """

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def _subview(self, key):
        raise NotImplementedError


@nobs.register(DataView)
def _(data, obsdim=None):
    return len(data)


@getobs.register(DataView)
def _(data, idx=None, obsdim=None):
    if idx is None:
        return [getobs(x) for x in data]
    idx = as_indices(idx, len(data))
    if isint(idx):
        return getobs(data[idx])
    return [getobs(data[i]) for i in idx]


@fillobs.register(DataView)
def _(data, buffer, idx=None, obsdim=None):
    if isint(idx):
        return getobs_into(buffer, data[idx])
    return getobs(data, idx)


@datasubset.register(DataView)
def _(data, indices=None, obsdim=None):
    return data[as_indices(indices, len(data))]


class ObsView(DataView):
    """A sequence of the individual observations in a container.

    Elements are lazy subsets of `data` (or tuples of subsets for tuple
    containers), no data is accessed until :func:`~obstools.getobs` is
    called on them.

    Args:
        data: A data container.
        obsdim: The observation dimension.

    Example:

        >>> X = np.arange(6).reshape(2, 3)
        >>> view = ObsView(X)
        >>> len(view)
        3
        >>> getobs(view[1])
        array([1, 4])
    """
    def __init__(self, data, obsdim=None):
        obsdim = as_obsdim(obsdim)
        if isinstance(data, ObsView):  # don't nest views of observations
            if obsdim is ObsDim.Undefined:
                obsdim = data.obsdim
            data = data.data
        resolve_obsdim(data, obsdim)

        self.data = data
        self.obsdim = obsdim
        self.size = nobs(data, obsdim)

    def __len__(self):
        return self.size

    @basic_getitem
    def __getitem__(self, key):
        return datasubset(self.data, key, self.obsdim)

    def _subview(self, key):
        return ObsView(datasubset(self.data, key, self.obsdim), self.obsdim)

    def __repr__(self):
        return "ObsView({}, {} observations)".format(
            type(self.data).__name__, len(self))


def default_batch_size(n):
    return max(1, int(math.ceil(n / 5)))


def batch_settings(n, size=None, count=None, maxsize=None):
    """Compute a compatible batch size and number of batches.

    Return:
        (int, int): the batch size and the number of batches.
    """
    if size is not None and maxsize is not None:
        raise ArgumentError("providing both size and maxsize is not supported")
    if n <= 0:
        raise ArgumentError("cannot make batches from an empty container")

    if maxsize is not None:
        if maxsize <= 0:
            raise ArgumentError("maxsize must be strictly positive")
        size = min(maxsize, n)
        while n % size != 0 and size > 1:
            size -= 1

    if size is not None and (size <= 0 or size > n):
        raise ArgumentError(
            "batch size must be within 1..{}, got {}".format(n, size))
    if count is not None and (count <= 0 or count > n):
        raise ArgumentError(
            "batch count must be within 1..{}, got {}".format(n, count))

    if size is None and count is None:
        size = default_batch_size(n)
        count = n // size
    elif size is None:
        size = int(math.ceil(n / count))
        count = n // size
    elif count is None:
        count = n // size
    elif count > n // size:
        raise ArgumentError(
            "{} batches of size {} exceed the {} available observations"
            .format(count, size, n))

    unused = n - size * count
    if unused > 0:
        logger.warning(
            "the batch settings leave %d observations unused", unused)

    return size, count


class BatchView(DataView):
    """A sequence of equally sized batches of observations.

    The batch size can be specified directly with `size`, indirectly
    with the number of batches `count`, or as an upper bound `maxsize`
    which is reduced until it divides the number of observations.
    Observations that don't fill a whole batch are left out.

    When only `count` is given, the batch size is ``ceil(n / count)``
    and the number of batches is then recomputed as ``n // size``, so
    fewer batches than requested may be returned: `count=3` over 10
    observations gives 2 batches of 4 observations.

    Args:
        data: A data container.
        size (Optional[int]): Number of observations by batch.
        count (Optional[int]): Number of batches.
        obsdim: The observation dimension.
        maxsize (Optional[int]): Maximum number of observations by batch.

    Example:

        >>> batches = BatchView(list(range(10)), size=3)
        >>> len(batches)
        3
        >>> getobs(batches[1])
        [3, 4, 5]
    """
    def __init__(self, data, size=None, count=None, obsdim=None, maxsize=None):
        obsdim = as_obsdim(obsdim)
        resolve_obsdim(data, obsdim)
        size, count = batch_settings(nobs(data, obsdim), size, count, maxsize)

        self.data = data
        self.obsdim = obsdim
        self.batch_size = size
        self.count = count

    @classmethod
    def _build(cls, data, batch_size, count, obsdim):
        view = cls.__new__(cls)
        view.data = data
        view.obsdim = obsdim
        view.batch_size = batch_size
        view.count = count
        return view

    def __len__(self):
        return self.count

    @basic_getitem
    def __getitem__(self, key):
        start = key * self.batch_size
        return datasubset(
            self.data, range(start, start + self.batch_size), self.obsdim)

    def _subview(self, key):
        obs = [np.arange(b * self.batch_size, (b + 1) * self.batch_size)
               for b in key]
        obs = np.concatenate(obs) if len(obs) > 0 else np.zeros(0, np.intp)
        return BatchView._build(datasubset(self.data, obs, self.obsdim),
                                self.batch_size, len(key), self.obsdim)

    def __repr__(self):
        return "BatchView({}, {} batches of {} observations)".format(
            type(self.data).__name__, len(self), self.batch_size)


def batchsize(data):
    """Return the number of observations by batch of `data`."""
    return data.batch_size


class GatheredView(DataView):
    """A selection of the elements of another view, in a given order."""
    def __init__(self, view, indices):
        if isinstance(view, GatheredView):  # optimize nested selections
            indices = compose_indices(view.indices, indices)
            view = view.view

        self.view = view
        self.indices = as_indices(indices, len(view))

    def __len__(self):
        return len(self.indices)

    @basic_getitem
    def __getitem__(self, key):
        return self.view[int(self.indices[key])]

    def _subview(self, key):
        return GatheredView(self, key)

    def __repr__(self):
        return "GatheredView({!r}, {} elements)".format(self.view, len(self))
