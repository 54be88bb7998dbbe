"""Lazy subsets of data containers."""

from functools import singledispatch

from .container import fillobs, getobs, nobs
from .errors import ArgumentError
from .obsdim import (ObsDim, as_obsdim, default_obsdim, expand_obsdim,
                     resolve_obsdim)
from .utils import (as_indices, basic_getitem, compose_indices,
                    indices_equal, isint, nindices)


def _same_data(a, b):
    # tuples are rebuilt freely, compare their elements instead
    if isinstance(a, tuple) and isinstance(b, tuple):
        return len(a) == len(b) and all(x is y for x, y in zip(a, b))
    return a is b


class DataSubset(object):
    """A lazy selection of observations from a data container.

    A subset stores a reference to `data`, the `indices` of the selected
    observations and the observation dimension `obsdim`. No data is
    accessed until :func:`~obstools.getobs` is called on the subset.

    Subsets of subsets are collapsed: the indices are mapped through the
    parent subset so that the result refers directly to the original
    container.

    Args:
        data: The data container, it is shared, not copied.
        indices (Union[None, int, slice, Sequence[int]]): The selected
            observations, in order, repetitions allowed. Defaults to all
            observations. Indices are only bounds-checked when the data
            is accessed.
        obsdim: The observation dimension, see
            :func:`~obstools.obsdim.as_obsdim`.

    Raises:
        DimensionMismatch: if `data` is a tuple whose elements disagree
            on their number of observations.
        UnsupportedContainer: if `data` does not implement the protocol.
    """
    def __init__(self, data, indices=None, obsdim=None):
        obsdim = as_obsdim(obsdim)

        if isinstance(data, DataSubset):  # don't nest subsets
            if obsdim is not ObsDim.Undefined and obsdim != data.obsdim:
                raise ArgumentError(
                    "obsdim {} differs from the obsdim of the parent subset"
                    .format(obsdim))
            if indices is not None:
                indices = compose_indices(data.indices, indices)
            else:
                indices = data.indices
            obsdim = data.obsdim
            data = data.data

        else:
            resolve_obsdim(data, obsdim)
            n = nobs(data, obsdim)
            indices = as_indices(indices, n)

        self.data = data
        self.indices = indices
        self.obsdim = obsdim

    def __len__(self):
        return nindices(self.indices)

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    @basic_getitem
    def __getitem__(self, key):
        return DataSubset(self, key)

    def _subview(self, key):
        return DataSubset(self, key)

    def __eq__(self, other):
        if not isinstance(other, DataSubset):
            return NotImplemented

        return _same_data(self.data, other.data) \
            and indices_equal(self.indices, other.indices) \
            and resolve_obsdim(self.data, self.obsdim) \
            == resolve_obsdim(other.data, other.obsdim)

    __hash__ = None

    def __repr__(self):
        if isint(self.indices):
            what = "observation {}".format(self.indices)
        else:
            what = "{} observations".format(len(self))
        return "DataSubset({}, {})".format(type(self.data).__name__, what)


@nobs.register(DataSubset)
def _(data, obsdim=None):
    return len(data)


def _subset_obsdim(subset, obsdim):
    obsdim = as_obsdim(obsdim)
    return subset.obsdim if obsdim is ObsDim.Undefined else obsdim


@getobs.register(DataSubset)
def _(data, idx=None, obsdim=None):
    indices = data.indices if idx is None \
        else compose_indices(data.indices, idx)
    return getobs(data.data, indices, _subset_obsdim(data, obsdim))


@fillobs.register(DataSubset)
def _(data, buffer, idx=None, obsdim=None):
    indices = data.indices if idx is None \
        else compose_indices(data.indices, idx)
    return fillobs(data.data, buffer, indices, _subset_obsdim(data, obsdim))


@default_obsdim.register(DataSubset)
def _(data):
    if data.obsdim is ObsDim.Undefined:
        return default_obsdim(data.data)
    return data.obsdim


@resolve_obsdim.register(DataSubset)
def _(data, obsdim=None):
    return resolve_obsdim(data.data, _subset_obsdim(data, obsdim))


@singledispatch
def datasubset(data, indices=None, obsdim=None):
    """Return a lazy subset of the observations in `data`.

    Similar to :class:`DataSubset` except that tuples of containers are
    mapped over, resulting in a tuple of subsets, and that views return
    a restricted view of the same kind.

    Example:

        >>> X = np.arange(12).reshape(2, 6)
        >>> y = np.array([0, 1, 0, 1, 0, 1])
        >>> xs, ys = datasubset((X, y), [4, 0])
        >>> getobs(xs)
        array([[ 4,  0],
               [10,  6]])
        >>> getobs(ys)
        array([0, 0])
    """
    return DataSubset(data, indices, obsdim)


@datasubset.register(tuple)
def _(data, indices=None, obsdim=None):
    obsdims = expand_obsdim(data, obsdim)
    indices = as_indices(indices, nobs(data, obsdims))
    return tuple(datasubset(d, indices, o) for d, o in zip(data, obsdims))
