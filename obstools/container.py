"""The data container protocol.

Any object which provides a number of observations and a way to fetch
them can be used with ObsTools: arrays (observations along a chosen
axis), sparse matrices, lists, tuples of co-indexed containers, and
opaque containers implementing :class:`DataContainer`.

Other types can join the protocol by registering implementations on
:func:`nobs`, :func:`getobs` and :func:`fillobs` which are
:func:`python:functools.singledispatch` functions.
"""

from abc import ABC, abstractmethod
from functools import singledispatch

import numpy as np
import scipy.sparse as sp

from .errors import BoundsError, DimensionMismatch, UnsupportedContainer
from .obsdim import (ObsDim, as_obsdim, default_obsdim, expand_obsdim,
                     resolve_obsdim)
from .utils import as_indices, check_bounds, isint


class DataContainer(ABC):
    """Interface for opaque data containers.

    Subclasses must implement :meth:`nobs` and :meth:`getobs`. Opaque
    containers have no notion of axis and ignore the observation
    dimension unless `supports_obsdim` is set, in which case the
    resolved :class:`~obstools.obsdim.ObsDimension` is passed to
    :meth:`nobs` and :meth:`getobs` as an `obsdim` keyword argument.

    The protocol performs no bounds checking on opaque containers.
    """

    supports_obsdim = False

    @abstractmethod
    def nobs(self):
        """Return the number of observations."""
        raise NotImplementedError

    @abstractmethod
    def getobs(self, idx):
        """Return the observation(s) at `idx` (an int or an index array)."""
        raise NotImplementedError

    def getobs_into(self, buffer, idx, **kwargs):
        """Fill `buffer` with the observation(s) at `idx`.

        Defaults to :meth:`getobs`, ignoring the buffer.
        """
        return self.getobs(idx, **kwargs)

    def gettarget(self, idx, **kwargs):
        """Return the target of observation `idx`.

        Override to skip loading the observation when the targets are
        available separately.
        """
        return self.getobs(idx, **kwargs)


def _unsupported(data, what):
    return UnsupportedContainer("{} does not implement {}".format(
        data.__class__.__name__, what))


def _opaque_kwargs(data, obsdim):
    obsdim = as_obsdim(obsdim)
    if data.supports_obsdim:
        return {'obsdim': obsdim}
    return {}


@default_obsdim.register(DataContainer)
def _(data):
    return ObsDim.Undefined


@resolve_obsdim.register(DataContainer)
def _(data, obsdim=None):
    obsdim = as_obsdim(obsdim)
    if obsdim is ObsDim.Undefined:
        return None
    if not data.supports_obsdim:
        raise UnsupportedContainer(
            "{} does not support specifying obsdim".format(
                data.__class__.__name__))
    return obsdim


# nobs ------------------------------------------------------------------------

@singledispatch
def nobs(data, obsdim=None):
    """Return the number of observations in `data`.

    Args:
        data: A data container.
        obsdim: Which dimension denotes the observations, see
            :func:`~obstools.obsdim.as_obsdim`. Opaque containers
            ignore it.
    """
    raise _unsupported(data, "nobs")


@nobs.register(np.ndarray)
@nobs.register(sp.spmatrix)
@nobs.register(sp.sparray)
def _(data, obsdim=None):
    if data.ndim == 0:
        return 1
    axis = resolve_obsdim(data, obsdim)
    return data.shape[axis] if axis < data.ndim else 1


@nobs.register(list)
@nobs.register(range)
def _(data, obsdim=None):
    return len(data) if resolve_obsdim(data, obsdim) == 0 else 1


@nobs.register(tuple)
def _(data, obsdim=None):
    return check_nobs(data, obsdim)


@nobs.register(DataContainer)
def _(data, obsdim=None):
    if not callable(getattr(data, 'nobs', None)):
        raise _unsupported(data, "nobs")
    return data.nobs(**_opaque_kwargs(data, obsdim))


def check_nobs(data, obsdim=None):
    """Return the common number of observations of a tuple of containers.

    Raises:
        DimensionMismatch: if the containers do not agree.
    """
    counts = [nobs(d, o) for d, o in zip(data, expand_obsdim(data, obsdim))]
    if any(c != counts[0] for c in counts[1:]):
        raise DimensionMismatch(
            "all data containers must have the same number of observations")

    return counts[0] if len(counts) > 0 else 0


# getobs ----------------------------------------------------------------------

@singledispatch
def getobs(data, idx=None, obsdim=None):
    """Return the observation(s) of `data` at `idx`.

    Array-like containers return a copy sliced along the observation
    dimension, a scalar `idx` drops that dimension. Observations are
    returned in the order of `idx`, repetitions included. Without
    `idx`, raw containers are returned as is while subsets and views
    are materialized.

    Sparse containers always return two-dimensional results, a scalar
    `idx` gives a single row or column. Observations are sliced from a
    CSR (first axis) or CSC (last axis) matrix, other formats such as
    COO or LIL are converted on each call, which costs a pass over all
    stored values: convert them beforehand to iterate efficiently.

    Raises:
        BoundsError: if `idx` is out of range for array-like data.
        DimensionMismatch: if tuple elements disagree on their number of
            observations.
        UnsupportedContainer: if `data` does not implement the protocol.
    """
    raise _unsupported(data, "getobs")


def _array_indices(data, idx, obsdim):
    axis = resolve_obsdim(data, obsdim)
    if axis >= data.ndim:
        raise BoundsError("obsdim {} is out of range for an array of rank {}"
                          .format(axis, data.ndim))
    n = data.shape[axis]
    idx = as_indices(idx, n)
    check_bounds(idx, n)
    return axis, idx


@getobs.register(np.ndarray)
def _(data, idx=None, obsdim=None):
    if idx is None:
        return data
    if data.ndim == 0:
        check_bounds(as_indices(idx, 1), 1)
        return data[()]

    axis, idx = _array_indices(data, idx, obsdim)
    return np.take(data, idx, axis=axis)


@getobs.register(sp.spmatrix)
@getobs.register(sp.sparray)
def _(data, idx=None, obsdim=None):
    if idx is None:
        return data

    axis, idx = _array_indices(data, idx, obsdim)
    if isinstance(idx, range):
        idx = np.arange(idx.start, idx.stop, idx.step)
    elif isint(idx):  # sparse arrays would drop the dimension
        idx = np.array([idx])

    if axis == 0:
        if data.format != 'csr':
            data = data.tocsr()
        return data[idx, :]
    else:
        if data.format != 'csc':
            data = data.tocsc()
        return data[:, idx]


@getobs.register(list)
@getobs.register(range)
def _(data, idx=None, obsdim=None):
    if idx is None:
        return data
    if resolve_obsdim(data, obsdim) != 0:
        raise BoundsError("obsdim is out of range for a sequence")

    idx = as_indices(idx, len(data))
    check_bounds(idx, len(data))
    if isinstance(idx, int):
        return data[idx]
    return [data[i] for i in idx]


@getobs.register(tuple)
def _(data, idx=None, obsdim=None):
    obsdims = expand_obsdim(data, obsdim)
    if idx is not None:
        check_nobs(data, obsdims)

    return tuple(getobs(d, idx, o) for d, o in zip(data, obsdims))


@getobs.register(DataContainer)
def _(data, idx=None, obsdim=None):
    if idx is None:
        return data
    if not callable(getattr(data, 'getobs', None)):
        raise _unsupported(data, "getobs")

    kwargs = _opaque_kwargs(data, obsdim)
    if isinstance(idx, slice):
        idx = as_indices(idx, data.nobs(**kwargs))
    return data.getobs(as_indices(idx), **kwargs)


# getobs_into -----------------------------------------------------------------

def getobs_into(buffer, data, idx=None, obsdim=None):
    """In-place variant of :func:`getobs`.

    Write the observation(s) of `data` at `idx` into `buffer` and
    return it. Containers which do not support in-place filling (sparse
    matrices, opaque containers by default) ignore the buffer and return
    the result of :func:`getobs` instead. `buffer` can be `None` when no
    preallocated buffer is available.

    Warning:
        The shape and type of `buffer` must match the result of
        :func:`getobs`, it is not validated.
    """
    if buffer is None:
        return getobs(data, idx, obsdim)

    return fillobs(data, buffer, idx, obsdim)


@singledispatch
def fillobs(data, buffer, idx=None, obsdim=None):
    """Implementation of :func:`getobs_into` dispatched over `data`."""
    return getobs(data, idx, obsdim)


@fillobs.register(np.ndarray)
def _(data, buffer, idx=None, obsdim=None):
    if not isinstance(buffer, np.ndarray) or data.ndim == 0:
        return getobs(data, idx, obsdim)
    if idx is None:
        np.copyto(buffer, data)
        return buffer

    axis, idx = _array_indices(data, idx, obsdim)
    np.take(data, idx, axis=axis, out=buffer)
    return buffer


@fillobs.register(list)
def _(data, buffer, idx=None, obsdim=None):
    values = getobs(data, idx, obsdim)
    if not isinstance(buffer, list) or not isinstance(values, list):
        return values

    buffer[:] = values
    return buffer


@fillobs.register(tuple)
def _(data, buffer, idx=None, obsdim=None):
    if not isinstance(buffer, tuple) or len(buffer) != len(data):
        raise DimensionMismatch(
            "the buffer tuple must have the same length as the data tuple")

    return tuple(getobs_into(b, d, idx, o) for b, d, o
                 in zip(buffer, data, expand_obsdim(data, obsdim)))


@fillobs.register(DataContainer)
def _(data, buffer, idx=None, obsdim=None):
    if idx is None:
        return data

    kwargs = _opaque_kwargs(data, obsdim)
    if isinstance(idx, slice):
        idx = as_indices(idx, data.nobs(**kwargs))
    return data.getobs_into(buffer, as_indices(idx), **kwargs)
