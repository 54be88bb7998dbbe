"""Observation dimension specifiers and their resolution to axes."""

import numbers
from functools import singledispatch

import numpy as np
import scipy.sparse as sp

from .errors import ArgumentError, DimensionMismatch, UnsupportedContainer
from .utils import isint


class ObsDimension:
    """Base class of observation dimension specifiers."""
    __slots__ = ()


class _First(ObsDimension):
    __slots__ = ()

    def __repr__(self):
        return "ObsDim.First"


class _Last(ObsDimension):
    __slots__ = ()

    def __repr__(self):
        return "ObsDim.Last"


class _Undefined(ObsDimension):
    __slots__ = ()

    def __repr__(self):
        return "ObsDim.Undefined"


class Constant(ObsDimension):
    """Designate a fixed axis, counted from 0."""
    __slots__ = ('axis',)

    def __init__(self, axis):
        if not isint(axis):
            raise TypeError("axis must be an integer, not "
                            + axis.__class__.__name__)
        if axis < 0:
            raise ArgumentError("axis must be non-negative")
        self.axis = int(axis)

    def __eq__(self, other):
        return isinstance(other, Constant) and other.axis == self.axis

    def __hash__(self):
        return hash((Constant, self.axis))

    def __repr__(self):
        return "ObsDim.Constant({})".format(self.axis)


class ObsDim:
    """Namespace of the observation dimension specifiers.

    - :attr:`ObsDim.First`: the first axis.
    - :attr:`ObsDim.Last`: the last axis.
    - :class:`ObsDim.Constant(k) <Constant>`: axis `k`.
    - :attr:`ObsDim.Undefined`: the default of the container, opaque
      containers ignore it.
    """
    First = _First()
    Last = _Last()
    Undefined = _Undefined()
    Constant = Constant


def as_obsdim(value):
    """Convert a user provided observation dimension.

    Accepts `None`, `'first'`, `'last'`, non-negative integers,
    :class:`ObsDimension` instances, or a tuple of these for tuple
    containers.
    """
    if value is None:
        return ObsDim.Undefined
    elif isinstance(value, ObsDimension):
        return value
    elif isinstance(value, str):
        if value.lower() == 'first':
            return ObsDim.First
        elif value.lower() == 'last':
            return ObsDim.Last
        raise ArgumentError("unknown observation dimension '{}'".format(value))
    elif isint(value):
        return Constant(value)
    elif isinstance(value, (tuple, list)):
        return tuple(as_obsdim(v) for v in value)
    elif isinstance(value, numbers.Number):
        raise TypeError("obsdim must be an integer, not "
                        + value.__class__.__name__)
    else:
        raise ArgumentError("invalid observation dimension {!r}".format(value))


def axis_for(obsdim, ndim):
    """Return the axis designated by `obsdim` on an array of rank `ndim`.

    Constant axes are returned unchanged even beyond the rank.
    """
    if isinstance(obsdim, tuple):
        raise DimensionMismatch(
            "a tuple of obsdim is only valid for a tuple of containers")
    elif obsdim is ObsDim.First:
        return 0
    elif obsdim is ObsDim.Last or obsdim is ObsDim.Undefined:
        return max(ndim - 1, 0)
    else:
        return obsdim.axis


# Default and resolution per container kind -----------------------------------

@singledispatch
def default_obsdim(data):
    """Return the observation dimension `data` uses by default."""
    return ObsDim.Undefined


@singledispatch
def resolve_obsdim(data, obsdim=None):
    """Resolve an observation dimension for `data`.

    Return the axis index for array-like containers, a tuple of
    resolved values for tuples, and `None` for containers without an
    axis concept.

    Raises:
        UnsupportedContainer: if an explicit observation dimension is
            requested from a container without an axis concept.
    """
    obsdim = as_obsdim(obsdim)
    if obsdim is ObsDim.Undefined:
        return None

    raise UnsupportedContainer(
        "{} does not support specifying obsdim".format(
            data.__class__.__name__))


def _resolve_array(data, obsdim=None):
    obsdim = as_obsdim(obsdim)
    if obsdim is ObsDim.Undefined:
        obsdim = default_obsdim(data)
    return axis_for(obsdim, data.ndim)


def _resolve_sequence(data, obsdim=None):
    return axis_for(as_obsdim(obsdim), 1)


for _t in (np.ndarray, sp.spmatrix, sp.sparray):
    default_obsdim.register(_t, lambda data: ObsDim.Last)
    resolve_obsdim.register(_t, _resolve_array)

for _t in (list, range):
    default_obsdim.register(_t, lambda data: ObsDim.Last)
    resolve_obsdim.register(_t, _resolve_sequence)


@resolve_obsdim.register(tuple)
def _(data, obsdim=None):
    obsdim = as_obsdim(obsdim)
    if isinstance(obsdim, tuple):
        if len(obsdim) != len(data):
            raise DimensionMismatch(
                "number of elements in obsdim doesn't match data")
        return tuple(resolve_obsdim(d, o) for d, o in zip(data, obsdim))

    return tuple(resolve_obsdim(d, obsdim) for d in data)


def expand_obsdim(data, obsdim):
    """Return one observation dimension per element of tuple `data`."""
    obsdim = as_obsdim(obsdim)
    if isinstance(obsdim, tuple):
        if len(obsdim) != len(data):
            raise DimensionMismatch(
                "number of elements in obsdim doesn't match data")
        return obsdim

    return (obsdim,) * len(data)
