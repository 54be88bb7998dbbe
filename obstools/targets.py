"""Extraction of the targets of the observations.

By convention, the last element of a tuple of containers holds the
targets, other containers are their own targets.
"""

from functools import singledispatch

from .container import DataContainer, _opaque_kwargs, getobs, nobs
from .errors import call_user_fn, format_stack
from .obsdim import as_obsdim, expand_obsdim, resolve_obsdim
from .subset import DataSubset, _subset_obsdim
from .utils import as_indices, compose_indices, isint
from .views import DataView


@singledispatch
def gettarget(data, idx=None, obsdim=None):
    """Return the target(s) of the observation(s) of `data` at `idx`."""
    return getobs(data, idx, obsdim)


@gettarget.register(tuple)
def _(data, idx=None, obsdim=None):
    if len(data) == 0:
        raise ValueError("an empty tuple has no targets")
    return gettarget(data[-1], idx, expand_obsdim(data, obsdim)[-1])


@gettarget.register(DataSubset)
def _(data, idx=None, obsdim=None):
    indices = data.indices if idx is None \
        else compose_indices(data.indices, idx)
    return gettarget(data.data, indices, _subset_obsdim(data, obsdim))


@gettarget.register(DataContainer)
def _(data, idx=None, obsdim=None):
    kwargs = _opaque_kwargs(data, obsdim)
    return data.gettarget(as_indices(idx, data.nobs(**kwargs)), **kwargs)


@gettarget.register(DataView)
def _(data, idx=None, obsdim=None):
    idx = as_indices(idx, len(data))
    if isint(idx):
        return gettarget(data[idx])
    return [gettarget(data[i]) for i in idx]


def _eachtarget(data, label_fn, obsdim, stack):
    for i in range(nobs(data, obsdim)):
        y = gettarget(data, i, obsdim)
        if label_fn is not None:
            y = call_user_fn(label_fn, y, "label function", stack)
        yield y


def eachtarget(data, label_fn=None, obsdim=None):
    """Iterate over the targets of each observation of `data`.

    Args:
        data: A data container. For tuples, the targets are read from
            the last element.
        label_fn (Optional[Callable]): A function applied to each
            target, for instance to extract a label from a full
            observation.
        obsdim: The observation dimension.

    Return:
        (Iterator): A generator of targets.

    Raises:
        EvaluationError: if `label_fn` fails, see
            :func:`~obstools.seterr`.
    """
    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    return _eachtarget(data, label_fn, obsdim, format_stack(1))


def targets(data, label_fn=None, obsdim=None):
    """Return the list of targets of the observations of `data`.

    Example:

        >>> X = np.zeros((2, 4))
        >>> y = ['a', 'b', 'b', 'a']
        >>> targets((X, y))
        ['a', 'b', 'b', 'a']
        >>> targets(y, label_fn=lambda l: l == 'a')
        [True, False, False, True]
    """
    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    return list(_eachtarget(data, label_fn, obsdim, format_stack(1)))
