import copy

from .container import getobs, getobs_into
from .views import BatchView, ObsView


class BufferGetObs(object):
    """Iterate over materialized elements, reusing one output buffer.

    Each element of `source` (a view, a sampling iterator or any
    iterable of subsets) is materialized with
    :func:`~obstools.getobs_into` into the same buffer. Unless `buffer`
    is provided, the buffer is a private copy of the first materialized
    element, so that the data behind `source` is never written to.

    The yielded buffer is only valid until the next step, copy it to
    retain a value. Containers which don't support in-place filling
    (sparse matrices for instance) yield new objects instead. The
    length of `source` is propagated.

    Args:
        source (Iterable): The elements to materialize.
        buffer: A preallocated output matching the materialized
            elements, or `None`.
    """
    def __init__(self, source, buffer=None):
        self.source = source
        self.buffer = buffer

    def __len__(self):
        # unbounded sources raise TypeError
        return len(self.source)

    def __iter__(self):
        buffer = self.buffer
        for element in self.source:
            if buffer is None:
                # getobs may return objects owned by the source
                buffer = copy.deepcopy(getobs(element))
            else:
                buffer = getobs_into(buffer, element)
            yield buffer

    def __repr__(self):
        return "BufferGetObs({!r})".format(self.source)


def buffered(source, buffer=None):
    """Iterate over materialized elements, reusing one output buffer.

    Function form of :class:`BufferGetObs`, see its documentation for
    the lifetime of the yielded buffer.

    Args:
        source (Iterable): The elements to materialize.
        buffer: A preallocated output matching the materialized
            elements, or `None`.

    Return:
        (Iterable): An iterable which yields the buffer after filling it
        with each element.

    Example:

        >>> X = np.arange(6).reshape(2, 3)
        >>> for x in buffered(ObsView(X)):
        ...     print(x)
        [0 3]
        [1 4]
        [2 5]
    """
    return BufferGetObs(source, buffer)


def eachobs(data, obsdim=None, buffer=None):
    """Iterate over the observations of `data` with a reused buffer.

    Shorthand for ``BufferGetObs(ObsView(data, obsdim), buffer)``.
    """
    return BufferGetObs(ObsView(data, obsdim), buffer)


def eachbatch(data, size=None, count=None, obsdim=None, maxsize=None,
              buffer=None):
    """Iterate over batches of observations with a reused buffer.

    Shorthand for ``BufferGetObs(BatchView(data, ...), buffer)``, see
    :class:`~obstools.BatchView` for the batch settings.
    """
    return BufferGetObs(
        BatchView(data, size=size, count=count, obsdim=obsdim,
                  maxsize=maxsize),
        buffer)
