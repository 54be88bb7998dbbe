"""Sliding windows over the observations of a container."""

import numpy as np

from .container import nobs
from .errors import ArgumentError, call_user_fn, format_stack
from .obsdim import as_obsdim, resolve_obsdim
from .subset import datasubset
from .utils import as_indices, basic_getitem, get_logger, isint
from .views import DataView, GatheredView


logger = get_logger(__name__)


def _check_window(n, size, stride):
    if size <= 0:
        raise ArgumentError("window size must be strictly positive")
    if size > n:
        raise ArgumentError(
            "window size {} exceeds the {} available observations"
            .format(size, n))
    if stride <= 0:
        raise ArgumentError("stride must be strictly positive")


def _window_count(n, size, stride):
    count = (n - size) // stride + 1
    unused = n - ((count - 1) * stride + size)
    if unused > 0:
        logger.debug("the last %d observations fit no window", unused)
    return count


class SlidingWindow(DataView):
    """Windows of consecutive observations.

    Window `i` covers observations `i * stride` to `i * stride + size`
    excluded, trailing observations that don't fill a window are left
    out.
    """
    def __init__(self, data, size, stride=None, obsdim=None):
        obsdim = as_obsdim(obsdim)
        resolve_obsdim(data, obsdim)
        stride = size if stride is None else stride
        n = nobs(data, obsdim)
        _check_window(n, size, stride)

        self.data = data
        self.size = size
        self.stride = stride
        self.obsdim = obsdim
        self.count = _window_count(n, size, stride)

    def __len__(self):
        return self.count

    @basic_getitem
    def __getitem__(self, key):
        start = key * self.stride
        return datasubset(
            self.data, range(start, start + self.size), self.obsdim)

    def _subview(self, key):
        return GatheredView(self, key)

    def __repr__(self):
        return "SlidingWindow({}, {} windows of {} observations)".format(
            type(self.data).__name__, len(self), self.size)


class LabeledSlidingWindow(DataView):
    """Windows of consecutive observations paired with target observations.

    `target_fn` maps the index of the first observation of a window to
    the index (or indices) of its target observation(s). Windows whose
    targets fall outside of the container are skipped.
    """
    def __init__(self, data, size, target_fn, stride=None,
                 exclude_target=False, obsdim=None):
        obsdim = as_obsdim(obsdim)
        resolve_obsdim(data, obsdim)
        stride = size if stride is None else stride
        n = nobs(data, obsdim)
        _check_window(n, size, stride)

        self.data = data
        self.size = size
        self.stride = stride
        self.target_fn = target_fn
        self.exclude_target = exclude_target
        self.obsdim = obsdim
        self.stack = format_stack(2)

        count = _window_count(n, size, stride)
        offset = 0
        while count > 0 and np.max(self._targets(
                (offset + count - 1) * stride)) >= n:
            count -= 1
        while count > 0 and np.min(self._targets(offset * stride)) < 0:
            offset += 1
            count -= 1

        if count == 0:
            logger.warning("no window has its targets within the data")

        self.offset = offset
        self.count = count

    def _targets(self, start):
        targets = call_user_fn(self.target_fn, start, "target function",
                               self.stack)
        if isinstance(targets, range) or isint(targets):
            return targets
        return as_indices(list(targets) if isinstance(targets, tuple)
                          else targets)

    def __len__(self):
        return self.count

    @basic_getitem
    def __getitem__(self, key):
        start = (key + self.offset) * self.stride
        window = range(start, start + self.size)
        targets = self._targets(start)
        if self.exclude_target:
            excluded = set(np.atleast_1d(targets).tolist())
            window = np.array([i for i in window if i not in excluded],
                              dtype=np.intp)

        return (datasubset(self.data, window, self.obsdim),
                datasubset(self.data, targets, self.obsdim))

    def _subview(self, key):
        return GatheredView(self, key)

    def __repr__(self):
        return "LabeledSlidingWindow({}, {} windows of {} observations)" \
            .format(type(self.data).__name__, len(self), self.size)


def slidingwindow(data, size, stride=None, obsdim=None, target_fn=None,
                  exclude_target=False):
    """Return a view of windows of consecutive observations.

    Args:
        data: A data container.
        size (int): Number of observations by window.
        stride (Optional[int]): Offset between the first observations of
            consecutive windows, defaults to `size`.
        obsdim: The observation dimension.
        target_fn (Optional[Callable[[int], Union[int, Sequence[int]]]]):
            Given the index of the first observation of a window, return
            the index or indices of its target observation(s). When
            provided, each window is returned as a `(window, targets)`
            pair of subsets.
        exclude_target (bool): Remove the targets from their window.

    Return:
        (Sequence): A view over the windows.

    Raises:
        ArgumentError: if `size` is not within `1..nobs(data)` or
            `stride` is not strictly positive.

    Example:

        >>> windows = slidingwindow(list(range(1, 11)), 3, stride=2)
        >>> [getobs(w) for w in windows]
        [[1, 2, 3], [3, 4, 5], [5, 6, 7], [7, 8, 9]]
        >>> windows = slidingwindow(list(range(1, 11)), 3,
        ...                         target_fn=lambda i: i + 3)
        >>> [getobs(w) for w in windows]
        [([1, 2, 3], 4), ([4, 5, 6], 7), ([7, 8, 9], 10)]
    """
    if target_fn is None:
        if exclude_target:
            raise ArgumentError("exclude_target requires a target_fn")
        return SlidingWindow(data, size, stride, obsdim)

    return LabeledSlidingWindow(data, size, target_fn, stride,
                                exclude_target, obsdim)
