"""Splitting and shuffling of observations."""

import math

from .container import nobs
from .errors import ArgumentError
from .obsdim import as_obsdim, resolve_obsdim
from .rng import get_rng
from .subset import datasubset
from .utils import isint


def check_fractions(at):
    """Validate split fractions and return them as a tuple."""
    at = tuple(at) if isinstance(at, (tuple, list)) else (at,)
    if len(at) == 0:
        raise ArgumentError("at least one fraction is required")
    if any(not 0 < p < 1 for p in at):
        raise ArgumentError("all fractions must be within (0, 1), got {}"
                            .format(at))
    if sum(at) >= 1:
        raise ArgumentError("fractions must sum to less than 1, got {}"
                            .format(at))

    return at


def split_sizes(n, at):
    """Return the sizes of the partitions of `n` items.

    Each fraction yields ``floor(n * p)`` items, the last partition
    receives the remainder.
    """
    # rounding absorbs float errors such as 10 * 0.3 = 2.9999999999999996
    sizes = [int(math.floor(round(n * p, 9))) for p in at]
    sizes.append(n - sum(sizes))
    return sizes


def split_ranges(n, at):
    """Return consecutive index ranges partitioning `range(n)`."""
    ranges = []
    start = 0
    for size in split_sizes(n, check_fractions(at)):
        ranges.append(range(start, start + size))
        start += size

    return tuple(ranges)


def splitobs(data, at=0.7, obsdim=None):
    """Split observations into consecutive partitions.

    Args:
        data (Union[int, Any]): A data container, or a number of
            observations.
        at (Union[float, Sequence[float]]): Fraction(s) of the
            observations assigned to each partition but the last which
            receives the rest. Fractions must be within (0, 1) and sum
            to less than 1.
        obsdim: The observation dimension.

    Return:
        (tuple): The partitions as subsets of `data` (see
        :func:`~obstools.datasubset`), or as ranges of indices when
        `data` is an integer.

    Raises:
        ArgumentError: for invalid fractions.

    Example:

        >>> splitobs(10, at=(.5, .3))
        (range(0, 5), range(5, 8), range(8, 10))
        >>> train, test = splitobs(list(range(10)), at=.7)
        >>> getobs(test)
        [7, 8, 9]
    """
    if isint(data):
        return split_ranges(int(data), at)

    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    ranges = split_ranges(nobs(data, obsdim), at)
    return tuple(datasubset(data, r, obsdim) for r in ranges)


def shuffleobs(data, obsdim=None, rng=None):
    """Return a lazy subset of `data` with randomly permuted observations.

    Tuples of containers are shuffled with the same permutation so that
    their observations stay paired.

    Args:
        data: A data container.
        obsdim: The observation dimension.
        rng: The random generator or its seed, see
            :func:`~obstools.get_rng`.

    Example:

        >>> X = np.arange(10).reshape(2, 5)
        >>> y = np.arange(5)
        >>> Xs, ys = getobs(shuffleobs((X, y)))
        >>> bool(np.all(Xs[0] == ys))
        True
    """
    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    permutation = get_rng(rng).permutation(nobs(data, obsdim))
    return datasubset(data, permutation, obsdim)
