"""Random sampling of observations."""

import itertools

import numpy as np

from .container import getobs, nobs
from .errors import ArgumentError
from .labels import labelmap
from .obsdim import as_obsdim, resolve_obsdim
from .rng import get_rng
from .subset import datasubset
from .targets import eachtarget
from .views import default_batch_size


def _draws(count):
    return itertools.count() if count is None else range(count)


class RandomSampler(object):
    """Base class of the iterators of random subsets.

    Samplers are unbounded unless a `count` is given, calling
    :func:`len` on an unbounded sampler raises a :class:`TypeError`.
    """
    def __init__(self, data, count=None, obsdim=None, rng=None):
        obsdim = as_obsdim(obsdim)
        resolve_obsdim(data, obsdim)
        if count is not None and count <= 0:
            raise ArgumentError("count must be strictly positive")

        self.data = data
        self.count = count
        self.obsdim = obsdim
        self.rng = get_rng(rng)
        self.n = nobs(data, obsdim)
        if self.n == 0:
            raise ArgumentError("cannot sample from an empty container")

    def __len__(self):
        if self.count is None:
            raise TypeError(
                "{} without count is unbounded".format(self.__class__.__name__))
        return self.count

    def __iter__(self):
        for _ in _draws(self.count):
            yield datasubset(self.data, self.draw(), self.obsdim)

    def draw(self):
        raise NotImplementedError

    def __repr__(self):
        length = "unbounded" if self.count is None \
            else "{} draws".format(self.count)
        return "{}({}, {})".format(
            self.__class__.__name__, type(self.data).__name__, length)


class RandomObs(RandomSampler):
    """Iterate over observations drawn uniformly with replacement.

    Args:
        data: A data container.
        count (Optional[int]): Number of draws, unbounded by default.
        obsdim: The observation dimension.
        rng: The random generator or its seed, see
            :func:`~obstools.get_rng`.

    Example:

        >>> draws = [getobs(x) for x in RandomObs(['a', 'b'], count=5)]
        >>> len(draws), set(draws) <= {'a', 'b'}
        (5, True)
    """
    def draw(self):
        return int(self.rng.integers(self.n))


class RandomBatches(RandomSampler):
    """Iterate over batches of observations drawn with replacement.

    Args:
        data: A data container.
        size (Optional[int]): Number of observations by batch, defaults
            to a fifth of the observations.
        count (Optional[int]): Number of batches, unbounded by default.
        obsdim: The observation dimension.
        rng: The random generator or its seed.
    """
    def __init__(self, data, size=None, count=None, obsdim=None, rng=None):
        super().__init__(data, count, obsdim, rng)
        if size is None:
            size = default_batch_size(self.n)
        elif size <= 0:
            raise ArgumentError("batch size must be strictly positive")
        self.batch_size = size

    def draw(self):
        return self.rng.integers(self.n, size=self.batch_size)


class BalancedObs(RandomSampler):
    """Iterate over observations drawn with equal chances for each label.

    Each draw picks a label uniformly, then an observation with that
    label uniformly, so that labels are equally frequent in the long
    run regardless of their frequency in `data`.

    Args:
        data: A data container, tuples are labeled by their last
            element.
        label_fn (Optional[Callable]): Extract the label from a target.
        count (Optional[int]): Number of draws, unbounded by default.
        obsdim: The observation dimension.
        rng: The random generator or its seed.
    """
    def __init__(self, data, label_fn=None, count=None, obsdim=None,
                 rng=None):
        super().__init__(data, count, obsdim, rng)
        lm = labelmap(eachtarget(data, label_fn, self.obsdim))
        self.labels = list(lm.keys())
        self.groups = [np.asarray(idx) for idx in lm.values()]

    def draw(self):
        group = self.groups[self.rng.integers(len(self.groups))]
        return int(group[self.rng.integers(len(group))])


def randobs(data, n=None, obsdim=None, rng=None):
    """Return a random observation, or `n` observations with replacement.

    Example:

        >>> x = randobs(list(range(10)), 3, rng=0)
        >>> len(x)
        3
    """
    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    count = nobs(data, obsdim)
    if count == 0:
        raise ArgumentError("cannot sample from an empty container")

    rng = get_rng(rng)
    if n is None:
        return getobs(data, int(rng.integers(count)), obsdim)
    if n <= 0:
        raise ArgumentError("n must be strictly positive")
    return getobs(data, rng.integers(count, size=n), obsdim)
