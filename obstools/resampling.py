"""Label-aware partitioning and resampling.

Labels are read with :func:`~obstools.eachtarget`: tuples of containers
are labeled by their last element, and `label_fn` can extract the
label from each target.
"""

import numpy as np

from .container import nobs
from .errors import ArgumentError
from .labels import labelmap
from .obsdim import as_obsdim, resolve_obsdim
from .rng import get_rng
from .splitting import check_fractions, split_ranges
from .subset import datasubset
from .targets import eachtarget
from .utils import get_logger


logger = get_logger(__name__)


def label_groups(data, label_fn=None, obsdim=None):
    """Return the indices of the observations of each label."""
    lm = labelmap(eachtarget(data, label_fn, obsdim))
    return {k: np.asarray(v, dtype=np.intp) for k, v in lm.items()}


def _concatenate(chunks):
    if len(chunks) == 0:
        return np.zeros((0,), dtype=np.intp)
    return np.concatenate(chunks)


def stratifiedobs(data, at=0.7, shuffle=True, label_fn=None, obsdim=None,
                  rng=None):
    """Split observations into partitions with the same label ratios.

    The observations of each label are split according to `at` (see
    :func:`~obstools.splitobs`), the partitions of each label are then
    concatenated.

    Args:
        data: A data container.
        at (Union[float, Sequence[float]]): Fraction(s) of the
            observations assigned to each partition but the last.
        shuffle (bool): Shuffle the observations of each label before
            splitting them, and the content of each partition
            afterwards. Otherwise the original order is preserved
            within each label.
        label_fn (Optional[Callable]): Extract the label from a target.
        obsdim: The observation dimension.
        rng: The random generator or its seed.

    Return:
        (tuple): The partitions as subsets of `data`.

    Example:

        >>> y = ['a', 'a', 'b', 'a', 'b', 'a', 'a', 'b', 'a', 'a']
        >>> train, test = stratifiedobs(y, at=.5, shuffle=False)
        >>> getobs(train)
        ['a', 'a', 'a', 'b']
        >>> getobs(test)
        ['a', 'a', 'a', 'a', 'b', 'b']
    """
    at = check_fractions(at)
    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    rng = get_rng(rng)

    partitions = [[] for _ in range(len(at) + 1)]
    for indices in label_groups(data, label_fn, obsdim).values():
        if shuffle:
            indices = rng.permutation(indices)
        for part, r in zip(partitions, split_ranges(len(indices), at)):
            part.append(indices[r.start:r.stop])

    partitions = [_concatenate(p) for p in partitions]
    if shuffle:
        partitions = [rng.permutation(p) for p in partitions]
    logger.debug("stratified partition sizes: %s",
                 [len(p) for p in partitions])

    return tuple(datasubset(data, p, obsdim) for p in partitions)


def oversample(data, fraction=1.0, shuffle=True, label_fn=None, obsdim=None,
               rng=None):
    """Rebalance labels by repeating observations of the minority labels.

    Every label is given at least ``round(fraction * m)`` observations
    where `m` is the number of observations of the most frequent label.
    All original observations are kept, followed by as many full copies
    of the observations of a label as needed and then by observations of
    that label sampled without replacement.

    Args:
        data: A data container.
        fraction (float): Target size of each label relative to the
            most frequent one, can exceed 1.
        shuffle (bool): Shuffle the result, otherwise the original
            observations come first and the additional ones are grouped
            by label.
        label_fn (Optional[Callable]): Extract the label from a target.
        obsdim: The observation dimension.
        rng: The random generator or its seed.

    Return:
        A lazy subset of `data`.

    Example:

        >>> y = ['a', 'b', 'b', 'b', 'b', 'a']
        >>> getobs(oversample(y, shuffle=False))
        ['a', 'b', 'b', 'b', 'b', 'a', 'a', 'a']
    """
    if fraction < 0:
        raise ArgumentError("fraction must be non-negative")
    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    rng = get_rng(rng)

    groups = label_groups(data, label_fn, obsdim)
    maxcount = max((len(g) for g in groups.values()), default=0)
    target = int(round(fraction * maxcount))

    chunks = [np.arange(nobs(data, obsdim))]
    for indices in groups.values():
        needed = target - len(indices)
        while needed > len(indices):
            chunks.append(indices)
            needed -= len(indices)
        if needed > 0:
            chunks.append(np.sort(rng.choice(indices, needed, replace=False)))

    indices = _concatenate(chunks)
    logger.debug("oversampled %d observations to %d",
                 len(chunks[0]), len(indices))
    if shuffle:
        indices = rng.permutation(indices)

    return datasubset(data, indices, obsdim)


def undersample(data, shuffle=False, label_fn=None, obsdim=None, rng=None):
    """Rebalance labels by dropping observations of the majority labels.

    Every label keeps as many observations as the least frequent one,
    sampled without replacement.

    Args:
        data: A data container.
        shuffle (bool): Shuffle the result, otherwise the original order
            is preserved.
        label_fn (Optional[Callable]): Extract the label from a target.
        obsdim: The observation dimension.
        rng: The random generator or its seed.

    Return:
        A lazy subset of `data`.

    Example:

        >>> y = ['a', 'b', 'b', 'b', 'b', 'a']
        >>> sorted(getobs(undersample(y)))
        ['a', 'a', 'b', 'b']
    """
    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    rng = get_rng(rng)

    groups = label_groups(data, label_fn, obsdim)
    mincount = min((len(g) for g in groups.values()), default=0)

    indices = _concatenate([rng.choice(g, mincount, replace=False)
                            for g in groups.values()])
    logger.debug("undersampled %d observations to %d",
                 nobs(data, obsdim), len(indices))
    if shuffle:
        indices = rng.permutation(indices)
    else:
        indices = np.sort(indices)

    return datasubset(data, indices, obsdim)
