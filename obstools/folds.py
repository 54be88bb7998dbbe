"""Cross-validation folds."""

import numpy as np

from .container import nobs
from .errors import ArgumentError, DimensionMismatch
from .obsdim import as_obsdim, resolve_obsdim
from .resampling import label_groups
from .rng import get_rng
from .subset import datasubset
from .utils import as_indices, basic_getitem, isint, nindices
from .views import DataView


def fold_sizes(n, k):
    """Split `n` observations into `k` folds.

    The first ``n % k`` folds receive one extra observation.
    """
    return [n // k + (1 if i < n % k else 0) for i in range(k)]


def _check_k(n, k):
    if not 2 <= k <= n:
        raise ArgumentError(
            "k must be within 2..{}, got {}".format(max(2, n), k))


def _complement(n, indices):
    return np.setdiff1d(np.arange(n), np.asarray(indices, dtype=np.intp))


def kfold_indices(n, k=5):
    """Return the training and validation indices of `k` contiguous folds.

    Return:
        (Tuple[List[numpy.ndarray], List[range]]): The training indices
        and the validation indices of each fold.
    """
    _check_k(n, k)
    train_indices = []
    val_indices = []
    start = 0
    for size in fold_sizes(n, k):
        val = range(start, start + size)
        val_indices.append(val)
        train_indices.append(_complement(n, val))
        start += size

    return train_indices, val_indices


class FoldsView(DataView):
    """A sequence of `(training, validation)` pairs of subsets.

    Args:
        data: A data container.
        train_indices (Sequence[Sequence[int]]): The training indices of
            each fold.
        val_indices (Sequence[Sequence[int]]): The validation indices of
            each fold.
        obsdim: The observation dimension.

    Raises:
        DimensionMismatch: if the number of training and validation
            selections differ, or if an index is out of range.
        ArgumentError: if the number of folds is not within
            `2..nobs(data)`.
    """
    def __init__(self, data, train_indices, val_indices, obsdim=None):
        obsdim = as_obsdim(obsdim)
        resolve_obsdim(data, obsdim)
        n = nobs(data, obsdim)

        train_indices = [as_indices(idx) for idx in train_indices]
        val_indices = [as_indices(idx) for idx in val_indices]
        for what, selections in (("training", train_indices),
                                 ("validation", val_indices)):
            for idx in selections:
                if nindices(idx) > 0 \
                        and (np.min(idx) < 0 or np.max(idx) >= n):
                    raise DimensionMismatch(
                        "all {} indices must be within 0..{}"
                        .format(what, n - 1))
        if not 2 <= len(train_indices) <= n:
            raise ArgumentError(
                "the number of folds must be within 2..{}".format(n))
        if len(train_indices) != len(val_indices):
            raise DimensionMismatch(
                "the number of training and validation selections differ")

        self.data = data
        self.train_indices = train_indices
        self.val_indices = val_indices
        self.obsdim = obsdim

    def __len__(self):
        return len(self.train_indices)

    @basic_getitem
    def __getitem__(self, key):
        return (datasubset(self.data, self.train_indices[key], self.obsdim),
                datasubset(self.data, self.val_indices[key], self.obsdim))

    def _subview(self, key):
        view = FoldsView.__new__(FoldsView)
        view.data = self.data
        view.train_indices = [self.train_indices[i] for i in key]
        view.val_indices = [self.val_indices[i] for i in key]
        view.obsdim = self.obsdim
        return view

    def __repr__(self):
        return "{}-fold FoldsView of {} observations".format(
            len(self), nobs(self.data, self.obsdim))


def kfolds(data, k=5, obsdim=None):
    """Partition the observations into `k` folds for cross-validation.

    Each validation selection is a contiguous block of observations, the
    training selection holds the others. The first ``n % k`` folds have
    one extra validation observation.

    Args:
        data (Union[int, Any]): A data container, or a number of
            observations.
        k (int): The number of folds, within `2..n`.
        obsdim: The observation dimension.

    Return:
        A :class:`FoldsView` over `data`, or the lists of training and
        validation indices when `data` is an integer.

    Example:

        >>> train, val = kfolds(5, k=3)
        >>> val
        [range(0, 2), range(2, 4), range(4, 5)]
        >>> [t.tolist() for t in train]
        [[2, 3, 4], [0, 1, 4], [0, 1, 2, 3]]
    """
    if isint(data):
        return kfold_indices(int(data), k)

    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    train_indices, val_indices = kfold_indices(nobs(data, obsdim), k)
    return FoldsView(data, train_indices, val_indices, obsdim)


def leaveout(data, size=1, obsdim=None):
    """Folds with `size` validation observations each.

    Equivalent to :func:`kfolds` with ``k = n // size``, `size` must be
    within `1..n // 2`. Remaining observations are spread over the first
    folds.
    """
    if isint(data):
        n = int(data)
    else:
        obsdim = as_obsdim(obsdim)
        resolve_obsdim(data, obsdim)
        n = nobs(data, obsdim)

    if not 1 <= size <= n // 2:
        raise ArgumentError(
            "size must be within 1..{}, got {}".format(n // 2, size))

    return kfolds(data, n // size, obsdim)


def stratifiedkfolds(data, k=5, shuffle=True, label_fn=None, obsdim=None,
                     rng=None):
    """Folds whose validation selections preserve the label ratios.

    The observations of each label are distributed over the `k`
    validation selections following :func:`fold_sizes`.

    Args:
        data: A data container.
        k (int): The number of folds, within `2..nobs(data)`.
        shuffle (bool): Shuffle the observations of each label before
            assigning them to folds.
        label_fn (Optional[Callable]): Extract the label from a target.
        obsdim: The observation dimension.
        rng: The random generator or its seed.

    Return:
        (FoldsView): The folds.
    """
    obsdim = as_obsdim(obsdim)
    resolve_obsdim(data, obsdim)
    n = nobs(data, obsdim)
    _check_k(n, k)
    rng = get_rng(rng)

    val_chunks = [[] for _ in range(k)]
    for indices in label_groups(data, label_fn, obsdim).values():
        if shuffle:
            indices = rng.permutation(indices)
        start = 0
        for chunks, size in zip(val_chunks, fold_sizes(len(indices), k)):
            chunks.append(indices[start:start + size])
            start += size

    val_indices = [np.concatenate(c) for c in val_chunks]
    train_indices = [_complement(n, val) for val in val_indices]
    return FoldsView(data, train_indices, val_indices, obsdim)
