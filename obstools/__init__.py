"""
A python library to access and partition the observations of datasets.

The obstools package defines a small protocol, :func:`nobs`,
:func:`getobs` and :func:`getobs_into`, to count and fetch observations
from data containers: numpy arrays (observations along a chosen axis,
the last one by default), scipy sparse matrices, lists, tuples of
co-indexed containers, and custom containers implementing
:class:`DataContainer`.

On top of it, the library provides lazy subsets, views over
observations, batches, sliding windows or folds, random sampling
iterators and partitioning algorithms to split, shuffle, stratify and
rebalance datasets. No data is copied until :func:`getobs` is called.
"""

from .buffering import BufferGetObs, buffered, eachbatch, eachobs
from .container import DataContainer, getobs, getobs_into, nobs
from .errors import (
    ArgumentError,
    BoundsError,
    DimensionMismatch,
    EvaluationError,
    UnsupportedContainer,
    seterr,
)
from .folds import FoldsView, kfolds, leaveout, stratifiedkfolds
from .labels import label, labelfreq, labelmap, nlabel
from .obsdim import ObsDim, default_obsdim
from .resampling import oversample, stratifiedobs, undersample
from .rng import get_rng, seed
from .sampling import BalancedObs, RandomBatches, RandomObs, randobs
from .splitting import shuffleobs, splitobs
from .subset import DataSubset, datasubset
from .targets import eachtarget, gettarget, targets
from .views import BatchView, ObsView, batchsize
from .window import slidingwindow

__all__ = [
    "nobs",
    "getobs",
    "getobs_into",
    "DataContainer",
    "ObsDim",
    "default_obsdim",
    "DimensionMismatch",
    "BoundsError",
    "ArgumentError",
    "UnsupportedContainer",
    "EvaluationError",
    "seterr",
    "seed",
    "get_rng",
    "DataSubset",
    "datasubset",
    "ObsView",
    "BatchView",
    "batchsize",
    "slidingwindow",
    "FoldsView",
    "kfolds",
    "leaveout",
    "stratifiedkfolds",
    "BufferGetObs",
    "buffered",
    "eachobs",
    "eachbatch",
    "RandomObs",
    "RandomBatches",
    "BalancedObs",
    "randobs",
    "splitobs",
    "shuffleobs",
    "stratifiedobs",
    "oversample",
    "undersample",
    "targets",
    "eachtarget",
    "gettarget",
    "labelmap",
    "labelfreq",
    "label",
    "nlabel",
]
