import itertools
import random
import logging

import pytest
import numpy as np
import scipy.sparse as sp
from numpy.testing import assert_array_equal
from obstools import BufferGetObs, buffered, eachobs, eachbatch, ObsView, \
    BatchView, RandomObs, RandomBatches, slidingwindow


logging.basicConfig(level=logging.DEBUG)
seed = int(random.random() * 100000)
logging.info("random seed was %d", seed)
random.seed(seed)


def test_eachobs():
    X = np.random.rand(3, 10)

    it = eachobs(X)
    assert len(it) == 10

    values = []
    buffers = set()
    for x in it:
        values.append(x.copy())
        buffers.add(id(x))
    assert len(buffers) == 1
    for i, x in enumerate(values):
        assert_array_equal(x, X[:, i])

    # iterating again restarts from the beginning
    assert_array_equal(next(iter(it)), X[:, 0])

    values = [x.copy() for x in eachobs(X, obsdim='first')]
    assert len(values) == 3
    assert_array_equal(values[2], X[2])


def test_eachbatch():
    X = np.random.rand(3, 10)
    y = np.arange(10)

    it = eachbatch(X, size=5)
    assert len(it) == 2
    values = [x.copy() for x in it]
    assert_array_equal(values[0], X[:, :5])
    assert_array_equal(values[1], X[:, 5:])

    buffers = None
    for i, (x, t) in enumerate(eachbatch((X, y), count=5)):
        assert x.shape == (3, 2)
        assert_array_equal(x, X[:, 2 * i:2 * i + 2])
        assert_array_equal(t, y[2 * i:2 * i + 2])
        if buffers is None:
            buffers = (x, t)
        assert x is buffers[0] and t is buffers[1]

    data = list(range(10))
    results = []
    for b in eachbatch(data, maxsize=4):
        results.append(b)
    assert all(b is results[0] for b in results)
    assert results[0] == [8, 9]


def test_preallocated():
    X = np.random.rand(3, 10)

    buffer = np.zeros(3)
    for i, x in enumerate(BufferGetObs(ObsView(X), buffer)):
        assert x is buffer
        assert_array_equal(x, X[:, i])

    buffer = np.zeros((3, 5))
    for x in eachbatch(X, size=5, buffer=buffer):
        assert x is buffer

    # no preallocation
    for i, x in enumerate(BufferGetObs(BatchView(X, size=2), None)):
        assert_array_equal(x, X[:, 2 * i:2 * i + 2])


def test_source_untouched():
    data = [[1, 2], [3, 4], [5, 6]]
    values = [list(x) for x in eachobs(data)]
    assert values == [[1, 2], [3, 4], [5, 6]]
    assert data == [[1, 2], [3, 4], [5, 6]]

    A = np.zeros(3)
    B = np.ones(3)
    values = [x.copy() for x in buffered([A, B])]
    assert_array_equal(values[1], B)
    assert_array_equal(A, np.zeros(3))

    X = np.random.rand(3, 4)
    X_copy = X.copy()
    for _ in buffered([X, X[:, ::-1]]):
        pass
    assert_array_equal(X, X_copy)


def test_no_inplace():
    X = np.arange(12).reshape(3, 4)
    S = sp.csr_matrix(X)

    values = list(eachobs(S))
    assert len(values) == 4
    assert values[0] is not values[1]
    for i, s in enumerate(values):
        assert_array_equal(s.toarray().ravel(), X[:, i])

    # scalar observations are returned as is
    y = np.arange(5)
    assert [int(t) for t in eachobs(y)] == [0, 1, 2, 3, 4]


def test_unbounded():
    X = np.random.rand(3, 10)

    it = BufferGetObs(RandomObs(X))
    with pytest.raises(TypeError):
        len(it)
    values = list(itertools.islice(it, 25))
    assert len(values) == 25
    assert all(v is values[0] for v in values)

    it = buffered(RandomBatches(X, size=4, count=3))
    assert len(it) == 3
    assert [x.shape for x in it] == [(3, 4)] * 3


def test_labeled_windows():
    X = np.random.rand(2, 12)
    windows = slidingwindow(X, 3, target_fn=lambda i: i + 3)

    it = buffered(windows)
    assert len(it) == 3
    for i, (x, t) in enumerate(it):
        assert_array_equal(x, X[:, 3 * i:3 * i + 3])
        assert_array_equal(t, X[:, 3 * i + 3])
