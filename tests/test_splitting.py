import random
import logging

import pytest
import numpy as np
from numpy.testing import assert_array_equal
from obstools import nobs, getobs, splitobs, shuffleobs, DataSubset, \
    ArgumentError, DimensionMismatch


logging.basicConfig(level=logging.DEBUG)
seed = int(random.random() * 100000)
logging.info("random seed was %d", seed)
random.seed(seed)


def test_split_indices():
    assert splitobs(10, (.5, .3)) == (range(0, 5), range(5, 8), range(8, 10))
    assert splitobs(10) == (range(0, 7), range(7, 10))
    assert splitobs(10, .3) == (range(0, 3), range(3, 10))
    assert splitobs(10, [.1, .1, .1]) \
        == (range(0, 1), range(1, 2), range(2, 3), range(3, 10))
    assert splitobs(7, .5) == (range(0, 3), range(3, 7))
    assert splitobs(1, .5) == (range(0, 0), range(0, 1))

    for n in (10, 37, 100):
        for at in ((.5, .3), .7, (.2, .2, .2)):
            parts = splitobs(n, at)
            assert [i for p in parts for i in p] == list(range(n))


@pytest.mark.parametrize('at', [0, 1, -.1, 1.5, (.5, .5), (.2, 0),
                                (.7, .4), ()])
def test_split_invalid(at):
    with pytest.raises(ArgumentError):
        splitobs(10, at)
    with pytest.raises(ArgumentError):
        splitobs(list(range(10)), at)


def test_split_containers():
    X = np.random.rand(3, 10)
    y = np.arange(10)

    train, test = splitobs(X, .5)
    assert train == DataSubset(X, range(0, 5))
    assert_array_equal(getobs(train), X[:, :5])
    assert_array_equal(getobs(test), X[:, 5:])

    (x_tr, y_tr), (x_te, y_te) = splitobs((X, y), .6)
    assert (nobs(x_tr), nobs(y_tr), nobs(x_te), nobs(y_te)) == (6, 6, 4, 4)
    assert_array_equal(getobs(y_te), [6, 7, 8, 9])

    parts = splitobs(X.T, (.2, .5), obsdim='first')
    assert [getobs(p).shape for p in parts] == [(2, 3), (5, 3), (3, 3)]

    # splitting subsets composes indices
    train, test = splitobs(DataSubset(X, [9, 8, 7, 6]), .5)
    assert test == DataSubset(X, [7, 6])

    with pytest.raises(DimensionMismatch):
        splitobs((X, y[:3]))


def test_shuffleobs():
    X = np.arange(20).reshape(2, 10)
    y = np.arange(10)

    s = shuffleobs(X, rng=seed)
    assert s.data is X
    assert sorted(s.indices) == list(range(10))
    assert_array_equal(np.sort(getobs(s), axis=1), X)

    # reproducible
    assert shuffleobs(X, rng=seed) == shuffleobs(X, rng=seed)
    xs, ys = shuffleobs((X, y), rng=seed)
    assert xs == shuffleobs(X, rng=seed)

    # one permutation for all elements
    x, t = getobs(shuffleobs((X, y)))
    assert_array_equal(x[0], t)
    assert_array_equal(x[1], t + 10)

    data = [random.random() for _ in range(50)]
    shuffled = getobs(shuffleobs(data))
    assert sorted(shuffled) == sorted(data)

    s = shuffleobs(DataSubset(X, range(2, 8)))
    assert s.data is X
    assert sorted(s.indices) == list(range(2, 8))

    s = shuffleobs(X, obsdim='first', rng=seed)
    assert sorted(s.indices) == [0, 1]

    with pytest.raises(DimensionMismatch):
        shuffleobs((X, y[:3]))
