import pytest
import numpy as np
from numpy.testing import assert_array_equal
from obstools import nobs, getobs, slidingwindow, DataSubset, \
    DataContainer, ArgumentError, EvaluationError, UnsupportedContainer, \
    seterr
from obstools.window import SlidingWindow, LabeledSlidingWindow


class Custom(DataContainer):
    def nobs(self):
        return 10

    def getobs(self, idx):
        return idx


def test_windows():
    data = list(range(1, 11))

    windows = slidingwindow(data, 3, 2)
    assert isinstance(windows, SlidingWindow)
    assert len(windows) == 4
    assert nobs(windows) == 4
    assert [getobs(w) for w in windows] \
        == [[1, 2, 3], [3, 4, 5], [5, 6, 7], [7, 8, 9]]
    assert windows[1] == DataSubset(data, range(2, 5))
    assert getobs(windows[-1]) == [7, 8, 9]

    windows = slidingwindow(data, 3)
    assert [getobs(w) for w in windows] == [[1, 2, 3], [4, 5, 6], [7, 8, 9]]

    windows = slidingwindow(data, 10)
    assert [getobs(w) for w in windows] == [data]

    windows = slidingwindow(data, 1, 4)
    assert [getobs(w) for w in windows] == [[1], [5], [9]]

    assert "SlidingWindow" in repr(windows)


def test_windows_errors():
    data = list(range(10))

    for size, stride in [(0, 1), (-1, 1), (11, 1), (3, 0), (3, -2)]:
        with pytest.raises(ArgumentError):
            slidingwindow(data, size, stride)
    with pytest.raises(ArgumentError):
        slidingwindow(data, 3, exclude_target=True)
    with pytest.raises(UnsupportedContainer):
        slidingwindow(Custom(), 2, obsdim='first')


def test_windows_arrays():
    X = np.arange(30).reshape(3, 10)
    y = np.arange(10)

    windows = slidingwindow(X, 4, 3)
    assert len(windows) == 3
    assert_array_equal(getobs(windows[1]), X[:, 3:7])

    windows = slidingwindow(X.T, 5, obsdim='first')
    assert len(windows) == 2
    assert_array_equal(getobs(windows[1]), X.T[5:])

    windows = slidingwindow((X, y), 2, 4)
    assert len(windows) == 3
    x, t = getobs(windows[2])
    assert_array_equal(x, X[:, 8:10])
    assert_array_equal(t, [8, 9])

    windows = slidingwindow(Custom(), 5)
    assert [list(getobs(w)) for w in windows] == [[0, 1, 2, 3, 4],
                                                  [5, 6, 7, 8, 9]]


def test_windows_slicing():
    data = list(range(20))
    windows = slidingwindow(data, 2, 3)

    assert len(windows) == 7
    sub = windows[2:5]
    assert len(sub) == 3
    assert [getobs(w) for w in sub] == [[6, 7], [9, 10], [12, 13]]
    assert [getobs(w) for w in sub[::-1]] == [[12, 13], [9, 10], [6, 7]]
    assert getobs(windows[[6, 0]]) == [[18, 19], [0, 1]]


def test_labeled_windows():
    data = list(range(1, 11))

    windows = slidingwindow(data, 3, target_fn=lambda i: i + 3)
    assert isinstance(windows, LabeledSlidingWindow)
    assert len(windows) == 3
    assert [getobs(w) for w in windows] \
        == [([1, 2, 3], 4), ([4, 5, 6], 7), ([7, 8, 9], 10)]

    x, t = windows[0]
    assert x == DataSubset(data, range(0, 3))
    assert t == DataSubset(data, 3)
    assert "LabeledSlidingWindow" in repr(windows)


def test_labeled_windows_trimming():
    data = list(range(10))

    # leading windows without targets
    windows = slidingwindow(data, 2, 1, target_fn=lambda i: i - 1)
    assert len(windows) == 8
    assert getobs(windows[0]) == ([1, 2], 0)
    assert getobs(windows[-1]) == ([8, 9], 7)

    # trailing windows without targets
    windows = slidingwindow(data, 2, 1, target_fn=lambda i: i + 2)
    assert len(windows) == 8
    assert getobs(windows[0]) == ([0, 1], 2)
    assert getobs(windows[-1]) == ([7, 8], 9)

    # several targets
    windows = slidingwindow(data, 3, target_fn=lambda i: [i - 1, i + 3])
    assert [getobs(w) for w in windows] \
        == [([3, 4, 5], [2, 6]), ([6, 7, 8], [5, 9])]

    windows = slidingwindow(data, 2, target_fn=lambda i: i + 20)
    assert len(windows) == 0


def test_labeled_windows_exclude():
    data = list(range(10))

    windows = slidingwindow(data, 3, 1, target_fn=lambda i: i + 1,
                            exclude_target=True)
    assert len(windows) == 8
    assert getobs(windows[0]) == ([0, 2], 1)
    assert getobs(windows[7]) == ([7, 9], 8)

    windows = slidingwindow(data, 4, 2, target_fn=lambda i: range(i, i + 2),
                            exclude_target=True)
    assert getobs(windows[1]) == ([4, 5], [2, 3])


def test_labeled_windows_arrays():
    X = np.random.rand(2, 12)

    windows = slidingwindow(X, 3, target_fn=lambda i: i + 3)
    assert len(windows) == 3
    x, t = getobs(windows[1])
    assert_array_equal(x, X[:, 3:6])
    assert_array_equal(t, X[:, 6])

    sub = windows[1:]
    assert len(sub) == 2
    assert_array_equal(getobs(sub[1])[1], X[:, 9])


class CustomException(Exception):
    pass


@pytest.mark.parametrize('evaluation', ['wrap', 'passthrough'])
def test_labeled_windows_exceptions(evaluation):
    def target_fn(i):
        if i > 4:
            raise CustomException
        return i + 1

    seterr(evaluation)
    error_t = EvaluationError if evaluation == "wrap" else CustomException

    with pytest.raises(error_t):
        slidingwindow(list(range(10)), 2, target_fn=target_fn)

    seterr('wrap')
