import pytest
import numpy as np
from numpy.testing import assert_array_equal
from obstools import BoundsError, get_rng, randobs, seed, seterr
from obstools.utils import as_indices, basic_getitem, check_bounds, \
    compose_indices, indices_equal, isint


def test_isint():
    assert isint(3)
    assert isint(np.int64(3))
    assert not isint(True)
    assert not isint(3.)
    assert not isint(np.array([3]))


def test_as_indices():
    assert as_indices(None, 4) == range(4)
    assert as_indices(slice(1, None, 2), 6) == range(1, 6, 2)
    assert as_indices(np.int32(2)) == 2
    assert type(as_indices(np.int32(2))) is int
    assert as_indices(range(2, 5)) == range(2, 5)
    assert_array_equal(as_indices([3, 1, 1]), [3, 1, 1])
    assert as_indices([]).dtype == np.intp

    with pytest.raises(TypeError):
        as_indices([[1, 2]])
    with pytest.raises(TypeError):
        as_indices([.5, 1.])


def test_check_bounds():
    check_bounds(0, 1)
    check_bounds(range(0, 5), 5)
    check_bounds([], 0)

    for idx in (-1, 5, [0, 5], range(3, 6), np.array([-1, 0])):
        with pytest.raises(BoundsError):
            check_bounds(idx, 5)


def test_compose_indices():
    parent = range(10, 20)

    assert compose_indices(parent, 3) == 13
    assert compose_indices(parent, range(2, 5)) == range(12, 15)
    assert compose_indices(parent, range(4, -1, -1)) == range(14, 9, -1)
    assert compose_indices(parent, slice(None, None, -3)) \
        == range(19, 9, -3)
    assert_array_equal(compose_indices(parent, [0, 0, 9]), [10, 10, 19])
    assert_array_equal(compose_indices([5, 3, 1], range(1, 3)), [3, 1])
    assert compose_indices([5, 3, 1], -1 + 3) == 1
    assert_array_equal(compose_indices(7, [0, 0]), [7, 7])
    assert compose_indices(7, 0) == 7
    assert len(compose_indices(parent, [])) == 0

    with pytest.raises(BoundsError):
        compose_indices(parent, 10)
    with pytest.raises(BoundsError):
        compose_indices(parent, [-1])


def test_indices_equal():
    assert indices_equal(range(3), [0, 1, 2])
    assert indices_equal(2, np.int64(2))
    assert not indices_equal(2, [2])
    assert not indices_equal(range(3), range(4))
    assert indices_equal([], range(0))


class Sequence:
    def __init__(self, values):
        self.values = values

    def __len__(self):
        return len(self.values)

    @basic_getitem
    def __getitem__(self, key):
        assert isinstance(key, int) and key >= 0
        return self.values[key]

    def _subview(self, key):
        return Sequence([self.values[i] for i in key])


def test_basic_getitem():
    s = Sequence(list('abcde'))

    assert s[0] == 'a'
    assert s[-1] == 'e'
    assert s[1:4].values == ['b', 'c', 'd']
    assert s[::-2].values == ['e', 'c', 'a']
    assert s[[4, 4, 0]].values == ['e', 'e', 'a']
    assert s[np.array([1])].values == ['b']

    with pytest.raises(BoundsError):
        s[5]
    with pytest.raises(BoundsError):
        s[-6]
    with pytest.raises(BoundsError):
        s[[0, 5]]
    with pytest.raises(TypeError):
        s['a']


def test_rng():
    seed(3)
    a = get_rng().integers(1000, size=10)
    seed(3)
    b = get_rng().integers(1000, size=10)
    assert_array_equal(a, b)

    rng = np.random.default_rng(0)
    assert get_rng(rng) is rng
    assert_array_equal(get_rng(5).permutation(10),
                       np.random.default_rng(5).permutation(10))

    seed(3)
    assert_array_equal(randobs(list(range(100)), 10),
                       np.random.default_rng(3).integers(100, size=10))
    seed()


def test_seterr():
    assert seterr() == 'wrap'
    assert seterr('passthrough') == 'passthrough'
    assert seterr() == 'passthrough'
    assert seterr('wrap') == 'wrap'

    with pytest.raises(ValueError):
        seterr('ignore')
    assert seterr() == 'wrap'
