# tests design dictionary helpers

import pytest

import numpy as np
from numpy.testing import assert_allclose

from subsmoor.helpers import getFromDict, knots2ms


def test_getFromDict_scalar():

    d = {'depth': '85', 'name': 'A2', 'blank': None}
    assert(getFromDict(d, 'depth') == 85.0)
    assert(getFromDict(d, 'name', dtype=str) == 'A2')
    assert(getFromDict(d, 'friction', default=0.5) == 0.5)
    assert(getFromDict(d, 'blank', default=1.0) == 1.0)

    with pytest.raises(ValueError):
        getFromDict(d, 'friction')
    with pytest.raises(ValueError):
        getFromDict({'depth': [1, 2]}, 'depth')
    with pytest.raises(ValueError):
        getFromDict({'depth': 'deep'}, 'depth')


def test_getFromDict_arrays():

    d = {'speeds': [0, 1, 2], 'speed': 1.5}
    assert_allclose(getFromDict(d, 'speeds', shape=-1), [0, 1, 2])
    assert(getFromDict(d, 'speed', shape=-1) == 1.5)
    assert_allclose(getFromDict(d, 'speeds', shape=3), [0, 1, 2])
    assert_allclose(getFromDict(d, 'speed', shape=2), [1.5, 1.5])
    assert_allclose(getFromDict(d, 'other', shape=2, default=0.0), [0, 0])

    with pytest.raises(ValueError):
        getFromDict(d, 'speeds', shape=2)


def test_speed_conversion():

    assert(knots2ms(1.0) == pytest.approx(0.514444, abs=1e-6))
    assert_allclose(knots2ms([0.5, 2.0]), [0.257222, 1.028889], atol=1e-6)
