# tests drag, force propagation, and current speed sweeps along a mooring chain

import pytest
from pytest import approx

import numpy as np
from numpy.testing import assert_allclose

from subsmoor.elements.element_properties import loadElementProps
from subsmoor.mooring.element import Element, getDrag
from subsmoor.mooring.equilibrium import SolveResult, solveChain, sweepCurrentSpeeds, checkSpeed
from subsmoor.helpers import knots2ms, KNOTS_TO_MS
from subsmoor.errors import EmptyChain, InvalidChainBoundary, InvalidSpeedSample, InvalidMooringConfig


@pytest.fixture
def props():
    return loadElementProps('default')


@pytest.fixture
def chain(props):
    '''railroad wheel anchor, 4.5 m of chain, and an A2 float'''
    return [Element('E0', props['Single Railroad']),
            Element('E1', props['Chain'], L=4.5),
            Element('E2', props['A2'], name='A2 float')]


@pytest.fixture
def long_chain(props):
    return [Element('E0', props['50 LBS']),
            Element('E1', props['Chain'], L=1.0),
            Element('E2', props['A2']),
            Element('E3', props['1/4 In Wire'], L=10.0),
            Element('E4', props['SBE37-SMP']),
            Element('E5', props['1/4 In Wire'], L=5.0),
            Element('E6', props['Glass Float'])]


def test_knots():
    assert(KNOTS_TO_MS == approx(0.514444, abs=1e-6))
    assert_allclose(knots2ms([0, 1, 2]), [0, 0.514444, 1.028889], atol=1e-6)


def test_drag_model():

    v = 2*1852/3600
    assert(getDrag('component', 75.3, 2.0) == approx(75.3*v**2))
    assert(getDrag('line', 4.0, 2.0, L=4.5) == approx(4.5*4.0*v**2))
    assert(getDrag('line', 4.0, 2.0, L=4.5) == approx(19.06, abs=0.01))
    assert(getDrag('anchor', 0.0, 2.0) == 0.0)
    assert(getDrag('component', 75.3, 0.0) == 0.0)
    with pytest.raises(ValueError):
        getDrag('line', 4.0, 2.0)


def test_line_element(props):

    line = Element('E1', props['Chain'], L=4.5)
    assert(line.buoyancy == approx(-23.0*4.5))
    assert(line.span == approx(4.5))
    assert(line.name == 'E1')

    # a line with no length in the design or the catalog
    with pytest.raises(InvalidMooringConfig):
        Element('E1', props['Chain'])
    with pytest.raises(InvalidMooringConfig):
        Element('E1', props['Chain'], L=-2.0)


def test_point_elements(props):

    anchor = Element('E0', props['Single Railroad'])
    float_ = Element('E2', props['A2'], L=10.0)  # length is ignored for non-lines
    assert(anchor.span == 0.0)
    assert(float_.span == approx(0.7))
    assert(float_['L'] == 0.0)
    assert(float_.buoyancy == approx(320.0))


def test_scenario(chain):
    '''anchor, chain, and A2 float in a 2 knot current'''

    res = solveChain(chain, 2.0, depth=50.0)
    anchor, line, top = res.elements
    v = 2.0*1852/3600

    assert(anchor.drag == 0.0)
    assert(anchor.lineUpLoad == approx(2890.0))
    assert(line.drag == approx(19.06, abs=0.01))
    assert(top.drag == approx(75.3*v**2))

    # the top angle is not vertical, and the tension is more than the net buoyancy
    buoyancySum = -2890.0 - 23.0*4.5 + 320.0
    assert(res.angle != approx(0.0))
    assert(res.angle != approx(np.pi))
    assert(res.tension > abs(buoyancySum))

    # the terminal tension resolves into the summed drag and buoyancy
    assert(res.tension*np.sin(res.angle) == approx(line.drag + top.drag))
    assert(res.tension*np.cos(res.angle) == approx(buoyancySum))
    assert(res.tension == approx(np.hypot(line.drag + top.drag, buoyancySum)))


def test_propagation_contract(long_chain):

    for speed in [0.0, 0.7, 2.5]:
        res = solveChain(long_chain, speed, depth=100.0)
        assert(res.elements[0].lineDownLoad == 0.0)
        assert(res.elements[0].phi == 0.0)
        for i in range(1, len(res.elements)):
            assert(res.elements[i].lineDownLoad == res.elements[i-1].lineUpLoad)
            assert(res.elements[i].phi == res.elements[i-1].theta)


def test_zero_current(long_chain):

    res = solveChain(long_chain, 0.0, depth=100.0)

    runningFy = 0.0
    for el in res.elements:
        assert(el.drag == 0.0)
        runningFy += el.buoyancy
        assert(el.lineUpLoad == approx(abs(runningFy)))
        if runningFy >= 0:
            assert(el.theta == approx(0.0, abs=1e-9))
            assert(el.deltaY == approx(el.span))
        else:
            assert(abs(el.theta) == approx(np.pi, abs=1e-9))


def test_depression(long_chain):

    res = solveChain(long_chain, 1.5, depth=100.0)

    assert(res.elements[0].deltaY == 0.0)   # anchor is the datum
    for el in res.elements[1:]:
        assert(el.deltaY == approx(el.span*np.cos(el.theta)))
        assert(el.deltaX == approx(el.span*np.sin(el.theta)))

    assert(res.totalRise == approx(sum(el.deltaY for el in res.elements)))
    assert(res.topDepth == approx(100.0 - res.totalRise))

    x, z = res.getProfile()
    assert(len(x) == len(long_chain))
    assert(z[-1] == approx(res.totalRise))


def test_anchor_only(props):

    chain = [Element('E0', props['Single Railroad'])]
    res = solveChain(chain, 1.0, depth=40.0)

    assert(res.totalRise == 0.0)
    assert(res.topDepth == approx(40.0))
    assert(res.tension == approx(2890.0))


def test_determinism(long_chain):

    res1 = solveChain(long_chain, 1.3, depth=100.0)
    res2 = solveChain(long_chain, 1.3, depth=100.0)

    assert(res1.getResults() == res2.getResults())
    assert(res1.totalRise == res2.totalRise)


def test_inputs_unchanged(chain):

    solveChain(chain, 2.0, depth=50.0)
    for el in chain:
        assert(el.lineUpLoad == 0.0)
        assert(el.drag == 0.0)


def test_specs_shared(chain):

    res = solveChain(chain, 1.0, depth=50.0)
    for el, solved in zip(chain, res.elements):
        assert(solved is not el)
        assert(solved['type'] is el['type'])


def test_bad_chains(props):

    with pytest.raises(EmptyChain):
        solveChain([], 1.0, depth=50.0)

    chain = [Element('E0', props['A2']), Element('E1', props['Single Railroad'])]
    with pytest.raises(InvalidChainBoundary) as err:
        solveChain(chain, 1.0, depth=50.0)
    assert(err.value.index == 0)


@pytest.mark.parametrize('speed', [-0.5, float('nan'), float('inf'), 'fast', None])
def test_bad_speeds(chain, speed):

    with pytest.raises(InvalidSpeedSample):
        solveChain(chain, speed, depth=50.0)


def test_check_speed():
    assert(checkSpeed(0) == 0.0)
    assert(checkSpeed('1.5') == 1.5)


def test_sweep(long_chain):

    speeds = [0.0, 0.5, 1.0, 1.5, 2.0, 3.0]
    results = sweepCurrentSpeeds(long_chain, speeds, depth=100.0)

    assert(len(results) == len(speeds))
    assert([res.currentSpeed for res in results] == speeds)
    assert(all(res.ok for res in results))

    # same answer as individual solves
    for speed, res in zip(speeds, results):
        single = solveChain(long_chain, speed, depth=100.0)
        assert(res.getResults() == single.getResults())


def test_sweep_threads(long_chain):

    speeds = list(np.linspace(0, 3, 13))
    serial = sweepCurrentSpeeds(long_chain, speeds, depth=100.0)
    threaded = sweepCurrentSpeeds(long_chain, speeds, depth=100.0, nproc=4)

    assert([res.currentSpeed for res in threaded] == [res.currentSpeed for res in serial])
    for a, b in zip(serial, threaded):
        assert(a.getResults() == b.getResults())


def test_sweep_partial_results(chain):

    results = sweepCurrentSpeeds(chain, [0.5, -1.0, 1.5], depth=50.0)

    assert(len(results) == 3)
    assert(results[0].ok and results[2].ok)
    assert(not results[1].ok)
    assert('-1.0' in results[1].reason)
    assert(np.isnan(results[1].topDepth))
    assert(results[1].elements == [])


def test_sweep_bad_chain(props):

    chain = [Element('E0', props['Glass Float']), Element('E1', props['Chain'], L=2.0)]
    with pytest.raises(InvalidChainBoundary):
        sweepCurrentSpeeds(chain, [0.0, 1.0], depth=50.0)


def test_surfaced(props):

    chain = [Element('E0', props['50 LBS']),
             Element('E1', props['D2']),
             Element('E2', props['1/4 In Wire'], L=50.0),
             Element('E3', props['Glass Float'])]
    res = solveChain(chain, 0.0, depth=30.0)

    assert(res.totalRise == approx(0.8 + 50.0 + 0.6))
    assert(res.topDepth == approx(30.0 - 51.4))
    assert(res.surfaced)

    deep = solveChain(chain, 0.0, depth=300.0)
    assert(not deep.surfaced)


def test_failed_result():

    res = SolveResult(-1.0, 50.0, ok=False, reason='negative')
    assert(not res.surfaced)
    assert(np.isnan(res.tension))
    assert('ok=False' in repr(res))


def test_heavy_anchor(props):
    '''a railroad wheel outweighs the floats, so at slack water every segment
    hangs downward from the anchor'''

    chain = [Element('E0', props['Single Railroad']),
             Element('E1', props['Chain'], L=4.5),
             Element('E2', props['A2']),
             Element('E3', props['1/4 In Wire'], L=80.0),
             Element('E4', props['B3'])]
    res = solveChain(chain, 0.0, depth=85.0)

    assert(res.tension == approx(2321.5))
    assert(abs(res.angle) == approx(np.pi))
    assert(res.totalRise == approx(-85.9))
    assert(res.topDepth == approx(170.9))
    assert(res.belowSeabed)
    assert(not res.surfaced)

    # a float lifts once the running vertical force is positive
    light = solveChain([Element('E0', props['50 LBS']), Element('E1', props['D2'])], 0.0, depth=85.0)
    assert(not light.belowSeabed)
    assert(not SolveResult(-1.0, 85.0, ok=False).belowSeabed)


def test_sweep_warns_below_seabed(props, capsys):

    chain = [Element('E0', props['Single Railroad']),
             Element('E1', props['Chain'], L=4.5),
             Element('E2', props['B3'])]
    results = sweepCurrentSpeeds(chain, [0.0, 1.0], depth=85.0, display=1)

    assert(all(res.belowSeabed for res in results))
    assert('below the anchor' in capsys.readouterr().out)
