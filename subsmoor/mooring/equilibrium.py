"""Static equilibrium of a subsurface mooring chain: force propagation from
the anchor to the top element, and sweeps over current speed.
"""

from copy import deepcopy
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from subsmoor.errors import EmptyChain, InvalidChainBoundary, InvalidSpeedSample


class SolveResult():
    '''Solved state of a mooring chain at one current speed.

    The element list holds copies of the mooring's elements with their
    forces and angles filled in, ordered from the anchor up. A sample
    that could not be solved has ok=False, a reason, and no elements.
    '''

    def __init__(self, currentSpeed, depth, elements=None, ok=True, reason=''):

        self.currentSpeed = currentSpeed  # [knots]
        self.depth = depth                # water depth [m]
        self.elements = elements if elements else []
        self.ok = ok
        self.reason = reason

        if self.ok:
            self.totalRise = float(sum(el.deltaY for el in self.elements))  # height of the top element above the anchor [m]
            self.topDepth = self.depth - self.totalRise                     # depth of the top element below the surface [m]
            self.tension = self.elements[-1].lineUpLoad                     # terminal tension [N]
            self.angle = self.elements[-1].theta                            # terminal angle from vertical [rad]
        else:
            self.totalRise = np.nan
            self.topDepth = np.nan
            self.tension = np.nan
            self.angle = np.nan

    @property
    def surfaced(self):
        '''True if the top element would be at or above the water surface.'''
        return bool(self.ok and self.topDepth < 0)

    @property
    def belowSeabed(self):
        '''True if the top element would be below the anchor, which happens
        when the net weight of the chain pulls every segment downward.'''
        return bool(self.ok and (self.totalRise < 0 or self.topDepth > self.depth))

    def getProfile(self):
        '''Positions of the top of each element relative to the anchor.

        Returns
        -------
        x : array
            horizontal offset downstream of the anchor [m]
        z : array
            height above the anchor [m]
        '''
        x = np.cumsum([el.deltaX for el in self.elements])
        z = np.cumsum([el.deltaY for el in self.elements])
        return x, z

    def getResults(self):
        '''List of per-element result dictionaries.'''
        return [el.getResults() for el in self.elements]

    def __repr__(self):
        if not self.ok:
            return f"SolveResult(currentSpeed={self.currentSpeed}, ok=False, reason='{self.reason}')"
        return (f"SolveResult(currentSpeed={self.currentSpeed}, tension={self.tension:.1f}, "
                f"angle={np.degrees(self.angle):.2f} deg, totalRise={self.totalRise:.2f}, topDepth={self.topDepth:.2f})")


def checkChain(elements):
    '''Make sure a chain can be solved: it needs at least one element and
    must start with the anchor, which is the fixed lower boundary.'''

    if len(elements) == 0:
        raise EmptyChain('The mooring chain has no elements.')

    first = elements[0]
    if first.kind != 'anchor':
        raise InvalidChainBoundary(f"The first element of the chain must be an anchor, but element 0 ('{first.name}') "
                                   f"is a {first.kind} of type '{first['type'].name}'.",
                                   index=0, name=first.name, value=first.kind)


def checkSpeed(currentSpeed):
    '''Make sure a current speed sample [knots] is a non-negative number.'''
    try:
        speed = float(currentSpeed)
    except (TypeError, ValueError):
        raise InvalidSpeedSample(f"Current speed {currentSpeed!r} is not a number.", value=currentSpeed)
    if not np.isfinite(speed) or speed < 0:
        raise InvalidSpeedSample(f"Current speed must be a finite, non-negative number of knots, got {currentSpeed}.",
                                 value=currentSpeed)
    return speed


def solveChain(elements, currentSpeed, depth, display=0):
    '''Solve the static equilibrium of a chain of elements at one current speed.

    The anchor (element 0) is the fixed boundary with no line below it. The
    tension and angle above each element become the tension and angle below
    the next one, so the elements are solved strictly in order from the
    anchor up. The input elements are not modified.

    Parameters
    ----------
    elements : list of Element
        chain ordered from the anchor to the top element
    currentSpeed : float
        current speed [knots]
    depth : float
        water depth [m]
    display : int, optional
        0 for no output, 2 to print each element's result

    Returns
    -------
    SolveResult
    '''

    checkChain(elements)
    speed = checkSpeed(currentSpeed)

    chain = deepcopy(elements)  # deepcopy shares the frozen ElementSpecs rather than copying them

    lineDownLoad = 0.0
    phi = 0.0
    for i, el in enumerate(chain):
        el.reset()
        el.getDrag(speed)
        lineDownLoad, phi = el.balanceForces(lineDownLoad, phi)

        if display > 1:
            print(f"  {i:3d} {el.name:20s} drag={el.drag:10.2f} N  T={el.lineUpLoad:10.2f} N  "
                  f"theta={np.degrees(el.theta):7.2f} deg  dy={el.deltaY:7.3f} m")

    return SolveResult(speed, depth, elements=chain)


def sweepCurrentSpeeds(elements, currentSpeeds, depth, nproc=1, display=0):
    '''Solve a chain at each of a sequence of current speeds.

    Samples are independent. A speed that is not valid gives a SolveResult
    with ok=False rather than stopping the sweep. Results are in the same
    order as the speeds.

    Parameters
    ----------
    elements : list of Element
        chain ordered from the anchor to the top element
    currentSpeeds : list of float
        current speeds [knots]
    depth : float
        water depth [m]
    nproc : int, optional
        number of threads to solve samples with. The default is 1.
    display : int, optional
        0 for no output, 1 for a summary of failed, surfaced, or sunken samples

    Returns
    -------
    list of SolveResult
    '''

    checkChain(elements)  # chain problems fail the whole sweep up front

    def solveSample(speed):
        try:
            return solveChain(elements, speed, depth)
        except InvalidSpeedSample as e:
            return SolveResult(speed, depth, ok=False, reason=str(e))

    if nproc > 1 and len(currentSpeeds) > 1:
        with ThreadPoolExecutor(max_workers=nproc) as pool:
            results = list(pool.map(solveSample, currentSpeeds))
    else:
        results = [solveSample(speed) for speed in currentSpeeds]

    if display > 0:
        for i, res in enumerate(results):
            if not res.ok:
                print(f"Warning: current speed sample {i} ({res.currentSpeed!r}) failed: {res.reason}")
            elif res.surfaced:
                print(f"Warning: at {res.currentSpeed} knots the top element would be {-res.topDepth:.2f} m above the surface")
            elif res.belowSeabed:
                print(f"Warning: at {res.currentSpeed} knots the chain hangs below the anchor "
                      f"(total rise {res.totalRise:.2f} m); its net buoyancy is negative")
        print(f"Solved {sum(r.ok for r in results)} of {len(results)} current speeds")

    return results
