# class for a subsurface mooring

import numpy as np
import matplotlib.pyplot as plt

from subsmoor.helpers import getFromDict, getListFromDict
from subsmoor.errors import InvalidMooringConfig, SubsError
from subsmoor.elements.element_properties import loadElementProps, getElementSpec
from subsmoor.mooring.element import Element
from subsmoor.mooring.equilibrium import checkChain, solveChain, sweepCurrentSpeeds


class SubsMooring():
    '''
    Class for a subsurface mooring: an anchor on the seabed, lines of chain
    or wire, and floats and instruments, held up by their buoyancy and
    pushed over by the current. The chain is stored in self.elements in
    order from the anchor up.
    '''

    def __init__(self, dd=None, elementProps=None, depth=None, friction=None,
                 currentSpeeds=None, id=None, nproc=1, display=0):
        '''
        Parameters
        ----------
        dd: dictionary
            Design dictionary that describes the mooring.
            Layout: {
                     elements:    # ordered from the anchor up
                         [
                             {type: Single Railroad},
                             {type: Chain, L: 4.5},
                             {type: A2, name: top float},
                             ...
                         ]
                     depth              # water depth [m]
                     friction           # seabed friction coefficient [-]
                     current_speeds     # current speeds to sweep [knots]
                    }
        elementProps : dict, optional
            ElementProps dictionary from loadElementProps. The default catalog
            is used if not provided.
        depth, friction, currentSpeeds : optional
            Override the corresponding values in dd.
        id : str or int, optional
            Identifier of the mooring.
        nproc : int, optional
            Number of threads used to solve a current speed sweep.
        display : int, optional
            Verbosity: 0 silent, 1 summary messages, 2 per-element output.
        '''

        self.id = id
        self.dd = dd if dd else {}
        self.display = display
        self.nproc = nproc

        if elementProps is None:
            elementProps = loadElementProps(None)
        self.elementProps = elementProps

        # environment
        if depth is None:
            depth = getFromDict(self.dd, 'depth', default=np.nan)
        if friction is None:
            friction = getFromDict(self.dd, 'friction', default=np.nan)
        if currentSpeeds is None:
            currentSpeeds = getListFromDict(self.dd, 'current_speeds')

        self.depth = float(depth)             # water depth [m]
        self.friction = float(friction)       # seabed friction coefficient, not used by the solver
        if not isinstance(currentSpeeds, (list, tuple, np.ndarray)):
            currentSpeeds = [currentSpeeds]
        self.currentSpeeds = list(currentSpeeds)   # current speeds to sweep [knots], each checked when solved

        # chain of elements, ordered from the anchor up
        self.elements = []
        self.nElementIds = 0   # number of default element ids handed out; ids are never reused
        if 'elements' in self.dd:
            for i, el_dd in enumerate(self.dd['elements']):
                self.addElement(el_dd, index=i)
            checkChain(self.elements)  # a designed chain must start with its anchor

        # results of the most recent sweep
        self.results = []


    def addElement(self, el_dd, L=None, name=None, index=None):
        '''
        Add an element to the chain.

        Parameters
        ----------
        el_dd : dict or str
            Element design dictionary ({type, L, name}) or just a type name
        L : float, optional
            Line length [m], overriding any length in el_dd
        name : str, optional
            Element name, overriding any name in el_dd
        index : int, optional
            Position to insert the element at. Appended to the top if None.

        Returns
        -------
        Element
            The new element
        '''
        if isinstance(el_dd, str):
            el_dd = {'type': el_dd}
        else:
            el_dd = dict(el_dd)

        if not 'type' in el_dd:
            raise InvalidMooringConfig(f"Element entry {el_dd} needs a 'type' key", index=index)
        typeName = str(el_dd.pop('type'))
        if L is not None:
            el_dd['L'] = L
        if name is not None:
            el_dd['name'] = name

        spec = getElementSpec(typeName, elementProps=self.elementProps)

        if index is None:
            index = len(self.elements)
        newel = Element(f'E{self.nElementIds}', spec, **el_dd)
        self.nElementIds += 1
        self.elements.insert(index, newel)

        return(newel)


    def removeElement(self, index):
        '''Remove and return the element at a given position in the chain.'''
        return self.elements.pop(index)


    def checkConfig(self):
        '''Check that the mooring is a complete configuration: at least one
        anchor, one line, and one component, a positive water depth and
        a positive seabed friction coefficient.'''

        kinds = [el.kind for el in self.elements]
        for kind in ['anchor', 'line', 'component']:
            if kind not in kinds:
                raise InvalidMooringConfig(f"Mooring {self.id} needs at least one {kind}", name=self.id, value=kind)

        if not self.depth > 0:
            raise InvalidMooringConfig(f"Mooring {self.id} needs a positive water depth, got {self.depth}",
                                       name=self.id, value=self.depth)
        if not self.friction > 0:
            raise InvalidMooringConfig(f"Mooring {self.id} needs a positive seabed friction coefficient, got {self.friction}",
                                       name=self.id, value=self.friction)

        checkChain(self.elements)


    def checkChain(self):
        '''Check that the chain can be solved (not empty, anchor first).'''
        checkChain(self.elements)


    def solveEquilibrium(self, currentSpeed):
        '''Solve the static equilibrium of the mooring at one current speed.

        Parameters
        ----------
        currentSpeed : float
            current speed [knots]

        Returns
        -------
        SolveResult
        '''
        if self.display > 1:
            print(f"Mooring {self.id} at {currentSpeed} knots:")

        res = solveChain(self.elements, currentSpeed, self.depth, display=self.display)

        if res.surfaced and self.display > 0:
            print(f"Warning: mooring {self.id} top element would be {-res.topDepth:.2f} m above the surface at {currentSpeed} knots")
        elif res.belowSeabed and self.display > 0:
            print(f"Warning: mooring {self.id} hangs below its anchor at {currentSpeed} knots "
                  f"(total rise {res.totalRise:.2f} m); its net buoyancy is negative")

        return res


    def sweepCurrents(self, currentSpeeds=None):
        '''Solve the mooring at each current speed in a sweep.

        Parameters
        ----------
        currentSpeeds : list, optional
            current speeds [knots]. Defaults to self.currentSpeeds.

        Returns
        -------
        list of SolveResult
            one per speed, in the same order
        '''
        if currentSpeeds is None:
            currentSpeeds = self.currentSpeeds

        self.results = sweepCurrentSpeeds(self.elements, list(currentSpeeds), self.depth,
                                          nproc=self.nproc, display=self.display)
        return self.results


    def getSummary(self, results=None):
        '''Arrays of the chain-level results of a sweep, skipping failed samples.

        Returns
        -------
        dict
            currentSpeed [knots], tension [N], angle [deg], totalRise [m], topDepth [m]
        '''
        if results is None:
            results = self.results
        good = [res for res in results if res.ok]

        return dict(currentSpeed = np.array([res.currentSpeed for res in good]),
                    tension      = np.array([res.tension for res in good]),
                    angle        = np.degrees([res.angle for res in good]),
                    totalRise    = np.array([res.totalRise for res in good]),
                    topDepth     = np.array([res.topDepth for res in good]))


    def getWorstCase(self, results=None):
        '''The solved sample with the shallowest top element, or None if no
        sample was solved.'''
        if results is None:
            results = self.results
        good = [res for res in results if res.ok]
        if len(good) == 0:
            return None
        return min(good, key=lambda res: res.topDepth)


    def printResults(self, res):
        '''Print a table of the per-element results of one solve.'''

        if not res.ok:
            print(f"Mooring {self.id} at {res.currentSpeed} knots: not solved ({res.reason})")
            return

        print(f"Mooring {self.id} at {res.currentSpeed} knots (depth {self.depth} m)")
        print(f"{'#':>3s} {'name':20s} {'kind':10s} {'buoyancy':>10s} {'drag':>9s} {'T up':>10s} {'theta':>8s} {'dy':>8s}")
        for i, el in enumerate(res.elements):
            print(f"{i:3d} {el.name:20s} {el.kind:10s} {el.buoyancy:10.1f} {el.drag:9.2f} "
                  f"{el.lineUpLoad:10.1f} {np.degrees(el.theta):8.2f} {el.deltaY:8.3f}")
        print(f"Total rise {res.totalRise:.2f} m, top depth {res.topDepth:.2f} m, "
              f"tension {res.tension:.1f} N at {np.degrees(res.angle):.2f} deg")
        if res.surfaced:
            print("Warning: the top element breaches the surface")
        elif res.belowSeabed:
            print("Warning: the top element is below the anchor; the net buoyancy of the chain is negative")


    def plotProfile(self, results=None, ax=None, color=None, label_speeds=True):
        '''Plot the shape of the mooring for one or more solved current speeds.

        Parameters
        ----------
        results : SolveResult or list of SolveResult, optional
            Solves to plot. Defaults to the last sweep.
        ax : matplotlib axes, optional
            Axes to plot on. A new figure is made if not given.
        color : str, optional
            Line color. Cycles through the default colors if not given.

        Returns
        -------
        fig, ax
        '''
        if results is None:
            results = self.results
        if not isinstance(results, (list, tuple)):
            results = [results]

        if ax is None:
            fig, ax = plt.subplots(1,1)
        else:
            fig = ax.get_figure()

        for res in results:
            if not res.ok:
                continue
            x, z = res.getProfile()
            x = np.hstack([0, x])
            z = np.hstack([0, z])
            label = f"{res.currentSpeed} kn" if label_speeds else None
            ax.plot(x, z, '.-', color=color, label=label)

        if np.isfinite(self.depth):
            ax.axhline(self.depth, color='b', ls='--', lw=1, label='surface')
        ax.axhline(0, color='k', lw=1)
        ax.set_xlabel('Horizontal offset (m)')
        ax.set_ylabel('Height above anchor (m)')
        if label_speeds:
            ax.legend()

        return fig, ax


    def plotSweep(self, results=None, axes=None):
        '''Plot the terminal tension, top angle, and top depth against current speed.

        Returns
        -------
        fig, axes
        '''
        summary = self.getSummary(results)
        if len(summary['currentSpeed']) == 0:
            raise SubsError(f"No solved current speeds to plot for mooring {self.id}", name=self.id)

        if axes is None:
            fig, axes = plt.subplots(3, 1, sharex=True)
        else:
            fig = axes[0].get_figure()

        axes[0].plot(summary['currentSpeed'], summary['tension'], '.-')
        axes[0].set_ylabel('Tension (N)')
        axes[1].plot(summary['currentSpeed'], summary['angle'], '.-')
        axes[1].set_ylabel('Angle (deg)')
        axes[2].plot(summary['currentSpeed'], summary['topDepth'], '.-')
        axes[2].axhline(0, color='b', ls='--', lw=1)
        axes[2].set_ylabel('Top depth (m)')
        axes[2].invert_yaxis()
        axes[2].set_xlabel('Current speed (knots)')

        return fig, axes
