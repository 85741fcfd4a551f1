"""Project class for subsmoor, containing the site information and the
subsurface mooring designs that make up a deployment."""

import numpy as np
import matplotlib.pyplot as plt

from subsmoor.helpers import getFromDict, getListFromDict, loadYAML
from subsmoor.errors import InvalidMooringConfig
from subsmoor.elements.element_properties import loadElementProps, makeElementSpec
from subsmoor.mooring.mooring import SubsMooring


class Project():
    '''
    A set of subsurface moorings deployed at a site. Site-wide values (water
    depth, seabed friction, current speeds to check) are shared by every
    mooring unless a mooring gives its own. All moorings share one element
    catalog.
    '''

    def __init__(self, file=None, depth=None, friction=None, currentSpeeds=None,
                 nproc=1, display=0):
        '''Initialize a Project. If input data is not provided, it will
        be empty and can be filled in later.

        Parameters
        ----------
        file : string or dict, optional
            Name of YAML file, or a python dictionary, containing input
            information describing the project, following the ontology:
                site:
                    depth       # water depth [m]
                    friction    # seabed friction coefficient [-]
                currents:
                    speeds      # current speeds to check [knots]
                element_types:  # optional catalog additions/overrides
                    {name: {kind, buoyancy, dragCoeff, height, length}}
                moorings:
                    {id: {elements: [...], depth, friction, current_speeds}}
        nproc : int, optional
            Number of threads used for each mooring's current speed sweep.
        display : int, optional
            Verbosity level passed to the moorings.
        '''

        # ----- site information -----
        self.depth = depth            # water depth [m]
        self.friction = friction      # seabed friction coefficient [-]
        self.currentSpeeds = currentSpeeds if currentSpeeds is not None else []  # [knots]

        # element catalog shared by all moorings
        self.elementProps = loadElementProps('default')

        # dictionary of SubsMooring objects
        self.mooringList = {}

        self.nproc = nproc
        self.display = display

        # ----- if an input file has been passed, load it -----
        if file:
            self.load(file)


    def load(self, info):
        '''
        Load a full set of project information from a dictionary or
        YAML file. This calls other methods for each part of it.

        Parameters
        ----------
        info : dict or filename
            Dictionary or YAML filename containing project info.
        '''
        if isinstance(info, str):
            project = loadYAML(info)
        else:
            project = info

        if 'site' in project:
            self.loadSite(project['site'])

        if 'currents' in project:
            self.currentSpeeds = getListFromDict(project['currents'], 'speeds')

        if 'element_types' in project:
            self.loadElementTypes(project['element_types'])

        if 'moorings' in project:
            for mID, dd in project['moorings'].items():
                self.addMooring(dd, id=mID)


    def loadSite(self, site):
        '''Load site information (water depth and seabed friction) from a dictionary.'''
        self.depth    = getFromDict(site, 'depth', default=np.nan)
        self.friction = getFromDict(site, 'friction', default=np.nan)


    def loadElementTypes(self, elementTypes):
        '''Add element types to the project catalog, replacing any default
        entries of the same name.'''
        for name, props in elementTypes.items():
            if str(name) in self.elementProps and self.display > 0:
                print(f"Warning: element type '{name}' replaces the default catalog entry")
            self.elementProps[str(name)] = makeElementSpec(str(name), props)


    def addMooring(self, dd, id=None):
        '''Create a SubsMooring from a design dictionary, using the project
        site values for anything the design doesn't give, and check that it
        is a complete configuration.

        Returns
        -------
        SubsMooring
        '''
        if id is None:
            n = len(self.mooringList)
            while f"M{n}" in self.mooringList:
                n += 1
            id = f"M{n}"
        elif id in self.mooringList:
            raise InvalidMooringConfig(f"Mooring id {id} is already used in the project", name=id)

        depth = dd.get('depth', self.depth)
        friction = dd.get('friction', self.friction)
        currentSpeeds = getListFromDict(dd, 'current_speeds', default=self.currentSpeeds)

        moor = SubsMooring(dd=dd, elementProps=self.elementProps, depth=np.nan if depth is None else depth,
                           friction=np.nan if friction is None else friction,
                           currentSpeeds=currentSpeeds, id=id, nproc=self.nproc, display=self.display)
        moor.checkConfig()

        self.mooringList[id] = moor
        return moor


    def run(self):
        '''Sweep every mooring over its current speeds.

        Returns
        -------
        dict
            lists of SolveResult keyed by mooring id
        '''
        results = {}
        for mID, moor in self.mooringList.items():
            if self.display > 0:
                print(f"Solving mooring {mID} for {len(moor.currentSpeeds)} current speeds")
            results[mID] = moor.sweepCurrents()
        return results


    def getSubmergenceReport(self, targetDepth=0.0):
        '''For each mooring, the shallowest top depth over its current sweep
        and whether the top element stays deeper than a target depth.
        Moorings that have not been swept are run first. A mooring whose
        chain hangs below its anchor at any solved speed is flagged with
        belowSeabed and is not counted as submerged.

        Parameters
        ----------
        targetDepth : float, optional
            Depth [m] the top element has to stay below. The default is 0,
            i.e. the top element just has to stay submerged.

        Returns
        -------
        dict
            keyed by mooring id, each a dict with currentSpeed, topDepth,
            belowSeabed, and submerged
        '''
        report = {}
        for mID, moor in self.mooringList.items():
            if len(moor.results) == 0:
                moor.sweepCurrents()
            worst = moor.getWorstCase()
            if worst is None:
                report[mID] = dict(currentSpeed=np.nan, topDepth=np.nan, belowSeabed=False, submerged=False)
            else:
                sunk = any(res.belowSeabed for res in moor.results)
                report[mID] = dict(currentSpeed=worst.currentSpeed, topDepth=worst.topDepth, belowSeabed=sunk,
                                   submerged=bool(worst.topDepth > targetDepth and not sunk))
            if self.display > 0:
                r = report[mID]
                if r['belowSeabed']:
                    note = '  <-- chain hangs below the anchor'
                elif not r['submerged']:
                    note = '  <-- above target depth ' + str(targetDepth) + ' m'
                else:
                    note = ''
                print(f"{str(mID):15s} shallowest top depth {r['topDepth']:8.2f} m at {r['currentSpeed']} knots{note}")
        return report


    def plot(self, currentSpeed=None):
        '''Plot the profile of every mooring, side by side, at one current
        speed or (if None) at the fastest speed of each mooring's sweep.

        Returns
        -------
        fig, axes
        '''
        n = len(self.mooringList)
        fig, axes = plt.subplots(1, max(n, 1), sharey=True, squeeze=False)
        for ax, (mID, moor) in zip(axes[0], self.mooringList.items()):
            if currentSpeed is None:
                if len(moor.results) == 0:
                    moor.sweepCurrents()
                speeds = [res.currentSpeed for res in moor.results if res.ok]
                speed = max(speeds) if speeds else 0.0
            else:
                speed = currentSpeed
            res = moor.solveEquilibrium(speed)
            moor.plotProfile(res, ax=ax)
            ax.set_title(str(mID))
        return fig, axes[0]
