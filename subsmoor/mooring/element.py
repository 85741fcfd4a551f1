# class for an element of a subsurface mooring chain

import numpy as np
from subsmoor.helpers import getFromDict, knots2ms
from subsmoor.errors import InvalidMooringConfig


class Element(dict):
    '''
    One element (anchor, line, or component) in a subsurface mooring chain.
    The fixed constants come from the ElementSpec stored in Element['type'],
    which is shared with every other element of the same type and never
    modified here.

    The force and angle attributes are filled in by a solve:

        buoyancy  lineUpLoad             |  /
              |   /                      |-/ theta
              |  /                       |/
             XXXXXX---> drag            /|
               /                  phi  /-|
              /                       /  |
        lineDownLoad
    '''
    def __init__(self, id, type, **kwargs):
        '''
        Elements inherit from dict, so properties can be passed in as arguments
        and they will be assigned like dictionary entries.

        Parameters
        ----------
        id : str or int
            identifier of the element, used as its name if no name is given
        type : ElementSpec
            catalog entry for this element's type
        kwargs
            Additional optional parameters, such as L (line length [m]) or name
        '''

        dict.__init__(self, **kwargs)  # initialize dict base class (will put kwargs into self dict)

        self.id = id
        self['type'] = type
        self['name'] = str(getFromDict(self, 'name', dtype=str, default=str(id)))

        # lines take their length from the design, or the catalog default
        if type.isLine:
            default = type.length if type.length else -1.0
            try:
                self['L'] = getFromDict(self, 'L', default=default)
            except ValueError as e:
                raise InvalidMooringConfig(f"Line '{self['name']}': {e}", name=self['name'])
            if not self['L'] > 0:
                raise InvalidMooringConfig(f"Line '{self['name']}' of type '{type.name}' needs a positive length L, got {self['L']}",
                                           name=self['name'], value=self['L'])
        else:
            self['L'] = 0.0

        self.reset()


    def reset(self):
        '''Clear the results of any previous solve.'''
        self.currentSpeed = 0.0   # current speed of the last solve [knots]
        self.drag         = 0.0   # horizontal drag force [N]
        self.lineUpLoad   = 0.0   # tension of the line segment above this element [N]
        self.theta        = 0.0   # angle of lineUpLoad from vertical [rad]
        self.lineDownLoad = 0.0   # tension of the line segment below this element [N]
        self.phi          = 0.0   # angle of lineDownLoad from vertical [rad]
        self.deltaY       = 0.0   # vertical span of this element [m]
        self.deltaX       = 0.0   # horizontal span of this element [m]


    @property
    def name(self):
        return self['name']

    @property
    def kind(self):
        return self['type'].kind

    @property
    def buoyancy(self):
        '''Net buoyancy of the element [N]. Line buoyancy scales with length.'''
        if self['type'].isLine:
            return self['type'].buoyancy*self['L']
        return self['type'].buoyancy

    @property
    def dragCoeff(self):
        return self['type'].dragCoeff

    @property
    def height(self):
        return self['type'].height

    @property
    def span(self):
        '''Length of the element along the line direction [m]: the line
        length for lines, the height for components, and zero for the anchor,
        which is the fixed datum that rise is measured from.'''
        if self['type'].isLine:
            return self['L']
        elif self['type'].isAnchor:
            return 0.0
        return self['type'].height


    def getDrag(self, currentSpeed):
        '''Compute and store the drag force on the element for a given
        current speed [knots].'''
        self.currentSpeed = currentSpeed
        self.drag = getDrag(self.kind, self.dragCoeff, currentSpeed, L=self['L'])
        return self.drag


    def balanceForces(self, lineDownLoad, phi):
        '''Resolve the forces on this element given the tension and angle of
        the line segment below it. Sets lineUpLoad and theta for the segment
        above, and the element's vertical and horizontal spans.

        Parameters
        ----------
        lineDownLoad : float
            tension of the segment below this element [N]
        phi : float
            angle of that tension from vertical [rad]

        Returns
        -------
        lineUpLoad : float
            tension of the segment above this element [N]
        theta : float
            angle of that tension from vertical [rad]
        '''
        self.lineDownLoad = lineDownLoad
        self.phi = phi

        Fx = self.drag + lineDownLoad*np.sin(phi)
        Fy = self.buoyancy + lineDownLoad*np.cos(phi)

        self.lineUpLoad = float(np.hypot(Fx, Fy))
        self.theta = float(np.arctan2(Fx, Fy))

        self.deltaY = float(self.span*np.cos(self.theta))
        self.deltaX = float(self.span*np.sin(self.theta))

        return self.lineUpLoad, self.theta


    def getResults(self):
        '''Return the solved quantities of this element as a dictionary.'''
        return dict(name=self['name'], type=self['type'].name, kind=self.kind,
                    L=self['L'], buoyancy=self.buoyancy, drag=self.drag,
                    lineUpLoad=self.lineUpLoad, theta=self.theta,
                    lineDownLoad=self.lineDownLoad, phi=self.phi,
                    deltaY=self.deltaY, deltaX=self.deltaX)


def getDrag(kind, dragCoeff, currentSpeed, L=None):
    '''Drag force [N] on an element in a current.

    Parameters
    ----------
    kind : str
        'component', 'line', or 'anchor'
    dragCoeff : float
        drag coefficient [N s^2/m^2], per metre for lines
    currentSpeed : float
        current speed [knots]
    L : float, optional
        line length [m], required for lines
    '''
    v = knots2ms(currentSpeed)  # current speed [m/s]

    if kind == 'line':
        if L is None:
            raise ValueError('A line length L is needed to compute the drag on a line')
        return L*dragCoeff*v**2
    else:
        return dragCoeff*v**2
