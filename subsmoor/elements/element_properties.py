# Functions for loading and using the catalog of mooring element types

import os
from dataclasses import dataclass
from typing import Optional

import numpy as np
import yaml

from subsmoor.helpers import getFromDict
from subsmoor.errors import UnknownElementType, InvalidMooringConfig


KINDS = ('component', 'line', 'anchor')


@dataclass(frozen=True)
class ElementSpec:
    '''
    Fixed physical constants of one named element type. Frozen, so a spec
    can be shared by every mooring that uses the type.

    Parameters
    ----------
    name : str
        catalog name of the element type (e.g. "A2", "Chain")
    kind : str
        'component', 'line', or 'anchor'
    buoyancy : float
        net vertical force [N], positive up. Per metre of line for lines [N/m].
    dragCoeff : float
        drag force per (m/s)^2 [N s^2/m^2]. Per metre of line for lines.
    height : float
        height of a component or anchor [m]. Zero for lines.
    length : float, optional
        default deployed length of a line [m]. None if a length must be given
        for each use of the line type.
    '''
    name: str
    kind: str
    buoyancy: float
    dragCoeff: float = 0.0
    height: float = 0.0
    length: Optional[float] = None

    def __deepcopy__(self, memo):
        return self  # immutable, so copies of a chain share it

    @property
    def isLine(self):
        return self.kind == 'line'

    @property
    def isAnchor(self):
        return self.kind == 'anchor'


def loadElementProps(source):
    '''Load a set of element type properties from a specified YAML file or
    passed dictionary. Any optional properties not included will take a
    default value. Returns a dictionary of ElementSpec objects keyed by type
    name.

    Parameters
    ----------
    source : dict or filename
        YAML file name or dictionary containing element type properties.
        None or "default" loads the catalog packaged with subsmoor.

    Returns
    -------
    dictionary
        ElementProps dictionary mapping each element type name to its
        ElementSpec.
    '''

    if isinstance(source, dict):
        pass

    elif source is None or source=="default":
        dir = os.path.dirname(os.path.realpath(__file__))
        with open(os.path.join(dir,"ElementProps_default.yaml")) as file:
            source = yaml.load(file, Loader=yaml.FullLoader)

    elif isinstance(source, str):
        with open(source) as file:
            source = yaml.load(file, Loader=yaml.FullLoader)

    else:
        raise Exception("loadElementProps supplied with invalid source")

    if 'element_types' in source:
        elementTypes = source['element_types']
    else:
        raise Exception("YAML file or dictionary must have a 'element_types' field containing the data")

    output = dict()  # output dictionary of ElementSpecs

    for name, props in elementTypes.items():
        output[str(name)] = makeElementSpec(str(name), props)

    return output


def makeElementSpec(name, props):
    '''Create an ElementSpec from a dictionary of properties, checking that
    the values describe a usable element type.'''

    try:
        kind = getFromDict(props, 'kind', dtype=str)
        buoyancy  = getFromDict(props, 'buoyancy')
        dragCoeff = getFromDict(props, 'dragCoeff', default=0.0)
        height    = getFromDict(props, 'height'   , default=0.0)
        length    = getFromDict(props, 'length') if props.get('length') is not None else None
    except ValueError as e:
        raise InvalidMooringConfig(f"Element type '{name}': {e}", name=name)

    kind = kind.lower()
    if kind not in KINDS:
        raise InvalidMooringConfig(f"Element type '{name}' has kind '{kind}', which needs to be one of {KINDS}",
                                   name=name, value=kind)

    for key, val in [('buoyancy', buoyancy), ('dragCoeff', dragCoeff), ('height', height)]:
        if not np.isfinite(val):
            raise InvalidMooringConfig(f"Element type '{name}' has a non-finite {key}: {val}", name=name, value=val)
    if dragCoeff < 0:
        raise InvalidMooringConfig(f"Element type '{name}' has a negative drag coefficient: {dragCoeff}",
                                   name=name, value=dragCoeff)
    if height < 0:
        raise InvalidMooringConfig(f"Element type '{name}' has a negative height: {height}", name=name, value=height)

    if kind == 'line':
        height = 0.0
        if length is not None and not length > 0:
            raise InvalidMooringConfig(f"Line type '{name}' has a non-positive length: {length}", name=name, value=length)
    else:
        length = None

    return ElementSpec(name=name, kind=kind, buoyancy=buoyancy, dragCoeff=dragCoeff,
                       height=height, length=length)


def getElementSpec(typeName, elementProps=None, source=None):
    '''Look up the ElementSpec of a named element type. The catalog can be
    passed in via the elementProps parameter, or loaded from a YAML filename
    or dictionary passed in via the source parameter. If neither is given,
    the default catalog is used.

    Parameters
    ----------
    typeName : string
        name of the element type in the catalog
    elementProps : dictionary
        ElementProps dictionary created by loadElementProps.
    source : dict or filename (optional)
        YAML file name or dictionary containing element type properties

    Returns
    -------
    ElementSpec
    '''

    if source is not None:
        if elementProps is not None:
            print('Warning: both elementProps and source arguments were passed to getElementSpec. elementProps will be ignored.')
        elementProps = loadElementProps(source)
    elif elementProps is None:
        elementProps = loadElementProps(None)

    # raise an error if the type isn't in the catalog
    if not typeName in elementProps:
        raise UnknownElementType(f"Specified element type, {typeName}, is not in the element catalog.",
                                 name=typeName)

    return elementProps[typeName]
