import numpy as np
import yaml
import os


# knots to m/s (one nautical mile is 1852 m)
KNOTS_TO_MS = 1852.0/3600.0


def knots2ms(speed):
    '''Convert a current speed (or array of speeds) from knots to m/s.'''
    if isinstance(speed, list):
        speed = np.array(speed, dtype=float)
    return(speed*KNOTS_TO_MS)


def loadYAML(filename):
    '''
    Loads a YAML file, allowing !include <filename> to include another yaml
    in the file. Included file names are relative to the main file.

    Parameters
    ----------
    filename : str
        Filename (including path if needed) of main yaml file to load

    Returns
    -------
    info : dict
        Dictionary loaded from yaml

    '''

    if not os.path.isfile(filename):
        raise FileNotFoundError(f'File {filename} does not exist or cannot be read. Please check filename.')

    class IncludeLoader(yaml.FullLoader):
        pass

    IncludeLoader.root_dir = os.path.dirname(os.path.abspath(filename))
    IncludeLoader.add_constructor('!include', yamlInclude)

    with open(filename) as file:
        info = yaml.load(file, Loader=IncludeLoader)
        if not info:
            raise Exception(f'File {filename} is empty or cannot be read. Please check filename.')

    return(info)


def yamlInclude(loader, node):
    '''
    Custom constructor that allows !include tag to include another yaml in
    the main yaml

    Parameters
    ----------
    loader : YAML loader object
    node : YAML node
        YAML node for include

    Returns
    -------
    dict
        Contents of the included yaml
    '''
    file_to_include = loader.construct_scalar(node)
    if os.path.isabs(file_to_include):
        included_yaml = file_to_include
    else:
        included_yaml = os.path.join(loader.root_dir, file_to_include)
    try:
        with open(included_yaml) as file:
            return(yaml.load(file, Loader=loader.__class__))
    except FileNotFoundError:
        raise FileNotFoundError(f"Included file {included_yaml} not found")
    except yaml.YAMLError as err:
        raise Exception(f"Error ocurred while loading included file {included_yaml}: {err}")


def getFromDict(dict, key, shape=0, dtype=float, default=None):
    '''
    Function to streamline getting values from design dictionary from YAML file, including error checking.

    Parameters
    ----------
    dict : dict
        the dictionary
    key : string
        the key in the dictionary
    shape : int, optional
        The desired shape of the output. If not provided, assuming scalar output.
        If -1, any input shape is used (a scalar stays a scalar, a list becomes an array).
    dtype : type
        Must be a python type than can serve as a function to format the input value to the right type.
    default : number or list, optional
        The default value to fill in if the item isn't in the dictionary.
        Otherwise will raise error if the key doesn't exist. It may be a list
        (to be tiled shape times if shape > 1) but may not be a numpy array.
    '''

    if key in dict and dict[key] is not None:
        val = dict[key]                                      # get the value from the dictionary
        if shape==0:                                         # scalar input expected
            if np.isscalar(val):
                try:
                    return dtype(val)
                except (TypeError, ValueError):
                    raise ValueError(f"Value for key '{key}' cannot be converted to {dtype.__name__}: {val}")
            else:
                raise ValueError(f"Value for key '{key}' is expected to be a scalar but instead is: {val}")
        elif shape==-1:                                      # any input shape accepted
            if np.isscalar(val):
                return dtype(val)
            else:
                return np.array(val, dtype=dtype)
        else:
            if np.isscalar(val):                             # if a scalar value is provided and we need to produce an array
                return np.tile(dtype(val), shape)
            elif len(val) == shape:                          # throw an error if the input is not the same length as the shape
                return np.array([dtype(v) for v in val])
            else:
                raise ValueError(f"Value for key '{key}' is not the expected size of {shape} and is instead: {val}")

    else:
        if default is None:
            raise ValueError(f"Key '{key}' not found in input file...")
        else:
            if shape==0 or shape==-1:
                return default
            else:
                if np.isscalar(default):
                    return np.tile(default, shape)
                else:
                    return np.array(default)


def getListFromDict(dict, key, default=None):
    '''
    Get a list of entries from a design dictionary without converting them,
    so that each entry can be checked on its own when it is used. A single
    value becomes a one-entry list.

    Parameters
    ----------
    dict : dict
        the dictionary
    key : string
        the key in the dictionary
    default : list, optional
        The list to return if the item isn't in the dictionary. An empty list
        if not given.
    '''
    if key in dict and dict[key] is not None:
        val = dict[key]
        if isinstance(val, (list, tuple, np.ndarray)):
            return list(val)
        return [val]
    return list(default) if default is not None else []
