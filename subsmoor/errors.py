# exception classes for subsurface mooring construction and solving


class SubsError(ValueError):
    '''Base class for errors raised while building or solving a subsurface mooring.'''

    def __init__(self, message, index=None, name=None, value=None):
        super().__init__(message)
        self.index = index  # position of the offending element in the chain, if any
        self.name = name    # element or type name, if any
        self.value = value  # offending value, if any


class UnknownElementType(SubsError):
    '''Raised when an element type name is not in the element catalog.'''
    pass


class EmptyChain(SubsError):
    '''Raised when a mooring chain has no elements.'''
    pass


class InvalidChainBoundary(SubsError):
    '''Raised when the first element of a chain is not an anchor.'''
    pass


class InvalidSpeedSample(SubsError):
    '''Raised for a negative or non-finite current speed.'''
    pass


class InvalidMooringConfig(SubsError):
    '''Raised when a mooring configuration or catalog entry is not valid.'''
    pass
