'''
Exceptions raised by the sampling and indexing routines.

InvalidSchemeError and InvalidStorageError mean an unknown enum tag reached a
dispatch table. That is a programming error and should not be caught.
OutOfRangeError is raised for well typed but invalid indices and may be
handled by the caller.
'''


class SO3Error(Exception):
    pass


class InvalidSchemeError(SO3Error):
    pass


class InvalidStorageError(SO3Error):
    pass


class InvalidParameterError(SO3Error, ValueError):
    pass


class OutOfRangeError(SO3Error, IndexError):
    pass
