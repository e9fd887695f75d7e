import logging

from pyso3 import errors
from pyso3 import parameters
from pyso3 import sampling
from pyso3 import storage
from pyso3 import reality
from pyso3 import indexing

from pyso3.errors import SO3Error, InvalidSchemeError, InvalidStorageError, InvalidParameterError, OutOfRangeError
from pyso3.parameters import Parameters, SamplingScheme, Storage
from pyso3.indexing import flmn_size, elmn2ind, ind2elmn, elmn2ind_array, ind2elmn_table

logging.getLogger('pyso3').addHandler(logging.NullHandler())

__version__ = '0.1.0'
