import enum
from typing import NamedTuple

import numpy as np

from pyso3.errors import InvalidParameterError, InvalidSchemeError, InvalidStorageError, OutOfRangeError

pi = np.pi
PI = pi

# maximal length of an order/storage label accepted by the label front end
STRING_LEN = 64

ORDER_ZEROFIRST = 'ZeroFirst'
ORDER_NEGFIRST = 'NegFirst'
STORAGE_PADDED = 'Padded'
STORAGE_COMPACT = 'Compact'


class SamplingScheme(enum.IntEnum):
    MW = 0
    MW_SS = 1


class Storage(enum.IntEnum):
    '''
    Layout of the flmn coefficient array.

    ZERO_FIRST stores the n-slices in the order n = 0,-1,1,-2,2,...
    NEG_FIRST stores them in the order n = -(N-1),...,0,...,N-1.
    PAD conventions reserve L**2 entries for every n-slice, including the
    always zero coefficients with el < |n|. COMPACT conventions drop those,
    so that slice n only holds L**2 - n**2 entries.
    '''
    ZERO_FIRST_PAD = 0
    ZERO_FIRST_COMPACT = 1
    NEG_FIRST_PAD = 2
    NEG_FIRST_COMPACT = 3

    @property
    def padded(self):
        return self in (Storage.ZERO_FIRST_PAD, Storage.NEG_FIRST_PAD)

    @property
    def compact(self):
        return not self.padded

    @property
    def zero_first(self):
        return self in (Storage.ZERO_FIRST_PAD, Storage.ZERO_FIRST_COMPACT)

    @property
    def neg_first(self):
        return not self.zero_first

    def neg_first_variant(self):
        if self.padded:
            return Storage.NEG_FIRST_PAD
        return Storage.NEG_FIRST_COMPACT

    @classmethod
    def from_labels(cls, order, storage):
        for name, value in (('order', order), ('storage', storage)):
            if not isinstance(value, str):
                raise InvalidParameterError('Storage {} must be a string.'.format(name))
            if len(value) + 1 >= STRING_LEN:
                raise InvalidParameterError('Storage {} exceeds maximum string length.'.format(name))
        try:
            return _LABELS[(order, storage)]
        except KeyError:
            if storage not in (STORAGE_PADDED, STORAGE_COMPACT):
                raise InvalidParameterError('Invalid storage type {!r}.'.format(storage)) from None
            raise InvalidParameterError('Invalid storage order {!r}.'.format(order)) from None


_LABELS = {
    (ORDER_ZEROFIRST, STORAGE_PADDED): Storage.ZERO_FIRST_PAD,
    (ORDER_ZEROFIRST, STORAGE_COMPACT): Storage.ZERO_FIRST_COMPACT,
    (ORDER_NEGFIRST, STORAGE_PADDED): Storage.NEG_FIRST_PAD,
    (ORDER_NEGFIRST, STORAGE_COMPACT): Storage.NEG_FIRST_COMPACT,
}

DEFAULT_SAMPLING = SamplingScheme.MW
DEFAULT_STORAGE = Storage.NEG_FIRST_PAD


def is_int(value):
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _as_member(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if is_int(value):
        try:
            return enum_cls(int(value))
        except ValueError:
            return None
    return None


def check_index(value, stop, name):
    if not is_int(value):
        raise OutOfRangeError('{} index must be an integer, got {!r}.'.format(name, value))
    if not 0 <= value < stop:
        raise OutOfRangeError('{} index {} outside of [0,{}).'.format(name, value, stop))
    return int(value)


class Parameters(NamedTuple):
    '''
    Band-limits and layout choices shared by every sampling and indexing call.

    L: harmonic band-limit, el ranges over [0,L)
    N: orientational band-limit, |n| ranges over [0,N)
    sampling_scheme: SamplingScheme
    storage: Storage
    reality: if True only coefficients with n >= 0 are stored
    '''
    L: int
    N: int
    sampling_scheme: SamplingScheme = DEFAULT_SAMPLING
    storage: Storage = DEFAULT_STORAGE
    reality: bool = False

    def validate(self, scheme=False, storage=False):
        '''
        Checks the band-limits and, on request, the enum tags that the calling
        routine dispatches on. Tags may be given as enum members or as their
        integer values. Returns the parameters with the requested tags
        converted to enum members.
        '''
        if not is_int(self.L) or self.L <= 0:
            raise InvalidParameterError('Harmonic band-limit must be a positive integer, got {!r}.'.format(self.L))
        if not is_int(self.N) or self.N <= 0:
            raise InvalidParameterError('Orientational band-limit must be a positive integer, got {!r}.'.format(self.N))
        params = self
        if scheme:
            tag = _as_member(SamplingScheme, self.sampling_scheme)
            if tag is None:
                raise InvalidSchemeError('Invalid sampling scheme {!r}.'.format(self.sampling_scheme))
            params = params._replace(sampling_scheme=tag)
        if storage:
            tag = _as_member(Storage, self.storage)
            if tag is None:
                raise InvalidStorageError('Invalid storage method {!r}.'.format(self.storage))
            params = params._replace(storage=tag)
        return params
