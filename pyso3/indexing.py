'''
Entry points combining the complex and the real index relations.

flmn_size, elmn2ind, ind2elmn, elmn2ind_array and ind2elmn_table pick the
complex layout of pyso3.storage or the real layout of pyso3.reality
according to params.reality.

elmn2ind_labels and ind2elmn_labels take plain values instead of a
Parameters bundle: the layout is given by the labels 'ZeroFirst'/'NegFirst'
and 'Padded'/'Compact', and flat indices count from 1.
'''
import numpy as np

from pyso3 import reality as _reality
from pyso3 import storage as _storage
from pyso3.errors import InvalidParameterError, OutOfRangeError
from pyso3.parameters import Parameters, Storage


def flmn_size(params):
    if params.reality:
        return _reality.flmn_size_real(params)
    return _storage.flmn_size(params)


def elmn2ind(el,m,n,params):
    if params.reality:
        return _reality.elmn2ind_real(el,m,n,params)
    return _storage.elmn2ind(el,m,n,params)


def ind2elmn(ind,params):
    if params.reality:
        return _reality.ind2elmn_real(ind,params)
    return _storage.ind2elmn(ind,params)


def elmn2ind_array(el,m,n,params):
    if params.reality:
        return _reality.elmn2ind_array_real(el,m,n,params)
    return _storage.elmn2ind_array(el,m,n,params)


def ind2elmn_table(params):
    if params.reality:
        return _reality.ind2elmn_table_real(params)
    return _storage.ind2elmn_table(params)


def _as_int(value,what):
    if isinstance(value,(bool,np.bool_)):
        raise InvalidParameterError('{} must be an integer.'.format(what))
    if isinstance(value,(float,np.floating)):
        if not np.isfinite(value) or not float(value).is_integer():
            raise InvalidParameterError('{} must be an integer.'.format(what))
        return int(value)
    if isinstance(value,(int,np.integer)):
        return int(value)
    raise InvalidParameterError('{} must be an integer.'.format(what))


def _parameters(L,N,order,storage,reality):
    L = _as_int(L,'Harmonic band-limit')
    if L <= 0:
        raise InvalidParameterError('Harmonic band-limit must be a positive integer.')
    N = _as_int(N,'Orientational band-limit')
    if N <= 0:
        raise InvalidParameterError('Orientational band-limit must be a positive integer.')
    if not isinstance(reality,(bool,np.bool_)):
        raise InvalidParameterError('Reality flag must be logical.')
    return Parameters(L,N,storage=Storage.from_labels(order,storage),reality=bool(reality))


def elmn2ind_labels(el,m,n,L,N,order='NegFirst',storage='Padded',reality=False):
    '''
    Returns:
        int: 1-based index of (el,m,n) in the flmn array.
    '''
    params = _parameters(L,N,order,storage,reality)
    el = _as_int(el,'Harmonic index')
    m = _as_int(m,'Azimuthal harmonic index')
    n = _as_int(n,'Orientational harmonic index')
    return elmn2ind(el,m,n,params) + 1


def ind2elmn_labels(ind,L,N,order='NegFirst',storage='Padded',reality=False):
    '''
    Returns:
        tuple(int): (el,m,n) stored at the 1-based index ind of the flmn array.
    '''
    params = _parameters(L,N,order,storage,reality)
    ind = _as_int(ind,'Array index')
    size = flmn_size(params)
    if not 1 <= ind <= size:
        raise OutOfRangeError('The array index must lie between 1 and {}.'.format(size))
    return ind2elmn(ind - 1,params)
