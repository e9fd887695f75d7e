'''
Index relations for real signals.

A real signal on SO(3) satisfies f_{el,m,-n} = (-1)^(m+n) conj(f_{el,-m,n}),
so only the coefficients with n >= 0 need to be stored. The real layout is
the n >= 0 tail of the corresponding NEG_FIRST layout: the storage
convention of the caller is swapped for its NEG_FIRST variant (keeping the
padded/compact choice) and everything in front of the n = 0 slice is cut
off.
'''
import logging

import numpy as np

from pyso3 import storage
from pyso3.errors import OutOfRangeError
from pyso3.parameters import check_index

logger = logging.getLogger('pyso3.reality')


def _neg_first(params):
    # scratch copy, the caller's parameters stay untouched
    layout,params = storage.layout_for(params)
    neg_params = params._replace(storage=params.storage.neg_first_variant(),reality=False)
    base = storage.elmn2ind(0,0,0,neg_params)
    logger.debug('real layout of %s starts at offset %d of %s',
                 params.storage.name, base, neg_params.storage.name)
    return neg_params,base


def flmn_size_real(params):
    layout,params = storage.layout_for(params)
    if params.storage.padded:
        return int(storage.padded_size_real(params.L,params.N))
    return int(storage.compact_size_real(params.L,params.N))


def elmn2ind_real(el,m,n,params):
    '''
    Converts (el,m,n) with n >= 0 into the index of the flmn array of a
    real signal.
    '''
    neg_params,base = _neg_first(params)
    ind = storage.elmn2ind(el,m,n,neg_params)
    # every n < 0 slice lies in front of the n = 0 slice
    if ind < base:
        raise OutOfRangeError('Real storage only holds n >= 0, got n={}.'.format(n))
    return ind - base


def ind2elmn_real(ind,params):
    '''Inverse of elmn2ind_real.'''
    neg_params,base = _neg_first(params)
    ind = check_index(ind,flmn_size_real(params),'Array')
    return storage.ind2elmn(base + ind,neg_params)


def elmn2ind_array_real(el,m,n,params):
    '''Vectorized elmn2ind_real for broadcastable integer arrays el, m, n.'''
    neg_params,base = _neg_first(params)
    el,m,n,shape = storage.as_index_arrays(el,m,n)
    if (n < 0).any():
        raise OutOfRangeError('Real storage only holds n >= 0, got n={}.'.format(n[n < 0][0]))
    return storage.elmn2ind_array(el,m,n,neg_params).reshape(shape) - base


def ind2elmn_table_real(params):
    '''
    Returns:
        np.ndarray: int64 array of shape (flmn_size_real(params),3). Row i
        holds (el,m,n) of index i of the real flmn array.
    '''
    neg_params,base = _neg_first(params)
    return np.ascontiguousarray(storage.ind2elmn_table(neg_params)[base:])
