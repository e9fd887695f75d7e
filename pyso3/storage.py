import logging
from collections import namedtuple

import numpy as np
from numba import njit, types, int64

from pyso3.errors import InvalidParameterError, InvalidStorageError, OutOfRangeError
from pyso3.parameters import Storage, check_index, is_int

logger = logging.getLogger('pyso3.storage')

idx_3 = types.UniTuple(int64,3)
idx_2 = types.UniTuple(int64,2)


##################################################################
#  Array sizes
#
#  A padded n-slice holds the full (el,m) pyramid, i.e. L^2 entries.
#  A compact n-slice only holds el = |n|,...,L-1, i.e. L^2 - n^2 entries.
#  Summing over the slices with sum_{k=0}^{K} k^2 = K(K+1)(2K+1)/6 gives
#
#  padded  complex: (2N-1) L^2
#  padded  real   : N L^2
#  compact complex: (2N-1)(3L^2 - N(N-1))/3
#  compact real   : N(6L^2 - (N-1)(2N-1))/6
#
#  Both numerators are always multiples of 3 resp. 6, so the integer
#  divisions are exact.
@njit(int64(int64,int64),cache=True)
def padded_size(L,N):
    return (2*N-1)*L*L

@njit(int64(int64,int64),cache=True)
def padded_size_real(L,N):
    return N*L*L

@njit(int64(int64,int64),cache=True)
def compact_size(L,N):
    return (2*N-1)*(3*L*L - N*(N-1))//3

@njit(int64(int64,int64),cache=True)
def compact_size_real(L,N):
    return N*(6*L*L - (N-1)*(2*N-1))//6


##################################################################
#  Position of (el,m) inside one n-slice. With r = el^2 + el + m the
#  pairs (el,m) are numbered 0,1,...,L^2-1, which is the usual single
#  index packing of spherical harmonic coefficients. pyramid_to_elm is
#  its inverse; the two while loops fix possible rounding of the
#  floating point square root.
@njit(idx_2(int64),cache=True)
def pyramid_to_elm(r):
    el = int(np.sqrt(r))
    while el*el > r:
        el -= 1
    while (el+1)*(el+1) <= r:
        el += 1
    return el, r - el*el - el


##################################################################
#  ZERO_FIRST_PAD
#
#  n-slices ordered as n = 0,-1,1,-2,2,...,-(N-1),N-1
#  slice number of n: n >= 0 -> 2n, n < 0 -> -2n-1
@njit(int64(int64,int64,int64,int64,int64),cache=True)
def zero_first_pad_elmn2ind(el,m,n,L,N):
    if n < 0:
        offset = (-2*n - 1)*L*L
    else:
        offset = 2*n*L*L
    return offset + el*el + el + m

@njit(idx_3(int64,int64,int64),cache=True)
def zero_first_pad_ind2elmn(ind,L,N):
    L2 = L*L
    s = ind//L2
    if s % 2:
        n = -(s+1)//2
    else:
        n = s//2
    el,m = pyramid_to_elm(ind - s*L2)
    return el,m,n


##################################################################
#  NEG_FIRST_PAD
#
#  n-slices ordered as n = -(N-1),...,0,...,N-1
@njit(int64(int64,int64,int64,int64,int64),cache=True)
def neg_first_pad_elmn2ind(el,m,n,L,N):
    return (N-1 + n)*L*L + el*el + el + m

@njit(idx_3(int64,int64,int64),cache=True)
def neg_first_pad_ind2elmn(ind,L,N):
    L2 = L*L
    s = ind//L2
    el,m = pyramid_to_elm(ind - s*L2)
    return el,m,s - (N-1)


##################################################################
#  ZERO_FIRST_COMPACT
#
#  Same slice order as ZERO_FIRST_PAD. The slices -|n| and |n| are
#  preceded by slice 0 and by both slices of every magnitude k < |n|:
#
#  L^2 + 2 sum_{k=1}^{|n|-1} (L^2 - k^2) = (2|n|-1)(3L^2 - |n|(|n|-1))/3
#
#  (which also gives -L^2 for n=0). Positive n then skip the negative
#  slice of the same magnitude. Inside a slice el starts at |n|, hence
#  the -n^2.
@njit(int64(int64,int64,int64,int64,int64),cache=True)
def zero_first_compact_elmn2ind(el,m,n,L,N):
    absn = abs(n)
    offset = (2*absn - 1)*(3*L*L - absn*(absn - 1))//3
    if n >= 0:
        offset += L*L - n*n
    return offset + el*el - n*n + el + m

@njit(idx_3(int64,int64,int64),cache=True)
def zero_first_compact_ind2elmn(ind,L,N):
    # the slice boundaries are not evenly spaced, so walk through the
    # slices in storage order until ind falls inside one
    L2 = L*L
    n = 0
    while ind >= L2 - n*n:
        ind -= L2 - n*n
        if n == 0:
            n = -1
        elif n < 0:
            n = -n
        else:
            n = -(n+1)
    el,m = pyramid_to_elm(ind + n*n)
    return el,m,n


##################################################################
#  NEG_FIRST_COMPACT
#
#  Same slice order as NEG_FIRST_PAD. The padded offset (N-1+n) L^2 has
#  to be reduced by sum_{k=-(N-1)}^{n-1} k^2:
#
#  n <= 0: S(N-1) - S(|n|)
#  n >  0: S(N-1) + S(n-1)
#
#  with S(K) = K(K+1)(2K+1)/6.
@njit(int64(int64,int64,int64,int64,int64),cache=True)
def neg_first_compact_elmn2ind(el,m,n,L,N):
    absn = abs(n)
    offset = (N-1 + n)*L*L - (2*N - 1)*(N - 1)*N//6
    if n <= 0:
        offset += absn*(2*absn + 1)*(absn + 1)//6
    else:
        offset -= absn*(2*absn - 1)*(absn - 1)//6
    return offset + el*el - n*n + el + m

@njit(idx_3(int64,int64,int64),cache=True)
def neg_first_compact_ind2elmn(ind,L,N):
    L2 = L*L
    n = -(N-1)
    while ind >= L2 - n*n:
        ind -= L2 - n*n
        n += 1
    el,m = pyramid_to_elm(ind + n*n)
    return el,m,n


##################################################################
#  Lookup table of the whole layout, built by walking the slices in
#  storage order. Row i of the table holds (el,m,n) of flat index i.
@njit(cache=True)
def fill_ind2elmn_table(ns,L,compact):
    L2 = L*L
    total = 0
    for n in ns:
        if compact:
            total += L2 - n*n
        else:
            total += L2
    table = np.empty((total,3),dtype=np.int64)
    pos = 0
    for n in ns:
        start = 0
        if compact:
            start = abs(n)
        for el in range(start,L):
            for m in range(-el,el+1):
                table[pos,0] = el
                table[pos,1] = m
                table[pos,2] = n
                pos += 1
    return table


_Layout = namedtuple('_Layout',['size','elmn2ind','ind2elmn'])

_LAYOUTS = {
    Storage.ZERO_FIRST_PAD: _Layout(padded_size,zero_first_pad_elmn2ind,zero_first_pad_ind2elmn),
    Storage.ZERO_FIRST_COMPACT: _Layout(compact_size,zero_first_compact_elmn2ind,zero_first_compact_ind2elmn),
    Storage.NEG_FIRST_PAD: _Layout(padded_size,neg_first_pad_elmn2ind,neg_first_pad_ind2elmn),
    Storage.NEG_FIRST_COMPACT: _Layout(compact_size,neg_first_compact_elmn2ind,neg_first_compact_ind2elmn),
}


def layout_for(params):
    '''
    Validates params and returns the kernels of its storage convention
    together with the validated params (enum tags given as plain integers
    are converted to their members).
    '''
    params = params.validate(storage=True)
    if params.storage.compact and params.N > params.L:
        # slice n would hold L^2 - n^2 < 0 entries
        raise InvalidParameterError('Compact storage requires N <= L, got L={} and N={}.'.format(params.L,params.N))
    try:
        return _LAYOUTS[params.storage],params
    except KeyError:
        raise InvalidStorageError('Invalid storage method {!r}.'.format(params.storage)) from None


##################################################################
#  Everything below describes the layout for complex signals and
#  ignores params.reality. The real layout is derived from it in
#  pyso3.reality, and pyso3.indexing picks between the two.

def slice_order(params):
    '''
    Returns the values of n in the order in which their slices appear in
    the flmn array.
    '''
    layout,params = layout_for(params)
    N = params.N
    if params.storage.neg_first:
        return np.arange(-(N-1),N,dtype=np.int64)
    ns = np.zeros(2*N-1,dtype=np.int64)
    ns[1::2] = -np.arange(1,N)
    ns[2::2] = np.arange(1,N)
    return ns


def flmn_size(params):
    '''Number of entries of the flmn array of a complex signal.'''
    layout,params = layout_for(params)
    return int(layout.size(params.L,params.N))


def check_elmn(el,m,n,params):
    '''
    Raises OutOfRangeError unless (el,m,n) addresses an entry of the
    layout given by params.
    '''
    el = check_index(el,params.L,'Harmonic')
    if not is_int(m) or abs(m) > el:
        raise OutOfRangeError('Azimuthal index m={!r} must satisfy |m| <= el={}.'.format(m,el))
    if not is_int(n):
        raise OutOfRangeError('Orientational index must be an integer, got {!r}.'.format(n))
    if params.storage.compact and abs(n) > el:
        raise OutOfRangeError('Tried to access component with n > el in compact storage (el={}, n={}).'.format(el,n))
    if abs(n) > params.N-1:
        raise OutOfRangeError('Orientational index n={} must satisfy |n| <= N-1={}.'.format(n,params.N-1))
    return el,int(m),int(n)


def elmn2ind(el,m,n,params):
    '''
    Converts the harmonic indices (el,m,n) into the index of the flmn array
    of a complex signal.
    '''
    layout,params = layout_for(params)
    el,m,n = check_elmn(el,m,n,params)
    return int(layout.elmn2ind(el,m,n,params.L,params.N))


def ind2elmn(ind,params):
    '''
    Converts an index of the flmn array of a complex signal back into the
    harmonic indices (el,m,n). Exact inverse of elmn2ind.
    '''
    layout,params = layout_for(params)
    ind = check_index(ind,layout.size(params.L,params.N),'Array')
    el,m,n = layout.ind2elmn(ind,params.L,params.N)
    return int(el),int(m),int(n)


def _forward_loop(kernel):
    @njit
    def loop(el,m,n,L,N):
        out = np.empty(el.size,dtype=np.int64)
        for i in range(el.size):
            out[i] = kernel(el[i],m[i],n[i],L,N)
        return out
    return loop

_FORWARD_LOOPS = {storage: _forward_loop(layout.elmn2ind) for storage,layout in _LAYOUTS.items()}


def as_index_arrays(el,m,n):
    '''Broadcasts el, m, n to flat int64 arrays; also returns the broadcast shape.'''
    el,m,n = np.broadcast_arrays(np.asarray(el),np.asarray(m),np.asarray(n))
    shape = el.shape
    for name,x in (('el',el),('m',m),('n',n)):
        if not np.issubdtype(x.dtype,np.integer):
            raise OutOfRangeError('{} must be an integer array, got dtype {}.'.format(name,x.dtype))
    el,m,n = (x.astype(np.int64).ravel() for x in (el,m,n))
    return el,m,n,shape


def elmn2ind_array(el,m,n,params):
    '''
    Vectorized elmn2ind for broadcastable integer arrays el, m, n.

    Returns:
        np.ndarray: int64 array of flat indices with the broadcast shape.
    '''
    layout,params = layout_for(params)
    el,m,n,shape = as_index_arrays(el,m,n)
    bad = (el < 0) | (el >= params.L) | (np.abs(m) > el) | (np.abs(n) > params.N-1)
    if params.storage.compact:
        bad |= np.abs(n) > el
    if bad.any():
        i = np.flatnonzero(bad)[0]
        # reuse the scalar checks for the error message
        check_elmn(int(el[i]),int(m[i]),int(n[i]),params)
    out = _FORWARD_LOOPS[params.storage](el,m,n,params.L,params.N)
    return out.reshape(shape)


def ind2elmn_table(params):
    '''
    Returns:
        np.ndarray: int64 array of shape (flmn_size(params),3). Row i holds
        (el,m,n) of flat index i.
    '''
    layout,params = layout_for(params)
    table = fill_ind2elmn_table(slice_order(params),params.L,params.storage.compact)
    logger.debug('built ind2elmn table for L=%d N=%d %s with %d rows',
                 params.L, params.N, params.storage.name, len(table))
    return table
