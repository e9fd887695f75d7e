from collections import namedtuple

import numpy as np
from numba import njit, int64, float64

from pyso3.errors import InvalidSchemeError
from pyso3.parameters import SamplingScheme, check_index

pi = np.pi


###################################################################
#  McEwen & Wiaux (MW) sampling
#
#  alpha = 2*pi*a/(2L-1)        a in [0,2L-1)  -> 2L-1 points in [0,2pi)
#  beta  = pi*(2b+1)/(2L-1)     b in [0,L)     -> L points in (0,pi]
#  gamma = 2*pi*g/(2N-1)        g in [0,2N-1)  -> 2N-1 points in [0,2pi)
#
#  The last beta sample sits on the south pole, where all alpha samples
#  describe the same rotation. Hence the total number of distinct
#  samples on SO(3) is ((2L-1)(L-1)+1)(2N-1).
@njit(int64(int64,int64),cache=True)
def mw_n(L,N):
    return ((2*L-1)*(L-1) + 1)*(2*N-1)

@njit(int64(int64),cache=True)
def mw_nalpha(L):
    return 2*L-1

@njit(int64(int64),cache=True)
def mw_nbeta(L):
    return L

@njit(float64(int64,int64),cache=True)
def mw_a2alpha(a,L):
    return 2.0*a*pi/(2.0*L - 1.0)

@njit(float64(int64,int64),cache=True)
def mw_b2beta(b,L):
    return (2.0*b + 1.0)*pi/(2.0*L - 1.0)


###################################################################
#  McEwen & Wiaux symmetric sampling (MW_SS), samples both poles
#
#  alpha = 2*pi*a/(2L)          a in [0,2L)    -> 2L points in [0,2pi)
#  beta  = 2*pi*b/(2L)          b in [0,L+1)   -> L+1 points in [0,pi]
#  gamma = 2*pi*g/(2N-1)        g in [0,2N-1)  -> 2N-1 points in [0,2pi)
#
#  Both poles are degenerate in alpha, leaving ((2L)(L-1)+2)(2N-1)
#  distinct samples.
@njit(int64(int64,int64),cache=True)
def mw_ss_n(L,N):
    return ((2*L)*(L-1) + 2)*(2*N-1)

@njit(int64(int64),cache=True)
def mw_ss_nalpha(L):
    return 2*L

@njit(int64(int64),cache=True)
def mw_ss_nbeta(L):
    return L+1

@njit(float64(int64,int64),cache=True)
def mw_ss_a2alpha(a,L):
    return 2.0*a*pi/(2.0*L)

@njit(float64(int64,int64),cache=True)
def mw_ss_b2beta(b,L):
    return 2.0*b*pi/(2.0*L)


###################################################################
#  gamma sampling does not depend on the scheme
@njit(int64(int64),cache=True)
def ngamma(N):
    return 2*N-1

@njit(float64(int64,int64),cache=True)
def g2gamma(g,N):
    return 2.0*g*pi/(2.0*N - 1.0)


#######################################################################
# euler angle grids
#
# output: the euler angles of all grid points, as three separate 1d arrays
#    alpha[a] for a in [0,nalpha[
#    beta[b]  for b in [0,nbeta[
#    gamma[g] for g in [0,ngamma[
@njit(cache=True)
def mw_euler_angles(L,N):
    a = np.arange(2*L-1)
    b = np.arange(L)
    g = np.arange(2*N-1)
    alpha = 2*pi*a/(2*L-1)
    beta = (2*b+1)*pi/(2*L-1)
    gamma = 2*pi*g/(2*N-1)
    return alpha,beta,gamma

@njit(cache=True)
def mw_ss_euler_angles(L,N):
    a = np.arange(2*L)
    b = np.arange(L+1)
    g = np.arange(2*N-1)
    alpha = 2*pi*a/(2*L)
    beta = 2*pi*b/(2*L)
    gamma = 2*pi*g/(2*N-1)
    return alpha,beta,gamma


_Scheme = namedtuple('_Scheme',['n','nalpha','nbeta','a2alpha','b2beta','euler_angles'])

_SCHEMES = {
    SamplingScheme.MW: _Scheme(mw_n,mw_nalpha,mw_nbeta,mw_a2alpha,mw_b2beta,mw_euler_angles),
    SamplingScheme.MW_SS: _Scheme(mw_ss_n,mw_ss_nalpha,mw_ss_nbeta,mw_ss_a2alpha,mw_ss_b2beta,mw_ss_euler_angles),
}


def _scheme(params):
    params = params.validate(scheme=True)
    try:
        return _SCHEMES[params.sampling_scheme]
    except KeyError:
        raise InvalidSchemeError('Invalid sampling scheme {!r}.'.format(params.sampling_scheme)) from None


def sampling_n(params):
    '''Number of distinct samples on the rotation group.'''
    return int(_scheme(params).n(params.L,params.N))

def sampling_nalpha(params):
    return int(_scheme(params).nalpha(params.L))

def sampling_nbeta(params):
    return int(_scheme(params).nbeta(params.L))

def sampling_ngamma(params):
    _scheme(params)
    return int(ngamma(params.N))

def sampling_a2alpha(a,params):
    scheme = _scheme(params)
    a = check_index(a,scheme.nalpha(params.L),'Alpha')
    return scheme.a2alpha(a,params.L)

def sampling_b2beta(b,params):
    scheme = _scheme(params)
    b = check_index(b,scheme.nbeta(params.L),'Beta')
    return scheme.b2beta(b,params.L)

def sampling_g2gamma(g,params):
    _scheme(params)
    g = check_index(g,ngamma(params.N),'Gamma')
    return g2gamma(g,params.N)


def sampling_f_shape(params):
    '''
    Shape (ngamma, nbeta, nalpha) of a signal sampled on the full grid,
    alpha running fastest.
    '''
    scheme = _scheme(params)
    return (int(ngamma(params.N)), int(scheme.nbeta(params.L)), int(scheme.nalpha(params.L)))

def sampling_f_size(params):
    '''
    Number of values of a signal sampled on the full grid. Unlike sampling_n
    this counts the alpha samples on the poles separately.
    '''
    ng,nb,na = sampling_f_shape(params)
    return ng*nb*na


def get_euler_angles(params):
    '''
    Returns:
        tuple(np.ndarray): float64 arrays alpha, beta, gamma holding the sample
        positions of the grid defined by params.
    '''
    return _scheme(params).euler_angles(params.L,params.N)
