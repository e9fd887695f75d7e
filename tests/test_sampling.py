import numpy as np
import pytest

from pyso3 import sampling
from pyso3.errors import InvalidParameterError, InvalidSchemeError, OutOfRangeError
from pyso3.parameters import Parameters, SamplingScheme

MW = SamplingScheme.MW
MW_SS = SamplingScheme.MW_SS

# ((2L-1)(L-1)+1)(2N-1) and ((2L)(L-1)+2)(2N-1), worked out by hand
sample_counts = {
    MW: {1: (1,3,7), 2: (4,12,28), 4: (22,66,154), 8: (106,318,742)},
    MW_SS: {1: (2,6,14), 2: (6,18,42), 4: (26,78,182), 8: (114,342,798)},
}


@pytest.mark.parametrize('scheme',[MW,MW_SS])
@pytest.mark.parametrize('L',[1,2,4,8])
def test_sampling_n(scheme,L):
    for N,expected in zip((1,2,4),sample_counts[scheme][L]):
        assert sampling.sampling_n(Parameters(L,N,sampling_scheme=scheme)) == expected


def test_sampling_n_example():
    assert sampling.sampling_n(Parameters(4,2,sampling_scheme=MW)) == 66


@pytest.mark.parametrize('L,N',[(1,1),(3,2),(8,4)])
def test_counts(L,N):
    params = Parameters(L,N,sampling_scheme=MW)
    assert sampling.sampling_nalpha(params) == 2*L-1
    assert sampling.sampling_nbeta(params) == L
    assert sampling.sampling_ngamma(params) == 2*N-1

    params = Parameters(L,N,sampling_scheme=MW_SS)
    assert sampling.sampling_nalpha(params) == 2*L
    assert sampling.sampling_nbeta(params) == L+1
    assert sampling.sampling_ngamma(params) == 2*N-1


@pytest.mark.parametrize('L',[1,2,5,16])
def test_mw_beta_range(L):
    params = Parameters(L,2,sampling_scheme=MW)
    nbeta = sampling.sampling_nbeta(params)
    betas = [sampling.sampling_b2beta(b,params) for b in range(nbeta)]
    assert betas[0] > 0
    # the last sample sits on the south pole
    assert np.isclose(betas[-1],np.pi)
    assert np.all(np.diff(betas) > 0)


@pytest.mark.parametrize('L',[1,2,5,16])
def test_mw_ss_beta_range(L):
    params = Parameters(L,2,sampling_scheme=MW_SS)
    nbeta = sampling.sampling_nbeta(params)
    assert sampling.sampling_b2beta(0,params) == 0
    assert np.isclose(sampling.sampling_b2beta(nbeta-1,params),np.pi)


@pytest.mark.parametrize('scheme',[MW,MW_SS])
def test_alpha_gamma_range(scheme):
    params = Parameters(6,3,sampling_scheme=scheme)
    alphas = [sampling.sampling_a2alpha(a,params) for a in range(sampling.sampling_nalpha(params))]
    gammas = [sampling.sampling_g2gamma(g,params) for g in range(sampling.sampling_ngamma(params))]
    assert alphas[0] == 0 and gammas[0] == 0
    assert max(alphas) < 2*np.pi
    assert max(gammas) < 2*np.pi
    assert np.allclose(np.diff(alphas),2*np.pi/len(alphas))
    assert np.allclose(np.diff(gammas),2*np.pi/len(gammas))


def test_angle_values():
    params = Parameters(4,2,sampling_scheme=MW)
    assert np.isclose(sampling.sampling_a2alpha(3,params),6*np.pi/7)
    assert np.isclose(sampling.sampling_b2beta(1,params),3*np.pi/7)
    assert np.isclose(sampling.sampling_g2gamma(2,params),4*np.pi/3)
    params = params._replace(sampling_scheme=MW_SS)
    assert np.isclose(sampling.sampling_a2alpha(3,params),6*np.pi/8)
    assert np.isclose(sampling.sampling_b2beta(1,params),2*np.pi/8)


@pytest.mark.parametrize('scheme',[MW,MW_SS])
def test_euler_angles(scheme):
    params = Parameters(5,3,sampling_scheme=scheme)
    alpha,beta,gamma = sampling.get_euler_angles(params)
    assert alpha.shape == (sampling.sampling_nalpha(params),)
    assert beta.shape == (sampling.sampling_nbeta(params),)
    assert gamma.shape == (sampling.sampling_ngamma(params),)
    assert np.allclose(alpha,[sampling.sampling_a2alpha(a,params) for a in range(len(alpha))])
    assert np.allclose(beta,[sampling.sampling_b2beta(b,params) for b in range(len(beta))])
    assert np.allclose(gamma,[sampling.sampling_g2gamma(g,params) for g in range(len(gamma))])


def test_f_shape():
    params = Parameters(4,2,sampling_scheme=MW)
    assert sampling.sampling_f_shape(params) == (3,4,7)
    assert sampling.sampling_f_size(params) == 84
    params = params._replace(sampling_scheme=MW_SS)
    assert sampling.sampling_f_shape(params) == (3,5,8)
    assert sampling.sampling_f_size(params) == 120


def test_invalid_scheme():
    params = Parameters(4,2,sampling_scheme='MW')
    with pytest.raises(InvalidSchemeError):
        sampling.sampling_n(params)
    with pytest.raises(InvalidSchemeError):
        sampling.sampling_b2beta(0,params)


def test_integer_scheme_tags():
    assert sampling.sampling_n(Parameters(3,2,sampling_scheme=1)) == sampling.sampling_n(Parameters(3,2,sampling_scheme=MW_SS))
    assert sampling.sampling_nbeta(Parameters(3,2,sampling_scheme=0)) == 3
    for tag in (5,-1,True):
        with pytest.raises(InvalidSchemeError):
            sampling.sampling_n(Parameters(3,2,sampling_scheme=tag))


@pytest.mark.parametrize('L,N',[(0,1),(1,0),(-3,2),(2.0,1),(True,1)])
def test_invalid_band_limits(L,N):
    with pytest.raises(InvalidParameterError):
        sampling.sampling_n(Parameters(L,N))


@pytest.mark.parametrize('scheme',[MW,MW_SS])
def test_angle_index_out_of_range(scheme):
    params = Parameters(4,2,sampling_scheme=scheme)
    with pytest.raises(OutOfRangeError):
        sampling.sampling_a2alpha(sampling.sampling_nalpha(params),params)
    with pytest.raises(OutOfRangeError):
        sampling.sampling_b2beta(-1,params)
    with pytest.raises(OutOfRangeError):
        sampling.sampling_g2gamma(3,params)
