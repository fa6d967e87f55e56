import pytest

from seagsw.kernel import FunctionKernel
from seagsw.properties import SeawaterProperties


def _pair_difference(first, second):
    """N2 stand-in: SA difference and mean pressure"""
    return second[0] - first[0], 0.5 * (first[2] + second[2])


def _turner_stub(first, second):
    return second[0] - first[0], second[1] - first[1], 0.5 * (first[2] + second[2])


@pytest.fixture
def stub_kernel():
    """Kernel with simple, easily checked arithmetic in place of TEOS-10"""
    return FunctionKernel(
        elementwise={
            "rho": lambda SA, CT, p: SA + 10.0 * CT + 100.0 * p,
            "sigma0": lambda SA, CT: SA - CT,
            "grav": lambda latitude, p: latitude + p,
            "SA_from_SP": lambda SP, p, lon, lat: 1000.0 * lon + lat,
            "SP_from_SA": lambda SA, p, lon, lat: SA + 1000.0 * lon + lat,
            "CT_freezing": lambda SA, p, saturation_fraction: saturation_fraction,
            "t_freezing": lambda SA, p, saturation_fraction: -saturation_fraction,
        },
        paired={
            "Nsquared": _pair_difference,
            "Turner_Rsubrho": _turner_stub,
        },
    )


@pytest.fixture
def props(stub_kernel):
    """Property calculator over the stub kernel"""
    return SeawaterProperties(kernel=stub_kernel)
