import pytest

from groupenc import algos
from groupenc.groups import G1Group, G2Group
from groupenc.utils import DeterministicRandom

SEED = 1231275789


@pytest.fixture(params=[G1Group, G2Group], ids=["G1", "G2"])
def group(request):
    return request.param()


@pytest.fixture
def rng():
    return DeterministicRandom(SEED)


@pytest.fixture
def params(group, rng):
    return algos.setup(group, rng)


@pytest.fixture
def keypair(params, rng):
    return algos.keygen(params, rng)
