"""
Shared pytest fixtures.
"""

import pytest

from shared.config import get_config
from shared.test_helpers import KeyPairFactory, fixed_clock


@pytest.fixture(scope="session")
def key_pair():
    """RSA key pair shared by the whole test session."""
    return KeyPairFactory.create_rsa_key_pair()


@pytest.fixture(scope="session")
def private_key(key_pair):
    return key_pair.private_pem


@pytest.fixture(scope="session")
def public_key(key_pair):
    return key_pair.public_pem


@pytest.fixture
def clock():
    """Clock frozen at a known instant."""
    return fixed_clock()


@pytest.fixture(autouse=True)
def reset_config_cache():
    get_config.cache_clear()
    yield
    get_config.cache_clear()
