import pytest

from modalpha import engine


@pytest.fixture(autouse=True)
def quiet_engine():
    engine.VERBOSE = False
    yield
    engine.VERBOSE = False


@pytest.fixture
def registry_snapshot():
    """Restore the cipher registry after a test registers extra ciphers."""
    saved = dict(engine.CIPHER_REGISTRY)
    yield engine.CIPHER_REGISTRY
    engine.CIPHER_REGISTRY.clear()
    engine.CIPHER_REGISTRY.update(saved)
