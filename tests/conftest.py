import pytest

from pgpkeys import config


@pytest.fixture(autouse=True, scope="session")
def _default_key_sizes():
    # A developer .env must not leak legacy mode into the suite.
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(config, "ELGAMAL_LEGACY_KEY_SIZES", False)
        yield
