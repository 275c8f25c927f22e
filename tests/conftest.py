import pytest

from cowtree import config as cw_config


@pytest.fixture(autouse=True)
def _fresh_runtime_config():
    cw_config.reset_runtime_config_cache()
    yield
    cw_config.reset_runtime_config_cache()
