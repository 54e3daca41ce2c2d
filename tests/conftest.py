import pytest
from loguru import logger

from detevo.rng import DeterministicRng


@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level="DEBUG")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def rng():
    return DeterministicRng(1234)
