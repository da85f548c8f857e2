import pytest
from loguru import logger

from resolvconf.core._logging import disable_lib_logger


@pytest.fixture(autouse=True)
def _silence_logger():
    yield
    # the CLI points loguru at the captured stdout of the running test
    logger.remove()
    disable_lib_logger()
