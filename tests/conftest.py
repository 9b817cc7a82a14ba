import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_clusterprep_logger():
    """init_logging() attaches handlers and disables propagation; undo it per test."""
    yield
    logger = logging.getLogger("clusterprep")
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
