import logging

import pytest


@pytest.fixture(autouse=True)
def _drop_cli_log_handlers():
    yield
    # configure_logging binds a handler to the captured stderr of the test that ran it.
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
