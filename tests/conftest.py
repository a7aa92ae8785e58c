import logging
from logging import NullHandler

import pytest

from termform.config import FormSettings
from termform.terminal.screen_buffer import ScreenBuffer
from termform.terminal.screen_io import ScreenIO
from termform.warnings import configure_default_filters


class ScriptedBuffer(ScreenBuffer):
    """ScreenBuffer whose queued keys never count as type-ahead.

    Confirmation prompts flush pending keys before asking; a scripted answer
    queued in advance has to survive that flush.
    """

    def key_available(self) -> bool:
        return False


def pytest_configure(config):
    config.option.log_cli_level = "INFO"
    config.addinivalue_line(
        "markers", "property: hypothesis property-based tests (pytest -m property)"
    )


@pytest.fixture
def screen_buffer():
    """Fixture providing a real 80x24 ScreenBuffer."""
    return ScreenBuffer(rows=24, cols=80)


@pytest.fixture
def screen(screen_buffer):
    """ScreenIO over the ``screen_buffer`` fixture."""
    return ScreenIO(screen_buffer)


@pytest.fixture
def scripted_buffer():
    return ScriptedBuffer(rows=24, cols=80)


@pytest.fixture
def scripted_screen(scripted_buffer):
    return ScreenIO(scripted_buffer)


@pytest.fixture
def fast_settings():
    """Settings with a short status interval and no beeping."""
    return FormSettings(status_interval=0.01, beep_on_reject=False)


@pytest.fixture
def preserve_root_logger():
    """Restore the root logger's level and handlers after the test."""
    root = logging.getLogger()
    level = root.level
    handlers = root.handlers[:]
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture(autouse=True)
def reset_warning_filters():
    configure_default_filters()
    yield
    configure_default_filters()


@pytest.fixture(autouse=True)
def suppress_logging():
    logger = logging.getLogger()
    old_handlers = logger.handlers[:]
    null_handler = NullHandler()
    logger.addHandler(null_handler)
    yield
    # Remove only the NullHandler we added
    try:
        logger.removeHandler(null_handler)
    except ValueError:
        pass
    # Restore any handlers that were removed during the test
    current_handlers = logger.handlers[:]
    for h in old_handlers:
        if h not in current_handlers:
            logger.addHandler(h)
