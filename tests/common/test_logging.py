import logging
import pytest
from src.common.logging import log_execution_time, set_log_level, setup_logger

def test_setup_logger_adds_single_handler():
    logger = setup_logger("src.tests.single")
    setup_logger("src.tests.single")
    assert len(logger.handlers) == 1

def test_set_log_level_only_touches_prefix():
    ours = setup_logger("src.tests.level")
    theirs = setup_logger("thirdparty.tests.level")
    set_log_level(logging.WARNING)
    assert ours.level == logging.WARNING
    assert theirs.level == logging.INFO

def test_log_execution_time_reraises(caplog):
    logger = logging.getLogger("src.tests.timed")

    @log_execution_time(logger)
    def explode():
        raise ValueError("boom")

    with caplog.at_level(logging.WARNING, logger="src.tests.timed"):
        with pytest.raises(ValueError):
            explode()
    assert "explode failed" in caplog.text

def test_log_execution_time_returns_result():
    @log_execution_time(logging.getLogger("src.tests.timed"))
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
