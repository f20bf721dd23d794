import logging
from collections.abc import Iterator

import pytest

from restock_parser.logging.logger import Log


@pytest.fixture()
def restock_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("restock_parser")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    logger.handlers.clear()
    yield logger
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


class TestLog:
    def test_configure_sets_level_and_single_handler(self, restock_logger: logging.Logger) -> None:
        Log.configure("debug", "test")
        Log.configure("debug", "test")
        assert restock_logger.level == logging.DEBUG
        assert len(restock_logger.handlers) == 1
        assert restock_logger.propagate is False

    def test_format_includes_environment(
        self, restock_logger: logging.Logger, capsys: pytest.CaptureFixture[str]
    ) -> None:
        Log.configure("INFO", "staging")
        Log.info("hello")
        err = capsys.readouterr().err
        assert "[INFO] [staging] hello" in err
