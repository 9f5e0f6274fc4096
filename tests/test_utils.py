"""Tests for dollarsmith utility modules."""

import logging


class TestLogger:
    """Tests for logger module."""

    def test_get_logger(self) -> None:
        from dollarsmith.utils.logger import get_logger

        logger = get_logger("mymodule")
        assert logger.name == "dollarsmith.mymodule"

    def test_logger_with_dollarsmith_prefix(self) -> None:
        from dollarsmith.utils.logger import get_logger

        logger = get_logger("dollarsmith.scanner")
        assert logger.name == "dollarsmith.scanner"

    def test_package_logger(self) -> None:
        from dollarsmith.utils.logger import get_logger

        assert get_logger("dollarsmith").name == "dollarsmith"

    def test_logger_name_starting_with_dollarsmith_not_submodule(self) -> None:
        """A name like 'dollarsmith_extra' is not part of the package."""
        from dollarsmith.utils.logger import get_logger

        logger = get_logger("dollarsmith_extra")
        assert logger.name == "dollarsmith.dollarsmith_extra"

    def test_returns_stdlib_logger(self) -> None:
        from dollarsmith.utils import get_logger

        logger = get_logger("x")
        assert isinstance(logger, logging.Logger)
        assert logger is logging.getLogger("dollarsmith.x")

    def test_namespace_level_reaches_module_loggers(self) -> None:
        """Setting the package logger's level governs every module logger."""
        from dollarsmith.utils.logger import get_logger

        root = logging.getLogger("dollarsmith")
        previous = root.level
        root.setLevel(logging.DEBUG)
        try:
            assert get_logger("scanner").isEnabledFor(logging.DEBUG)
        finally:
            root.setLevel(previous)
