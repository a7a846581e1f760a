"""Tests logging functions in photostrip."""
import logging

import photostrip.logging_utils as ps_logging_utils


class TestLoggingUtils:
    def test_logger_singleton_behavior(self) -> None:
        """Test that logger instances are singleton per name."""
        logger1 = ps_logging_utils.setup_logger("photostrip_test_logger")
        logger2 = ps_logging_utils.setup_logger("photostrip_test_logger")
        assert logger1 is logger2
        assert len(logger1.handlers) == 1

    def test_logger_custom_formatter_and_handler(self) -> None:
        """Test custom formatter and handler are applied."""
        formatter = logging.Formatter("[CUSTOM] %(message)s")
        handler = logging.StreamHandler()
        logger = ps_logging_utils.setup_logger(
            "photostrip_custom_logger",
            formatter=formatter,
            handler=handler,
        )
        assert logger.name == "photostrip_custom_logger"
        assert len(logger.handlers) == 1
        assert logger.handlers[0] is handler
        assert logger.handlers[0].formatter._fmt.startswith("[CUSTOM]")

    def test_logger_level_and_propagation(self) -> None:
        """New loggers take the requested level and stop propagating."""
        logger = ps_logging_utils.setup_logger(
            "photostrip_debug_logger", level=logging.DEBUG,
        )
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_package_logger_name(self) -> None:
        assert ps_logging_utils.logger.name == \
            ps_logging_utils.PACKAGE_LOGGER_NAME == "photostrip"

    def test_repeat_setup_updates_level_only(self) -> None:
        """A second call keeps the single handler and applies the level."""
        first = ps_logging_utils.setup_logger("photostrip_level_logger")
        second = ps_logging_utils.setup_logger(
            "photostrip_level_logger", level=logging.WARNING,
        )
        assert first is second
        assert len(second.handlers) == 1
        assert second.level == logging.WARNING

    def test_default_format_names_logger(self) -> None:
        """Default records carry the logger name."""
        logger = ps_logging_utils.setup_logger("photostrip_format_logger")
        fmt = logger.handlers[0].formatter._fmt
        assert "%(name)s" in fmt
