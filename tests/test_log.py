"""Tests for logging setup."""

import io
import logging

import pytest

from lispish.log import HANDLER_NAME, configure_logging, level_for, reset_logging
from lispish.reader import read_string

package_logger = logging.getLogger("lispish")


def cli_handlers():
    return [h for h in package_logger.handlers if h.get_name() == HANDLER_NAME]


class TestLevelFor:
    """Tests for mapping verbose/quiet to a level."""

    @pytest.mark.parametrize(
        "verbose, quiet, level",
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.DEBUG),
        ],
    )
    def test_levels(self, verbose, quiet, level):
        """verbose lowers the level, quiet raises it, verbose wins."""
        assert level_for(verbose, quiet) == level


class TestConfigureLogging:
    """Tests for configure_logging and reset_logging."""

    def test_verbose_shows_debug(self):
        """Verbose logging writes reader debug messages."""
        stream = io.StringIO()
        configure_logging(verbose=True, stream=stream)
        read_string("(a) (b)")
        assert "[DEBUG] Tokenized 7 characters into 6 tokens" in stream.getvalue()

    def test_default_hides_debug(self):
        """Without verbose, debug messages are dropped."""
        stream = io.StringIO()
        configure_logging(stream=stream)
        read_string("(a)")
        assert stream.getvalue() == ""

    def test_quiet_hides_warnings(self):
        """quiet raises the threshold above WARNING."""
        stream = io.StringIO()
        configure_logging(quiet=True, stream=stream)
        logging.getLogger("lispish.cli").warning("ignored setting")
        logging.getLogger("lispish.cli").error("broken")
        assert stream.getvalue() == "[ERROR] broken\n"

    def test_reconfigure_replaces_handler(self):
        """Repeated calls keep a single CLI handler."""
        configure_logging(stream=io.StringIO())
        configure_logging(verbose=True, stream=io.StringIO())
        assert len(cli_handlers()) == 1
        assert package_logger.level == logging.DEBUG

    def test_reset(self):
        """reset_logging removes the handler and clears the level."""
        configure_logging(verbose=True, stream=io.StringIO())
        reset_logging()
        assert cli_handlers() == []
        assert package_logger.level == logging.NOTSET

    def test_null_handler_stays(self):
        """The package NullHandler survives reconfiguration."""
        configure_logging(stream=io.StringIO())
        reset_logging()
        assert any(isinstance(h, logging.NullHandler) for h in package_logger.handlers)
