import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from common.core_utils import SymbolFormatter, format_duration, setup_logging
from config.config_models import SYMBOLS_DEFAULT


def test_setup_logging_with_file_and_console(mocker):
    """Test setup_logging when both log_file and log_to_console are provided."""
    mock_file_handler = mocker.patch("logging.FileHandler")
    mock_stream_handler = mocker.patch("logging.StreamHandler")
    mock_formatter = mocker.patch("common.core_utils.SymbolFormatter")

    mock_root_logger = MagicMock()
    mocker.patch("logging.getLogger", return_value=mock_root_logger)
    mock_root_logger.handlers = []

    log_file_path = str(Path("logs/test.log"))
    mocker.patch("pathlib.Path.mkdir")

    setup_logging(log_file=log_file_path, log_to_console=True)

    mock_file_handler.assert_called_once_with(Path(log_file_path), mode="a")
    mock_stream_handler.assert_called_once_with(sys.stdout)
    assert mock_formatter.call_count == 1
    assert mock_root_logger.addHandler.call_count == 2


def test_setup_logging_without_handlers(mocker):
    """Test setup_logging falls back to stdout when no handler is requested."""
    mock_stream_handler = mocker.patch("logging.StreamHandler")
    mock_formatter = mocker.patch("common.core_utils.SymbolFormatter")

    mock_root_logger = MagicMock()
    mocker.patch("logging.getLogger", return_value=mock_root_logger)
    mock_root_logger.handlers = []

    setup_logging(log_to_console=False, log_file=None)

    mock_stream_handler.assert_called_once_with(sys.stdout)
    assert mock_formatter.call_count == 1
    assert mock_root_logger.addHandler.call_count == 1


def test_setup_logging_with_custom_format(mocker):
    """Test setup_logging with a custom log format."""
    mock_formatter = mocker.patch("common.core_utils.SymbolFormatter")

    mock_root_logger = MagicMock()
    mocker.patch("logging.getLogger", return_value=mock_root_logger)
    mock_root_logger.handlers = []

    custom_format = "{log_prefix}%(asctime)s - %(levelname)s - %(message)s"
    custom_prefix = "[GUELPH-TRANSIT]"

    setup_logging(log_format_str=custom_format, log_prefix=custom_prefix)

    expected_format = custom_format.format(log_prefix=custom_prefix + " ")
    mock_formatter.assert_called_once_with(
        fmt=expected_format,
        datefmt="%Y-%m-%d %H:%M:%S",
        symbols=None,
    )


def test_setup_logging_prefix_without_placeholder(mocker):
    """A custom format without placeholder gets the prefix prepended."""
    mock_formatter = mocker.patch("common.core_utils.SymbolFormatter")
    mock_root_logger = MagicMock()
    mocker.patch("logging.getLogger", return_value=mock_root_logger)
    mock_root_logger.handlers = []

    setup_logging(log_format_str="%(message)s", log_prefix="  [P]  ")

    assert mock_formatter.call_args.kwargs["fmt"] == "[P] %(message)s"


def test_setup_logging_with_default_level(mocker):
    """Test setup_logging with default logging level."""
    mock_root_logger = MagicMock()
    mocker.patch("logging.getLogger", return_value=mock_root_logger)
    mock_root_logger.handlers = []

    setup_logging()

    mock_root_logger.setLevel.assert_called_once_with(logging.INFO)


def test_setup_logging_replaces_previous_handlers(mocker):
    """Handlers from an earlier call are removed from the root logger."""
    old_handler = MagicMock()
    mock_root_logger = MagicMock()
    mock_root_logger.handlers = [old_handler]
    mocker.patch("logging.getLogger", return_value=mock_root_logger)
    mocker.patch("logging.StreamHandler")

    setup_logging()

    mock_root_logger.removeHandler.assert_called_once_with(old_handler)


def test_setup_logging_warning_on_file_handler_failure(capsys, mocker):
    """Test setup_logging gracefully handles file handler creation failure."""
    mocker.patch("logging.FileHandler", side_effect=OSError("An error occurred"))
    mocker.patch("pathlib.Path.mkdir")

    mock_root_logger = MagicMock()
    mocker.patch("logging.getLogger", return_value=mock_root_logger)
    mock_root_logger.handlers = []

    setup_logging(log_file="invalid/path.log")
    captured = capsys.readouterr()

    assert "Warning: Could not create file handler for log file" in captured.err


def _record(level, msg):
    return logging.LogRecord(
        name="test", level=level, pathname="", lineno=0, msg=msg, args=(), exc_info=None
    )


def test_symbol_formatter():
    """Test that the SymbolFormatter adds the correct symbols."""
    formatter = SymbolFormatter(fmt="%(symbol)s %(message)s")

    assert SYMBOLS_DEFAULT["debug"] in formatter.format(_record(logging.DEBUG, "Debug message"))
    assert SYMBOLS_DEFAULT["info"] in formatter.format(_record(logging.INFO, "Info message"))
    assert SYMBOLS_DEFAULT["warning"] in formatter.format(_record(logging.WARNING, "Warning message"))
    assert SYMBOLS_DEFAULT["error"] in formatter.format(_record(logging.ERROR, "Error message"))
    assert SYMBOLS_DEFAULT["critical"] in formatter.format(_record(logging.CRITICAL, "Critical message"))


def test_symbol_formatter_custom_symbols():
    formatter = SymbolFormatter(fmt="%(symbol)s%(message)s", symbols={"info": "[i]"})

    assert formatter.format(_record(logging.INFO, "hello")) == "[i]hello"
    assert formatter.format(_record(logging.ERROR, "boom")) == "boom"


@pytest.mark.parametrize(
    "milliseconds, expected",
    [
        (0, "0 ms"),
        (999.6, "1 s 0 ms"),
        (65_120, "1 min 5 s 120 ms"),
        (3_600_000, "1 h 0 min 0 s 0 ms"),
        (7_322_005, "2 h 2 min 2 s 5 ms"),
    ],
)
def test_format_duration(milliseconds, expected):
    assert format_duration(milliseconds) == expected
