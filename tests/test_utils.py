"""Tests for logging, exceptions and helpers."""

import logging

from gst_invoice.utils.exceptions import InvoiceError, ItemValidationError, UploadError
from gst_invoice.utils.helpers import ensure_directory, format_file_size, safe_filename
from gst_invoice.utils.logger import get_logger, set_level, setup_logger


def test_module_loggers_share_namespace():
    assert get_logger("loader").name == "gst_invoice.loader"
    assert get_logger("gst_invoice.io.loader").name == "gst_invoice.io.loader"


def test_setup_logger_replaces_handlers(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    setup_logger(level="DEBUG", log_file=str(log_file))
    logger = setup_logger(level="INFO", log_file=str(log_file), quiet=True)

    assert len(logger.handlers) == 1
    get_logger("test").info("written")
    for handler in logger.handlers:
        handler.flush()
    assert "written" in log_file.read_text(encoding="utf-8")

    set_level("WARNING")
    assert logger.level == logging.WARNING
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_exception_details():
    error = ItemValidationError("unit_price", 0, "Price per unit is required")
    assert isinstance(error, InvoiceError)
    assert error.details["reason"] == "Price per unit is required"
    assert "unit_price" in str(error)
    assert UploadError("a.pdf", "denied").details == {"pathname": "a.pdf", "reason": "denied"}


def test_safe_filename():
    assert safe_filename("Invoice-VMP/01.pdf") == "Invoice-VMP_01.pdf"
    assert safe_filename("  ") == "unnamed"


def test_format_file_size():
    assert format_file_size(512) == "512 B"
    assert format_file_size(1536) == "1.5 KB"
    assert format_file_size(3 * 1024 * 1024) == "3.0 MB"


def test_ensure_directory(tmp_path):
    target = ensure_directory(tmp_path / "a" / "b")
    assert target.is_dir()
