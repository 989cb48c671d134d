import logging

import cv2
import pytest

from FeatureDetectors import AKAZEDetector, NativeConstructionError, get_logger, setup_logger
from FeatureDetectors import disable_console_logging, set_level


def test_get_logger_is_namespaced():
    assert get_logger("detectors").name == "FeatureDetectors.detectors"


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "detectors.log"
    logger = setup_logger("FeatureDetectorsTest.file", level="DEBUG",
                          log_file=str(log_file), console=False)
    logger.debug("created detector")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text()
    assert "[DEBUG] [FeatureDetectorsTest.file] created detector" in content


def test_setup_logger_is_idempotent_unless_forced():
    logger = setup_logger("FeatureDetectorsTest.idempotent", console=True)
    handlers = list(logger.handlers)
    assert setup_logger("FeatureDetectorsTest.idempotent").handlers == handlers

    forced = setup_logger("FeatureDetectorsTest.idempotent", level="WARNING", force=True)
    assert len(forced.handlers) == 1
    assert forced.level == logging.WARNING


def test_root_logger_helpers():
    root = setup_logger(level="INFO", force=True)
    set_level("ERROR")
    assert root.level == logging.ERROR

    disable_console_logging()
    assert not root.handlers
    set_level("INFO")


def test_native_failure_is_logged(monkeypatch, caplog):
    def failing_create(*args, **kwargs):
        raise cv2.error("bad options")

    monkeypatch.setattr(cv2, "AKAZE_create", failing_create)
    with caplog.at_level(logging.ERROR, logger="FeatureDetectors"):
        with pytest.raises(NativeConstructionError):
            AKAZEDetector()
    assert "AKAZE construction failed: bad options" in caplog.text
