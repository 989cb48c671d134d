import argparse
import json
import logging
import sys

import cv2
import pytest

from run_feature_detection import main, parse_param


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("FeatureDetectors")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["run_feature_detection.py", *argv])
    return main()


@pytest.mark.parametrize("text,expected", [
    ("threshold=0.01", ("threshold", 0.01)),
    ("nOctaves=8", ("nOctaves", 8)),
    ("extended=true", ("extended", True)),
])
def test_parse_param(text, expected):
    assert parse_param(text) == expected


def test_parse_param_requires_equals():
    with pytest.raises(argparse.ArgumentTypeError):
        parse_param("threshold")


def test_prints_live_parameters(monkeypatch, capsys):
    assert run_cli(monkeypatch, "--detector", "AKAZE", "--param", "nOctaves=8") == 0
    output = capsys.readouterr().out
    assert "Native detector parameters" in output
    assert "n_octaves: 8" in output


def test_detects_on_image_and_saves_config(monkeypatch, capsys, tmp_path, textured_image):
    image_path = tmp_path / "image.png"
    cv2.imwrite(str(image_path), textured_image)
    config_path = tmp_path / "live.json"

    code = run_cli(monkeypatch, "--preset", "fast", "--image", str(image_path),
                   "--save-config", str(config_path))

    assert code == 0
    assert "ORB:" in capsys.readouterr().out
    assert json.loads(config_path.read_text())['params']['max_features'] == 1000


def test_bad_option_reports_error(monkeypatch, capsys):
    assert run_cli(monkeypatch, "--detector", "ORB", "--param", "max_features=many") == 1
    assert "ERROR" in capsys.readouterr().out


def test_unreadable_image(monkeypatch, capsys, tmp_path):
    assert run_cli(monkeypatch, "--image", str(tmp_path / "missing.png")) == 1


def test_detector_name_is_case_insensitive(monkeypatch, capsys):
    assert run_cli(monkeypatch, "--detector", "akaze") == 0
    assert "detector: AKAZE" in capsys.readouterr().out
