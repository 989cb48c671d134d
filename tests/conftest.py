import sys
from pathlib import Path

import cv2
import numpy as np
import pytest

project_root = Path(__file__).parent.parent  # Go up from tests/ to project root
sys.path.insert(0, str(project_root))

from FeatureDetectors import shutdown_executor


@pytest.fixture
def textured_image():
    """Grayscale image with enough corners and blobs for every detector"""
    rng = np.random.RandomState(0)
    image = rng.randint(0, 256, size=(240, 320)).astype(np.uint8)
    image = cv2.GaussianBlur(image, (5, 5), 1.5)
    for i in range(8):
        cv2.rectangle(image, (20 + 35 * i, 30), (40 + 35 * i, 60), 255, -1)
        cv2.circle(image, (30 + 35 * i, 150), 10, 0, -1)
    return image


@pytest.fixture
def color_image(textured_image):
    return cv2.cvtColor(textured_image, cv2.COLOR_GRAY2BGR)


@pytest.fixture(scope="session", autouse=True)
def stop_worker_pool():
    yield
    shutdown_executor()


def assert_option_equal(actual, expected):
    """Floats are stored in single precision by some native detectors"""
    if isinstance(expected, float):
        assert actual == pytest.approx(expected, rel=1e-6)
    else:
        assert actual == expected
