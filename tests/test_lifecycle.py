import asyncio
import copy
import pickle

import cv2
import pytest

from FeatureDetectors import (
    AKAZEDetector,
    AKAZEOptions,
    DetectorHandle,
    InvalidHandleError,
    KAZEDetector,
    NativeConstructionError,
    ORBDetector,
    ORBOptions,
    TypeConversionError,
    create_detector_async,
)


class TestDetectorHandle:

    def test_get_and_release(self):
        native = object()
        handle = DetectorHandle(native, "AKAZE")
        assert handle.is_valid
        assert handle.get() is native

        handle.release()
        assert not handle.is_valid
        with pytest.raises(InvalidHandleError) as exc_info:
            handle.get()
        assert exc_info.value.detector == "AKAZE"

        handle.release()


def test_context_manager_disposes_on_exit():
    with AKAZEDetector(n_octaves=3) as detector:
        assert detector.n_octaves == 3
    assert detector.is_disposed


def test_context_manager_disposes_on_error():
    with pytest.raises(ZeroDivisionError):
        with AKAZEDetector() as detector:
            1 / 0
    assert detector.is_disposed


def test_instances_are_independent():
    first = AKAZEDetector(threshold=0.01)
    second = AKAZEDetector(threshold=0.02)
    assert first.get_detector() is not second.get_detector()

    first.dispose()
    assert second.threshold == pytest.approx(0.02, rel=1e-6)


def test_from_options():
    detector = ORBDetector.from_options(ORBOptions(max_features=77))
    assert detector.max_features == 77

    with pytest.raises(TypeConversionError):
        ORBDetector.from_options(AKAZEOptions())


def test_pickle_rebuilds_native_detector():
    detector = KAZEDetector(extended=True, n_octaves=3)
    restored = pickle.loads(pickle.dumps(detector))

    assert isinstance(restored, KAZEDetector)
    assert restored.extended is True
    assert restored.n_octaves == 3
    assert restored.get_params() == detector.get_params()
    assert restored.get_detector() is not detector.get_detector()


def test_copy_of_disposed_detector_fails():
    detector = AKAZEDetector()
    detector.dispose()
    with pytest.raises(InvalidHandleError):
        copy.copy(detector)


def test_repr_lists_live_parameters():
    text = repr(ORBDetector(max_features=42))
    assert text.startswith("ORBDetector(")
    assert "max_features=42" in text


# -----------------------------------------------------------------------------
# Offloaded construction
# -----------------------------------------------------------------------------

def test_create_async_resolves_to_detector():
    future = AKAZEDetector.create_async({'nOctaves': 6})
    detector = future.result(timeout=30)
    assert isinstance(detector, AKAZEDetector)
    assert detector.n_octaves == 6


def test_create_async_rejects_bad_arguments_immediately():
    with pytest.raises(TypeConversionError):
        AKAZEDetector.create_async("fast")


def test_create_async_native_failure(monkeypatch):
    def failing_create(*args, **kwargs):
        raise cv2.error("rejected")

    monkeypatch.setattr(cv2, "AKAZE_create", failing_create)
    future = AKAZEDetector.create_async()
    with pytest.raises(NativeConstructionError):
        future.result(timeout=30)


def test_create_detector_async_with_event_loop():
    detector = asyncio.run(create_detector_async('ORB', max_features=150))
    assert isinstance(detector, ORBDetector)
    assert detector.max_features == 150


def test_detect_async(textured_image):
    detector = ORBDetector()
    keypoints = detector.detect_async(textured_image).result(timeout=30)
    assert keypoints == [] or isinstance(keypoints[0], cv2.KeyPoint)
    kept, descriptors = detector.compute_async(textured_image, keypoints).result(timeout=30)
    assert len(kept) <= len(keypoints)
