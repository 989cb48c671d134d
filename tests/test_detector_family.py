"""
Behaviour shared by every detector wrapper.
"""

import cv2
import numpy as np
import pytest

from FeatureDetectors import (
    AGASTDetector,
    AKAZEDetector,
    BRISKDetector,
    DetectionError,
    FASTDetector,
    FeatureData,
    GFTTDetector,
    InvalidHandleError,
    KAZEDetector,
    MSERDetector,
    NativeConstructionError,
    ORBDetector,
    SIFTDetector,
    TypeConversionError,
)
from conftest import assert_option_equal


ALL_DETECTORS = [
    AKAZEDetector, KAZEDetector, ORBDetector, BRISKDetector, SIFTDetector,
    FASTDetector, AGASTDetector, GFTTDetector, MSERDetector,
]

DESCRIPTOR_DETECTORS = [d for d in ALL_DETECTORS if d.has_descriptor]
KEYPOINT_ONLY_DETECTORS = [d for d in ALL_DETECTORS if not d.has_descriptor]

# A valid non-default value for one option of each detector
CUSTOM_OPTION = {
    AKAZEDetector: ('n_octaves', 6),
    KAZEDetector: ('extended', True),
    ORBDetector: ('max_features', 1200),
    BRISKDetector: ('thresh', 45),
    SIFTDetector: ('contrast_threshold', 0.03),
    FASTDetector: ('nonmax_suppression', False),
    AGASTDetector: ('threshold', 25),
    GFTTDetector: ('quality_level', 0.05),
    MSERDetector: ('min_area', 100),
}


@pytest.mark.parametrize("detector_class", ALL_DETECTORS)
def test_defaults_round_trip_through_accessors(detector_class):
    detector = detector_class()
    defaults = detector_class.options_class().to_dict()
    assert set(detector.get_params()) == set(defaults)
    for name, expected in defaults.items():
        assert_option_equal(getattr(detector, name), expected)


@pytest.mark.parametrize("detector_class", ALL_DETECTORS)
def test_positional_and_named_forms_agree(detector_class):
    name, value = CUSTOM_OPTION[detector_class]
    index = detector_class.options_class.option_names().index(name)

    positional = detector_class(*([None] * index + [value]))
    named = detector_class({name: value})
    keywords = detector_class(**{name: value})

    for detector in (positional, named, keywords):
        assert_option_equal(getattr(detector, name), value)
    assert positional.get_params() == named.get_params() == keywords.get_params()


@pytest.mark.parametrize("detector_class", ALL_DETECTORS)
def test_camel_case_aliases(detector_class):
    name, value = CUSTOM_OPTION[detector_class]
    alias = detector_class.options_class().to_dict(camel_case=True)
    field_names = detector_class.options_class.option_names()
    camel_name = list(alias)[field_names.index(name)]

    detector = detector_class({camel_name: value})
    assert_option_equal(getattr(detector, name), value)


@pytest.mark.parametrize("detector_class", ALL_DETECTORS)
def test_surplus_positional_argument(detector_class):
    count = len(detector_class.options_class.option_names())
    with pytest.raises(TypeConversionError) as exc_info:
        detector_class(*([None] * count + [1]))
    assert exc_info.value.argument == count


@pytest.mark.parametrize("detector_class", ALL_DETECTORS)
def test_string_value_rejected(detector_class):
    name, _ = CUSTOM_OPTION[detector_class]
    with pytest.raises(TypeConversionError) as exc_info:
        detector_class(**{name: "7"})
    assert exc_info.value.argument == name


@pytest.mark.parametrize("detector_class", ALL_DETECTORS)
def test_disposed_detector_rejects_accessors_and_detection(detector_class, textured_image):
    detector = detector_class()
    detector.dispose()
    detector.dispose()
    for name in detector_class.options_class.option_names():
        with pytest.raises(InvalidHandleError):
            getattr(detector, name)
    with pytest.raises(InvalidHandleError):
        detector.detect(textured_image)
    assert "disposed" in repr(detector)


# -----------------------------------------------------------------------------
# Detection
# -----------------------------------------------------------------------------

def test_orb_detect_and_compute(textured_image):
    features = ORBDetector(max_features=300).detect_and_compute(textured_image)
    assert isinstance(features, FeatureData)
    assert features.method == "ORB"
    assert 0 < len(features) <= 300
    assert features.descriptors.shape == (len(features), 32)
    assert features.descriptors.dtype == np.uint8


def test_akaze_descriptor_layout(textured_image):
    features = AKAZEDetector().detect_and_compute(textured_image)
    if len(features):
        assert features.descriptors.shape == (len(features), 61)


@pytest.mark.parametrize("detector_class", DESCRIPTOR_DETECTORS)
def test_detect_then_compute(detector_class, color_image):
    detector = detector_class()
    keypoints = detector.detect(color_image)
    assert all(isinstance(kp, cv2.KeyPoint) for kp in keypoints)

    kept, descriptors = detector.compute(color_image, keypoints)
    if kept:
        assert descriptors.shape[0] == len(kept)


@pytest.mark.parametrize("detector_class", KEYPOINT_ONLY_DETECTORS)
def test_keypoint_only_detectors(detector_class, textured_image):
    detector = detector_class()
    features = detector.detect_and_compute(textured_image)
    assert features.descriptors is None
    assert isinstance(features.keypoints, list)

    with pytest.raises(DetectionError):
        detector.compute(textured_image, features.keypoints)


def test_fast_finds_corners(textured_image):
    keypoints = FASTDetector(threshold=20).detect(textured_image)
    assert len(keypoints) > 0


def test_mask_limits_detection(textured_image):
    mask = np.zeros_like(textured_image)
    mask[:, :120] = 255
    keypoints = ORBDetector().detect(textured_image, mask)
    assert keypoints
    assert all(kp.pt[0] < 160 for kp in keypoints)


def test_native_detection_error(monkeypatch, textured_image):
    class BrokenNative:
        def detect(self, image, mask):
            raise cv2.error("unsupported image format")

    monkeypatch.setattr(cv2, "ORB_create", lambda **kwargs: BrokenNative())
    detector = ORBDetector()

    with pytest.raises(DetectionError) as exc_info:
        detector.detect(textured_image)
    assert "unsupported image format" in exc_info.value.native_message


def test_none_image_rejected():
    with pytest.raises(DetectionError):
        ORBDetector().detect(None)


def test_feature_data_serializable(textured_image):
    features = ORBDetector(max_features=20).detect_and_compute(textured_image)
    data = features.to_serializable()
    assert data['method'] == "ORB"
    assert len(data['keypoints']) == len(features)
    assert len(data['descriptors']) == len(features)


@pytest.mark.parametrize("options", [{'wta_k': 7}, {'n_levels': 0}])
def test_native_rejection_becomes_construction_error(options):
    with pytest.raises(NativeConstructionError) as exc_info:
        ORBDetector(**options)
    error = exc_info.value
    assert error.detector == "ORB"
    assert error.native_message
    assert isinstance(error.__cause__, cv2.error)
