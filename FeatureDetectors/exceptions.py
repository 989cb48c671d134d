"""
Exception hierarchy for the detector bindings.

Every failure coming out of the native layer is re-raised as one of these,
so callers never have to catch ``cv2.error`` directly.
"""

from typing import Any, Optional, Union


class FeatureDetectorError(Exception):
    """Base class for all binding errors"""
    pass


class TypeConversionError(FeatureDetectorError, TypeError):
    """
    An argument or option could not be converted to the native type.

    Attributes:
        argument: Positional index or option name that failed
        expected: Name of the expected type
        received: The offending value (None when the failure is structural)
    """

    def __init__(self, message: str, argument: Optional[Union[int, str]] = None,
                 expected: Optional[str] = None, received: Any = None):
        super().__init__(message)
        self.argument = argument
        self.expected = expected
        self.received = received


class NativeConstructionError(FeatureDetectorError, RuntimeError):
    """The native engine rejected the resolved options"""

    def __init__(self, detector: str, native_message: str):
        super().__init__(f"{detector}: native construction failed: {native_message}")
        self.detector = detector
        self.native_message = native_message


class InvalidHandleError(FeatureDetectorError, RuntimeError):
    """Operation on a detector whose native instance was released"""

    def __init__(self, detector: str):
        super().__init__(f"{detector}: detector has been disposed")
        self.detector = detector


class DetectionError(FeatureDetectorError, RuntimeError):
    """Native failure while detecting keypoints or computing descriptors"""

    def __init__(self, detector: str, native_message: str):
        super().__init__(f"{detector}: {native_message}")
        self.detector = detector
        self.native_message = native_message
