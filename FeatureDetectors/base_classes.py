"""
Base classes for the detector bindings.

``BaseFeatureDetector`` implements everything the detector wrappers share:
argument parsing into an options record, native construction with error
translation, ownership of the native instance, read-only accessors, and the
detect / compute operations handed through to OpenCV.
"""

import time
from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

import cv2
import numpy as np

from .async_workers import submit
from .core_data_structures import DetectorOptions, FeatureData
from .exceptions import DetectionError, InvalidHandleError, NativeConstructionError
from .logger import get_logger

logger = get_logger("detectors")


def native_error_message(error: Exception) -> str:
    """Text of a native exception, without the trailing newline cv2 adds"""
    return str(error).strip()


class DetectorHandle:
    """
    Owning reference to one native detector instance.

    Not reference counted. ``release`` drops the native object; any later
    ``get`` raises InvalidHandleError.
    """

    def __init__(self, native: Any, owner: str):
        self._native = native
        self.owner = owner

    def get(self) -> Any:
        if self._native is None:
            raise InvalidHandleError(self.owner)
        return self._native

    @property
    def is_valid(self) -> bool:
        return self._native is not None

    def release(self):
        self._native = None


def native_property(getter: str, cast: Callable[[Any], Any]) -> property:
    """
    Read-only property forwarding to a native getter

    Args:
        getter: Name of the cv2 getter method, e.g. 'getThreshold'
        cast: Conversion applied to the native return value
    """
    def fget(self):
        return cast(getattr(self.get_detector(), getter)())

    return property(fget, doc=f"Live value of the native {getter}()")


class BaseFeatureDetector(ABC):
    """Abstract base class for all detector wrappers"""

    options_class: Type[DetectorOptions] = DetectorOptions
    has_descriptor: bool = True

    def __init__(self, *args, **kwargs):
        """
        Parse options and construct the native detector.

        Accepts either positional arguments in the options record's field
        order, or named options given as keyword arguments, a single dict,
        or a ready options record. Mixing the two forms is rejected.

        Raises:
            TypeConversionError: Wrong argument shape or type
            NativeConstructionError: OpenCV rejected the options
        """
        options = self.options_class.from_args(args, kwargs)
        self._initialize(options)

    def _initialize(self, options: DetectorOptions):
        self.name = self.options_class.detector_name
        self._handle = DetectorHandle(self._construct_native(options), self.name)
        logger.debug(f"Created {self.name} detector with {options.to_dict()}")

    @classmethod
    def from_options(cls, options: DetectorOptions) -> 'BaseFeatureDetector':
        """Construct from an already parsed options record"""
        options = cls.options_class.from_named(options)
        detector = cls.__new__(cls)
        detector._initialize(options)
        return detector

    @classmethod
    def create_async(cls, *args, **kwargs) -> Future:
        """
        Construct on the worker pool.

        Arguments are parsed in the calling thread, so conversion errors
        raise immediately. Native failures surface from ``Future.result()``.
        """
        options = cls.options_class.from_args(args, kwargs)
        return submit(cls.from_options, options)

    @abstractmethod
    def _create_native(self, options: DetectorOptions) -> Any:
        """Call the cv2 factory for this detector type"""
        pass

    def _construct_native(self, options: DetectorOptions) -> Any:
        try:
            return self._create_native(options)
        except cv2.error as e:
            message = native_error_message(e)
            logger.error(f"{self.name} construction failed: {message}")
            raise NativeConstructionError(self.name, message) from e

    # -------------------------------------------------------------------------
    # Handle and lifecycle
    # -------------------------------------------------------------------------

    def get_detector(self) -> Any:
        """
        Native cv2 detector for downstream consumers

        Raises:
            InvalidHandleError: If the detector was disposed
        """
        return self._handle.get()

    @property
    def is_disposed(self) -> bool:
        return not self._handle.is_valid

    def dispose(self):
        """Release the native detector. Calling it again is a no-op."""
        if self._handle.is_valid:
            self._handle.release()
            logger.debug(f"Disposed {self.name} detector")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.dispose()
        return False

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    def get_params(self) -> Dict[str, Any]:
        """All option values as currently reported by the native detector"""
        return {name: getattr(self, name) for name in self.options_class.option_names()}

    @property
    def options(self) -> DetectorOptions:
        return self.options_class(**self.get_params())

    def __repr__(self):
        if self.is_disposed:
            return f"{self.__class__.__name__}(<disposed>)"
        params = ', '.join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{self.__class__.__name__}({params})"

    def __getstate__(self):
        return {'params': self.get_params()}

    def __setstate__(self, state):
        self._initialize(self.options_class(**state['params']))

    # -------------------------------------------------------------------------
    # Detection
    # -------------------------------------------------------------------------

    def preprocess_image(self, image: np.ndarray) -> np.ndarray:
        """
        Preprocess image for feature detection

        Args:
            image: Input image (BGR, BGRA or grayscale)

        Returns:
            Grayscale image
        """
        if image is None:
            raise DetectionError(self.name, "image is None")
        if len(image.shape) == 3:
            if image.shape[2] == 4:
                return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
            return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        return image

    def detect(self, image: np.ndarray, mask: Optional[np.ndarray] = None) -> List[cv2.KeyPoint]:
        """
        Detect keypoints in an image

        Args:
            image: Input image
            mask: Optional 8-bit mask of the region to search

        Returns:
            List of detected keypoints
        """
        native = self.get_detector()
        gray = self.preprocess_image(image)
        try:
            keypoints = native.detect(gray, mask)
        except cv2.error as e:
            raise DetectionError(self.name, native_error_message(e)) from e
        return list(keypoints)

    def compute(self, image: np.ndarray,
                keypoints: Sequence[cv2.KeyPoint]) -> Tuple[List[cv2.KeyPoint], Optional[np.ndarray]]:
        """
        Compute descriptors for given keypoints

        Keypoints for which no descriptor can be computed are dropped by
        OpenCV, so the returned list may be shorter than the input.
        """
        native = self.get_detector()
        if not self.has_descriptor:
            raise DetectionError(self.name, "detector does not compute descriptors")
        gray = self.preprocess_image(image)
        try:
            keypoints, descriptors = native.compute(gray, list(keypoints))
        except cv2.error as e:
            raise DetectionError(self.name, native_error_message(e)) from e
        return list(keypoints), descriptors

    def detect_and_compute(self, image: np.ndarray,
                           mask: Optional[np.ndarray] = None) -> FeatureData:
        start_time = time.time()
        native = self.get_detector()
        gray = self.preprocess_image(image)

        try:
            if self.has_descriptor:
                keypoints, descriptors = native.detectAndCompute(gray, mask)
            else:
                keypoints, descriptors = native.detect(gray, mask), None
        except cv2.error as e:
            raise DetectionError(self.name, native_error_message(e)) from e

        return FeatureData(
            keypoints=list(keypoints),
            descriptors=descriptors,
            method=self.name,
            detection_time=time.time() - start_time
        )

    def detect_async(self, image: np.ndarray, mask: Optional[np.ndarray] = None) -> Future:
        return submit(self.detect, image, mask)

    def compute_async(self, image: np.ndarray, keypoints: Sequence[cv2.KeyPoint]) -> Future:
        return submit(self.compute, image, keypoints)
