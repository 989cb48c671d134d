"""
Factory functions for creating detector wrappers by name.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Type, Union

from .async_workers import get_executor
from .base_classes import BaseFeatureDetector
from .core_data_structures import DetectorType
from .exceptions import FeatureDetectorError
from .logger import get_logger
from .traditional_detectors import (
    AGASTDetector,
    AKAZEDetector,
    BRISKDetector,
    FASTDetector,
    GFTTDetector,
    KAZEDetector,
    MSERDetector,
    ORBDetector,
    SIFTDetector,
)

logger = get_logger("factory")


DETECTOR_REGISTRY: Dict[DetectorType, Type[BaseFeatureDetector]] = {
    DetectorType.AKAZE: AKAZEDetector,
    DetectorType.KAZE: KAZEDetector,
    DetectorType.ORB: ORBDetector,
    DetectorType.BRISK: BRISKDetector,
    DetectorType.SIFT: SIFTDetector,
    DetectorType.FAST: FASTDetector,
    DetectorType.AGAST: AGASTDetector,
    DetectorType.GFTT: GFTTDetector,
    DetectorType.MSER: MSERDetector,
}


@dataclass
class ConstructionResult:
    """Outcome of try_create_detector"""
    success: bool
    detector: Optional[BaseFeatureDetector] = None
    error: Optional[FeatureDetectorError] = None


def get_available_detectors() -> List[str]:
    return [detector_type.value for detector_type in DETECTOR_REGISTRY]


def get_detector_class(detector_type: Union[str, DetectorType]) -> Type[BaseFeatureDetector]:
    """
    Look up the wrapper class for a detector type

    Args:
        detector_type: DetectorType or its name (case-insensitive)

    Raises:
        ValueError: If detector_type is not supported
    """
    if isinstance(detector_type, DetectorType):
        return DETECTOR_REGISTRY[detector_type]

    for known_type, detector_class in DETECTOR_REGISTRY.items():
        if str(detector_type).upper() == known_type.value:
            return detector_class

    available = ', '.join(get_available_detectors())
    raise ValueError(f"Unknown detector type: {detector_type}. Available: {available}")


def create_detector(detector_type: Union[str, DetectorType], *args, **kwargs) -> BaseFeatureDetector:
    """
    Create a detector by name

    Args:
        detector_type: Type of detector ('AKAZE', 'KAZE', 'ORB', 'BRISK', 'SIFT',
                       'FAST', 'AGAST', 'GFTT', 'MSER')
        *args, **kwargs: Options, in either form accepted by the wrapper

    Returns:
        Initialized detector instance

    Examples:
        >>> detector = create_detector('AKAZE', threshold=0.01)
        >>> detector = create_detector('orb', {'maxFeatures': 2000})

    Raises:
        ValueError: If detector_type is not supported
        TypeConversionError: Wrong argument shape or type
        NativeConstructionError: OpenCV rejected the options
    """
    detector_class = get_detector_class(detector_type)
    return detector_class(*args, **kwargs)


def try_create_detector(detector_type: Union[str, DetectorType], *args, **kwargs) -> ConstructionResult:
    """
    Like create_detector, but reports binding failures in the result
    instead of raising. Unknown detector types still raise ValueError.
    """
    detector_class = get_detector_class(detector_type)
    try:
        detector = detector_class(*args, **kwargs)
    except FeatureDetectorError as e:
        logger.warning(f"Could not create {detector_class.options_class.detector_name}: {e}")
        return ConstructionResult(success=False, error=e)
    return ConstructionResult(success=True, detector=detector)


async def create_detector_async(detector_type: Union[str, DetectorType], *args, **kwargs) -> BaseFeatureDetector:
    """
    Create a detector without blocking the running event loop.

    Options are parsed before the native call is handed to the worker pool.
    """
    detector_class = get_detector_class(detector_type)
    options = detector_class.options_class.from_args(args, kwargs)
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(get_executor(), detector_class.from_options, options)
