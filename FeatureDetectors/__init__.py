"""
FeatureDetectors - Python bindings layer for OpenCV feature detectors

Each wrapper owns one native OpenCV detector, exposes its tuning parameters
as read-only properties and accepts its options either positionally or by
name.

Quick Start:
    >>> from FeatureDetectors import AKAZEDetector
    >>>
    >>> detector = AKAZEDetector({'nOctaves': 8, 'threshold': 0.01})
    >>> detector.n_octaves
    8
    >>> features = detector.detect_and_compute(image)
    >>> detector.dispose()
"""

__version__ = '1.0.0'

import cv2

# =============================================================================
# ERRORS
# =============================================================================

from .exceptions import (
    FeatureDetectorError,
    TypeConversionError,
    NativeConstructionError,
    InvalidHandleError,
    DetectionError,
)

# =============================================================================
# CORE DATA STRUCTURES
# =============================================================================

from .core_data_structures import (
    DetectorType,
    DetectorOptions,
    AKAZEDescriptorType,
    Diffusivity,
    ORBScoreType,
    FASTType,
    AGASTType,
    Positional,
    Named,
    resolve_arg_form,
    FeatureData,
    keypoints_to_serializable,
    keypoints_from_serializable,
)

# =============================================================================
# DETECTORS
# =============================================================================

from .base_classes import BaseFeatureDetector, DetectorHandle

from .traditional_detectors import (
    AKAZEDetector, AKAZEOptions,
    KAZEDetector, KAZEOptions,
    ORBDetector, ORBOptions,
    BRISKDetector, BRISKOptions,
    SIFTDetector, SIFTOptions,
    FASTDetector, FASTOptions,
    AGASTDetector, AGASTOptions,
    GFTTDetector, GFTTOptions,
    MSERDetector, MSEROptions,
)

from .factory import (
    ConstructionResult,
    create_detector,
    create_detector_async,
    try_create_detector,
    get_available_detectors,
    get_detector_class,
)

from .async_workers import shutdown_executor

# =============================================================================
# CONFIGURATION & LOGGING
# =============================================================================

from .config import (
    create_config_from_preset,
    create_detector_from_config,
    config_from_detector,
    get_available_presets,
    get_detector_config,
    load_config,
    save_config,
    validate_config,
)

from .logger import (
    setup_logger,
    get_logger,
    configure_root_logger,
    disable_console_logging,
    set_level,
)


def get_version_info():
    """Get version and capability information"""
    return {
        'version': __version__,
        'opencv_version': cv2.__version__,
        'available_detectors': get_available_detectors(),
        'descriptor_detectors': [
            name for name in get_available_detectors()
            if get_detector_class(name).has_descriptor
        ],
        'presets': get_available_presets(),
    }


def print_capabilities():
    """Print available capabilities"""
    info = get_version_info()
    print(f"FeatureDetectors v{info['version']} (OpenCV {info['opencv_version']})")
    print("=" * 70)
    print(f"Detectors: {', '.join(info['available_detectors'])}")
    print(f"With descriptors: {', '.join(info['descriptor_detectors'])}")
    print(f"Presets: {', '.join(info['presets'])}")

    print("\nQuick Start Examples:")
    print("  detector = AKAZEDetector(threshold=0.01)")
    print("  detector = create_detector('ORB', {'maxFeatures': 2000})")
    print("  features = detector.detect_and_compute(image)")


__all__ = [
    # Errors
    'FeatureDetectorError', 'TypeConversionError', 'NativeConstructionError',
    'InvalidHandleError', 'DetectionError',

    # Core data structures
    'DetectorType', 'DetectorOptions', 'AKAZEDescriptorType', 'Diffusivity',
    'ORBScoreType', 'FASTType', 'AGASTType', 'Positional', 'Named',
    'resolve_arg_form', 'FeatureData',
    'keypoints_to_serializable', 'keypoints_from_serializable',

    # Detectors
    'BaseFeatureDetector', 'DetectorHandle',
    'AKAZEDetector', 'AKAZEOptions', 'KAZEDetector', 'KAZEOptions',
    'ORBDetector', 'ORBOptions', 'BRISKDetector', 'BRISKOptions',
    'SIFTDetector', 'SIFTOptions', 'FASTDetector', 'FASTOptions',
    'AGASTDetector', 'AGASTOptions', 'GFTTDetector', 'GFTTOptions',
    'MSERDetector', 'MSEROptions',

    # Factory
    'ConstructionResult', 'create_detector', 'create_detector_async',
    'try_create_detector', 'get_available_detectors', 'get_detector_class',
    'shutdown_executor',

    # Configuration
    'create_config_from_preset', 'create_detector_from_config',
    'config_from_detector', 'get_available_presets', 'get_detector_config',
    'load_config', 'save_config', 'validate_config',

    # Logging
    'setup_logger', 'get_logger', 'configure_root_logger', 'disable_console_logging',
    'set_level',

    # Info
    'get_version_info', 'print_capabilities',
]
