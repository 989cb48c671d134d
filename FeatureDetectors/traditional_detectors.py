"""
OpenCV detector wrappers (AKAZE, KAZE, ORB, BRISK, SIFT, FAST, AGAST, GFTT, MSER).

Each wrapper pairs an immutable options record with a class that builds the
native detector from it and exposes every option as a read-only property
backed by the native getter.
"""

from dataclasses import dataclass
from typing import ClassVar

import cv2

from .base_classes import BaseFeatureDetector, native_property
from .converters import BoolConverter, DoubleConverter, IntConverter
from .core_data_structures import (
    AGASTType,
    AKAZEDescriptorType,
    DetectorOptions,
    Diffusivity,
    FASTType,
    ORBScoreType,
    option,
)


# =============================================================================
# AKAZE
# =============================================================================

@dataclass(frozen=True)
class AKAZEOptions(DetectorOptions):
    detector_name: ClassVar[str] = "AKAZE"

    descriptor_type: int = option(int(AKAZEDescriptorType.MLDB), IntConverter, 'descriptorType')
    descriptor_size: int = option(0, IntConverter, 'descriptorSize')
    descriptor_channels: int = option(3, IntConverter, 'descriptorChannels')
    threshold: float = option(0.001, DoubleConverter, 'threshold')
    n_octaves: int = option(4, IntConverter, 'nOctaves')
    n_octave_layers: int = option(4, IntConverter, 'nOctaveLayers')
    diffusivity: int = option(int(Diffusivity.PM_G2), IntConverter, 'diffusivity')


class AKAZEDetector(BaseFeatureDetector):
    """
    AKAZE (Accelerated-KAZE) feature detector

    Positional order: descriptor_type, descriptor_size, descriptor_channels,
    threshold, n_octaves, n_octave_layers, diffusivity.

    Example:
        >>> detector = AKAZEDetector(threshold=0.01, n_octaves=8)
        >>> detector = AKAZEDetector({'nOctaves': 8, 'threshold': 0.01})
        >>> detector = AKAZEDetector(5, None, None, 0.5)
    """

    options_class = AKAZEOptions

    descriptor_type = native_property('getDescriptorType', int)
    descriptor_size = native_property('getDescriptorSize', int)
    descriptor_channels = native_property('getDescriptorChannels', int)
    threshold = native_property('getThreshold', float)
    n_octaves = native_property('getNOctaves', int)
    n_octave_layers = native_property('getNOctaveLayers', int)
    diffusivity = native_property('getDiffusivity', int)

    def _create_native(self, options: AKAZEOptions):
        return cv2.AKAZE_create(
            descriptor_type=options.descriptor_type,
            descriptor_size=options.descriptor_size,
            descriptor_channels=options.descriptor_channels,
            threshold=options.threshold,
            nOctaves=options.n_octaves,
            nOctaveLayers=options.n_octave_layers,
            diffusivity=options.diffusivity
        )


# =============================================================================
# KAZE
# =============================================================================

@dataclass(frozen=True)
class KAZEOptions(DetectorOptions):
    detector_name: ClassVar[str] = "KAZE"

    extended: bool = option(False, BoolConverter, 'extended')
    upright: bool = option(False, BoolConverter, 'upright')
    threshold: float = option(0.001, DoubleConverter, 'threshold')
    n_octaves: int = option(4, IntConverter, 'nOctaves')
    n_octave_layers: int = option(4, IntConverter, 'nOctaveLayers')
    diffusivity: int = option(int(Diffusivity.PM_G2), IntConverter, 'diffusivity')


class KAZEDetector(BaseFeatureDetector):
    """KAZE nonlinear scale-space detector"""

    options_class = KAZEOptions

    extended = native_property('getExtended', bool)
    upright = native_property('getUpright', bool)
    threshold = native_property('getThreshold', float)
    n_octaves = native_property('getNOctaves', int)
    n_octave_layers = native_property('getNOctaveLayers', int)
    diffusivity = native_property('getDiffusivity', int)

    def _create_native(self, options: KAZEOptions):
        return cv2.KAZE_create(
            extended=options.extended,
            upright=options.upright,
            threshold=options.threshold,
            nOctaves=options.n_octaves,
            nOctaveLayers=options.n_octave_layers,
            diffusivity=options.diffusivity
        )


# =============================================================================
# ORB
# =============================================================================

@dataclass(frozen=True)
class ORBOptions(DetectorOptions):
    detector_name: ClassVar[str] = "ORB"

    max_features: int = option(500, IntConverter, 'maxFeatures')
    scale_factor: float = option(1.2, DoubleConverter, 'scaleFactor')
    n_levels: int = option(8, IntConverter, 'nLevels')
    edge_threshold: int = option(31, IntConverter, 'edgeThreshold')
    first_level: int = option(0, IntConverter, 'firstLevel')
    wta_k: int = option(2, IntConverter, 'WTA_K')
    score_type: int = option(int(ORBScoreType.HARRIS), IntConverter, 'scoreType')
    patch_size: int = option(31, IntConverter, 'patchSize')
    fast_threshold: int = option(20, IntConverter, 'fastThreshold')


class ORBDetector(BaseFeatureDetector):
    """ORB (Oriented FAST and Rotated BRIEF) feature detector"""

    options_class = ORBOptions

    max_features = native_property('getMaxFeatures', int)
    scale_factor = native_property('getScaleFactor', float)
    n_levels = native_property('getNLevels', int)
    edge_threshold = native_property('getEdgeThreshold', int)
    first_level = native_property('getFirstLevel', int)
    wta_k = native_property('getWTA_K', int)
    score_type = native_property('getScoreType', int)
    patch_size = native_property('getPatchSize', int)
    fast_threshold = native_property('getFastThreshold', int)

    def _create_native(self, options: ORBOptions):
        return cv2.ORB_create(
            nfeatures=options.max_features,
            scaleFactor=options.scale_factor,
            nlevels=options.n_levels,
            edgeThreshold=options.edge_threshold,
            firstLevel=options.first_level,
            WTA_K=options.wta_k,
            scoreType=options.score_type,
            patchSize=options.patch_size,
            fastThreshold=options.fast_threshold
        )


# =============================================================================
# BRISK
# =============================================================================

@dataclass(frozen=True)
class BRISKOptions(DetectorOptions):
    detector_name: ClassVar[str] = "BRISK"

    thresh: int = option(30, IntConverter, 'thresh')
    octaves: int = option(3, IntConverter, 'octaves')
    pattern_scale: float = option(1.0, DoubleConverter, 'patternScale')


class BRISKDetector(BaseFeatureDetector):
    """BRISK (Binary Robust Invariant Scalable Keypoints) feature detector"""

    options_class = BRISKOptions

    thresh = native_property('getThreshold', int)
    octaves = native_property('getOctaves', int)
    pattern_scale = native_property('getPatternScale', float)

    def _create_native(self, options: BRISKOptions):
        return cv2.BRISK_create(
            thresh=options.thresh,
            octaves=options.octaves,
            patternScale=options.pattern_scale
        )


# =============================================================================
# SIFT
# =============================================================================

@dataclass(frozen=True)
class SIFTOptions(DetectorOptions):
    detector_name: ClassVar[str] = "SIFT"

    n_features: int = option(0, IntConverter, 'nFeatures')
    n_octave_layers: int = option(3, IntConverter, 'nOctaveLayers')
    contrast_threshold: float = option(0.04, DoubleConverter, 'contrastThreshold')
    edge_threshold: float = option(10.0, DoubleConverter, 'edgeThreshold')
    sigma: float = option(1.6, DoubleConverter, 'sigma')


class SIFTDetector(BaseFeatureDetector):
    """SIFT (Scale-Invariant Feature Transform) feature detector"""

    options_class = SIFTOptions

    n_features = native_property('getNFeatures', int)
    n_octave_layers = native_property('getNOctaveLayers', int)
    contrast_threshold = native_property('getContrastThreshold', float)
    edge_threshold = native_property('getEdgeThreshold', float)
    sigma = native_property('getSigma', float)

    def _create_native(self, options: SIFTOptions):
        return cv2.SIFT_create(
            nfeatures=options.n_features,
            nOctaveLayers=options.n_octave_layers,
            contrastThreshold=options.contrast_threshold,
            edgeThreshold=options.edge_threshold,
            sigma=options.sigma
        )


# =============================================================================
# Detect-only corner / region detectors
# =============================================================================

@dataclass(frozen=True)
class FASTOptions(DetectorOptions):
    detector_name: ClassVar[str] = "FAST"

    threshold: int = option(10, IntConverter, 'threshold')
    nonmax_suppression: bool = option(True, BoolConverter, 'nonmaxSuppression')
    type: int = option(int(FASTType.TYPE_9_16), IntConverter, 'type')


class FASTDetector(BaseFeatureDetector):
    """FAST corner detector (keypoints only)"""

    options_class = FASTOptions
    has_descriptor = False

    threshold = native_property('getThreshold', int)
    nonmax_suppression = native_property('getNonmaxSuppression', bool)
    type = native_property('getType', int)

    def _create_native(self, options: FASTOptions):
        return cv2.FastFeatureDetector_create(
            threshold=options.threshold,
            nonmaxSuppression=options.nonmax_suppression,
            type=options.type
        )


@dataclass(frozen=True)
class AGASTOptions(DetectorOptions):
    detector_name: ClassVar[str] = "AGAST"

    threshold: int = option(10, IntConverter, 'threshold')
    nonmax_suppression: bool = option(True, BoolConverter, 'nonmaxSuppression')
    type: int = option(int(AGASTType.OAST_9_16), IntConverter, 'type')


class AGASTDetector(BaseFeatureDetector):
    """AGAST corner detector (keypoints only)"""

    options_class = AGASTOptions
    has_descriptor = False

    threshold = native_property('getThreshold', int)
    nonmax_suppression = native_property('getNonmaxSuppression', bool)
    type = native_property('getType', int)

    def _create_native(self, options: AGASTOptions):
        return cv2.AgastFeatureDetector_create(
            threshold=options.threshold,
            nonmaxSuppression=options.nonmax_suppression,
            type=options.type
        )


@dataclass(frozen=True)
class GFTTOptions(DetectorOptions):
    detector_name: ClassVar[str] = "GFTT"

    max_features: int = option(1000, IntConverter, 'maxFeatures')
    quality_level: float = option(0.01, DoubleConverter, 'qualityLevel')
    min_distance: float = option(1.0, DoubleConverter, 'minDistance')
    block_size: int = option(3, IntConverter, 'blockSize')
    harris_detector: bool = option(False, BoolConverter, 'harrisDetector')
    k: float = option(0.04, DoubleConverter, 'k')


class GFTTDetector(BaseFeatureDetector):
    """Good-features-to-track (Shi-Tomasi / Harris) corner detector"""

    options_class = GFTTOptions
    has_descriptor = False

    max_features = native_property('getMaxFeatures', int)
    quality_level = native_property('getQualityLevel', float)
    min_distance = native_property('getMinDistance', float)
    block_size = native_property('getBlockSize', int)
    harris_detector = native_property('getHarrisDetector', bool)
    k = native_property('getK', float)

    def _create_native(self, options: GFTTOptions):
        # Keywords pick the overload without gradientSize
        return cv2.GFTTDetector_create(
            maxCorners=options.max_features,
            qualityLevel=options.quality_level,
            minDistance=options.min_distance,
            blockSize=options.block_size,
            useHarrisDetector=options.harris_detector,
            k=options.k
        )


@dataclass(frozen=True)
class MSEROptions(DetectorOptions):
    detector_name: ClassVar[str] = "MSER"

    delta: int = option(5, IntConverter, 'delta')
    min_area: int = option(60, IntConverter, 'minArea')
    max_area: int = option(14400, IntConverter, 'maxArea')
    max_variation: float = option(0.25, DoubleConverter, 'maxVariation')
    min_diversity: float = option(0.2, DoubleConverter, 'minDiversity')
    max_evolution: int = option(200, IntConverter, 'maxEvolution')
    area_threshold: float = option(1.01, DoubleConverter, 'areaThreshold')
    min_margin: float = option(0.003, DoubleConverter, 'minMargin')
    edge_blur_size: int = option(5, IntConverter, 'edgeBlurSize')


class MSERDetector(BaseFeatureDetector):
    """MSER (Maximally Stable Extremal Regions) blob detector"""

    options_class = MSEROptions
    has_descriptor = False

    delta = native_property('getDelta', int)
    min_area = native_property('getMinArea', int)
    max_area = native_property('getMaxArea', int)
    max_variation = native_property('getMaxVariation', float)
    min_diversity = native_property('getMinDiversity', float)
    max_evolution = native_property('getMaxEvolution', int)
    area_threshold = native_property('getAreaThreshold', float)
    min_margin = native_property('getMinMargin', float)
    edge_blur_size = native_property('getEdgeBlurSize', int)

    def _create_native(self, options: MSEROptions):
        return cv2.MSER_create(
            options.delta,
            options.min_area,
            options.max_area,
            options.max_variation,
            options.min_diversity,
            options.max_evolution,
            options.area_threshold,
            options.min_margin,
            options.edge_blur_size
        )
