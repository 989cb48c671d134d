"""
Configuration management for the detector bindings.

A configuration names one detector type and its named options:

    {'detector': 'AKAZE', 'params': {'threshold': 0.01, 'n_octaves': 8}}

This module provides predefined configurations, validation, JSON
persistence and construction of detectors from configurations.
"""

import copy
import json
import os
from typing import Any, Dict, List

from .base_classes import BaseFeatureDetector
from .exceptions import TypeConversionError
from .factory import DETECTOR_REGISTRY, create_detector, get_detector_class
from .logger import get_logger

logger = get_logger("config")


# =============================================================================
# Default Configurations
# =============================================================================

DEFAULT_CONFIG = {
    'detector': 'AKAZE',
    'params': {}
}


PRESET_CONFIGS = {
    'fast': {
        'detector': 'ORB',
        'params': {
            'max_features': 1000,
            'scale_factor': 1.5,
            'n_levels': 6
        }
    },

    'balanced': {
        'detector': 'AKAZE',
        'params': {
            'threshold': 0.001,
            'n_octaves': 4
        }
    },

    'accurate': {
        'detector': 'SIFT',
        'params': {
            'n_features': 5000,
            'contrast_threshold': 0.03
        }
    },

    'blob': {
        'detector': 'MSER',
        'params': {
            'delta': 5,
            'min_area': 60,
            'max_area': 14400
        }
    }
}


# Native defaults per detector type, keyed by DetectorType value
DETECTOR_SPECIFIC_CONFIGS = {
    detector_type.value: detector_class.options_class().to_dict()
    for detector_type, detector_class in DETECTOR_REGISTRY.items()
}


# =============================================================================
# Configuration Functions
# =============================================================================

def get_default_config() -> Dict[str, Any]:
    """Get a copy of the default configuration"""
    return copy.deepcopy(DEFAULT_CONFIG)


def create_config_from_preset(preset: str) -> Dict[str, Any]:
    """
    Create configuration from a preset

    Args:
        preset: Preset name ('fast', 'balanced', 'accurate', 'blob')

    Raises:
        ValueError: If preset is not available
    """
    if preset not in PRESET_CONFIGS:
        available = ', '.join(PRESET_CONFIGS.keys())
        raise ValueError(f"Unknown preset: {preset}. Available: {available}")

    base_config = get_default_config()
    preset_config = copy.deepcopy(PRESET_CONFIGS[preset])

    # A preset switching detector type must not inherit the default's params
    if preset_config.get('detector') != base_config.get('detector'):
        base_config['params'] = {}

    return merge_configs(base_config, preset_config)


def merge_configs(base_config: Dict[str, Any], override_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge two configuration dictionaries

    Args:
        base_config: Base configuration
        override_config: Configuration to override base with

    Returns:
        Merged configuration
    """
    merged = copy.deepcopy(base_config)

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)

    return merged


def validate_config(config: Dict[str, Any]) -> Dict[str, List[str]]:
    """
    Validate configuration and return any issues

    Args:
        config: Configuration to validate

    Returns:
        Dictionary with validation results:
        {
            'errors': [list of error messages],
            'warnings': [list of warning messages]
        }
    """
    errors = []
    warnings = []

    if not isinstance(config, dict):
        return {'errors': ["Configuration must be a dictionary"], 'warnings': []}

    for key in config:
        if key not in ('detector', 'params'):
            warnings.append(f"Unknown configuration key: {key}")

    if 'detector' not in config:
        errors.append("Missing required field: detector")
        return {'errors': errors, 'warnings': warnings}

    try:
        detector_class = get_detector_class(config['detector'])
    except ValueError as e:
        errors.append(str(e))
        return {'errors': errors, 'warnings': warnings}

    params = config.get('params', {})
    if not isinstance(params, dict):
        errors.append("'params' must be a dictionary")
    else:
        try:
            detector_class.options_class.from_named(params)
        except TypeConversionError as e:
            errors.append(f"Invalid params for {config['detector']}: {e}")

    return {'errors': errors, 'warnings': warnings}


def create_detector_from_config(config: Dict[str, Any]) -> BaseFeatureDetector:
    """
    Build a detector from a configuration

    Raises:
        ValueError: If the configuration does not validate
        NativeConstructionError: OpenCV rejected the options
    """
    result = validate_config(config)
    for warning in result['warnings']:
        logger.warning(warning)
    if result['errors']:
        raise ValueError("Invalid detector configuration: " + "; ".join(result['errors']))

    return create_detector(config['detector'], dict(config.get('params', {})))


def config_from_detector(detector: BaseFeatureDetector) -> Dict[str, Any]:
    """Configuration reproducing a live detector's current parameters"""
    return {
        'detector': detector.name,
        'params': detector.get_params()
    }


def print_config(config: Dict[str, Any], title: str = "Configuration"):
    """
    Pretty print a configuration

    Args:
        config: Configuration to print
        title: Title for the printout
    """
    print(f"\n{title}")
    print("=" * len(title))

    def print_dict(d, indent=0):
        for key, value in d.items():
            prefix = "  " * indent
            if isinstance(value, dict):
                print(f"{prefix}{key}:")
                print_dict(value, indent + 1)
            else:
                print(f"{prefix}{key}: {value}")

    print_dict(config)


def save_config(config: Dict[str, Any], filepath: str):
    """
    Save configuration to JSON file

    Args:
        config: Configuration to save
        filepath: Path to save file
    """
    with open(filepath, 'w') as f:
        json.dump(config, f, indent=2)
    logger.info(f"Configuration saved to: {filepath}")


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from JSON file

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    with open(filepath, 'r') as f:
        config = json.load(f)

    logger.info(f"Configuration loaded from: {filepath}")
    return config


def get_detector_config(detector_type: str) -> Dict[str, Any]:
    """
    Get default options for a specific detector

    Raises:
        ValueError: If detector_type is not supported
    """
    detector_class = get_detector_class(detector_type)
    return detector_class.options_class().to_dict()


def get_available_presets() -> List[str]:
    """Get list of available preset configurations"""
    return list(PRESET_CONFIGS.keys())


def describe_preset(preset: str) -> str:
    descriptions = {
        'fast': "ORB with a reduced pyramid and feature budget",
        'balanced': "AKAZE with library defaults",
        'accurate': "SIFT with a lower contrast threshold and large feature budget",
        'blob': "MSER region detector"
    }

    return descriptions.get(preset, "No description available")
