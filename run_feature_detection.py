#!/usr/bin/env python3
"""
Feature Detector - Main Script

Builds an OpenCV detector from a preset, a JSON config file or command line
options, prints the parameters the native detector reports, and optionally
runs detection on an image.

Usage:
    python run_feature_detection.py --detector AKAZE --param threshold=0.01
    python run_feature_detection.py --preset fast --image ./images/img_1.jpg
    python run_feature_detection.py --config detector.json --save-config out.json
"""

import argparse
import json
import sys

import cv2

from FeatureDetectors import (
    FeatureDetectorError,
    config_from_detector,
    configure_root_logger,
    create_config_from_preset,
    create_detector_from_config,
    get_available_detectors,
    get_available_presets,
    load_config,
    save_config,
)
from FeatureDetectors.config import get_default_config, merge_configs, print_config


def parse_param(text):
    """Parse NAME=VALUE; VALUE is read as JSON when possible"""
    if '=' not in text:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    name, raw = text.split('=', 1)
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return name.strip(), value


def build_config(args):
    if args.config:
        config = load_config(args.config)
    elif args.preset:
        config = create_config_from_preset(args.preset)
    else:
        config = get_default_config()

    if args.detector and args.detector.upper() != str(config.get('detector', '')).upper():
        config = {'detector': args.detector, 'params': {}}

    if args.param:
        config = merge_configs(config, {'params': dict(args.param)})

    return config


def main():
    parser = argparse.ArgumentParser(description="OpenCV Feature Detector")

    # Detector selection
    parser.add_argument('--detector', type=str.upper, default=None,
                        choices=get_available_detectors(),
                        help='Detector type (default: from preset/config, else AKAZE)')
    parser.add_argument('--preset', type=str, default=None,
                        choices=get_available_presets(),
                        help='Start from a preset configuration')
    parser.add_argument('--config', type=str, default=None,
                        help='Load configuration from a JSON file')
    parser.add_argument('--param', type=parse_param, action='append', default=[],
                        metavar='NAME=VALUE',
                        help='Override one option (repeatable)')

    # Input/Output
    parser.add_argument('--image', type=str, default=None,
                        help='Run detection on this image')
    parser.add_argument('--save-config', type=str, default=None,
                        help='Save the live detector parameters as JSON')

    # Logging
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Log to file')

    args = parser.parse_args()
    configure_root_logger(level=args.log_level, log_file=args.log_file)

    try:
        config = build_config(args)
        print_config(config, "Requested configuration")

        with create_detector_from_config(config) as detector:
            live_config = config_from_detector(detector)
            print_config(live_config, "Native detector parameters")

            if args.save_config:
                save_config(live_config, args.save_config)

            if args.image:
                image = cv2.imread(args.image, cv2.IMREAD_COLOR)
                if image is None:
                    print(f"\nERROR: could not read image: {args.image}")
                    return 1
                features = detector.detect_and_compute(image)
                print(f"\n{features.method}: {len(features)} keypoints "
                      f"in {features.detection_time:.3f}s")
                if features.descriptors is not None:
                    print(f"Descriptors: {features.descriptors.shape} {features.descriptors.dtype}")

    except (FeatureDetectorError, ValueError, FileNotFoundError) as e:
        print(f"\nERROR: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
