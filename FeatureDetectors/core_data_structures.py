"""
Core data structures and enums for the detector bindings.

This module contains the option records that describe how each native
detector is configured, the argument-form union used to dispatch
constructor calls, and the container returned by detection.
"""

import cv2
import numpy as np
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, Union
from dataclasses import dataclass, field, fields
from enum import Enum, IntEnum

from .converters import Converter, is_arg_object
from .exceptions import TypeConversionError


class DetectorType(Enum):
    """Enumeration of available detector types"""
    AKAZE = "AKAZE"
    KAZE = "KAZE"
    ORB = "ORB"
    BRISK = "BRISK"
    SIFT = "SIFT"
    FAST = "FAST"
    AGAST = "AGAST"
    GFTT = "GFTT"
    MSER = "MSER"


# Mirrors of the OpenCV enums, same numeric values as cv2 exposes

class AKAZEDescriptorType(IntEnum):
    KAZE_UPRIGHT = 2
    KAZE = 3
    MLDB_UPRIGHT = 4
    MLDB = 5


class Diffusivity(IntEnum):
    PM_G1 = 0
    PM_G2 = 1
    WEICKERT = 2
    CHARBONNIER = 3


class ORBScoreType(IntEnum):
    HARRIS = 0
    FAST = 1


class FASTType(IntEnum):
    TYPE_5_8 = 0
    TYPE_7_12 = 1
    TYPE_9_16 = 2


class AGASTType(IntEnum):
    AGAST_5_8 = 0
    AGAST_7_12d = 1
    AGAST_7_12s = 2
    OAST_9_16 = 3


# =============================================================================
# Options
# =============================================================================

def option(default: Any, converter: Type[Converter], alias: Optional[str] = None):
    """
    Declare one detector option

    Args:
        default: Native library default
        converter: Converter used for caller supplied values
        alias: Original camelCase name, accepted in the named form
    """
    return field(default=default, metadata={'converter': converter, 'alias': alias})


@dataclass(frozen=True)
class DetectorOptions:
    """
    Immutable record of a detector's tuning parameters.

    Subclasses declare their options with ``option()``; field order is the
    positional argument order.
    """

    detector_name: ClassVar[str] = "Detector"

    @classmethod
    def option_fields(cls) -> Tuple:
        return fields(cls)

    @classmethod
    def option_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_args(cls, args: Tuple = (), kwargs: Optional[Mapping] = None) -> 'DetectorOptions':
        """Parse constructor arguments in either form"""
        form = resolve_arg_form(args, kwargs or {})
        if isinstance(form, Named):
            return cls.from_named(form.values)
        return cls.from_positional(form.values)

    @classmethod
    def from_positional(cls, args: Tuple) -> 'DetectorOptions':
        option_fields = cls.option_fields()
        if len(args) > len(option_fields):
            raise TypeConversionError(
                f"{cls.detector_name} takes at most {len(option_fields)} positional "
                f"arguments, got {len(args)}",
                argument=len(option_fields),
                received=args[len(option_fields)]
            )

        values = {}
        for index, f in enumerate(option_fields):
            values[f.name] = f.metadata['converter'].opt_arg(index, args, f.default)
        return cls(**values)

    @classmethod
    def from_named(cls, opts: Union[Mapping, 'DetectorOptions']) -> 'DetectorOptions':
        if isinstance(opts, DetectorOptions):
            if not isinstance(opts, cls):
                raise TypeConversionError(
                    f"{cls.detector_name} expects {cls.__name__}, got {type(opts).__name__}",
                    argument=0,
                    expected=cls.__name__,
                    received=opts
                )
            return opts

        option_fields = cls.option_fields()
        names = {f.name for f in option_fields}
        by_alias = {f.metadata['alias']: f.name for f in option_fields if f.metadata['alias']}

        # Field name -> key as the caller spelled it, so errors quote their key
        given_keys = {}
        for key, value in opts.items():
            name = key if key in names else by_alias.get(key)
            if name is None:
                raise TypeConversionError(
                    f"{cls.detector_name} has no option {key!r}; "
                    f"valid options: {', '.join(cls.option_names())}",
                    argument=key,
                    received=value
                )
            if name in given_keys:
                raise TypeConversionError(
                    f"option '{name}' given more than once (as {given_keys[name]!r} and {key!r})",
                    argument=key,
                    received=value
                )
            given_keys[name] = key

        values = {}
        for f in option_fields:
            key = given_keys.get(f.name, f.name)
            values[f.name] = f.metadata['converter'].opt_prop(key, opts, f.default)
        return cls(**values)

    def to_dict(self, camel_case: bool = False) -> Dict[str, Any]:
        """Convert to a plain dict keyed by field name or camelCase alias"""
        result = {}
        for f in self.option_fields():
            key = (f.metadata['alias'] or f.name) if camel_case else f.name
            result[key] = getattr(self, f.name)
        return result


# =============================================================================
# Argument forms
# =============================================================================

@dataclass(frozen=True)
class Positional:
    values: Tuple


@dataclass(frozen=True)
class Named:
    values: Union[Mapping, DetectorOptions]


ArgForm = Union[Positional, Named]


def resolve_arg_form(args: Tuple, kwargs: Mapping) -> ArgForm:
    """
    Decide once which unwrap path a constructor call takes.

    Keyword arguments, or a single keyed container / options record as the
    only positional argument, select the named form. Anything else is
    positional. Mixing the two forms is rejected.
    """
    if kwargs:
        if args:
            raise TypeConversionError(
                "cannot mix positional arguments with named options",
                argument=0,
                received=args[0]
            )
        return Named(dict(kwargs))

    if args and (is_arg_object(args[0]) or isinstance(args[0], DetectorOptions)):
        if len(args) > 1:
            raise TypeConversionError(
                "an options object must be the only argument",
                argument=1,
                received=args[1]
            )
        return Named(args[0])

    return Positional(tuple(args))


# =============================================================================
# Detection results
# =============================================================================

@dataclass
class FeatureData:
    """Container for feature detection results"""
    keypoints: List[cv2.KeyPoint]
    descriptors: Optional[np.ndarray]
    method: str
    detection_time: float = 0.0

    def __len__(self):
        return len(self.keypoints)

    def to_serializable(self) -> Dict:
        """Convert to serializable format"""
        return {
            'keypoints': keypoints_to_serializable(self.keypoints),
            'descriptors': self.descriptors.tolist() if self.descriptors is not None else None,
            'method': self.method,
            'detection_time': self.detection_time
        }


def keypoints_to_serializable(keypoints: List[cv2.KeyPoint]) -> List[Dict]:
    """Convert keypoints to serializable format"""
    return [
        {
            'pt': kp.pt,
            'angle': kp.angle,
            'class_id': kp.class_id,
            'octave': kp.octave,
            'response': kp.response,
            'size': kp.size
        }
        for kp in keypoints
    ]


def keypoints_from_serializable(keypoints_data: List[Dict]) -> List[cv2.KeyPoint]:
    """Convert serialized keypoints back to cv2.KeyPoint objects"""
    return [
        cv2.KeyPoint(
            x=kp_data['pt'][0],
            y=kp_data['pt'][1],
            size=kp_data['size'],
            angle=kp_data['angle'],
            response=kp_data['response'],
            octave=kp_data['octave'],
            class_id=kp_data['class_id']
        )
        for kp_data in keypoints_data
    ]
