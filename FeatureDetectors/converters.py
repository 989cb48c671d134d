"""
Type converters between Python values and native option types.

Each converter checks and unwraps one native type. ``opt_arg`` and
``opt_prop`` read an optional value from a positional argument list or a
keyed container and fall back to the given default when the value is absent.
``None`` counts as absent, which lets callers skip positional slots.
"""

import numbers
from collections.abc import Mapping
from typing import Any, Sequence, Union

import numpy as np

from .exceptions import TypeConversionError


INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


def describe_argument(argument: Union[int, str]) -> str:
    """Human readable location of an argument for error messages"""
    if isinstance(argument, int):
        return f"argument {argument}"
    return f"option '{argument}'"


def is_arg_object(value: Any) -> bool:
    """True if value is a plain keyed container (the named-options form)"""
    return isinstance(value, Mapping)


class Converter:
    """Base converter. Subclasses implement ``accepts`` and ``unwrap``."""

    type_name = 'value'

    @classmethod
    def accepts(cls, value: Any) -> bool:
        raise NotImplementedError

    @classmethod
    def unwrap(cls, value: Any) -> Any:
        raise NotImplementedError

    @classmethod
    def convert(cls, value: Any, argument: Union[int, str]) -> Any:
        """
        Convert value or raise TypeConversionError tagged with argument

        Args:
            value: Caller supplied value
            argument: Positional index or option name, used in the error

        Returns:
            Value in its native-compatible Python type
        """
        if not cls.accepts(value):
            raise TypeConversionError(
                f"{describe_argument(argument)}: expected {cls.type_name}, "
                f"got {type(value).__name__} ({value!r})",
                argument=argument,
                expected=cls.type_name,
                received=value
            )
        return cls.unwrap(value)

    @classmethod
    def opt_arg(cls, index: int, args: Sequence[Any], default: Any) -> Any:
        if index >= len(args) or args[index] is None:
            return default
        return cls.convert(args[index], index)

    @classmethod
    def opt_prop(cls, name: str, opts: Mapping, default: Any) -> Any:
        value = opts.get(name)
        if value is None:
            return default
        return cls.convert(value, name)


class IntConverter(Converter):
    """Signed 32-bit integer. Integral floats are accepted, bools are not."""

    type_name = 'int'

    @classmethod
    def accepts(cls, value: Any) -> bool:
        if isinstance(value, (bool, np.bool_)):
            return False
        if isinstance(value, numbers.Integral):
            return INT32_MIN <= int(value) <= INT32_MAX
        if isinstance(value, numbers.Real):
            as_float = float(value)
            return as_float.is_integer() and INT32_MIN <= as_float <= INT32_MAX
        return False

    @classmethod
    def unwrap(cls, value: Any) -> int:
        return int(value)


class DoubleConverter(Converter):
    """Any real number except bool"""

    type_name = 'float'

    @classmethod
    def accepts(cls, value: Any) -> bool:
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
            return False
        try:
            float(value)
        except OverflowError:
            return False
        return True

    @classmethod
    def unwrap(cls, value: Any) -> float:
        return float(value)


class BoolConverter(Converter):
    type_name = 'bool'

    @classmethod
    def accepts(cls, value: Any) -> bool:
        return isinstance(value, (bool, np.bool_))

    @classmethod
    def unwrap(cls, value: Any) -> bool:
        return bool(value)
