"""
Pixel element types.

A :class:`PixelType` is the capability object that resolves everything that
depends on the concrete element type of a band: allocation, integer
conversion, division semantics, byte scaling and the per-pixel maximum rule.
Bands and multi-band images never branch on dtypes themselves; they ask their
pixel type.

Registered types
----------------

========  ===========  ==========
name      dtype        max value
========  ===========  ==========
float32   ``float32``  1.0
float64   ``float64``  1.0
uint8     ``uint8``    255
int32     ``int32``    255
========  ===========  ==========

The max value is the pixel value that maps onto byte ``255`` when a band is
converted for display, and the upper bound of :meth:`PixelType.normalise`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import numpy as np
from numpy.typing import DTypeLike, NDArray

_INT32_MIN: Final[int] = -(2**31)
_INT32_MAX: Final[int] = 2**31 - 1


def _check_integer_divisor(divisor: NDArray | float) -> None:
    if np.any(np.asarray(divisor) == 0):
        raise ZeroDivisionError("Integer pixel division by zero")


@dataclass(frozen=True)
class PixelType:
    name: str
    dtype: np.dtype
    max_value: float

    @property
    def is_integer(self) -> bool:
        return bool(np.issubdtype(self.dtype, np.integer))

    def zeros(self, width: int, height: int) -> NDArray:
        """Allocate a zero-filled ``(height, width)`` array of this type."""
        return np.zeros((height, width), dtype=self.dtype)

    def divide(self, data: NDArray, divisor: NDArray | float) -> NDArray:
        """
        Divide ``data`` by ``divisor`` in place.

        Floating point types use true division. Integer types truncate the
        quotient toward zero and refuse to divide by zero.

        :param data: Array to divide, modified in place.
        :param divisor: Scalar or array broadcastable to ``data``.
        :returns: ``data``
        :raises ZeroDivisionError: If an integer array is divided by zero.
        """
        if not np.issubdtype(data.dtype, np.integer):
            np.divide(data, divisor, out=data, casting="unsafe")
            return data
        _check_integer_divisor(divisor)
        data[...] = np.trunc(np.true_divide(data, divisor))
        return data

    def check_divisor(self, divisor: NDArray | float) -> None:
        """:raises ZeroDivisionError: If this is an integer type and ``divisor`` holds a zero."""
        if self.is_integer:
            _check_integer_divisor(divisor)

    def normalise(self, data: NDArray) -> NDArray:
        """Stretch ``data`` in place so that its range becomes ``[0, max_value]``."""
        if data.size == 0:
            return data
        low, high = np.nanmin(data), np.nanmax(data)
        if high == low:
            return data
        stretched = (data.astype(np.float64) - low) / (float(high) - float(low))
        data[...] = stretched * self.max_value
        return data

    def flatten_max(self, stack: NDArray) -> NDArray:
        """Per-pixel maximum over the first axis of a ``(bands, height, width)`` stack."""
        if self.is_integer:
            return np.max(stack, axis=0)
        return np.fmax.reduce(stack, axis=0)

    def to_bytes(self, data: NDArray) -> NDArray[np.uint8]:
        """
        Convert pixel values to display bytes.

        Values are scaled so that ``max_value`` maps onto ``255``, truncated
        toward zero and reduced to their low eight bits. NaN becomes ``0``.
        """
        scaled = np.nan_to_num(data.astype(np.float64) * (255.0 / self.max_value))
        truncated = np.clip(np.trunc(scaled), _INT32_MIN, _INT32_MAX).astype(np.int64)
        return (truncated & 0xFF).astype(np.uint8)


FLOAT32: Final[PixelType] = PixelType("float32", np.dtype(np.float32), 1.0)
FLOAT64: Final[PixelType] = PixelType("float64", np.dtype(np.float64), 1.0)
UINT8: Final[PixelType] = PixelType("uint8", np.dtype(np.uint8), 255.0)
INT32: Final[PixelType] = PixelType("int32", np.dtype(np.int32), 255.0)

PIXEL_TYPES: Final[dict[str, PixelType]] = {
    pixel_type.name: pixel_type for pixel_type in (FLOAT32, FLOAT64, UINT8, INT32)
}


def pixel_type_for(dtype: DTypeLike) -> PixelType:
    """
    Look up the registered pixel type of a dtype.

    :raises ValueError: If no pixel type is registered for the dtype.
    """
    resolved = np.dtype(dtype)
    if (pixel_type := PIXEL_TYPES.get(resolved.name)) is None:
        raise ValueError(
            f"Unsupported pixel dtype '{resolved.name}', "
            f"expected one of: {', '.join(PIXEL_TYPES)}"
        )
    return pixel_type


def pixel_type_named(name: str) -> PixelType:
    """Look up a registered pixel type by name."""
    if (pixel_type := PIXEL_TYPES.get(name.lower())) is None:
        raise ValueError(
            f"Unknown pixel type '{name}', expected one of: {', '.join(PIXEL_TYPES)}"
        )
    return pixel_type
