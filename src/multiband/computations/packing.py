"""
Pixel packing.

Conversions from per-band byte planes to the in-memory buffers consumed by
display and encoder collaborators:

- interleaved bytes, ``out[n * (x + y * width) + band]``
- packed 32-bit ARGB, ``A << 24 | R << 16 | G << 8 | B``

All planes are ``uint8`` arrays of shape ``(height, width)``.
"""

from collections.abc import Sequence
from typing import Final

import numpy as np
from numpy.typing import NDArray

OPAQUE: Final[int] = 0xFF


def interleave(planes: Sequence[NDArray[np.uint8]]) -> NDArray[np.uint8]:
    """Interleave byte planes so that the values of one pixel are contiguous."""
    if not planes:
        return np.empty(0, dtype=np.uint8)
    return np.stack(planes, axis=-1).reshape(-1)


def pack_argb(
    alpha: NDArray[np.uint8] | int,
    red: NDArray[np.uint8],
    green: NDArray[np.uint8],
    blue: NDArray[np.uint8],
) -> NDArray[np.uint32]:
    """Pack byte planes into one row-major ``uint32`` ARGB value per pixel."""
    lanes = (
        np.broadcast_to(np.asarray(alpha, dtype=np.uint32), red.shape),
        red.astype(np.uint32),
        green.astype(np.uint32),
        blue.astype(np.uint32),
    )
    packed = np.zeros(red.shape, dtype=np.uint32)
    for shift, lane in zip((24, 16, 8, 0), lanes):
        packed |= (lane & 0xFF) << shift
    return packed.reshape(-1)


def pack_grey(grey: NDArray[np.uint8]) -> NDArray[np.uint32]:
    """Pack a luminance plane as opaque grey."""
    return pack_argb(OPAQUE, grey, grey, grey)


def unpack_argb(packed: NDArray[np.uint32], width: int, height: int) -> NDArray[np.uint8]:
    """Unpack ARGB values into a ``(height, width, 4)`` RGBA byte array."""
    pixels = packed.reshape(height, width)
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    for channel, shift in enumerate((16, 8, 0, 24)):
        rgba[..., channel] = (pixels >> shift) & 0xFF
    return rgba
