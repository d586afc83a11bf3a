"""
Data container models of the multi-band engine.

A :class:`Band` is one 2D plane of pixels; a :class:`MultiBandImage` is an
ordered stack of equally sized bands that share one :class:`PixelType`.
Operations are carried out per band, in band order.
"""

from .base import EMPTY_RECTANGLE, Rectangle
from .pixel_types import FLOAT32, FLOAT64, INT32, UINT8, PixelType
from .colour_space import ColourSpace
from .band import Band, InterlaceField
from .operands import MultiBand, PerBandVector, Scalar, SingleBand, as_operand
from .multiband_image import MultiBandImage


__all__ = [
    "EMPTY_RECTANGLE",
    "FLOAT32",
    "FLOAT64",
    "INT32",
    "UINT8",
    "Band",
    "ColourSpace",
    "InterlaceField",
    "MultiBand",
    "MultiBandImage",
    "PerBandVector",
    "PixelType",
    "Rectangle",
    "Scalar",
    "SingleBand",
    "as_operand",
]
