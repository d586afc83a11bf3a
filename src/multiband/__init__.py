"""
Multi-band pixel arrays.

A :class:`MultiBandImage` groups equally sized :class:`Band` objects that share
one :class:`PixelType`, and applies arithmetic, clipping, geometry, processing
and packing band by band.
"""

from .container_models import (
    EMPTY_RECTANGLE,
    FLOAT32,
    FLOAT64,
    INT32,
    UINT8,
    Band,
    ColourSpace,
    InterlaceField,
    MultiBand,
    MultiBandImage,
    PerBandVector,
    PixelType,
    Rectangle,
    Scalar,
    SingleBand,
    as_operand,
)
from .exceptions import (
    ArityMismatchError,
    BandIndexError,
    DimensionMismatchError,
    MultiBandError,
    PixelTypeMismatchError,
    UnsupportedBandCountError,
    UnsupportedOperandError,
)


__all__ = [
    "EMPTY_RECTANGLE",
    "FLOAT32",
    "FLOAT64",
    "INT32",
    "UINT8",
    "ArityMismatchError",
    "Band",
    "BandIndexError",
    "ColourSpace",
    "DimensionMismatchError",
    "InterlaceField",
    "MultiBand",
    "MultiBandError",
    "MultiBandImage",
    "PerBandVector",
    "PixelType",
    "PixelTypeMismatchError",
    "Rectangle",
    "Scalar",
    "SingleBand",
    "UnsupportedBandCountError",
    "UnsupportedOperandError",
    "as_operand",
]
