"""
Broadcast operands.

The right-hand side of a multi-band operation is one of four variants:

- :class:`Scalar`: one value applied to every band.
- :class:`PerBandVector`: one value per band, applied positionally.
- :class:`MultiBand`: another multi-band image, paired band by band.
- :class:`SingleBand`: one band, applied to every band.

:func:`as_operand` turns plain Python values into the matching variant.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np

from multiband.container_models.band import Band
from multiband.exceptions import UnsupportedOperandError

if TYPE_CHECKING:
    from multiband.container_models.multiband_image import MultiBandImage


@runtime_checkable
class BandStack(Protocol):
    """Anything that exposes an ordered stack of equally sized bands."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def num_bands(self) -> int: ...

    def get_band(self, index: int) -> Band: ...


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class PerBandVector:
    values: tuple[Any, ...]

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class MultiBand:
    image: MultiBandImage


@dataclass(frozen=True)
class SingleBand:
    band: Band


type Operand = Scalar | PerBandVector | MultiBand | SingleBand


def as_operand(value: Any) -> Operand:
    """
    Classify a value as a broadcast operand.

    :param value: An operand variant, a real number, a numpy scalar or 0-d
        array, a sequence or 1-d array of per-band values, a :class:`Band`
        or a multi-band image.
    :returns: The matching operand variant.
    :raises UnsupportedOperandError: If the value fits none of the variants.
    """
    match value:
        case Scalar() | PerBandVector() | MultiBand() | SingleBand():
            return value
        case Band():
            return SingleBand(value)
        case BandStack():
            return MultiBand(value)
        case Real() | np.number() | np.bool_():
            return Scalar(value)
        case np.ndarray() if value.ndim == 0:
            return Scalar(value.item())
        case np.ndarray() if value.ndim == 1:
            return PerBandVector(tuple(value.tolist()))
        case str() | bytes():
            raise UnsupportedOperandError(f"Unsupported operand type: {type(value).__name__}")
        case Sequence():
            return PerBandVector(tuple(value))
        case _:
            raise UnsupportedOperandError(f"Unsupported operand type: {type(value).__name__}")
