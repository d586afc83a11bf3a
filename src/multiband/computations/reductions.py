from collections.abc import Iterable, Sequence
from functools import reduce

import numpy as np
from numpy.typing import NDArray

from multiband.container_models.base import EMPTY_RECTANGLE, Rectangle
from multiband.container_models.pixel_types import PixelType


def flatten_average(planes: Sequence[NDArray], pixel_type: PixelType) -> NDArray:
    """
    Per-pixel mean of a sequence of equally shaped planes.

    The planes are summed in a wide accumulator first and divided once by the
    number of planes, using the division semantics of the pixel type.

    :param planes: Non-empty sequence of 2D arrays.
    :param pixel_type: Element type of the result.
    :returns: 2D array of ``pixel_type.dtype``.
    """
    accumulator = np.int64 if pixel_type.is_integer else np.float64
    total = np.sum(np.stack(planes), axis=0, dtype=accumulator)
    pixel_type.divide(total, len(planes))
    return total.astype(pixel_type.dtype)


def flatten_maximum(planes: Sequence[NDArray], pixel_type: PixelType) -> NDArray:
    """Per-pixel maximum of a sequence of equally shaped planes."""
    return pixel_type.flatten_max(np.stack(planes)).astype(pixel_type.dtype)


def bounding_union(rectangles: Iterable[Rectangle]) -> Rectangle:
    """Smallest rectangle covering every non-empty rectangle."""
    return reduce(Rectangle.union, rectangles, EMPTY_RECTANGLE)
