import numpy as np
from numpy.typing import NDArray

from multiband.container_models.base import EMPTY_RECTANGLE, Rectangle


def get_bounding_box(mask: NDArray[np.bool_]) -> tuple[slice, slice]:
    """
    Compute the minimal bounding box of a 2D mask.

    Finds the smallest axis-aligned rectangle containing all non-zero (or True) values.

    :param mask: 2D mask (non-zero/True values indicate the region of interest)
    :returns: Tuple (y_slice, x_slice) as slices for NumPy indexing, covering all mask pixels
    """
    coordinates = np.nonzero(mask)
    y_min, x_min = np.min(coordinates, axis=1)
    y_max, x_max = np.max(coordinates, axis=1)
    return slice(y_min, y_max + 1), slice(x_min, x_max + 1)


def content_rectangle(data: NDArray) -> Rectangle:
    """
    Bounding rectangle of the content of a 2D array.

    Content is every pixel that is neither zero nor NaN.

    :param data: 2D pixel array.
    :returns: The content rectangle, or an empty rectangle when there is no content.
    """
    mask = np.nan_to_num(data, nan=0) != 0
    if not mask.any():
        return EMPTY_RECTANGLE
    rows, cols = get_bounding_box(mask)
    return Rectangle(
        x=int(cols.start),
        y=int(rows.start),
        width=int(cols.stop - cols.start),
        height=int(rows.stop - rows.start),
    )


def copy_region(source: NDArray, x: int, y: int, out: NDArray) -> NDArray:
    """
    Copy the region of ``source`` starting at ``(x, y)`` into ``out``.

    The region has the shape of ``out``. Parts of the region that fall outside
    ``source`` are set to zero.

    :param source: 2D array to read from.
    :param x: Column of the top-left corner of the region (may be negative).
    :param y: Row of the top-left corner of the region (may be negative).
    :param out: 2D array receiving the region, modified in place.
    :returns: ``out``
    """
    height, width = out.shape
    out[...] = 0
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + width, source.shape[1]), min(y + height, source.shape[0])
    if x1 > x0 and y1 > y0:
        out[y0 - y : y1 - y, x0 - x : x1 - x] = source[y0:y1, x0:x1]
    return out


def shift_columns(data: NDArray, offset: int) -> NDArray:
    """
    Shift the columns of ``data`` in place, filling vacated columns with zero.

    :param data: 2D array, modified in place.
    :param offset: Positive values shift to the right, negative values to the left.
    :returns: ``data``
    """
    width = data.shape[1]
    if offset == 0:
        return data
    if abs(offset) >= width:
        data[...] = 0
        return data
    if offset > 0:
        data[:, offset:] = data[:, :-offset].copy()
        data[:, :offset] = 0
    else:
        data[:, :offset] = data[:, -offset:].copy()
        data[:, offset:] = 0
    return data
