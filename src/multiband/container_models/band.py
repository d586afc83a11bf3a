"""Single-band image container.

:class:`Band` is the single-band collaborator of
:class:`~multiband.container_models.multiband_image.MultiBandImage`: a 2D
numeric array (rows are ``y``, columns are ``x``) with elementwise arithmetic,
clipping, geometry, region extraction, packing and processing.

Architecture
------------
::

    +--------------------------------------+
    |                Band                  |
    |--------------------------------------|
    | data       : PixelArray2D            |
    | pixel_type : PixelType               |
    | width      : int (columns)           |
    | height     : int (rows)              |
    +--------------------------------------+
    | add / subtract / multiply / divide   |
    | clip / clip_min / clip_max           |
    | threshold / inverse / normalise      |
    | flip_x / flip_y / shift_*            |
    | extract_roi / content_area           |
    | get_field / get_field_copy / ...     |
    | to_byte_array / to_packed_pixels     |
    | process / process_kernel / ...       |
    +--------------------------------------+

- Every mutating operation works in place on ``data`` and returns the band
  itself, so calls can be chained.
- The element type of ``data`` must be one of the registered
  :mod:`~multiband.container_models.pixel_types`; Python sequences are
  coerced to ``float32``.
- Compared by data equality (NaN-aware).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Self

import numpy as np
from numpy.typing import NDArray
from pydantic import AfterValidator, BaseModel, ConfigDict

from multiband.computations.packing import pack_grey
from multiband.computations.spatial import content_rectangle, copy_region, shift_columns
from multiband.computations.windows import kernel_windows
from multiband.container_models.base import PixelArray2D, Rectangle
from multiband.container_models.pixel_types import (
    FLOAT32,
    PixelType,
    pixel_type_for,
)
from multiband.exceptions import DimensionMismatchError
from multiband.processors.protocols import (
    BandFunction,
    BandProcessor,
    KernelProcessor,
    PixelFunction,
    PixelProcessor,
    as_band_function,
    as_pixel_function,
    kernel_shape,
)


def _validate_pixel_dtype(value: NDArray) -> NDArray:
    pixel_type_for(value.dtype)
    return value


type BandData = Annotated[PixelArray2D, AfterValidator(_validate_pixel_dtype)]


class InterlaceField(StrEnum):
    """Rows of an interlaced frame: even rows (0, 2, ...) or odd rows (1, 3, ...)."""

    EVEN = "even"
    ODD = "odd"

    @property
    def start(self) -> int:
        """Index of the first row of the field."""
        return 0 if self is InterlaceField.EVEN else 1


class Band(BaseModel):
    data: BandData

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra="forbid",
    )

    @classmethod
    def blank(cls, width: int, height: int, pixel_type: PixelType = FLOAT32) -> Band:
        """Create a zero-filled band."""
        return cls(data=pixel_type.zeros(width, height))

    @property
    def width(self) -> int:
        """The band width in pixels."""
        return self.data.shape[1]

    @property
    def height(self) -> int:
        """The band height in pixels."""
        return self.data.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """``(width, height)`` of the band."""
        return self.width, self.height

    @property
    def pixel_type(self) -> PixelType:
        return pixel_type_for(self.data.dtype)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Band):
            return NotImplemented
        if self.data.shape != other.data.shape:
            return False
        equal_nan = not self.pixel_type.is_integer
        return bool(np.array_equal(self.data, other.data, equal_nan=equal_nan))

    def __repr__(self) -> str:
        return f"Band(width={self.width}, height={self.height}, pixel_type={self.pixel_type.name})"

    def clone(self) -> Band:
        """Deep copy of the band."""
        return Band(data=self.data.copy())

    # Arithmetic

    def _operand(self, other: Band | float) -> NDArray | Any:
        if isinstance(other, Band):
            if other.size != self.size:
                raise DimensionMismatchError(self.size, other.size)
            return other.data
        return np.asarray(other)

    def _apply(self, ufunc: np.ufunc, other: Band | float) -> Self:
        ufunc(self.data, self._operand(other), out=self.data, casting="unsafe")
        return self

    def add(self, other: Band | float) -> Self:
        return self._apply(np.add, other)

    def subtract(self, other: Band | float) -> Self:
        return self._apply(np.subtract, other)

    def multiply(self, other: Band | float) -> Self:
        return self._apply(np.multiply, other)

    def divide(self, other: Band | float) -> Self:
        """Divide in place, truncating toward zero for integer pixel types."""
        self.pixel_type.divide(self.data, self._operand(other))
        return self

    def clip(self, minimum: float, maximum: float) -> Self:
        """Clamp every pixel into ``[minimum, maximum]``."""
        np.clip(
            self.data,
            np.asarray(minimum),
            np.asarray(maximum),
            out=self.data,
            casting="unsafe",
        )
        return self

    def clip_min(self, threshold: float) -> Self:
        """Raise every pixel below ``threshold`` to ``threshold``."""
        self.data[self.data < threshold] = threshold
        return self

    def clip_max(self, threshold: float) -> Self:
        """Lower every pixel above ``threshold`` to ``threshold``."""
        self.data[self.data > threshold] = threshold
        return self

    def threshold(self, threshold: float) -> Self:
        """Set pixels at or below ``threshold`` to 0 and all others to 1."""
        self.data[...] = self.data > threshold
        return self

    def abs(self) -> Self:
        np.abs(self.data, out=self.data)
        return self

    def inverse(self) -> Self:
        """Replace every pixel ``v`` by ``max - v``."""
        if self.data.size:
            self.data[...] = np.nanmax(self.data) - self.data
        return self

    def normalise(self) -> Self:
        """Stretch the pixel range onto ``[0, pixel_type.max_value]``."""
        self.pixel_type.normalise(self.data)
        return self

    def zero(self) -> Self:
        self.data[...] = 0
        return self

    def fill(self, value: float) -> Self:
        self.data[...] = value
        return self

    def min(self) -> Any:
        return np.nanmin(self.data).item()

    def max(self) -> Any:
        return np.nanmax(self.data).item()

    # Geometry

    def flip_x(self) -> Self:
        """Mirror the band horizontally."""
        self.data[...] = self.data[:, ::-1].copy()
        return self

    def flip_y(self) -> Self:
        """Mirror the band vertically."""
        self.data[...] = self.data[::-1, :].copy()
        return self

    def shift_left(self, count: int) -> Self:
        """Shift pixels ``count`` columns to the left; vacated columns become zero."""
        shift_columns(self.data, -count)
        return self

    def shift_right(self, count: int) -> Self:
        """Shift pixels ``count`` columns to the right; vacated columns become zero."""
        shift_columns(self.data, count)
        return self

    def get_pixel(self, x: int, y: int) -> Any:
        return self.data[y, x].item()

    def set_pixel(self, x: int, y: int, value: float) -> None:
        self.data[y, x] = value

    def extract_roi(self, x: int, y: int, width: int, height: int) -> Band:
        """
        Extract a region of interest as a new band.

        Parts of the region outside this band are zero-filled.
        """
        return Band(data=copy_region(self.data, x, y, self.pixel_type.zeros(width, height)))

    def extract_roi_into(self, x: int, y: int, out: Band) -> Band:
        """Fill ``out`` with the region of its own size starting at ``(x, y)``."""
        copy_region(self.data, x, y, out.data)
        return out

    def get_field(self, field: InterlaceField) -> Band:
        """Copy of the even or odd rows of the band."""
        return Band(data=self.data[field.start :: 2].copy())

    def _field_rows(self, field: InterlaceField) -> NDArray:
        rows = self.data[field.start :: 2]
        if len(rows) == 0:
            raise ValueError(f"Band of height {self.height} has no {field} rows")
        return rows

    def get_field_copy(self, field: InterlaceField) -> Band:
        """
        Full-height band built from one field by line doubling.

        Output rows ``2k`` and ``2k + 1`` both take field row ``k``; a trailing
        row without a pair repeats the last field row.

        :raises ValueError: If the band has no rows in ``field``.
        """
        rows = self._field_rows(field)
        source = np.minimum(np.arange(self.height) // 2, len(rows) - 1)
        return Band(data=rows[source].copy())

    def get_field_interpolate(self, field: InterlaceField) -> Band:
        """
        Full-height band that keeps the rows of one field and fills the others.

        A missing row is the mean of the field rows directly above and below it,
        or a copy of its single field neighbour at the top or bottom edge.
        Integer types truncate the mean toward zero.

        :raises ValueError: If the band has no rows in ``field``.
        """
        rows = self._field_rows(field)
        positions = np.arange(self.height)
        # Index into ``rows`` of the field row at or above and at or below each row.
        above = np.clip((positions - field.start) // 2, 0, len(rows) - 1)
        below = np.clip((positions - field.start + 1) // 2, 0, len(rows) - 1)
        total = rows[above].astype(np.float64) + rows[below]
        if self.pixel_type.is_integer:
            return Band(data=np.trunc(total / 2).astype(self.data.dtype))
        return Band(data=(total / 2).astype(self.data.dtype))

    def content_area(self) -> Rectangle:
        """Bounding rectangle of the non-zero, non-NaN pixels."""
        return content_rectangle(self.data)

    def internal_copy(self, other: Band) -> Self:
        """Copy the pixels of ``other`` into this band's array."""
        if other.size != self.size:
            raise DimensionMismatchError(self.size, other.size)
        self.data[...] = other.data
        return self

    def internal_assign(self, other: Band) -> Self:
        """Take over the pixel array of ``other``."""
        if other is not self:
            self.data = other.data
        return self

    # Packing

    def to_byte_array(self) -> NDArray[np.uint8]:
        """One display byte per pixel in row-major order."""
        return self.pixel_type.to_bytes(self.data).reshape(-1)

    def to_packed_pixels(self) -> NDArray[np.uint32]:
        """One opaque grey ARGB value per pixel in row-major order."""
        return pack_grey(self.pixel_type.to_bytes(self.data))

    # Processing

    def process(self, processor: BandProcessor | BandFunction) -> Band:
        """Apply a band processor to a copy of this band."""
        return as_band_function(processor)(self.clone())

    def process_inplace(self, processor: BandProcessor | BandFunction) -> Self:
        return self.internal_assign(as_band_function(processor)(self))

    def process_kernel(self, processor: KernelProcessor, pad: bool = False) -> Band:
        """
        Apply a kernel processor to every window of this band.

        :param processor: The kernel processor.
        :param pad: Zero-pad the band so the result keeps its size; otherwise the
            result shrinks by ``kernel - 1`` pixels per axis.
        :returns: A new band.
        """
        windows = kernel_windows(self.data, *kernel_shape(processor), pad=pad)
        result = np.asarray(processor.process_kernel(windows))
        if result.shape != windows.shape[:2]:
            raise ValueError(
                f"Kernel processor returned shape {result.shape}, "
                f"expected {windows.shape[:2]}"
            )
        return Band(data=result.astype(self.data.dtype))

    def process_kernel_inplace(self, processor: KernelProcessor, pad: bool = False) -> Self:
        return self.internal_assign(self.process_kernel(processor, pad=pad))

    def process_pixels(self, processor: PixelProcessor | PixelFunction) -> Band:
        """Apply a pixel processor to every pixel of a copy of this band."""
        function = np.vectorize(as_pixel_function(processor), otypes=[self.data.dtype])
        return Band(data=function(self.data))

    def process_pixels_inplace(self, processor: PixelProcessor | PixelFunction) -> Self:
        self.data[...] = self.process_pixels(processor).data
        return self
