"""Multi-band image container.

This module defines the container that groups equally sized
:class:`~multiband.container_models.band.Band` objects into one logical image.

Architecture
------------
::

    +------------------------------------------+
    |              MultiBandImage              |
    |------------------------------------------|
    | bands        : tuple[Band, ...]          |
    | colour_space : ColourSpace               |
    | pixel_type   : PixelType                 |
    | width/height : int (from band 0, else 0) |
    +------------------------------------------+
    | add_band / get_band / delete_band        |
    | add / subtract / multiply / divide       |
    | *_inplace variants                       |
    | clip / clip_min / clip_max / threshold   |
    | get_field / get_field_copy / ...         |
    | process / process_kernel / process_pixels|
    | flatten / flatten_max / content_area     |
    | to_interleaved_bytes / to_packed_pixels  |
    +------------------------------------------+

- All bands share one width, height and pixel type. Sizes are checked when
  bands are added, not after in-place mutation of a single band.
- Arithmetic operands are classified by
  :func:`~multiband.container_models.operands.as_operand` and validated
  completely before the first band is touched.
- Per-band work runs in band order. With ``Settings.parallel_bands`` it runs on
  a thread pool, and results and errors are still taken in band order. An
  in-place operation that fails on band ``i`` leaves bands ``i`` and later
  untouched in both modes.
- Results of processing and field extraction take the pixel type of the new
  bands, which must agree with each other.
- :meth:`MultiBandImage.get_band` returns the band itself, not a copy.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Self

import numpy as np
from loguru import logger
from numpy.typing import NDArray
from PIL.Image import Image, fromarray
from returns.result import Failure, Success, safe

from multiband.computations.packing import OPAQUE, interleave, pack_argb, unpack_argb
from multiband.computations.reductions import (
    bounding_union,
    flatten_average,
    flatten_maximum,
)
from multiband.container_models.band import Band, InterlaceField
from multiband.container_models.base import Rectangle
from multiband.container_models.colour_space import ColourSpace
from multiband.container_models.operands import (
    MultiBand,
    PerBandVector,
    Scalar,
    SingleBand,
    as_operand,
)
from multiband.container_models.pixel_types import PixelType, pixel_type_named
from multiband.exceptions import (
    ArityMismatchError,
    BandIndexError,
    DimensionMismatchError,
    PixelTypeMismatchError,
    UnsupportedBandCountError,
    UnsupportedOperandError,
)
from multiband.processors.protocols import (
    BandFunction,
    BandProcessor,
    KernelProcessor,
    PixelFunction,
    PixelProcessor,
)
from multiband.settings import get_settings

type BandOperation = Callable[[Band, Any], Band]


class MultiBandImage:
    """
    An ordered stack of equally sized bands.

    :param bands: Initial bands, in order.
    :param colour_space: Advisory tag describing the band order.
    :param pixel_type: Element type of the bands. Defaults to the type of the
        first band, or to ``Settings.default_pixel_type`` for an empty image.
    :raises DimensionMismatchError: If the bands differ in size.
    :raises PixelTypeMismatchError: If a band has a different element type.
    """

    def __init__(
        self,
        *bands: Band,
        colour_space: ColourSpace = ColourSpace.CUSTOM,
        pixel_type: PixelType | None = None,
    ) -> None:
        self.colour_space = ColourSpace(colour_space)
        if pixel_type is None:
            pixel_type = (
                bands[0].pixel_type
                if bands
                else pixel_type_named(get_settings().default_pixel_type)
            )
        self.pixel_type = pixel_type
        self._bands: list[Band] = []
        for band in bands:
            self._check_band(band)
            self._bands.append(band)

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        num_bands: int,
        pixel_type: PixelType | None = None,
        colour_space: ColourSpace = ColourSpace.CUSTOM,
    ) -> MultiBandImage:
        """Create an image of ``num_bands`` zero-filled bands."""
        image = cls(colour_space=colour_space, pixel_type=pixel_type)
        for _ in range(num_bands):
            image.add_band(image.new_band_instance(width, height))
        return image

    @classmethod
    def from_array(
        cls, array: NDArray, colour_space: ColourSpace = ColourSpace.CUSTOM
    ) -> MultiBandImage:
        """
        Build an image from a ``(height, width, bands)`` array.

        Every band receives a copy of its plane.
        """
        if array.ndim != 3:
            raise ValueError(
                f"Array shape mismatch, expected 3 dimension(s), but got {array.ndim}"
            )
        bands = [Band(data=array[..., index].copy()) for index in range(array.shape[2])]
        return cls(*bands, colour_space=colour_space)

    # Band sequence

    @property
    def bands(self) -> tuple[Band, ...]:
        return tuple(self._bands)

    @property
    def width(self) -> int:
        return self._bands[0].width if self._bands else 0

    @property
    def height(self) -> int:
        return self._bands[0].height if self._bands else 0

    @property
    def size(self) -> tuple[int, int]:
        """``(width, height)`` of the image."""
        return self.width, self.height

    def num_bands(self) -> int:
        return len(self._bands)

    def __len__(self) -> int:
        return len(self._bands)

    def __iter__(self) -> Iterator[Band]:
        return iter(self._bands)

    def __getitem__(self, index: int) -> Band:
        return self.get_band(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiBandImage):
            return NotImplemented
        if len(self._bands) != len(other._bands):
            return False
        return all(mine == theirs for mine, theirs in zip(self._bands, other._bands))

    def __repr__(self) -> str:
        return (
            f"MultiBandImage(bands={self.num_bands()}, width={self.width}, "
            f"height={self.height}, colour_space={self.colour_space.value}, "
            f"pixel_type={self.pixel_type.name})"
        )

    def _check_band(self, band: Band) -> None:
        if band.pixel_type != self.pixel_type:
            raise PixelTypeMismatchError(
                f"Band of pixel type '{band.pixel_type.name}' cannot be added to an "
                f"image of pixel type '{self.pixel_type.name}'"
            )
        if self._bands and band.size != self.size:
            raise DimensionMismatchError(self.size, band.size)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._bands):
            raise BandIndexError(index, len(self._bands))

    def add_band(self, band: Band) -> None:
        """
        Append a band.

        :raises DimensionMismatchError: If the image has bands of another size.
        :raises PixelTypeMismatchError: If the band has another element type.
        """
        self._check_band(band)
        self._bands.append(band)
        logger.debug(f"Added band {len(self._bands) - 1} ({band.width}x{band.height})")

    def get_band(self, index: int) -> Band:
        """The band at ``index``; mutating it mutates this image."""
        self._check_index(index)
        return self._bands[index]

    def delete_band(self, index: int) -> None:
        self._check_index(index)
        del self._bands[index]
        logger.debug(f"Deleted band {index}, {len(self._bands)} band(s) left")

    def adopt_bands(self, other: MultiBandImage) -> Self:
        """
        Take over the band sequence of ``other``.

        Ownership moves: ``other`` is left without bands, so the two images never
        share a band list.
        """
        if other is self:
            return self
        self._bands, other._bands = other._bands, []
        self.pixel_type = other.pixel_type
        logger.debug(f"Adopted {len(self._bands)} band(s)")
        return self

    def internal_copy(self, other: MultiBandImage) -> Self:
        """Copy the pixels of every band of ``other`` into the matching band."""
        self._check_same_shape(other)
        for mine, theirs in zip(self._bands, other._bands):
            mine.internal_copy(theirs)
        return self

    # Factories

    def new_instance(self, width: int | None = None, height: int | None = None) -> MultiBandImage:
        """
        New image of the same pixel type and colour space.

        Without a size the image is empty, otherwise it holds as many blank
        bands of the given size as this image has bands.
        """
        if width is None or height is None:
            return MultiBandImage(colour_space=self.colour_space, pixel_type=self.pixel_type)
        return MultiBandImage.blank(
            width, height, self.num_bands(), self.pixel_type, self.colour_space
        )

    def new_band_instance(self, width: int, height: int) -> Band:
        return Band.blank(width, height, self.pixel_type)

    def clone(self) -> MultiBandImage:
        """Deep copy; the clone shares no band with this image."""
        return self._with_bands([band.clone() for band in self._bands])

    def _with_bands(self, bands: Sequence[Band]) -> MultiBandImage:
        """
        New image of this colour space holding ``bands``.

        The pixel type follows the bands, so a processor that changes the element
        type yields an image of the new type. Without bands the pixel type of this
        image is kept.
        """
        return MultiBandImage(
            *bands,
            colour_space=self.colour_space,
            pixel_type=None if bands else self.pixel_type,
        )

    # Per-band execution

    def _runs_parallel(self) -> bool:
        return get_settings().parallel_bands and len(self._bands) > 1

    def _map_bands[R](self, function: Callable[[int, Band], R]) -> list[R]:
        """
        Call ``function`` for every band and collect the results in band order.

        ``function`` must leave the bands of this image alone. On failure the
        error of the lowest failing band is raised.
        """
        if not self._runs_parallel():
            return [function(index, band) for index, band in enumerate(self._bands)]
        with ThreadPoolExecutor(max_workers=get_settings().max_workers) as executor:
            futures = [
                executor.submit(function, index, band) for index, band in enumerate(self._bands)
            ]
            try:
                return [future.result() for future in futures]
            finally:
                for future in futures:
                    future.cancel()

    def _update_bands(
        self, operation: Callable[[int, Band], Any], operands: Sequence[Any] = ()
    ) -> Self:
        """
        Apply an in-place band operation to every band, in band order.

        If band ``i`` fails, the bands before it keep their new pixels and the
        bands from ``i`` on are untouched. Parallel runs work on copies that are
        written back in band order, so they end in the same state as serial runs.
        An operand that is one of this image's own bands forces a serial run.
        """
        if not self._runs_parallel() or self._holds_any(operands):
            for index, band in enumerate(self._bands):
                operation(index, band)
            return self

        @safe
        def update_copy(index: int, band: Band) -> Band:
            copy = band.clone()
            operation(index, copy)
            return copy

        for band, outcome in zip(self._bands, self._map_bands(update_copy)):
            match outcome:
                case Success(updated):
                    band.internal_copy(updated)
                case Failure(error):
                    raise error
        return self

    def _holds_any(self, operands: Sequence[Any]) -> bool:
        return any(operand is band for operand in operands for band in self._bands)

    def _each(self, operation: Callable[[Band], Any]) -> Self:
        return self._update_bands(lambda _, band: operation(band))

    def _replace_pixels(self, results: Sequence[Band]) -> Self:
        """Give band ``i`` the pixel array of ``results[i]``, once all results are known."""
        replacement = self._with_bands(results)
        for band, result in zip(self._bands, results):
            band.internal_assign(result)
        self.pixel_type = replacement.pixel_type
        return self

    def _check_arity(self, count: int) -> None:
        if count != len(self._bands):
            raise ArityMismatchError(len(self._bands), count)

    def _check_same_shape(self, other: MultiBandImage) -> None:
        self._check_arity(other.num_bands())
        if self._bands and other.size != self.size:
            raise DimensionMismatchError(self.size, other.size)

    def _per_band(self, operand: Any, allow_images: bool = True) -> list[Any]:
        """Validate an operand and expand it to one right-hand side per band."""
        match as_operand(operand):
            case Scalar(value):
                return [value] * len(self._bands)
            case PerBandVector(values):
                self._check_arity(len(values))
                return list(values)
            case MultiBand(image) if allow_images:
                self._check_same_shape(image)
                return [image.get_band(index) for index in range(image.num_bands())]
            case SingleBand(band) if allow_images:
                if self._bands and band.size != self.size:
                    raise DimensionMismatchError(self.size, band.size)
                return [band] * len(self._bands)
            case unsupported:
                raise UnsupportedOperandError(
                    f"Operand {type(unsupported).__name__} is not supported here"
                )

    def _apply_inplace(self, operation: BandOperation, operand: Any) -> Self:
        return self._apply_operands(operation, self._per_band(operand))

    def _apply_operands(self, operation: BandOperation, operands: Sequence[Any]) -> Self:
        return self._update_bands(lambda index, band: operation(band, operands[index]), operands)

    # Arithmetic

    def add_inplace(self, operand: Any) -> Self:
        """Add a scalar, per-band vector, band or image to every band."""
        return self._apply_inplace(Band.add, operand)

    def subtract_inplace(self, operand: Any) -> Self:
        return self._apply_inplace(Band.subtract, operand)

    def multiply_inplace(self, operand: Any) -> Self:
        return self._apply_inplace(Band.multiply, operand)

    def divide_inplace(self, operand: Any) -> Self:
        """
        Divide every band by ``operand``.

        :raises ZeroDivisionError: If this is an integer image and any divisor
            holds a zero. No band is changed.
        """
        divisors = self._per_band(operand)
        for divisor in divisors:
            self.pixel_type.check_divisor(divisor.data if isinstance(divisor, Band) else divisor)
        return self._apply_operands(Band.divide, divisors)

    def add(self, operand: Any) -> MultiBandImage:
        """Return a new image holding this image plus ``operand``."""
        return self.clone().add_inplace(operand)

    def subtract(self, operand: Any) -> MultiBandImage:
        return self.clone().subtract_inplace(operand)

    def multiply(self, operand: Any) -> MultiBandImage:
        return self.clone().multiply_inplace(operand)

    def divide(self, operand: Any) -> MultiBandImage:
        return self.clone().divide_inplace(operand)

    def __add__(self, operand: Any) -> MultiBandImage:
        return self.add(operand)

    def __radd__(self, operand: Any) -> MultiBandImage:
        return self.add(operand)

    def __sub__(self, operand: Any) -> MultiBandImage:
        return self.subtract(operand)

    def __mul__(self, operand: Any) -> MultiBandImage:
        return self.multiply(operand)

    def __rmul__(self, operand: Any) -> MultiBandImage:
        return self.multiply(operand)

    def __truediv__(self, operand: Any) -> MultiBandImage:
        return self.divide(operand)

    def __iadd__(self, operand: Any) -> Self:
        return self.add_inplace(operand)

    def __isub__(self, operand: Any) -> Self:
        return self.subtract_inplace(operand)

    def __imul__(self, operand: Any) -> Self:
        return self.multiply_inplace(operand)

    def __itruediv__(self, operand: Any) -> Self:
        return self.divide_inplace(operand)

    # Parameterised unary operations

    def clip(self, minimum: Any, maximum: Any) -> Self:
        """Clamp every band into ``[minimum, maximum]`` (scalars or per-band vectors)."""
        lows = self._per_band(minimum, allow_images=False)
        highs = self._per_band(maximum, allow_images=False)
        return self._update_bands(lambda index, band: band.clip(lows[index], highs[index]))

    def clip_min(self, threshold: Any) -> Self:
        return self._apply_parameterised(Band.clip_min, threshold)

    def clip_max(self, threshold: Any) -> Self:
        return self._apply_parameterised(Band.clip_max, threshold)

    def threshold(self, threshold: Any) -> Self:
        """Binarise every band: 0 at or below the threshold, 1 above it."""
        return self._apply_parameterised(Band.threshold, threshold)

    def _apply_parameterised(self, operation: BandOperation, parameter: Any) -> Self:
        return self._apply_operands(operation, self._per_band(parameter, allow_images=False))

    def clipped(self, minimum: Any, maximum: Any) -> MultiBandImage:
        return self.clone().clip(minimum, maximum)

    def clipped_min(self, threshold: Any) -> MultiBandImage:
        return self.clone().clip_min(threshold)

    def clipped_max(self, threshold: Any) -> MultiBandImage:
        return self.clone().clip_max(threshold)

    def thresholded(self, threshold: Any) -> MultiBandImage:
        return self.clone().threshold(threshold)

    # Unary operations

    def abs(self) -> Self:
        return self._each(Band.abs)

    def inverse(self) -> Self:
        return self._each(Band.inverse)

    def normalise(self) -> Self:
        return self._each(Band.normalise)

    def zero(self) -> Self:
        return self._each(Band.zero)

    def flip_x(self) -> Self:
        return self._each(Band.flip_x)

    def flip_y(self) -> Self:
        return self._each(Band.flip_y)

    def shift_left(self, count: int) -> Self:
        return self._each(lambda band: band.shift_left(count))

    def shift_right(self, count: int) -> Self:
        return self._each(lambda band: band.shift_right(count))

    def min(self) -> list[Any]:
        """Minimum of every band."""
        return self._map_bands(lambda _, band: band.min())

    def max(self) -> list[Any]:
        """Maximum of every band."""
        return self._map_bands(lambda _, band: band.max())

    # Pixels

    def fill(self, values: Sequence[Any]) -> Self:
        """Fill band ``i`` with ``values[i]``."""
        self._check_arity(len(values))
        for band, value in zip(self._bands, values):
            band.fill(value)
        return self

    def get_pixel(self, x: int, y: int) -> list[Any]:
        return [band.get_pixel(x, y) for band in self._bands]

    def set_pixel(self, x: int, y: int, values: Sequence[Any]) -> None:
        """
        Set the pixel at ``(x, y)`` in every band.

        Values are aligned to the last band when their count differs from the
        band count: surplus leading values are ignored, and with too few values
        the leading bands keep their pixel.
        """
        offset = len(values) - len(self._bands)
        for index, band in enumerate(self._bands):
            if index + offset >= 0:
                band.set_pixel(x, y, values[index + offset])

    # Regions

    def extract_roi(self, x: int, y: int, width: int, height: int) -> MultiBandImage:
        return self._with_bands([band.extract_roi(x, y, width, height) for band in self._bands])

    def extract_roi_into(self, x: int, y: int, out: MultiBandImage) -> MultiBandImage:
        """Fill the bands of ``out`` with the region of its size starting at ``(x, y)``."""
        self._check_arity(out.num_bands())
        for band, target in zip(self._bands, out):
            band.extract_roi_into(x, y, target)
        return out

    def get_field(self, field: InterlaceField) -> MultiBandImage:
        """Half-height image of the rows of one interlace field."""
        return self._with_bands([band.get_field(field) for band in self._bands])

    def get_field_copy(self, field: InterlaceField) -> MultiBandImage:
        """Full-height image of one field, every field row doubled."""
        return self._with_bands([band.get_field_copy(field) for band in self._bands])

    def get_field_interpolate(self, field: InterlaceField) -> MultiBandImage:
        """Full-height image of one field, the other rows interpolated."""
        return self._with_bands([band.get_field_interpolate(field) for band in self._bands])

    # Processing

    def process(self, processor: BandProcessor | BandFunction) -> MultiBandImage:
        """New image whose band ``i`` is the processed band ``i``."""
        return self._with_bands(self._map_bands(lambda _, band: band.process(processor)))

    def process_inplace(self, processor: BandProcessor | BandFunction) -> Self:
        """
        Replace the pixels of every band by the processed band.

        All bands are processed before the first one is replaced, so a failing
        processor leaves the image unchanged.
        """
        return self._replace_pixels(self._map_bands(lambda _, band: band.process(processor)))

    def process_kernel(self, processor: KernelProcessor, pad: bool = False) -> MultiBandImage:
        return self._with_bands(
            self._map_bands(lambda _, band: band.process_kernel(processor, pad=pad))
        )

    def process_kernel_inplace(self, processor: KernelProcessor, pad: bool = False) -> Self:
        return self._replace_pixels(
            self._map_bands(lambda _, band: band.process_kernel(processor, pad=pad))
        )

    def process_pixels(self, processor: PixelProcessor | PixelFunction) -> MultiBandImage:
        return self._with_bands(self._map_bands(lambda _, band: band.process_pixels(processor)))

    def process_pixels_inplace(self, processor: PixelProcessor | PixelFunction) -> Self:
        return self._replace_pixels(
            self._map_bands(lambda _, band: band.process_pixels(processor))
        )

    # Reductions

    def flatten(self) -> Band:
        """Per-pixel average of all bands as a new band."""
        if not self._bands:
            return self.new_band_instance(0, 0)
        planes = [band.data for band in self._bands]
        return Band(data=flatten_average(planes, self.pixel_type))

    def flatten_max(self) -> Band:
        """Per-pixel maximum of all bands as a new band."""
        if not self._bands:
            return self.new_band_instance(0, 0)
        planes = [band.data for band in self._bands]
        return Band(data=flatten_maximum(planes, self.pixel_type))

    def content_area(self) -> Rectangle:
        """Bounding box of the content areas of all bands."""
        return bounding_union(band.content_area() for band in self._bands)

    # Packing

    def to_array(self) -> NDArray:
        """Copy of the pixels as a ``(height, width, bands)`` array."""
        if not self._bands:
            return np.empty((0, 0, 0), dtype=self.pixel_type.dtype)
        return np.stack([band.data for band in self._bands], axis=-1)

    def to_interleaved_bytes(self) -> NDArray[np.uint8]:
        """Display bytes with the values of each pixel contiguous, in band order."""
        return interleave(self._byte_planes())

    def to_packed_pixels(self) -> NDArray[np.uint32]:
        """
        One ARGB value per pixel in row-major order.

        One band packs as grey, three bands as opaque RGB and four bands as RGBA.

        :raises UnsupportedBandCountError: For any other band count.
        """
        match len(self._bands):
            case 1:
                return self._bands[0].to_packed_pixels()
            case 3:
                red, green, blue = self._byte_planes()
                return pack_argb(OPAQUE, red, green, blue)
            case 4:
                red, green, blue, alpha = self._byte_planes()
                return pack_argb(alpha, red, green, blue)
            case count:
                raise UnsupportedBandCountError(count)

    def _byte_planes(self) -> list[NDArray[np.uint8]]:
        return [
            band.to_byte_array().reshape(self.height, self.width) for band in self._bands
        ]

    def to_rgba(self) -> NDArray[np.uint8]:
        """Packed pixels unpacked into a ``(height, width, 4)`` RGBA array."""
        return unpack_argb(self.to_packed_pixels(), self.width, self.height)

    def to_pil_image(self) -> Image:
        """In-memory RGBA Pillow image of the packed pixels."""
        return fromarray(self.to_rgba())
