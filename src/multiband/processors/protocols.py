"""
Processor shapes accepted by bands and multi-band images.

Three shapes are supported, each as a runtime-checkable protocol:

- :class:`BandProcessor` maps a whole band to a new band.
- :class:`KernelProcessor` maps every kernel-sized window of a band to one value.
- :class:`PixelProcessor` maps every pixel value independently.

Plain callables are accepted in place of band and pixel processors and are
treated as their ``process_*`` method. Kernel processors must be objects, as
they carry their kernel size.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from numpy.typing import NDArray

if TYPE_CHECKING:
    from multiband.container_models.band import Band

type BandFunction = Callable[[Band], Band]
type PixelFunction = Callable[[Any], Any]


@runtime_checkable
class BandProcessor(Protocol):
    """Stateless map from one band to a new band."""

    def process_band(self, band: Band) -> Band: ...


@runtime_checkable
class KernelProcessor(Protocol):
    """
    Windowed map over a band.

    ``process_kernel`` receives a ``(rows, cols, kernel_height, kernel_width)``
    array holding every window of the band and must return a ``(rows, cols)``
    array with one output value per window.
    """

    kernel_width: int
    kernel_height: int

    def process_kernel(self, windows: NDArray) -> NDArray: ...


@runtime_checkable
class PixelProcessor(Protocol):
    """Map applied independently to every pixel value."""

    def process_pixel(self, value: Any) -> Any: ...


def as_band_function(processor: BandProcessor | BandFunction) -> BandFunction:
    match processor:
        case BandProcessor():
            return processor.process_band
        case _ if callable(processor):
            return processor
        case _:
            raise TypeError(f"Expected a band processor, got {type(processor).__name__}")


def as_pixel_function(processor: PixelProcessor | PixelFunction) -> PixelFunction:
    match processor:
        case PixelProcessor():
            return processor.process_pixel
        case _ if callable(processor):
            return processor
        case _:
            raise TypeError(f"Expected a pixel processor, got {type(processor).__name__}")


def kernel_shape(processor: KernelProcessor) -> tuple[int, int]:
    """``(kernel_height, kernel_width)`` of a kernel processor."""
    if not isinstance(processor, KernelProcessor):
        raise TypeError(f"Expected a kernel processor, got {type(processor).__name__}")
    return processor.kernel_height, processor.kernel_width
