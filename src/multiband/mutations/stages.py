from enum import StrEnum
from typing import Any

from loguru import logger

from multiband.container_models.multiband_image import MultiBandImage
from multiband.mutations.base import ImageStage
from multiband.processors.protocols import (
    BandFunction,
    BandProcessor,
    KernelProcessor,
    PixelFunction,
    PixelProcessor,
)


class ProcessBands(ImageStage):
    """Apply a band processor to every band."""

    def __init__(
        self, processor: BandProcessor | BandFunction, inplace: bool = False
    ) -> None:
        self.processor = processor
        self.inplace = inplace

    def apply_on_image(self, image: MultiBandImage) -> MultiBandImage:
        if self.inplace:
            return image.process_inplace(self.processor)
        return image.process(self.processor)


class ProcessKernel(ImageStage):
    """
    Apply a kernel processor to every band.

    :param processor: Kernel processor to apply.
    :param pad: Zero-pad the bands so the output keeps its size.
    :param inplace: Replace the pixels of the input image instead of creating a new one.
    """

    def __init__(
        self, processor: KernelProcessor, pad: bool = False, inplace: bool = False
    ) -> None:
        self.processor = processor
        self.pad = pad
        self.inplace = inplace

    def apply_on_image(self, image: MultiBandImage) -> MultiBandImage:
        if self.inplace:
            return image.process_kernel_inplace(self.processor, pad=self.pad)
        return image.process_kernel(self.processor, pad=self.pad)


class ProcessPixels(ImageStage):
    def __init__(
        self, processor: PixelProcessor | PixelFunction, inplace: bool = False
    ) -> None:
        self.processor = processor
        self.inplace = inplace

    def apply_on_image(self, image: MultiBandImage) -> MultiBandImage:
        if self.inplace:
            return image.process_pixels_inplace(self.processor)
        return image.process_pixels(self.processor)


class ArithmeticOperation(StrEnum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class Arithmetic(ImageStage):
    """
    Combine the image with an operand, producing a new image.

    :param operation: One of ``add``, ``subtract``, ``multiply`` or ``divide``.
    :param operand: Scalar, per-band values, band or multi-band image.
    """

    def __init__(self, operation: ArithmeticOperation | str, operand: Any) -> None:
        self.operation = ArithmeticOperation(operation)
        self.operand = operand

    def apply_on_image(self, image: MultiBandImage) -> MultiBandImage:
        logger.debug(f"Applying {self.operation} to {image.num_bands()} band(s)")
        match self.operation:
            case ArithmeticOperation.ADD:
                return image.add(self.operand)
            case ArithmeticOperation.SUBTRACT:
                return image.subtract(self.operand)
            case ArithmeticOperation.MULTIPLY:
                return image.multiply(self.operand)
            case ArithmeticOperation.DIVIDE:
                return image.divide(self.operand)


class Normalise(ImageStage):
    def apply_on_image(self, image: MultiBandImage) -> MultiBandImage:
        return image.clone().normalise()


class Clip(ImageStage):
    """
    Clamp the pixels of a copy of the image.

    Either bound may be ``None`` to leave that side open.
    """

    def __init__(self, minimum: Any = None, maximum: Any = None) -> None:
        self.minimum = minimum
        self.maximum = maximum

    @property
    def skip_predicate(self) -> bool:
        if self.minimum is None and self.maximum is None:
            logger.warning("Skipping clip, no bounds given.")
            return True
        return False

    def apply_on_image(self, image: MultiBandImage) -> MultiBandImage:
        if self.maximum is None:
            return image.clipped_min(self.minimum)
        if self.minimum is None:
            return image.clipped_max(self.maximum)
        return image.clipped(self.minimum, self.maximum)
