from .base import ImageStage
from .stages import (
    Arithmetic,
    ArithmeticOperation,
    Clip,
    Normalise,
    ProcessBands,
    ProcessKernel,
    ProcessPixels,
)


__all__ = [
    "Arithmetic",
    "ArithmeticOperation",
    "Clip",
    "ImageStage",
    "Normalise",
    "ProcessBands",
    "ProcessKernel",
    "ProcessPixels",
]
