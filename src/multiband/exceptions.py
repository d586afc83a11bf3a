class MultiBandError(Exception):
    """Base class for errors raised while composing multi-band images."""

    def __init__(self, message: str):
        super().__init__(message)


class DimensionMismatchError(MultiBandError, ValueError):
    """Raised when bands or operands of different width/height are combined."""

    def __init__(self, expected: tuple[int, int], actual: tuple[int, int]) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Band size mismatch, expected {expected[0]}x{expected[1]} "
            f"(width x height), but got {actual[0]}x{actual[1]}"
        )


class ArityMismatchError(MultiBandError, ValueError):
    """Raised when a per-band operand does not provide one value per band."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Operand provides {actual} value(s) for an image with {expected} band(s)"
        )


class BandIndexError(MultiBandError, IndexError):
    """Raised when a band index falls outside ``[0, num_bands)``."""

    def __init__(self, index: int, num_bands: int) -> None:
        self.index = index
        self.num_bands = num_bands
        super().__init__(
            f"Band index {index} out of range for an image with {num_bands} band(s)"
        )


class UnsupportedOperandError(MultiBandError, TypeError):
    """Raised when an operation receives an operand kind it cannot broadcast."""


class UnsupportedBandCountError(MultiBandError, ValueError):
    """Raised when packed pixels are requested for a band count other than 1, 3 or 4."""

    def __init__(self, num_bands: int) -> None:
        self.num_bands = num_bands
        super().__init__(f"Unable to pack pixels of an image with {num_bands} band(s)")


class PixelTypeMismatchError(MultiBandError, TypeError):
    """Raised when a band's element type differs from the image's pixel type."""
