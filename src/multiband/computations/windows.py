from dataclasses import dataclass

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from numpy.typing import NDArray


@dataclass
class Pad2D:
    """Pad amounts for 2D array borders."""

    top: int
    bottom: int
    left: int
    right: int

    @classmethod
    def for_kernel(cls, kernel_height: int, kernel_width: int) -> "Pad2D":
        """Padding that keeps the output of a kernel the size of its input."""
        return cls(
            top=kernel_height // 2,
            bottom=kernel_height - 1 - kernel_height // 2,
            left=kernel_width // 2,
            right=kernel_width - 1 - kernel_width // 2,
        )


def pad_array(data: NDArray, pad: Pad2D) -> NDArray:
    """Pad array by adding zero-filled rows/columns to borders.

    :param data: Input 2D array.
    :param pad: Pad2D object specifying how much to pad (must be >= 0).
    :return: Padded array with the dtype of ``data``.
    :raises ValueError: If negative pad values.
    """
    if pad.top < 0 or pad.bottom < 0 or pad.left < 0 or pad.right < 0:
        raise ValueError(
            f"Pad values must be non-negative, got "
            f"top={pad.top}, bottom={pad.bottom}, left={pad.left}, right={pad.right}"
        )
    return np.pad(
        data, ((pad.top, pad.bottom), (pad.left, pad.right)), constant_values=0
    )


def kernel_windows(
    data: NDArray, kernel_height: int, kernel_width: int, pad: bool = False
) -> NDArray:
    """Read-only view of every kernel-sized window of a 2D array.

    :param data: Input 2D array.
    :param kernel_height: Number of rows in the kernel (>= 1).
    :param kernel_width: Number of columns in the kernel (>= 1).
    :param pad: If True the array is zero-padded so that there is one window per
        input pixel, otherwise windows only cover positions where the kernel fits
        and the output shrinks by ``kernel - 1`` per axis.
    :return: Array of shape ``(rows, cols, kernel_height, kernel_width)``.
    :raises ValueError: If the kernel size is invalid or larger than the unpadded array.
    """
    if kernel_height < 1 or kernel_width < 1:
        raise ValueError(
            f"Kernel size must be >= 1, got {kernel_width}x{kernel_height} (width x height)"
        )
    if pad:
        data = pad_array(data, Pad2D.for_kernel(kernel_height, kernel_width))
    elif kernel_height > data.shape[0] or kernel_width > data.shape[1]:
        raise ValueError(
            f"Kernel of {kernel_width}x{kernel_height} does not fit in an array of "
            f"{data.shape[1]}x{data.shape[0]} without padding"
        )
    return sliding_window_view(data, (kernel_height, kernel_width))
