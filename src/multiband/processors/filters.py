"""
Concrete processors.

- :class:`GaussianBlur`: band processor backed by :func:`scipy.ndimage.gaussian_filter`.
- :class:`Convolution` and :class:`MedianFilter`: kernel processors.
- :class:`Gamma` and :class:`Threshold`: pixel processors.

Results are cast back to the element type of the processed band.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import gaussian_filter

from multiband.container_models.band import Band


class GaussianBlur:
    """Gaussian smoothing of a whole band, with zero-valued borders."""

    def __init__(self, sigma: float) -> None:
        if sigma <= 0:
            raise ValueError(f"Sigma must be positive, got {sigma}")
        self.sigma = sigma

    def process_band(self, band: Band) -> Band:
        blurred = gaussian_filter(
            band.data, sigma=self.sigma, output=np.float64, mode="constant", cval=0.0
        )
        return Band(data=blurred.astype(band.data.dtype))


class Convolution:
    """
    2D convolution with a fixed kernel.

    The kernel is flipped on both axes, so an asymmetric kernel behaves as a true
    convolution rather than a correlation.

    :param kernel: 2D array of weights; its shape sets the window size.
    """

    def __init__(self, kernel: NDArray) -> None:
        kernel = np.asarray(kernel, dtype=np.float64)
        if kernel.ndim != 2 or 0 in kernel.shape:
            raise ValueError(f"Kernel must be a non-empty 2D array, got shape {kernel.shape}")
        self.kernel = kernel
        self.kernel_height, self.kernel_width = kernel.shape

    def process_kernel(self, windows: NDArray) -> NDArray:
        return np.einsum("ijkl,kl->ij", windows, self.kernel[::-1, ::-1])


class MedianFilter:
    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Kernel size must be >= 1, got {width}x{height}")
        self.kernel_width = width
        self.kernel_height = height

    def process_kernel(self, windows: NDArray) -> NDArray:
        return np.median(windows, axis=(-2, -1))


class Gamma:
    """Raise every pixel value to the power ``gamma``."""

    def __init__(self, gamma: float) -> None:
        self.gamma = gamma

    def process_pixel(self, value: Any) -> Any:
        return value**self.gamma


class Threshold:
    """Map values above ``value`` to 1 and all others to 0."""

    def __init__(self, value: float) -> None:
        self.value = value

    def process_pixel(self, value: Any) -> Any:
        return 1 if value > self.value else 0
