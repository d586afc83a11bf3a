import numpy as np
import pytest

from multiband.computations.windows import Pad2D, kernel_windows, pad_array


class TestPad2D:
    @pytest.mark.parametrize(
        "kernel_height, kernel_width, expected",
        [
            pytest.param(3, 3, Pad2D(1, 1, 1, 1), id="odd kernel"),
            pytest.param(2, 4, Pad2D(1, 0, 2, 1), id="even kernel"),
            pytest.param(1, 1, Pad2D(0, 0, 0, 0), id="single pixel"),
        ],
    )
    def test_for_kernel(self, kernel_height: int, kernel_width: int, expected: Pad2D):
        assert Pad2D.for_kernel(kernel_height, kernel_width) == expected

    def test_pad_array_adds_zero_borders(self):
        data = np.ones((2, 2), dtype=np.uint8)

        padded = pad_array(data, Pad2D(top=1, bottom=0, left=0, right=2))

        assert padded.shape == (3, 4)
        assert padded.dtype == np.uint8
        assert padded.sum() == 4
        assert not padded[0].any()

    def test_negative_padding_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            pad_array(np.ones((2, 2)), Pad2D(-1, 0, 0, 0))


class TestKernelWindows:
    @pytest.mark.parametrize(
        "pad, expected_shape",
        [
            pytest.param(False, (2, 3, 3, 2), id="unpadded shrinks"),
            pytest.param(True, (4, 4, 3, 2), id="padded keeps size"),
        ],
    )
    def test_window_shape(self, pad: bool, expected_shape: tuple[int, ...]):
        data = np.arange(16).reshape(4, 4)

        windows = kernel_windows(data, kernel_height=3, kernel_width=2, pad=pad)

        assert windows.shape == expected_shape

    def test_windows_start_at_top_left(self):
        data = np.arange(9).reshape(3, 3)

        windows = kernel_windows(data, 2, 2)

        np.testing.assert_array_equal(windows[0, 1], [[1, 2], [4, 5]])

    @pytest.mark.parametrize(
        "kernel_height, kernel_width, pad",
        [
            pytest.param(0, 3, False, id="empty kernel"),
            pytest.param(5, 1, False, id="kernel too tall"),
        ],
    )
    def test_invalid_kernel(self, kernel_height: int, kernel_width: int, pad: bool):
        with pytest.raises(ValueError):
            kernel_windows(np.zeros((4, 4)), kernel_height, kernel_width, pad=pad)

    def test_padding_allows_large_kernel(self):
        windows = kernel_windows(np.ones((2, 2)), 5, 5, pad=True)

        assert windows.shape[:2] == (2, 2)
