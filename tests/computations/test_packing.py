import numpy as np

from multiband.computations.packing import (
    OPAQUE,
    interleave,
    pack_argb,
    pack_grey,
    unpack_argb,
)


def plane(*values: int) -> np.ndarray:
    return np.array([values], dtype=np.uint8)


class TestInterleave:
    def test_values_of_one_pixel_are_contiguous(self):
        result = interleave([plane(1, 2), plane(3, 4), plane(5, 6)])

        assert result.tolist() == [1, 3, 5, 2, 4, 6]

    def test_rows_follow_each_other(self):
        first = np.array([[1], [2]], dtype=np.uint8)
        second = np.array([[3], [4]], dtype=np.uint8)

        assert interleave([first, second]).tolist() == [1, 3, 2, 4]

    def test_no_planes(self):
        result = interleave([])

        assert result.dtype == np.uint8
        assert result.size == 0


class TestPackArgb:
    def test_constant_alpha(self):
        packed = pack_argb(OPAQUE, plane(0x10), plane(0x20), plane(0x30))

        assert packed.tolist() == [0xFF102030]

    def test_alpha_plane(self):
        packed = pack_argb(plane(0x80, 0x00), plane(0x10, 1), plane(0x20, 2), plane(0x30, 3))

        assert packed.tolist() == [0x80102030, 0x00010203]

    def test_pack_grey(self):
        assert pack_grey(plane(0x7F)).tolist() == [0xFF7F7F7F]

    def test_unpack_is_rgba(self):
        packed = np.array([0x80102030, 0xFF000001], dtype=np.uint32)

        rgba = unpack_argb(packed, width=2, height=1)

        assert rgba.shape == (1, 2, 4)
        assert rgba[0].tolist() == [[0x10, 0x20, 0x30, 0x80], [0, 0, 1, 0xFF]]
