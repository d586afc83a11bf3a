import numpy as np
import pytest

from multiband.computations.spatial import (
    content_rectangle,
    copy_region,
    get_bounding_box,
    shift_columns,
)
from multiband.container_models.base import Rectangle


class TestBoundingBox:
    @pytest.mark.parametrize(
        "mask, expected",
        [
            pytest.param(
                np.ones((3, 3), dtype=bool), (slice(0, 3), slice(0, 3)), id="all-ones"
            ),
            pytest.param(
                np.array([[0, 0, 0], [0, 1, 1], [0, 0, 0]], dtype=bool),
                (slice(1, 2), slice(1, 3)),
                id="partial-row",
            ),
            pytest.param(
                np.array([[1, 0, 0], [0, 0, 0], [0, 0, 1]], dtype=bool),
                (slice(0, 3), slice(0, 3)),
                id="opposite-corners",
            ),
        ],
    )
    def test_bounding_box(self, mask, expected):
        assert get_bounding_box(mask) == expected


class TestContentRectangle:
    def test_nan_is_not_content(self):
        data = np.array([[np.nan, 0.0], [0.0, 2.0]])

        assert content_rectangle(data) == Rectangle(1, 1, 1, 1)

    def test_all_nan_is_empty(self):
        data = np.full((2, 2), np.nan)

        assert content_rectangle(data).is_empty


class TestCopyRegion:
    def test_overlap_is_copied_and_rest_zeroed(self):
        # Arrange
        source = np.arange(1, 7).reshape(2, 3)
        out = np.full((3, 2), 99)
        # Act
        copy_region(source, 2, 1, out)
        # Assert
        np.testing.assert_array_equal(out, [[6, 0], [0, 0], [0, 0]])

    def test_region_larger_than_source(self):
        source = np.ones((1, 1))
        out = np.zeros((3, 3))

        copy_region(source, -1, -1, out)

        np.testing.assert_array_equal(out, [[0, 0, 0], [0, 1, 0], [0, 0, 0]])


class TestShiftColumns:
    @pytest.mark.parametrize(
        "offset, expected",
        [
            pytest.param(2, [[0, 0, 1, 2]], id="right"),
            pytest.param(-1, [[2, 3, 4, 0]], id="left"),
            pytest.param(-4, [[0, 0, 0, 0]], id="full width"),
            pytest.param(0, [[1, 2, 3, 4]], id="none"),
        ],
    )
    def test_shift(self, offset: int, expected):
        data = np.array([[1, 2, 3, 4]])

        result = shift_columns(data, offset)

        assert result is data
        np.testing.assert_array_equal(data, expected)
