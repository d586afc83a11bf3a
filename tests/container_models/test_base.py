from functools import partial

import numpy as np
import pytest
from pydantic import ConfigDict, TypeAdapter, ValidationError

from multiband.container_models.base import (
    EMPTY_RECTANGLE,
    PixelArray2D,
    Rectangle,
    validate_shape,
)

_TypeAdapter = partial(TypeAdapter, config=ConfigDict(arbitrary_types_allowed=True))


class TestRectangle:
    def test_bounds_are_exclusive(self):
        rectangle = Rectangle(x=1, y=2, width=3, height=4)

        assert (rectangle.min_x, rectangle.min_y) == (1, 2)
        assert (rectangle.max_x, rectangle.max_y) == (4, 6)

    @pytest.mark.parametrize(
        "rectangle, is_empty",
        [
            pytest.param(EMPTY_RECTANGLE, True, id="zero"),
            pytest.param(Rectangle(3, 3, 0, 5), True, id="no width"),
            pytest.param(Rectangle(0, 0, 1, 1), False, id="one pixel"),
        ],
    )
    def test_is_empty(self, rectangle: Rectangle, is_empty: bool):
        assert rectangle.is_empty is is_empty

    @pytest.mark.parametrize(
        "first, second, expected",
        [
            pytest.param(
                Rectangle(0, 0, 1, 1), Rectangle(3, 2, 1, 1), Rectangle(0, 0, 4, 3), id="disjoint"
            ),
            pytest.param(
                Rectangle(0, 0, 4, 4), Rectangle(1, 1, 2, 2), Rectangle(0, 0, 4, 4), id="nested"
            ),
            pytest.param(
                EMPTY_RECTANGLE, Rectangle(5, 5, 2, 2), Rectangle(5, 5, 2, 2), id="empty first"
            ),
            pytest.param(
                Rectangle(5, 5, 2, 2), EMPTY_RECTANGLE, Rectangle(5, 5, 2, 2), id="empty second"
            ),
        ],
    )
    def test_union(self, first: Rectangle, second: Rectangle, expected: Rectangle):
        assert first.union(second) == expected
        assert second.union(first) == expected


class TestPixelArray:
    def test_sequence_becomes_float32(self):
        result = _TypeAdapter(PixelArray2D).validate_python([[1, 2], [3, 4]])

        assert isinstance(result, np.ndarray)
        assert result.dtype == np.float32

    def test_array_is_passed_through(self):
        array = np.ones((2, 2), dtype=np.uint8)

        result = _TypeAdapter(PixelArray2D).validate_python(array)

        assert result is array

    def test_wrong_dimension_is_rejected(self):
        with pytest.raises(ValidationError, match="expected 2 dimension"):
            _TypeAdapter(PixelArray2D).validate_python([1.0, 2.0])

    def test_serialises_to_nested_list(self):
        adapter = _TypeAdapter(PixelArray2D)

        assert adapter.dump_python(np.array([[1.0, 2.0]], dtype=np.float32)) == [[1.0, 2.0]]

    def test_validate_shape_returns_value(self):
        array = np.zeros((1, 2, 3))

        assert validate_shape(3, array) is array
