from collections.abc import Sequence
from functools import partial
from typing import Annotated, NamedTuple

from numpy import array, float32, number
from numpy.typing import DTypeLike, NDArray
from pydantic import AfterValidator, BeforeValidator, PlainSerializer


class Rectangle(NamedTuple):
    """Axis-aligned rectangle in pixel coordinates, ``max_x``/``max_y`` exclusive."""

    x: int
    y: int
    width: int
    height: int

    @property
    def min_x(self) -> int:
        return self.x

    @property
    def min_y(self) -> int:
        return self.y

    @property
    def max_x(self) -> int:
        return self.x + self.width

    @property
    def max_y(self) -> int:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def union(self, other: "Rectangle") -> "Rectangle":
        """Smallest rectangle covering both rectangles; empty rectangles are ignored."""
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        min_x, min_y = min(self.min_x, other.min_x), min(self.min_y, other.min_y)
        max_x, max_y = max(self.max_x, other.max_x), max(self.max_y, other.max_y)
        return Rectangle(min_x, min_y, max_x - min_x, max_y - min_y)


EMPTY_RECTANGLE = Rectangle(0, 0, 0, 0)


def serialize_ndarray[T: number](array_: NDArray[T]) -> list[T]:
    """Serialize numpy array to a Python list for JSON serialization."""
    return array_.tolist()


def coerce_to_array[T: number](
    dtype: DTypeLike, value: Sequence[T] | NDArray[T] | None
) -> NDArray[T] | None:
    """
    Coerce input to dtype numpy array.

    Only plain Python sequences are converted, numpy arrays keep their own dtype.
    """
    if isinstance(value, Sequence):
        try:
            return array(value, dtype=dtype)
        except OverflowError as ofe:
            raise ValueError("Array's value(s) out of range") from ofe

    return value


def validate_shape(n_dims: int, value: NDArray) -> NDArray:
    if (array_dims := len(value.shape)) != n_dims:
        raise ValueError(
            f"Array shape mismatch, expected {n_dims} dimension(s), but got {array_dims}"
        )
    return value


type PixelArray = Annotated[
    NDArray[number],
    BeforeValidator(partial(coerce_to_array, float32)),
    PlainSerializer(serialize_ndarray),
]
type PixelArray2D = Annotated[PixelArray, AfterValidator(partial(validate_shape, 2))]
