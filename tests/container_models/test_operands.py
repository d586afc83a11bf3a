import numpy as np
import pytest

from multiband import (
    Band,
    MultiBand,
    MultiBandImage,
    PerBandVector,
    Scalar,
    SingleBand,
    UnsupportedOperandError,
    as_operand,
)


class TestAsOperand:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(2, Scalar(2), id="int"),
            pytest.param(0.5, Scalar(0.5), id="float"),
            pytest.param(True, Scalar(True), id="bool"),
            pytest.param(np.float32(1.5), Scalar(np.float32(1.5)), id="numpy scalar"),
            pytest.param(np.array(3), Scalar(3), id="0-d array"),
            pytest.param([1, 2, 3], PerBandVector((1, 2, 3)), id="list"),
            pytest.param((1.0, 2.0), PerBandVector((1.0, 2.0)), id="tuple"),
            pytest.param(np.array([4, 5]), PerBandVector((4, 5)), id="1-d array"),
            pytest.param([], PerBandVector(()), id="empty list"),
        ],
    )
    def test_values_are_classified(self, value, expected):
        assert as_operand(value) == expected

    def test_band_is_single_band(self):
        band = Band.blank(2, 2)

        operand = as_operand(band)

        assert isinstance(operand, SingleBand)
        assert operand.band is band

    def test_image_is_multi_band(self, rgb_image: MultiBandImage):
        operand = as_operand(rgb_image)

        assert isinstance(operand, MultiBand)
        assert operand.image is rgb_image

    def test_existing_operand_is_returned_as_is(self):
        operand = PerBandVector((1, 2))

        assert as_operand(operand) is operand

    def test_vector_length(self):
        assert len(PerBandVector((1, 2, 3))) == 3

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("12", id="string"),
            pytest.param(b"12", id="bytes"),
            pytest.param({1: 2}, id="mapping"),
            pytest.param(np.zeros((2, 2)), id="2-d array"),
            pytest.param(object(), id="object"),
        ],
    )
    def test_unsupported_values(self, value):
        with pytest.raises(UnsupportedOperandError, match="Unsupported operand type"):
            as_operand(value)
