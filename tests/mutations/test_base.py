from typing import override

import pytest
from returns.pipeline import is_successful

from multiband import MultiBandImage, UINT8
from multiband.mutations.base import ImageStage


class TestImageStage:
    @pytest.fixture
    def image(self) -> MultiBandImage:
        return MultiBandImage.blank(2, 2, 3, UINT8)

    class FakeStage(ImageStage):
        @property
        def skip_predicate(self) -> bool:
            return self.value == 3

        def __init__(self, value: int) -> None:
            self.value = value

        @override
        def apply_on_image(self, image: MultiBandImage) -> MultiBandImage:
            """Small edit to do a 'stage'"""
            return image.add_inplace(self.value)

    @pytest.mark.parametrize(
        "get_result",
        [
            pytest.param(
                lambda stage, image: stage.apply_on_image(image),
                id="apply_on_image",
            ),
            pytest.param(
                lambda stage, image: stage(image).unwrap(),
                id="call_interface",
            ),
        ],
    )
    def test_returns_edited_image(self, image: MultiBandImage, get_result):
        # Arrange
        stage = self.FakeStage(value=2)
        # Act
        result = get_result(stage, image)
        # Assert
        assert result.get_pixel(0, 0) == [2, 2, 2]

    def test_call_returns_success(self, image: MultiBandImage):
        # Arrange
        stage = self.FakeStage(value=2)
        # Act
        result = stage(image)
        # Assert
        assert is_successful(result)

    def test_call_wraps_exception_in_failure(
        self, image: MultiBandImage, monkeypatch: pytest.MonkeyPatch
    ):
        # Arrange
        def raise_error(*_):
            raise RuntimeError("boom")

        monkeypatch.setattr(self.FakeStage, "apply_on_image", raise_error)
        stage = self.FakeStage(value=2)
        # Act
        result = stage(image)
        # Assert
        assert not is_successful(result)
        assert isinstance(result.failure(), RuntimeError)

    def test_interface_skips_stage_with_predicate(self, image: MultiBandImage):
        before = image.clone()
        stage = self.FakeStage(value=3)
        # Act
        result = stage(image).unwrap()
        # Assert
        assert result is image
        assert result == before, "Stage should be skipped."
