import logging

import pytest
from returns.pipeline import is_successful

from multiband import MultiBandImage, UnsupportedOperandError
from multiband.mutations import Arithmetic, Clip, Normalise, ProcessKernel
from multiband.mutations.base import ImageStage
from multiband.pipeline import run_pipeline
from multiband.processors.filters import MedianFilter


class RecordingStage(ImageStage):
    def __init__(self) -> None:
        self.calls = 0

    def apply_on_image(self, image: MultiBandImage) -> MultiBandImage:
        self.calls += 1
        return image


class TestRunPipeline:
    def test_stages_run_in_order(self, rgb_image: MultiBandImage):
        # Arrange
        stages = (Arithmetic("multiply", 2), Clip(0, 100), Arithmetic("add", 1))
        # Act
        result = run_pipeline(rgb_image, *stages)
        # Assert
        assert result.unwrap().get_pixel(0, 0) == [3, 21, 101]

    def test_no_stages_returns_input(self, rgb_image: MultiBandImage):
        assert run_pipeline(rgb_image).unwrap() is rgb_image

    def test_first_failure_stops_pipeline(self, rgb_image: MultiBandImage):
        # Arrange
        recorder = RecordingStage()
        # Act
        result = run_pipeline(rgb_image, Arithmetic("add", "one"), recorder)
        # Assert
        assert not is_successful(result)
        assert isinstance(result.failure(), UnsupportedOperandError)
        assert recorder.calls == 0

    def test_kernel_pipeline(self, rgb_image: MultiBandImage):
        result = run_pipeline(rgb_image, ProcessKernel(MedianFilter(3, 3), pad=True), Normalise())

        assert result.unwrap().size == rgb_image.size

    @pytest.mark.parametrize(
        "stages, message, levels",
        [
            pytest.param(
                (Arithmetic("add", 1),),
                "Successfully ran multi-band pipeline",
                {"INFO"},
                id="success",
            ),
            pytest.param(
                (Arithmetic("add", [1]),),
                "Failed to run multi-band pipeline",
                {"DEBUG", "ERROR"},
                id="failure",
            ),
        ],
    )
    def test_outcome_is_logged(
        self,
        rgb_image: MultiBandImage,
        caplog: pytest.LogCaptureFixture,
        stages,
        message: str,
        levels: set[str],
    ):
        with caplog.at_level(logging.DEBUG):
            run_pipeline(rgb_image, *stages)

        assert message in caplog.text
        assert levels <= {record.levelname for record in caplog.records}
