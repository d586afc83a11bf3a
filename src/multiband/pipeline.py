"""Run a sequence of image stages as one railway."""

from returns.pipeline import flow
from returns.pointfree import bind
from returns.result import ResultE, Success

from multiband.container_models.multiband_image import MultiBandImage
from multiband.mutations.base import ImageStage
from multiband.utils.logger import log_outcome


@log_outcome(
    failure_message="Failed to run multi-band pipeline",
    success_message="Successfully ran multi-band pipeline",
)
def run_pipeline(image: MultiBandImage, *stages: ImageStage) -> ResultE[MultiBandImage]:
    """
    Apply ``stages`` to ``image`` in order.

    The first failing stage stops the pipeline; later stages are not called.

    :param image: Input image.
    :param stages: Stages to apply, in execution order.
    :returns: ``Success`` with the final image, or ``Failure`` with the first error.
    """
    return flow(Success(image), *(bind(stage) for stage in stages))
