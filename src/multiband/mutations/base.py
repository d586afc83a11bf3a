"""
Image Stages Architecture
=========================

This module defines how pipeline stages over multi-band images are structured.

- :class:`~multiband.container_models.multiband_image.MultiBandImage` holds the bands.
- :class:`ImageStage` is an abstract interface for one step of a pipeline.
- Concrete stages live in :mod:`~multiband.mutations.stages`.
- Stateless array work belongs in the ``computations`` folder.

High-level Design
-----------------

                    +---------------------------------+
                    |          MultiBandImage         |
                    |---------------------------------|
                    | bands        : tuple[Band]      |
                    | colour_space : ColourSpace      |
                    +----------------+----------------+
                                     |
                                     v
                 +-------------------+---------------------+
                 |              <<abstract>>               |
                 |               ImageStage                |
                 |-----------------------------------------|
                 | + apply_on_image(image) -> image        |
                 | + skip_predicate: bool                  |
                 +-------------------+---------------------+
                                     ^
                                     |
     +-------------+-------------+---+---------+-------------+-----------+
     |             |             |             |             |           |
 ProcessBands ProcessKernel ProcessPixels  Arithmetic    Normalise      Clip


Example
-------

    from multiband import MultiBandImage, UINT8
    from multiband.mutations import Arithmetic, Clip, ProcessKernel
    from multiband.pipeline import run_pipeline
    from multiband.processors.filters import MedianFilter

    image = MultiBandImage.blank(8, 8, 3, UINT8)
    result = run_pipeline(
        image,
        ProcessKernel(MedianFilter(3, 3), pad=True),
        Arithmetic("multiply", [1.0, 0.5, 0.25]),
        Clip(0, 200),
    )
"""

from abc import ABC, abstractmethod

from returns.result import safe

from multiband.container_models.multiband_image import MultiBandImage


class ImageStage(ABC):
    """
    Represents a single step applied to a :class:`MultiBandImage`.

    The image returned by one stage must be valid input for the next, so
    stages can be chained with ``bind``.

    All parameters of a stage are provided via its constructor.
    """

    @property
    def skip_predicate(self) -> bool:
        """
        Determines whether this stage should be skipped.

        :return bool:
            - `True`  → skip `apply_on_image`
            - `False` → apply the stage
        """
        return False

    @safe
    def __call__(self, image: MultiBandImage) -> MultiBandImage:
        """
        Callable interface used by pipelines.

        If `skip_predicate` is `True`, the input image is returned unchanged.
        Otherwise, `apply_on_image` is executed. Any exception raised by the
        stage is returned as a `Failure`.
        """
        if self.skip_predicate:
            return image
        return self.apply_on_image(image)

    @abstractmethod
    def apply_on_image(self, image: MultiBandImage) -> MultiBandImage:
        """
        Applies the stage to the given image.

        :param image: The input image.
        :return MultiBandImage: A new or modified image.
        """
