import logging

import numpy as np
import pytest
from loguru import logger

from multiband import Band, ColourSpace, MultiBandImage, UINT8
from multiband.settings import get_settings


class PropagateHandler(logging.Handler):
    """Handler that propagates loguru records to standard logging."""

    def emit(self, record: logging.LogRecord) -> None:
        logging.getLogger(record.name).handle(record)


@pytest.fixture
def caplog(caplog):
    """Fixture to enable caplog to capture loguru logs."""
    handler_id = logger.add(PropagateHandler(), format="{message}")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def clear_settings_cache():
    """Drop cached settings before and after a test that changes the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _band(rows: list[list[int]], dtype=np.uint8) -> Band:
    return Band(data=np.array(rows, dtype=dtype))


@pytest.fixture
def rgb_image() -> MultiBandImage:
    """Build a 3x2 uint8 RGB image with distinct values per band."""
    return MultiBandImage(
        _band([[1, 2, 3], [4, 5, 6]]),
        _band([[10, 20, 30], [40, 50, 60]]),
        _band([[100, 110, 120], [130, 140, 150]]),
        colour_space=ColourSpace.RGB,
    )


@pytest.fixture
def float_image() -> MultiBandImage:
    """Build a 4x3 float32 image of two bands."""
    rng = np.random.default_rng(42)
    return MultiBandImage(
        Band(data=rng.random((3, 4), dtype=np.float32)),
        Band(data=rng.random((3, 4), dtype=np.float32)),
    )


@pytest.fixture
def blank_uint8() -> MultiBandImage:
    return MultiBandImage.blank(4, 3, 3, UINT8, ColourSpace.RGB)
