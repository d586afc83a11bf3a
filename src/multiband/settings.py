"""Library settings and configuration."""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

from loguru import logger
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration of the multi-band engine.

    Settings can be configured via:

    1. Environment variables (e.g., MULTIBAND_PARALLEL_BANDS=true)
    2. .env file in the working directory
    3. Default values defined below

    All settings use the MULTIBAND_ prefix for environment variables.

    .. rubric:: Examples

    Run per-band loops on a thread pool::

        export MULTIBAND_PARALLEL_BANDS=true
        export MULTIBAND_MAX_WORKERS=4
    """

    parallel_bands: Annotated[
        bool,
        Field(
            default=False,
            description="If True, per-band loops run on a thread pool. "
            "Results and errors are still reported in band order.",
        ),
    ]

    max_workers: Annotated[
        int | None,
        Field(
            default=None,
            description="Thread pool size for parallel band loops (None lets the executor decide)",
            gt=0,
        ),
    ]

    verbose: Annotated[
        bool,
        Field(
            default=False,
            description="Log the call signature of railway functions at DEBUG level",
        ),
    ]

    default_pixel_type: Annotated[
        str,
        Field(
            default="float32",
            description="Pixel type of images created without bands or an explicit type",
        ),
    ]

    model_config = SettingsConfigDict(
        env_prefix="MULTIBAND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def library_version(self) -> str:
        """
        Get the library version from package metadata.

        :return: The installed version, or "0.0.0" when the package is not installed.
        """
        try:
            return version("multiband")
        except PackageNotFoundError:
            logger.warning("Could not determine package version, using fallback '0.0.0'")
            return "0.0.0"

    def log_startup_config(self) -> None:
        """Log the effective configuration."""
        logger.info("=" * 60)
        logger.info("Multi-band engine configuration:")
        logger.info(f"  Version: {self.library_version}")
        logger.info(f"  Parallel bands: {self.parallel_bands}")
        logger.info(f"  Max workers: {self.max_workers or 'executor default'}")
        logger.info(f"  Verbose: {self.verbose}")
        logger.info(f"  Default pixel type: {self.default_pixel_type}")
        logger.info("=" * 60)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    :return: The library settings instance.
    """
    return Settings()  # type: ignore
