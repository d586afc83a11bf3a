"""
Outcome logging for functions that return a ``returns`` result.

:func:`log_outcome` reports a ``Success`` at INFO when a success message is
given, and a ``Failure`` at its :class:`FailureLevel` with the error detail at
DEBUG. Return values that are not result containers are not logged. With
``Settings.verbose`` every call is logged with its arguments first.
"""

from collections.abc import Callable
from enum import StrEnum
from functools import wraps
from typing import Any

from loguru import logger
from returns.result import Failure, Result, Success

from multiband.settings import get_settings


class FailureLevel(StrEnum):
    """Loguru level at which a failure is reported."""

    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def describe_call(func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """Render a call as ``name(arg, key=value)`` with reprs of the arguments."""
    arguments = [repr(arg) for arg in args]
    arguments += [f"{key}={value!r}" for key, value in kwargs.items()]
    return f"{func.__name__}({', '.join(arguments)})"


def report_outcome(
    outcome: Result,
    failure_message: str,
    success_message: str | None,
    failure_level: FailureLevel,
) -> None:
    match outcome:
        case Success() if success_message:
            logger.info(success_message)
        case Failure(error):
            logger.debug(f"{failure_message}: {error}")
            logger.log(failure_level.value, failure_message)


def log_outcome(
    failure_message: str,
    success_message: str | None = None,
    failure_level: FailureLevel = FailureLevel.ERROR,
):
    """
    Decorate a function so that the result container it returns is logged.

    :param failure_message: Message for a ``Failure``.
    :param success_message: Message for a ``Success``; nothing is logged when empty.
    :param failure_level: Level of the failure message.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if get_settings().verbose:
                logger.debug(f"Calling {describe_call(func, args, kwargs)}")
            outcome = func(*args, **kwargs)
            if isinstance(outcome, Result):
                report_outcome(outcome, failure_message, success_message, failure_level)
            return outcome

        return wrapper

    return decorator
