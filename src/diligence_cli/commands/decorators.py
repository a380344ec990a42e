"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from diligence_cli.models.exceptions import (
    AmbiguousTaskIdError,
    TaskNotFoundError,
    TaskValidationError,
)
from diligence_cli.models.recurrence import WeekdayDecodeError
from diligence_cli.utils.exit_codes import ExitCode
from diligence_cli.utils.logger import get_logger
from diligence_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ExitCode.GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _as_app_error(error: Exception) -> AppError | None:
    """Translate known domain errors into an AppError with a semantic exit code."""
    if isinstance(error, AppError):
        return error
    if isinstance(error, WeekdayDecodeError):
        return AppError(str(error), ExitCode.DATA_CORRUPT)
    if isinstance(error, (TaskNotFoundError, AmbiguousTaskIdError)):
        return AppError(str(error), ExitCode.NOT_FOUND)
    if isinstance(error, (TaskValidationError, ValueError)):
        return AppError(str(error), ExitCode.INVALID_ARGS)
    return None


def command_wrapper(_func: Callable | None = None):
    """Decorator to wrap command functions with common functionality."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except typer.Exit:
                # Typer's own exits (--help, explicit Exit(0))
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                app_error = _as_app_error(e)
                if app_error is not None:
                    logger.error(
                        "command failed: %s (%.3fs) - %s", cmd, elapsed, str(e)
                    )
                    format_error(str(app_error))
                    raise typer.Exit(code=app_error.exit_code) from e

                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=ExitCode.GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
