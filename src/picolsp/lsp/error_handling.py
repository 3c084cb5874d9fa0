"""Error isolation for LSP feature handlers.

A failing handler must not take the server down: the exception is logged
with its traceback and the handler's neutral result is returned instead.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")


def _request_uri(args: tuple[object, ...]) -> str:
    """URI of the document a handler was called for, if its params name one."""
    for arg in args:
        text_document = getattr(arg, "text_document", None)
        uri = getattr(text_document, "uri", None)
        if isinstance(uri, str):
            return uri
    return "<no document>"


def wrap_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[[], R],
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorate a synchronous handler so exceptions yield ``default_factory()``.

    Args:
        logger: Receives the error with traceback.
        feature_name: LSP method name used in the log message.
        default_factory: Builds the fallback result.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception(
                    "Error in %s handler for %s", feature_name, _request_uri(args)
                )
                return default_factory()

        return wrapper

    return decorator


def wrap_async_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[[], R],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Async counterpart of ``wrap_handler``.

    ``asyncio.CancelledError`` is re-raised so request cancellation keeps
    working.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception(
                    "Error in %s handler for %s", feature_name, _request_uri(args)
                )
                return default_factory()

        return wrapper

    return decorator
