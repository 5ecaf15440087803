"""
Soft-fail combinator.

Read endpoints whose absence should not break a page degrade to a default
value instead of raising. Wrapping the call in ``recover_with`` keeps that
choice visible at the call site; calls that are not wrapped propagate
ApiError.
"""

import logging
from typing import Awaitable, Callable, Optional, TypeVar

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


async def recover_with(
    call: Awaitable[T],
    fallback: Callable[[], T],
    label: str,
    when: Optional[Callable[[ApiError], bool]] = None,
    level: int = logging.WARNING,
) -> T:
    """
    Await ``call``; on ApiError return ``fallback()``.

    ``when`` narrows recovery to matching errors, anything else is re-raised.
    ``fallback`` is a factory so mutable defaults are never shared.
    """
    try:
        return await call
    except ApiError as error:
        if when is not None and not when(error):
            raise
        logger.log(level, f"[Recovery] {label} failed ({error.status or error.code}): {error.message}")
        return fallback()


def status_in(*statuses: int) -> Callable[[ApiError], bool]:
    return lambda error: error.status in statuses
