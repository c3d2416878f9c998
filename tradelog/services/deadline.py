"""Deadline wrapper for store calls."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from tradelog.core.errors import StoreTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_deadline(awaitable: Awaitable[T], timeout: float | None, operation: str) -> T:
    """Await ``awaitable``, cancelling it once ``timeout`` seconds have passed.

    A cancelled write rolls back inside the store, so a timeout never leaves a
    partial record behind.
    """

    if timeout is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("Store call %r exceeded %.3fs deadline", operation, timeout)
        raise StoreTimeoutError(operation, timeout) from exc


__all__ = ["with_deadline"]
