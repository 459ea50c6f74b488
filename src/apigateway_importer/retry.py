"""Rate-limit retry for control-plane calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from apigateway_importer.client import RemoteClient
from apigateway_importer.errors import RemoteOperationError

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


async def call_with_retry(
    client: RemoteClient,
    operation: str,
    params: dict[str, Any],
    delay: float,
    attempt: int = 1,
    sleep: Sleep = asyncio.sleep,
    log: logging.Logger = logger,
) -> dict[str, Any]:
    """Call ``operation``, re-issuing it after ``delay * attempt`` seconds while rate limited.

    Retries are unbounded. Any other failure is raised on first occurrence.
    """
    while True:
        try:
            return await client.call(operation, params)
        except RemoteOperationError as e:
            if not e.rate_limited:
                raise
            wait = delay * attempt
            log.debug("%s rate limited, retry %d in %.2fs", operation, attempt, wait)
            await sleep(wait)
            attempt += 1
