"""Fan-out — run concurrent sub-tasks to completion, then surface the first failure.

Invariants:
    - Every awaitable runs to completion; one failure never cancels its siblings
    - The first failure (in submission order) is re-raised after all have settled
    - Writes made by successful siblings stay persisted — no rollback
    - Additional failures are logged, never silently dropped

Design Decisions:
    - gather(return_exceptions=True) over TaskGroup: TaskGroup cancels siblings on
      the first error, which would abandon informative writes mid-flight
"""

import asyncio
import logging
from typing import Awaitable, Iterable

logger = logging.getLogger(__name__)


async def settle_all(awaitables: Iterable[Awaitable[object]]) -> list[object]:
    """Await everything; raise the first exception once all have finished."""
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    # Siblings awaiting one shared task report the same exception object.
    errors = list({
        id(r): r for r in results if isinstance(r, BaseException)
    }.values())
    if not errors:
        return results
    for extra in errors[1:]:
        logger.error(
            f"Additional fan-out failure: {extra!r}",
            exc_info=(type(extra), extra, extra.__traceback__),
        )
    raise errors[0]
