import asyncio
from typing import Awaitable, Callable, TypeVar

from praxis.core.logging import DOMAIN_DASHBOARD, get_domain_logger
from praxis.core.source_metrics import record_source_failure

T = TypeVar("T")

logger = get_domain_logger(__name__, DOMAIN_DASHBOARD)


async def fetch_or_default(
    label: str,
    factory: Callable[[], Awaitable[T]],
    default: T,
    *,
    timeout_seconds: float | None = None,
) -> T:
    """Await one data-source read; any failure or timeout resolves to ``default``.

    Never raises, so a batch of these can be gathered without one slot
    cancelling its siblings.
    """
    try:
        if timeout_seconds and timeout_seconds > 0:
            return await asyncio.wait_for(factory(), timeout=timeout_seconds)
        return await factory()
    except asyncio.TimeoutError:
        logger.warning("Source %s timed out after %ss; using default", label, timeout_seconds)
        record_source_failure(label, timed_out=True)
        return default
    except Exception as exc:
        logger.warning("Source %s failed; using default: %s", label, exc)
        record_source_failure(label)
        return default


async def settle_all(*fetches: Awaitable[T]) -> list[T]:
    """Wait for every fetch; each is expected to be wrapped by ``fetch_or_default``."""
    return list(await asyncio.gather(*fetches))


def derive_or_default(label: str, derive: Callable[[], T], default: T) -> T:
    """Run one shelf derivation; an exception logs and yields the shelf's default."""
    try:
        return derive()
    except Exception as exc:
        logger.warning("Shelf %s derivation failed; using default: %s", label, exc)
        record_source_failure(f"shelf:{label}")
        return default
