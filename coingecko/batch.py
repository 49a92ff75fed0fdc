# coingecko/batch.py
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Iterable, List, Optional

from .config import get_max_workers

logger = logging.getLogger(__name__)


def run_concurrently(calls: Iterable[Callable[[], Any]], max_workers: Optional[int] = None) -> List[Any]:
    """Runs independent zero-argument calls on a thread pool.

    Results come back in the order of ``calls``. If a call raises, the first
    failure seen is re-raised once the pool has drained. No throttling is
    applied: keep batches within ``REQUESTS_PER_SECOND``.

    ``requests.Session`` is not documented as thread-safe, so give each call
    its own ``CoinGecko`` client rather than sharing one across workers.
    """
    calls = list(calls)
    if not calls:
        return []

    workers = min(max_workers or get_max_workers(), len(calls))
    results: List[Any] = [None] * len(calls)
    errors = []

    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_index = {executor.submit(call): i for i, call in enumerate(calls)}
        for future in as_completed(future_to_index):
            index = future_to_index[future]
            try:
                results[index] = future.result()
            except Exception as e:
                logger.warning(f"Call #{index} failed: {e}")
                errors.append(e)

    if errors:
        raise errors[0]
    logger.debug(f"Completed {len(calls)} calls on {workers} workers")
    return results
