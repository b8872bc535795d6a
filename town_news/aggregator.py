"""Concurrent refresh of every configured feed."""

from __future__ import annotations

import concurrent.futures
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from .feeds import DEFAULT_TIMEOUT, fetch_feed_items
from .models import FeedSource, NewsItem, RefreshResult

logger = logging.getLogger(__name__)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(item: NewsItem) -> datetime:
    return item.published or _EARLIEST


def sort_items(items: Iterable[NewsItem]) -> List[NewsItem]:
    """Order items newest first; undated items go last in their input order."""
    return sorted(items, key=_sort_key, reverse=True)


def refresh(
    sources: Sequence[FeedSource],
    timeout: float = DEFAULT_TIMEOUT,
    concurrency: Optional[int] = None,
) -> RefreshResult:
    """Fetch every source concurrently and merge the results."""
    if not sources:
        logger.warning("No feed sources configured")
        return RefreshResult(items=[], failed=True)

    max_workers = len(sources)
    if concurrency is not None:
        max_workers = max(1, min(concurrency, max_workers))

    def process_feed(feed: FeedSource) -> List[NewsItem]:
        try:
            items = fetch_feed_items(feed, timeout=timeout)
        except Exception:
            logger.exception("Failed to process feed %s", feed.endpoint)
            return []
        if not items:
            logger.info("No entries retrieved for feed %s", feed.endpoint)
        return items

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(process_feed, feed) for feed in sources]
        # Gathered in source order so the merge does not depend on completion order.
        results = [future.result() for future in futures]

    merged: List[NewsItem] = []
    for items in results:
        merged.extend(items)

    ordered = sort_items(merged)
    failed = not ordered and all(not items for items in results)
    if failed:
        logger.error("No entries were retrieved from any of %d feeds", len(sources))
    else:
        logger.info(
            "Merged %d entries from %d of %d feeds",
            len(ordered),
            sum(1 for items in results if items),
            len(sources),
        )
    return RefreshResult(items=ordered, failed=failed)
