"""Feed retrieval helpers."""

from __future__ import annotations

import logging
from typing import List

import requests

from .extractor import extract_items
from .models import FeedSource, NewsItem

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

HEADERS = {
    "User-Agent": "town-news/0.1 (+https://github.com/town-news)",
    "Accept": "application/rss+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8",
}


def fetch_feed_items(
    feed: FeedSource, timeout: float = DEFAULT_TIMEOUT
) -> List[NewsItem]:
    """Fetch and extract the entries of a single feed source.

    Transport failures and unusable documents yield an empty list.
    """
    logger.info("Fetching feed '%s' (%s)", feed.source.value, feed.endpoint)
    try:
        response = requests.get(feed.endpoint, headers=HEADERS, timeout=timeout)
        response.raise_for_status()
        content = response.content
    except requests.RequestException as e:
        logger.warning(
            "Failed to fetch feed '%s' (%s): %s", feed.source.value, feed.endpoint, e
        )
        return []

    if not content or not content.strip():
        logger.warning("Feed '%s' returned an empty body", feed.endpoint)
        return []

    items = extract_items(content, feed.source)
    logger.info("Collected %d entries from feed '%s'", len(items), feed.endpoint)
    return items
