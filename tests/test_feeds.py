import types

import requests

from town_news import feeds
from town_news.models import FeedSource, NewsSource

SOURCE = FeedSource(endpoint="https://feed.example.com/rss", source=NewsSource.PATCH)


def _stub_get(monkeypatch, content=b"", error=None, status_error=None):
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append({"url": url, "headers": headers, "timeout": timeout})
        if error is not None:
            raise error

        def raise_for_status():
            if status_error is not None:
                raise status_error

        return types.SimpleNamespace(content=content, raise_for_status=raise_for_status)

    monkeypatch.setattr(feeds.requests, "get", fake_get)
    return calls


def test_fetch_feed_items_extracts_entries(monkeypatch, make_rss):
    payload = make_rss(
        """\
        <item>
          <title>Farmers market opens</title>
          <link>https://example.com/market</link>
          <pubDate>Sat, 06 Apr 2024 08:00:00 +0000</pubDate>
        </item>
        """
    )
    calls = _stub_get(monkeypatch, content=payload)

    items = feeds.fetch_feed_items(SOURCE, timeout=3.5)

    assert [item.title for item in items] == ["Farmers market opens"]
    assert items[0].source is NewsSource.PATCH
    assert calls[0]["url"] == SOURCE.endpoint
    assert calls[0]["timeout"] == 3.5
    assert "User-Agent" in calls[0]["headers"]


def test_fetch_feed_items_handles_request_exception(monkeypatch):
    _stub_get(monkeypatch, error=requests.Timeout("timed out"))

    assert feeds.fetch_feed_items(SOURCE) == []


def test_fetch_feed_items_handles_http_error_status(monkeypatch, make_rss):
    _stub_get(
        monkeypatch,
        content=make_rss(),
        status_error=requests.HTTPError("503 Server Error"),
    )

    assert feeds.fetch_feed_items(SOURCE) == []


def test_fetch_feed_items_handles_empty_body(monkeypatch):
    _stub_get(monkeypatch, content=b"   \n")

    assert feeds.fetch_feed_items(SOURCE) == []


def test_fetch_feed_items_handles_unparseable_body(monkeypatch):
    _stub_get(monkeypatch, content=b"<html><body>Service unavailable</body>")

    assert feeds.fetch_feed_items(SOURCE) == []


def test_fetch_feed_items_uses_default_timeout(monkeypatch, make_rss):
    calls = _stub_get(monkeypatch, content=make_rss())

    feeds.fetch_feed_items(SOURCE)

    assert calls[0]["timeout"] == feeds.DEFAULT_TIMEOUT
