from datetime import datetime, timezone

import pytest

from town_news.models import FeedSource, NewsItem, NewsSource


def test_news_source_from_label_accepts_values_and_names():
    assert NewsSource.from_label("Valley News") is NewsSource.VALLEY_NEWS
    assert NewsSource.from_label(" press-enterprise ") is NewsSource.PRESS_ENTERPRISE
    assert NewsSource.from_label("patch") is NewsSource.PATCH
    assert NewsSource.from_label("valley_news") is NewsSource.VALLEY_NEWS


def test_news_source_from_label_rejects_unknown():
    with pytest.raises(ValueError):
        NewsSource.from_label("Gazette")


def test_feed_source_is_immutable():
    feed = FeedSource("https://example.com/feed", NewsSource.PATCH)

    with pytest.raises(AttributeError):
        feed.endpoint = "https://other.example.com"


def test_news_item_to_dict():
    item = NewsItem(
        title="Title",
        link="https://example.com/a",
        description="Body",
        published=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
        image_url="https://example.com/a.jpg",
        source=NewsSource.VALLEY_NEWS,
    )

    data = item.to_dict()

    assert data["id"] == str(item.id)
    assert data["published"] == "2024-05-01T12:30:00+00:00"
    assert data["source"] == "Valley News"
    assert data["image_url"] == "https://example.com/a.jpg"


def test_news_item_without_date_serialises_none():
    item = NewsItem("T", "https://example.com", "", None, None, NewsSource.PATCH)

    assert item.to_dict()["published"] is None
