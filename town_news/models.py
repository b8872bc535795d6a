"""Shared data models for town_news."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class NewsSource(str, Enum):
    """Known news outlets; the value doubles as the display label."""

    VALLEY_NEWS = "Valley News"
    PATCH = "Patch"
    PRESS_ENTERPRISE = "Press-Enterprise"

    @classmethod
    def from_label(cls, label: str) -> "NewsSource":
        """Resolve a source by display label or member name, ignoring case."""
        wanted = label.strip().lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown news source: {label!r}")


@dataclass(frozen=True)
class FeedSource:
    """Configuration for a single syndication endpoint."""

    endpoint: str
    source: NewsSource


@dataclass
class NewsItem:
    """Canonical entry extracted from a feed document."""

    title: str
    link: str
    description: str
    published: Optional[datetime]
    image_url: Optional[str]
    source: NewsSource
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "published": self.published.isoformat() if self.published else None,
            "image_url": self.image_url,
            "source": self.source.value,
        }


@dataclass
class RefreshResult:
    """Merged output of one aggregation pass."""

    items: List[NewsItem]
    failed: bool
