"""Rendering helpers for merged news output."""

from __future__ import annotations

import json
from typing import Sequence

from .models import NewsItem
from .templating import get_environment

FAILURE_MESSAGE = "No articles could be loaded. Check your connection and try again."


def build_news_html(items: Sequence[NewsItem], failed: bool = False) -> str:
    """Render the merged items as an HTML page of news cards."""
    env = get_environment()
    template = env.get_template("news.html.j2")
    return template.render(items=items, failed=failed, failure_message=FAILURE_MESSAGE)


def build_news_text(items: Sequence[NewsItem], failed: bool = False) -> str:
    """Render the merged items as plain text."""
    env = get_environment()
    template = env.get_template("news.txt.j2")
    return template.render(items=items, failed=failed, failure_message=FAILURE_MESSAGE)


def build_news_json(items: Sequence[NewsItem]) -> str:
    return json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False)
