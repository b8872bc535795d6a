"""Jinja2 environment for town_news templates."""

from __future__ import annotations

from datetime import datetime
from importlib import resources

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

_ENV: Environment | None = None


def _nl2br(value: str | None) -> Markup:
    """Convert newlines to <br> tags while escaping HTML."""
    if not value:
        return Markup("")
    return Markup("<br>".join(escape(value).splitlines()))


def format_published(value: datetime | None) -> str:
    """Format a publish time as e.g. ``2/21/2025 at 3:45 PM``; empty when unknown."""
    if value is None:
        return ""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{value.month}/{value.day}/{value.year} at {hour}:{value.minute:02d} {meridiem}"


def get_environment() -> Environment:
    """Return a cached Jinja environment configured for package templates."""
    global _ENV
    if _ENV is None:
        template_dir = resources.files(__package__) / "templates"
        loader = FileSystemLoader(str(template_dir))
        _ENV = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml", "html.j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        _ENV.filters["nl2br"] = _nl2br
        _ENV.filters["published"] = format_published
    return _ENV
