from datetime import datetime, timezone

import pytest

from town_news.templating import format_published, get_environment


def test_get_environment_registers_filters():
    env = get_environment()
    assert "nl2br" in env.filters
    assert "published" in env.filters
    rendered = env.from_string("{{ value | nl2br }}").render(value="line1\nline2")
    assert "line1<br>line2" in rendered


@pytest.mark.parametrize(
    "value, expected",
    [
        (datetime(2025, 2, 21, 15, 45, tzinfo=timezone.utc), "2/21/2025 at 3:45 PM"),
        (datetime(2025, 12, 1, 0, 5, tzinfo=timezone.utc), "12/1/2025 at 12:05 AM"),
        (datetime(2025, 7, 4, 12, 0, tzinfo=timezone.utc), "7/4/2025 at 12:00 PM"),
        (None, ""),
    ],
)
def test_format_published(value, expected):
    assert format_published(value) == expected
