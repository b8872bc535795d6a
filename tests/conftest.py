import textwrap

import pytest


RSS_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>Channel Title</title>
    <link>https://channel.example.com/</link>
    <description>Channel description</description>
{items}
  </channel>
</rss>
"""


@pytest.fixture
def make_rss():
    """Build an RSS 2.0 document (as bytes) around the given <item> snippets."""

    def _make(*items: str) -> bytes:
        body = "\n".join(textwrap.indent(textwrap.dedent(item), "    ") for item in items)
        return RSS_TEMPLATE.format(items=body).encode("utf-8")

    return _make
