"""Streaming extraction of news items from RSS and Atom documents."""

from __future__ import annotations

import enum
import logging
from typing import Dict, List, Mapping, Optional

from lxml import etree

from .dates import parse_published
from .models import NewsItem, NewsSource
from .text import clean_text

logger = logging.getLogger(__name__)

TITLE = "title"
LINK = "link"
DESCRIPTION = "description"
PUBLISHED = "published"
UPDATED = "updated"
CONTENT = "content"

ENTRY_ELEMENTS = frozenset({"item", "entry"})

# Atom metadata copied from another feed; its fields do not describe the entry.
SOURCE_ELEMENT = "source"

# Qualified element name -> accumulation buffer.
FIELD_ELEMENTS: Dict[str, str] = {
    "title": TITLE,
    "link": LINK,
    "description": DESCRIPTION,
    "summary": DESCRIPTION,
    "pubDate": PUBLISHED,
    "published": PUBLISHED,
    "dc:date": PUBLISHED,
    "updated": UPDATED,
    "content": CONTENT,
}

MEDIA_ELEMENTS = frozenset({"media:content", "media:thumbnail"})

_NAMESPACE_PREFIXES = {
    "http://www.w3.org/2005/Atom": "",
    "http://purl.org/rss/1.0/": "",
    "http://backend.userland.com/rss2": "",
    "http://search.yahoo.com/mrss/": "media",
    "http://search.yahoo.com/mrss": "media",
    "http://purl.org/dc/elements/1.1/": "dc",
}


def qualified_name(tag: str) -> str:
    """Map a Clark-notation tag to the conventional prefixed name.

    Feed vocabularies collapse to bare names, Media RSS and Dublin Core keep
    their usual ``media:``/``dc:`` prefixes. Tags from unknown namespaces are
    returned unchanged, as are prefixed names that a recovering parser could
    not bind to a namespace.
    """
    if not tag.startswith("{"):
        return tag
    namespace, _, local = tag[1:].partition("}")
    prefix = _NAMESPACE_PREFIXES.get(namespace)
    if prefix is None:
        return tag
    return f"{prefix}:{local}" if prefix else local


class ExtractorState(enum.Enum):
    IDLE = "idle"
    IN_ENTRY = "in_entry"


class ItemExtractor:
    """Parser target that turns XML events into :class:`NewsItem` objects.

    The methods follow lxml's target protocol, so an instance can be handed to
    ``etree.XMLParser(target=...)`` or driven directly. Each instance keeps the
    buffers of a single entry and must only serve one document.
    """

    def __init__(self, source: NewsSource):
        self.source = source
        self.state = ExtractorState.IDLE
        self.current_field: Optional[str] = None
        self.image_url: Optional[str] = None
        self.alternate_link: Optional[str] = None
        self.source_depth = 0
        self.items: List[NewsItem] = []
        self._buffers: Dict[str, List[str]] = {}
        self._reset_entry()

    def _reset_entry(self) -> None:
        self.current_field = None
        self.image_url = None
        self.alternate_link = None
        self.source_depth = 0
        self._buffers = {
            TITLE: [],
            LINK: [],
            DESCRIPTION: [],
            PUBLISHED: [],
            UPDATED: [],
            CONTENT: [],
        }

    def buffer(self, field_name: str) -> str:
        """Return the raw text accumulated so far for ``field_name``."""
        return "".join(self._buffers[field_name])

    def start(self, tag: str, attrib: Mapping[str, str]) -> None:
        name = qualified_name(tag)

        if name in ENTRY_ELEMENTS:
            self._reset_entry()
            self.state = ExtractorState.IN_ENTRY
            return

        if self.state is not ExtractorState.IN_ENTRY:
            return

        if name == SOURCE_ELEMENT:
            self.source_depth += 1
            self.current_field = None
            return
        if self.source_depth:
            return

        if name == "link" and attrib.get("href"):
            # Atom links carry the URL in an attribute; link text takes precedence.
            if attrib.get("rel", "alternate") == "alternate" and self.alternate_link is None:
                self.alternate_link = attrib["href"]
            return

        field_name = FIELD_ELEMENTS.get(name)
        if field_name is not None:
            self.current_field = field_name
            return

        url = attrib.get("url")
        if not url:
            return
        if name in MEDIA_ELEMENTS:
            self.image_url = url
        elif name == "enclosure" and attrib.get("type", "").startswith("image"):
            self.image_url = url

    def data(self, text: str) -> None:
        if self.state is ExtractorState.IN_ENTRY and self.current_field is not None:
            self._buffers[self.current_field].append(text)

    def end(self, tag: str) -> None:
        name = qualified_name(tag)

        if name in ENTRY_ELEMENTS and self.state is ExtractorState.IN_ENTRY:
            self._finish_entry()
            self._reset_entry()
            self.state = ExtractorState.IDLE
            return

        if name == SOURCE_ELEMENT and self.source_depth:
            self.source_depth -= 1
            return

        if name in FIELD_ELEMENTS:
            self.current_field = None

    def close(self) -> List[NewsItem]:
        return list(self.items)

    def _finish_entry(self) -> None:
        title = clean_text(self.buffer(TITLE))
        link = self.buffer(LINK).strip() or (self.alternate_link or "").strip()
        if not title or not link:
            logger.debug(
                "Dropping %s entry without title or link (title=%r, link=%r)",
                self.source.value,
                title,
                link,
            )
            return

        raw_published = self.buffer(PUBLISHED).strip() or self.buffer(UPDATED)
        description = clean_text(self.buffer(DESCRIPTION)) or clean_text(
            self.buffer(CONTENT)
        )
        self.items.append(
            NewsItem(
                title=title,
                link=link,
                description=description,
                published=parse_published(raw_published),
                image_url=self.image_url,
                source=self.source,
            )
        )


def extract_items(payload: bytes, source: NewsSource) -> List[NewsItem]:
    """Parse a feed document and return every well-formed entry it contains."""
    extractor = ItemExtractor(source)
    parser = etree.XMLParser(
        target=extractor,
        recover=True,
        resolve_entities=False,
        no_network=True,
    )
    try:
        parser.feed(payload)
        parser.close()
    except etree.LXMLError as exc:
        logger.warning(
            "Could not parse %s feed document: %s (%d entries salvaged)",
            source.value,
            exc,
            len(extractor.items),
        )
    return extractor.close()
