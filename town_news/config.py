"""Configuration loading for feed sources and the application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
from xml.etree import ElementTree as ET

from .models import FeedSource, NewsSource

logger = logging.getLogger(__name__)

DEFAULT_SOURCES: Tuple[FeedSource, ...] = (
    FeedSource(
        endpoint="https://myvalleynews.com/feed/",
        source=NewsSource.VALLEY_NEWS,
    ),
    FeedSource(
        endpoint="https://patch.com/california/murrieta/rss.xml",
        source=NewsSource.PATCH,
    ),
    FeedSource(
        endpoint="https://www.pe.com/location/california/riverside-county/murrieta/feed/",
        source=NewsSource.PRESS_ENTERPRISE,
    ),
)


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    feeds_file: Optional[str] = None
    timeout: float = 10.0
    concurrency: int = 10
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def load_sources(self) -> List[FeedSource]:
        """Return the configured sources, falling back to the built-in registry."""
        if self.feeds_file:
            return parse_feeds_config(self.feeds_file)
        return list(DEFAULT_SOURCES)


def parse_feeds_config(path: str) -> List[FeedSource]:
    """Parse an OPML file and return its feed sources in document order."""
    logger.info("Loading feed configuration from %s", path)
    tree = ET.parse(path)
    root = tree.getroot()
    body = root.find("body")
    feeds: List[FeedSource] = []

    def walk(outline: ET.Element) -> None:
        label = outline.attrib.get("text") or outline.attrib.get("title")
        feed_url = outline.attrib.get("xmlUrl")

        if outline.attrib.get("type") == "rss" and feed_url:
            if not label:
                raise ValueError(f"Feed outline for {feed_url} has no source name.")
            feeds.append(
                FeedSource(endpoint=feed_url, source=NewsSource.from_label(label))
            )
            logger.debug(
                "Registered feed '%s' (source='%s')", feed_url, feeds[-1].source.value
            )
            return

        for child in outline.findall("outline"):
            walk(child)

    if body is None:
        raise ValueError(f"{path} is missing the <body> section.")

    for outline in body.findall("outline"):
        walk(outline)

    logger.info("Loaded %d feed endpoints from configuration", len(feeds))
    return feeds


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base config file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def parse_app_config(path: str) -> AppConfig:
    """Parse the main application configuration XML."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading application configuration from %s", config_path)
    tree = ET.parse(config_path)
    root = tree.getroot()

    feeds_text = root.findtext("feeds")
    feeds_file = (
        _resolve_path(config_path, feeds_text.strip())
        if feeds_text and feeds_text.strip()
        else None
    )

    timeout = float(root.findtext("timeout", "10"))
    if timeout <= 0:
        raise ValueError("<timeout> must be positive.")

    concurrency = int(root.findtext("concurrency", "10"))
    if concurrency <= 0:
        raise ValueError("<concurrency> must be positive.")

    log_node = root.find("logging")
    logging_config = LoggingConfig()
    if log_node is not None:
        logging_config.level = log_node.findtext("level", "INFO")
        log_file = log_node.findtext("file")
        if log_file:
            logging_config.file = _resolve_path(config_path, log_file)

    return AppConfig(
        feeds_file=feeds_file,
        timeout=timeout,
        concurrency=concurrency,
        logging=logging_config,
    )
