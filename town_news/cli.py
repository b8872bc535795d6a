"""Command-line interface for the town_news application."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .aggregator import refresh
from .config import AppConfig, parse_app_config, parse_feeds_config
from .renderers import FAILURE_MESSAGE, build_news_html, build_news_json, build_news_text

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Fetch, merge and print the latest local news from the configured feeds."
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the main configuration XML file. Built-in defaults are used when omitted.",
    )
    parser.add_argument(
        "--feeds",
        default=None,
        help="Path to an OPML file listing the feed sources. Overrides config.",
    )
    parser.add_argument(
        "--format",
        choices=("text", "html", "json"),
        default="text",
        help="Output format.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-feed request timeout in seconds. Overrides config.",
    )

    # Overrides for logging/debugging
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )

    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "Logger initialised with level %s and file output to %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "Logger initialised with console output at level %s", level_name.upper()
        )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = parse_app_config(args.config) if args.config else AppConfig()

        # CLI overrides config
        log_level = args.log_level or app_config.logging.level
        log_file = args.log_file or app_config.logging.file
        configure_logging(log_level, log_file)

        if args.timeout is not None:
            if args.timeout <= 0:
                raise ValueError("--timeout must be positive.")
            app_config.timeout = args.timeout

        if args.feeds:
            sources = parse_feeds_config(args.feeds)
        else:
            sources = app_config.load_sources()
        logger.info(
            "Refreshing %d feeds (timeout=%.1fs, concurrency=%d)",
            len(sources),
            app_config.timeout,
            app_config.concurrency,
        )

        result = refresh(
            sources,
            timeout=app_config.timeout,
            concurrency=app_config.concurrency,
        )
    except ValueError as exc:
        parser.error(str(exc))
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return 1

    if result.failed:
        logger.error("%s", FAILURE_MESSAGE)

    if args.format == "json":
        print(build_news_json(result.items))
    elif args.format == "html":
        print(build_news_html(result.items, failed=result.failed))
    else:
        print(build_news_text(result.items, failed=result.failed))

    return 1 if result.failed else 0
