"""Plain-text cleanup for feed fields."""

from __future__ import annotations

import re
from typing import Optional

_TAG_RE = re.compile(r"<[^>]+>")
_ENTITY_RE = re.compile(r"&[^;]+;")


def clean_text(raw_value: Optional[str]) -> str:
    """Drop markup and entity references, each replaced by a single space.

    Only the ends are trimmed; runs of inner whitespace are kept as they are,
    which keeps the function idempotent.
    """
    if not raw_value:
        return ""
    text = _TAG_RE.sub(" ", raw_value)
    text = _ENTITY_RE.sub(" ", text)
    return text.strip()
