"""
Chunk naming and the commons-chunk sizing heuristic.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import PurePosixPath

from sitepack.core.models.site import PageDescriptor

COMMONS_CHUNK_NAME = "commons"
APP_CHUNK_NAME = "app"


def min_chunks_threshold(component_count: int) -> int:
    """How many member chunks must share a module before it moves to commons.

    The more page components there are, the higher the bar for merging
    page-specific libraries into the commons chunk. commons.js stays small
    and critical (fast time to interaction), and parse/eval work is pushed
    to the page that needs it. Most visitors touch few pages, so loading a
    module twice beats loading lots of unused code up front.
    """
    if component_count < 0:
        raise ValueError(f"component_count must be >= 0, got {component_count}")
    return component_count // 2


def distinct_components(pages: Iterable[PageDescriptor]) -> list[str]:
    """Distinct page-template component paths, in first-seen order."""
    seen: dict[str, None] = {}
    for page in pages:
        seen.setdefault(page.component, None)
    return list(seen)


def component_chunk_name(component: str, directory: str | None = None) -> str:
    """Synthetic chunk name for a page-template component.

    ``/site/pages/blog-post.js`` under ``/site`` → ``component---pages-blog-post``
    """
    path = PurePosixPath(component.replace("\\", "/"))
    if directory:
        try:
            path = path.relative_to(PurePosixPath(directory.replace("\\", "/")))
        except ValueError:
            pass
    stem = str(path.with_suffix("")) if path.suffix else str(path)
    return f"component---{_kebab(stem)}"


def _kebab(text: str) -> str:
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", text)
    text = re.sub(r"[^A-Za-z0-9]+", "-", text)
    return text.strip("-").lower()
