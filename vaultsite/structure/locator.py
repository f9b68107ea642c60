"""Locates the structure manifest documents in a vault."""

from __future__ import annotations

import asyncio
import re
from typing import List, Optional

from ..config import DEFAULT_TAG
from ..logging import get_logger
from ..models import File, SiteFile
from ..store.base import ContentStore, FileLookup

logger = get_logger("structure.locator")


def marker_pattern(tag: str = DEFAULT_TAG) -> re.Pattern[str]:
    """Return the pattern for ``#<tag>/<id>/_`` bounded by whitespace or document edges."""
    return re.compile(rf"(?:^|(?<=\s))#{re.escape(tag)}/([^/\s]+)/_(?=\s|$)")


def match_structure_file(file: File, tag: str = DEFAULT_TAG) -> Optional[SiteFile]:
    match = marker_pattern(tag).search(file.body)
    if match is None:
        return None
    return SiteFile(id=match.group(1), structure_file=file)


async def find_structure_files(
    store: ContentStore, tag: str = DEFAULT_TAG, lookup: FileLookup | None = None
) -> List[SiteFile]:
    """Return one SiteFile per document carrying the marker, in vault order."""
    refs = lookup.text_files() if lookup is not None else await store.get_text_files()
    files = await asyncio.gather(*(store.load_file(ref) for ref in refs))
    found = [site for site in (match_structure_file(f, tag) for f in files) if site is not None]
    logger.debug("Scanned %d documents, %d carry #%s markers", len(files), len(found), tag)
    return found


__all__ = ["find_structure_files", "marker_pattern", "match_structure_file"]
