"""Order-preserving deduplication of extracted links.

URLs are compared verbatim: no case folding, whitespace stripping or
trailing-slash handling.
"""

from collections.abc import Iterable

from pdf_link_extractor.services.link_types import LinkEntry


def dedupe_links(links: Iterable[LinkEntry]) -> list[LinkEntry]:
    """Drop repeated (page, url) pairs, keeping the first occurrence in place."""
    seen: set[LinkEntry] = set()
    unique: list[LinkEntry] = []
    for link in links:
        if link in seen:
            continue
        seen.add(link)
        unique.append(link)
    return unique


def distinct_urls(links: Iterable[LinkEntry]) -> list[str]:
    """Distinct URLs across all pages, in first-seen order."""
    return list(dict.fromkeys(link.url for link in links))
