"""Per-upload extraction state and the runs that replace it."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from pdf_link_extractor.models.schemas import TitleTable
from pdf_link_extractor.services.document_reader import extract_links
from pdf_link_extractor.services.link_dedup import dedupe_links, distinct_urls
from pdf_link_extractor.services.link_types import LinkEntry
from pdf_link_extractor.services.title_resolver import ResultCallback, resolve_titles

logger = structlog.get_logger(__name__)


@dataclass
class ExtractionSession:
    links: list[LinkEntry] = field(default_factory=list)
    titles: TitleTable = field(default_factory=dict)
    num_pages: int | None = None

    @property
    def has_links(self) -> bool:
        return bool(self.links)

    def distinct_urls(self) -> list[str]:
        return distinct_urls(self.links)

    def pending_urls(self) -> list[str]:
        """Distinct URLs with no recorded result yet.

        Failed lookups are recorded results, so they never come back here.
        """
        return [url for url in self.distinct_urls() if url not in self.titles]

    def summary(self) -> str | None:
        """Summary line shown once a document has been processed."""
        if not self.num_pages:
            return None
        return f"Extracted {len(self.links)} links from {self.num_pages} pages."


async def run_extraction(content: bytes) -> ExtractionSession:
    """Build a fresh session from PDF bytes with an empty title table.

    Raises DocumentParseError; nothing from a failed run is kept.
    """
    document = await extract_links(content)
    links = dedupe_links(document.links)
    logger.info(
        "session.extracted",
        num_pages=document.num_pages,
        raw_links=len(document.links),
        links=len(links),
    )
    return ExtractionSession(links=links, titles={}, num_pages=document.num_pages)


async def run_title_resolution(
    session: ExtractionSession, on_result: ResultCallback | None = None
) -> TitleTable:
    """Resolve titles for the session's pending URLs into its own table.

    A run interrupted part way leaves the rest pending; calling this again
    only looks those up.
    """
    return await resolve_titles(session.pending_urls(), session.titles, on_result=on_result)
