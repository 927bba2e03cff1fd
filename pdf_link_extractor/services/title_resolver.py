"""Resolve page titles for extracted URLs through the remote lookup service.

Every distinct URL gets exactly one lookup. Lookups run concurrently and
each result is written into the shared title table as soon as it lands, so
the link table can fill in progressively. Failures are recorded as results
and never raised: a failed lookup is final for the current extraction run.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

import httpx
import structlog

from pdf_link_extractor.core.config import settings
from pdf_link_extractor.core.constants import (
    FALLBACK_FETCH_ERROR,
    LOCAL_FAILURE_STATUS,
    TitleStatus,
)
from pdf_link_extractor.models.schemas import TitleResult, TitleTable

logger = structlog.get_logger(__name__)

ResultCallback = Callable[[str, TitleResult], None]


def create_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """HTTP client for lookups: redirects followed, no connection cap."""
    return httpx.AsyncClient(
        timeout=settings.TITLE_LOOKUP_TIMEOUT,
        follow_redirects=True,
        limits=httpx.Limits(max_connections=None, max_keepalive_connections=20),
        transport=transport,
    )


async def fetch_title(client: httpx.AsyncClient, url: str) -> TitleResult:
    """Look up one URL's title.

    - transport error, timeout or unreadable body -> status 500 with the error message
    - non-success HTTP status -> that bare status
    - success -> the service's JSON object as-is, field types unchecked
    """
    try:
        response = await client.get(settings.TITLE_LOOKUP_URL, params={"url": url})
        if not response.is_success:
            logger.info("title_resolver.http_error", url=url[:200], status_code=response.status_code)
            return TitleResult(status=response.status_code)
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"Lookup response is not a JSON object: {type(payload).__name__}")
        return TitleResult(**payload)
    except Exception as exc:
        logger.warning("title_resolver.fetch_failed", url=url[:200], error=str(exc))
        return TitleResult(status=LOCAL_FAILURE_STATUS, error=str(exc) or FALLBACK_FETCH_ERROR)


async def resolve_titles(
    urls: Iterable[str],
    table: TitleTable,
    on_result: ResultCallback | None = None,
    client: httpx.AsyncClient | None = None,
) -> TitleTable:
    """Fan out one lookup per URL and merge each result into ``table`` on arrival.

    ``on_result`` is called after every write, in completion order. If a
    callback raises (Streamlit interrupts a script run this way), lookups
    still in flight are cancelled and their URLs stay out of ``table``.
    """
    targets = list(urls)
    if not targets:
        return table

    async def _resolve_one(http: httpx.AsyncClient, url: str) -> None:
        result = await fetch_title(http, url)
        table[url] = result
        if on_result is not None:
            on_result(url, result)

    async def _fan_out(http: httpx.AsyncClient) -> None:
        tasks = [asyncio.ensure_future(_resolve_one(http, url)) for url in targets]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            logger.info(
                "title_resolver.interrupted",
                url_count=len(targets),
                resolved=sum(1 for url in targets if url in table),
            )
            raise

    logger.info("title_resolver.started", url_count=len(targets))
    if client is not None:
        await _fan_out(client)
    else:
        async with create_client() as owned_client:
            await _fan_out(owned_client)

    failed = sum(1 for url in targets if table[url].outcome is TitleStatus.FAILURE)
    logger.info("title_resolver.completed", url_count=len(targets), failed=failed)
    return table
