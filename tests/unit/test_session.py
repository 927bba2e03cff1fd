"""Unit tests for extraction session orchestration."""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from pdf_link_extractor.core.exceptions import DocumentParseError
from pdf_link_extractor.models.schemas import TitleResult
from pdf_link_extractor.services.link_types import LinkEntry
from pdf_link_extractor.services.session import (
    ExtractionSession,
    run_extraction,
    run_title_resolution,
)
from pdf_link_extractor.services.title_resolver import create_client

A = "https://a.example.com/"
B = "https://b.example.com/"
C = "https://c.example.com/"


@pytest.mark.asyncio
async def test_extraction_dedupes_and_starts_with_empty_titles(make_pdf) -> None:
    session = await run_extraction(make_pdf([[A, B, A], [B]]))

    assert session.links == [LinkEntry(1, A), LinkEntry(1, B), LinkEntry(2, B)]
    assert session.distinct_urls() == [A, B]
    assert session.titles == {}
    assert session.num_pages == 2
    assert session.summary() == "Extracted 3 links from 2 pages."


@pytest.mark.asyncio
async def test_linkless_document_reports_zero_links(make_pdf) -> None:
    session = await run_extraction(make_pdf([[], []]))

    assert not session.has_links
    assert session.summary() == "Extracted 0 links from 2 pages."


@pytest.mark.asyncio
async def test_failed_extraction_raises() -> None:
    with pytest.raises(DocumentParseError):
        await run_extraction(b"%PDF-1.7 truncated")


def test_fresh_session_has_no_summary() -> None:
    assert ExtractionSession().summary() is None


@pytest.mark.asyncio
async def test_resolution_submits_exactly_the_distinct_urls() -> None:
    session = ExtractionSession(
        links=[LinkEntry(1, A), LinkEntry(1, B), LinkEntry(2, B)], num_pages=2
    )

    with patch(
        "pdf_link_extractor.services.session.resolve_titles", new=AsyncMock(return_value={})
    ) as resolve_mock:
        await run_title_resolution(session)

    urls, table = resolve_mock.await_args.args
    assert urls == [A, B]
    assert table is session.titles


@pytest.mark.asyncio
async def test_scenario_issues_two_lookups_and_fills_session_table(make_pdf) -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        url = request.url.params["url"]
        requested.append(url)
        if url == A:
            return httpx.Response(200, json={"status": 200, "title": "Example"})
        raise httpx.ReadTimeout("timed out", request=request)

    session = await run_extraction(make_pdf([[A, B, A], [B]]))
    seen: list[str] = []

    with patch(
        "pdf_link_extractor.services.title_resolver.create_client",
        return_value=create_client(transport=httpx.MockTransport(handler)),
    ):
        await run_title_resolution(session, on_result=lambda url, _: seen.append(url))

    assert sorted(requested) == [A, B]
    assert sorted(seen) == [A, B]
    assert session.titles[A] == TitleResult(status=200, title="Example")
    assert session.titles[B] == TitleResult(status=500, error="timed out")


def test_pending_urls_skip_recorded_results_including_failures() -> None:
    session = ExtractionSession(
        links=[LinkEntry(1, A), LinkEntry(1, B), LinkEntry(2, B), LinkEntry(2, C)],
        titles={A: TitleResult(status=200, title="Example"), B: TitleResult(status=500, error="x")},
        num_pages=2,
    )

    assert session.pending_urls() == [C]


@pytest.mark.asyncio
async def test_interrupted_resolution_resumes_with_only_missing_urls() -> None:
    """A rerun after an interrupted lookup batch finishes the rest without repeating any."""
    delays = {A: 0.0, B: 0.2, C: 0.2}
    finished: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        url = request.url.params["url"]
        await asyncio.sleep(delays[url])
        finished.append(url)
        return httpx.Response(200, json={"status": 200, "title": f"title of {url}"})

    transport = httpx.MockTransport(handler)
    session = ExtractionSession(
        links=[LinkEntry(1, A), LinkEntry(1, B), LinkEntry(2, C)], num_pages=2
    )

    def interrupt(url: str, result: TitleResult) -> None:
        raise RuntimeError("rerun requested")

    with patch(
        "pdf_link_extractor.services.title_resolver.create_client",
        side_effect=lambda: create_client(transport=transport),
    ):
        with pytest.raises(RuntimeError):
            await run_title_resolution(session, on_result=interrupt)
        assert session.pending_urls() == [B, C]

        await run_title_resolution(session)

    assert session.pending_urls() == []
    assert sorted(finished) == [A, B, C]
    assert session.titles[C].title == f"title of {C}"
