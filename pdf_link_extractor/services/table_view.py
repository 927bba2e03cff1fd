"""HTML rendering of the (page, title, link) table with per-status coloring."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from html import escape

from pdf_link_extractor.core.constants import TitleStatus
from pdf_link_extractor.models.schemas import TitleResult
from pdf_link_extractor.services.link_types import LinkEntry

STATUS_COLORS: dict[TitleStatus, str] = {
    TitleStatus.PENDING: "#fdba74",
    TitleStatus.SUCCESS: "#86efac",
    TitleStatus.FAILURE: "#fda4af",
}

TABLE_CSS = """
<style>
.link-table { border-collapse: collapse; text-align: left; }
.link-table th, .link-table td { padding: 0.25rem 1rem; }
.link-table a { color: #2563eb; text-decoration: none; }
.link-table a:hover { text-decoration: underline; }
</style>
"""


def title_status(result: TitleResult | None) -> TitleStatus:
    if result is None:
        return TitleStatus.PENDING
    return result.outcome


def title_cell(result: TitleResult | None) -> tuple[str, str, TitleStatus]:
    """Return (visible text, hover text, status) for one title cell."""
    if result is None:
        return "", "", TitleStatus.PENDING
    return result.display_text(), result.to_tooltip(), title_status(result)


def render_links_table(links: Sequence[LinkEntry], titles: Mapping[str, TitleResult]) -> str:
    rows: list[str] = []
    for link in links:
        text, tooltip, status = title_cell(titles.get(link.url))
        safe_url = escape(link.url)
        rows.append(
            "<tr>"
            f"<td>{link.page}</td>"
            f'<td title="{escape(tooltip)}" style="background:{STATUS_COLORS[status]};">{escape(text)}</td>'
            f'<td><a href="{safe_url}" target="_blank" rel="noopener noreferrer">{safe_url}</a></td>'
            "</tr>"
        )
    return (
        '<table class="link-table">'
        "<thead><tr><th>Page</th><th>Title</th><th>Link</th></tr></thead>"
        f"<tbody>{''.join(rows)}</tbody>"
        "</table>"
    )
