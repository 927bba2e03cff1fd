"""Shared fixtures: in-memory PDFs with link annotations."""

import io
from collections.abc import Callable

import pytest
from pypdf import PdfWriter
from pypdf.annotations import FreeText, Link

PdfFactory = Callable[..., bytes]


def _link_rect(slot: int) -> tuple[float, float, float, float]:
    top = 760 - 30 * slot
    return (50, top - 20, 300, top)


@pytest.fixture
def make_pdf() -> PdfFactory:
    """Build a PDF whose page N carries link annotations for ``pages[N-1]`` in order.

    ``internal_links`` adds page-to-page links (no URL) on the first page;
    ``notes`` adds FreeText annotations on the first page.
    """

    def _make(
        pages: list[list[str]],
        *,
        internal_links: int = 0,
        notes: int = 0,
        user_password: str | None = None,
    ) -> bytes:
        writer = PdfWriter()
        for _ in pages:
            writer.add_blank_page(width=612, height=792)

        for index, urls in enumerate(pages):
            for slot, url in enumerate(urls):
                writer.add_annotation(
                    page_number=index,
                    annotation=Link(rect=_link_rect(slot), url=url),
                )

        for slot in range(internal_links):
            writer.add_annotation(
                page_number=0,
                annotation=Link(rect=_link_rect(20 + slot), target_page_index=0),
            )
        for slot in range(notes):
            writer.add_annotation(
                page_number=0,
                annotation=FreeText(text=f"note {slot}", rect=_link_rect(10 + slot)),
            )

        if user_password is not None:
            writer.encrypt(user_password=user_password, owner_password="owner", algorithm="RC4-128")

        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()

    return _make
