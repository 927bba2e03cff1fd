"""Serialize extracted links for download as CSV text or an XLSX workbook."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from dataclasses import asdict

import pandas as pd

from pdf_link_extractor.core.constants import ExportFiles
from pdf_link_extractor.services.link_types import LinkEntry


def to_csv_text(links: Sequence[LinkEntry]) -> str:
    """Render ``Page,URL`` then one ``page,url`` line per link, without a trailing newline.

    Fields are only quoted when they contain a delimiter, quote or line break,
    so ordinary URLs appear verbatim.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(ExportFiles.CSV_HEADER)
    writer.writerows((link.page, link.url) for link in links)
    return buffer.getvalue().removesuffix("\n")


def to_csv_bytes(links: Sequence[LinkEntry]) -> bytes:
    return to_csv_text(links).encode("utf-8")


def to_xlsx_bytes(links: Sequence[LinkEntry]) -> bytes:
    """Build a workbook with one ``Links`` sheet; columns come from the entry fields."""
    columns = list(LinkEntry.__dataclass_fields__)
    frame = pd.DataFrame([asdict(link) for link in links], columns=columns)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=ExportFiles.XLSX_SHEET, index=False)
    return buffer.getvalue()
