"""Read hyperlink annotations from uploaded PDF bytes, page by page."""

from __future__ import annotations

import asyncio
import io
from collections.abc import Iterator
from urllib.parse import urlparse

import pypdf
import structlog
from pypdf.generic import DictionaryObject, PdfObject

from pdf_link_extractor.core.constants import SAFE_URL_SCHEMES
from pdf_link_extractor.core.exceptions import DocumentParseError
from pdf_link_extractor.services.link_types import Annotation, DocumentLinks, LinkEntry

logger = structlog.get_logger(__name__)

_LINK_SUBTYPE = "Link"
_FILE_ACTIONS = {"/Launch", "/GoToR"}
_NETLOC_SCHEMES = {"http", "https", "ftp"}


def open_document(content: bytes) -> pypdf.PdfReader:
    """Parse PDF bytes, raising DocumentParseError when they cannot be read."""
    if not content:
        raise DocumentParseError("Uploaded file is empty")
    try:
        reader = pypdf.PdfReader(io.BytesIO(content))
        if reader.is_encrypted and not reader.decrypt(""):
            raise DocumentParseError("Document is password protected")
        # Touch the page tree now so a broken tree fails before any page is walked
        len(reader.pages)
    except DocumentParseError:
        raise
    except Exception as exc:
        raise DocumentParseError(f"Could not read PDF: {exc}") from exc
    return reader


def _resolve(value: object) -> object:
    return value.get_object() if isinstance(value, PdfObject) else value


def _as_text(value: object) -> str | None:
    """Return a PDF string object as str (byte strings decoded leniently)."""
    value = _resolve(value)
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return str(value)
    return None


def _file_spec_name(spec: object) -> str | None:
    """Filename of a /Launch or /GoToR target: a plain string or a file spec dict."""
    spec = _resolve(spec)
    if isinstance(spec, DictionaryObject):
        return _as_text(spec.get("/UF")) or _as_text(spec.get("/F"))
    return _as_text(spec)


def _action_url(action: object) -> str | None:
    """Raw URL carried by a link action, before any validation."""
    action = _resolve(action)
    if not isinstance(action, DictionaryObject):
        return None
    kind = _resolve(action.get("/S"))
    if kind == "/URI":
        return _as_text(action.get("/URI"))
    if kind in _FILE_ACTIONS:
        return _file_spec_name(action.get("/F"))
    return None


def validated_url(raw: str | None) -> str | None:
    """Return raw when it is an absolute URL with a safe scheme, else None.

    A bare ``www.`` host is upgraded to ``http://``.
    """
    if not raw:
        return None
    candidate = raw.strip()
    if candidate.lower().startswith("www."):
        candidate = f"http://{candidate}"
    try:
        parsed = urlparse(candidate)
    except ValueError:
        return None
    scheme = parsed.scheme.lower()
    if scheme not in SAFE_URL_SCHEMES:
        return None
    if scheme in _NETLOC_SCHEMES and not parsed.netloc:
        return None
    if scheme not in _NETLOC_SCHEMES and not parsed.path:
        return None
    return candidate


def get_annotations(page: pypdf.PageObject) -> list[Annotation]:
    """Return every annotation on a page as (subtype, url, unsafe_url)."""
    annots = _resolve(page.get("/Annots"))
    if annots is None:
        return []
    annotations: list[Annotation] = []
    for ref in annots:
        annot = _resolve(ref)
        if not isinstance(annot, DictionaryObject):
            continue
        subtype = str(_resolve(annot.get("/Subtype", ""))).lstrip("/")
        unsafe_url = _action_url(annot.get("/A"))
        annotations.append(
            Annotation(subtype=subtype, url=validated_url(unsafe_url), unsafe_url=unsafe_url)
        )
    return annotations


def page_links(page_number: int, annotations: list[Annotation]) -> list[LinkEntry]:
    """Keep link-typed annotations that carry a URL, preferring the validated one."""
    return [
        LinkEntry(page=page_number, url=a.url or a.unsafe_url)
        for a in annotations
        if a.subtype == _LINK_SUBTYPE and (a.url or a.unsafe_url)
    ]


def iter_links(reader: pypdf.PdfReader) -> Iterator[LinkEntry]:
    """Yield links for pages 1..N in order, annotation order within a page."""
    for index, page in enumerate(reader.pages):
        yield from page_links(index + 1, get_annotations(page))


async def extract_links(content: bytes) -> DocumentLinks:
    """Extract every link annotation from a PDF, failing the whole run on any error.

    Pages are fetched one after another; a failure on any page discards the
    links already collected for earlier pages.
    """
    reader = await asyncio.to_thread(open_document, content)
    num_pages = len(reader.pages)
    links: list[LinkEntry] = []
    try:
        for index in range(num_pages):
            annotations = await asyncio.to_thread(get_annotations, reader.pages[index])
            links.extend(page_links(index + 1, annotations))
    except Exception as exc:
        logger.warning("document_reader.page_failed", page=index + 1, error=str(exc))
        raise DocumentParseError(f"Could not read annotations on page {index + 1}: {exc}") from exc

    logger.info("document_reader.parsed", num_pages=num_pages, raw_links=len(links))
    return DocumentLinks(links=links, num_pages=num_pages)
