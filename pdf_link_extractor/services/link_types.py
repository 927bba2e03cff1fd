"""Typed contracts for link extraction pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LinkEntry:
    page: int
    url: str


@dataclass(frozen=True)
class Annotation:
    subtype: str
    url: str | None = None
    unsafe_url: str | None = None


@dataclass
class DocumentLinks:
    links: list[LinkEntry] = field(default_factory=list)
    num_pages: int = 0
