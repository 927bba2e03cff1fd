"""Pydantic schemas for payloads exchanged with the title lookup service.

The lookup service is trusted: any JSON object it returns is kept as-is,
field types included, along with fields this application does not read, so
the hover detail shows exactly what came back.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from pdf_link_extractor.core.constants import TitleStatus


class TitleResult(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    status: Any = None
    title: Any = None
    error: Any = None

    @property
    def outcome(self) -> TitleStatus:
        """Pending until a status arrives; only 200 counts as success."""
        if not self.status:
            return TitleStatus.PENDING
        if self.status == 200:
            return TitleStatus.SUCCESS
        return TitleStatus.FAILURE

    def display_text(self) -> str:
        """Title, else error, else the bare status code."""
        for value in (self.title, self.error, self.status):
            if value is not None:
                return str(value)
        return ""

    def to_tooltip(self) -> str:
        return self.model_dump_json(indent=2, exclude_none=True)


# Mapping of URL -> TitleResult for one extraction run
TitleTable = dict[str, TitleResult]
