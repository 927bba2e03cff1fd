"""Exception types raised across the extraction pipeline."""


class LinkExtractorError(Exception):
    """Base class for errors surfaced to the user."""


class DocumentParseError(LinkExtractorError):
    """The uploaded document could not be read or walked page by page.

    Raised for the whole extraction: callers never see a partial link list.
    """
