"""
Error taxonomy for profile crawling.

Every error is scoped to a single identifier: the worker pool records it
as that identifier's outcome and carries on with the rest of the batch.
"""


class CrawlError(Exception):
    """Base class for failures that abort one identifier's crawl."""

    def __init__(self, message: str, handle: str | None = None) -> None:
        super().__init__(message)
        self.handle = handle


class TransportError(CrawlError):
    """The HTTP request could not complete or returned a non-2xx status."""

    def __init__(
        self,
        message: str,
        handle: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, handle)
        self.status_code = status_code


class ExtractionError(CrawlError):
    """The embedded data blob is missing from the page or cannot be decoded."""


class ProfileNotFoundError(ExtractionError):
    """The page was fetched but carries no profile entry."""


class PageDecodeError(CrawlError):
    """A pagination response is not a usable media page."""
