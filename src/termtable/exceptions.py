"""Exceptions raised by termtable.

Every error carries a short prefix naming the failed stage and, when one
applies, the target (a URL, a device) it failed on:

    Download failed for 'https://example.com/a.iso': 404, Not Found
"""


class TermTableError(Exception):
    """Root of the termtable exception hierarchy."""

    error_prefix: str = "termtable error"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Record the failure.

        Args:
            message: What went wrong
            target: What it went wrong on, if anything in particular

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        where = f" for '{self.target}'" if self.target else ""
        return f"{self.error_prefix}{where}: {self.message}"


class TerminalError(TermTableError):
    """The terminal could not be sized, switched to raw mode or queried."""

    error_prefix = "Terminal setup failed"


class LayoutError(TermTableError):
    """A line or block does not fit the terminal."""

    error_prefix = "Layout failed"


class DownloadError(TermTableError):
    """A URL could not be fetched within the allowed attempts."""

    error_prefix = "Download failed"
