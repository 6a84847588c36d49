"""Errors raised while building, encoding or sending a mail."""


class SendgridError(Exception):
    """Base class for every error raised by sgmail."""


class IoError(SendgridError):
    """An attachment could not be read from disk."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"could not read attachment {path!r}: {reason}")
        self.path = path


class InvalidFilename(SendgridError):
    """An attachment path is not valid UTF-8."""

    def __init__(self) -> None:
        super().__init__("could not UTF-8 decode this filename")


class EncodingError(SendgridError):
    """The mail could not be serialized to JSON or form data."""


class TransportError(SendgridError):
    """The HTTP request failed before a response was received."""


class MissingBodyError(SendgridError, ValueError):
    """A mail was finalized with neither an HTML nor a text body."""

    def __init__(self) -> None:
        super().__init__("need at least one of text or html set")
