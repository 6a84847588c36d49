from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Union

from loguru import logger

from sgmail.domain.errors import EncodingError, InvalidFilename, IoError, MissingBodyError

PathArg = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


@dataclass(frozen=True)
class Destination:
    """An address and display name used for to/cc/bcc/from."""

    address: str
    name: str


@dataclass(frozen=True)
class Mail:
    """
    A message for the SendGrid v2 mail.send endpoint.

    Every setter returns a new Mail; the receiver is left untouched, so a
    reference taken earlier in a builder chain never sees later changes.
    """

    from_: Destination
    subject: str
    to: tuple[str, ...] = ()
    toname: tuple[str, ...] = ()
    cc: tuple[str, ...] = ()
    ccname: tuple[str, ...] = ()
    bcc: tuple[str, ...] = ()
    bccname: tuple[str, ...] = ()
    html: Optional[str] = None
    text: Optional[str] = None
    replyto: Optional[str] = None
    date: Optional[str] = None
    attachments: Mapping[str, str] = field(default_factory=dict)
    content: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    x_smtpapi: Optional[str] = None

    @classmethod
    def create(cls, to: Destination, subject: str, from_: Destination) -> Mail:
        """Start a mail with the fields the API always requires."""
        return cls(
            from_=from_,
            subject=subject,
            to=(to.address,),
            toname=(to.name,),
        )

    # Recipients

    def add_to(self, recipient: Destination) -> Mail:
        return replace(
            self,
            to=self.to + (recipient.address,),
            toname=self.toname + (recipient.name,),
        )

    def add_cc(self, recipient: Destination) -> Mail:
        return replace(
            self,
            cc=self.cc + (recipient.address,),
            ccname=self.ccname + (recipient.name,),
        )

    def add_bcc(self, recipient: Destination) -> Mail:
        return replace(
            self,
            bcc=self.bcc + (recipient.address,),
            bccname=self.bccname + (recipient.name,),
        )

    # Scalars

    def set_html(self, html: str) -> Mail:
        return replace(self, html=html)

    def set_text(self, text: str) -> Mail:
        return replace(self, text=text)

    def set_reply_to(self, address: str) -> Mail:
        return replace(self, replyto=address)

    def set_date(self, date: str) -> Mail:
        """Set the send date. Expected to be an RFC 822 timestamp; not checked."""
        return replace(self, date=date)

    def set_x_smtp_metadata(self, value: str) -> Mail:
        """Attach an X-SMTPAPI string, usually a JSON document built by the caller."""
        return replace(self, x_smtpapi=value)

    # Maps

    def add_content(self, content_id: str, value: str) -> Mail:
        """Add inline content (e.g. an embedded image) keyed by content id."""
        return replace(self, content={**self.content, content_id: value})

    def add_header(self, name: str, value: str) -> Mail:
        """Add a custom header. These are usually prefixed with 'X-'."""
        return replace(self, headers={**self.headers, name: value})

    def add_attachment(self, path: PathArg) -> Mail:
        """
        Read a file from disk and attach its text.

        The attachment is keyed by the path as given. The whole file is
        loaded into memory.

        Raises:
            InvalidFilename: the path is not valid UTF-8
            IoError: the file cannot be read or is not UTF-8 text
        """
        raw = os.fspath(path)
        name = _utf8_name(raw)
        try:
            with open(raw, encoding="utf-8") as fh:
                data = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise IoError(name, str(exc)) from exc

        logger.debug(f"Attached {name} ({len(data)} chars)")
        return replace(self, attachments={**self.attachments, name: data})

    def finalize(self) -> Mail:
        """Check the mail is sendable and return it."""
        if self.text is None and self.html is None:
            raise MissingBodyError()
        return self

    def header_string(self) -> str:
        """Serialize the custom headers to the compact JSON object the API expects."""
        try:
            return json.dumps(dict(self.headers), separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"headers are not JSON serializable: {exc}") from exc


def _utf8_name(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidFilename() from exc

    # str paths from os.fsdecode carry undecodable bytes as lone surrogates
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidFilename() from exc
    return raw
