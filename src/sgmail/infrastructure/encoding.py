"""Flatten a Mail into the form body accepted by mail.send.json."""

from __future__ import annotations

from urllib.parse import urlencode

from sgmail.domain.entities.mail import Mail
from sgmail.domain.errors import EncodingError


def encode_pairs(mail: Mail, *, include_from_name: bool = False) -> list[tuple[str, str]]:
    """
    Return the ordered key/value pairs for a mail.

    Every scalar key is always present; absent values become "". The API
    rejects bodies that drop declared keys. `fromname` is only filled in
    when include_from_name is set.
    """
    pairs: list[tuple[str, str]] = []
    pairs += [("to[]", v) for v in mail.to]
    pairs += [("toname[]", v) for v in mail.toname]
    pairs += [("cc[]", v) for v in mail.cc]
    pairs += [("ccname[]", v) for v in mail.ccname]
    pairs += [("bcc[]", v) for v in mail.bcc]
    pairs += [("bccname[]", v) for v in mail.bccname]

    pairs += [
        ("from", mail.from_.address),
        ("subject", mail.subject),
        ("html", mail.html or ""),
        ("text", mail.text or ""),
        ("fromname", mail.from_.name if include_from_name else ""),
        ("replyto", mail.replyto or ""),
        ("date", mail.date or ""),
        ("headers", mail.header_string()),
        ("x-smtpapi", mail.x_smtpapi or ""),
    ]

    pairs += [(f"files[{name}]", data) for name, data in mail.attachments.items()]
    pairs += [(f"content[{cid}]", value) for cid, value in mail.content.items()]

    for key, value in pairs:
        if not isinstance(value, str):
            raise EncodingError(f"field {key!r} must be a string, got {type(value).__name__}")
    return pairs


def encode_mail(mail: Mail, *, include_from_name: bool = False) -> str:
    """Form-encode a mail (percent-encoding, '+' for spaces)."""
    pairs = encode_pairs(mail, include_from_name=include_from_name)
    try:
        return urlencode(pairs)
    except (TypeError, UnicodeEncodeError) as exc:
        raise EncodingError(f"could not form-encode mail: {exc}") from exc
