"""Send a single mail through SendGrid from the command line."""

from __future__ import annotations

import argparse
import sys
from email.utils import parseaddr

from loguru import logger

from sgmail.domain import Destination, Mail, SendgridError
from sgmail.infrastructure import SGClient, encode_mail, get_settings


def parse_destination(value: str) -> Destination:
    """Parse 'Jane Doe <jane@example.com>' or a bare address."""
    name, address = parseaddr(value)
    if not address:
        raise argparse.ArgumentTypeError(f"not an email address: {value!r}")
    return Destination(address=address, name=name)


def parse_header(value: str) -> tuple[str, str]:
    name, sep, header_value = value.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {value!r}")
    return name, header_value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send a mail through the SendGrid v2 API")
    parser.add_argument("--to", type=parse_destination, action="append", required=True, help="Recipient, repeatable")
    parser.add_argument("--from", dest="from_", type=parse_destination, required=True, help="Sender")
    parser.add_argument("--subject", required=True)
    parser.add_argument("--text", default=None, help="Plain text body")
    parser.add_argument("--html", default=None, help="HTML body")
    parser.add_argument("--cc", type=parse_destination, action="append", default=[])
    parser.add_argument("--bcc", type=parse_destination, action="append", default=[])
    parser.add_argument("--reply-to", default=None)
    parser.add_argument("--date", default=None, help="RFC 822 date")
    parser.add_argument("--attach", action="append", default=[], help="File to attach, repeatable")
    parser.add_argument("--header", type=parse_header, action="append", default=[], help="NAME=VALUE, repeatable")
    parser.add_argument("--x-smtpapi", default=None, help="X-SMTPAPI JSON string")
    parser.add_argument("--dry-run", action="store_true", help="Print the encoded body instead of sending")
    return parser


def build_mail(args: argparse.Namespace) -> Mail:
    first, *rest = args.to
    mail = Mail.create(first, args.subject, args.from_)
    for dest in rest:
        mail = mail.add_to(dest)
    for dest in args.cc:
        mail = mail.add_cc(dest)
    for dest in args.bcc:
        mail = mail.add_bcc(dest)

    if args.text is not None:
        mail = mail.set_text(args.text)
    if args.html is not None:
        mail = mail.set_html(args.html)
    if args.reply_to:
        mail = mail.set_reply_to(args.reply_to)
    if args.date:
        mail = mail.set_date(args.date)
    if args.x_smtpapi:
        mail = mail.set_x_smtp_metadata(args.x_smtpapi)

    for name, value in args.header:
        mail = mail.add_header(name, value)
    for path in args.attach:
        mail = mail.add_attachment(path)

    return mail.finalize()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    logger.remove()
    logger.add(sys.stderr, level=settings.log_level.upper())

    try:
        mail = build_mail(args)

        if args.dry_run:
            print(encode_mail(mail, include_from_name=settings.include_from_name))
            return 0

        if settings.api_key is None or not settings.api_key.get_secret_value().strip():
            logger.error("SENDGRID_API_KEY is not set")
            return 2

        client = SGClient(settings.api_key.get_secret_value(), settings=settings)
        print(client.send(mail))
    except SendgridError as e:
        logger.error(f"Send failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
