"""Client library for the SendGrid v2 mail.send API."""

from sgmail.domain import (
    Destination,
    EncodingError,
    InvalidFilename,
    IoError,
    Mail,
    MissingBodyError,
    SendgridError,
    TransportError,
)
from sgmail.infrastructure import SGClient, encode_mail, get_sendgrid_client

__version__ = "0.1.0"

__all__ = [
    "Destination",
    "Mail",
    "SGClient",
    "get_sendgrid_client",
    "encode_mail",
    "SendgridError",
    "IoError",
    "InvalidFilename",
    "EncodingError",
    "TransportError",
    "MissingBodyError",
]
