"""Domain models and errors."""

from sgmail.domain.entities.mail import Destination, Mail
from sgmail.domain.errors import (
    EncodingError,
    InvalidFilename,
    IoError,
    MissingBodyError,
    SendgridError,
    TransportError,
)

__all__ = [
    "Destination",
    "Mail",
    "SendgridError",
    "IoError",
    "InvalidFilename",
    "EncodingError",
    "TransportError",
    "MissingBodyError",
]
