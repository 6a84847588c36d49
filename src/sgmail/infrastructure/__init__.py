"""Infrastructure layer - HTTP transport, wire encoding and configuration."""

from sgmail.infrastructure.client import SGClient, get_sendgrid_client
from sgmail.infrastructure.encoding import encode_mail, encode_pairs
from sgmail.infrastructure.settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Encoding
    "encode_pairs",
    "encode_mail",
    # Client
    "SGClient",
    "get_sendgrid_client",
]
