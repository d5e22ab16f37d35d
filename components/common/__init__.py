from .contracts import MessageResponse
from .errors import (
    AdminError,
    ValidationError,
    AuthError,
    NotFoundError,
    ConfigMissingError,
    TransportError,
    ConfigurationError,
)

__all__ = [
    "MessageResponse",
    "AdminError",
    "ValidationError",
    "AuthError",
    "NotFoundError",
    "ConfigMissingError",
    "TransportError",
    "ConfigurationError",
]
