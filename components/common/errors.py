from __future__ import annotations
from typing import Dict, Optional


class AdminError(Exception):
    type: str = "INTERNAL"
    code: str = "internal_error"
    message: str = "Internal server error"
    status_code: int = 500

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None, details: Optional[Dict] = None):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(self.message)

    def to_payload(self) -> Dict:
        return {"error": self.message, "code": self.code}


class ValidationError(AdminError):
    type = "VALIDATION"
    code = "validation_error"
    message = "Validation error"
    status_code = 400


class AuthError(AdminError):
    type = "AUTH_ERROR"
    code = "auth_failed"
    message = "Authentication failed"
    status_code = 401


class NotFoundError(AdminError):
    type = "NOT_FOUND"
    code = "not_found"
    message = "Resource not found"
    status_code = 404


class ConfigMissingError(AdminError):
    type = "VALIDATION"
    code = "smtp_not_configured"
    message = "SMTP configuration not found"
    status_code = 400


class TransportError(AdminError):
    type = "UPSTREAM"
    code = "transport_error"
    message = "Mail transport failed"
    status_code = 500


class ConfigurationError(RuntimeError):
    """Fatal startup configuration problem (e.g. missing signing secret)."""
