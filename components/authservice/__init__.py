from .service import AuthService, SystemClock
from .crypto import HS256TokenSigner, PasswordHasher
from .config import AuthConfig
from .contracts import Identity, OperatorCredential
from .deps import AuthorizationGate, get_auth_service, require_operator
from .routes import router as auth_router

__all__ = [
    "AuthService",
    "SystemClock",
    "HS256TokenSigner",
    "PasswordHasher",
    "AuthConfig",
    "Identity",
    "OperatorCredential",
    "AuthorizationGate",
    "get_auth_service",
    "require_operator",
    "auth_router",
]
