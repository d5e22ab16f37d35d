from typing import Callable, Optional

from fastapi import Depends, Header, Request

from components.common.errors import AuthError
from .contracts import AuthErrorCodes, Identity
from .service import AuthService

BEARER_PREFIX = "Bearer "


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_authorization_header(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> Optional[str]:
    """
    Extract the Authorization header value (e.g., 'Bearer <token>').
    Using Header() ensures we get a plain string during real FastAPI requests.
    """
    return authorization


class AuthorizationGate:
    """
    Resolves the operator identity from an Authorization header value or
    rejects with AuthError. The prefix match is case-sensitive with exactly
    one space.
    """

    def __init__(self, verify: Callable[[str], Optional[Identity]]):
        self._verify = verify

    def authorize(self, authorization: Optional[str]) -> Identity:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise AuthError("Unauthorized: missing credential", code=AuthErrorCodes.MISSING_CREDENTIAL)

        identity = self._verify(authorization[len(BEARER_PREFIX):])
        if identity is None:
            raise AuthError("Unauthorized: invalid or expired credential", code=AuthErrorCodes.INVALID_TOKEN)
        return identity


def require_operator(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
    authorization: Optional[str] = Depends(get_authorization_header),
) -> Identity:
    """
    Gate for protected routes. The outcome is left on request.state so the
    request logger can attribute the call (operator) or the rejection (auth_failure).
    """
    try:
        identity = AuthorizationGate(auth.verify_token).authorize(authorization)
    except AuthError as ex:
        request.state.auth_failure = ex.code
        raise
    request.state.operator = identity.email
    return identity
