from __future__ import annotations
import logging, time, uuid
from typing import Optional

from components.common.errors import AuthError, ValidationError
from .config import AuthConfig
from .contracts import (
    AuthErrorCodes, ClockPort, CredentialStorePort, Identity, LoginRequest,
    LoginResponse, ChangePasswordRequest, PasswordHasherPort, TokenClaims, TokenSignerPort,
)

logger = logging.getLogger("authservice")

class SystemClock(ClockPort):
    def now_utc_ts(self) -> int:
        return int(time.time())

class AuthService:
    def __init__(
        self,
        *,
        store: CredentialStorePort,
        signer: TokenSignerPort,
        hasher: PasswordHasherPort,
        cfg: Optional[AuthConfig] = None,
        clock: Optional[ClockPort] = None,
    ):
        self.store = store
        self.signer = signer
        self.hasher = hasher
        self.cfg = cfg or AuthConfig()
        self.clock = clock or SystemClock()

    # --------- Tokens ----------
    def issue_token(self, identity: Identity) -> str:
        now = self.clock.now_utc_ts()
        claims = TokenClaims(
            email=identity.email,
            iat=now,
            exp=now + self.cfg.token_ttl_seconds,
            iss=self.cfg.issuer,
            jti=uuid.uuid4().hex,
        )
        return self.signer.sign(claims.model_dump())

    def verify_token(self, token: str) -> Optional[Identity]:
        """Every failure cause collapses to None."""
        try:
            claims = TokenClaims(**self.signer.verify(token))
        except (ValueError, TypeError):
            return None
        if claims.iss != self.cfg.issuer:
            return None
        if self.clock.now_utc_ts() > claims.exp:
            return None
        return Identity(email=claims.email)

    # --------- Credential operations ----------
    def login(self, req: LoginRequest) -> LoginResponse:
        if not req.email or not req.password:
            raise ValidationError("Email and password are required", code="missing_fields")

        credential = self.store.snapshot().user
        # Email mismatch and password mismatch must stay indistinguishable to the
        # caller, in body and in timing: the digest is always checked.
        password_ok = self.hasher.verify(req.password, credential.password_hash)
        if credential.email != req.email:
            logger.warning("auth.login_failed", extra={"reason": "unknown_email"})
            raise AuthError("Invalid credentials", code=AuthErrorCodes.BAD_CREDENTIALS)
        if not password_ok:
            logger.warning("auth.login_failed", extra={"reason": "bad_password"})
            raise AuthError("Invalid credentials", code=AuthErrorCodes.BAD_CREDENTIALS)

        token = self.issue_token(Identity(email=credential.email))
        logger.info("auth.login_ok")
        return LoginResponse(token=token, email=credential.email)

    def change_password(self, req: ChangePasswordRequest) -> None:
        if not req.current_password or not req.new_password:
            raise ValidationError("Current and new password are required", code="missing_fields")
        if len(req.new_password) < self.cfg.min_password_length:
            raise ValidationError(
                f"New password must be at least {self.cfg.min_password_length} characters",
                code="password_too_short",
            )

        # Hash before taking the store lock; only the check and the swap run inside it.
        new_hash = self.hasher.hash(req.new_password)

        def apply(state):
            if not self.hasher.verify(req.current_password, state.user.password_hash):
                raise AuthError("Current password is incorrect", code=AuthErrorCodes.WRONG_PASSWORD)
            state.user.password_hash = new_hash

        self.store.update(apply)
        logger.info("auth.password_changed")
