from __future__ import annotations
from typing import Any, Callable, Dict, Optional, Protocol, TypeVar
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

# ---------- Domain Models ----------
class Identity(BaseModel):
    email: str

class OperatorCredential(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password_hash: str = Field(alias="passwordHash")

class TokenClaims(BaseModel):
    email: str
    iat: int
    exp: int
    iss: Optional[str] = None
    jti: Optional[str] = None

# ---------- Ports (Contracts) ----------
class TokenSignerPort(Protocol):
    """
    Contract for JWT signing/verification. `verify` checks integrity only and
    raises ValueError on any malformed or tampered token; expiry is judged by
    the caller against its own clock.
    """
    def sign(self, claims: Dict[str, Any]) -> str: ...
    def verify(self, token: str) -> Dict[str, Any]: ...

class PasswordHasherPort(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, encoded: str) -> bool: ...

class ClockPort(Protocol):
    def now_utc_ts(self) -> int: ...

class CredentialStorePort(Protocol):
    """
    The part of the operator store the auth service needs: a consistent
    snapshot, and an atomic read-modify-persist step.
    """
    def snapshot(self) -> Any: ...
    def update(self, fn: Callable[[Any], T]) -> T: ...

# ---------- Service I/O ----------
class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class LoginResponse(BaseModel):
    token: str
    email: str

class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: Optional[str] = Field(default=None, alias="currentPassword")
    new_password: Optional[str] = Field(default=None, alias="newPassword")

# ---------- Errors ----------
class AuthErrorCodes:
    BAD_CREDENTIALS = "invalid_credentials"
    WRONG_PASSWORD = "wrong_current_password"
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_TOKEN = "invalid_token"
