from __future__ import annotations
import os
from dataclasses import dataclass, field

DEFAULT_TOKEN_TTL_SECONDS = 7 * 24 * 60 * 60  # 7 days

@dataclass
class AuthConfig:
    secret: str = field(default_factory=lambda: os.getenv("AUTH_SECRET", ""))
    token_ttl_seconds: int = field(default_factory=lambda: int(os.getenv("TOKEN_TTL_SECONDS", str(DEFAULT_TOKEN_TTL_SECONDS))))
    issuer: str = field(default_factory=lambda: os.getenv("AUTH_ISSUER", "mailadmin"))
    min_password_length: int = 8
