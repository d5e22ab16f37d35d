from __future__ import annotations
import base64, hashlib, hmac, json, secrets
from typing import Any, Dict
from .contracts import TokenSignerPort, PasswordHasherPort

def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")

def _unb64url(s: str) -> bytes:
    pad = '=' * (-len(s) % 4)
    return base64.urlsafe_b64decode(s + pad)

class HS256TokenSigner(TokenSignerPort):
    """
    Minimal HS256 JWT signer. Only integrity is checked here; claim checks
    (expiry, issuer) belong to AuthService so they can run on an injected clock.
    """
    _HEADER = {"alg": "HS256", "typ": "JWT"}

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("HS256TokenSigner requires non-empty secret")
        self._secret = secret.encode("utf-8")

    def _mac(self, signing_input: bytes) -> bytes:
        return hmac.new(self._secret, signing_input, hashlib.sha256).digest()

    def sign(self, claims: Dict[str, Any]) -> str:
        header_b64 = _b64url(json.dumps(self._HEADER, separators=(",",":")).encode("utf-8"))
        payload_b64 = _b64url(json.dumps(claims, separators=(",",":")).encode("utf-8"))
        sig = self._mac(f"{header_b64}.{payload_b64}".encode("utf-8"))
        return f"{header_b64}.{payload_b64}.{_b64url(sig)}"

    def verify(self, token: str) -> Dict[str, Any]:
        try:
            header_b64, payload_b64, sig_b64 = token.split(".")
        except ValueError:
            raise ValueError("Invalid token format")
        expected_sig = self._mac(f"{header_b64}.{payload_b64}".encode("utf-8"))
        if not hmac.compare_digest(expected_sig, _unb64url(sig_b64)):
            raise ValueError("Signature mismatch")
        header = json.loads(_unb64url(header_b64).decode("utf-8"))
        if not isinstance(header, dict) or header.get("alg") != "HS256":
            raise ValueError("Unsupported token algorithm")
        payload = json.loads(_unb64url(payload_b64).decode("utf-8"))
        if not isinstance(payload, dict):
            raise ValueError("Invalid token payload")
        return payload

class PasswordHasher(PasswordHasherPort):
    """
    PBKDF2-SHA256 with a random per-hash salt.
    Encoded as pbkdf2_sha256$<iterations>$<salt>$<hex digest>.
    """
    def __init__(self, iterations: int = 200_000):
        self.iterations = iterations

    def _derive(self, password: str, salt: str, iterations: int) -> str:
        dk = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations, dklen=32)
        return dk.hex()

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(16)
        return f"pbkdf2_sha256${self.iterations}${salt}${self._derive(password, salt, self.iterations)}"

    def verify(self, password: str, encoded: str) -> bool:
        try:
            scheme, iters_s, salt, hex_dk = encoded.split("$")
            iterations = int(iters_s)
        except ValueError:
            return False
        if scheme != "pbkdf2_sha256":
            return False
        return hmac.compare_digest(self._derive(password, salt, iterations), hex_dk)
