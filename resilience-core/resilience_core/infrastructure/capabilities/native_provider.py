from __future__ import annotations

import hashlib
import hmac
import secrets

from ...domain.ports.capability_provider_port import CapabilityProviderPort


class NativeCapabilityProvider(CapabilityProviderPort):
    """Host with a full crypto stack: OS randomness plus hashlib/hmac."""

    host = "native"

    def secure_random_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("n must be non-negative")
        return secrets.token_bytes(n)

    def constant_time_equals(self, a, b) -> bool:
        if len(a) != len(b):
            return False
        return hmac.compare_digest(bytes(a), bytes(b))

    def create_hash(self, algorithm: str):
        return hashlib.new(algorithm)

    def create_hmac(self, algorithm: str, key: bytes):
        return hmac.new(key, digestmod=algorithm)

    def pbkdf2(self, password: bytes, salt: bytes, iterations: int, key_length: int, digest: str = "sha256") -> bytes:
        return hashlib.pbkdf2_hmac(digest, password, salt, iterations, dklen=key_length)

    def scrypt(self, password: bytes, salt: bytes, key_length: int, *, n: int = 16384, r: int = 8, p: int = 1) -> bytes:
        if not hasattr(hashlib, "scrypt"):
            self._unsupported("scrypt")
        return hashlib.scrypt(password, salt=salt, n=n, r=r, p=p, dklen=key_length)
