from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Union

from ..entities.binary_buffer import BinaryBuffer, BytesLike
from ..errors import UnsupportedOnHostError

WritableBuffer = Union[bytearray, memoryview, BinaryBuffer]


class CapabilityProviderPort(ABC):
    """Minimal random/comparison/buffer surface a password-hashing routine
    needs. Hashing, cipher and key primitives are unsupported unless a
    provider overrides them."""

    host: str = "unknown"

    @property
    def is_cryptographic(self) -> bool:
        return True

    @abstractmethod
    def secure_random_bytes(self, n: int) -> bytes:
        raise NotImplementedError

    def fill_random(self, buffer: WritableBuffer, offset: int = 0, length: Optional[int] = None) -> WritableBuffer:
        size = len(buffer)
        if length is None:
            length = size - offset
        if offset < 0 or length < 0 or offset + length > size:
            raise ValueError(f"range [{offset}, {offset}+{length}) is outside a buffer of {size} bytes")
        if length:
            buffer[offset:offset + length] = self.secure_random_bytes(length)
        return buffer

    def constant_time_equals(self, a: BytesLike | BinaryBuffer, b: BytesLike | BinaryBuffer) -> bool:
        if len(a) != len(b):
            return False
        left = bytes(a)
        right = bytes(b)
        result = 0
        for x, y in zip(left, right):
            result |= x ^ y
        return result == 0

    def buffer_from(self, data) -> BinaryBuffer:
        return BinaryBuffer.from_bytes(data)

    def _unsupported(self, operation: str):
        raise UnsupportedOnHostError(operation, self.host)

    def create_hash(self, algorithm: str):
        self._unsupported("create_hash")

    def create_hmac(self, algorithm: str, key: bytes):
        self._unsupported("create_hmac")

    def pbkdf2(self, password: bytes, salt: bytes, iterations: int, key_length: int, digest: str = "sha256") -> bytes:
        self._unsupported("pbkdf2")

    def scrypt(self, password: bytes, salt: bytes, key_length: int, *, n: int = 16384, r: int = 8, p: int = 1) -> bytes:
        self._unsupported("scrypt")

    def create_cipher(self, algorithm: str, key: bytes, iv: bytes | None = None):
        self._unsupported("create_cipher")

    def create_decipher(self, algorithm: str, key: bytes, iv: bytes | None = None):
        self._unsupported("create_decipher")

    def generate_key_pair(self, key_type: str, **options):
        self._unsupported("generate_key_pair")

    def create_sign(self, algorithm: str):
        self._unsupported("create_sign")

    def create_verify(self, algorithm: str):
        self._unsupported("create_verify")
