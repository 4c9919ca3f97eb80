from __future__ import annotations


class UnsupportedOnHostError(RuntimeError):
    def __init__(self, operation: str, host: str):
        self.operation = operation
        self.host = host
        super().__init__(f"{operation} is unsupported on this host ({host})")


class InsecureRandomSourceError(RuntimeError):
    """Raised when no cryptographic random source exists and the insecure
    fallback has not been explicitly allowed."""


class CapabilityConflictError(RuntimeError):
    pass
