import hashlib
import logging

import pytest

from resilience_core.domain.entities.binary_buffer import BinaryBuffer
from resilience_core.domain.errors import CapabilityConflictError, InsecureRandomSourceError, UnsupportedOnHostError
from resilience_core.infrastructure.capabilities import registry
from resilience_core.infrastructure.capabilities.constrained_provider import ConstrainedCapabilityProvider
from resilience_core.infrastructure.capabilities.native_provider import NativeCapabilityProvider


@pytest.fixture(autouse=True)
def clean_registry():
    registry.reset_capabilities()
    yield
    registry.reset_capabilities()


class Untouchable:
    """Has a length but blows up if its contents are read."""

    def __init__(self, size):
        self.size = size

    def __len__(self):
        return self.size

    def __iter__(self):
        raise AssertionError("contents inspected")

    def __bytes__(self):
        raise AssertionError("contents inspected")


def _unavailable(n):
    raise NotImplementedError("no entropy source")


@pytest.mark.parametrize("provider", [NativeCapabilityProvider(), ConstrainedCapabilityProvider()])
def test_constant_time_equals(provider):
    assert provider.constant_time_equals(b"salt-and-hash", b"salt-and-hash") is True
    assert provider.constant_time_equals(b"salt-and-hash", b"salt-and-hasH") is False
    assert provider.constant_time_equals(b"Xalt-and-hash", b"salt-and-hash") is False
    assert provider.constant_time_equals(b"", b"") is True
    assert provider.constant_time_equals(BinaryBuffer(b"abc"), bytearray(b"abc")) is True


@pytest.mark.parametrize("provider", [NativeCapabilityProvider(), ConstrainedCapabilityProvider()])
def test_constant_time_equals_length_mismatch_skips_contents(provider):
    assert provider.constant_time_equals(Untouchable(3), Untouchable(4)) is False


@pytest.mark.parametrize("provider", [NativeCapabilityProvider(), ConstrainedCapabilityProvider()])
def test_secure_random_bytes_length(provider):
    assert len(provider.secure_random_bytes(16)) == 16
    assert provider.secure_random_bytes(0) == b""
    with pytest.raises(ValueError):
        provider.secure_random_bytes(-1)


def test_fill_random_only_touches_requested_range():
    provider = ConstrainedCapabilityProvider(random_source=lambda n: b"\xaa" * n)
    buf = bytearray(8)
    result = provider.fill_random(buf, 2, 3)
    assert result is buf
    assert buf == bytearray(b"\x00\x00\xaa\xaa\xaa\x00\x00\x00")


def test_fill_random_defaults_to_rest_of_buffer():
    provider = ConstrainedCapabilityProvider(random_source=lambda n: b"\x01" * n)
    buf = BinaryBuffer.alloc(4)
    provider.fill_random(buf, 1)
    assert buf.to_bytes() == b"\x00\x01\x01\x01"

    view = memoryview(bytearray(3))
    provider.fill_random(view)
    assert view.tobytes() == b"\x01\x01\x01"


def test_fill_random_rejects_out_of_range():
    provider = NativeCapabilityProvider()
    with pytest.raises(ValueError):
        provider.fill_random(bytearray(4), 2, 5)
    with pytest.raises(ValueError):
        provider.fill_random(bytearray(4), -1, 1)


def test_constrained_provider_fails_closed_without_random_source():
    provider = ConstrainedCapabilityProvider(random_source=_unavailable)
    with pytest.raises(InsecureRandomSourceError):
        provider.secure_random_bytes(16)
    assert provider.is_cryptographic is True


def test_constrained_provider_insecure_fallback_is_loud(caplog):
    provider = ConstrainedCapabilityProvider(random_source=_unavailable, allow_insecure_fallback=True)
    with caplog.at_level(logging.WARNING):
        first = provider.secure_random_bytes(16)
        second = provider.secure_random_bytes(16)
    assert len(first) == len(second) == 16
    assert provider.is_cryptographic is False
    fallback_logs = [r for r in caplog.records if "INSECURE RANDOM FALLBACK" in r.getMessage()]
    assert len(fallback_logs) == 1


def test_constrained_provider_rejects_short_reads():
    provider = ConstrainedCapabilityProvider(random_source=lambda n: b"\x00")
    with pytest.raises(InsecureRandomSourceError):
        provider.secure_random_bytes(4)


@pytest.mark.parametrize(
    "call",
    [
        lambda p: p.create_hash("sha256"),
        lambda p: p.create_hmac("sha256", b"k"),
        lambda p: p.pbkdf2(b"pw", b"salt", 1000, 32),
        lambda p: p.scrypt(b"pw", b"salt", 32),
        lambda p: p.create_cipher("aes-256-cbc", b"k" * 32),
        lambda p: p.create_decipher("aes-256-cbc", b"k" * 32),
        lambda p: p.generate_key_pair("rsa"),
        lambda p: p.create_sign("sha256"),
        lambda p: p.create_verify("sha256"),
    ],
)
def test_constrained_provider_unsupported_operations_fail_loudly(call):
    with pytest.raises(UnsupportedOnHostError) as exc_info:
        call(ConstrainedCapabilityProvider())
    assert "unsupported on this host (constrained)" in str(exc_info.value)


def test_native_provider_delegates_hashing_but_not_ciphers():
    provider = NativeCapabilityProvider()
    digest = provider.create_hash("sha256")
    digest.update(b"piggy bank")
    assert digest.hexdigest() == hashlib.sha256(b"piggy bank").hexdigest()
    assert provider.pbkdf2(b"pw", b"salt", 1, 16) == hashlib.pbkdf2_hmac("sha256", b"pw", b"salt", 1, dklen=16)

    with pytest.raises(UnsupportedOnHostError) as exc_info:
        provider.create_cipher("aes-256-cbc", b"k" * 32)
    assert exc_info.value.operation == "create_cipher"
    assert exc_info.value.host == "native"


def test_select_provider():
    assert isinstance(registry.select_provider("native"), NativeCapabilityProvider)
    constrained = registry.select_provider("constrained", allow_insecure_fallback=True)
    assert isinstance(constrained, ConstrainedCapabilityProvider)
    assert constrained.allow_insecure_fallback is True
    with pytest.raises(ValueError):
        registry.select_provider("toaster")


def test_install_is_idempotent_and_rejects_other_hosts():
    provider = ConstrainedCapabilityProvider()
    assert registry.install_capabilities(provider) is provider
    assert registry.install_capabilities(provider) is provider
    assert registry.install_capabilities(ConstrainedCapabilityProvider()) is provider
    with pytest.raises(CapabilityConflictError):
        registry.install_capabilities(NativeCapabilityProvider())
    assert registry.get_capabilities() is provider


def test_dependent_code_gets_installed_provider_transparently():
    registry.install_capabilities(ConstrainedCapabilityProvider(random_source=lambda n: b"\x5a" * n))

    # what a bcrypt-style salt generator does with the surface
    salt = registry.random_bytes(16)
    assert salt == b"\x5a" * 16

    buf = bytearray(4)
    registry.random_fill_sync(buf, 1, 2)
    assert buf == bytearray(b"\x00\x5a\x5a\x00")

    assert registry.timing_safe_equal(b"hash", b"hash") is True
    assert registry.timing_safe_equal(b"hash", b"hasx") is False


def test_get_capabilities_defaults_to_native():
    assert isinstance(registry.get_capabilities(), NativeCapabilityProvider)


def test_reinstall_with_different_fallback_flag_is_flagged(caplog):
    provider = ConstrainedCapabilityProvider()
    registry.install_capabilities(provider)

    with caplog.at_level(logging.WARNING, logger=registry.logger.name):
        kept = registry.install_capabilities(ConstrainedCapabilityProvider(allow_insecure_fallback=True))

    assert kept is provider
    assert kept.allow_insecure_fallback is False
    assert "allow_insecure_fallback=True" in caplog.text


@pytest.mark.asyncio
async def test_random_fill_is_awaitable():
    registry.install_capabilities(ConstrainedCapabilityProvider(random_source=lambda n: b"\x7f" * n))

    buf = bytearray(6)
    filled = await registry.random_fill(buf, 2, 3)

    assert filled is buf
    assert buf == bytearray(b"\x00\x00\x7f\x7f\x7f\x00")
