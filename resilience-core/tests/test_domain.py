import pytest
from pydantic import ValidationError

from resilience_core.domain.entities.binary_buffer import BinaryBuffer
from resilience_core.domain.entities.error_event import ErrorContext, ErrorEvent
from resilience_core.domain.entities.reachability_state import ReachabilityState
from resilience_core.domain.entities.retry_policy import RetryPolicy


def test_error_event_defaults_are_per_instance():
    first = ErrorEvent(level="info", message="one")
    second = ErrorEvent(level="info", message="two")
    assert first.id != second.id
    assert first.timestamp.tzinfo is not None
    assert first.stack_trace is None
    assert first.context is None


def test_error_event_rejects_unknown_level():
    with pytest.raises(ValidationError):
        ErrorEvent(level="fatal", message="nope")


def test_error_context_coerce_folds_unknown_keys():
    ctx = ErrorContext.coerce({"action": "login", "component": "AuthContext", "email": "kid@example.com"})
    assert ctx.action == "login"
    assert ctx.component == "AuthContext"
    assert ctx.additional_data == {"email": "kid@example.com"}


def test_error_context_coerce_passthrough():
    ctx = ErrorContext(action="save_goal")
    assert ErrorContext.coerce(ctx) is ctx
    assert ErrorContext.coerce(None) is None


def test_retry_policy_defaults():
    policy = RetryPolicy()
    assert policy.max_retries == 3
    assert policy.base_delay_ms == 1000
    assert policy.max_delay_ms == 10000
    assert policy.backoff_factor == 2.0
    assert policy.total_attempts == 4


def test_retry_policy_backoff_sequence_is_capped():
    policy = RetryPolicy(base_delay_ms=1000, backoff_factor=2, max_delay_ms=10000)
    assert [policy.delay_for(a) for a in range(5)] == [1000, 2000, 4000, 8000, 10000]


def test_retry_policy_large_attempt_does_not_overflow():
    policy = RetryPolicy(max_retries=5000)
    assert policy.delay_for(4999) == policy.max_delay_ms


def test_retry_policy_is_immutable():
    policy = RetryPolicy()
    with pytest.raises(ValidationError):
        policy.max_retries = 10


def test_retry_policy_rejects_negative_retries():
    with pytest.raises(ValidationError):
        RetryPolicy(max_retries=-1)


def test_reachability_state_transition_stamps_new_instant():
    state = ReachabilityState(online=True)
    offline = state.transition(False)
    assert offline.online is False
    assert state.online is True
    assert offline.changed_at >= state.changed_at


def test_binary_buffer_round_trip_and_fixed_length():
    buf = BinaryBuffer.from_bytes([0, 1, 254, 255])
    assert len(buf) == 4
    assert buf.to_bytes() == b"\x00\x01\xfe\xff"
    assert buf.hex() == "0001feff"
    assert buf == b"\x00\x01\xfe\xff"

    buf[0:2] = b"\x07\x08"
    assert buf.to_list() == [7, 8, 254, 255]

    with pytest.raises(ValueError):
        buf[0:2] = b"\x01"
    assert len(buf) == 4


def test_binary_buffer_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        BinaryBuffer.from_bytes([1, 256])


def test_binary_buffer_alloc_is_zeroed():
    assert BinaryBuffer.alloc(3).to_bytes() == b"\x00\x00\x00"
    with pytest.raises(ValueError):
        BinaryBuffer.alloc(-1)


def test_binary_buffer_has_no_text_surface():
    buf = BinaryBuffer(b"abc")
    assert not hasattr(buf, "decode")
    assert not hasattr(buf, "encode")
