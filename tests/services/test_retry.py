"""
Tests for the retry-with-backoff mutation wrapper.
"""

from unittest.mock import MagicMock

import pytest

from eventops.client.retry import (
    MutationFailedError,
    RetryMutation,
    is_network_error,
    is_server_error,
)


class FlakyCall:
    """Fails with the given errors in turn, then returns `result`."""

    def __init__(self, errors, result="ok"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    def __call__(self, *args, **kwargs):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


def test_error_classification():
    assert is_network_error(Exception("Network request failed"))
    assert is_network_error(ConnectionError("ECONNREFUSED"))
    assert not is_network_error(Exception("Something odd"))
    assert not is_network_error("network")

    assert is_server_error(Exception("Validation failed"))
    assert is_server_error(Exception("403 Forbidden"))
    assert not is_server_error(Exception("timeout"))


def test_success_after_two_network_failures():
    sleep = MagicMock()
    call = FlakyCall([Exception("network down"), Exception("connection reset")], result=42)
    mutation = RetryMutation(call, sleep=sleep)

    assert mutation() == 42
    assert call.calls == 3
    assert mutation.retry_count == 2
    assert mutation.is_success is True
    assert mutation.error is None
    # Exponential backoff: 1s then 2s
    assert [c.args[0] for c in sleep.call_args_list] == [1.0, 2.0]


def test_validation_failure_is_not_retried():
    sleep = MagicMock()
    call = FlakyCall([Exception("validation: title is required")])
    on_error = MagicMock()
    mutation = RetryMutation(call, sleep=sleep, on_error=on_error)

    with pytest.raises(MutationFailedError) as exc_info:
        mutation()

    assert call.calls == 1
    assert exc_info.value.attempts == 1
    assert str(exc_info.value) == "validation: title is required"
    sleep.assert_not_called()
    on_error.assert_called_once()
    assert mutation.is_success is False


def test_network_error_mentioning_invalid_is_not_retried():
    call = FlakyCall([Exception("network: invalid response")])
    mutation = RetryMutation(call, sleep=MagicMock())

    with pytest.raises(MutationFailedError):
        mutation()
    assert call.calls == 1


def test_gives_up_after_max_retries():
    errors = [Exception("timeout")] * 5
    call = FlakyCall(errors)
    notify = MagicMock()
    mutation = RetryMutation(call, max_retries=2, sleep=MagicMock(), notify=notify)

    with pytest.raises(MutationFailedError) as exc_info:
        mutation()

    assert call.calls == 3
    assert exc_info.value.attempts == 3
    assert str(exc_info.value) == "Failed after 3 attempts: timeout"
    notify.assert_any_call("loading", "Connection issue. Retrying (1/2)...")
    notify.assert_called_with("error", "Failed after 3 attempts: timeout")


def test_retry_everything_when_not_limited_to_network_errors():
    call = FlakyCall([Exception("boom")], result="done")
    mutation = RetryMutation(call, retry_only_network_errors=False, sleep=MagicMock())

    assert mutation() == "done"
    assert mutation.retry_count == 1


def test_callbacks_and_messages():
    on_success = MagicMock()
    on_retry = MagicMock()
    notify = MagicMock()
    call = FlakyCall([Exception("offline")], result="saved")
    mutation = RetryMutation(
        call,
        sleep=MagicMock(),
        on_success=on_success,
        on_retry=on_retry,
        notify=notify,
        success_message="Saved!",
    )

    mutation()

    on_success.assert_called_once_with("saved")
    on_retry.assert_called_once()
    assert on_retry.call_args.args[1:] == (1, 3)
    notify.assert_called_with("success", "Saved!")


def test_cancel_stops_before_next_attempt():
    mutation = None

    def cancel_on_retry(error, attempt, max_retries):
        mutation.cancel()

    call = FlakyCall([Exception("network")], result="late")
    mutation = RetryMutation(call, sleep=MagicMock(), on_retry=cancel_on_retry)

    assert mutation() is None
    assert call.calls == 1
    assert mutation.is_loading is False


def test_backoff_doubles_from_retry_delay():
    sleep = MagicMock()
    call = FlakyCall([Exception("timeout")] * 4)
    mutation = RetryMutation(call, retry_delay=0.5, sleep=sleep)

    with pytest.raises(MutationFailedError) as exc_info:
        mutation()

    assert [c.args[0] for c in sleep.call_args_list] == [0.5, 1.0, 2.0]
    assert call.calls == 4
    assert mutation.retry_count == 4
    assert isinstance(exc_info.value.__cause__, Exception)
    assert str(exc_info.value.last_error) == "timeout"


def test_keyboard_interrupt_is_not_retried():
    call = FlakyCall([KeyboardInterrupt()])
    mutation = RetryMutation(call, retry_only_network_errors=False, sleep=MagicMock())

    with pytest.raises(KeyboardInterrupt):
        mutation()
    assert call.calls == 1
