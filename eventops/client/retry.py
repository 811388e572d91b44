# eventops/client/retry.py
"""
Retry wrapper for write calls made through the API client.

Network hiccups are retried with exponential backoff (1s, 2s, 4s by
default). Anything that looks like a server-side rejection is surfaced
immediately, since repeating it cannot succeed.
"""

import logging
import time
from typing import Any, Callable, Optional

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

NETWORK_ERROR_PATTERNS = (
    "network",
    "fetch",
    "timeout",
    "connection",
    "offline",
    "failed to fetch",
    "network request failed",
    "econnrefused",
    "enotfound",
    "etimedout",
)

SERVER_ERROR_PATTERNS = (
    "unauthorized",
    "forbidden",
    "not found",
    "bad request",
    "validation",
    "invalid",
)


def _message(error: BaseException) -> str:
    return str(error).lower()


def is_network_error(error: Any) -> bool:
    """Check if an error is likely a network error that should be retried."""
    if not isinstance(error, BaseException):
        return False
    message = _message(error)
    return any(pattern in message for pattern in NETWORK_ERROR_PATTERNS)


def is_server_error(error: Any) -> bool:
    """Check if an error is a server error that should not be retried."""
    if not isinstance(error, BaseException):
        return False
    message = _message(error)
    return any(pattern in message for pattern in SERVER_ERROR_PATTERNS)


class MutationFailedError(Exception):
    """Raised once a mutation has failed and will not be retried again."""

    def __init__(self, message: str, attempts: int, last_error: BaseException):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(message)


class RetryMutation:
    """
    Wraps a callable so failed calls are retried with exponential backoff.

    State after a call is exposed as attributes: `is_loading`,
    `is_retrying`, `retry_count`, `error` and `is_success`.
    `notify(level, message)` receives user-facing messages with level
    "loading", "success" or "error".
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        *,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        retry_only_network_errors: bool = True,
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[BaseException, int], None]] = None,
        on_retry: Optional[Callable[[BaseException, int, int], None]] = None,
        success_message: Optional[str] = None,
        error_message: Optional[str] = None,
        notify: Optional[Callable[[str, str], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.fn = fn
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.retry_only_network_errors = retry_only_network_errors
        self.on_success = on_success
        self.on_error = on_error
        self.on_retry = on_retry
        self.success_message = success_message
        self.error_message = error_message
        self.notify = notify
        self.sleep = sleep

        self._cancelled = False
        self._set_state()

    def _set_state(
        self,
        is_loading: bool = False,
        is_retrying: bool = False,
        retry_count: int = 0,
        error: Optional[BaseException] = None,
        is_success: bool = False,
    ) -> None:
        self.is_loading = is_loading
        self.is_retrying = is_retrying
        self.retry_count = retry_count
        self.error = error
        self.is_success = is_success

    def _emit(self, level: str, message: str) -> None:
        if self.notify:
            self.notify(level, message)

    def should_retry(self, error: BaseException) -> bool:
        if not isinstance(error, Exception):
            return False
        if not self.retry_only_network_errors:
            return True
        return is_network_error(error) and not is_server_error(error)

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        attempt = retry_state.attempt_number
        delay = retry_state.next_action.sleep

        self.is_retrying = True
        self.retry_count = attempt
        logger.warning(
            f"Mutation failed ({error}); retrying {attempt}/{self.max_retries} in {delay:.1f}s"
        )
        self._emit("loading", f"Connection issue. Retrying ({attempt}/{self.max_retries})...")
        if self.on_retry:
            self.on_retry(error, attempt, self.max_retries)

    def __call__(self, *args, **kwargs) -> Any:
        """
        Run the wrapped callable. Returns its value, or None if `cancel()`
        was called between attempts. Raises MutationFailedError when the
        call cannot succeed.
        """
        self._cancelled = False
        self._set_state(is_loading=True)

        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=self.retry_delay),
            retry=retry_if_exception(self.should_retry),
            before_sleep=self._before_sleep,
            sleep=self.sleep,
            reraise=True,
        )

        attempts = 0
        try:
            for attempt in retrying:
                if self._cancelled:
                    self.is_loading = False
                    self.is_retrying = False
                    return None
                attempts = attempt.retry_state.attempt_number
                with attempt:
                    result = self.fn(*args, **kwargs)
        except Exception as e:
            raise self._failure(e, attempts) from e

        self._set_state(retry_count=attempts - 1, is_success=True)
        if self.success_message:
            self._emit("success", self.success_message)
        if self.on_success:
            self.on_success(result)
        return result

    def _failure(self, last_error: Exception, attempts: int) -> MutationFailedError:
        self._set_state(retry_count=attempts, error=last_error)

        if self.error_message:
            final_message = self.error_message
        elif attempts > 1:
            final_message = f"Failed after {attempts} attempts: {last_error}"
        else:
            final_message = str(last_error) or "An error occurred"

        logger.error(final_message)
        self._emit("error", final_message)
        if self.on_error:
            self.on_error(last_error, attempts)

        return MutationFailedError(final_message, attempts, last_error)

    def cancel(self) -> None:
        """Stop before the next attempt."""
        self._cancelled = True

    def reset(self) -> None:
        self.cancel()
        self._set_state()
