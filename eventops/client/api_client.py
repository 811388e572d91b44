# eventops/client/api_client.py
"""
Synchronous client for the EventOps HTTP API.

Write calls run through RetryMutation, so transient network failures are
retried while server-side rejections surface straight away.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .retry import RetryMutation

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The server answered with an error status. Message is the server's detail."""

    def __init__(self, status_code: int, message: str, payload: Optional[dict] = None):
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(message)


class NetworkError(Exception):
    """The request never got a response (connection refused, timeout, ...)."""


def _error_details(response: httpx.Response):
    """(message, parsed body) for an error response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase, None

    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, str):
        return detail, data
    if isinstance(detail, list) and detail:
        # FastAPI request validation errors
        return f"Validation error: {detail[0].get('msg', 'invalid request')}", data
    return response.reason_phrase, data


class EventOpsClient:
    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: Optional[httpx.BaseTransport] = None,
        sleep=None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._client = httpx.Client(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timeout: {e}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"Network connection error: {e}") from e

        if response.status_code >= 400:
            message, payload = _error_details(response)
            logger.debug(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(response.status_code, message, payload=payload)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def mutate(self, method: str, path: str, **kwargs) -> Any:
        """Run a write request with retry on network failures."""
        options = {"max_retries": self.max_retries, "retry_delay": self.retry_delay}
        if self._sleep is not None:
            options["sleep"] = self._sleep
        mutation = RetryMutation(lambda: self.request(method, path, **kwargs), **options)
        return mutation()

    # ---- auth ----

    def login(self, email: str, password: str) -> dict:
        data = self.request("POST", "/api/v1/auth/login", json={"email": email, "password": password})
        self.token = data["access_token"]
        return data

    def me(self) -> dict:
        return self.request("GET", "/api/v1/auth/me")

    # ---- events ----

    def list_events(self, **params) -> dict:
        return self.request("GET", "/api/v1/events", params=params)

    def get_event(self, event_id: str) -> dict:
        return self.request("GET", f"/api/v1/events/{event_id}")

    def create_event(self, payload: dict) -> dict:
        return self.mutate("POST", "/api/v1/events", json=payload)

    def update_event(self, event_id: str, payload: dict) -> dict:
        return self.mutate("PATCH", f"/api/v1/events/{event_id}", json=payload)

    # ---- tasks ----

    def list_tasks(self, event_id: str) -> List[dict]:
        return self.request("GET", f"/api/v1/events/{event_id}/tasks")

    def create_task(self, event_id: str, payload: dict) -> dict:
        return self.mutate("POST", f"/api/v1/events/{event_id}/tasks", json=payload)

    # ---- promo codes ----

    def validate_promo_code(
        self, code: str, event_id: str, order_amount: int, buyer_email: Optional[str] = None
    ) -> dict:
        payload = {"code": code, "event_id": event_id, "order_amount": order_amount}
        if buyer_email:
            payload["buyer_email"] = buyer_email
        return self.request("POST", "/api/v1/promo-codes/validate", json=payload)

    def create_promo_code(self, payload: dict) -> dict:
        return self.mutate("POST", "/api/v1/promo-codes", json=payload)

    def redeem_promo_code(self, promo_code_id: str, payload: dict) -> dict:
        return self.mutate("POST", f"/api/v1/promo-codes/{promo_code_id}/redeem", json=payload)
