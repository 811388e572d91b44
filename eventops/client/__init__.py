# eventops/client/__init__.py
from .api_client import ApiError, EventOpsClient, NetworkError
from .retry import MutationFailedError, RetryMutation, is_network_error, is_server_error

__all__ = [
    "ApiError",
    "EventOpsClient",
    "NetworkError",
    "MutationFailedError",
    "RetryMutation",
    "is_network_error",
    "is_server_error",
]
