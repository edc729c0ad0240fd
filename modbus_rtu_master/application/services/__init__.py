"""Application services."""

from .request_orchestrator import RequestOrchestrator
from .retry_controller import RetryBudget, RetryController, RetryState

__all__ = [
    "RequestOrchestrator",
    "RetryBudget",
    "RetryController",
    "RetryState",
]
