"""Rate-limited, retrying batch dispatch."""

from dispatch.orchestrator import BatchFailure, BatchOrchestrator, RunResult
from dispatch.rate_gate import RateGate
from dispatch.retry import FailureClass, RetryingDispatcher, RetryPolicy

__all__ = [
    "BatchFailure",
    "BatchOrchestrator",
    "FailureClass",
    "RateGate",
    "RetryPolicy",
    "RetryingDispatcher",
    "RunResult",
]
