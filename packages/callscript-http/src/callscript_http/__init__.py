"""httpx integration for scripted call outcomes."""

from callscript_http.retry import RetryPolicy, delay_for_attempt, get_json, retry
from callscript_http.transport import SequencedTransport

__all__ = [
    "RetryPolicy",
    "SequencedTransport",
    "delay_for_attempt",
    "get_json",
    "retry",
]
