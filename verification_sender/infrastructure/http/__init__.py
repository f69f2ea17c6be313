from .bounded_executor import BoundedExecutor
from .circuit_breaker import CircuitBreaker, CircuitState
from .fault_tolerant_client import FaultTolerantHttpClient, TransportOptions

__all__ = [
    "BoundedExecutor",
    "CircuitBreaker",
    "CircuitState",
    "FaultTolerantHttpClient",
    "TransportOptions",
]
