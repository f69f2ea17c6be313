from .logging import configure_logging, mask_destination
from .metrics import Counter, DeliveryMetrics

__all__ = [
    "Counter",
    "DeliveryMetrics",
    "configure_logging",
    "mask_destination",
]
