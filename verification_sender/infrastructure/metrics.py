"""
Delivery counters owned by a single sender instance.

There is no process-wide registry: whoever builds the sender either
passes a DeliveryMetrics in or lets the sender create its own.
"""

import structlog

logger = structlog.get_logger()


class Counter:
    """Monotonic integer counter."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._value = 0

    def inc(self, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError(f"Counter {self.name} can only increase")
        self._value += amount

    @property
    def value(self) -> int:
        return self._value


class DeliveryMetrics:
    """Per-channel attempt counters plus cumulative price in milli-units."""

    def __init__(self, prefix: str = "vonage") -> None:
        self.sms_delivered = Counter(f"{prefix}.sms.delivered")
        self.voice_delivered = Counter(f"{prefix}.voice.delivered")
        self.price = Counter(f"{prefix}.price")

    def record(self, counter: Counter, amount: int = 1) -> None:
        """Increment a counter; a failing counter never reaches the caller."""
        try:
            counter.inc(amount)
        except Exception as e:
            logger.warning("Failed to record metric", metric=counter.name, error=str(e))

    def snapshot(self) -> dict[str, int]:
        return {
            c.name: c.value
            for c in (self.sms_delivered, self.voice_delivered, self.price)
        }
