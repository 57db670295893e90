"""In-process metrics registry for scheduling observability."""

from __future__ import annotations

from datetime import datetime, timezone
from threading import RLock
from typing import Callable, Optional

from workforce.domain.models import MetricEvent
from workforce.utils.logger import get_logger


logger = get_logger(__name__)

MetricListener = Callable[[MetricEvent], None]

SCHEDULE_ACCURACY = "schedule.accuracy"
SCHEDULE_FULFILLMENT = "schedule.fulfillment"


class MetricsRegistry:
    """Append-only listener set with synchronous fan-out.

    One instance is created by the composition root and handed to whoever
    emits or subscribes. A listener that raises is not isolated; the error
    reaches the emitter and later listeners are skipped for that event.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._listeners: tuple[MetricListener, ...] = ()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def register(self, listener: MetricListener) -> None:
        with self._lock:
            self._listeners = (*self._listeners, listener)

    def emit(self, event: MetricEvent) -> None:
        # snapshot: listeners registered during emit see the next event only
        listeners = self._listeners
        for listener in listeners:
            listener(event)

    def reset(self) -> None:
        with self._lock:
            self._listeners = ()


def register_metric_listener(registry: MetricsRegistry, listener: MetricListener) -> None:
    registry.register(listener)


def _observe(
    registry: MetricsRegistry,
    name: str,
    value: float,
    tags: Optional[dict[str, str]],
) -> MetricEvent:
    event = MetricEvent(
        name=name,
        value=value,
        tags=dict(tags) if tags is not None else None,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    registry.emit(event)
    return event


def observe_schedule_accuracy(
    registry: MetricsRegistry,
    value: float,
    tags: Optional[dict[str, str]] = None,
) -> MetricEvent:
    return _observe(registry, SCHEDULE_ACCURACY, value, tags)


def observe_fulfillment_rate(
    registry: MetricsRegistry,
    value: float,
    tags: Optional[dict[str, str]] = None,
) -> MetricEvent:
    return _observe(registry, SCHEDULE_FULFILLMENT, value, tags)


def log_metric_listener(event: MetricEvent) -> None:
    """Listener that writes each event to the module logger."""
    logger.info(
        "Metric observed | name=%s | value=%.2f | tags=%s",
        event.name,
        event.value,
        event.tags or {},
    )
