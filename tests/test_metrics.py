from __future__ import annotations

import threading

import pytest

from workforce.domain.models import MetricEvent
from workforce.services.metrics_service import (
    MetricsRegistry,
    observe_fulfillment_rate,
    observe_schedule_accuracy,
    register_metric_listener,
)


def test_schedule_accuracy_reaches_listener_once():
    registry = MetricsRegistry()
    received: list[MetricEvent] = []
    register_metric_listener(registry, received.append)

    observe_schedule_accuracy(registry, 92.5, {"scheduleId": "demo"})

    assert len(received) == 1
    assert received[0].name == "schedule.accuracy"
    assert received[0].value == 92.5
    assert received[0].tags == {"scheduleId": "demo"}
    assert received[0].timestamp


def test_fulfillment_rate_event_name():
    registry = MetricsRegistry()
    received: list[MetricEvent] = []
    registry.register(received.append)

    event = observe_fulfillment_rate(registry, 80.0)

    assert received == [event]
    assert event.name == "schedule.fulfillment"
    assert event.tags is None


def test_listeners_run_in_registration_order_without_dedup():
    registry = MetricsRegistry()
    calls: list[str] = []

    def first(event: MetricEvent) -> None:
        calls.append("first")

    register_metric_listener(registry, first)
    register_metric_listener(registry, lambda event: calls.append("second"))
    register_metric_listener(registry, first)

    observe_schedule_accuracy(registry, 50.0)

    assert calls == ["first", "second", "first"]


def test_raising_listener_propagates_and_stops_fan_out():
    registry = MetricsRegistry()
    calls: list[str] = []

    def broken(event: MetricEvent) -> None:
        raise RuntimeError("dashboard offline")

    registry.register(broken)
    registry.register(lambda event: calls.append(event.name))

    with pytest.raises(RuntimeError, match="dashboard offline"):
        observe_schedule_accuracy(registry, 10.0)
    assert calls == []


def test_registries_are_independent_and_resettable():
    first_registry = MetricsRegistry()
    second_registry = MetricsRegistry()
    received: list[MetricEvent] = []
    first_registry.register(received.append)

    observe_schedule_accuracy(second_registry, 1.0)
    assert received == []

    first_registry.reset()
    observe_schedule_accuracy(first_registry, 1.0)
    assert received == []
    assert first_registry.listener_count == 0


def test_concurrent_registration_keeps_every_listener():
    registry = MetricsRegistry()
    received: list[MetricEvent] = []
    lock = threading.Lock()

    def listener(event: MetricEvent) -> None:
        with lock:
            received.append(event)

    threads = [
        threading.Thread(target=registry.register, args=(listener,))
        for _ in range(50)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    observe_fulfillment_rate(registry, 75.0)

    assert registry.listener_count == 50
    assert len(received) == 50
