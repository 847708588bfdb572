# src/infra/__init__.py
"""
Инфраструктурный слой.
Доставка доменных уведомлений: журнал в памяти или RabbitMQ.
"""

from src.infra.event_bus import EventBus, get_event_bus, init_event_bus, close_event_bus
from src.infra.event_sink import EventSink, InMemoryEventSink, EventBusSink

__all__ = [
    "EventBus",
    "get_event_bus",
    "init_event_bus",
    "close_event_bus",
    "EventSink",
    "InMemoryEventSink",
    "EventBusSink",
]
