# src/infra/event_sink.py
"""
Приёмники доменных уведомлений.

Реестр вызывает record(event) после каждого успешного изменения,
в порядке генерации событий.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from src.infra.event_bus import EventBus
from src.shared.events import DomainEvent


@runtime_checkable
class EventSink(Protocol):
    """Интерфейс журнала уведомлений."""

    async def record(self, event: DomainEvent) -> None: ...


class InMemoryEventSink:
    """Журнал в памяти: только добавление. Используется в тестах и по умолчанию."""

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []

    async def record(self, event: DomainEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    def of_type(self, event_type: str) -> list[DomainEvent]:
        return [e for e in self._events if e.event_type == event_type]

    def __len__(self) -> int:
        return len(self._events)


class EventBusSink:
    """Пересылает уведомления в RabbitMQ через EventBus."""

    def __init__(self, event_bus: EventBus) -> None:
        self._event_bus = event_bus

    async def record(self, event: DomainEvent) -> None:
        await self._event_bus.publish(event)
