# src/shared/events/__init__.py
"""
Схемы доменных событий реестра.

События разделены по доменам:
- zone_events: тарифы зон
- driver_events: жизненный цикл водителя, выплаты, рейтинг
- customer_events: регистрация клиента
- order_events: расчёт по подтверждённому заказу

Все события содержат event_id для дедупликации.
"""

from __future__ import annotations

from typing import Annotated, Union

from pydantic import Field, TypeAdapter

from src.shared.events.base import DomainEvent, EventMetadata
from src.shared.events.zone_events import ZoneRateUpdated
from src.shared.events.driver_events import (
    DriverRegistered,
    DriverStatusUpdated,
    DriverDeRegistered,
    DriverZoneUpdated,
    PayoutUpdated,
    RatingUpdated,
)
from src.shared.events.customer_events import CustomerRegistered
from src.shared.events.order_events import OrderConfirmed


LedgerEvent = Annotated[
    Union[
        ZoneRateUpdated,
        DriverRegistered,
        DriverStatusUpdated,
        DriverDeRegistered,
        DriverZoneUpdated,
        PayoutUpdated,
        RatingUpdated,
        CustomerRegistered,
        OrderConfirmed,
    ],
    Field(discriminator="event_type"),
]

_ledger_event_adapter: TypeAdapter[LedgerEvent] = TypeAdapter(LedgerEvent)


def parse_event(data: str | bytes) -> DomainEvent:
    """
    Десериализует событие из JSON в конкретный класс по event_type.

    Raises:
        pydantic.ValidationError: неизвестный event_type или неполные данные
    """
    return _ledger_event_adapter.validate_json(data)


__all__ = [
    # Base
    "DomainEvent",
    "EventMetadata",
    "LedgerEvent",
    "parse_event",
    # Zone events
    "ZoneRateUpdated",
    # Driver events
    "DriverRegistered",
    "DriverStatusUpdated",
    "DriverDeRegistered",
    "DriverZoneUpdated",
    "PayoutUpdated",
    "RatingUpdated",
    # Customer events
    "CustomerRegistered",
    # Order events
    "OrderConfirmed",
]
