# src/shared/events/driver_events.py
"""
События реестра водителей.
"""

from __future__ import annotations

from typing import Literal

from src.shared.events.base import DomainEvent


class DriverRegistered(DomainEvent):
    """Событие: водитель зарегистрирован."""

    event_type: Literal["driver.registered"] = "driver.registered"

    driver_id: str
    driver_external_id: str
    zone_id: int
    standard_payout: int


class DriverStatusUpdated(DomainEvent):
    """Событие: изменён флаг активности водителя."""

    event_type: Literal["driver.status_updated"] = "driver.status_updated"

    driver_id: str
    is_active: bool


class DriverDeRegistered(DomainEvent):
    """Событие: запись водителя удалена."""

    event_type: Literal["driver.deregistered"] = "driver.deregistered"

    driver_id: str


class DriverZoneUpdated(DomainEvent):
    """Событие: водитель переведён в другую зону."""

    event_type: Literal["driver.zone_updated"] = "driver.zone_updated"

    driver_id: str
    zone_id: int
    standard_payout: int  # снимок тарифа новой зоны


class PayoutUpdated(DomainEvent):
    """Событие: изменён бонус водителя."""

    event_type: Literal["driver.payout_updated"] = "driver.payout_updated"

    driver_id: str
    standard_payout: int
    bonus: int


class RatingUpdated(DomainEvent):
    """Событие: пересчитан средний рейтинг (x100, с отбрасыванием дробной части)."""

    event_type: Literal["driver.rating_updated"] = "driver.rating_updated"

    driver_id: str
    average_rating: int
