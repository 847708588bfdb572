# src/shared/events/zone_events.py
"""
События таблицы тарифов зон.
"""

from __future__ import annotations

from typing import Literal

from src.shared.events.base import DomainEvent


class ZoneRateUpdated(DomainEvent):
    """Событие: тариф зоны установлен или перезаписан."""

    event_type: Literal["zone.rate_updated"] = "zone.rate_updated"

    zone_id: int
    rate: int
