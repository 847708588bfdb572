# src/shared/events/order_events.py
"""
События расчёта по завершённому заказу.
Сумма выплаты только вычисляется и публикуется, реестр её не хранит.
"""

from __future__ import annotations

from typing import Literal

from src.shared.events.base import DomainEvent


class OrderConfirmed(DomainEvent):
    """Событие: клиент подтвердил заказ и оценил водителя."""

    event_type: Literal["order.confirmed"] = "order.confirmed"

    customer_id: str
    driver_id: str
    rating: int
    standard_payout: int
    bonus: int
    tip: int
    total_payout: int  # standard_payout + bonus + tip
