# src/shared/events/customer_events.py
"""
События реестра клиентов.
"""

from __future__ import annotations

from typing import Literal

from src.shared.events.base import DomainEvent


class CustomerRegistered(DomainEvent):
    """Событие: клиент зарегистрирован."""

    event_type: Literal["customer.registered"] = "customer.registered"

    customer_id: str
    customer_external_id: str
