# src/core/ledger/state.py
"""
Снимок состояния реестра: три хранилища, которые меняют операции.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.core.customers.models import CustomerRecord
from src.core.drivers.models import DriverRecord


class LedgerState(BaseModel):
    """
    Тарифы зон, водители и клиенты.

    Ключи водителей и клиентов — независимые пространства: один
    аккаунт может быть и тем, и другим.
    """

    zone_rates: dict[int, int] = Field(default_factory=dict)
    drivers: dict[str, DriverRecord] = Field(default_factory=dict)
    customers: dict[str, CustomerRecord] = Field(default_factory=dict)

    def snapshot(self) -> "LedgerState":
        """Глубокая копия для сравнения и внешнего сохранения."""
        return self.model_copy(deep=True)

    def restore(self, saved: "LedgerState") -> None:
        """Возвращает хранилища к снимку. Объекты словарей остаются прежними."""
        self.zone_rates.clear()
        self.zone_rates.update(saved.zone_rates)
        self.drivers.clear()
        self.drivers.update(saved.drivers)
        self.customers.clear()
        self.customers.update(saved.customers)
