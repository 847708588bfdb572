# src/core/zones/service.py
"""
Таблица тарифов зон.
Нулевой тариф означает «не задан».
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.common.constants import Role
from src.core.access import AccessGuard
from src.core.errors import InvalidRate, InvalidZone, require_unsigned
from src.shared.events import DomainEvent, ZoneRateUpdated

if TYPE_CHECKING:
    from src.core.ledger.state import LedgerState


class ZoneRateTable:
    """Хранит стандартную выплату для каждой зоны."""

    def __init__(self, state: LedgerState, guard: AccessGuard) -> None:
        self._state = state
        self._guard = guard

    def set_zone_rate(self, caller: str, zone_id: int, rate: int) -> list[DomainEvent]:
        """
        Устанавливает тариф зоны, перезаписывая прежний.

        Raises:
            Unauthorized: вызывающий не driver-admin
            InvalidRate: rate == 0
        """
        self._guard.require(caller, Role.DRIVER_ADMIN)
        require_unsigned(zone_id, "zone_id")
        require_unsigned(rate, "rate")
        if rate == 0:
            raise InvalidRate(f"Тариф зоны {zone_id} не может быть нулевым")

        self._state.zone_rates[zone_id] = rate
        return [ZoneRateUpdated(zone_id=zone_id, rate=rate)]

    def get_rate(self, zone_id: int) -> int:
        """Тариф зоны; отсутствующая зона читается как 0."""
        return self._state.zone_rates.get(zone_id, 0)

    def require_rate(self, zone_id: int) -> int:
        """
        Тариф зоны, пригодной для назначения водителя.

        Raises:
            InvalidZone: тариф зоны не задан
        """
        require_unsigned(zone_id, "zone_id")
        rate = self.get_rate(zone_id)
        if rate == 0:
            raise InvalidZone(f"Для зоны {zone_id} не задан тариф")
        return rate
