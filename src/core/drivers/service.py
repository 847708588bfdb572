# src/core/drivers/service.py
"""
Реестр водителей.
Жизненный цикл записи и её изменяемые атрибуты: статус, зона, бонус.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.common.constants import Role
from src.core.access import AccessGuard
from src.core.drivers.models import DriverRecord
from src.core.errors import (
    AlreadyRegistered,
    InvalidArgument,
    MustBeInactive,
    NotRegistered,
    require_account,
    require_unsigned,
)
from src.core.zones import ZoneRateTable
from src.shared.events import (
    DomainEvent,
    DriverDeRegistered,
    DriverRegistered,
    DriverStatusUpdated,
    DriverZoneUpdated,
    PayoutUpdated,
)

if TYPE_CHECKING:
    from src.core.ledger.state import LedgerState


class DriverRegistry:
    """
    Реестр водителей.

    Все изменяющие операции требуют роли driver-admin. Проверки идут
    до изменения записи, поэтому отказ оставляет реестр нетронутым.
    """

    def __init__(
        self,
        state: LedgerState,
        guard: AccessGuard,
        zones: ZoneRateTable,
    ) -> None:
        """
        Args:
            state: Общее состояние реестра
            guard: Проверка ролей
            zones: Таблица тарифов (источник standard_payout)
        """
        self._state = state
        self._guard = guard
        self._zones = zones

    # =========================================================================
    # ЧТЕНИЕ
    # =========================================================================

    def get(self, driver_id: str) -> DriverRecord | None:
        return self._state.drivers.get(driver_id)

    def require(self, driver_id: str) -> DriverRecord:
        """
        Raises:
            NotRegistered: водителя нет в реестре
        """
        record = self._state.drivers.get(driver_id)
        if record is None:
            raise NotRegistered(f"Водитель {driver_id!r} не зарегистрирован")
        return record

    def is_registered(self, driver_id: str) -> bool:
        return driver_id in self._state.drivers

    # =========================================================================
    # ЖИЗНЕННЫЙ ЦИКЛ
    # =========================================================================

    def register_driver(
        self,
        caller: str,
        driver_id: str,
        external_id: str,
        zone_id: int,
    ) -> list[DomainEvent]:
        """
        Регистрирует водителя в зоне с заданным тарифом.

        Новая запись активна, накопители и бонус равны нулю,
        standard_payout копируется из текущего тарифа зоны.

        Raises:
            Unauthorized, AlreadyRegistered, InvalidZone
        """
        self._guard.require(caller, Role.DRIVER_ADMIN)
        require_account(driver_id, "driver_id")
        if not isinstance(external_id, str):
            raise InvalidArgument("external_id должен быть строкой")
        if driver_id in self._state.drivers:
            raise AlreadyRegistered(f"Водитель {driver_id!r} уже зарегистрирован")
        rate = self._zones.require_rate(zone_id)

        record = DriverRecord(
            driver_id=driver_id,
            driver_external_id=external_id,
            zone_id=zone_id,
            standard_payout=rate,
        )
        self._state.drivers[driver_id] = record
        return [
            DriverRegistered(
                driver_id=driver_id,
                driver_external_id=external_id,
                zone_id=zone_id,
                standard_payout=rate,
            )
        ]

    def update_driver_status(self, caller: str, driver_id: str, is_active: bool) -> list[DomainEvent]:
        """Включает или отключает водителя. Событие публикуется даже без изменений."""
        self._guard.require(caller, Role.DRIVER_ADMIN)
        if not isinstance(is_active, bool):
            raise InvalidArgument("is_active должен быть bool")
        record = self.require(driver_id)

        record.is_active = is_active
        return [DriverStatusUpdated(driver_id=driver_id, is_active=is_active)]

    def de_register_driver(self, caller: str, driver_id: str) -> list[DomainEvent]:
        """
        Удаляет запись водителя целиком. Необратимо: повторная
        регистрация начинает все накопители с нуля.

        Raises:
            Unauthorized, NotRegistered, MustBeInactive
        """
        self._guard.require(caller, Role.DRIVER_ADMIN)
        record = self.require(driver_id)
        if record.is_active:
            raise MustBeInactive(f"Водитель {driver_id!r} активен, сначала отключите его")

        del self._state.drivers[driver_id]
        return [DriverDeRegistered(driver_id=driver_id)]

    # =========================================================================
    # АТРИБУТЫ ВЫПЛАТЫ
    # =========================================================================

    def update_driver_zone(self, caller: str, driver_id: str, zone_id: int) -> list[DomainEvent]:
        """
        Переводит водителя в другую зону и заново снимает тариф.
        Прошлые выплаты не пересчитываются.
        """
        self._guard.require(caller, Role.DRIVER_ADMIN)
        record = self.require(driver_id)
        rate = self._zones.require_rate(zone_id)

        record.zone_id = zone_id
        record.standard_payout = rate
        return [DriverZoneUpdated(driver_id=driver_id, zone_id=zone_id, standard_payout=rate)]

    def set_driver_bonus(self, caller: str, driver_id: str, bonus: int) -> list[DomainEvent]:
        """Перезаписывает бонус водителя."""
        self._guard.require(caller, Role.DRIVER_ADMIN)
        record = self.require(driver_id)
        require_unsigned(bonus, "bonus")

        record.bonus = bonus
        return [
            PayoutUpdated(
                driver_id=driver_id,
                standard_payout=record.standard_payout,
                bonus=bonus,
            )
        ]
