# src/core/ledger/service.py
"""
Сервис реестра.
Единственная точка записи: сериализует операции, публикует уведомления
и логирует результат.
"""

from __future__ import annotations

import asyncio
from typing import Callable

from src.common.logger import log_error, log_info, log_warning
from src.core.access import AccessGuard, RoleTable
from src.core.customers import CustomerRecord, CustomerRegistry
from src.core.drivers import DriverRecord, DriverRegistry
from src.core.errors import LedgerError
from src.core.ledger.state import LedgerState
from src.core.settlement import OrderSettlement, Settlement
from src.core.zones import ZoneRateTable
from src.infra.event_sink import EventSink, InMemoryEventSink
from src.shared.events import DomainEvent


class LedgerService:
    """
    Реестр водителей, клиентов, тарифов и расчётов.

    Каждая изменяющая операция выполняется под одной блокировкой:
    операции полностью упорядочены и не пересекаются. Внутри операции
    сначала идут проверки, потом изменение, потом запись уведомлений.
    Отказ не меняет ни одного хранилища.

    Чтение не берёт блокировку: изменения состояния не содержат await,
    поэтому читатель всегда видит результат последней завершённой записи.
    """

    def __init__(
        self,
        roles: RoleTable,
        sink: EventSink | None = None,
        state: LedgerState | None = None,
    ) -> None:
        """
        Args:
            roles: Владелец и администратор водителей
            sink: Журнал уведомлений (по умолчанию в памяти)
            state: Начальное состояние (по умолчанию пустое)
        """
        self._state = state if state is not None else LedgerState()
        self._sink: EventSink = sink if sink is not None else InMemoryEventSink()
        self._lock = asyncio.Lock()

        self._guard = AccessGuard(roles)
        self._zones = ZoneRateTable(self._state, self._guard)
        self._drivers = DriverRegistry(self._state, self._guard, self._zones)
        self._customers = CustomerRegistry(self._state, self._guard)
        self._settlement = OrderSettlement(self._drivers, self._customers)

    @property
    def sink(self) -> EventSink:
        return self._sink

    @property
    def roles(self) -> RoleTable:
        return self._guard.roles

    def snapshot(self) -> LedgerState:
        """Копия текущего состояния для внешнего сохранения."""
        return self._state.snapshot()

    async def _apply(
        self,
        operation: str,
        caller: str,
        action: Callable[[], list[DomainEvent]],
    ) -> list[DomainEvent]:
        """
        Выполняет операцию под блокировкой и записывает её события.

        Если журнал не принял событие, хранилища возвращаются к состоянию
        до операции, а ошибка журнала пробрасывается вызывающему.
        """
        async with self._lock:
            saved = self._state.snapshot()
            try:
                events = action()
            except LedgerError as e:
                await log_warning(
                    f"Операция {operation} отклонена: {e}",
                    extra={"operation": operation, "caller": caller, "code": e.code.value},
                )
                raise

            try:
                for event in events:
                    await self._sink.record(event)
            except Exception as e:
                self._state.restore(saved)
                await log_error(
                    f"Журнал не принял события операции {operation}, изменения отменены: {e}",
                    extra={"operation": operation, "caller": caller},
                    exc_info=True,
                )
                raise

            await log_info(
                f"Операция {operation} выполнена",
                extra={"operation": operation, "caller": caller, "events": [e.event_type for e in events]},
            )
            return events

    # =========================================================================
    # ТАРИФЫ ЗОН
    # =========================================================================

    async def set_zone_rate(self, caller: str, zone_id: int, rate: int) -> None:
        await self._apply(
            "set_zone_rate",
            caller,
            lambda: self._zones.set_zone_rate(caller, zone_id, rate),
        )

    def get_rate(self, zone_id: int) -> int:
        return self._zones.get_rate(zone_id)

    # =========================================================================
    # ВОДИТЕЛИ
    # =========================================================================

    async def register_driver(self, caller: str, driver_id: str, external_id: str, zone_id: int) -> None:
        await self._apply(
            "register_driver",
            caller,
            lambda: self._drivers.register_driver(caller, driver_id, external_id, zone_id),
        )

    async def update_driver_status(self, caller: str, driver_id: str, is_active: bool) -> None:
        await self._apply(
            "update_driver_status",
            caller,
            lambda: self._drivers.update_driver_status(caller, driver_id, is_active),
        )

    async def de_register_driver(self, caller: str, driver_id: str) -> None:
        await self._apply(
            "de_register_driver",
            caller,
            lambda: self._drivers.de_register_driver(caller, driver_id),
        )

    async def update_driver_zone(self, caller: str, driver_id: str, zone_id: int) -> None:
        await self._apply(
            "update_driver_zone",
            caller,
            lambda: self._drivers.update_driver_zone(caller, driver_id, zone_id),
        )

    async def set_driver_bonus(self, caller: str, driver_id: str, bonus: int) -> None:
        await self._apply(
            "set_driver_bonus",
            caller,
            lambda: self._drivers.set_driver_bonus(caller, driver_id, bonus),
        )

    def get_driver(self, driver_id: str) -> DriverRecord | None:
        """Копия записи водителя или None."""
        record = self._drivers.get(driver_id)
        return record.model_copy() if record is not None else None

    def is_driver_registered(self, driver_id: str) -> bool:
        return self._drivers.is_registered(driver_id)

    # =========================================================================
    # КЛИЕНТЫ
    # =========================================================================

    async def register_customer(self, caller: str, customer_id: str, external_id: str) -> None:
        await self._apply(
            "register_customer",
            caller,
            lambda: self._customers.register_customer(caller, customer_id, external_id),
        )

    def get_customer(self, customer_id: str) -> CustomerRecord | None:
        record = self._customers.get(customer_id)
        return record.model_copy() if record is not None else None

    def is_customer_registered(self, customer_id: str) -> bool:
        return self._customers.is_registered(customer_id)

    # =========================================================================
    # РАСЧЁТЫ
    # =========================================================================

    async def confirm_order_and_rate(
        self,
        caller: str,
        customer_id: str,
        driver_id: str,
        rating: int,
        tip: int,
    ) -> Settlement:
        """
        Подтверждает заказ и оценивает водителя.

        Returns:
            Разбивка выплаты (standard_payout + bonus + tip) и новый средний рейтинг
        """
        results: list[Settlement] = []

        def action() -> list[DomainEvent]:
            settlement = self._settlement.confirm_order_and_rate(caller, customer_id, driver_id, rating, tip)
            results.append(settlement)
            return settlement.events

        await self._apply("confirm_order_and_rate", caller, action)
        return results[0]

    def get_average_rating(self, driver_id: str) -> int:
        """Средняя оценка x100 (450 означает 4.50)."""
        return self._settlement.get_average_rating(driver_id)
