# src/core/customers/service.py
"""
Реестр клиентов.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.common.constants import Role
from src.core.access import AccessGuard
from src.core.customers.models import CustomerRecord
from src.core.errors import AlreadyRegistered, InvalidArgument, NotRegistered, require_account
from src.shared.events import CustomerRegistered, DomainEvent

if TYPE_CHECKING:
    from src.core.ledger.state import LedgerState


class CustomerRegistry:
    """Регистрирует клиентов. Регистрировать может владелец или администратор водителей."""

    def __init__(self, state: LedgerState, guard: AccessGuard) -> None:
        self._state = state
        self._guard = guard

    def get(self, customer_id: str) -> CustomerRecord | None:
        return self._state.customers.get(customer_id)

    def require(self, customer_id: str) -> CustomerRecord:
        """
        Raises:
            NotRegistered: клиента нет в реестре
        """
        record = self._state.customers.get(customer_id)
        if record is None:
            raise NotRegistered(f"Клиент {customer_id!r} не зарегистрирован")
        return record

    def is_registered(self, customer_id: str) -> bool:
        return customer_id in self._state.customers

    def register_customer(self, caller: str, customer_id: str, external_id: str) -> list[DomainEvent]:
        """
        Создаёт запись клиента.

        Raises:
            Unauthorized: вызывающий не owner и не driver-admin
            AlreadyRegistered: клиент уже есть
        """
        self._guard.require(caller, Role.OWNER_OR_DRIVER_ADMIN)
        require_account(customer_id, "customer_id")
        if not isinstance(external_id, str):
            raise InvalidArgument("external_id должен быть строкой")
        if customer_id in self._state.customers:
            raise AlreadyRegistered(f"Клиент {customer_id!r} уже зарегистрирован")

        self._state.customers[customer_id] = CustomerRecord(
            customer_id=customer_id,
            customer_external_id=external_id,
        )
        return [CustomerRegistered(customer_id=customer_id, customer_external_id=external_id)]
