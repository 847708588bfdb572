# tests/core/test_customers_service.py
"""
Тесты для реестра клиентов.
"""

from __future__ import annotations

import pytest

from src.core.customers import CustomerRegistry
from src.core.errors import AlreadyRegistered, NotRegistered, Unauthorized
from src.core.ledger import LedgerState
from src.shared.events import CustomerRegistered


class TestRegisterCustomer:
    """Тесты для register_customer."""

    @pytest.mark.parametrize("caller", ["owner", "driver-admin"])
    def test_owner_or_admin_can_register(self, customers: CustomerRegistry, caller: str) -> None:
        """Регистрировать клиентов может и владелец, и администратор."""
        events = customers.register_customer(caller, "C", "ext-C")

        record = customers.get("C")
        assert record is not None
        assert record.is_registered is True
        assert record.customer_external_id == "ext-C"
        assert isinstance(events[0], CustomerRegistered)
        assert events[0].customer_id == "C"

    def test_stranger_rejected(self, customers: CustomerRegistry, state: LedgerState) -> None:
        with pytest.raises(Unauthorized):
            customers.register_customer("stranger", "C", "ext-C")

        assert state.customers == {}

    def test_duplicate_rejected(self, customers: CustomerRegistry) -> None:
        customers.register_customer("owner", "C", "ext-C")

        with pytest.raises(AlreadyRegistered):
            customers.register_customer("owner", "C", "other")

        assert customers.get("C").customer_external_id == "ext-C"

    def test_require_unknown(self, customers: CustomerRegistry) -> None:
        with pytest.raises(NotRegistered):
            customers.require("ghost")

    def test_independent_of_driver_keyspace(
        self,
        customers: CustomerRegistry,
        state: LedgerState,
    ) -> None:
        """Клиентская запись не создаёт водительскую."""
        customers.register_customer("owner", "same-account", "ext")

        assert "same-account" in state.customers
        assert "same-account" not in state.drivers
