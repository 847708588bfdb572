# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

# Переменные окружения до импорта модулей, читающих настройки
os.environ.setdefault("LEDGER_OWNER_ID", "owner")
os.environ.setdefault("LEDGER_DRIVER_ADMIN_ID", "driver-admin")
os.environ.setdefault("EVENT_SINK", "memory")

from src.core.access import AccessGuard, RoleTable
from src.core.customers import CustomerRegistry
from src.core.drivers import DriverRegistry
from src.core.ledger import LedgerService, LedgerState
from src.core.settlement import OrderSettlement
from src.core.zones import ZoneRateTable
from src.infra.event_sink import InMemoryEventSink


OWNER = "owner"
DRIVER_ADMIN = "driver-admin"
STRANGER = "stranger"


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок config.json для тестов."""
    return {
        "PROJECT_NAME": "ledger_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
        "LOG_FORMAT": "json",
        "LOG_TO_FILE": False,
        "OWNER_ID": "cfg-owner",
        "DRIVER_ADMIN_ID": "cfg-admin",
        "EVENT_SINK": "memory",
        "RABBITMQ_HOST": "rabbit",
        "RABBITMQ_PORT": 5673,
        "RABBITMQ_USER": "user",
        "RABBITMQ_PASSWORD": "secret",
        "RABBITMQ_VHOST": "/ledger",
        "RABBITMQ_EXCHANGE": "ledger.test",
        "RABBITMQ_PREFETCH_COUNT": 5,
    }


# =============================================================================
# ФИКСТУРЫ ДОМЕНА
# =============================================================================

@pytest.fixture
def roles() -> RoleTable:
    """Разные идентификаторы владельца и администратора."""
    return RoleTable(owner=OWNER, driver_admin=DRIVER_ADMIN)


@pytest.fixture
def guard(roles: RoleTable) -> AccessGuard:
    return AccessGuard(roles)


@pytest.fixture
def state() -> LedgerState:
    return LedgerState()


@pytest.fixture
def zones(state: LedgerState, guard: AccessGuard) -> ZoneRateTable:
    return ZoneRateTable(state, guard)


@pytest.fixture
def drivers(state: LedgerState, guard: AccessGuard, zones: ZoneRateTable) -> DriverRegistry:
    return DriverRegistry(state, guard, zones)


@pytest.fixture
def customers(state: LedgerState, guard: AccessGuard) -> CustomerRegistry:
    return CustomerRegistry(state, guard)


@pytest.fixture
def settlement(drivers: DriverRegistry, customers: CustomerRegistry) -> OrderSettlement:
    return OrderSettlement(drivers, customers)


# =============================================================================
# ФИКСТУРЫ СЕРВИСА
# =============================================================================

@pytest.fixture
def sink() -> InMemoryEventSink:
    return InMemoryEventSink()


@pytest.fixture
def ledger(roles: RoleTable, sink: InMemoryEventSink) -> LedgerService:
    """Пустой реестр с журналом в памяти."""
    return LedgerService(roles=roles, sink=sink)


@pytest_asyncio.fixture
async def seeded_ledger(ledger: LedgerService) -> LedgerService:
    """Зона 1 с тарифом 100, активный водитель D и клиент C."""
    await ledger.set_zone_rate(DRIVER_ADMIN, 1, 100)
    await ledger.register_driver(DRIVER_ADMIN, "D", "ext-D", 1)
    await ledger.register_customer(OWNER, "C", "ext-C")
    return ledger


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_event_bus() -> AsyncMock:
    """Мок шины событий."""
    event_bus = AsyncMock()
    event_bus.publish = AsyncMock(return_value=True)
    event_bus.subscribe = AsyncMock(return_value=None)
    event_bus.is_connected = True
    return event_bus
