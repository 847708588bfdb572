# src/core/ledger/dependencies.py
"""
Dependency Injection для сервиса реестра.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.ledger.service import LedgerService
    from src.infra.event_sink import EventSink


_sink: "EventSink | None" = None
_ledger_service: "LedgerService | None" = None


async def init_dependencies(sink: "EventSink") -> None:
    """Инициализировать зависимости при старте приложения."""
    global _sink, _ledger_service
    _sink = sink
    _ledger_service = None


def get_sink() -> "EventSink":
    """Получить журнал уведомлений."""
    if _sink is None:
        raise RuntimeError("Журнал уведомлений не инициализирован. Вызовите init_dependencies()")
    return _sink


def get_ledger_service() -> "LedgerService":
    """Получить сервис реестра. Роли берутся из settings.access."""
    global _ledger_service

    if _ledger_service is None:
        from src.config import settings
        from src.core.access import RoleTable
        from src.core.ledger.service import LedgerService

        _ledger_service = LedgerService(
            roles=RoleTable(
                owner=settings.access.OWNER_ID,
                driver_admin=settings.access.DRIVER_ADMIN_ID,
            ),
            sink=get_sink(),
        )

    return _ledger_service


async def cleanup_dependencies() -> None:
    """Очистить ресурсы при остановке приложения."""
    global _sink, _ledger_service
    _sink = None
    _ledger_service = None
