#!/usr/bin/env python3
# main.py
"""
Точка входа процесса-хоста реестра.
Поднимает логирование, журнал уведомлений и сервис реестра,
затем ждёт сигнала остановки.
"""

from __future__ import annotations

import asyncio
import signal

from src.config import settings
from src.common.constants import EventSinkKind
from src.common.logger import setup_logging, log_info, log_error
from src.core.ledger.dependencies import init_dependencies, get_ledger_service, cleanup_dependencies
from src.infra.event_bus import init_event_bus, close_event_bus
from src.infra.event_sink import EventBusSink, EventSink, InMemoryEventSink


def setup_signal_handlers(shutdown_event: asyncio.Event) -> None:
    """Настраивает обработчики SIGINT и SIGTERM для graceful shutdown."""
    def signal_handler(sig: int) -> None:
        if not shutdown_event.is_set():
            print(f"\nПолучен сигнал остановки (sig={sig}), завершаем работу...")
            shutdown_event.set()

    try:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))
    except NotImplementedError:
        # Windows не поддерживает add_signal_handler
        signal.signal(signal.SIGINT, lambda s, f: signal_handler(s))
        signal.signal(signal.SIGTERM, lambda s, f: signal_handler(s))


async def build_sink() -> EventSink:
    """Создаёт журнал уведомлений по настройке EVENT_SINK."""
    if settings.ledger.EVENT_SINK == EventSinkKind.RABBITMQ:
        event_bus = await init_event_bus()
        return EventBusSink(event_bus)
    return InMemoryEventSink()


async def main() -> None:
    setup_logging()
    shutdown_event = asyncio.Event()
    setup_signal_handlers(shutdown_event)

    await log_info(
        f"Запуск {settings.system.PROJECT_NAME} v{settings.system.VERSION} "
        f"(sink={settings.ledger.EVENT_SINK.value})"
    )

    try:
        await init_dependencies(await build_sink())
        ledger = get_ledger_service()
        await log_info(
            f"Реестр готов: owner={ledger.roles.owner}, driver_admin={ledger.roles.driver_admin}"
        )
        await shutdown_event.wait()
    except Exception as e:
        await log_error(f"Критическая ошибка при запуске реестра: {e}", exc_info=True)
        raise
    finally:
        await cleanup_dependencies()
        await close_event_bus()
        await log_info("Реестр остановлен")


if __name__ == "__main__":
    asyncio.run(main())
