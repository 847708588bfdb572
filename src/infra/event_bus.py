# src/infra/event_bus.py
"""
Шина событий на базе RabbitMQ.
Публикует доменные события реестра в topic exchange; внешние
наблюдатели подписываются по типу события.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Awaitable, Callable

import aio_pika
from aio_pika import ExchangeType, Message
from aio_pika.abc import (
    AbstractChannel,
    AbstractConnection,
    AbstractExchange,
    AbstractIncomingMessage,
    AbstractQueue,
)

from src.common.constants import TypeMsg
from src.common.logger import log_error, log_info
from src.shared.events import DomainEvent, parse_event


LOGGER_NAME = "event_bus"

# Обработчик полученного события
EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventBus:
    """
    Шина событий на базе RabbitMQ.

    Реализует:
    - Публикацию событий в exchange (routing_key = event_type)
    - Подписку на события через именованные очереди
    """

    def __init__(self, exchange_name: str = "ledger.events") -> None:
        self._connection: AbstractConnection | None = None
        self._channel: AbstractChannel | None = None
        self._exchange: AbstractExchange | None = None
        self._exchange_name = exchange_name
        self._handlers: dict[str, list[EventHandler]] = {}
        self._queues: dict[str, AbstractQueue] = {}

    @property
    def is_connected(self) -> bool:
        """Проверяет, активно ли соединение."""
        return self._connection is not None and not self._connection.is_closed

    async def connect(self, url: str, prefetch_count: int = 10) -> None:
        """
        Подключается к RabbitMQ и объявляет exchange.

        Args:
            url: URL RabbitMQ
            prefetch_count: Количество сообщений для prefetch
        """
        if self.is_connected:
            return

        await log_info("Подключение к RabbitMQ...", logger_name=LOGGER_NAME)

        self._connection = await aio_pika.connect_robust(url)
        self._channel = await self._connection.channel()
        await self._channel.set_qos(prefetch_count=prefetch_count)
        self._exchange = await self._channel.declare_exchange(
            self._exchange_name,
            ExchangeType.TOPIC,
            durable=True,
        )

        await log_info(
            f"Подключение к RabbitMQ установлено, exchange={self._exchange_name}",
            logger_name=LOGGER_NAME,
        )

    async def disconnect(self) -> None:
        """Закрывает соединение с RabbitMQ."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
            self._channel = None
            self._exchange = None
            self._queues = {}
            await log_info("Соединение с RabbitMQ закрыто", logger_name=LOGGER_NAME)

    async def publish(self, event: DomainEvent) -> bool:
        """
        Публикует событие в exchange.

        Ошибки публикации логируются и не пробрасываются: к этому моменту
        состояние реестра уже изменено.

        Returns:
            True если сообщение отправлено
        """
        if not self.is_connected or self._exchange is None:
            await log_error(
                f"Не удалось опубликовать {event.event_type}: нет соединения с RabbitMQ",
                logger_name=LOGGER_NAME,
                extra={"event_id": event.event_id},
            )
            return False

        try:
            message = Message(
                body=event.to_json().encode(),
                content_type="application/json",
                message_id=event.event_id,
                timestamp=datetime.now(timezone.utc),
                delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
            )
            await self._exchange.publish(message, routing_key=event.event_type)
        except Exception as e:
            await log_error(
                f"Ошибка публикации события {event.event_type}: {e}",
                logger_name=LOGGER_NAME,
                extra={"event_id": event.event_id},
                exc_info=True,
            )
            return False

        await log_info(
            f"Событие опубликовано: {event.event_type}",
            type_msg=TypeMsg.DEBUG,
            logger_name=LOGGER_NAME,
        )
        return True

    async def subscribe(
        self,
        event_type: str,
        handler: EventHandler,
        queue_name: str | None = None,
    ) -> None:
        """
        Подписывается на события определённого типа.

        Args:
            event_type: Тип события (шаблон routing_key, например driver.*)
            handler: Асинхронный обработчик события
            queue_name: Имя очереди (по умолчанию выводится из event_type)
        """
        if not self.is_connected or self._channel is None or self._exchange is None:
            await log_error("Не удалось подписаться: нет соединения с RabbitMQ", logger_name=LOGGER_NAME)
            return

        self._handlers.setdefault(event_type, []).append(handler)

        if queue_name is None:
            queue_name = f"ledger.{event_type.replace('.', '_').replace('*', 'all')}"

        if queue_name not in self._queues:
            queue = await self._channel.declare_queue(queue_name, durable=True)
            await queue.bind(self._exchange, routing_key=event_type)
            self._queues[queue_name] = queue
            await queue.consume(self._make_consumer(event_type))

        await log_info(f"Подписка на события: {event_type}", type_msg=TypeMsg.DEBUG, logger_name=LOGGER_NAME)

    def _make_consumer(self, event_type: str) -> Callable[[AbstractIncomingMessage], Awaitable[None]]:
        """Создаёт consumer, который разбирает сообщение и вызывает обработчики."""
        async def consumer(message: AbstractIncomingMessage) -> None:
            async with message.process():
                try:
                    event = parse_event(message.body)
                except Exception as e:
                    await log_error(f"Не удалось разобрать сообщение: {e}", logger_name=LOGGER_NAME)
                    return

                for handler in self._handlers.get(event_type, []):
                    try:
                        await handler(event)
                    except Exception as e:
                        await log_error(
                            f"Ошибка в обработчике {getattr(handler, '__name__', handler)}: {e}",
                            logger_name=LOGGER_NAME,
                            exc_info=True,
                        )

        return consumer


# Глобальный экземпляр
_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Возвращает глобальный экземпляр EventBus."""
    global _event_bus
    if _event_bus is None:
        from src.config import settings
        _event_bus = EventBus(exchange_name=settings.rabbitmq.RABBITMQ_EXCHANGE)
    return _event_bus


async def init_event_bus() -> EventBus:
    """Подключает глобальную шину по настройкам из конфигурации."""
    from src.config import settings

    event_bus = get_event_bus()
    await event_bus.connect(
        url=settings.rabbitmq.url,
        prefetch_count=settings.rabbitmq.RABBITMQ_PREFETCH_COUNT,
    )
    return event_bus


async def close_event_bus() -> None:
    """Закрывает подключение глобальной шины."""
    global _event_bus
    if _event_bus is not None:
        await _event_bus.disconnect()
        _event_bus = None
