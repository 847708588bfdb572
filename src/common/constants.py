# src/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class Role(str, Enum):
    """Требуемая роль для вызова операции."""
    OWNER = "owner"
    DRIVER_ADMIN = "driver_admin"
    OWNER_OR_DRIVER_ADMIN = "owner_or_driver_admin"


class EventSinkKind(str, Enum):
    """Куда пишутся доменные уведомления."""
    MEMORY = "memory"
    RABBITMQ = "rabbitmq"


# Границы оценки водителя (включительно)
MIN_RATING = 1
MAX_RATING = 5

# Средний рейтинг хранится с двумя неявными знаками после запятой
RATING_SCALE = 100
