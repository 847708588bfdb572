# src/core/errors.py
"""
Ошибки реестра.

Каждая отклонённая операция поднимает подкласс LedgerError с кодом.
Отклонение не меняет состояние: все проверки выполняются до мутации.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Коды отказа, видимые вызывающей стороне."""
    UNAUTHORIZED = "UNAUTHORIZED"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    NOT_REGISTERED = "NOT_REGISTERED"
    INVALID_ZONE = "INVALID_ZONE"
    INVALID_RATE = "INVALID_RATE"
    DRIVER_INACTIVE = "DRIVER_INACTIVE"
    MUST_BE_INACTIVE = "MUST_BE_INACTIVE"
    INVALID_RATING = "INVALID_RATING"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


class LedgerError(Exception):
    """Базовая ошибка реестра."""

    code: ErrorCode = ErrorCode.INVALID_ARGUMENT

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class Unauthorized(LedgerError):
    """Вызывающий не обладает требуемой ролью."""
    code = ErrorCode.UNAUTHORIZED


class AlreadyRegistered(LedgerError):
    """Запись с таким идентификатором уже существует."""
    code = ErrorCode.ALREADY_REGISTERED


class NotRegistered(LedgerError):
    """Запись не найдена."""
    code = ErrorCode.NOT_REGISTERED


class InvalidZone(LedgerError):
    """Для зоны не задан тариф."""
    code = ErrorCode.INVALID_ZONE


class InvalidRate(LedgerError):
    """Попытка установить нулевой тариф."""
    code = ErrorCode.INVALID_RATE


class DriverInactive(LedgerError):
    """Водитель отключён от обслуживания."""
    code = ErrorCode.DRIVER_INACTIVE


class MustBeInactive(LedgerError):
    """Удалить можно только неактивного водителя."""
    code = ErrorCode.MUST_BE_INACTIVE


class InvalidRating(LedgerError):
    """Оценка вне диапазона [1, 5]."""
    code = ErrorCode.INVALID_RATING


class InvalidArgument(LedgerError):
    """Некорректный аргумент: пустой идентификатор, отрицательное число, не int."""
    code = ErrorCode.INVALID_ARGUMENT


# =============================================================================
# ПРОВЕРКИ АРГУМЕНТОВ
# =============================================================================

def require_account(value: object, name: str) -> str:
    """Идентификатор аккаунта — непустая строка."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{name} должен быть непустой строкой")
    return value


def require_unsigned(value: object, name: str) -> int:
    """Беззнаковое целое. bool отклоняется, хотя это подкласс int."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgument(f"{name} должен быть целым числом >= 0, получено {value!r}")
    return value
