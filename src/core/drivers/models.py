# src/core/drivers/models.py
"""
Модели данных водителей.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.common.constants import RATING_SCALE


class DriverRecord(BaseModel):
    """
    Запись водителя.

    Существует в реестре целиком или не существует вовсе, поэтому
    is_registered у хранимой записи всегда True.
    """

    driver_id: str = Field(..., min_length=1, description="Идентификатор аккаунта")
    driver_external_id: str = Field(..., description="Внешний идентификатор для сверки")
    zone_id: int = Field(..., ge=0, description="Текущая зона")

    is_registered: bool = Field(True, frozen=True, description="Присутствует в реестре")
    is_active: bool = Field(True, description="Может принимать заказы")

    total_rating_points: int = Field(0, ge=0, description="Сумма всех оценок")
    rating_count: int = Field(0, ge=0, description="Количество оценок")

    standard_payout: int = Field(..., ge=0, description="Снимок тарифа зоны")
    bonus: int = Field(0, ge=0, description="Бонус от администратора")

    @property
    def average_rating(self) -> int:
        """Средняя оценка x100 с отбрасыванием дробной части (4.567 -> 456)."""
        if self.rating_count == 0:
            return 0
        return (self.total_rating_points * RATING_SCALE) // self.rating_count
