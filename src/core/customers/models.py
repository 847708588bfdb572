# src/core/customers/models.py
"""
Модели данных клиентов.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CustomerRecord(BaseModel):
    """Запись клиента. Удаления клиентов нет."""

    customer_id: str = Field(..., min_length=1, description="Идентификатор аккаунта")
    customer_external_id: str = Field(..., description="Внешний идентификатор для сверки")
    is_registered: bool = Field(True, frozen=True, description="Присутствует в реестре")
