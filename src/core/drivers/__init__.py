# src/core/drivers/__init__.py
"""
Домен водителей.
Модель записи и реестр.
"""

from src.core.drivers.models import DriverRecord
from src.core.drivers.service import DriverRegistry

__all__ = [
    "DriverRecord",
    "DriverRegistry",
]
