# src/core/customers/__init__.py
"""
Домен клиентов.
"""

from src.core.customers.models import CustomerRecord
from src.core.customers.service import CustomerRegistry

__all__ = [
    "CustomerRecord",
    "CustomerRegistry",
]
