# src/core/settlement/__init__.py
"""
Домен расчётов по заказам.
"""

from src.core.settlement.service import OrderSettlement, Settlement

__all__ = ["OrderSettlement", "Settlement"]
