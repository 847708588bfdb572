# src/core/zones/__init__.py
"""
Домен зон: тарифы стандартной выплаты.
"""

from src.core.zones.service import ZoneRateTable

__all__ = ["ZoneRateTable"]
