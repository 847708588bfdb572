# src/core/access/__init__.py
"""
Авторизация операций по ролям.
"""

from src.core.access.guard import AccessGuard, RoleTable

__all__ = ["AccessGuard", "RoleTable"]
