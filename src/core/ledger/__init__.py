# src/core/ledger/__init__.py
"""
Реестр целиком: состояние и сервис-фасад.
"""

from src.core.ledger.state import LedgerState
from src.core.ledger.service import LedgerService

__all__ = [
    "LedgerState",
    "LedgerService",
]
