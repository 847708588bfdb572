# src/core/__init__.py
"""
Доменный слой (Core Domain).
Правила переходов состояния реестра, независимые от транспорта и хранения.
"""
