# src/shared/__init__.py
"""
Общий код реестра и его подписчиков.

Модули:
- events: схемы доменных событий
"""

__all__: list[str] = []
