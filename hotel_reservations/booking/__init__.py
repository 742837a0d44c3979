"""
Модуль контекста бронирования (Booking Context).

Отвечает за бронирование номеров в отеле, включая:
- Проверку доступности номеров на даты
- Создание, перенос и отмену бронирований
- Выезд гостей и освобождение номеров
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]
