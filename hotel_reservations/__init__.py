"""
Система бронирования номеров отеля.

Номерной фонд, тарифы, журнал бронирований с проверкой
доступности на даты и расчет стоимости проживания.
"""

from .bootstrap import bootstrap_app, configure_logging

__all__ = [
    "bootstrap_app",
    "configure_logging",
]
