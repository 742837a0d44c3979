"""
Модуль контекста номерного фонда (Inventory Context).

Отвечает за регистрацию номеров отеля и их флаг занятости.
"""

from .domain import Room, RoomCatalog

__all__ = [
    "Room",
    "RoomCatalog",
]
