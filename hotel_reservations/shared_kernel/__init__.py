"""
Общее ядро (Shared Kernel) системы бронирования отеля.

Содержит общие типы данных, исключения и утилиты,
используемые в различных ограниченных контекстах.
"""

from .domain import (
    DateRange,
    DomainEvent,
    # Исключения
    DomainException,
    DuplicateRoomError,
    # Базовые типы
    EntityId,
    InvalidDateRangeError,
    # Основные классы
    Money,
    NotFoundError,
    OccupancyMode,
    RoomNotAvailableError,
    # Перечисления
    RoomType,
    generate_id,
    # Утилиты
    now,
)

__all__ = [
    # Базовые типы
    "EntityId",
    "generate_id",
    # Основные классы
    "Money",
    "DateRange",
    "DomainEvent",
    # Перечисления
    "RoomType",
    "OccupancyMode",
    # Исключения
    "DomainException",
    "RoomNotAvailableError",
    "InvalidDateRangeError",
    "NotFoundError",
    "DuplicateRoomError",
    # Утилиты
    "now",
]
