"""
Доменная модель контекста номерного фонда.

Содержит номер отеля и каталог номеров, который хранит
номера в порядке добавления и управляет флагом занятости.
"""

from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from hotel_reservations.shared_kernel import (
    DuplicateRoomError,
    NotFoundError,
    RoomType,
)


class Room(BaseModel):
    """Номер в отеле."""

    number: int = Field(..., gt=0)  # Номер комнаты (например, 101)
    type: RoomType
    occupied: bool = False

    def mark_as_occupied(self) -> None:
        """Помечает номер как занятый."""
        self.occupied = True

    def mark_as_free(self) -> None:
        """Помечает номер как свободный."""
        self.occupied = False


class RoomCatalog:
    """Каталог номеров отеля."""

    def __init__(self, rooms: Optional[Iterable[Room]] = None):
        self._rooms: Dict[int, Room] = {}
        for room in rooms or ():
            self.add_room(room)

    def add_room(self, room: Room) -> Room:
        """Регистрирует номер в каталоге."""
        if room.number in self._rooms:
            raise DuplicateRoomError(f"Номер {room.number} уже есть в каталоге")
        self._rooms[room.number] = room
        return room

    def get(self, number: int) -> Room:
        if number not in self._rooms:
            raise NotFoundError(f"Номер {number} не найден")
        return self._rooms[number]

    def rooms(self) -> List[Room]:
        return list(self._rooms.values())

    def rooms_of_type(self, room_type: RoomType) -> List[Room]:
        """Возвращает номера указанного типа в порядке добавления."""
        return [room for room in self._rooms.values() if room.type == room_type]

    def find_available_room_of_type(self, room_type: RoomType) -> Optional[Room]:
        """Возвращает первый свободный номер указанного типа."""
        for room in self.rooms_of_type(room_type):
            if not room.occupied:
                return room
        return None

    def mark_occupied(self, room: Room) -> None:
        self.get(room.number).mark_as_occupied()

    def mark_free(self, room: Room) -> None:
        self.get(room.number).mark_as_free()

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, number: object) -> bool:
        return number in self._rooms
