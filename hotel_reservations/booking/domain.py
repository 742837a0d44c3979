"""
Доменная модель контекста бронирования.

Содержит гостя, бронирование с его доменными событиями и журнал
бронирований (BookingLedger), который проверяет доступность номеров,
выделяет номер под бронирование и освобождает его при отмене и выезде.
"""

import threading
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, PrivateAttr

from hotel_reservations.inventory import Room, RoomCatalog
from hotel_reservations.shared_kernel import (
    DateRange,
    DomainEvent,
    EntityId,
    NotFoundError,
    OccupancyMode,
    RoomNotAvailableError,
    RoomType,
    generate_id,
    now,
)

from .interfaces import IReservationRepository


class Guest(BaseModel):
    """Гость отеля."""

    id: EntityId = Field(default_factory=generate_id)
    name: str = Field(..., min_length=1)
    phone: str = ""

    def matches_name(self, name: str) -> bool:
        """Сравнивает имя без учета регистра."""
        return self.name.strip().casefold() == name.strip().casefold()


class ReservationCreated(DomainEvent):
    """Событие создания бронирования."""

    reservation_id: EntityId
    guest_id: EntityId
    room_number: int
    period: DateRange


class ReservationModified(DomainEvent):
    """Событие изменения дат бронирования."""

    reservation_id: EntityId
    previous_room_number: int
    room_number: int
    previous_period: DateRange
    period: DateRange


class ReservationCancelled(DomainEvent):
    """Событие отмены бронирования."""

    reservation_id: EntityId
    room_number: int


class GuestCheckedOut(DomainEvent):
    """Событие выезда гостя."""

    reservation_id: EntityId
    guest_id: EntityId
    room_number: int


class Reservation(BaseModel):
    """Бронирование одного номера одним гостем."""

    id: EntityId = Field(default_factory=generate_id)
    guest: Guest
    room_number: int
    room_type: RoomType
    period: DateRange
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
    version: int = 0
    _domain_events: List[DomainEvent] = PrivateAttr(default_factory=list)

    @property
    def domain_events(self) -> List[DomainEvent]:
        """Возвращает список доменных событий."""
        return self._domain_events

    def clear_events(self) -> None:
        """Очищает список доменных событий."""
        self._domain_events = []

    def pull_domain_events(self) -> List[DomainEvent]:
        events = list(self._domain_events)
        self.clear_events()
        return events

    @classmethod
    def create(cls, guest: Guest, room: Room, period: DateRange) -> "Reservation":
        """Создает новое бронирование."""
        reservation = cls(
            guest=guest,
            room_number=room.number,
            room_type=room.type,
            period=period,
        )
        reservation._domain_events.append(
            ReservationCreated(
                reservation_id=reservation.id,
                guest_id=guest.id,
                room_number=room.number,
                period=period,
            )
        )
        return reservation

    def reschedule(self, room: Room, period: DateRange) -> None:
        """Переносит бронирование на новые даты и номер того же типа."""
        event = ReservationModified(
            reservation_id=self.id,
            previous_room_number=self.room_number,
            room_number=room.number,
            previous_period=self.period,
            period=period,
        )
        self.room_number = room.number
        self.period = period
        self.updated_at = now()
        self.version += 1
        self._domain_events.append(event)

    def cancel(self) -> None:
        self._domain_events.append(
            ReservationCancelled(reservation_id=self.id, room_number=self.room_number)
        )

    def check_out(self) -> None:
        self._domain_events.append(
            GuestCheckedOut(
                reservation_id=self.id,
                guest_id=self.guest.id,
                room_number=self.room_number,
            )
        )


class BookingLedger:
    """
    Журнал активных бронирований.

    Все проверки доступности и изменения каталога и журнала
    выполняются под одной блокировкой.
    """

    def __init__(
        self,
        catalog: RoomCatalog,
        repository: IReservationRepository,
        mode: OccupancyMode = OccupancyMode.CALENDAR,
    ):
        self._catalog = catalog
        self._repository = repository
        self._mode = OccupancyMode(mode)
        self._lock = threading.RLock()

    @property
    def mode(self) -> OccupancyMode:
        return self._mode

    @property
    def lock(self):
        """Блокировка журнала; единица работы разделяет ее с журналом."""
        return self._lock

    def add_room(self, room: Room) -> Room:
        """Регистрирует номер в каталоге."""
        with self._lock:
            return self._catalog.add_room(room)

    def is_available(
        self, room_type: RoomType, check_in: date, check_out: date
    ) -> bool:
        """Проверяет, есть ли свободный номер указанного типа на даты."""
        period = DateRange(check_in=check_in, check_out=check_out)
        with self._lock:
            return self._find_room(room_type, period) is not None

    def reserve(
        self, guest: Guest, room_type: RoomType, check_in: date, check_out: date
    ) -> Reservation:
        """Выделяет первый подходящий номер и создает бронирование."""
        period = DateRange(check_in=check_in, check_out=check_out)
        with self._lock:
            room = self._find_room(room_type, period)
            if room is None:
                raise RoomNotAvailableError(
                    f"Нет свободных номеров типа {room_type.value} "
                    f"с {period.check_in} по {period.check_out}"
                )

            reservation = Reservation.create(guest=guest, room=room, period=period)
            self._repository.add(reservation)
            self._catalog.mark_occupied(room)
            return reservation

    def modify(
        self, reservation_id: EntityId, new_check_in: date, new_check_out: date
    ) -> Reservation:
        """
        Переносит бронирование на новые даты.

        Номер под новые даты подбирается до любых изменений. Если номера
        нет, бронирование и занятость номеров остаются прежними.
        """
        period = DateRange(check_in=new_check_in, check_out=new_check_out)
        with self._lock:
            reservation = self._repository.get_by_id(reservation_id)
            room = self._find_room(
                reservation.room_type, period, exclude_reservation_id=reservation.id
            )
            if room is None:
                raise RoomNotAvailableError(
                    f"Нет свободных номеров типа {reservation.room_type.value} "
                    f"с {period.check_in} по {period.check_out}"
                )

            previous_room = self._catalog.get(reservation.room_number)
            reservation.reschedule(room, period)
            self._repository.update(reservation)
            self._catalog.mark_occupied(room)
            self._refresh_occupancy(previous_room)
            return reservation

    def cancel(self, reservation_id: EntityId) -> Reservation:
        """Отменяет бронирование и освобождает номер."""
        with self._lock:
            reservation = self._release(reservation_id)
            reservation.cancel()
            return reservation

    def checkout_guest(self, guest_id: EntityId) -> Reservation:
        """Выселяет гостя по первому его бронированию в журнале."""
        with self._lock:
            matches = self._repository.find_by_guest_id(guest_id)
            if not matches:
                raise NotFoundError(f"Бронирования гостя {guest_id} не найдены")
            return self._check_out(matches[0])

    def checkout_guest_by_name(self, name: str) -> Reservation:
        """
        Выселяет гостя по имени.

        Затрагивает только первое подходящее бронирование, даже если
        у гостей с таким именем их несколько.
        """
        with self._lock:
            matches = self._repository.find_by_guest_name(name)
            if not matches:
                raise NotFoundError(f"Бронирования гостя '{name}' не найдены")
            return self._check_out(matches[0])

    def get(self, reservation_id: EntityId) -> Reservation:
        with self._lock:
            return self._repository.get_by_id(reservation_id)

    def find_by_guest_name(self, name: str) -> List[Reservation]:
        with self._lock:
            return self._repository.find_by_guest_name(name)

    def list_reservations(self) -> List[Reservation]:
        """Возвращает активные бронирования в порядке создания."""
        with self._lock:
            return self._repository.list_all()

    def _check_out(self, reservation: Reservation) -> Reservation:
        self._release(reservation.id)
        reservation.check_out()
        return reservation

    def _release(self, reservation_id: EntityId) -> Reservation:
        reservation = self._repository.remove(reservation_id)
        self._refresh_occupancy(self._catalog.get(reservation.room_number))
        return reservation

    def _refresh_occupancy(self, room: Room) -> None:
        # Флаг занятости = на номер ссылается хотя бы одно активное бронирование
        if self._repository.find_by_room(room.number):
            self._catalog.mark_occupied(room)
        else:
            self._catalog.mark_free(room)

    def _find_room(
        self,
        room_type: RoomType,
        period: DateRange,
        exclude_reservation_id: Optional[EntityId] = None,
    ) -> Optional[Room]:
        if self._mode == OccupancyMode.BINARY and exclude_reservation_id is None:
            return self._catalog.find_available_room_of_type(room_type)

        for room in self._catalog.rooms_of_type(room_type):
            if self._is_room_free(room, period, exclude_reservation_id):
                return room
        return None

    def _is_room_free(
        self,
        room: Room,
        period: DateRange,
        exclude_reservation_id: Optional[EntityId],
    ) -> bool:
        bookings = [
            reservation
            for reservation in self._repository.find_by_room(room.number)
            if reservation.id != exclude_reservation_id
        ]
        if self._mode == OccupancyMode.BINARY:
            return not bookings
        return not any(booking.period.overlaps(period) for booking in bookings)
