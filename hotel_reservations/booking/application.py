"""
Прикладной слой контекста бронирования.

Содержит фасад отеля (HotelFacade), через который внешний код
(консольное меню, API) вызывает операции бронирования.
Фасад только делегирует журналу и калькулятору, оборачивает
изменения в единицу работы и переводит доменные объекты в DTO.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from hotel_reservations.billing import BillingCalculator
from hotel_reservations.inventory import Room
from hotel_reservations.shared_kernel import EntityId, Money, RoomType

from . import interfaces as ports
from .domain import BookingLedger, Guest, Reservation
from .infrastructure import LoggingLogger

# DTO (Data Transfer Objects) для входящих данных


class AddRoomRequest(BaseModel):
    """Запрос на добавление номера."""

    number: int = Field(..., gt=0)
    type: RoomType


class BookReservationRequest(BaseModel):
    """Запрос на создание бронирования."""

    guest_name: str = Field(..., min_length=1)
    guest_phone: str = ""
    guest_id: Optional[EntityId] = None  # Повторный гость
    room_type: RoomType
    check_in: date
    check_out: date


class ModifyReservationRequest(BaseModel):
    """Запрос на перенос дат бронирования."""

    reservation_id: EntityId
    check_in: date
    check_out: date


class CancelReservationRequest(BaseModel):
    """Запрос на отмену бронирования."""

    reservation_id: EntityId


class CheckoutGuestRequest(BaseModel):
    """Запрос на выезд гостя: по идентификатору или по имени."""

    guest_id: Optional[EntityId] = None
    guest_name: Optional[str] = None

    @model_validator(mode="after")
    def exactly_one_key(self) -> "CheckoutGuestRequest":
        if (self.guest_id is None) == (self.guest_name is None):
            raise ValueError("Нужно указать либо guest_id, либо guest_name")
        return self


# DTO для исходящих данных


class RoomDTO(BaseModel):
    """DTO для представления номера."""

    number: int
    type: RoomType
    occupied: bool

    @classmethod
    def from_domain(cls, room: Room) -> "RoomDTO":
        """Создает DTO из доменной модели."""
        return cls(number=room.number, type=room.type, occupied=room.occupied)


class ReservationDTO(BaseModel):
    """DTO для представления бронирования."""

    id: EntityId
    guest_id: EntityId
    guest_name: str
    guest_phone: str
    room_number: int
    room_type: RoomType
    check_in: date
    check_out: date
    nights: int
    total: Money
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, reservation: Reservation, total: Money) -> "ReservationDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=reservation.id,
            guest_id=reservation.guest.id,
            guest_name=reservation.guest.name,
            guest_phone=reservation.guest.phone,
            room_number=reservation.room_number,
            room_type=reservation.room_type,
            check_in=reservation.period.check_in,
            check_out=reservation.period.check_out,
            nights=reservation.period.nights,
            total=total,
            created_at=reservation.created_at.isoformat(),
            updated_at=reservation.updated_at.isoformat(),
        )


# Сервисы приложения


class HotelFacade:
    """Фасад отеля: операции, доступные внешнему вызывающему коду."""

    def __init__(
        self,
        uow: ports.IBookingUnitOfWork,
        ledger: BookingLedger,
        billing: BillingCalculator,
        logger: Optional[ports.ILogger] = None,
    ):
        """Инициализирует фасад."""
        self._uow = uow
        self._ledger = ledger
        self._billing = billing
        self._logger = logger or LoggingLogger("hotel_reservations.facade")

    def add_room(self, request: AddRoomRequest) -> RoomDTO:
        """Регистрирует номер в каталоге."""
        try:
            with self._uow:
                room = self._ledger.add_room(
                    Room(number=request.number, type=request.type)
                )
            self._logger.info(f"Номер {room.number} добавлен", type=room.type.value)
            return RoomDTO.from_domain(room)

        except Exception as e:
            self._logger.error(f"Ошибка при добавлении номера: {str(e)}")
            raise

    def list_rooms(self) -> List[RoomDTO]:
        return [RoomDTO.from_domain(room) for room in self._uow.rooms.rooms()]

    def check_availability(
        self, room_type: RoomType, check_in: date, check_out: date
    ) -> bool:
        """Проверяет, есть ли свободный номер типа на даты."""
        return self._ledger.is_available(room_type, check_in, check_out)

    def quote(self, room_type: RoomType, check_in: date, check_out: date) -> Money:
        """Рассчитывает стоимость проживания без бронирования."""
        return self._billing.charge(room_type, check_in, check_out)

    def book_reservation(self, request: BookReservationRequest) -> ReservationDTO:
        """Создает новое бронирование."""
        try:
            guest_data = {"name": request.guest_name, "phone": request.guest_phone}
            if request.guest_id is not None:
                guest_data["id"] = request.guest_id
            guest = Guest(**guest_data)

            with self._uow:
                reservation = self._ledger.reserve(
                    guest=guest,
                    room_type=request.room_type,
                    check_in=request.check_in,
                    check_out=request.check_out,
                )

            self._logger.info(
                f"Бронирование {reservation.id} создано",
                guest=guest.name,
                room=reservation.room_number,
            )
            return self._to_dto(reservation)

        except Exception as e:
            self._logger.error(f"Ошибка при создании бронирования: {str(e)}")
            raise

    def modify_reservation(self, request: ModifyReservationRequest) -> ReservationDTO:
        """Переносит бронирование на новые даты."""
        try:
            with self._uow:
                reservation = self._ledger.modify(
                    request.reservation_id, request.check_in, request.check_out
                )

            self._logger.info(
                f"Бронирование {reservation.id} изменено",
                room=reservation.room_number,
            )
            return self._to_dto(reservation)

        except Exception as e:
            self._logger.error(f"Ошибка при изменении бронирования: {str(e)}")
            raise

    def cancel_reservation(self, request: CancelReservationRequest) -> ReservationDTO:
        """Отменяет бронирование."""
        try:
            with self._uow:
                reservation = self._ledger.cancel(request.reservation_id)

            self._logger.info(f"Бронирование {reservation.id} отменено")
            return self._to_dto(reservation)

        except Exception as e:
            self._logger.error(f"Ошибка при отмене бронирования: {str(e)}")
            raise

    def checkout_guest(self, request: CheckoutGuestRequest) -> ReservationDTO:
        """Выселяет гостя; освобождается только первое его бронирование."""
        try:
            with self._uow:
                if request.guest_id is not None:
                    reservation = self._ledger.checkout_guest(request.guest_id)
                else:
                    reservation = self._ledger.checkout_guest_by_name(
                        request.guest_name
                    )

            self._logger.info(
                f"Гость {reservation.guest.name} выселен",
                room=reservation.room_number,
            )
            return self._to_dto(reservation)

        except Exception as e:
            self._logger.error(f"Ошибка при выселении гостя: {str(e)}")
            raise

    def get_reservation(self, reservation_id: EntityId) -> ReservationDTO:
        """Возвращает информацию о бронировании."""
        return self._to_dto(self._ledger.get(reservation_id))

    def find_reservations_by_guest_name(self, name: str) -> List[ReservationDTO]:
        return [self._to_dto(r) for r in self._ledger.find_by_guest_name(name)]

    def list_reservations(self) -> List[ReservationDTO]:
        """Возвращает активные бронирования в порядке создания."""
        return [self._to_dto(r) for r in self._ledger.list_reservations()]

    def _to_dto(self, reservation: Reservation) -> ReservationDTO:
        return ReservationDTO.from_domain(
            reservation, self._billing.bill_for(reservation)
        )
