"""
Интерфейсы (порты) для контекста бронирования.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Protocol, Type, TypeVar

from hotel_reservations.shared_kernel import DomainEvent, EntityId

if TYPE_CHECKING:
    from hotel_reservations.inventory import RoomCatalog

    from .domain import Reservation

T_Event = TypeVar("T_Event", bound=DomainEvent)


class ILogger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class IEventBus(Protocol):
    """Интерфейс для шины событий."""

    def publish(self, event: DomainEvent) -> None: ...
    def subscribe(
        self, event_type: Type[T_Event], handler: Callable[[T_Event], None]
    ) -> None: ...


class IReservationRepository(Protocol):
    """Интерфейс репозитория активных бронирований (журнал)."""

    def add(self, reservation: Reservation) -> None: ...
    def get_by_id(self, reservation_id: EntityId) -> Reservation: ...
    def update(self, reservation: Reservation) -> None: ...
    def remove(self, reservation_id: EntityId) -> Reservation: ...
    def list_all(self) -> List[Reservation]: ...
    def find_by_room(self, room_number: int) -> List[Reservation]: ...
    def find_by_guest_id(self, guest_id: EntityId) -> List[Reservation]: ...
    def find_by_guest_name(self, name: str) -> List[Reservation]: ...


class IBookingUnitOfWork(Protocol):
    """Интерфейс Unit of Work для контекста бронирования."""

    @property
    def reservations(self) -> IReservationRepository: ...
    @property
    def rooms(self) -> RoomCatalog: ...
    @property
    def event_bus(self) -> IEventBus: ...

    def __enter__(self) -> IBookingUnitOfWork: ...
    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...
