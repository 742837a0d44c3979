"""
Инфраструктурный слой контекста бронирования.

Содержит реализации репозиториев, логгера, шины событий
и единицы работы, хранящие состояние в памяти процесса.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Type

from hotel_reservations.inventory import RoomCatalog
from hotel_reservations.shared_kernel import (
    DomainEvent,
    DomainException,
    EntityId,
    NotFoundError,
)

from . import interfaces as ports
from .domain import Reservation


class InMemoryReservationRepository(ports.IReservationRepository):
    """Реализация журнала бронирований в памяти с сохранением порядка."""

    def __init__(self) -> None:
        self._reservations: Dict[EntityId, Reservation] = {}
        # Бронирования, затронутые в текущей единице работы
        self.seen: Dict[EntityId, Reservation] = {}

    def get_by_id(self, reservation_id: EntityId) -> Reservation:
        if reservation_id not in self._reservations:
            raise NotFoundError(f"Бронирование {reservation_id} не найдено")
        # Чтение не отмечает бронирование как затронутое
        return self._reservations[reservation_id]

    def add(self, reservation: Reservation) -> None:
        if reservation.id in self._reservations:
            raise DomainException(
                f"Бронирование {reservation.id} уже есть в журнале"
            )
        self._reservations[reservation.id] = reservation
        self.seen[reservation.id] = reservation

    def update(self, reservation: Reservation) -> None:
        if reservation.id not in self._reservations:
            raise NotFoundError(f"Бронирование {reservation.id} не найдено")
        # Замена значения не меняет позицию ключа в словаре
        self._reservations[reservation.id] = reservation
        self.seen[reservation.id] = reservation

    def remove(self, reservation_id: EntityId) -> Reservation:
        if reservation_id not in self._reservations:
            raise NotFoundError(f"Бронирование {reservation_id} не найдено")
        reservation = self._reservations.pop(reservation_id)
        self.seen[reservation.id] = reservation
        return reservation

    def list_all(self) -> List[Reservation]:
        return list(self._reservations.values())

    def find_by_room(self, room_number: int) -> List[Reservation]:
        return [
            reservation for reservation in self._reservations.values()
            if reservation.room_number == room_number
        ]

    def find_by_guest_id(self, guest_id: EntityId) -> List[Reservation]:
        return [
            reservation for reservation in self._reservations.values()
            if reservation.guest.id == guest_id
        ]

    def find_by_guest_name(self, name: str) -> List[Reservation]:
        return [
            reservation for reservation in self._reservations.values()
            if reservation.guest.matches_name(name)
        ]


class LoggingLogger(ports.ILogger):
    """Реализация логгера поверх стандартного модуля logging."""

    def __init__(self, name: str = "hotel_reservations"):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        if context:
            extras = ", ".join(f"{key}={value}" for key, value in context.items())
            message = f"{message} ({extras})"
        self._logger.log(level, message)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)


class InMemoryEventBus(ports.IEventBus):
    """Реализация шины событий в памяти."""

    def __init__(self, logger: Optional[ports.ILogger] = None):
        self._subscribers: Dict[Type[DomainEvent], List[Callable]] = {}
        self._logger = logger or LoggingLogger("hotel_reservations.events")

    def publish(self, event: DomainEvent) -> None:
        """Публикует событие всем подписчикам его типа и базовых типов."""
        handlers = [
            handler
            for event_type, subscribed in self._subscribers.items()
            if isinstance(event, event_type)
            for handler in subscribed
        ]
        if not handlers:
            self._logger.debug(f"No subscribers for event type {event.event_type}")
            return

        self._logger.info(
            f"Publishing event: {event.event_type}", event_id=event.event_id
        )

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(
                    f"Error in event handler for {event.event_type}",
                    error=str(e),
                    event_id=event.event_id,
                )

    def subscribe(self, event_type: Type[DomainEvent], handler: Callable) -> None:
        """Подписывает обработчик на события указанного типа."""
        self._subscribers.setdefault(event_type, []).append(handler)
        self._logger.debug(f"Subscribed handler to {event_type.__name__} events")


class BookingUnitOfWork(ports.IBookingUnitOfWork):
    """
    Единица работы для контекста бронирования.

    Фиксация публикует накопленные доменные события затронутых
    бронирований, откат их отбрасывает. Вход в контекст захватывает
    блокировку. Если передана блокировка журнала бронирований, операции
    журнала и фиксация не выполняются одновременно.

    События, накопленные вне единицы работы, при входе отбрасываются:
    они не относятся к текущей операции.
    """

    def __init__(
        self,
        rooms: Optional[RoomCatalog] = None,
        reservations: Optional[InMemoryReservationRepository] = None,
        event_bus: Optional[ports.IEventBus] = None,
        logger: Optional[ports.ILogger] = None,
        lock: Optional[Any] = None,
    ):
        self._rooms = rooms if rooms is not None else RoomCatalog()
        self._reservations = reservations or InMemoryReservationRepository()
        self._logger = logger or LoggingLogger("hotel_reservations.uow")
        self._event_bus = event_bus or InMemoryEventBus(self._logger)
        self._lock = lock if lock is not None else threading.RLock()
        self._committed = False

    @property
    def reservations(self) -> InMemoryReservationRepository:
        return self._reservations

    @property
    def rooms(self) -> RoomCatalog:
        return self._rooms

    @property
    def event_bus(self) -> ports.IEventBus:
        return self._event_bus

    @property
    def committed(self) -> bool:
        return self._committed

    def _take_pending(self) -> List[Reservation]:
        with self._lock:
            pending = list(self._reservations.seen.values())
            self._reservations.seen.clear()
        return pending

    def commit(self) -> None:
        """Фиксирует изменения и публикует события."""
        events: List[DomainEvent] = []
        for reservation in self._take_pending():
            events.extend(reservation.pull_domain_events())
        self._committed = True
        self._logger.debug("BookingUnitOfWork committed", events=len(events))

        for event in events:
            self._event_bus.publish(event)

    def rollback(self) -> None:
        """Отбрасывает неопубликованные события."""
        for reservation in self._take_pending():
            reservation.clear_events()
        self._committed = False
        self._logger.warning("BookingUnitOfWork rolled back")

    def __enter__(self) -> "BookingUnitOfWork":
        self._lock.acquire()
        stale = self._take_pending()
        for reservation in stale:
            reservation.clear_events()
        if stale:
            self._logger.debug(
                "Discarded events recorded outside a unit of work",
                reservations=len(stale),
            )
        self._committed = False
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self._lock.release()
        return False  # Пробрасываем исключение дальше, если оно было
