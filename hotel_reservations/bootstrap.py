import logging
from typing import Any, Dict, Optional

from hotel_reservations.billing import BillingCalculator, RateTable
from hotel_reservations.booking.application import HotelFacade
from hotel_reservations.booking.domain import BookingLedger
from hotel_reservations.booking.infrastructure import (
    BookingUnitOfWork,
    InMemoryEventBus,
    InMemoryReservationRepository,
    LoggingLogger,
)
from hotel_reservations.config import HotelSettings, load_settings
from hotel_reservations.inventory import Room, RoomCatalog

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Настраивает вывод логов пакета для приложения."""
    logger = logging.getLogger("hotel_reservations")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)


def bootstrap_app(settings: Optional[HotelSettings] = None) -> Dict[str, Any]:
    """Создает и настраивает все компоненты приложения."""
    settings = settings or load_settings()
    logging.getLogger("hotel_reservations").setLevel(settings.log_level)

    # 1. Каталог номеров и тарифы из настроек
    catalog = RoomCatalog(
        Room(number=room.number, type=room.type) for room in settings.rooms
    )
    rate_table = RateTable(rates=settings.rates, currency=settings.currency)
    billing = BillingCalculator(rate_table)

    # 2. Журнал бронирований и единица работы с общими репозиторием и блокировкой
    reservations = InMemoryReservationRepository()
    ledger = BookingLedger(catalog, reservations, mode=settings.occupancy_mode)
    event_bus = InMemoryEventBus(LoggingLogger("hotel_reservations.events"))
    uow = BookingUnitOfWork(
        rooms=catalog,
        reservations=reservations,
        event_bus=event_bus,
        logger=LoggingLogger("hotel_reservations.uow"),
        lock=ledger.lock,
    )

    # 3. Фасад для внешнего вызывающего кода
    facade = HotelFacade(
        uow=uow,
        ledger=ledger,
        billing=billing,
        logger=LoggingLogger("hotel_reservations.facade"),
    )

    return {
        "settings": settings,
        "catalog": catalog,
        "rate_table": rate_table,
        "billing": billing,
        "ledger": ledger,
        "uow": uow,
        "event_bus": event_bus,
        "facade": facade,
    }
