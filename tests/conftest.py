"""
Общие фикстуры для тестов системы бронирования.
"""

import pytest

from hotel_reservations.billing import BillingCalculator, RateTable
from hotel_reservations.booking.domain import BookingLedger, Guest
from hotel_reservations.booking.infrastructure import InMemoryReservationRepository
from hotel_reservations.inventory import Room, RoomCatalog
from hotel_reservations.shared_kernel import OccupancyMode, RoomType


@pytest.fixture
def catalog():
    """Каталог с номерами, как в исходной конфигурации отеля."""
    return RoomCatalog([
        Room(number=101, type=RoomType.STANDARD),
        Room(number=102, type=RoomType.STANDARD),
        Room(number=201, type=RoomType.DELUXE),
        Room(number=301, type=RoomType.SUITE),
    ])


@pytest.fixture
def repository():
    return InMemoryReservationRepository()


@pytest.fixture
def ledger(catalog, repository):
    """Журнал с календарной занятостью."""
    return BookingLedger(catalog, repository, mode=OccupancyMode.CALENDAR)


@pytest.fixture
def billing():
    return BillingCalculator(RateTable())


@pytest.fixture
def alice():
    return Guest(name="Alice", phone="+15550001")


@pytest.fixture
def bob():
    return Guest(name="Bob", phone="+15550002")


@pytest.fixture
def assert_consistent(catalog, repository):
    """Проверка: флаг занятости совпадает с наличием активных бронирований номера."""

    def check() -> None:
        booked = {r.room_number for r in repository.list_all()}
        for room in catalog.rooms():
            assert room.occupied == (room.number in booked), room.number

    return check
