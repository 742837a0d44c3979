"""
Тесты для тарифов и расчета стоимости проживания.
"""
from datetime import date

import pytest
from pydantic import ValidationError

from hotel_reservations.billing import RateTable
from hotel_reservations.shared_kernel import InvalidDateRangeError, NotFoundError, RoomType


@pytest.mark.parametrize(
    "room_type, expected",
    [
        (RoomType.STANDARD, 300.0),
        (RoomType.DELUXE, 450.0),
        (RoomType.SUITE, 750.0),
    ],
)
def test_charge_for_three_nights(billing, room_type, expected):
    """Тест: 2024-01-01 -> 2024-01-04 — три ночи по тарифу типа номера."""
    charge = billing.charge(room_type, date(2024, 1, 1), date(2024, 1, 4))

    assert charge.amount == expected
    assert charge.currency == "USD"


def test_charge_rejects_non_positive_stay(billing):
    """Тест: нулевой или отрицательный период не тарифицируется."""
    with pytest.raises(InvalidDateRangeError):
        billing.charge(RoomType.STANDARD, date(2024, 1, 4), date(2024, 1, 4))

    with pytest.raises(InvalidDateRangeError):
        billing.charge(RoomType.STANDARD, date(2024, 1, 4), date(2024, 1, 1))


def test_rate_table_defaults():
    table = RateTable()

    assert table.rate_for(RoomType.STANDARD).amount == 100.0
    assert table.rate_for(RoomType.DELUXE).amount == 150.0
    assert table.rate_for(RoomType.SUITE).amount == 250.0


def test_rate_table_is_immutable():
    """Тест: тарифную сетку нельзя изменить после создания."""
    table = RateTable()

    with pytest.raises(ValidationError):
        table.currency = "EUR"


def test_rate_table_rejects_negative_rate():
    """Тест: отрицательный тариф отклоняется при создании сетки."""
    with pytest.raises(ValidationError):
        RateTable(rates={RoomType.STANDARD: -1.0})


def test_rate_table_missing_type():
    table = RateTable(rates={RoomType.STANDARD: 80.0})

    with pytest.raises(NotFoundError):
        table.rate_for(RoomType.SUITE)


def test_bill_for_reservation(billing, ledger, alice):
    reservation = ledger.reserve(
        alice, RoomType.DELUXE, date(2024, 3, 1), date(2024, 3, 3)
    )

    assert billing.bill_for(reservation).amount == 300.0
