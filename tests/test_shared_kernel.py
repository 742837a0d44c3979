"""
Тесты для типов общего ядра.
"""
from datetime import date

import pytest

from hotel_reservations.shared_kernel import (
    DateRange,
    DomainEvent,
    DomainException,
    InvalidDateRangeError,
    Money,
    NotFoundError,
    RoomNotAvailableError,
)


def test_date_range_counts_nights():
    """Тест подсчета ночей."""
    period = DateRange(check_in=date(2024, 1, 1), check_out=date(2024, 1, 4))

    assert period.nights == 3


def test_date_range_rejects_check_out_before_check_in():
    """Тест: дата выезда раньше даты заезда недопустима."""
    with pytest.raises(InvalidDateRangeError):
        DateRange(check_in=date(2024, 1, 4), check_out=date(2024, 1, 1))


def test_date_range_rejects_same_day():
    """Тест: заезд и выезд в один день недопустимы."""
    with pytest.raises(InvalidDateRangeError):
        DateRange(check_in=date(2024, 1, 1), check_out=date(2024, 1, 1))


def test_date_range_parses_iso_strings():
    period = DateRange(check_in="2024-02-01", check_out="2024-02-03")

    assert period.check_in == date(2024, 2, 1)
    assert period.nights == 2


@pytest.mark.parametrize(
    "other, expected",
    [
        (("2024-01-02", "2024-01-03"), True),  # внутри
        (("2023-12-30", "2024-01-02"), True),  # пересекает начало
        (("2024-01-04", "2024-01-06"), False),  # заезд в день выезда
        (("2023-12-30", "2024-01-01"), False),  # выезд в день заезда
    ],
)
def test_date_range_overlaps(other, expected):
    """Тест пересечения полуоткрытых периодов."""
    period = DateRange(check_in="2024-01-01", check_out="2024-01-04")
    other_period = DateRange(check_in=other[0], check_out=other[1])

    assert period.overlaps(other_period) is expected
    assert other_period.overlaps(period) is expected


def test_money_multiplication_and_addition():
    rate = Money(amount=100.0)

    assert (rate * 3).amount == 300.0
    assert (rate + Money(amount=50.0)).amount == 150.0
    assert rate.currency == "USD"


def test_money_rejects_mixed_currencies():
    with pytest.raises(ValueError, match="разные валюты"):
        Money(amount=1.0, currency="USD") + Money(amount=1.0, currency="EUR")


def test_errors_share_domain_base():
    """Тест: все доменные ошибки наследуют DomainException."""
    assert issubclass(RoomNotAvailableError, DomainException)
    assert issubclass(InvalidDateRangeError, DomainException)
    assert issubclass(NotFoundError, DomainException)


def test_domain_event_type_defaults_to_class_name():
    class SomethingHappened(DomainEvent):
        pass

    assert SomethingHappened().event_type == "SomethingHappened"
