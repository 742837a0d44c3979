"""
Доменная модель контекста расчетов.

Тарифная сетка по типам номеров и калькулятор
стоимости проживания.
"""

from datetime import date
from typing import TYPE_CHECKING, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hotel_reservations.shared_kernel import (
    DateRange,
    Money,
    NotFoundError,
    RoomType,
)

if TYPE_CHECKING:
    from hotel_reservations.booking.domain import Reservation

DEFAULT_NIGHTLY_RATES: Dict[RoomType, float] = {
    RoomType.STANDARD: 100.0,
    RoomType.DELUXE: 150.0,
    RoomType.SUITE: 250.0,
}


class RateTable(BaseModel):
    """Стоимость ночи по типу номера. Неизменяема после создания."""

    model_config = ConfigDict(frozen=True)

    rates: Dict[RoomType, float] = Field(
        default_factory=lambda: dict(DEFAULT_NIGHTLY_RATES)
    )
    currency: str = Field(default="USD", max_length=3)

    @field_validator("rates")
    @classmethod
    def rates_must_not_be_negative(cls, v: Dict[RoomType, float]) -> Dict[RoomType, float]:
        for room_type, rate in v.items():
            if rate < 0:
                raise ValueError(
                    f"Тариф для типа номера {room_type.value} не может быть отрицательным"
                )
        return v

    def rate_for(self, room_type: RoomType) -> Money:
        """Возвращает стоимость одной ночи для типа номера."""
        if room_type not in self.rates:
            raise NotFoundError(f"Тариф для типа номера {room_type.value} не задан")
        return Money(amount=self.rates[room_type], currency=self.currency)


class BillingCalculator:
    """Доменный сервис расчета стоимости проживания."""

    def __init__(self, rate_table: RateTable):
        self.rate_table = rate_table

    def charge(self, room_type: RoomType, check_in: date, check_out: date) -> Money:
        """
        Рассчитывает стоимость проживания.

        Args:
            room_type: Тип номера
            check_in: Дата заезда
            check_out: Дата выезда (должна быть позже даты заезда)

        Returns:
            Количество ночей, умноженное на тариф типа номера

        Raises:
            InvalidDateRangeError: если дата выезда не позже даты заезда
        """
        period = DateRange(check_in=check_in, check_out=check_out)
        return self.rate_table.rate_for(room_type) * period.nights

    def bill_for(self, reservation: "Reservation") -> Money:
        """Рассчитывает счет по бронированию."""
        return self.charge(
            reservation.room_type,
            reservation.period.check_in,
            reservation.period.check_out,
        )
