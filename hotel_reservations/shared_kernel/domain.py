"""
Основные доменные типы и утилиты общего ядра.
"""

from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Общие типы идентификаторов
EntityId = UUID


def generate_id() -> UUID:
    """Генерирует новый UUID."""
    return uuid4()


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class RoomNotAvailableError(DomainException):
    """Нет свободного номера нужного типа на запрошенные даты."""

    pass


class InvalidDateRangeError(DomainException):
    """Дата выезда не позже даты заезда."""

    pass


class NotFoundError(DomainException):
    """Бронирование, гость или номер не найдены."""

    pass


class DuplicateRoomError(DomainException):
    """Номер с таким идентификатором уже зарегистрирован."""

    pass


class Money(BaseModel):
    """Денежная сумма с валютой."""

    model_config = ConfigDict(frozen=True)

    amount: float = Field(..., ge=0, description="Сумма денег")
    currency: str = Field(
        default="USD", max_length=3, description="Код валюты (ISO 4217)"
    )

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            raise TypeError("Можно складывать только объекты Money")
        if self.currency != other.currency:
            raise ValueError("Нельзя складывать разные валюты")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __mul__(self, multiplier: float) -> "Money":
        if not isinstance(multiplier, (int, float)):
            raise TypeError("Множитель должен быть числом")
        if multiplier < 0:
            raise ValueError("Множитель не может быть отрицательным")
        return Money(amount=self.amount * multiplier, currency=self.currency)


class DateRange(BaseModel):
    """Период проживания [check_in, check_out)."""

    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date

    @model_validator(mode="after")
    def check_out_after_check_in(self) -> "DateRange":
        # InvalidDateRangeError не наследует ValueError и проходит сквозь pydantic
        if self.check_out <= self.check_in:
            raise InvalidDateRangeError(
                f"Дата выезда {self.check_out} должна быть позже "
                f"даты заезда {self.check_in}"
            )
        return self

    @property
    def nights(self) -> int:
        """Количество ночей в бронировании."""
        return (self.check_out - self.check_in).days

    def overlaps(self, other: "DateRange") -> bool:
        """Проверяет пересечение двух периодов (день выезда не занят)."""
        return self.check_in < other.check_out and other.check_in < self.check_out


class DomainEvent(BaseModel):
    """Базовый класс для всех доменных событий."""

    event_id: UUID = Field(default_factory=uuid4)
    occurred_on: datetime = Field(default_factory=lambda: now())
    event_type: str = ""

    @model_validator(mode="after")
    def default_event_type(self) -> "DomainEvent":
        if not self.event_type:
            self.event_type = type(self).__name__
        return self


# Общие перечисления
class RoomType(str, Enum):
    """Типы номеров в отеле."""

    STANDARD = "standard"
    DELUXE = "deluxe"
    SUITE = "suite"


class OccupancyMode(str, Enum):
    """Правило определения занятости номера."""

    CALENDAR = "calendar"  # Номер занят только на пересекающиеся даты
    BINARY = "binary"  # Номер занят целиком, пока есть хоть одна бронь


# Общие утилиты
def now() -> datetime:
    """Возвращает текущую дату и время (UTC)."""
    return datetime.now(timezone.utc)
