"""
Настройки системы бронирования.

Настройки описываются pydantic-моделью и читаются из JSON-файла.
Путь к файлу можно передать явно или через переменную окружения
HOTEL_RESERVATIONS_CONFIG. Без файла используются значения по умолчанию.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from hotel_reservations.billing import DEFAULT_NIGHTLY_RATES
from hotel_reservations.shared_kernel import OccupancyMode, RoomType

CONFIG_ENV_VAR = "HOTEL_RESERVATIONS_CONFIG"


class RoomSettings(BaseModel):
    """Описание номера для начального заполнения каталога."""

    number: int = Field(..., gt=0)
    type: RoomType


def _default_rooms() -> List[RoomSettings]:
    return [
        RoomSettings(number=101, type=RoomType.STANDARD),
        RoomSettings(number=102, type=RoomType.STANDARD),
        RoomSettings(number=201, type=RoomType.DELUXE),
        RoomSettings(number=202, type=RoomType.DELUXE),
        RoomSettings(number=301, type=RoomType.SUITE),
    ]


class HotelSettings(BaseModel):
    """Настройки отеля."""

    currency: str = Field(default="USD", max_length=3)
    rates: Dict[RoomType, float] = Field(
        default_factory=lambda: dict(DEFAULT_NIGHTLY_RATES)
    )
    rooms: List[RoomSettings] = Field(default_factory=_default_rooms)
    occupancy_mode: OccupancyMode = OccupancyMode.CALENDAR
    log_level: str = "INFO"

    @field_validator("rates")
    @classmethod
    def rates_are_positive(cls, v: Dict[RoomType, float]) -> Dict[RoomType, float]:
        for room_type, rate in v.items():
            if rate < 0:
                raise ValueError(f"Тариф для {room_type.value} не может быть отрицательным")
        # Незаданные типы берут тариф по умолчанию
        return {**DEFAULT_NIGHTLY_RATES, **v}

    @field_validator("log_level")
    @classmethod
    def log_level_is_known(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Неизвестный уровень логирования: {v}")
        return level

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "HotelSettings":
        """Загружает настройки из JSON-файла."""
        path = Path(file_path)
        with open(path, "r", encoding="utf-8") as f:
            raw_data = f.read()

        if not raw_data.strip():
            return cls()

        return cls.model_validate(json.loads(raw_data))


def load_settings(file_path: Optional[Union[str, Path]] = None) -> HotelSettings:
    """
    Возвращает настройки отеля.

    Args:
        file_path: Путь к JSON-файлу; если не задан, берется из
            переменной окружения HOTEL_RESERVATIONS_CONFIG

    Returns:
        Настройки из файла или значения по умолчанию
    """
    file_path = file_path or os.environ.get(CONFIG_ENV_VAR)
    if not file_path:
        return HotelSettings()
    return HotelSettings.from_file(file_path)
