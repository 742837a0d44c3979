"""
Тесты для настроек, логирования и сборки приложения.
"""
import json
import logging

import pytest
from pydantic import ValidationError

from hotel_reservations import bootstrap_app, configure_logging
from hotel_reservations.booking.infrastructure import BookingUnitOfWork, LoggingLogger
from hotel_reservations.config import CONFIG_ENV_VAR, HotelSettings, load_settings
from hotel_reservations.shared_kernel import OccupancyMode, RoomType


def test_default_settings_reproduce_original_hotel():
    settings = HotelSettings()

    assert [(r.number, r.type) for r in settings.rooms] == [
        (101, RoomType.STANDARD),
        (102, RoomType.STANDARD),
        (201, RoomType.DELUXE),
        (202, RoomType.DELUXE),
        (301, RoomType.SUITE),
    ]
    assert settings.rates[RoomType.SUITE] == 250.0
    assert settings.occupancy_mode == OccupancyMode.CALENDAR


def test_settings_reject_negative_rate():
    with pytest.raises(ValidationError):
        HotelSettings(rates={RoomType.STANDARD: -1.0})


def test_settings_fill_missing_rates():
    settings = HotelSettings(rates={"standard": 80.0})

    assert settings.rates[RoomType.STANDARD] == 80.0
    assert settings.rates[RoomType.DELUXE] == 150.0


def test_load_settings_from_file(tmp_path):
    config = tmp_path / "hotel.json"
    config.write_text(
        json.dumps({
            "currency": "EUR",
            "rates": {"suite": 300.0},
            "rooms": [{"number": 1, "type": "suite"}],
            "occupancy_mode": "binary",
            "log_level": "debug",
        }),
        encoding="utf-8",
    )

    settings = load_settings(config)

    assert settings.currency == "EUR"
    assert settings.rates[RoomType.SUITE] == 300.0
    assert settings.occupancy_mode == OccupancyMode.BINARY
    assert settings.log_level == "DEBUG"


def test_load_settings_from_env(tmp_path, monkeypatch):
    config = tmp_path / "hotel.json"
    config.write_text(json.dumps({"rooms": [{"number": 7, "type": "deluxe"}]}))
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config))

    settings = load_settings()

    assert [r.number for r in settings.rooms] == [7]


def test_load_settings_defaults_without_file(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    assert load_settings() == HotelSettings()


def test_load_settings_empty_file(tmp_path):
    config = tmp_path / "empty.json"
    config.write_text("  ")

    assert load_settings(config) == HotelSettings()


def test_bootstrap_uses_settings():
    settings = HotelSettings(
        currency="EUR",
        rates={RoomType.STANDARD: 90.0},
        rooms=[{"number": 11, "type": "standard"}],
        occupancy_mode="binary",
    )

    app = bootstrap_app(settings)

    assert [room.number for room in app["catalog"].rooms()] == [11]
    assert app["ledger"].mode == OccupancyMode.BINARY
    assert app["rate_table"].rate_for(RoomType.STANDARD).currency == "EUR"
    assert app["uow"].rooms is app["catalog"]


def test_bootstrap_default_app_has_five_rooms(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    app = bootstrap_app()

    assert len(app["catalog"]) == 5


def test_logging_logger_formats_context(caplog):
    logger = LoggingLogger("hotel_reservations.test")

    with caplog.at_level(logging.INFO, logger="hotel_reservations.test"):
        logger.info("Бронирование создано", room=101)

    assert "Бронирование создано (room=101)" in caplog.text


@pytest.fixture
def package_logger():
    logger = logging.getLogger("hotel_reservations")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_configure_logging_sets_level(package_logger):
    configure_logging("DEBUG")

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1

    configure_logging("WARNING")
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.WARNING


def test_unit_of_work_rolls_back_on_error():
    uow = BookingUnitOfWork()

    with pytest.raises(RuntimeError):
        with uow:
            raise RuntimeError("ошибка внутри транзакции")

    assert uow.committed is False

    with uow:
        pass
    assert uow.committed is True
