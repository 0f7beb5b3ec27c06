"""Tests for units, conversion and snapshot helpers."""

import pytest

from weatherwidget.models import (
    ForecastDay,
    Unit,
    WeatherSnapshot,
    display_temp,
    format_temp,
)


class TestDisplayTemp:
    @pytest.mark.parametrize(
        "celsius, expected",
        [(0, 32), (100, 212), (-40, -40), (37, 99), (21.5, 71), (-17.5, 1)],
    )
    def test_fahrenheit(self, celsius, expected):
        assert display_temp(celsius, Unit.FAHRENHEIT) == expected

    def test_half_rounds_up(self):
        # 36.5 rounds to 37, not to the even 36
        assert display_temp(2.5, Unit.FAHRENHEIT) == 37

    def test_celsius_is_identity(self):
        assert display_temp(12.3, Unit.CELSIUS) == 12.3

    @pytest.mark.parametrize("celsius", [-30, -7.5, 0, 12, 18.4, 36.6])
    def test_fahrenheit_round_trip_is_stable(self, celsius):
        fahrenheit = display_temp(celsius, Unit.FAHRENHEIT)
        back = (fahrenheit - 32) * 5 / 9
        assert display_temp(back, Unit.FAHRENHEIT) == fahrenheit


class TestFormatTemp:
    def test_whole_degrees(self):
        assert format_temp(18.0, Unit.CELSIUS) == "18°C"
        assert format_temp(18.0, Unit.FAHRENHEIT) == "64°F"

    def test_fractional_celsius(self):
        assert format_temp(4.5, Unit.CELSIUS) == "4.5°C"


class TestUnit:
    def test_other(self):
        assert Unit.CELSIUS.other is Unit.FAHRENHEIT
        assert Unit.FAHRENHEIT.other is Unit.CELSIUS


class TestSnapshot:
    def test_upcoming_keeps_api_order_and_caps_at_three(self):
        days = tuple(
            ForecastDay(date=d, avg_temp_c=t)
            for d, t in [("2026-10-20", 1), ("2026-10-18", 2), ("2026-10-19", 3), ("2026-10-21", 4)]
        )
        snap = WeatherSnapshot(city="Oslo", temp_c=3, humidity="80", description="Fog", forecast=days)
        assert [d.date for d in snap.upcoming] == ["2026-10-20", "2026-10-18", "2026-10-19"]
