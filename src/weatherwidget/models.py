from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

FORECAST_DAYS = 3

class Unit(str, Enum):
    CELSIUS = "C"
    FAHRENHEIT = "F"

    @property
    def other(self) -> "Unit":
        return Unit.FAHRENHEIT if self is Unit.CELSIUS else Unit.CELSIUS

class Permission(str, Enum):
    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"

@dataclass(frozen=True)
class ForecastDay:
    date: str
    avg_temp_c: float
    sunrise: str | None = None

@dataclass(frozen=True)
class WeatherSnapshot:
    city: str
    temp_c: float
    humidity: str
    description: str
    forecast: tuple[ForecastDay, ...] = ()

    @property
    def upcoming(self) -> tuple[ForecastDay, ...]:
        # API order, never re-sorted
        return self.forecast[:FORECAST_DAYS]

def display_temp(celsius: float, unit: Unit) -> float:
    """Convert a Celsius reading for display.

    Fahrenheit rounds half up to a whole degree; Celsius passes through.
    """
    if unit is Unit.CELSIUS:
        return celsius
    return math.floor(celsius * 9 / 5 + 32 + 0.5)

def format_temp(celsius: float, unit: Unit) -> str:
    return f"{display_temp(celsius, unit):g}°{unit.value}"
