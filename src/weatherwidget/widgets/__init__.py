from __future__ import annotations

from .base import Card, WidgetView
from .weather import WeatherWidget, WidgetState

__all__ = ["Card", "WidgetView", "WeatherWidget", "WidgetState"]
