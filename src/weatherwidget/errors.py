from __future__ import annotations

class WeatherWidgetError(Exception):
    """Base for failures the widget turns into a visible message."""

class LocationUnavailable(WeatherWidgetError):
    pass

class LocationDenied(WeatherWidgetError):
    pass

class GeocodeEmpty(WeatherWidgetError):
    pass

class GeocodeFailed(WeatherWidgetError):
    pass

class FetchFailed(WeatherWidgetError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

class ParseFailed(WeatherWidgetError):
    pass
