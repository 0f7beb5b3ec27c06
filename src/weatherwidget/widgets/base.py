from __future__ import annotations

from dataclasses import dataclass, field

@dataclass(frozen=True)
class Card:
    title: str
    lines: list[str] = field(default_factory=list)

@dataclass(frozen=True)
class WidgetView:
    """Everything a renderer needs to draw one frame of the widget."""
    heading: str
    search_text: str
    location_label: str
    controls_disabled: bool
    unit_label: str
    loading: bool = False
    error: str | None = None
    current: Card | None = None
    forecast: list[Card] = field(default_factory=list)

    @property
    def cards(self) -> list[Card]:
        return ([self.current] if self.current else []) + list(self.forecast)
