from __future__ import annotations

from typing import TextIO
import sys

from ..widgets.base import WidgetView

def lines_for(view: WidgetView) -> list[str]:
    out = [view.heading, "=" * len(view.heading)]
    out.append(f"City: {view.search_text or '-'}")
    controls = f"[Fetch] [{view.location_label}] [{view.unit_label}]"
    if view.controls_disabled:
        controls += "  (location request pending)"
    out.append(controls)
    if view.loading:
        out.append("Loading...")
    if view.error:
        out.append(f"Error: {view.error}")
    for card in view.cards:
        out.append("")
        out.append(card.title)
        out.extend(f"  {ln}" for ln in card.lines)
    return out

def render(view: WidgetView, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    stream.write("\n".join(lines_for(view)) + "\n")
