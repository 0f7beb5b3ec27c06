from __future__ import annotations

from pathlib import Path
from typing import TextIO

from ..widgets.base import WidgetView

from . import render_pillow, render_text, render_web

def render_with(
    kind: str,
    view: WidgetView,
    out_path: Path,
    resolution: tuple[int, int],
    columns: int,
    theme: dict,
    web_cfg: dict,
    stream: TextIO | None = None,
) -> Path | None:
    kind = kind.lower().strip()
    if kind == "text":
        render_text.render(view, stream)
        return None
    if kind == "pillow":
        return render_pillow.render(out_path, view, resolution, columns, theme)
    if kind == "web":
        return render_web.render(out_path, view, resolution, columns, theme, web_cfg)
    raise ValueError(f"Unknown renderer: {kind}")
