from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from PIL import Image, ImageDraw, ImageFont, ImageFilter
import os
import math

from ..widgets.base import WidgetView

def _hex(c: str) -> tuple[int, int, int]:
    c = c.lstrip("#")
    return tuple(int(c[i:i+2], 16) for i in (0, 2, 4))

def _load_font(theme: dict, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    # Allow explicit font_path, else try family name
    font_path = theme.get("font_path")
    try:
        if font_path:
            fp = os.path.expanduser(font_path)
            return ImageFont.truetype(fp, size=size)
        family = theme.get("font_family", "DejaVuSansMono")
        return ImageFont.truetype(f"{family}.ttf", size=size)
    except OSError:
        return ImageFont.load_default()

@dataclass(frozen=True)
class Layout:
    width: int
    height: int
    columns: int
    gap: int
    margin: int
    header_h: int
    cell_w: int
    cell_h: int
    rows: int

def _compute_layout(width: int, height: int, columns: int, n: int) -> Layout:
    margin = max(16, width // 80)
    gap = max(12, width // 120)
    header_h = max(110, height // 4)
    cols = max(1, min(columns, n))
    rows = max(1, math.ceil(n / cols))
    cell_w = (width - 2 * margin - (cols - 1) * gap) // cols
    cell_h = (height - 2 * margin - header_h - rows * gap) // rows
    return Layout(width, height, cols, gap, margin, header_h, cell_w, cell_h, rows)

def _scanlines(img: Image.Image, strength: int = 18) -> Image.Image:
    w, h = img.size
    overlay = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    d = ImageDraw.Draw(overlay)
    for y in range(0, h, 4):
        d.rectangle([0, y, w, y+1], fill=(0, 0, 0, strength))
    return Image.alpha_composite(img.convert("RGBA"), overlay)

def _draw_glow_text(img: Image.Image, draw: ImageDraw.ImageDraw, xy: tuple[int, int], text: str, font, fill_rgb, glow_rgb, glow_radius: int = 8):
    x, y = xy
    tw, th = draw.textbbox((0, 0), text, font=font)[2:]
    pad = glow_radius * 2
    tmp = Image.new("RGBA", (tw + pad*2, th + pad*2), (0, 0, 0, 0))
    td = ImageDraw.Draw(tmp)
    td.text((pad, pad), text, font=font, fill=(*glow_rgb, 120))
    tmp = tmp.filter(ImageFilter.GaussianBlur(radius=glow_radius))
    # Glow first, crisp text on top
    img.paste(tmp, (x - pad, y - pad), tmp)
    draw.text((x, y), text, font=font, fill=fill_rgb)

def _fit(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> str:
    """Shorten text with an ellipsis until it fits in max_width pixels."""
    if draw.textlength(text, font=font) <= max_width:
        return text
    while text and draw.textlength(text + "...", font=font) > max_width:
        text = text[:-1]
    return text + "..."

def _header_lines(view: WidgetView) -> list[tuple[str, bool]]:
    """(text, is_alert) pairs shown under the heading."""
    lines = [(f"City: {view.search_text or '-'}", False)]
    lines.append((f"[{view.location_label}]  [{view.unit_label}]", False))
    if view.loading:
        lines.append(("Loading...", False))
    if view.error:
        lines.append((view.error, True))
    return lines

def render(
    out_path: Path,
    view: WidgetView,
    resolution: tuple[int, int],
    columns: int,
    theme: dict,
) -> Path:
    w, h = resolution
    bg = _hex(theme.get("background", "#020402"))
    fg = _hex(theme.get("foreground", "#00ff66"))
    fg_dim = _hex(theme.get("foreground_dim", "#00aa44"))
    border = _hex(theme.get("panel_border", "#00aa44"))
    alert = _hex(theme.get("alert", "#ff3355"))

    img = Image.new("RGBA", (w, h), (*bg, 255))
    draw = ImageDraw.Draw(img)

    cards = view.cards
    layout = _compute_layout(w, h, columns, max(1, len(cards)))

    font_h = _load_font(theme, size=max(20, w // 40))
    font_b = _load_font(theme, size=max(14, w // 60))

    _draw_glow_text(img, draw, (layout.margin, layout.margin), view.heading, font_h, fg, fg, glow_radius=6)
    y = layout.margin + 36
    for text, is_alert in _header_lines(view):
        draw.text((layout.margin, y), _fit(draw, text, font_b, w - 2 * layout.margin), font=font_b, fill=alert if is_alert else fg_dim)
        y += 20

    top = layout.margin + layout.header_h + layout.gap
    for i, card in enumerate(cards):
        r = i // layout.columns
        c = i % layout.columns
        x0 = layout.margin + c * (layout.cell_w + layout.gap)
        y0 = top + r * (layout.cell_h + layout.gap)
        x1 = x0 + layout.cell_w
        y1 = y0 + layout.cell_h

        draw.rounded_rectangle([x0, y0, x1, y1], radius=14, outline=border, width=2)
        _draw_glow_text(img, draw, (x0 + 12, y0 + 10), card.title, font_b, fg, fg, glow_radius=4)

        ly = y0 + 40
        for ln in card.lines:
            draw.text((x0 + 12, ly), _fit(draw, ln, font_b, layout.cell_w - 24), font=font_b, fill=fg_dim)
            ly += 20

    img = _scanlines(img, strength=18)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    img.convert("RGB").save(out_path, format="PNG")
    return out_path
