from __future__ import annotations

from html import escape
from pathlib import Path
from playwright.sync_api import sync_playwright

from ..widgets.base import Card, WidgetView

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{heading}</title>
  <style>
    :root {{
      --bg: {bg};
      --fg: {fg};
      --fg-dim: {fg_dim};
      --border: {border};
      --alert: {alert};
      --gap: {gap}px;
      --pad: {pad}px;
      --radius: {radius}px;
      --cols: {cols};
      --font: ui-monospace, Menlo, Monaco, "DejaVu Sans Mono", "Liberation Mono", monospace;
    }}
    html, body {{
      margin: 0;
      width: {w}px;
      height: {h}px;
      background: var(--bg);
      color: var(--fg);
      font-family: var(--font);
      overflow: hidden;
    }}
    main {{
      padding: var(--pad);
      box-sizing: border-box;
    }}
    h2 {{
      margin: 0 0 8px 0;
      text-shadow: 0 0 10px rgba(0, 255, 102, 0.35);
    }}
    .inline-form {{
      display: flex;
      gap: 8px;
      margin-bottom: 8px;
    }}
    input, button {{
      font-family: var(--font);
      background: transparent;
      color: var(--fg);
      border: 1px solid var(--border);
      border-radius: 6px;
      padding: 4px 8px;
    }}
    button:disabled {{
      color: var(--fg-dim);
    }}
    .loading {{
      color: var(--fg-dim);
    }}
    .error {{
      color: var(--alert);
    }}
    .grid {{
      display: grid;
      grid-template-columns: repeat(var(--cols), 1fr);
      gap: var(--gap);
      margin-top: var(--gap);
    }}
    .card {{
      border: 2px solid var(--border);
      border-radius: var(--radius);
      padding: 12px;
      box-sizing: border-box;
    }}
    .title {{
      font-size: 18px;
      margin: 0 0 8px 0;
      text-shadow: 0 0 10px rgba(0, 255, 102, 0.35);
    }}
    .line {{
      color: var(--fg-dim);
      font-size: 15px;
      line-height: 1.35;
      margin: 0;
    }}
  </style>
</head>
<body>
  <main>
    <h2>{heading}</h2>
    <form class="inline-form">
      <input value="{search_text}" placeholder="Enter city">
      <button type="submit"{disabled}>Fetch</button>
      <button type="button"{disabled}>{location_label}</button>
    </form>
    <div><button type="button">{unit_label}</button></div>
    {status}
    <div class="grid">
{cards}
    </div>
  </main>
</body>
</html>
"""

def _card_html(card: Card) -> str:
    lines = "".join(f'<p class="line">{escape(ln)}</p>' for ln in card.lines)
    return f'      <div class="card"><div class="title">{escape(card.title)}</div>{lines}</div>'

def build_html(
    view: WidgetView,
    resolution: tuple[int, int],
    columns: int,
    theme: dict,
) -> str:
    w, h = resolution
    status = []
    if view.loading:
        status.append('<p class="loading">Loading...</p>')
    if view.error:
        status.append(f'<p class="error">{escape(view.error)}</p>')
    disabled = " disabled" if view.controls_disabled else ""

    return HTML_TEMPLATE.format(
        w=w, h=h,
        cols=max(1, columns),
        pad=max(16, w // 80), gap=max(12, w // 120), radius=14,
        bg=theme.get("background", "#020402"),
        fg=theme.get("foreground", "#00ff66"),
        fg_dim=theme.get("foreground_dim", "#00aa44"),
        border=theme.get("panel_border", "#00aa44"),
        alert=theme.get("alert", "#ff3355"),
        heading=escape(view.heading),
        search_text=escape(view.search_text, quote=True),
        disabled=disabled,
        location_label=escape(view.location_label),
        unit_label=escape(view.unit_label),
        status="\n    ".join(status),
        cards="\n".join(_card_html(c) for c in view.cards),
    )

def render(
    out_path: Path,
    view: WidgetView,
    resolution: tuple[int, int],
    columns: int,
    theme: dict,
    web_cfg: dict,
) -> Path:
    """Write the widget as HTML; screenshot it to ``out_path`` if enabled.

    Returns the PNG path when a screenshot was taken, else the HTML path.
    """
    w, h = resolution
    html = build_html(view, resolution, columns, theme)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    html_path = out_path.with_suffix(".html")
    html_path.write_text(html, encoding="utf-8")

    if not bool(web_cfg.get("screenshot", True)):
        return html_path

    scale = float(web_cfg.get("viewport_device_scale_factor", 1))
    headless = bool(web_cfg.get("headless", True))
    browser_name = str(web_cfg.get("browser", "chromium"))

    with sync_playwright() as p:
        browser = getattr(p, browser_name).launch(headless=headless)
        page = browser.new_page(viewport={"width": w, "height": h}, device_scale_factor=scale)
        page.goto(html_path.as_uri())
        page.wait_for_timeout(250)  # small settle time for layout
        page.screenshot(path=str(out_path), full_page=False)
        browser.close()

    return out_path
