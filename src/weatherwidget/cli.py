from __future__ import annotations

from typing import TextIO
import argparse
import logging
import sys

from .app import build_widget
from .config import Config, load_config
from .renderers import render_with
from .widgets.weather import WeatherWidget

logger = logging.getLogger(__name__)

COMMANDS_HELP = """Commands:
  city <name>   submit a city and fetch its weather
  type <text>   edit the search text (fetches when it changes)
  fetch         fetch the current search city again
  locate        detect city from location
  unit          toggle between °C and °F
  show          redraw
  quit          exit
"""

def _render(cfg: Config, kind: str, widget: WeatherWidget, stream: TextIO) -> None:
    out = render_with(
        kind, widget.view(), cfg.output_path, cfg.resolution, cfg.columns,
        cfg.theme, cfg.web_renderer, stream=stream,
    )
    if out is not None:
        stream.write(f"Wrote {out}\n")

def run_command(widget: WeatherWidget, line: str) -> bool:
    """Apply one interactive command. Returns False when the user quits."""
    cmd, _, arg = line.strip().partition(" ")
    cmd = cmd.lower()
    arg = arg.strip()
    if cmd in ("quit", "exit", "q"):
        return False
    if cmd == "city":
        widget.manual_submit(arg or None)
    elif cmd == "type":
        widget.update_search_text(arg)
        widget.flush_effects()
    elif cmd == "fetch":
        widget.manual_submit()
    elif cmd == "locate":
        widget.request_location()
        widget.flush_effects()
    elif cmd == "unit":
        widget.toggle_unit()
    elif cmd not in ("show", ""):
        raise ValueError(f"Unknown command: {line.strip()}")
    return True

def interactive(cfg: Config, kind: str, widget: WeatherWidget, stdin: TextIO, stdout: TextIO) -> None:
    _render(cfg, kind, widget, stdout)
    stdout.write(COMMANDS_HELP)
    while True:
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        try:
            if not run_command(widget, line):
                break
        except ValueError as e:
            stdout.write(f"{e}\n{COMMANDS_HELP}")
            continue
        _render(cfg, kind, widget, stdout)

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="weatherwidget", description="City weather lookup widget")
    ap.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    ap.add_argument("--renderer", choices=["text", "pillow", "web"], help="Override renderer.kind from config")
    ap.add_argument("--city", help="Look up this city instead of the detected or stored one")
    ap.add_argument("--locate", action="store_true", help="Detect the city from location")
    ap.add_argument("--unit", choices=["C", "F"], help="Display unit")
    ap.add_argument("--interactive", "-i", action="store_true", help="Prompt for commands")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(args.config)
    kind = args.renderer or cfg.renderer_kind
    widget = build_widget(cfg)

    widget.initialize()
    widget.flush_effects()
    if args.locate:
        widget.request_location()
        widget.flush_effects()
    if args.city:
        widget.manual_submit(args.city)
    if args.unit and widget.state.unit.value != args.unit:
        widget.toggle_unit()

    if args.interactive:
        interactive(cfg, kind, widget, sys.stdin, sys.stdout)
    else:
        _render(cfg, kind, widget, sys.stdout)

    if widget.state.error:
        logger.info("Finished with error: %s", widget.state.error)
    return 0 if widget.state.snapshot is not None else 1
