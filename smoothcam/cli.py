from __future__ import annotations

import argparse

from smoothcam.app import run_app, CONTROLLERS
from smoothcam.config import (
    APP_VERSION,
    DEFAULT_CONTROLLER,
    DEFAULT_EYE,
    DEFAULT_TARGET,
)

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="smoothcam", description=f"Smoothed FPS / Unreal / orbit camera rigs (ModernGL + pygame) v{APP_VERSION}")
    p.add_argument("--controller", choices=list(CONTROLLERS), default=DEFAULT_CONTROLLER, help=f"control scheme enabled at start (default: {DEFAULT_CONTROLLER})")
    p.add_argument("--eye", type=float, nargs=3, metavar=("X", "Y", "Z"), default=list(DEFAULT_EYE), help="initial eye position")
    p.add_argument("--target", type=float, nargs=3, metavar=("X", "Y", "Z"), default=list(DEFAULT_TARGET), help="initial target position")
    p.add_argument("--smoothing", type=float, default=None, help="smoothing weight in [0, 1) for every rig; higher = heavier lag (default: per controller)")
    p.add_argument("--rotate-sensitivity", type=float, default=None, help="mouse look radians per pixel (fps/unreal)")
    p.add_argument("--translate-sensitivity", type=float, default=None, help="keyboard move units per frame (fps)")
    p.add_argument("--keyboard-move-sensitivity", type=float, default=None, help="initial W/S/A/D/Q/E units per frame while dragging (unreal, >= 0.01)")
    p.add_argument("--grab", action="store_true", help="grab and hide the mouse cursor")
    p.add_argument("--debug", action="store_true", help="enable debug overlay (HUD + logs)")
    return p.parse_args(argv)

def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    run_app(
        controller=str(args.controller),
        eye=tuple(float(v) for v in args.eye),
        target=tuple(float(v) for v in args.target),
        smoothing=args.smoothing,
        rotate_sensitivity=args.rotate_sensitivity,
        translate_sensitivity=args.translate_sensitivity,
        keyboard_move_sensitivity=args.keyboard_move_sensitivity,
        grab=bool(args.grab),
        debug=bool(args.debug),
    )
