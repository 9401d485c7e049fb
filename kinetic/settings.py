from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import logging

import yaml

logger = logging.getLogger(__name__)

# Keys that tuned the old frame-stepped bounce simulation. Deceleration is now
# computed in closed form, so they have nothing left to tune.
_LEGACY_SCROLL_KEYS = ("penetration_deceleration", "penetration_acceleration")


@dataclass
class ScrollOptions:
    animating: bool = True              # deceleration, snap back and animated scroll_to
    animation_duration: float = 250.0   # ms, for scroll_to / scroll_by animations
    bouncing: bool = True               # allow temporary travel outside [0, max]

    def __post_init__(self):
        self.animating = bool(self.animating)
        self.bouncing = bool(self.bouncing)
        self.animation_duration = max(0.0, float(self.animation_duration))


@dataclass
class ScrollTuning:
    min_drag_distance: float = 5.0                  # movement before a press becomes a drag
    edge_resistance: float = 3.0                    # overscroll moves 1/3 as fast
    friction_per_frame: float = 0.95
    min_velocity_before_terminating: float = 0.1    # per frame
    min_velocity_for_deceleration: float = 1.0      # per frame
    fps: int = 60
    history_limit: int = 60                         # trim once the history grows past this
    history_keep: int = 30                          # newest samples kept by a trim
    velocity_window_ms: float = 100.0               # release lookback window


@dataclass
class WindowCfg:
    width: int = 480
    height: int = 720
    title: str = "Kinetic Scroll"
    bg_rgb: tuple[int, int, int] = (14, 15, 18)


@dataclass
class DemoCfg:
    row_height: int = 56
    row_count: int = 200
    control_every: int = 10             # every n-th row is a form control
    wheel_pixels: int = 120
    row_rgb: tuple[int, int, int] = (32, 34, 40)
    row_alt_rgb: tuple[int, int, int] = (26, 28, 33)
    control_rgb: tuple[int, int, int] = (64, 84, 130)
    text_rgb: tuple[int, int, int] = (235, 235, 235)


@dataclass
class AppCfg:
    fps: int = 60
    log_level: str = "INFO"
    window: WindowCfg = field(default_factory=WindowCfg)
    scroll: ScrollOptions = field(default_factory=ScrollOptions)
    tuning: ScrollTuning = field(default_factory=ScrollTuning)
    demo: DemoCfg = field(default_factory=DemoCfg)


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def load_settings(path: str = "config/defaults.yaml") -> AppCfg:
    data = {}
    p = Path(path)
    if p.exists():
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.info("No settings file at '%s', using defaults", p)

    scroll = _get(data, "scroll", {}) or {}
    for key in _LEGACY_SCROLL_KEYS:
        if key in scroll:
            logger.warning("Ignoring legacy scroll option '%s'", key)

    win, tun, dem = WindowCfg(), ScrollTuning(), DemoCfg()
    return AppCfg(
        fps=int(_get(data, "fps", 60)),
        log_level=str(_get(data, "log_level", "INFO")).upper(),
        window=WindowCfg(
            width=int(_get(data, "window.width", win.width)),
            height=int(_get(data, "window.height", win.height)),
            title=str(_get(data, "window.title", win.title)),
            bg_rgb=tuple(_get(data, "window.bg_rgb", win.bg_rgb)),
        ),
        scroll=ScrollOptions(
            animating=_get(data, "scroll.animating", True),
            animation_duration=_get(data, "scroll.animation_duration", 250.0),
            bouncing=_get(data, "scroll.bouncing", True),
        ),
        tuning=ScrollTuning(
            min_drag_distance=float(_get(data, "tuning.min_drag_distance", tun.min_drag_distance)),
            edge_resistance=float(_get(data, "tuning.edge_resistance", tun.edge_resistance)),
            friction_per_frame=float(_get(data, "tuning.friction_per_frame", tun.friction_per_frame)),
            min_velocity_before_terminating=float(_get(data, "tuning.min_velocity_before_terminating", tun.min_velocity_before_terminating)),
            min_velocity_for_deceleration=float(_get(data, "tuning.min_velocity_for_deceleration", tun.min_velocity_for_deceleration)),
            fps=int(_get(data, "tuning.fps", tun.fps)),
            history_limit=int(_get(data, "tuning.history_limit", tun.history_limit)),
            history_keep=int(_get(data, "tuning.history_keep", tun.history_keep)),
            velocity_window_ms=float(_get(data, "tuning.velocity_window_ms", tun.velocity_window_ms)),
        ),
        demo=DemoCfg(
            row_height=int(_get(data, "demo.row_height", dem.row_height)),
            row_count=int(_get(data, "demo.row_count", dem.row_count)),
            control_every=int(_get(data, "demo.control_every", dem.control_every)),
            wheel_pixels=int(_get(data, "demo.wheel_pixels", dem.wheel_pixels)),
            row_rgb=tuple(_get(data, "demo.row_rgb", dem.row_rgb)),
            row_alt_rgb=tuple(_get(data, "demo.row_alt_rgb", dem.row_alt_rgb)),
            control_rgb=tuple(_get(data, "demo.control_rgb", dem.control_rgb)),
            text_rgb=tuple(_get(data, "demo.text_rgb", dem.text_rgb)),
        ),
    )
