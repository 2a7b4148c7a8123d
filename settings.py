import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path("speedread_settings.json")

MIN_WPM = 50
MAX_WPM = 5000

PIVOT_STRATEGIES = ("simple", "weighted")

DEFAULTS = {
    "wpm": 500,
    "pivot_strategy": "simple",
    "enable_file_picker": True,
    "enable_clutter_toggle": True,
    "reduced_clutter": False,
}


@dataclass
class ReaderConfig:
    wpm: int = 500
    pivot_strategy: str = "simple"  # simple, weighted
    enable_file_picker: bool = True
    enable_clutter_toggle: bool = True
    reduced_clutter: bool = False
    poll_timeout_ms: int = 50
    wpm_step: int = 50


def _coerce(key, value):
    default = DEFAULTS[key]
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if isinstance(default, int):
        wpm = int(value)
        if not MIN_WPM <= wpm <= MAX_WPM:
            raise ValueError(f"wpm {wpm} outside [{MIN_WPM}, {MAX_WPM}]")
        return wpm
    text = str(value).strip().lower()
    if key == "pivot_strategy" and text not in PIVOT_STRATEGIES:
        raise ValueError(f"unknown pivot strategy {text!r}")
    return text


def load_settings(path=SETTINGS_PATH):
    settings = dict(DEFAULTS)
    path = Path(path)
    if not path.exists():
        return settings

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings

    if not isinstance(raw, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return settings

    for key in DEFAULTS:
        if key not in raw or raw[key] is None:
            continue
        try:
            settings[key] = _coerce(key, raw[key])
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring setting %s from %s: %s", key, path, exc)
    return settings


def build_config(settings, args=None) -> ReaderConfig:
    """Settings file values, overridden by any command-line flags that were given."""
    config = ReaderConfig(
        wpm=settings["wpm"],
        pivot_strategy=settings["pivot_strategy"],
        enable_file_picker=settings["enable_file_picker"],
        enable_clutter_toggle=settings["enable_clutter_toggle"],
        reduced_clutter=settings["reduced_clutter"],
    )
    if args is None:
        return config
    if getattr(args, "wpm", None) is not None:
        config.wpm = args.wpm
    if getattr(args, "pivot", None) is not None:
        config.pivot_strategy = args.pivot
    if getattr(args, "zen", False):
        config.reduced_clutter = True
    if getattr(args, "no_picker", False):
        config.enable_file_picker = False
    return config
