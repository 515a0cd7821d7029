from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple, Union
import json

from core.tick_timer import validate_period
from domain.errors import ConfigError
from utils.constants import (
    FPS_LIMIT,
    IOU_THRESHOLD,
    MODEL_INPUT_SIZE,
    SCORE_THRESHOLD,
    TICK_DEFAULT_PERIOD,
    TICK_MAX_PERIOD,
    TICK_MIN_PERIOD,
    TICK_STEP_SECONDS,
)


@dataclass
class AppConfig:
    """
    Central configuration injected into all components.
    """
    # ---- paths ---------------------------------------------------------
    model_path: Path = Path("models/asl_detector.onnx")

    # ---- camera --------------------------------------------------------
    camera_device: Union[int, str] = 0
    fps_limit: int = FPS_LIMIT

    # ---- detector ------------------------------------------------------
    input_size: Tuple[int, int] = MODEL_INPUT_SIZE

    # ---- post-processing -----------------------------------------------
    score_threshold: float = SCORE_THRESHOLD
    iou_threshold: float = IOU_THRESHOLD

    # ---- tick (seconds) ------------------------------------------------
    tick_period: float = TICK_DEFAULT_PERIOD
    tick_min_period: float = TICK_MIN_PERIOD
    tick_max_period: float = TICK_MAX_PERIOD

    # ---- ui ------------------------------------------------------------
    window_name: str = "SignSpell"
    mirror: bool = True

    # ------------------------------------------------------------------
    def validate(self) -> "AppConfig":
        """Raise ConfigError on the first bad value; returns self."""
        for name in ("score_threshold", "iou_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be within [0, 1], got {value}")
        if self.fps_limit <= 0:
            raise ConfigError(f"fps_limit must be positive, got {self.fps_limit}")
        if len(self.input_size) != 2 or min(self.input_size) <= 0:
            raise ConfigError(f"input_size must be two positive ints, got {self.input_size}")
        if self.tick_min_period <= 0 or self.tick_min_period > self.tick_max_period:
            raise ConfigError(
                f"Invalid tick bounds [{self.tick_min_period}, {self.tick_max_period}]"
            )
        validate_period(self.tick_period, self.tick_min_period, self.tick_max_period)
        if abs(self.tick_steps * TICK_STEP_SECONDS - self.tick_period) > 1e-9:
            raise ConfigError(
                f"tick_period must be a multiple of {TICK_STEP_SECONDS}s, got {self.tick_period}"
            )
        return self

    @property
    def tick_steps(self) -> int:
        """tick_period as interval slider steps."""
        return int(round(self.tick_period / TICK_STEP_SECONDS))

    def with_overrides(self, **overrides: Any) -> "AppConfig":
        """Copy with the non-None overrides applied, then validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return _coerce(replace(self, **changes)).validate()


def _coerce(cfg: AppConfig) -> AppConfig:
    device = cfg.camera_device
    if isinstance(device, str) and device.isdigit():
        device = int(device)
    try:
        return replace(
            cfg,
            model_path=Path(cfg.model_path),
            camera_device=device,
            fps_limit=int(cfg.fps_limit),
            input_size=tuple(int(v) for v in cfg.input_size),
            score_threshold=float(cfg.score_threshold),
            iou_threshold=float(cfg.iou_threshold),
            tick_period=float(cfg.tick_period),
            tick_min_period=float(cfg.tick_min_period),
            tick_max_period=float(cfg.tick_max_period),
            mirror=bool(cfg.mirror),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid config value: {exc}") from exc


def load_config(config_path: Path, base: AppConfig | None = None) -> AppConfig:
    """
    Read JSON overrides on top of `base` (defaults if omitted).

    A missing file gives the defaults; malformed JSON or unknown keys
    raise ConfigError.
    """
    cfg = base or AppConfig()
    config_path = Path(config_path)
    if not config_path.exists():
        return cfg.validate()

    try:
        data: Dict[str, Any] = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must hold a JSON object")

    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

    return cfg.with_overrides(**data)


# Default instance; override in tests.
default_config = AppConfig()
