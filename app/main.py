"""
main.py — OpenCV front-end entry point.

One cooperative loop, one frame at a time:

    Camera → SignDetector → suppress → TextAccumulator.observe → OpenCVUI

The tick timer is polled between frames on wall-clock time, so the
commit cadence does not depend on the frame rate.
"""
from __future__ import annotations
import argparse
from pathlib import Path
from typing import List, Optional

from app.config import AppConfig, default_config, load_config
from app.ui import ESC_KEY, OpenCVUI, command_for_key
from core.accumulator import TextAccumulator
from core.camera import Camera
from core.detector import SignDetector
from core.pipeline import FramePipeline
from core.tick_timer import TickTimer
from domain.errors import ConfigError, ModelLoadError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="SignSpell — finger-spelling to text (OpenCV window)")
    p.add_argument("--config", default="configs/runtime.json",
                   help="Optional runtime config JSON.")
    p.add_argument("--model", default=None, help="Path to the exported detector (.onnx).")
    p.add_argument("--camera", default=None, help="Camera index or video path.")
    p.add_argument("--interval", type=float, default=None,
                   help="Seconds between letter commits (0.5 - 5.0).")
    p.add_argument("--threshold", type=float, default=None,
                   help="Minimum score to draw a box / accept a letter.")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace, base: AppConfig = default_config) -> AppConfig:
    cfg = load_config(Path(args.config), base)
    return cfg.with_overrides(
        model_path=args.model,
        camera_device=args.camera,
        tick_period=args.interval,
        score_threshold=args.threshold,
    )


def run(config: AppConfig = default_config) -> int:
    print("="*55)
    print("  SIGNSPELL — finger-spelling to text")
    print("="*55)
    print(f"  Model     : {config.model_path}")
    print(f"  FPS cap   : {config.fps_limit}")
    print(f"  Score ≥   : {config.score_threshold:.0%}")
    print(f"  Interval  : {config.tick_period:.1f}s")
    print("  S start (clears) · Q stop · C clear · ESC quit")
    print("="*55 + "\n")

    print("[MODEL] Loading model...")
    try:
        detector = SignDetector(config.model_path, config.input_size)
    except ModelLoadError as exc:
        print(f"[ERROR] {exc}")
        return 1
    print("[MODEL] ✓ Model loaded")

    accumulator = TextAccumulator()
    pipeline    = FramePipeline(detector, accumulator,
                                score_threshold=config.score_threshold,
                                iou_threshold=config.iou_threshold)
    timer       = TickTimer(config.tick_period, config.tick_min_period, config.tick_max_period)
    try:
        camera  = Camera(config.camera_device, config.fps_limit)
    except RuntimeError as exc:
        print(f"[ERROR] {exc}")
        return 1
    ui          = OpenCVUI(config)

    steps = ui.interval_steps()

    try:
        while True:
            # 1. Capture
            frame = camera.read()
            if frame is None:
                break

            # 2. Infer + suppress + observe
            result = pipeline.process(frame)

            # 3. Interval slider (takes effect from the next tick)
            new_steps = ui.interval_steps()
            if new_steps != steps:
                steps = new_steps
                try:
                    timer.set_steps(steps)
                    print(f"[CONTROL] Interval → {timer.period:.1f}s")
                except ConfigError as exc:
                    print(f"[WARN] {exc}")

            # 4. Commit on the wall-clock schedule
            if timer.due():
                letter = accumulator.tick()
                if letter is not None:
                    print(f"[TEXT] +{letter!r} → {accumulator.output_text!r}")

            # 5. Render
            ui.render(frame, result, accumulator.snapshot(), timer.period)

            # 6. Controls
            key = ui.poll_key()
            if key & 0xFF == ESC_KEY:
                break
            command = command_for_key(key)
            if command is not None:
                accumulator.apply(command)
                print(f"[CONTROL] {command.value} → {accumulator.state.value}")

    finally:
        timer.cancel()
        accumulator.close()
        camera.release()
        ui.close()
        print("\n✓ Application closed cleanly")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ConfigError as exc:
        print(f"[ERROR] {exc}")
        return 2
    return run(config)


if __name__ == "__main__":
    raise SystemExit(main())
