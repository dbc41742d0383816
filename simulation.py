# simulation.py
"""
Handles the per-frame application state and update order.

This module defines the EmissionController, which decides when a new
tear is emitted, and the Simulation class, which owns every piece of
mutable state (tears, collage, emission flags, pointer position, surface
size) and advances and draws all of it once per frame.
"""
import logging
from typing import Dict, Any, List, Optional, Tuple

import numpy as np
import pygame

from assets import AssetStore
from collage import CollageSpawner
from constants import (
    EMISSION_RATE, THROTTLED_EMISSION_RATE, THROTTLE_FPS_THRESHOLD,
    HUE_SPEED, BACKGROUND_COLOR
)
from particle import TearSystem

# --- Data Contracts ---
#
# class EmissionController:
#   - __init__(self, params: Dict[str, Any]):
#     - Inputs:
#       - params: The "emission" section of config.json.
#         - "rate": int, frames between tears.
#         - "throttle_enabled": bool
#         - "throttle_fps_threshold": float
#         - "throttled_rate": int
#         - "hue_enabled": bool
#         - "hue_speed": float, degrees per millisecond.
#   - States: Idle (is_emitting False) and Emitting (is_emitting True).
#
# class Simulation:
#   - __init__(self, config, assets, size, rng=None, scheduler=None):
#     - Inputs:
#       - config: The full config.json dictionary.
#       - assets: A loaded AssetStore.
#       - size: Initial (width, height) of the drawing surface.
#       - rng: Optional random generator. Built from run_control.seed if None.
#       - scheduler: Optional collage scheduler, see collage.py.
#   - step(self, surface, now_ms, fps=0.0) -> None:
#     - Side Effects: Clears surface, emits, advances and draws the collage
#       and then the tears, and re-evaluates the emission throttle.


class EmissionController:
    """
    Idle/Emitting state machine plus the emission rate and active tear set.
    """
    def __init__(self, params: Dict[str, Any]):
        self.base_rate = int(params.get('rate', EMISSION_RATE))
        self.throttle_enabled = bool(params.get('throttle_enabled', True))
        self.throttle_fps_threshold = float(params.get('throttle_fps_threshold', THROTTLE_FPS_THRESHOLD))
        self.throttled_rate = int(params.get('throttled_rate', THROTTLED_EMISSION_RATE))
        self.hue_enabled = bool(params.get('hue_enabled', False))
        self.hue_speed = float(params.get('hue_speed', HUE_SPEED))

        if self.base_rate < 1 or self.throttled_rate < 1:
            msg = (
                f"Configuration error: emission rates must be at least 1 frame, "
                f"got rate={self.base_rate}, throttled_rate={self.throttled_rate}."
            )
            logging.critical(msg)
            raise ValueError(msg)

        self.emission_rate = self.base_rate
        self.is_emitting = False
        self.start_time = 0
        self.active_set_index = 0

    def start(self, now_ms: int):
        if not self.is_emitting:
            self.is_emitting = True
            self.start_time = now_ms
            logging.info("Emission started.")

    def stop(self):
        if self.is_emitting:
            self.is_emitting = False
            logging.info("Emission stopped.")

    def should_emit(self, frame: int) -> bool:
        return self.is_emitting and frame % self.emission_rate == 0

    def update_throttle(self, fps: float):
        """
        Lowers tear density while the measured frame rate is below the threshold.

        An fps of 0 means the clock has not measured anything yet and leaves
        the rate unchanged.
        """
        if not self.throttle_enabled or fps <= 0:
            return
        rate = self.throttled_rate if fps < self.throttle_fps_threshold else self.base_rate
        if rate != self.emission_rate:
            logging.info(f"Frame rate {fps:.1f} fps, emission rate now every {rate} frames.")
            self.emission_rate = rate

    def hue(self, now_ms: int) -> Optional[float]:
        if not self.hue_enabled:
            return None
        return ((now_ms - self.start_time) * self.hue_speed) % 360

    def toggle_image_set(self):
        self.active_set_index = 1 - self.active_set_index
        logging.info(f"Active tear set is now {'AB'[self.active_set_index]}.")


class Simulation:
    """
    Owns all mutable state and runs one frame at a time.
    """
    def __init__(self, config: Dict[str, Any], assets: AssetStore, size: Tuple[int, int],
                 rng: Optional[np.random.Generator] = None, scheduler=None):
        run_params = config.get('run_control', {})
        display_params = config.get('display', {})

        # All randomness is controlled by a single master seed.
        self.rng = rng if rng is not None else np.random.default_rng(run_params.get('seed'))
        self.assets = assets
        self.background_color = tuple(display_params.get('background_color', BACKGROUND_COLOR))
        self.width, self.height = size
        self.pointer = (self.width / 2, self.height / 2)
        self.frame_count = 0

        self.emission = EmissionController(config.get('emission', {}))
        self.tears = TearSystem(config.get('tears', {}), self.rng)
        self.collage = CollageSpawner(
            config.get('collage', {}), assets.collage_images, self.rng, size, scheduler
        )

        logging.info(f"Simulation initialized for a {self.width}x{self.height} surface.")

    @property
    def active_tear_set(self) -> List[pygame.Surface]:
        return self.assets.tear_sets[self.emission.active_set_index]

    def set_pointer(self, x: float, y: float):
        self.pointer = (x, y)

    def start_emitting(self, now_ms: int):
        self.emission.start(now_ms)

    def stop_emitting(self):
        self.emission.stop()

    def toggle_tear_set(self):
        self.emission.toggle_image_set()

    def toggle_collage(self):
        self.collage.toggle()

    def resize(self, width: int, height: int):
        if (width, height) == (self.width, self.height):
            return
        self.width, self.height = width, height
        self.collage.resize(width, height)
        logging.info(f"Surface resized to {width}x{height}.")

    def step(self, surface: pygame.Surface, now_ms: int, fps: float = 0.0):
        """
        Executes one frame.
        """
        self.frame_count += 1

        # 1. Clear
        surface.fill(self.background_color)

        # 2. Emission
        if self.emission.should_emit(self.frame_count):
            self.tears.emit(self.pointer[0], self.pointer[1], self.active_tear_set)

        # 3. Collage, painted first so tears layer on top
        for item in self.collage.items:
            item.advance()
            item.display(surface)

        # 4. Tears
        self.tears.step(surface, self.emission.hue(now_ms))

        # 5. Re-evaluate the throttle against the measured frame rate
        self.emission.update_throttle(fps)

    def shutdown(self):
        self.collage.stop()
        self.tears.clear()
        logging.info("Simulation state torn down.")
