# collage.py
"""
The slow-fading background collage.

A CollageItem is a static image that fades in once spawned. The
CollageSpawner adds one item immediately when started and another on
every tick of a repeating timer, and removes all of them at once when
stopped.
"""
import logging
from typing import Dict, Any, List, Optional, Sequence, Tuple

import numpy as np
import pygame

from constants import (
    COLLAGE_INTERVAL_MS, COLLAGE_FADE_STEP, COLLAGE_SCALE_RANGE,
    COLLAGE_MARGIN, COLLAGE_SPAWN_EVENT, MAX_ALPHA
)
from utils import validate_range

# --- Data Contracts ---
#
# class CollageSpawner:
#   - __init__(self, params, images, rng, size, scheduler=None):
#     - Inputs:
#       - params: The "collage" section of config.json.
#         - "interval_ms": int
#         - "fade_step": int
#         - "scale_range": [low, high]
#         - "margin": float, fraction of each edge kept free.
#       - images: Non-empty list of collage surfaces.
#       - rng: The application's seeded random generator.
#       - size: Initial (width, height) of the drawing surface.
#       - scheduler: Object with schedule(interval_ms) -> handle and
#         cancel(handle). Defaults to PygameTimer.
#   - start(self) -> None: Stopped -> Running. No-op while Running.
#   - stop(self) -> None: Running -> Stopped. Cancels the schedule, then
#     clears every item. No-op while Stopped.
#   - on_timer(self) -> None: Spawns one item if Running.
#   - Invariants: At most one schedule is active at any time.


class CollageItem:
    """
    A persistent image that fades in and stays put.
    """
    def __init__(self, image: pygame.Surface, x: float, y: float, scale: float,
                 fade_step: int = COLLAGE_FADE_STEP):
        self.image = image
        self.x = x
        self.y = y
        self.scale = scale
        self.fade_step = fade_step
        self.opacity = 0
        self.rotation = 0

        size = (max(1, int(image.get_width() * scale)), max(1, int(image.get_height() * scale)))
        # Scale never changes, so the scaled surface is built once.
        self.surface = pygame.transform.smoothscale(image, size)

    def advance(self):
        if self.opacity < MAX_ALPHA:
            self.opacity += self.fade_step

    def drawn_alpha(self) -> int:
        return min(self.opacity, MAX_ALPHA)

    def display(self, surface: pygame.Surface):
        self.surface.set_alpha(self.drawn_alpha())
        surface.blit(self.surface, self.surface.get_rect(center=(int(self.x), int(self.y))))


class PygameTimer:
    """Repeating schedule backed by pygame.time.set_timer."""
    def __init__(self, event_type: int = COLLAGE_SPAWN_EVENT):
        self.event_type = event_type

    def schedule(self, interval_ms: int) -> int:
        pygame.time.set_timer(self.event_type, interval_ms)
        return self.event_type

    def cancel(self, handle: int):
        pygame.time.set_timer(handle, 0)
        # Every schedule shares one event type, so drop ticks already queued.
        pygame.event.clear(handle)


class CollageSpawner:
    """
    Spawns collage items on a fixed interval while running.
    """
    def __init__(self, params: Dict[str, Any], images: Sequence[pygame.Surface],
                 rng: np.random.Generator, size: Tuple[int, int], scheduler=None):
        self.images = images
        self.rng = rng
        self.width, self.height = size
        self.scheduler = scheduler if scheduler is not None else PygameTimer()
        self.interval_ms = int(params.get('interval_ms', COLLAGE_INTERVAL_MS))
        self.fade_step = int(params.get('fade_step', COLLAGE_FADE_STEP))
        self.scale_range = validate_range('scale_range', params.get('scale_range', COLLAGE_SCALE_RANGE))
        self.margin = float(params.get('margin', COLLAGE_MARGIN))

        if self.interval_ms < 1:
            msg = f"Configuration error: interval_ms must be at least 1, got {self.interval_ms}."
            logging.critical(msg)
            raise ValueError(msg)

        self.items: List[CollageItem] = []
        self.timer: Optional[int] = None

    @property
    def running(self) -> bool:
        return self.timer is not None

    def resize(self, width: int, height: int):
        self.width, self.height = width, height

    def spawn(self) -> CollageItem:
        """Adds one randomly chosen, randomly placed item using the current surface size."""
        image = self.images[int(self.rng.integers(len(self.images)))]
        item = CollageItem(
            image,
            x=float(self.rng.uniform(self.width * self.margin, self.width * (1 - self.margin))),
            y=float(self.rng.uniform(self.height * self.margin, self.height * (1 - self.margin))),
            scale=float(self.rng.uniform(*self.scale_range)),
            fade_step=self.fade_step
        )
        self.items.append(item)
        logging.debug(f"Collage item spawned at ({item.x:.0f}, {item.y:.0f}), scale {item.scale:.2f}.")
        return item

    def start(self):
        if self.running:
            return
        self.spawn()
        self.timer = self.scheduler.schedule(self.interval_ms)
        logging.info(f"Collage started, adding an image every {self.interval_ms} ms.")

    def stop(self):
        if not self.running:
            return
        # Cancel before clearing so no pending tick repopulates the collage.
        self.scheduler.cancel(self.timer)
        self.timer = None
        cleared = len(self.items)
        self.items.clear()
        logging.info(f"Collage stopped, {cleared} images cleared.")

    def toggle(self):
        if self.running:
            self.stop()
        else:
            self.start()

    def on_timer(self):
        # Ticks already queued when the collage was stopped are dropped.
        if self.running:
            self.spawn()
