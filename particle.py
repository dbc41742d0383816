# particle.py
"""
Manages the state of all tears (falling, fading sprites).

This module defines the Tear class, a single sprite with constant-gravity
Euler kinematics and a countdown lifespan, and the TearSystem class, which
owns the ordered set of live tears, creates new ones and expires old ones.
"""
import logging
from typing import Dict, Any, List, Optional, Sequence

import numpy as np
import pygame

from constants import (
    TEAR_LIFESPAN, TEAR_SIZE_RANGE, TEAR_VX_RANGE, TEAR_VY_RANGE,
    TEAR_GRAVITY, TEAR_MIN_SCALE, TEAR_MAX_SCALE, MAX_ALPHA
)
from utils import map_range, validate_range, hue_to_rgb

# --- Data Contracts ---
#
# class Tear:
#   - advance(self) -> None:
#     - Side Effects: vy += ay, then x += vx, y += vy, then life -= 1.
#   - alpha(self) -> float: life mapped from [0, lifespan] to [0, 255].
#   - scale_factor(self) -> float: life mapped from [0, lifespan] to [0.1, 1.0].
#   - display(self, surface, hue=None) -> None:
#     - Side Effects: Draws onto surface only. Tear state is not modified.
#   - Invariants: 0 <= life <= lifespan while the tear is in a TearSystem.
#
# class TearSystem:
#   - __init__(self, params: Dict[str, Any], rng: np.random.Generator):
#     - Inputs:
#       - params: The "tears" section of config.json.
#         - "lifespan_frames": int
#         - "size_range", "vx_range", "vy_range": [low, high]
#         - "gravity": float
#       - rng: The application's seeded random generator.
#   - emit(self, x, y, images) -> Tear: Appends one new tear.
#   - step(self, surface, hue=None) -> int:
#     - Side Effects: Advances and draws every tear in reverse index order,
#       removing each one whose life has reached 0 after it was drawn.
#     - Outputs: Number of tears removed.


class Tear:
    """
    A single falling, fading sprite.
    """
    def __init__(self, x: float, y: float, vx: float, vy: float, ay: float,
                 size: float, lifespan: int, image: pygame.Surface, hue_offset: float = 0.0):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.ay = ay
        self.size = size
        self.lifespan = lifespan
        self.life = lifespan
        self.image = image
        self.hue_offset = hue_offset

    def advance(self):
        self.vy += self.ay
        self.x += self.vx
        self.y += self.vy
        self.life -= 1

    def alpha(self) -> float:
        return map_range(self.life, 0, self.lifespan, 0, MAX_ALPHA)

    def scale_factor(self) -> float:
        # Tears shrink as they die.
        return map_range(self.life, 0, self.lifespan, TEAR_MIN_SCALE, TEAR_MAX_SCALE)

    def display(self, surface: pygame.Surface, hue: Optional[float] = None):
        """
        Draws the tear centred on its position.

        Args:
            surface (pygame.Surface): Target surface.
            hue (Optional[float]): Global hue in degrees. When given, the
                sprite is tinted with (hue + hue_offset); otherwise only
                its opacity changes.
        """
        alpha = int(round(max(0.0, min(self.alpha(), MAX_ALPHA))))
        diameter = max(1, int(self.size * self.scale_factor()))
        sprite = pygame.transform.smoothscale(self.image, (diameter, diameter))

        if hue is None:
            tint = (255, 255, 255)
        else:
            tint = hue_to_rgb(hue + self.hue_offset)
        sprite.fill((*tint, alpha), special_flags=pygame.BLEND_RGBA_MULT)

        surface.blit(sprite, sprite.get_rect(center=(int(self.x), int(self.y))))

    def __repr__(self):
        return (f"Tear(pos=({self.x:.2f}, {self.y:.2f}), vel=({self.vx:.2f}, {self.vy:.2f}), "
                f"size={self.size:.1f}, life={self.life}/{self.lifespan})")


class TearSystem:
    """
    The ordered set of live tears. List order is paint order.
    """
    def __init__(self, params: Dict[str, Any], rng: np.random.Generator):
        """
        Initializes the tear system.

        Args:
            params (Dict[str, Any]): Tear parameters from config.
            rng (np.random.Generator): Source of all tear randomness.
        """
        self.rng = rng
        self.lifespan = int(params.get('lifespan_frames', TEAR_LIFESPAN))
        self.size_range = validate_range('size_range', params.get('size_range', TEAR_SIZE_RANGE))
        self.vx_range = validate_range('vx_range', params.get('vx_range', TEAR_VX_RANGE))
        self.vy_range = validate_range('vy_range', params.get('vy_range', TEAR_VY_RANGE))
        self.gravity = float(params.get('gravity', TEAR_GRAVITY))

        if self.lifespan < 1:
            msg = f"Configuration error: lifespan_frames must be at least 1, got {self.lifespan}."
            logging.critical(msg)
            raise ValueError(msg)

        self.tears: List[Tear] = []

        logging.info(
            f"TearSystem initialized: lifespan {self.lifespan} frames, "
            f"gravity {self.gravity}."
        )

    def emit(self, x: float, y: float, images: Sequence[pygame.Surface]) -> Tear:
        """Creates a tear at (x, y) using a uniformly chosen image from images."""
        index = int(self.rng.integers(len(images)))
        tear = Tear(
            x=float(x),
            y=float(y),
            vx=float(self.rng.uniform(*self.vx_range)),
            vy=float(self.rng.uniform(*self.vy_range)),
            ay=self.gravity,
            size=float(self.rng.uniform(*self.size_range)),
            lifespan=self.lifespan,
            image=images[index],
            hue_offset=index * 360.0 / len(images)
        )
        self.tears.append(tear)
        logging.debug(f"Emitted {tear!r} with image {index}.")
        return tear

    def step(self, surface: pygame.Surface, hue: Optional[float] = None) -> int:
        removed = 0
        # Reverse order keeps indices valid while removing in place.
        for i in range(len(self.tears) - 1, -1, -1):
            tear = self.tears[i]
            tear.advance()
            tear.display(surface, hue)
            if tear.life <= 0:
                del self.tears[i]
                removed += 1
        return removed

    def clear(self):
        self.tears.clear()

    def __len__(self):
        return len(self.tears)
