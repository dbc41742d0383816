import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from assets import AssetStore


def make_image(color, size=(20, 20)):
    image = pygame.Surface(size, pygame.SRCALPHA)
    image.fill(color)
    return image


class RecordingScheduler:
    """Stands in for the pygame timer and records every call."""
    def __init__(self):
        self.active = set()
        self.scheduled = []
        self.cancelled = []
        self._next = 100

    def schedule(self, interval_ms):
        handle = self._next
        self._next += 1
        self.active.add(handle)
        self.scheduled.append((handle, interval_ms))
        return handle

    def cancel(self, handle):
        self.active.discard(handle)
        self.cancelled.append(handle)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def assets():
    set_a = [make_image((255, 0, 0, 255)), make_image((0, 255, 0, 255)), make_image((0, 0, 255, 255))]
    set_b = [make_image((255, 255, 0, 255)), make_image((0, 255, 255, 255))]
    collage = [make_image((128, 128, 128, 255), (40, 30)), make_image((64, 64, 64, 255), (30, 40))]
    return AssetStore([set_a, set_b], collage)


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def surface():
    return pygame.Surface((400, 300))
