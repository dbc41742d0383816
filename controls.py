# controls.py
"""
Maps pygame input events onto simulation state transitions.
"""
import logging
from typing import Callable

import pygame

from constants import COLLAGE_SPAWN_EVENT
from simulation import Simulation

# --- Data Contracts ---
#
# class InputHandler:
#   - __init__(self, simulation: Simulation, get_ticks: Callable[[], int]):
#     - Inputs:
#       - simulation: The Simulation whose state is driven by input.
#       - get_ticks: Millisecond clock, pygame.time.get_ticks by default.
#   - handle(self, event: pygame.event.Event) -> bool:
#     - Outputs: False if the event asks the application to quit.
#     - Side Effects: Pointer press/release, touch start/end and space
#       down/up start and stop emission; 's' toggles the collage; 't'
#       toggles the active tear set; resize and collage timer events are
#       forwarded to the simulation.

# Scroll wheel clicks also arrive as buttons 4 and up.
POINTER_BUTTONS = (1, 2, 3)


class InputHandler:
    """
    Translates raw pygame events into simulation calls.
    """
    def __init__(self, simulation: Simulation, get_ticks: Callable[[], int] = pygame.time.get_ticks):
        self.simulation = simulation
        self.get_ticks = get_ticks

    def _touch_position(self, event: pygame.event.Event):
        # Finger coordinates are normalised to [0, 1].
        return event.x * self.simulation.width, event.y * self.simulation.height

    def handle(self, event: pygame.event.Event) -> bool:
        sim = self.simulation

        if event.type == pygame.QUIT:
            logging.info("Quit event received.")
            return False

        if event.type == COLLAGE_SPAWN_EVENT:
            sim.collage.on_timer()

        elif event.type == pygame.VIDEORESIZE:
            sim.resize(event.w, event.h)

        elif event.type == pygame.MOUSEMOTION:
            sim.set_pointer(*event.pos)

        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button in POINTER_BUTTONS:
                sim.set_pointer(*event.pos)
                sim.start_emitting(self.get_ticks())

        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button in POINTER_BUTTONS:
                sim.stop_emitting()

        elif event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
            sim.set_pointer(*self._touch_position(event))
            if event.type == pygame.FINGERDOWN:
                sim.start_emitting(self.get_ticks())

        elif event.type == pygame.FINGERUP:
            sim.stop_emitting()

        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed.")
                return False
            if event.key == pygame.K_SPACE:
                sim.start_emitting(self.get_ticks())
            elif event.key == pygame.K_s:
                sim.toggle_collage()
            elif event.key == pygame.K_t:
                sim.toggle_tear_set()

        elif event.type == pygame.KEYUP:
            if event.key == pygame.K_SPACE:
                sim.stop_emitting()

        return True
