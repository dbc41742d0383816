# visualization.py
"""
Owns the pygame window and drives one rendered frame at a time.
"""
import logging
from typing import Dict, Any, Tuple

import pygame

from constants import FULLSCREEN, DEFAULT_WIDTH, DEFAULT_HEIGHT, FPS, WINDOW_CAPTION
from controls import InputHandler
from simulation import Simulation

# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, params: Dict[str, Any]):
#     - Inputs:
#       - params: The "display" section of config.json.
#         - "fullscreen": bool
#         - "width", "height": int, window size when not fullscreen.
#         - "fps": int, frame rate cap.
#         - "caption": str
#     - Side Effects: Initializes pygame and creates the display surface.
#
#   - draw(self, simulation: Simulation, controls: InputHandler) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Dispatches pending events, re-queries the display
#       surface, runs one simulation frame onto it and presents it.


class Visualizer:
    """
    The window, its frame clock and the per-frame present.
    """
    def __init__(self, params: Dict[str, Any]):
        pygame.init()

        if params.get('fullscreen', FULLSCREEN):
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width = params.get('width', DEFAULT_WIDTH)
            height = params.get('height', DEFAULT_HEIGHT)
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption(params.get('caption', WINDOW_CAPTION))
        self.clock = pygame.time.Clock()
        self.fps_cap = params.get('fps', FPS)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    @property
    def size(self) -> Tuple[int, int]:
        return self.screen.get_size()

    @property
    def fps(self) -> float:
        return self.clock.get_fps()

    def draw(self, simulation: Simulation, controls: InputHandler) -> bool:
        """
        Handles events, then renders and presents one frame.

        Returns:
            bool: False if the application should exit, True otherwise.
        """
        for event in pygame.event.get():
            if not controls.handle(event):
                return False

        # The display surface may have been replaced by a resize.
        self.screen = pygame.display.get_surface()
        simulation.resize(*self.screen.get_size())

        simulation.step(self.screen, pygame.time.get_ticks(), self.clock.get_fps())

        pygame.display.flip()
        self.clock.tick(self.fps_cap)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
