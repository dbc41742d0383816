# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They are the
fallbacks used when `config.json` omits a setting, plus a few values that
are fundamental to the framework itself (such as the pygame event id used
by the collage timer).
"""
import pygame

# Display settings
# Set to True to run in borderless fullscreen mode.
# Set to False to run in a resizable window (DEFAULT_WIDTH x DEFAULT_HEIGHT).
FULLSCREEN = False
DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 800
FPS = 60
BACKGROUND_COLOR = (255, 255, 255) # White
WINDOW_CAPTION = "Tearfall"

# --- Tear Physics ---
# Lifespan in frames. 150 frames is 2.5s at 60 fps; 300 gives the slower,
# longer-lived look.
TEAR_LIFESPAN = 150
TEAR_SIZE_RANGE = (160.0, 260.0)
TEAR_VX_RANGE = (-1.5, 1.5)
# Negative vy is a slight upward kick before gravity takes over.
TEAR_VY_RANGE = (-2.0, 0.0)
TEAR_GRAVITY = 0.5
# Rendered size multiplier at death and at birth.
TEAR_MIN_SCALE = 0.1
TEAR_MAX_SCALE = 1.0

# --- Emission ---
EMISSION_RATE = 3 # Frames between tears (~20 tears/sec at 60 fps)
THROTTLED_EMISSION_RATE = 20
THROTTLE_FPS_THRESHOLD = 30
HUE_SPEED = 0.1 # Degrees per millisecond of crying

# --- Collage ---
COLLAGE_INTERVAL_MS = 3000
COLLAGE_FADE_STEP = 5
COLLAGE_SCALE_RANGE = (0.6, 1.0)
# Fraction of the surface kept free on each edge when placing collage items.
COLLAGE_MARGIN = 0.1
MAX_ALPHA = 255

# Posted by the repeating collage timer.
COLLAGE_SPAWN_EVENT = pygame.USEREVENT + 1

# Default asset names, used if the config file does not list any.
DEFAULT_ASSET_DIR = "assets"
DEFAULT_TEAR_SET_A = ["tear1.png", "tear2.png", "tear3.png"]
DEFAULT_TEAR_SET_B = ["tear4.png", "tear5.png", "tear6.png"]
DEFAULT_COLLAGE_IMAGES = [
    "slide1.jpg", "slide2.jpg", "slide3.jpg",
    "slide4.jpg", "slide5.jpg", "slide6.png"
]
