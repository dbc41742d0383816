# assets.py
"""
Loads every image the application needs, once, before the first frame.

There is no fallback artwork: a missing or undecodable file is a fatal
startup condition reported through AssetLoadError.
"""
import logging
import os
from typing import Dict, Any, List

import pygame

from constants import (
    DEFAULT_ASSET_DIR, DEFAULT_TEAR_SET_A, DEFAULT_TEAR_SET_B,
    DEFAULT_COLLAGE_IMAGES
)

# --- Data Contracts ---
#
# class AssetStore:
#   - load(params: Dict[str, Any], convert: bool = True) -> AssetStore:
#     - Inputs:
#       - params: The "assets" section of config.json.
#         - "directory": str
#         - "tear_set_a": List[str]
#         - "tear_set_b": List[str]
#         - "collage": List[str]
#       - convert: Convert surfaces to the display pixel format. Requires a
#         display mode to have been set.
#     - Outputs: A populated AssetStore.
#     - Side Effects: Reads image files from disk.
#     - Invariants: Every set is non-empty. Raises AssetLoadError otherwise.


class AssetLoadError(RuntimeError):
    """Raised when an image set cannot be loaded."""


class AssetStore:
    """
    Holds the two swappable tear image sets and the collage image set.
    """
    def __init__(self, tear_sets: List[List[pygame.Surface]], collage_images: List[pygame.Surface]):
        if len(tear_sets) != 2:
            raise AssetLoadError(f"Expected exactly 2 tear image sets, got {len(tear_sets)}.")
        for name, images in (("tear set A", tear_sets[0]), ("tear set B", tear_sets[1]),
                             ("collage", collage_images)):
            if not images:
                raise AssetLoadError(f"The {name} image list is empty.")
        self.tear_sets = tear_sets
        self.collage_images = collage_images

    @classmethod
    def load(cls, params: Dict[str, Any], convert: bool = True) -> "AssetStore":
        directory = params.get('directory', DEFAULT_ASSET_DIR)
        set_a = _load_images(directory, params.get('tear_set_a', DEFAULT_TEAR_SET_A), convert)
        set_b = _load_images(directory, params.get('tear_set_b', DEFAULT_TEAR_SET_B), convert)
        collage = _load_images(directory, params.get('collage', DEFAULT_COLLAGE_IMAGES), convert)

        logging.info(
            f"Assets loaded from '{directory}': {len(set_a)} + {len(set_b)} tear images, "
            f"{len(collage)} collage images."
        )
        return cls([set_a, set_b], collage)


def _load_images(directory: str, filenames: List[str], convert: bool) -> List[pygame.Surface]:
    images = []
    for filename in filenames:
        path = os.path.join(directory, filename)
        try:
            image = pygame.image.load(path)
        except (pygame.error, FileNotFoundError) as e:
            logging.critical(f"Could not load image {path}: {e}")
            raise AssetLoadError(f"Could not load image {path}: {e}") from e
        if convert:
            image = image.convert_alpha()
        logging.debug(f"Loaded {path} ({image.get_width()}x{image.get_height()}).")
        images.append(image)
    return images
