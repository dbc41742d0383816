import json
import logging

import pygame
import pytest

from assets import AssetStore, AssetLoadError
from conftest import make_image
from utils import load_config, map_range, setup_logging, validate_range, hue_to_rgb


def test_map_range_is_affine():
    assert map_range(150, 0, 300, 0, 255) == pytest.approx(127.5)
    assert map_range(0, 0, 300, 0.1, 1.0) == pytest.approx(0.1)
    assert map_range(300, 0, 300, 0.1, 1.0) == pytest.approx(1.0)


def test_validate_range():
    assert validate_range('r', [1, 2]) == (1.0, 2.0)
    with pytest.raises(ValueError):
        validate_range('r', [2, 1])
    with pytest.raises(ValueError):
        validate_range('r', [1, 2, 3])


def test_hue_to_rgb_primaries():
    assert hue_to_rgb(0) == (255, 0, 0)
    r, g, b = hue_to_rgb(120)
    assert r <= 1 and g >= 254 and b <= 1
    assert hue_to_rgb(360) == hue_to_rgb(0)


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"tears": {"lifespan_frames": 300}}))
    assert load_config(str(path)) == {"tears": {"lifespan_frames": 300}}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


def test_setup_logging_creates_log_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})
        logging.info("hello")
        for handler in root.handlers:
            handler.flush()
        assert root.level == logging.DEBUG
        assert "hello" in log_file.read_text()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def write_images(directory, names):
    for name in names:
        pygame.image.save(make_image((200, 10, 10, 255)), str(directory / name))


def test_asset_store_loads_every_set(tmp_path):
    write_images(tmp_path, ["a1.png", "a2.png", "b1.png", "c1.png", "c2.png", "c3.png"])
    store = AssetStore.load({
        "directory": str(tmp_path),
        "tear_set_a": ["a1.png", "a2.png"],
        "tear_set_b": ["b1.png"],
        "collage": ["c1.png", "c2.png", "c3.png"],
    }, convert=False)
    assert [len(images) for images in store.tear_sets] == [2, 1]
    assert len(store.collage_images) == 3
    assert store.tear_sets[0][0].get_size() == (20, 20)


def test_missing_asset_is_fatal(tmp_path):
    write_images(tmp_path, ["a1.png"])
    with pytest.raises(AssetLoadError):
        AssetStore.load({
            "directory": str(tmp_path),
            "tear_set_a": ["a1.png"],
            "tear_set_b": ["missing.png"],
            "collage": ["a1.png"],
        }, convert=False)


def test_empty_set_is_fatal(tmp_path):
    write_images(tmp_path, ["a1.png"])
    with pytest.raises(AssetLoadError):
        AssetStore.load({
            "directory": str(tmp_path),
            "tear_set_a": ["a1.png"],
            "tear_set_b": ["a1.png"],
            "collage": [],
        }, convert=False)
