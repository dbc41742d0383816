import pytest

from collage import CollageItem
from conftest import make_image
from particle import Tear
from simulation import EmissionController, Simulation


@pytest.fixture
def sim(assets, rng, scheduler):
    return Simulation({}, assets, (400, 300), rng=rng, scheduler=scheduler)


def test_idle_never_emits(sim, surface):
    for frame in range(60):
        sim.step(surface, frame * 16)
    assert len(sim.tears) == 0


def test_emitting_spawns_one_tear_every_three_frames(sim, surface):
    sim.set_pointer(50, 60)
    sim.start_emitting(0)

    counts = []
    for frame in range(1, 13):
        sim.step(surface, frame * 16)
        counts.append(len(sim.tears))
    assert counts == [0, 0, 1, 1, 1, 2, 2, 2, 3, 3, 3, 4]


def test_tears_start_at_the_pointer(sim, surface):
    sim.set_pointer(50, 60)
    sim.start_emitting(0)
    for frame in range(3):
        sim.step(surface, frame * 16)

    tear = sim.tears.tears[0]
    # Emitted and advanced once in the same frame.
    assert tear.x - tear.vx == pytest.approx(50)
    assert tear.life == tear.lifespan - 1


def test_stopping_halts_emission(sim, surface):
    sim.start_emitting(0)
    for frame in range(6):
        sim.step(surface, frame * 16)
    sim.stop_emitting()
    for frame in range(30):
        sim.step(surface, frame * 16)
    assert len(sim.tears) == 2


def test_tears_expire_after_their_lifespan(assets, rng, scheduler, surface):
    sim = Simulation({'tears': {'lifespan_frames': 5}}, assets, (400, 300), rng=rng, scheduler=scheduler)
    sim.start_emitting(0)
    for _ in range(3):
        sim.step(surface, 0)
    sim.stop_emitting()
    assert len(sim.tears) == 1
    for _ in range(4):
        sim.step(surface, 0)
    assert len(sim.tears) == 0


def test_double_toggle_restores_the_active_set(sim, assets):
    assert sim.active_tear_set is assets.tear_sets[0]
    sim.toggle_tear_set()
    assert sim.active_tear_set is assets.tear_sets[1]
    sim.toggle_tear_set()
    assert sim.active_tear_set is assets.tear_sets[0]


def test_new_tears_use_the_active_set(sim, assets, surface):
    sim.toggle_tear_set()
    sim.start_emitting(0)
    for _ in range(30):
        sim.step(surface, 0)
    set_b = assets.tear_sets[1]
    assert all(any(t.image is image for image in set_b) for t in sim.tears.tears)


def test_collage_items_fade_in_each_frame(sim, surface):
    sim.toggle_collage()
    for _ in range(3):
        sim.step(surface, 0)
    assert [item.opacity for item in sim.collage.items] == [15]


def test_resize_moves_collage_bounds(sim):
    sim.resize(1000, 800)
    assert (sim.width, sim.height) == (1000, 800)
    assert (sim.collage.width, sim.collage.height) == (1000, 800)


def test_shutdown_stops_collage_and_clears_tears(sim, surface, scheduler):
    sim.toggle_collage()
    sim.start_emitting(0)
    for _ in range(6):
        sim.step(surface, 0)
    sim.shutdown()
    assert len(sim.tears) == 0
    assert sim.collage.items == []
    assert scheduler.active == set()


def test_step_clears_to_background(sim, surface):
    surface.fill((1, 2, 3))
    sim.step(surface, 0)
    assert tuple(surface.get_at((0, 0)))[:3] == (255, 255, 255)


def test_emission_state_transitions():
    controller = EmissionController({})
    assert not controller.is_emitting
    controller.start(500)
    assert controller.is_emitting
    assert controller.start_time == 500

    # A second start while emitting keeps the original timestamp.
    controller.start(900)
    assert controller.start_time == 500

    controller.stop()
    assert not controller.is_emitting
    assert not controller.should_emit(3)


def test_throttle_switches_rate_with_frame_rate():
    controller = EmissionController({})
    assert controller.emission_rate == 3
    controller.update_throttle(25.0)
    assert controller.emission_rate == 20
    controller.update_throttle(59.0)
    assert controller.emission_rate == 3


def test_throttle_ignores_unmeasured_frame_rate():
    controller = EmissionController({})
    controller.update_throttle(0.0)
    assert controller.emission_rate == 3


def test_throttle_can_be_disabled():
    controller = EmissionController({'throttle_enabled': False})
    controller.update_throttle(10.0)
    assert controller.emission_rate == 3


def test_hue_disabled_by_default():
    assert EmissionController({}).hue(1000) is None


def test_hue_follows_emission_duration():
    controller = EmissionController({'hue_enabled': True, 'hue_speed': 0.1})
    controller.start(1000)
    assert controller.hue(1600) == pytest.approx(60.0)
    assert controller.hue(5000) == pytest.approx(40.0)


def test_invalid_rate_is_rejected():
    with pytest.raises(ValueError):
        EmissionController({'rate': 0})


def test_tears_are_painted_over_the_collage(sim, surface):
    item = CollageItem(make_image((0, 0, 0, 255), (60, 60)), 200, 150, 1.0)
    item.opacity = 255
    sim.collage.items.append(item)
    # vy + ay == 0, so the tear stays put when advanced.
    sim.tears.tears.append(Tear(x=200.0, y=150.0, vx=0.0, vy=-0.5, ay=0.5, size=40.0,
                                lifespan=1000, image=make_image((255, 0, 0, 255))))

    sim.step(surface, 0)

    r, g, b = tuple(surface.get_at((200, 150)))[:3]
    assert r >= 250 and g == 0 and b == 0
