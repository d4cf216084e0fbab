"""Tests for the particle simulation and Pillow renderer."""

import math
import random
from pathlib import Path

import pytest
from PIL import Image

from folioforge.models import Particle, ParticleConfig, ParticleStyle
from folioforge.particles import (
    ParticleSystem,
    ParticleSystemState,
    render_frame,
    render_frames,
    save_gif,
    seed_particles,
    step_particle,
)
from folioforge.particles.render import encode_png, shape_points, star_points


def _particle(**overrides: float) -> Particle:
    values = {
        "x": 10.0,
        "y": 10.0,
        "size": 3.0,
        "speed_x": 0.0,
        "speed_y": 0.0,
        "color": "#3b82f6",
        "opacity": 0.5,
        "rotation": 0.0,
    }
    values.update(overrides)
    return Particle(**values)  # type: ignore[arg-type]


# ── Seeding ──────────────────────────────────────────────────────


def test_seed_count_and_bounds(particle_config: ParticleConfig, rng: random.Random) -> None:
    particles = seed_particles(particle_config, 320, 200, rng)
    assert len(particles) == particle_config.particle_count
    for p in particles:
        assert 0 <= p.x <= 320
        assert 0 <= p.y <= 200
        assert 2.0 <= p.size <= 6.0
        assert -2.0 <= p.speed_x <= 2.0
        assert -2.0 <= p.speed_y <= 2.0
        assert 0.4 <= p.opacity <= 0.8
        assert 0 <= p.rotation < 2 * math.pi
        assert p.color == "#ff0000"


def test_reseed_twice_gives_new_batches_of_same_size(particle_config: ParticleConfig) -> None:
    system = ParticleSystem(particle_config)
    system.resize(640, 480)

    first = [(p.x, p.y) for p in system.particles]
    second = [(p.x, p.y) for p in system.reseed()]

    assert len(first) == len(second) == particle_config.particle_count
    assert first != second
    for x, y in second:
        assert 0 <= x <= 640
        assert 0 <= y <= 480


def test_zero_particles(rng: random.Random) -> None:
    assert seed_particles(ParticleConfig(particle_count=0), 100, 100, rng) == []


# ── Per-frame update ─────────────────────────────────────────────


def test_reflection_right_edge() -> None:
    width = 200.0
    p = _particle(x=width - 1, speed_x=5.0)
    step_particle(p, width, 100.0)
    assert p.x == width
    assert p.speed_x == -5.0


def test_reflection_left_and_top_edges() -> None:
    p = _particle(x=2.0, y=1.0, speed_x=-5.0, speed_y=-3.0)
    step_particle(p, 100.0, 100.0)
    assert (p.x, p.y) == (0.0, 0.0)
    assert (p.speed_x, p.speed_y) == (5.0, 3.0)


def test_free_motion_and_rotation() -> None:
    p = _particle(speed_x=1.5, speed_y=-0.5, rotation=2 * math.pi - 0.005)
    step_particle(p, 100.0, 100.0)
    assert p.x == pytest.approx(11.5)
    assert p.y == pytest.approx(9.5)
    assert p.rotation == pytest.approx(0.005)


def test_particles_stay_on_canvas(particle_config: ParticleConfig, rng: random.Random) -> None:
    system = ParticleSystem(particle_config.model_copy(update={"speed": 40.0}), rng=rng)
    system.resize(120, 80)
    system.start()
    for _ in range(200):
        system.step()
    assert system.frame == 200
    for p in system.particles:
        assert 0 <= p.x <= 120
        assert 0 <= p.y <= 80


# ── Lifecycle and reseed triggers ────────────────────────────────


def test_uninitialized_until_sized(particle_config: ParticleConfig) -> None:
    system = ParticleSystem(particle_config)
    assert system.state == ParticleSystemState.UNINITIALIZED
    assert system.start() is False
    system.resize(50, 50)
    assert system.state == ParticleSystemState.SEEDED
    assert system.start() is True
    assert system.running


def test_resize_reseeds_only_on_change(particle_config: ParticleConfig, rng: random.Random) -> None:
    system = ParticleSystem(particle_config, rng=rng)
    assert system.resize(100, 100) is True
    batch = system.particles
    assert system.resize(100, 100) is False
    assert system.particles is batch
    assert system.resize(200, 100) is True
    assert system.particles is not batch


@pytest.mark.parametrize(
    "change",
    [
        {"particle_count": 10},
        {"size": 8.0},
        {"speed": 0.1},
        {"color": "#00ff00"},
        {"opacity": 0.3},
    ],
)
def test_seed_fields_trigger_reseed(
    particle_config: ParticleConfig, rng: random.Random, change: dict,
) -> None:
    system = ParticleSystem(particle_config, rng=rng)
    system.resize(100, 100)
    batch = system.particles
    assert system.configure(particle_config.model_copy(update=change)) is True
    assert system.particles is not batch


def test_style_change_keeps_batch(particle_config: ParticleConfig, rng: random.Random) -> None:
    system = ParticleSystem(particle_config, rng=rng)
    system.resize(100, 100)
    batch = system.particles
    assert system.configure(particle_config.model_copy(update={"style": "stars"})) is False
    assert system.particles is batch
    assert system.config.style == ParticleStyle.STARS


def test_disable_stops_but_keeps_batch(particle_config: ParticleConfig, rng: random.Random) -> None:
    system = ParticleSystem(particle_config, rng=rng)
    system.resize(100, 100)
    system.start()
    batch = system.particles
    system.configure(particle_config.model_copy(update={"enabled": False}))
    assert system.state == ParticleSystemState.STOPPED
    assert system.particles is batch
    assert system.start() is False


# ── Shapes ───────────────────────────────────────────────────────


def test_star_has_ten_points() -> None:
    points = star_points(4.0)
    assert len(points) == 10
    radii = [math.hypot(x, y) for x, y in points]
    assert radii[0] == pytest.approx(4.0)
    assert radii[1] == pytest.approx(2.0)


def test_circle_bbox() -> None:
    p = _particle(x=20.0, y=30.0, size=5.0)
    assert shape_points(p, ParticleStyle.CIRCLES) == [(15.0, 25.0), (25.0, 35.0)]


def test_square_and_confetti_extent() -> None:
    p = _particle(x=0.0, y=0.0, size=4.0, rotation=0.0)
    square = shape_points(p, ParticleStyle.SQUARES)
    confetti = shape_points(p, ParticleStyle.CONFETTI)
    assert max(x for x, _ in square) == pytest.approx(2.0)
    assert max(x for x, _ in confetti) == pytest.approx(1.0)
    assert max(y for _, y in confetti) == pytest.approx(2.0)


# ── Rendering ────────────────────────────────────────────────────


@pytest.mark.parametrize("style", list(ParticleStyle))
def test_render_frame_draws_particles(style: ParticleStyle) -> None:
    system = ParticleSystem(ParticleConfig(particle_count=0, style=style, color="#ff0000"))
    system.resize(40, 40)
    system.particles = [_particle(x=20.0, y=20.0, size=6.0, color="#ff0000", opacity=1.0)]

    frame = render_frame(system)

    assert frame.size == (40, 40)
    assert frame.mode == "RGBA"
    assert frame.getpixel((20, 20)) == (255, 0, 0, 255)
    assert frame.getpixel((0, 0)) == (0, 0, 0, 0)


def test_render_frame_alpha_follows_opacity() -> None:
    system = ParticleSystem(ParticleConfig(particle_count=0))
    system.resize(20, 20)
    system.particles = [_particle(x=10.0, y=10.0, size=5.0, color="#00ff00", opacity=0.5)]
    r, g, b, a = render_frame(system).getpixel((10, 10))
    assert (r, g, b) == (0, 255, 0)
    assert a == pytest.approx(128, abs=1)


def test_disabled_system_renders_background_only() -> None:
    system = ParticleSystem(ParticleConfig(enabled=False, particle_count=5))
    system.resize(10, 10)
    frame = render_frame(system, background="#0f172a")
    assert frame.getcolors() == [(100, (15, 23, 42, 255))]


def test_render_frames_and_gif(tmp_path: Path, particle_config: ParticleConfig) -> None:
    system = ParticleSystem(particle_config, rng=random.Random(7))
    system.resize(64, 48)
    frames = render_frames(system, 5, background="#000000")
    assert len(frames) == 5
    assert system.frame == 5

    out = save_gif(frames, tmp_path / "gifs" / "particles.gif", fps=10)
    with Image.open(out) as gif:
        assert gif.format == "GIF"
        assert gif.size == (64, 48)
        assert gif.n_frames >= 2


def test_render_frames_disabled_returns_nothing() -> None:
    system = ParticleSystem(ParticleConfig(enabled=False))
    system.resize(10, 10)
    assert render_frames(system, 3) == []


def test_save_gif_requires_frames(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No frames"):
        save_gif([], tmp_path / "empty.gif")


def test_encode_png_signature() -> None:
    data = encode_png(Image.new("RGBA", (2, 2)))
    assert data.startswith(b"\x89PNG")
