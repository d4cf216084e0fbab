"""Draw particle frames with Pillow."""

from __future__ import annotations

import io
import logging
import math
from typing import TYPE_CHECKING

from PIL import Image, ImageColor, ImageDraw

from folioforge.models.enums import ParticleStyle

if TYPE_CHECKING:
    from pathlib import Path

    from folioforge.models.particles import Particle
    from folioforge.particles.engine import ParticleSystem

logger = logging.getLogger(__name__)

STAR_SPIKES = 5

Point = tuple[float, float]


def _rotate(points: list[Point], cx: float, cy: float, angle: float) -> list[Point]:
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return [(cx + px * cos_a - py * sin_a, cy + px * sin_a + py * cos_a) for px, py in points]


def _rect(half_w: float, half_h: float) -> list[Point]:
    return [(-half_w, -half_h), (half_w, -half_h), (half_w, half_h), (-half_w, half_h)]


def star_points(size: float) -> list[Point]:
    """Unrotated star outline alternating outer radius ``size`` and inner ``size / 2``."""
    outer = size
    inner = size / 2
    points: list[Point] = []
    for i in range(STAR_SPIKES):
        outer_angle = (math.pi * 2 * i) / STAR_SPIKES
        inner_angle = (math.pi * 2 * i + math.pi) / STAR_SPIKES
        points.append((math.cos(outer_angle) * outer, math.sin(outer_angle) * outer))
        points.append((math.cos(inner_angle) * inner, math.sin(inner_angle) * inner))
    return points


def shape_points(particle: Particle, style: ParticleStyle) -> list[Point]:
    """Polygon for a particle in canvas coordinates.

    Circles are returned as their bounding box corners (top-left,
    bottom-right) since they are drawn with an ellipse.
    """
    x, y, size = particle.x, particle.y, particle.size
    match style:
        case ParticleStyle.CIRCLES:
            return [(x - size, y - size), (x + size, y + size)]
        case ParticleStyle.SQUARES:
            return _rotate(_rect(size / 2, size / 2), x, y, particle.rotation)
        case ParticleStyle.STARS:
            return _rotate(star_points(size), x, y, particle.rotation)
        case ParticleStyle.CONFETTI:
            return _rotate(_rect(size / 4, size / 2), x, y, particle.rotation)
    msg = f"Unknown particle style: {style}"
    raise ValueError(msg)


def _fill(particle: Particle) -> tuple[int, int, int, int]:
    r, g, b = ImageColor.getrgb(particle.color)[:3]
    alpha = max(0, min(255, round(particle.opacity * 255)))
    return (r, g, b, alpha)


def draw_particle(draw: ImageDraw.ImageDraw, particle: Particle, style: ParticleStyle) -> None:
    fill = _fill(particle)
    points = shape_points(particle, style)
    if style == ParticleStyle.CIRCLES:
        draw.ellipse(points, fill=fill)
    else:
        draw.polygon(points, fill=fill)


def render_frame(system: ParticleSystem, *, background: str | None = None) -> Image.Image:
    """Draw the current particle batch onto a fresh canvas.

    A disabled system renders an empty (transparent or background) canvas.
    """
    width = max(int(system.width), 1)
    height = max(int(system.height), 1)
    base = (*ImageColor.getrgb(background)[:3], 255) if background else (0, 0, 0, 0)
    canvas = Image.new("RGBA", (width, height), base)
    if not system.config.enabled or not system.particles:
        return canvas
    layer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for particle in system.particles:
        draw_particle(draw, particle, system.config.style)
    return Image.alpha_composite(canvas, layer)


def render_frames(
    system: ParticleSystem,
    frame_count: int,
    *,
    background: str | None = None,
) -> list[Image.Image]:
    """Step the system ``frame_count`` times, capturing a frame after each step."""
    if not system.start():
        return []
    frames: list[Image.Image] = []
    for _ in range(frame_count):
        system.step()
        frames.append(render_frame(system, background=background))
    return frames


def save_gif(frames: list[Image.Image], output: Path, *, fps: int = 30) -> Path:
    """Write frames as a looping animated GIF."""
    if not frames:
        msg = "No frames to save"
        raise ValueError(msg)
    output.parent.mkdir(parents=True, exist_ok=True)
    converted = [frame.convert("RGB") for frame in frames]
    converted[0].save(
        output,
        "GIF",
        save_all=True,
        append_images=converted[1:],
        duration=max(1, round(1000 / fps)),
        loop=0,
    )
    logger.info("Saved %d-frame particle animation: %s", len(frames), output)
    return output


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, "PNG")
    return buffer.getvalue()
