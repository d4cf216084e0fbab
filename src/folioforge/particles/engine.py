"""Particle simulation: seeding, per-frame update and reseed triggers."""

from __future__ import annotations

import logging
import math
import random
from enum import StrEnum

from folioforge.models.particles import Particle, ParticleConfig

logger = logging.getLogger(__name__)

ROTATION_STEP = 0.01
TWO_PI = math.pi * 2


class ParticleSystemState(StrEnum):
    UNINITIALIZED = "uninitialized"
    SEEDED = "seeded"
    RUNNING = "running"
    STOPPED = "stopped"


def seed_particles(
    config: ParticleConfig,
    width: float,
    height: float,
    rng: random.Random | None = None,
) -> list[Particle]:
    """Generate a fresh batch of ``config.particle_count`` particles.

    Positions are uniform over the canvas; size, speed and opacity are drawn
    from windows around the configured values.
    """
    # Decorative randomness, not cryptographic use.
    rng = rng or random.Random()  # noqa: S311
    return [
        Particle(
            x=rng.uniform(0, width),
            y=rng.uniform(0, height),
            size=rng.uniform(config.size * 0.5, config.size * 1.5),
            speed_x=rng.uniform(-config.speed, config.speed),
            speed_y=rng.uniform(-config.speed, config.speed),
            color=config.color,
            opacity=rng.uniform(config.opacity * 0.5, config.opacity),
            rotation=rng.uniform(0, TWO_PI),
        )
        for _ in range(config.particle_count)
    ]


def step_particle(particle: Particle, width: float, height: float) -> None:
    """Advance one particle by a frame, bouncing off the canvas edges."""
    x = particle.x + particle.speed_x
    y = particle.y + particle.speed_y

    if x < 0 or x > width:
        particle.speed_x *= -1
        x = 0.0 if x < 0 else width
    if y < 0 or y > height:
        particle.speed_y *= -1
        y = 0.0 if y < 0 else height

    particle.x = x
    particle.y = y
    particle.rotation = (particle.rotation + ROTATION_STEP) % TWO_PI


class ParticleSystem:
    """Owns the particle batch and its lifecycle.

    The system starts ``UNINITIALIZED`` until both a config and non-zero
    dimensions are known, becomes ``SEEDED`` once a batch exists, ``RUNNING``
    while a frame loop drives it and ``STOPPED`` when disabled or torn down.
    """

    def __init__(
        self,
        config: ParticleConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or ParticleConfig()
        self.width = 0.0
        self.height = 0.0
        self.particles: list[Particle] = []
        self.state = ParticleSystemState.UNINITIALIZED
        self.frame = 0
        # Decorative randomness, not cryptographic use.
        self._rng = rng or random.Random()  # noqa: S311

    @property
    def has_dimensions(self) -> bool:
        return self.width > 0 and self.height > 0

    @property
    def running(self) -> bool:
        return self.state == ParticleSystemState.RUNNING

    def reseed(self) -> list[Particle]:
        """Discard the current batch and generate a new one."""
        if not self.has_dimensions:
            self.particles = []
            self.state = ParticleSystemState.UNINITIALIZED
            return self.particles
        self.particles = seed_particles(self.config, self.width, self.height, self._rng)
        self.state = ParticleSystemState.SEEDED
        logger.debug(
            "Seeded %d particles on %gx%g canvas", len(self.particles), self.width, self.height,
        )
        return self.particles

    def resize(self, width: float, height: float) -> bool:
        """Set canvas dimensions; returns ``True`` when a reseed happened."""
        if (width, height) == (self.width, self.height) and self.particles:
            return False
        self.width = float(width)
        self.height = float(height)
        self.reseed()
        return True

    def configure(self, config: ParticleConfig) -> bool:
        """Apply a new config; returns ``True`` when it required a reseed.

        Style changes only affect drawing.  Disabling stops the system but
        keeps the last batch.
        """
        previous = self.config
        self.config = config
        reseeded = False
        if config.seed_key() != previous.seed_key() or (
            self.has_dimensions and not self.particles and config.particle_count
        ):
            self.reseed()
            reseeded = True
        if not config.enabled:
            self.stop()
        return reseeded

    def start(self) -> bool:
        """Mark the system as running; returns ``False`` when it cannot run."""
        if not self.config.enabled:
            return False
        if not self.particles:
            self.reseed()
        if self.state == ParticleSystemState.UNINITIALIZED:
            return False
        self.state = ParticleSystemState.RUNNING
        return True

    def stop(self) -> None:
        if self.state == ParticleSystemState.RUNNING:
            self.state = ParticleSystemState.STOPPED

    def step(self) -> None:
        """Advance every particle by one frame."""
        for particle in self.particles:
            step_particle(particle, self.width, self.height)
        self.frame += 1
