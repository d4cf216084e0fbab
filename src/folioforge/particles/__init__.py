"""Decorative particle overlay: simulation, drawing and frame loop."""

from folioforge.particles.engine import (
    ParticleSystem,
    ParticleSystemState,
    seed_particles,
    step_particle,
)
from folioforge.particles.loop import FrameLoop
from folioforge.particles.render import render_frame, render_frames, save_gif

__all__ = [
    "FrameLoop",
    "ParticleSystem",
    "ParticleSystemState",
    "render_frame",
    "render_frames",
    "save_gif",
    "seed_particles",
    "step_particle",
]
