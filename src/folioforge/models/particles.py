"""Particle overlay models."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import ImageColor
from pydantic import BaseModel, Field, field_validator

from folioforge.models.enums import ParticleStyle


class ParticleConfig(BaseModel):
    """Static configuration supplied directly to the particle renderer."""

    enabled: bool = True
    particle_count: int = Field(default=50, ge=0)
    size: float = Field(default=3.0, gt=0)
    speed: float = Field(default=0.5, ge=0)
    color: str = "#3b82f6"
    opacity: float = Field(default=0.7, ge=0.0, le=1.0)
    style: ParticleStyle = ParticleStyle.CIRCLES

    def seed_key(self) -> tuple[int, float, float, str, float]:
        """Fields whose change discards the current batch."""
        return (self.particle_count, self.size, self.speed, self.color, self.opacity)

    @field_validator("color")
    @classmethod
    def _known_color(cls, value: str) -> str:
        try:
            ImageColor.getrgb(value)
        except ValueError:
            msg = f"unknown color '{value}'"
            raise ValueError(msg) from None
        return value


@dataclass
class Particle:
    """Runtime-only particle state, owned by the simulation."""

    x: float
    y: float
    size: float
    speed_x: float
    speed_y: float
    color: str
    opacity: float
    rotation: float
