"""Per-section animation configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from folioforge.models.enums import (
    AnimationCurve,
    AnimationDirection,
    AnimationKind,
    AnimationType,
    HoverEffect,
    ZoomDirection,
)


class AnimationConfig(BaseModel):
    """One entrance, hover or scroll animation descriptor.

    ``type = none`` or ``enabled = False`` means no visual transform.
    ``direction`` only matters for slide, flip, zoom and some hover effects.
    """

    type: AnimationType | HoverEffect = AnimationType.FADE
    direction: AnimationDirection | ZoomDirection = AnimationDirection.UP
    duration: float = Field(default=0.5, gt=0)
    delay: float = Field(default=0.0, ge=0)
    curve: AnimationCurve = AnimationCurve.EASE_OUT
    enabled: bool = True

    @property
    def active(self) -> bool:
        return self.enabled and self.type != AnimationType.NONE


DEFAULT_ENTRANCE_ANIMATION = AnimationConfig(
    type=AnimationType.FADE,
    direction=AnimationDirection.UP,
    duration=0.5,
    delay=0.2,
    curve=AnimationCurve.EASE_OUT,
    enabled=True,
)

DEFAULT_HOVER_ANIMATION = AnimationConfig(
    type=AnimationType.ZOOM,
    direction=AnimationDirection.NONE,
    duration=0.3,
    delay=0.0,
    curve=AnimationCurve.EASE_OUT,
    enabled=False,
)

DEFAULT_SCROLL_ANIMATION = AnimationConfig(
    type=AnimationType.FADE,
    direction=AnimationDirection.UP,
    duration=0.5,
    delay=0.0,
    curve=AnimationCurve.EASE_OUT,
    enabled=False,
)


class SectionAnimations(BaseModel):
    """The entrance/hover/scroll triple stored for one section."""

    entrance: AnimationConfig = Field(
        default_factory=lambda: DEFAULT_ENTRANCE_ANIMATION.model_copy()
    )
    hover: AnimationConfig = Field(
        default_factory=lambda: DEFAULT_HOVER_ANIMATION.model_copy()
    )
    scroll: AnimationConfig = Field(
        default_factory=lambda: DEFAULT_SCROLL_ANIMATION.model_copy()
    )

    def get(self, kind: AnimationKind | str) -> AnimationConfig:
        return getattr(self, AnimationKind(kind).value)


def default_section_animations() -> SectionAnimations:
    """Return a fresh default triple."""
    return SectionAnimations()


def preview_duration(config: AnimationConfig) -> float:
    """Seconds a UI should consider a preview "playing" for this config.

    Advisory only; nothing enforces it.
    """
    return config.duration + 0.5


def animation_options() -> dict[str, list[tuple[str, str]]]:
    """Value/label pairs for selection controls."""
    return {
        "types": [(t.value, t.value.title()) for t in AnimationType],
        "hover_types": [(t.value, t.value.title()) for t in (*AnimationType, *HoverEffect)],
        "directions": [(d.value, d.value.title()) for d in AnimationDirection],
        "zoom_directions": [(d.value, d.value.title()) for d in ZoomDirection],
        "curves": [(c.value, c.value.replace("-", " ").title()) for c in AnimationCurve],
    }
