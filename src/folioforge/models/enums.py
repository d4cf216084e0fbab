"""Enumerations used throughout FolioForge."""

from enum import StrEnum


class AnimationType(StrEnum):
    FADE = "fade"
    SLIDE = "slide"
    ZOOM = "zoom"
    FLIP = "flip"
    BOUNCE = "bounce"
    NONE = "none"


class HoverEffect(StrEnum):
    """Hover-only effects layered on top of the shared animation types."""

    SCALE = "scale"
    LIFT = "lift"
    PULSE = "pulse"


class AnimationDirection(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


class ZoomDirection(StrEnum):
    IN = "in"
    OUT = "out"


class AnimationCurve(StrEnum):
    LINEAR = "linear"
    EASE = "ease"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"
    SPRING = "spring"


class AnimationKind(StrEnum):
    """Which sub-config of a section an update targets."""

    ENTRANCE = "entrance"
    HOVER = "hover"
    SCROLL = "scroll"


class ParticleStyle(StrEnum):
    CIRCLES = "circles"
    SQUARES = "squares"
    STARS = "stars"
    CONFETTI = "confetti"


class TemplateName(StrEnum):
    MODERN = "modern"
    MINIMAL = "minimal"
    ELEGANT = "elegant"
