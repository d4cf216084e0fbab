"""FolioForge data models - pure Pydantic, no I/O beyond save/load."""

from folioforge.models.animation import (
    DEFAULT_ENTRANCE_ANIMATION,
    DEFAULT_HOVER_ANIMATION,
    DEFAULT_SCROLL_ANIMATION,
    AnimationConfig,
    SectionAnimations,
    animation_options,
    default_section_animations,
    preview_duration,
)
from folioforge.models.enums import (
    AnimationCurve,
    AnimationDirection,
    AnimationKind,
    AnimationType,
    HoverEffect,
    ParticleStyle,
    TemplateName,
    ZoomDirection,
)
from folioforge.models.export import ExportConfig
from folioforge.models.particles import Particle, ParticleConfig
from folioforge.models.portfolio import (
    THEME_COLORS,
    Portfolio,
    PortfolioContent,
    PortfolioLoadError,
    SocialLink,
    ThemeColor,
    find_theme,
)

__all__ = [
    "DEFAULT_ENTRANCE_ANIMATION",
    "DEFAULT_HOVER_ANIMATION",
    "DEFAULT_SCROLL_ANIMATION",
    "THEME_COLORS",
    "AnimationConfig",
    "AnimationCurve",
    "AnimationDirection",
    "AnimationKind",
    "AnimationType",
    "ExportConfig",
    "HoverEffect",
    "Particle",
    "ParticleConfig",
    "ParticleStyle",
    "Portfolio",
    "PortfolioContent",
    "PortfolioLoadError",
    "SectionAnimations",
    "SocialLink",
    "TemplateName",
    "ThemeColor",
    "ZoomDirection",
    "animation_options",
    "default_section_animations",
    "find_theme",
    "preview_duration",
]
