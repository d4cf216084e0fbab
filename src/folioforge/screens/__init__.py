"""FolioForge TUI screens."""

from folioforge.screens.animation_studio import AnimationStudioScreen
from folioforge.screens.settings_screen import SettingsScreen

__all__ = [
    "AnimationStudioScreen",
    "SettingsScreen",
]
