"""Custom Textual widgets for FolioForge."""

from folioforge.widgets.motion_preview import MotionPreview, describe_motion

__all__ = ["MotionPreview", "describe_motion"]
