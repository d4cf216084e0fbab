"""FolioForge pipeline - prompt building and portfolio export."""

from folioforge.pipeline.export import (
    ExportError,
    export_portfolio,
    render_portfolio_html,
    validate_export,
)
from folioforge.pipeline.prompts import build_generation_prompt, style_guide

__all__ = [
    "ExportError",
    "build_generation_prompt",
    "export_portfolio",
    "render_portfolio_html",
    "style_guide",
    "validate_export",
]
