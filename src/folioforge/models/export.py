"""Export configuration model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class ExportConfig(BaseModel):
    """Configuration for exporting a portfolio to a standalone HTML file."""

    output_dir: Path = Path("output")
    filename: str | None = None
    include_animations: bool = True
    include_footer: bool = True
