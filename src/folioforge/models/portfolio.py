"""Portfolio model - form data, theme and template with save/load."""

from __future__ import annotations

import json
from pathlib import Path
from uuid import uuid4

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from folioforge.models.enums import TemplateName


class PortfolioLoadError(ValueError):
    """Raised when a portfolio file cannot be loaded."""


class ThemeColor(BaseModel):
    name: str
    primary: str
    secondary: str


THEME_COLORS: list[ThemeColor] = [
    ThemeColor(name="purple", primary="#9333ea", secondary="#c084fc"),
    ThemeColor(name="blue", primary="#2563eb", secondary="#60a5fa"),
    ThemeColor(name="green", primary="#16a34a", secondary="#4ade80"),
    ThemeColor(name="red", primary="#dc2626", secondary="#f87171"),
    ThemeColor(name="amber", primary="#d97706", secondary="#fbbf24"),
    ThemeColor(name="pink", primary="#db2777", secondary="#f472b6"),
    ThemeColor(name="teal", primary="#0d9488", secondary="#5eead4"),
    ThemeColor(name="indigo", primary="#4f46e5", secondary="#818cf8"),
]


def find_theme(name: str) -> ThemeColor:
    """Look up a theme by name, falling back to the first theme."""
    for theme in THEME_COLORS:
        if theme.name == name:
            return theme
    return THEME_COLORS[0]


class SocialLink(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex[:8])
    platform: str
    url: str


class PortfolioContent(BaseModel):
    """Biographical and career fields entered by the user."""

    name: str = ""
    title: str = ""
    bio: str = ""
    skills: str = ""
    projects: str = ""
    education: str = ""
    experience: str = ""
    achievements: str = ""
    languages: str = ""
    certifications: str = ""

    @property
    def has_content(self) -> bool:
        return bool(self.name or self.bio or self.skills or self.projects)


class Portfolio(BaseModel):
    """A complete portfolio: content plus presentation choices."""

    content: PortfolioContent = Field(default_factory=PortfolioContent)
    template: TemplateName = TemplateName.MODERN
    theme: str = "purple"
    social_links: list[SocialLink] = Field(default_factory=list)
    profile_image: str | None = None
    generated_html: str | None = None

    def save(self, path: Path) -> Path:
        """Save portfolio to a JSON file (``portfolio.json`` inside a directory)."""
        save_path = path if path.suffix == ".json" else path / "portfolio.json"
        save_path.parent.mkdir(parents=True, exist_ok=True)
        save_path.write_text(self.model_dump_json(indent=2))
        return save_path

    @classmethod
    def load(cls, path: Path) -> Portfolio:
        """Load portfolio from JSON file."""
        if path.is_dir():
            path = path / "portfolio.json"
        try:
            text = path.read_text()
        except FileNotFoundError:
            msg = f"portfolio file not found: {path}"
            raise PortfolioLoadError(msg) from None
        except PermissionError:
            msg = f"permission denied reading portfolio file: {path}"
            raise PortfolioLoadError(msg) from None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"portfolio file contains invalid JSON: {exc}"
            raise PortfolioLoadError(msg) from None
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            msg = f"portfolio file has invalid structure: {exc}"
            raise PortfolioLoadError(msg) from None
