"""Application configuration with pydantic-settings + TOML."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

ANIMATIONS_BLOB_NAME = "portfolio-animations"


def _default_config_dir() -> Path:
    return Path.home() / ".folioforge"


def _default_output_dir() -> Path:
    return _default_config_dir() / "exports"


class GroqSettings(BaseSettings):
    """Remote content generation (OpenAI-compatible chat completions)."""

    api_key: str = ""
    base_url: str = "https://api.groq.com/openai/v1"
    model: str = "meta-llama/llama-4-scout-17b-16e-instruct"
    timeout: float = Field(default=60.0, gt=0)


class ParticleSettings(BaseSettings):
    """Canvas defaults for offline particle rendering and live preview."""

    width: int = Field(default=800, gt=0)
    height: int = Field(default=600, gt=0)
    fps: int = Field(default=30, gt=0, le=120)
    background: str = "#0f172a"


class AppConfig(BaseSettings):
    """Root application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FOLIOFORGE_",
        env_nested_delimiter="__",
    )

    config_dir: Path = Field(default_factory=_default_config_dir)
    output_dir: Path = Field(default_factory=_default_output_dir)
    active_backend: str = "groq"
    groq: GroqSettings = Field(default_factory=GroqSettings)
    particles: ParticleSettings = Field(default_factory=ParticleSettings)

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        toml_path = _default_config_dir() / "config.toml"
        sources = (
            kwargs.get("init_settings"),
            kwargs.get("env_settings"),
        )
        if toml_path.exists():
            sources = (*sources, TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return (*sources, kwargs.get("dotenv_settings"), kwargs.get("file_secret_settings"))

    @property
    def animations_file(self) -> Path:
        """Where the animation store blob is persisted."""
        return self.config_dir / f"{ANIMATIONS_BLOB_NAME}.json"

    @property
    def config_file(self) -> Path:
        return self.config_dir / "config.toml"

    def ensure_dirs(self) -> None:
        """Create config and export directories if they don't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)


def load_config() -> AppConfig:
    """Load application config, creating default directories if needed."""
    config = AppConfig()
    config.ensure_dirs()
    return config
