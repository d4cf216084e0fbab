"""Shared fixtures for FolioForge tests."""

import os
import random
from pathlib import Path

import pytest

from folioforge.models import (
    ExportConfig,
    ParticleConfig,
    Portfolio,
    PortfolioContent,
    SocialLink,
    TemplateName,
)
from folioforge.store import AnimationStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ~ at a temp dir so config and stores never touch the real home."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    for key in list(os.environ):
        if key.startswith("FOLIOFORGE_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def store() -> AnimationStore:
    return AnimationStore()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def particle_config() -> ParticleConfig:
    return ParticleConfig(particle_count=25, size=4.0, speed=2.0, color="#ff0000", opacity=0.8)


@pytest.fixture
def sample_portfolio() -> Portfolio:
    return Portfolio(
        content=PortfolioContent(
            name="Ada Lovelace",
            title="Analytical Engineer",
            bio="Writes programs for engines that do not exist yet.",
            skills="Mathematics, Poetry\nAlgorithms",
            projects="Note G\nBernoulli numbers",
            education="Private tutoring",
            languages="English, French",
        ),
        template=TemplateName.MODERN,
        theme="blue",
        social_links=[SocialLink(platform="GitHub", url="https://github.com/ada")],
    )


@pytest.fixture
def sample_export_config(tmp_path: Path) -> ExportConfig:
    return ExportConfig(output_dir=tmp_path / "export_output")
