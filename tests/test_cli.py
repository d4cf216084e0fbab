"""Tests for the CLI entry point."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from PIL import Image
from typer.testing import CliRunner

from folioforge import __version__
from folioforge.cli import app
from folioforge.models import Portfolio, PortfolioContent
from folioforge.store import AnimationStore

runner = CliRunner()


@pytest.fixture
def config_dir(isolated_home: Path) -> Path:
    return isolated_home / ".folioforge"


@pytest.fixture
def saved_portfolio(config_dir: Path, sample_portfolio: Portfolio) -> Path:
    return sample_portfolio.save(config_dir / "portfolio.json")


def test_version_flag():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"folioforge {__version__}"


# ── init ─────────────────────────────────────────────────────────


def test_init_creates_portfolio(config_dir: Path):
    result = runner.invoke(app, ["init", "--name", "Ada", "--template", "elegant"])
    assert result.exit_code == 0
    portfolio = Portfolio.load(config_dir / "portfolio.json")
    assert portfolio.content.name == "Ada"
    assert portfolio.template == "elegant"


def test_init_refuses_to_overwrite(saved_portfolio: Path):
    result = runner.invoke(app, ["init", "--name", "Someone Else"])
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert Portfolio.load(saved_portfolio).content.name == "Ada Lovelace"


def test_init_force(saved_portfolio: Path):
    result = runner.invoke(app, ["init", "--name", "New", "--force"])
    assert result.exit_code == 0
    assert Portfolio.load(saved_portfolio).content.name == "New"


# ── generate ─────────────────────────────────────────────────────


def test_generate_with_mock_backend(saved_portfolio: Path):
    result = runner.invoke(app, ["generate", "--backend", "mock"])
    assert result.exit_code == 0, result.output
    assert "(3/3)" in result.output
    generated = Portfolio.load(saved_portfolio).generated_html
    assert generated is not None
    assert "<h1>Ada Lovelace</h1>" in generated


def test_generate_failure_leaves_portfolio_untouched(config_dir: Path):
    path = Portfolio(content=PortfolioContent(name="Only A Name")).save(
        config_dir / "portfolio.json"
    )
    before = path.read_text()

    result = runner.invoke(app, ["generate", "--backend", "mock"])

    assert result.exit_code == 1
    assert "Error: Invalid generation request" in result.output
    assert path.read_text() == before


def test_generate_bad_portfolio_file(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("[]")
    result = runner.invoke(app, ["generate", str(bad), "--backend", "mock"])
    assert result.exit_code == 1
    assert "Error:" in result.output


# ── check ────────────────────────────────────────────────────────


def test_check_mock_backend(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FOLIOFORGE_ACTIVE_BACKEND", "mock")
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 0
    assert "ready" in result.output


def test_check_groq_connected():
    with patch(
        "folioforge.backend.groq.GroqBackend.is_available", AsyncMock(return_value=True),
    ):
        result = runner.invoke(app, ["check"])
    assert result.exit_code == 0
    assert "Groq: connected" in result.output
    assert "Status: ready" in result.output


def test_check_groq_offline():
    with patch(
        "folioforge.backend.groq.GroqBackend.is_available", AsyncMock(return_value=False),
    ):
        result = runner.invoke(app, ["check"])
    assert result.exit_code == 1
    assert "unavailable" in result.output
    assert "offline" in result.output


# ── export ───────────────────────────────────────────────────────


def test_export_writes_html(saved_portfolio: Path, tmp_path: Path):
    out_dir = tmp_path / "site"
    result = runner.invoke(app, ["export", "--output", str(out_dir)])
    assert result.exit_code == 0, result.output
    html = (out_dir / "Ada Lovelace.html").read_text(encoding="utf-8")
    assert "IntersectionObserver" in html


def test_export_static(saved_portfolio: Path, tmp_path: Path):
    result = runner.invoke(
        app, ["export", "--output", str(tmp_path), "--no-animations", "--filename", "cv"],
    )
    assert result.exit_code == 0
    assert "IntersectionObserver" not in (tmp_path / "cv.html").read_text(encoding="utf-8")


def test_export_empty_portfolio_fails(tmp_path: Path):
    out_dir = tmp_path / "site"
    result = runner.invoke(app, ["export", "--output", str(out_dir)])
    assert result.exit_code == 1
    assert "Nothing to export" in result.output
    assert not out_dir.exists()


def test_export_dry_run(saved_portfolio: Path, tmp_path: Path):
    out_dir = tmp_path / "dry"
    result = runner.invoke(app, ["export", "--output", str(out_dir), "--dry-run"])
    assert result.exit_code == 0
    assert "Dry run: export validation" in result.output
    assert "Templates available" in result.output
    assert not out_dir.exists()


# ── particles ────────────────────────────────────────────────────


def test_particles_renders_gif(tmp_path: Path):
    out = tmp_path / "bg.gif"
    result = runner.invoke(
        app,
        [
            "particles", "--output", str(out), "--frames", "4", "--width", "80",
            "--height", "60", "--count", "10", "--style", "stars", "--seed", "1",
        ],
    )
    assert result.exit_code == 0, result.output
    with Image.open(out) as gif:
        assert gif.size == (80, 60)


def test_particles_rejects_unknown_color(tmp_path: Path):
    out = tmp_path / "bg.gif"
    result = runner.invoke(
        app, ["particles", "--output", str(out), "--frames", "1", "--color", "notacolor"],
    )
    assert result.exit_code == 1
    assert "Error: invalid color" in result.output
    assert not out.exists()


def test_preview_rejects_unknown_color():
    result = runner.invoke(app, ["preview", "--no-browser", "--color", "notacolor"])
    assert result.exit_code == 1
    assert "Error: invalid color" in result.output


# ── animations ───────────────────────────────────────────────────


def test_animations_set_and_show(config_dir: Path):
    result = runner.invoke(
        app,
        ["animations", "set", "skills", "scroll", "--enable", "--type", "slide",
         "--direction", "left"],
    )
    assert result.exit_code == 0, result.output
    assert "skills scroll: slide/left" in result.output

    store = AnimationStore.load(config_dir / "portfolio-animations.json")
    scroll = store.get_section_animations("skills").scroll
    assert scroll.enabled is True
    assert scroll.duration == 0.5

    shown = runner.invoke(app, ["animations", "show", "skills"])
    assert shown.exit_code == 0
    assert "motion   scroll" in shown.output


def test_animations_show_defaults_for_unknown_section():
    result = runner.invoke(app, ["animations", "show", "footer"])
    assert result.exit_code == 0
    assert "footer (defaults)" in result.output
    assert "fade/up 0.5s +0.2s ease-out [on]" in result.output


def test_animations_set_rejects_bad_value():
    result = runner.invoke(app, ["animations", "set", "skills", "entrance", "--duration", "0"])
    assert result.exit_code == 1
    assert "invalid duration" in result.output


def test_animations_set_requires_an_option():
    result = runner.invoke(app, ["animations", "set", "skills", "hover"])
    assert result.exit_code == 1
    assert "nothing to update" in result.output


def test_animations_reset(config_dir: Path):
    runner.invoke(app, ["animations", "set", "header", "entrance", "--type", "bounce"])
    result = runner.invoke(app, ["animations", "reset", "header"])
    assert result.exit_code == 0
    data = json.loads((config_dir / "portfolio-animations.json").read_text())
    assert data["sections"]["header"]["entrance"]["type"] == "fade"


def test_animations_reset_all(config_dir: Path):
    runner.invoke(app, ["animations", "set", "header", "hover", "--enable"])
    result = runner.invoke(app, ["animations", "reset-all", "--yes"])
    assert result.exit_code == 0
    data = json.loads((config_dir / "portfolio-animations.json").read_text())
    assert data["sections"] == {}


def test_animations_preview_mode_toggles():
    first = runner.invoke(app, ["animations", "preview-mode"])
    second = runner.invoke(app, ["animations", "preview-mode"])
    assert "Preview mode: on" in first.output
    assert "Preview mode: off" in second.output
