"""Tests for the HTML export pipeline."""

from pathlib import Path

import pytest

from folioforge.models import ExportConfig, Portfolio, PortfolioContent
from folioforge.pipeline import export as export_module
from folioforge.pipeline.export import (
    ExportError,
    build_sections,
    export_portfolio,
    render_portfolio_html,
    split_items,
    validate_export,
)
from folioforge.store import AnimationStore


# ── Sections ─────────────────────────────────────────────────────


def test_split_items_trims_and_drops_empties():
    assert split_items(" a, b ,,\nc\n", r",|\n") == ["a", "b", "c"]


def test_sections_only_when_non_empty(sample_portfolio: Portfolio):
    sections = build_sections(sample_portfolio.content)
    ids = [s["id"] for s in sections]
    assert ids == ["skills", "education", "projects", "languages"]


def test_section_splitting_rules():
    content = PortfolioContent(
        skills="Python, Rust\nGo",
        languages="English, French\nGerman",
        experience="Acme, Inc. (2020)\nInitech",
    )
    by_id = {s["id"]: s["items"] for s in build_sections(content)}
    assert by_id["skills"] == ["Python", "Rust", "Go"]
    assert by_id["languages"] == ["English", "French\nGerman"]
    assert by_id["experience"] == ["Acme, Inc. (2020)", "Initech"]


def test_whitespace_only_field_is_skipped():
    assert build_sections(PortfolioContent(achievements="  \n ")) == []


# ── Rendering ────────────────────────────────────────────────────


def test_render_contains_content_and_theme(sample_portfolio: Portfolio):
    html = render_portfolio_html(sample_portfolio)
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Ada Lovelace</title>" in html
    assert "Analytical Engineer" in html
    assert "--primary: #2563eb;" in html
    assert 'class="modern-template"' in html
    assert '<li class="skill-tag">Poetry</li>' in html
    assert 'href="https://github.com/ada"' in html
    assert "Generated with FolioForge" in html
    assert "certifications" not in html


def test_theme_override(sample_portfolio: Portfolio):
    html = render_portfolio_html(sample_portfolio, theme="green")
    assert "--primary: #16a34a;" in html


def test_render_escapes_user_content():
    portfolio = Portfolio(content=PortfolioContent(name="<b>x</b>", bio="a & b"))
    html = render_portfolio_html(portfolio)
    assert "<b>x</b>" not in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html
    assert "a &amp; b" in html


def test_generated_html_is_embedded_verbatim(sample_portfolio: Portfolio):
    sample_portfolio.generated_html = "<article><h2>About</h2></article>"
    html = render_portfolio_html(sample_portfolio)
    assert "<article><h2>About</h2></article>" in html


def test_no_store_means_static_page(sample_portfolio: Portfolio):
    html = render_portfolio_html(sample_portfolio)
    assert "IntersectionObserver" not in html
    assert "ff-animate" not in html


def test_animation_css_from_store(sample_portfolio: Portfolio, store: AnimationStore):
    store.update_animation_config(
        "skills", "scroll", {"enabled": True, "type": "slide", "direction": "left"},
    )
    store.update_animation_config("projects", "entrance", {"type": "bounce"})
    store.update_animation_config("header", "hover", {"enabled": True, "type": "lift"})

    html = render_portfolio_html(sample_portfolio, store=store)

    assert "IntersectionObserver" in html
    assert "threshold: 0.2" in html
    assert 'var repeat = false;' in html
    assert '[data-section="skills"] { opacity: 0; transform: translate(50px, 0px);' in html
    assert '[data-section="skills"].in-view { opacity: 1; transform: translate(0px, 0px); }' in html
    assert "@keyframes ff-bounce-projects" in html
    assert '[data-section="header"].in-view:hover' in html
    assert "box-shadow" in html


def test_preview_mode_makes_animations_repeat(sample_portfolio: Portfolio, store: AnimationStore):
    store.toggle_preview_mode()
    html = render_portfolio_html(sample_portfolio, store=store)
    assert "var repeat = true;" in html


def test_animations_can_be_disabled(sample_portfolio: Portfolio, store: AnimationStore):
    html = render_portfolio_html(sample_portfolio, store=store, include_animations=False)
    assert "IntersectionObserver" not in html


def test_footer_optional(sample_portfolio: Portfolio):
    html = render_portfolio_html(sample_portfolio, include_footer=False)
    assert "Generated with FolioForge" not in html


def test_missing_template_stylesheet_falls_back():
    env = export_module._environment()
    assert export_module._template_css(env, "does-not-exist") == ""


# ── Writing files ────────────────────────────────────────────────


def test_export_writes_named_file(sample_portfolio: Portfolio, sample_export_config: ExportConfig):
    out = export_portfolio(sample_portfolio, sample_export_config)
    assert out == sample_export_config.output_dir / "Ada Lovelace.html"
    assert "Ada Lovelace" in out.read_text(encoding="utf-8")


def test_export_default_filename(tmp_path: Path):
    portfolio = Portfolio(content=PortfolioContent(bio="Anonymous"))
    out = export_portfolio(portfolio, ExportConfig(output_dir=tmp_path))
    assert out.name == "portfolio.html"


def test_export_custom_filename_is_sanitised(sample_portfolio: Portfolio, tmp_path: Path):
    config = ExportConfig(output_dir=tmp_path, filename="me/site")
    assert export_portfolio(sample_portfolio, config).name == "me-site.html"


def test_export_empty_portfolio_fails(tmp_path: Path):
    with pytest.raises(ExportError, match="Nothing to export"):
        export_portfolio(Portfolio(), ExportConfig(output_dir=tmp_path))
    assert list(tmp_path.iterdir()) == []


def test_export_write_failure(sample_portfolio: Portfolio, tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(ExportError, match="Failed to export"):
        export_portfolio(sample_portfolio, ExportConfig(output_dir=blocker / "sub"))


# ── Dry run ──────────────────────────────────────────────────────


def test_validate_export_reports(sample_portfolio: Portfolio, sample_export_config: ExportConfig):
    store = AnimationStore()
    store.update_animation_config("skills", "entrance", {"enabled": False})

    result = validate_export(sample_portfolio, sample_export_config, store=store)

    assert result.valid
    labels = [c.label for c in result.checks]
    assert "4 sections with content" in labels
    assert "4 of 5 sections animate on entry" in labels
    assert result.output_path.name == "Ada Lovelace.html"
    assert not sample_export_config.output_dir.exists()


def test_validate_export_flags_empty_portfolio(sample_export_config: ExportConfig):
    result = validate_export(Portfolio(), sample_export_config)
    assert not result.valid
    assert result.checks[0].message
