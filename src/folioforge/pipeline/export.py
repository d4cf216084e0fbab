"""Render a portfolio into a single self-contained HTML document."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader, TemplateNotFound

from folioforge.models.portfolio import find_theme
from folioforge.motion import (
    css_declarations,
    css_transition,
    resolve_motion,
)

if TYPE_CHECKING:
    from folioforge.models import ExportConfig, Portfolio, PortfolioContent
    from folioforge.motion import MotionSpec
    from folioforge.store import AnimationStore

logger = logging.getLogger(__name__)

INDEX_TEMPLATE = "portfolio.html.jinja2"
DEFAULT_FILENAME = "portfolio"


class ExportError(RuntimeError):
    """Raised when a portfolio cannot be exported; no file is written."""


@dataclass(frozen=True)
class SectionSpec:
    """How one optional content field becomes a page section."""

    id: str
    title: str
    field: str
    separator: str
    item_class: str
    inline: bool = False


SECTIONS: list[SectionSpec] = [
    SectionSpec("skills", "Skills", "skills", r",|\n", "skill-tag", inline=True),
    SectionSpec("education", "Education", "education", r"\n", "education-item"),
    SectionSpec("experience", "Experience", "experience", r"\n", "experience-item"),
    SectionSpec("projects", "Projects", "projects", r"\n", "project-item"),
    SectionSpec("achievements", "Achievements", "achievements", r"\n", "achievement-item"),
    SectionSpec("languages", "Languages", "languages", r",", "language-tag", inline=True),
    SectionSpec(
        "certifications", "Certifications", "certifications", r"\n", "certification-item",
    ),
]


def split_items(text: str, separator: str) -> list[str]:
    """Split a free-text field into trimmed, non-empty items."""
    return [item.strip() for item in re.split(separator, text) if item.strip()]


def build_sections(content: PortfolioContent) -> list[dict[str, object]]:
    """Sections that have content, in page order."""
    sections: list[dict[str, object]] = []
    for spec in SECTIONS:
        text = getattr(content, spec.field)
        if not text:
            continue
        items = split_items(text, spec.separator)
        if not items:
            continue
        sections.append({
            "id": spec.id,
            "title": spec.title,
            "items": items,
            "item_class": spec.item_class,
            "inline": spec.inline,
        })
    return sections


# ---------------------------------------------------------------------------
# Animation CSS
# ---------------------------------------------------------------------------


def _rule(selector: str, decls: dict[str, str]) -> str:
    body = " ".join(f"{prop}: {value};" for prop, value in decls.items())
    return f"{selector} {{ {body} }}"


def _keyframes(name: str, offsets: tuple[float, ...]) -> str:
    steps = len(offsets) - 1
    frames = " ".join(
        f"{round(100 * i / steps)}% {{ transform: translateY({y:g}px); }}"
        for i, y in enumerate(offsets)
    )
    return f"@keyframes {name} {{ {frames} }}"


def motion_css(section_id: str, hidden: MotionSpec, shown: MotionSpec) -> str:
    """CSS rules for one section: hidden state, in-view state and hover layer."""
    selector = f'[data-section="{section_id}"]'
    rules: list[str] = []

    initial = css_declarations(hidden.initial)
    initial["transition"] = css_transition(hidden.transition)
    rules.append(_rule(selector, initial))

    target = css_declarations(shown.target)
    if shown.target.y_keyframes:
        name = f"ff-bounce-{section_id}"
        rules.append(_keyframes(name, shown.target.y_keyframes))
        delay = shown.transition.delay
        target["animation"] = f"{name} 1s ease-out {delay:g}s 1 both"
    rules.append(_rule(f"{selector}.in-view", target))

    if shown.hover is not None:
        hover = css_declarations(shown.hover.style)
        if shown.hover.pulse:
            hover["animation"] = "ff-pulse 2s cubic-bezier(0.4, 0, 0.6, 1) infinite"
        hover["transition"] = css_transition(shown.hover.transition)
        rules.append(_rule(f"{selector}.in-view:hover", hover))

    return "\n".join(rules)


def build_animation_css(store: AnimationStore, section_ids: list[str]) -> str:
    """Animation CSS for every rendered section, from the store's configs."""
    blocks: list[str] = []
    for index, section_id in enumerate(section_ids):
        animations = store.get_section_animations(section_id)
        stagger = 0.0 if section_id == "header" else 0.1 * index
        hidden = resolve_motion(animations, in_view=False, extra_delay=stagger)
        shown = resolve_motion(animations, in_view=True, extra_delay=stagger)
        blocks.append(motion_css(section_id, hidden, shown))
    return "\n".join(blocks)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("folioforge", "templates"),
        autoescape=True,
    )


def _template_css(env: Environment, template: str) -> str:
    try:
        return env.get_template(f"styles/{template}.css.jinja2").render()
    except TemplateNotFound:
        logger.warning("No stylesheet for template '%s'; using base styles only", template)
        return ""


def render_portfolio_html(
    portfolio: Portfolio,
    *,
    theme: str | None = None,
    store: AnimationStore | None = None,
    include_animations: bool = True,
    include_footer: bool = True,
) -> str:
    """Render a complete standalone HTML document for a portfolio.

    Parameters
    ----------
    portfolio:
        Content, template name, theme and links.
    theme:
        Theme name overriding the portfolio's own.
    store:
        Optional animation store; when given (and ``include_animations``) each
        section gets CSS derived from its resolved motion plus a small
        viewport observer script.
    include_animations:
        Set to ``False`` for a static page.
    include_footer:
        Append the "Generated with FolioForge" footer.

    Returns
    -------
    str
        The HTML document.
    """
    env = _environment()
    content = portfolio.content
    colors = find_theme(theme or portfolio.theme)
    sections = build_sections(content)
    template = portfolio.template.value

    animation_css = ""
    preview_mode = False
    if store is not None and include_animations:
        section_ids = ["header", *(s["id"] for s in sections)]
        if portfolio.generated_html:
            section_ids.append("generated")
        animation_css = build_animation_css(store, section_ids)
        preview_mode = store.preview_mode

    page = env.get_template(INDEX_TEMPLATE)
    return page.render(
        title=content.name.strip() or "My Portfolio",
        content=content,
        template=template,
        theme=colors,
        sections=sections,
        social_links=portfolio.social_links,
        profile_image=portfolio.profile_image,
        generated_html=portfolio.generated_html,
        template_css=_template_css(env, template),
        animation_css=animation_css,
        animated=bool(animation_css),
        repeat_animations=preview_mode,
        include_footer=include_footer,
    ).strip()


def export_filename(portfolio: Portfolio, config: ExportConfig) -> str:
    stem = config.filename or portfolio.content.name.strip() or DEFAULT_FILENAME
    stem = re.sub(r"[\\/:*?\"<>|]+", "-", stem)
    return stem if stem.endswith(".html") else f"{stem}.html"


def export_portfolio(
    portfolio: Portfolio,
    config: ExportConfig,
    *,
    store: AnimationStore | None = None,
) -> Path:
    """Write a portfolio as a standalone HTML file.

    Raises
    ------
    ExportError
        If the portfolio has no content or the file cannot be written.
    """
    if not portfolio.content.has_content:
        msg = "Nothing to export: add a name, bio, skills or projects first"
        raise ExportError(msg)

    html = render_portfolio_html(
        portfolio,
        store=store,
        include_animations=config.include_animations,
        include_footer=config.include_footer,
    )

    out_path = config.output_dir / export_filename(portfolio, config)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(html, encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to export portfolio: {exc}"
        raise ExportError(msg) from exc

    logger.info("Exported portfolio -> %s", out_path)
    return out_path


# ---------------------------------------------------------------------------
# Dry-run validation
# ---------------------------------------------------------------------------


@dataclass
class DryRunCheck:
    """A single validation result for the dry-run report."""

    label: str
    passed: bool
    message: str = ""


@dataclass
class DryRunResult:
    """Aggregated result of a dry-run export validation."""

    checks: list[DryRunCheck] = field(default_factory=list)
    output_path: Path = field(default_factory=lambda: Path("output") / "portfolio.html")

    @property
    def valid(self) -> bool:
        return all(c.passed for c in self.checks)


def validate_export(
    portfolio: Portfolio,
    config: ExportConfig,
    *,
    store: AnimationStore | None = None,
) -> DryRunResult:
    """Validate export inputs without writing any files."""
    content = portfolio.content
    checks: list[DryRunCheck] = [
        DryRunCheck(
            label=f"Portfolio content ({content.name.strip() or 'unnamed'})",
            passed=content.has_content,
            message="" if content.has_content else "Add a name, bio, skills or projects",
        ),
    ]

    sections = build_sections(content)
    checks.append(
        DryRunCheck(
            label=f"{len(sections)} section{'s' if len(sections) != 1 else ''} with content",
            passed=True,
        )
    )

    if store is not None and config.include_animations:
        section_ids = ["header", *(s["id"] for s in sections)]
        animated = sum(
            1 for sid in section_ids if store.get_section_animations(sid).entrance.active
        )
        checks.append(
            DryRunCheck(
                label=f"{animated} of {len(section_ids)} sections animate on entry",
                passed=True,
            )
        )

    env = _environment()
    try:
        env.get_template(INDEX_TEMPLATE)
        template_ok = True
    except TemplateNotFound:
        template_ok = False
    checks.append(
        DryRunCheck(
            label="Templates available",
            passed=template_ok,
            message="" if template_ok else f"Missing: {INDEX_TEMPLATE}",
        )
    )

    return DryRunResult(
        checks=checks,
        output_path=config.output_dir / export_filename(portfolio, config),
    )
