"""Motion preview widget: a textual readout of a section's resolved motion."""

from __future__ import annotations

from rich.markup import escape
from textual.widgets import Static

from folioforge.models.animation import SectionAnimations, preview_duration
from folioforge.motion import MotionSpec, MotionState, Transition, resolve_motion


def _format_state(state: MotionState) -> str:
    values = state.as_dict()
    if not values:
        return "-"
    parts = []
    for key, value in values.items():
        if isinstance(value, tuple):
            value = " ".join(f"{v:g}" for v in value)
        elif isinstance(value, float):
            value = f"{value:g}"
        parts.append(f"{key}={value}")
    return ", ".join(parts)


def _format_transition(transition: Transition) -> str:
    if transition.is_spring:
        return (
            f"spring stiffness={transition.stiffness:g} damping={transition.damping:g}"
            f" delay={transition.delay:g}s"
        )
    duration = transition.duration if transition.duration is not None else 0.0
    return f"{transition.ease or 'ease'} {duration:g}s delay={transition.delay:g}s"


def describe_motion(spec: MotionSpec) -> str:
    """Multi-line plain-text description of a resolved motion."""
    lines = [
        f"Source:     {spec.source.value}",
        f"Initial:    {_format_state(spec.initial)}",
        f"Target:     {_format_state(spec.target)}",
        f"Transition: {_format_transition(spec.transition)}",
    ]
    if spec.hover is not None:
        hover = "pulse" if spec.hover.pulse else _format_state(spec.hover.style)
        lines.append(f"Hover:      {hover} ({_format_transition(spec.hover.transition)})")
    return "\n".join(lines)


def preview_markup(section_id: str, animations: SectionAnimations) -> str:
    """Rich markup shown by :class:`MotionPreview` for one section."""
    spec = resolve_motion(animations, in_view=True)
    playing = preview_duration(animations.entrance)
    return (
        f"[b]{escape(section_id)}[/b]  (preview plays ~{playing:g}s)\n"
        f"{escape(describe_motion(spec))}"
    )


class MotionPreview(Static):
    """Shows what a section will do once it scrolls into view."""

    DEFAULT_CSS = """
    MotionPreview {
        background: #020617;
        border: round #1e3a8a;
        padding: 1;
        min-height: 7;
        color: #93c5fd;
        margin: 1 0;
    }
    """

    def show(self, section_id: str, animations: SectionAnimations) -> None:
        self.update(preview_markup(section_id, animations))
