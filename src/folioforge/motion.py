"""Motion resolution for animated portfolio elements.

Given a section's :class:`SectionAnimations` and the element's visibility,
:func:`resolve_motion` produces one concrete :class:`MotionSpec`: an initial
state, a target state, the transition between them, and an optional hover
layer.  Priority is explicit:

1. an active scroll animation (re-applies on every viewport change);
2. otherwise an active entrance animation (plays once per trigger);
3. otherwise a static, fully visible element.

:class:`AnimatedElement` wraps the pure function with the per-element state
a rendering host needs (has-entered flag, hover flag, trigger policy).
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from folioforge.models.enums import (
    AnimationCurve,
    AnimationDirection,
    AnimationType,
    HoverEffect,
    ZoomDirection,
)

if TYPE_CHECKING:
    from folioforge.models.animation import AnimationConfig, SectionAnimations
    from folioforge.store import AnimationStore

logger = logging.getLogger(__name__)

SLIDE_OFFSET = 50.0
FLIP_ANGLE = 90.0
ZOOM_IN_SCALE = 0.8
ZOOM_OUT_SCALE = 1.2
BOUNCE_KEYFRAMES: tuple[float, ...] = (0, -20, 0, -10, 0, -5, 0)
BOUNCE_STIFFNESS = 300.0
BOUNCE_DAMPING = 15.0
SPRING_STIFFNESS = 150.0
SPRING_DAMPING = 20.0
HOVER_LIFT = -5.0
HOVER_SHADOW = "0 10px 25px -5px rgba(0, 0, 0, 0.1)"
PULSE_CLASS = "animate-pulse"
VIEW_THRESHOLD = 0.2

_EASING: dict[AnimationCurve, str] = {
    AnimationCurve.LINEAR: "linear",
    AnimationCurve.EASE: "ease-in-out",
    AnimationCurve.EASE_IN_OUT: "ease-in-out",
    AnimationCurve.EASE_IN: "ease-in",
    AnimationCurve.EASE_OUT: "ease-out",
}


class MotionSource(StrEnum):
    SCROLL = "scroll"
    ENTRANCE = "entrance"
    STATIC = "static"


@dataclass(frozen=True)
class MotionState:
    """Visual properties of an element at one end of a transition.

    ``None`` means "not animated"; the host leaves the property alone.
    """

    opacity: float | None = None
    x: float | None = None
    y: float | None = None
    scale: float | None = None
    rotate_x: float | None = None
    rotate_y: float | None = None
    y_keyframes: tuple[float, ...] | None = None
    box_shadow: str | None = None

    def as_dict(self) -> dict[str, object]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class Transition:
    """Timing for a state change.  Springs ignore ``duration``."""

    type: str = "tween"
    duration: float | None = None
    delay: float = 0.0
    ease: str | None = None
    stiffness: float | None = None
    damping: float | None = None

    @property
    def is_spring(self) -> bool:
        return self.type == "spring"


@dataclass(frozen=True)
class HoverMotion:
    style: MotionState
    transition: Transition
    pulse: bool = False


@dataclass(frozen=True)
class MotionSpec:
    """One fully resolved motion description for an element."""

    source: MotionSource
    initial: MotionState
    target: MotionState
    transition: Transition
    triggered: bool
    hover: HoverMotion | None = None

    @property
    def animate(self) -> MotionState:
        """The state the element should currently be animating towards."""
        return self.target if self.triggered else self.initial

    def css_classes(self, *, hovering: bool) -> list[str]:
        if hovering and self.hover is not None and self.hover.pulse:
            return [PULSE_CLASS]
        return []


STATIC_STATE = MotionState(opacity=1.0)


def resolve_transition(config: AnimationConfig, *, extra_delay: float = 0.0) -> Transition:
    """Map a config's curve/duration/delay to a concrete transition."""
    delay = config.delay + extra_delay
    if config.curve == AnimationCurve.SPRING:
        return Transition(
            type="spring",
            delay=delay,
            stiffness=SPRING_STIFFNESS,
            damping=SPRING_DAMPING,
        )
    return Transition(
        duration=config.duration,
        delay=delay,
        ease=_EASING[config.curve],
    )


def _slide_offset(direction: str) -> dict[str, float]:
    match direction:
        case AnimationDirection.UP:
            return {"y": SLIDE_OFFSET}
        case AnimationDirection.DOWN:
            return {"y": -SLIDE_OFFSET}
        case AnimationDirection.LEFT:
            return {"x": SLIDE_OFFSET}
        case AnimationDirection.RIGHT:
            return {"x": -SLIDE_OFFSET}
    return {}


def _flip_rotation(direction: str) -> dict[str, float]:
    match direction:
        case AnimationDirection.UP:
            return {"rotate_x": FLIP_ANGLE}
        case AnimationDirection.DOWN:
            return {"rotate_x": -FLIP_ANGLE}
        case AnimationDirection.LEFT:
            return {"rotate_y": -FLIP_ANGLE}
        case AnimationDirection.RIGHT:
            return {"rotate_y": FLIP_ANGLE}
    return {}


def _zoom_scale(direction: str) -> float:
    return ZOOM_IN_SCALE if direction == ZoomDirection.IN else ZOOM_OUT_SCALE


def _shared_states(config: AnimationConfig) -> tuple[MotionState, MotionState]:
    """States for the types scroll and entrance have in common."""
    initial: dict[str, float] = {"opacity": 0.0}
    target: dict[str, float] = {"opacity": 1.0}
    match config.type:
        case AnimationType.SLIDE:
            offset = _slide_offset(config.direction)
            initial.update(offset)
            target.update({axis: 0.0 for axis in offset})
        case AnimationType.ZOOM:
            initial["scale"] = _zoom_scale(config.direction)
            target["scale"] = 1.0
    return MotionState(**initial), MotionState(**target)


def _scroll_motion(config: AnimationConfig, in_view: bool) -> MotionSpec:
    initial, target = _shared_states(config)
    return MotionSpec(
        source=MotionSource.SCROLL,
        initial=initial,
        target=target,
        transition=resolve_transition(config),
        triggered=in_view,
    )


def _entrance_motion(
    config: AnimationConfig, *, triggered: bool, extra_delay: float,
) -> MotionSpec:
    transition = resolve_transition(config, extra_delay=extra_delay)
    match config.type:
        case AnimationType.FLIP:
            rotation = _flip_rotation(config.direction)
            initial = MotionState(opacity=0.0, **rotation)
            target = MotionState(opacity=1.0, **{k: 0.0 for k in rotation})
        case AnimationType.BOUNCE:
            initial = MotionState(opacity=0.0, y=0.0)
            target = MotionState(opacity=1.0, y_keyframes=BOUNCE_KEYFRAMES)
            transition = Transition(
                type="spring",
                delay=transition.delay,
                stiffness=BOUNCE_STIFFNESS,
                damping=BOUNCE_DAMPING,
            )
        case _:
            initial, target = _shared_states(config)
    return MotionSpec(
        source=MotionSource.ENTRANCE,
        initial=initial,
        target=target,
        transition=transition,
        triggered=triggered,
    )


def resolve_hover(config: AnimationConfig) -> HoverMotion | None:
    """Hover layer for a config, or ``None`` when hover is inactive."""
    if not config.active:
        return None

    pulse = False
    match config.type:
        case AnimationType.FADE:
            style = MotionState(opacity=1.0 if config.direction == ZoomDirection.IN else 0.7)
        case HoverEffect.SCALE:
            style = MotionState(scale=1.05 if config.direction == AnimationDirection.UP else 0.95)
        case AnimationType.ZOOM:
            style = MotionState(scale=1.05)
        case HoverEffect.LIFT:
            style = MotionState(y=HOVER_LIFT, box_shadow=HOVER_SHADOW)
        case HoverEffect.PULSE:
            style = MotionState()
            pulse = True
        case _:
            style = MotionState()

    # Hover never waits.
    transition = resolve_transition(config.model_copy(update={"delay": 0.0}))
    return HoverMotion(style=style, transition=transition, pulse=pulse)


def resolve_motion(
    animations: SectionAnimations,
    *,
    in_view: bool,
    has_entered: bool = False,
    extra_delay: float = 0.0,
) -> MotionSpec:
    """Resolve a section's animations into one :class:`MotionSpec`.

    Parameters
    ----------
    animations:
        The section's entrance/hover/scroll triple.
    in_view:
        Whether the element currently intersects the viewport enough to count.
    has_entered:
        Whether the element has already entered view once (entrance only).
    extra_delay:
        Per-instance stagger added to the entrance delay.
    """
    hover = resolve_hover(animations.hover)

    if animations.scroll.active:
        spec = _scroll_motion(animations.scroll, in_view)
    elif animations.entrance.active:
        spec = _entrance_motion(
            animations.entrance,
            triggered=has_entered or in_view,
            extra_delay=extra_delay,
        )
    else:
        spec = MotionSpec(
            source=MotionSource.STATIC,
            initial=STATIC_STATE,
            target=STATIC_STATE,
            transition=Transition(),
            triggered=True,
        )

    if hover is None:
        return spec
    return MotionSpec(
        source=spec.source,
        initial=spec.initial,
        target=spec.target,
        transition=spec.transition,
        triggered=spec.triggered,
        hover=hover,
    )


class ViewportTrigger:
    """Turns a visible-area ratio into the boolean "in view" signal.

    With ``once=True`` the signal latches after the first entry; otherwise
    it follows every entry and exit.
    """

    def __init__(self, *, once: bool = True, threshold: float = VIEW_THRESHOLD) -> None:
        self.once = once
        self.threshold = threshold
        self._in_view = False

    @property
    def in_view(self) -> bool:
        return self._in_view

    def observe(self, visible_ratio: float) -> bool:
        if self.once and self._in_view:
            return True
        self._in_view = visible_ratio >= self.threshold
        return self._in_view

    def reset(self) -> None:
        self._in_view = False


class AnimatedElement:
    """Per-element motion state bound to one section of a store.

    The host reports visibility through :meth:`observe` and pointer state
    through :meth:`set_hovering`; :meth:`resolve` returns what to apply.
    Call :meth:`close` when the element goes away.
    """

    def __init__(
        self,
        store: AnimationStore,
        section_id: str,
        *,
        extra_delay: float = 0.0,
        gate_on_view: bool = True,
    ) -> None:
        self.store = store
        self.section_id = section_id
        self.extra_delay = extra_delay
        self.gate_on_view = gate_on_view
        self.hovering = False
        self._preview_mode = store.preview_mode
        self._trigger = ViewportTrigger(once=not self._preview_mode)
        self._has_entered = not gate_on_view
        self._unsubscribe = store.subscribe(self._on_store_change)

    @property
    def has_entered(self) -> bool:
        return self._has_entered

    @property
    def in_view(self) -> bool:
        return self._trigger.in_view

    def observe(self, visible_ratio: float) -> MotionSpec:
        """Feed a new intersection ratio and return the resolved motion."""
        if self._trigger.observe(visible_ratio):
            self._has_entered = True
        return self.resolve()

    def set_hovering(self, hovering: bool) -> None:
        self.hovering = hovering

    def resolve(self) -> MotionSpec:
        return resolve_motion(
            self.store.get_section_animations(self.section_id),
            in_view=self._trigger.in_view,
            has_entered=self._has_entered,
            extra_delay=self.extra_delay,
        )

    def css_classes(self) -> list[str]:
        return self.resolve().css_classes(hovering=self.hovering)

    def close(self) -> None:
        self._unsubscribe()

    def _on_store_change(self, store: AnimationStore) -> None:
        if store.preview_mode == self._preview_mode:
            return
        self._preview_mode = store.preview_mode
        self._trigger.once = not self._preview_mode
        if self._preview_mode and self.gate_on_view:
            self._has_entered = False
            self._trigger.reset()
            logger.debug("Preview mode re-armed entrance for '%s'", self.section_id)


# ── CSS rendering ───────────────────────────────────────────
SPRING_CSS_EASING = "cubic-bezier(0.34, 1.56, 0.64, 1)"


def css_declarations(state: MotionState) -> dict[str, str]:
    """CSS properties for a motion state (keyframes are rendered separately)."""
    decls: dict[str, str] = {}
    if state.opacity is not None:
        decls["opacity"] = f"{state.opacity:g}"
    transforms: list[str] = []
    if state.x is not None or state.y is not None:
        transforms.append(f"translate({state.x or 0:g}px, {state.y or 0:g}px)")
    if state.scale is not None:
        transforms.append(f"scale({state.scale:g})")
    if state.rotate_x is not None:
        transforms.append(f"rotateX({state.rotate_x:g}deg)")
    if state.rotate_y is not None:
        transforms.append(f"rotateY({state.rotate_y:g}deg)")
    if transforms:
        decls["transform"] = " ".join(transforms)
    if state.box_shadow is not None:
        decls["box-shadow"] = state.box_shadow
    return decls


def css_transition(transition: Transition, *, fallback_duration: float = 0.5) -> str:
    """CSS ``transition`` shorthand approximating a resolved transition."""
    if transition.is_spring:
        duration = transition.duration or fallback_duration
        easing = SPRING_CSS_EASING
    else:
        duration = transition.duration if transition.duration is not None else 0.0
        easing = transition.ease or "ease"
    return f"all {duration:g}s {easing} {transition.delay:g}s"
