"""Per-section animation configuration store.

The store is a plain keyed map of :class:`SectionAnimations` owned by a
single object.  Reads are total: a section that was never written yields a
fresh default triple without being inserted.  Writes are field-level merges
and notify subscribers so that views can re-render.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from folioforge.models.animation import (
    AnimationConfig,
    SectionAnimations,
    default_section_animations,
)
from folioforge.models.enums import AnimationKind

logger = logging.getLogger(__name__)

Listener = Callable[["AnimationStore"], None]


class StoreLoadError(ValueError):
    """Raised when a persisted animation store cannot be loaded."""


class StoreState(BaseModel):
    """Serialisable snapshot of the store (the persisted blob)."""

    sections: dict[str, SectionAnimations] = Field(default_factory=dict)
    active_section: str | None = None
    preview_mode: bool = False


class AnimationStore:
    """Single source of truth for per-section animation configuration."""

    def __init__(self, state: StoreState | None = None) -> None:
        state = state or StoreState()
        self._sections: dict[str, SectionAnimations] = {
            key: value.model_copy(deep=True) for key, value in state.sections.items()
        }
        self._active_section = state.active_section
        self._preview_mode = state.preview_mode
        self._listeners: list[Listener] = []

    # ── Read side ───────────────────────────────────────────
    @property
    def active_section(self) -> str | None:
        return self._active_section

    @property
    def preview_mode(self) -> bool:
        return self._preview_mode

    @property
    def section_ids(self) -> list[str]:
        return list(self._sections)

    def has_section(self, section_id: str) -> bool:
        return section_id in self._sections

    def get_section_animations(self, section_id: str) -> SectionAnimations:
        """Return the section's triple, or the defaults if never customised.

        The returned object is a copy; mutating it does not touch the store.
        """
        existing = self._sections.get(section_id)
        if existing is None:
            return default_section_animations()
        return existing.model_copy(deep=True)

    def snapshot(self) -> StoreState:
        return StoreState(
            sections={k: v.model_copy(deep=True) for k, v in self._sections.items()},
            active_section=self._active_section,
            preview_mode=self._preview_mode,
        )

    # ── Write side ──────────────────────────────────────────
    def set_active_section(self, section_id: str) -> None:
        """Focus a section and make sure it has an entry."""
        self._active_section = section_id
        if section_id not in self._sections:
            self._sections[section_id] = default_section_animations()
            logger.debug("Initialised animations for section '%s'", section_id)
        self._notify()

    def update_animation_config(
        self,
        section_id: str,
        kind: AnimationKind | str,
        partial: Mapping[str, Any],
    ) -> AnimationConfig:
        """Merge ``partial`` into one sub-config of a section.

        Fields absent from ``partial`` keep their previous values.  Returns
        the merged config.
        """
        kind = AnimationKind(kind)
        section = self._sections.get(section_id) or default_section_animations()
        current = section.get(kind)
        merged = AnimationConfig.model_validate({**current.model_dump(), **dict(partial)})
        setattr(section, kind.value, merged)
        self._sections[section_id] = section
        logger.debug(
            "Updated %s animation of '%s': %s", kind.value, section_id, dict(partial),
        )
        self._notify()
        return merged.model_copy()

    def reset_section_animations(self, section_id: str) -> None:
        """Restore a section to the default triple."""
        self._sections[section_id] = default_section_animations()
        logger.debug("Reset animations for section '%s'", section_id)
        self._notify()

    def reset_all_animations(self) -> None:
        """Drop every section entry."""
        self._sections.clear()
        logger.debug("Reset all section animations")
        self._notify()

    def toggle_preview_mode(self) -> bool:
        """Flip the preview flag and return its new value."""
        self._preview_mode = not self._preview_mode
        self._notify()
        return self._preview_mode

    # ── Change notification ─────────────────────────────────
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ── Persistence ─────────────────────────────────────────
    def save(self, path: Path) -> Path:
        """Write the whole store as a single JSON blob."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.snapshot().model_dump_json(indent=2))
        return path

    @classmethod
    def load(cls, path: Path) -> AnimationStore:
        """Rehydrate a store from its blob; a missing file yields an empty store."""
        try:
            text = path.read_text()
        except FileNotFoundError:
            return cls()
        except PermissionError:
            msg = f"permission denied reading animation store: {path}"
            raise StoreLoadError(msg) from None
        except OSError as exc:
            msg = f"cannot read animation store {path}: {exc.strerror}"
            raise StoreLoadError(msg) from None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"animation store contains invalid JSON: {exc}"
            raise StoreLoadError(msg) from None
        try:
            return cls(StoreState.model_validate(data))
        except PydanticValidationError as exc:
            msg = f"animation store has invalid structure: {exc}"
            raise StoreLoadError(msg) from None
