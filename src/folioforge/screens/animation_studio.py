"""Animation studio screen — per-section entrance, hover and scroll editing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Select, Static, Switch

from folioforge.models.animation import animation_options
from folioforge.models.enums import AnimationKind, HoverEffect
from folioforge.motion import resolve_motion
from folioforge.pipeline.export import SECTIONS
from folioforge.widgets.motion_preview import MotionPreview

if TYPE_CHECKING:
    from textual.app import ComposeResult

    from folioforge.app import FolioForgeApp
    from folioforge.models.animation import AnimationConfig
    from folioforge.store import AnimationStore

PAGE_SECTIONS: list[str] = ["header", *(s.id for s in SECTIONS), "generated"]


def _select_options(pairs: list[tuple[str, str]]) -> list[tuple[str, str]]:
    # Select wants (prompt, value)
    return [(label, value) for value, label in pairs]


def preview_status(enabled: bool) -> str:
    if enabled:
        return "Preview mode on: entrances reset and play again on next view."
    return "Preview mode off: entrances play once."


def _summary(config: AnimationConfig) -> str:
    if not config.enabled:
        return "off"
    return f"{config.type.value} {config.direction.value} {config.duration:g}s"


class AnimationStudioScreen(Screen):
    """Browse page sections and edit their animations."""

    name = "studio"

    BINDINGS = [
        ("p", "toggle_preview", "Preview Mode"),
        ("r", "reset_section", "Reset Section"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._rows: set[str] = set()
        self._unsubscribe: Any = None
        self._options = animation_options()

    @property
    def store(self) -> AnimationStore:
        app: FolioForgeApp = self.app  # type: ignore[assignment]
        return app.workspace.store

    def compose(self) -> ComposeResult:
        opts = self._options
        yield Header(show_clock=True)
        with Vertical(classes="screen-container"):
            yield Static("FOLIOFORGE  Animation Studio", classes="screen-title")

            with Vertical(classes="card"):
                yield Static("Sections", classes="card-title")
                yield DataTable(id="section-table")

            with Vertical(classes="card"):
                yield Static("Animation", classes="card-title", id="editor-title")
                with Horizontal(classes="row"):
                    with Vertical(classes="col"):
                        yield Label("Kind")
                        yield Select(
                            [(k.value.title(), k.value) for k in AnimationKind],
                            value=AnimationKind.ENTRANCE.value,
                            allow_blank=False,
                            id="anim-kind",
                        )
                    with Vertical(classes="col"):
                        yield Label("Type")
                        yield Select(
                            _select_options(opts["types"]),
                            value="fade",
                            allow_blank=False,
                            id="anim-type",
                        )
                    with Vertical(classes="col"):
                        yield Label("Direction")
                        yield Select(
                            _select_options(opts["directions"] + opts["zoom_directions"]),
                            value="up",
                            allow_blank=False,
                            id="anim-direction",
                        )
                with Horizontal(classes="row"):
                    with Vertical(classes="col"):
                        yield Label("Curve")
                        yield Select(
                            _select_options(opts["curves"]),
                            value="ease-out",
                            allow_blank=False,
                            id="anim-curve",
                        )
                    with Vertical(classes="col"):
                        yield Label("Duration (s)")
                        yield Input(value="0.5", id="anim-duration")
                    with Vertical(classes="col"):
                        yield Label("Delay (s)")
                        yield Input(value="0", id="anim-delay")
                with Horizontal(classes="row"):
                    yield Label("Enabled")
                    yield Switch(value=True, id="anim-enabled")

            yield MotionPreview("Select a section to preview its motion", id="motion-preview")

            with Horizontal(classes="toolbar"):
                yield Button("Apply", id="btn-apply", classes="success")
                yield Button("Reset Section", id="btn-reset", classes="danger")
                yield Button("Reset All", id="btn-reset-all", classes="danger")
                yield Button("Preview Mode", id="btn-preview", classes="primary")
                yield Button("Settings", id="btn-settings")

            yield Label("", id="studio-status")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#section-table", DataTable)
        table.add_column("Section", key="section")
        for kind in AnimationKind:
            table.add_column(kind.value.title(), key=kind.value)
        table.add_column("Motion", key="motion")
        table.cursor_type = "row"
        self._refresh()
        self._unsubscribe = self.store.subscribe(self._on_store_change)
        active = self.store.active_section
        self._set_status(
            f"Preview mode {'on' if self.store.preview_mode else 'off'}"
            + (f" · editing {active}" if active else "")
        )

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ── Store sync ───────────────────────────────────────────
    def _on_store_change(self, store: AnimationStore) -> None:
        self._refresh()

    def _row_values(self, section_id: str) -> list[str]:
        animations = self.store.get_section_animations(section_id)
        motion = resolve_motion(animations, in_view=True)
        return [
            section_id,
            *(_summary(animations.get(kind)) for kind in AnimationKind),
            motion.source.value,
        ]

    def _refresh(self) -> None:
        table = self.query_one("#section-table", DataTable)
        extra = [s for s in self.store.section_ids if s not in PAGE_SECTIONS]
        for section_id in [*PAGE_SECTIONS, *extra]:
            values = self._row_values(section_id)
            if section_id not in self._rows:
                table.add_row(*values, key=section_id)
                self._rows.add(section_id)
                continue
            for column, value in zip(["section", *AnimationKind, "motion"], values, strict=True):
                table.update_cell(section_id, str(column), value)

        active = self.store.active_section
        if active is not None:
            self.query_one("#motion-preview", MotionPreview).show(
                active, self.store.get_section_animations(active),
            )

    # ── Editors ──────────────────────────────────────────────
    @property
    def _kind(self) -> AnimationKind:
        return AnimationKind(self.query_one("#anim-kind", Select).value)

    def _load_editors(self) -> None:
        """Fill the editors from the active section's selected kind."""
        section_id = self.store.active_section
        if section_id is None:
            return
        kind = self._kind
        config = self.store.get_section_animations(section_id).get(kind)

        hover_like = kind == AnimationKind.HOVER or isinstance(config.type, HoverEffect)
        type_key = "hover_types" if hover_like else "types"
        type_select = self.query_one("#anim-type", Select)
        type_select.set_options(_select_options(self._options[type_key]))
        type_select.value = config.type.value
        self.query_one("#anim-direction", Select).value = config.direction.value
        self.query_one("#anim-curve", Select).value = config.curve.value
        self.query_one("#anim-duration", Input).value = f"{config.duration:g}"
        self.query_one("#anim-delay", Input).value = f"{config.delay:g}"
        self.query_one("#anim-enabled", Switch).value = config.enabled
        self.query_one("#editor-title", Static).update(f"{section_id} · {kind.value}")

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        section_id = event.row_key.value
        if section_id is None or section_id == self.store.active_section:
            return
        self.store.set_active_section(section_id)
        self._load_editors()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "anim-kind":
            self._load_editors()

    def _apply(self) -> None:
        section_id = self.store.active_section
        if section_id is None:
            self._set_status("Select a section first.")
            return
        try:
            partial = {
                "type": self.query_one("#anim-type", Select).value,
                "direction": self.query_one("#anim-direction", Select).value,
                "curve": self.query_one("#anim-curve", Select).value,
                "duration": float(self.query_one("#anim-duration", Input).value),
                "delay": float(self.query_one("#anim-delay", Input).value or 0),
                "enabled": self.query_one("#anim-enabled", Switch).value,
            }
            merged = self.store.update_animation_config(section_id, self._kind, partial)
        except ValueError as exc:
            self._set_status(f"Invalid value: {exc}")
            return
        self._set_status(f"Updated {section_id} {self._kind.value}: {_summary(merged)}")

    # ── Button handlers ──────────────────────────────────────
    def on_button_pressed(self, event: Button.Pressed) -> None:
        app: FolioForgeApp = self.app  # type: ignore[assignment]

        match event.button.id:
            case "btn-apply":
                self._apply()
            case "btn-reset":
                self.action_reset_section()
            case "btn-reset-all":
                self.store.reset_all_animations()
                self._load_editors()
                self._set_status("All sections reset to defaults.")
            case "btn-preview":
                self.action_toggle_preview()
            case "btn-settings":
                app.navigate("settings")

    def action_toggle_preview(self) -> None:
        self._set_status(preview_status(self.store.toggle_preview_mode()))

    def action_reset_section(self) -> None:
        section_id = self.store.active_section
        if section_id is None:
            self._set_status("Select a section first.")
            return
        self.store.reset_section_animations(section_id)
        self._load_editors()
        self._set_status(f"Reset {section_id} to defaults.")

    def _set_status(self, text: str) -> None:
        label = self.query_one("#studio-status", Label)
        label.update(text)
