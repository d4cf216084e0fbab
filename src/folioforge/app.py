"""FolioForge — Textual TUI application entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from folioforge.workspace import Workspace

if TYPE_CHECKING:
    from collections.abc import Callable

    from textual.binding import BindingType
    from textual.screen import Screen


class FolioForgeApp(App[None]):
    """Main FolioForge TUI application."""

    TITLE = "FolioForge"
    SUB_TITLE = "Portfolio Animation Studio"

    CSS = """
    Header {
        background: $primary;
        height: 1;
    }

    .screen-container {
        padding: 0 2;
        height: auto;
    }

    .screen-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
    }

    .card {
        height: auto;
        margin-top: 1;
        padding: 0 2 1 2;
        border: round $primary;
        background: $panel;
    }

    .card-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .toolbar, .row {
        layout: horizontal;
        height: auto;
    }

    .toolbar {
        margin-top: 1;
    }

    .col {
        width: 1fr;
        height: auto;
    }

    Button {
        min-width: 12;
        margin-right: 1;
    }

    Button.back-btn {
        dock: left;
        min-width: 10;
    }

    Label {
        margin-top: 1;
        color: $secondary;
    }

    #section-table {
        height: auto;
        max-height: 14;
    }

    #studio-status, #settings-status {
        margin-top: 1;
        color: $success;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True),
        Binding("s", "open_settings", "Settings", show=True),
        Binding("escape", "go_back", "Back", show=False),
    ]

    def __init__(self, workspace: Workspace | None = None) -> None:
        super().__init__()
        self._workspace = workspace

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            self._workspace = Workspace()
        return self._workspace

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Footer()

    # ── Lifecycle ────────────────────────────────────────────
    def _get_screen_factories(self) -> dict[str, Callable[[], Screen[Any]]]:
        """Return a dict of screen name -> factory callable."""
        from folioforge.screens.animation_studio import AnimationStudioScreen
        from folioforge.screens.settings_screen import SettingsScreen

        return {
            "studio": AnimationStudioScreen,
            "settings": SettingsScreen,
        }

    def on_mount(self) -> None:
        """Push the initial screen."""
        from folioforge.screens.animation_studio import AnimationStudioScreen

        self.push_screen(AnimationStudioScreen())

    def on_unmount(self) -> None:
        if self._workspace is not None:
            self._workspace.close()

    # ── Actions ──────────────────────────────────────────────
    def action_open_settings(self) -> None:
        self.navigate("settings")

    def action_go_back(self) -> None:
        """Pop the current screen (unless already at the studio)."""
        if len(self.screen_stack) > 2:
            self.pop_screen()

    def navigate(self, screen_name: str) -> None:
        """Push a new screen instance by name."""
        factories = self._get_screen_factories()
        if screen_name in factories:
            self.push_screen(factories[screen_name]())

