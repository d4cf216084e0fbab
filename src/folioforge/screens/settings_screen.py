"""Settings screen — content backend and particle canvas configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, Select, Static

from folioforge.config import AppConfig, load_config

if TYPE_CHECKING:
    from textual.app import ComposeResult

BACKENDS = [("Groq", "groq"), ("Mock (offline)", "mock")]


class SettingsScreen(Screen):
    """Configure the generation backend, export directory and particle canvas."""

    name = "settings"

    def compose(self) -> ComposeResult:
        config = load_config()

        yield Header(show_clock=True)
        with Vertical(classes="screen-container"):
            with Horizontal(classes="toolbar"):
                yield Button("<- Back", id="btn-back", classes="back-btn")
                yield Static("Settings", classes="screen-title")

            # ── Content generation ───────────────────────────
            with Vertical(classes="card"):
                yield Static("Content Generation", classes="card-title")

                yield Label("Backend")
                yield Select(
                    BACKENDS,
                    value=config.active_backend if config.active_backend == "mock" else "groq",
                    allow_blank=False,
                    id="backend",
                )
                yield Label("Groq API key (blank = use GROQ_API_KEY)")
                yield Input(value=config.groq.api_key, password=True, id="groq-key")
                yield Label("Base URL")
                yield Input(
                    value=config.groq.base_url,
                    placeholder="https://api.groq.com/openai/v1",
                    id="groq-url",
                )
                yield Label("Model")
                yield Input(value=config.groq.model, id="groq-model")
                yield Label("Timeout (s)")
                yield Input(value=f"{config.groq.timeout:g}", placeholder="60", id="groq-timeout")

            # ── Particle canvas ──────────────────────────────
            with Vertical(classes="card"):
                yield Static("Particle Canvas", classes="card-title")

                with Horizontal(classes="row"):
                    with Vertical(classes="col"):
                        yield Label("Width")
                        yield Input(value=str(config.particles.width), id="pt-width")
                    with Vertical(classes="col"):
                        yield Label("Height")
                        yield Input(value=str(config.particles.height), id="pt-height")
                    with Vertical(classes="col"):
                        yield Label("FPS")
                        yield Input(value=str(config.particles.fps), id="pt-fps")
                yield Label("Background")
                yield Input(value=config.particles.background, id="pt-background")

            # ── Directories ──────────────────────────────────
            with Vertical(classes="card"):
                yield Static("Directories", classes="card-title")
                yield Label("Export Directory")
                yield Input(value=str(config.output_dir), id="dir-output")

            with Horizontal(classes="toolbar"):
                yield Button("Save Settings", id="btn-save", classes="success")
                yield Button("Reset Defaults", id="btn-reset", classes="danger")
                yield Button("Test Connection", id="btn-test", classes="primary")

            yield Label("", id="settings-status")
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-back":
                self.app.pop_screen()
            case "btn-save":
                self._save_settings()
            case "btn-reset":
                self._reset_defaults()
            case "btn-test":
                self.run_worker(self._test_connection(), exclusive=True)

    def _collect(self) -> dict[str, object]:
        return {
            "output_dir": self.query_one("#dir-output", Input).value,
            "active_backend": str(self.query_one("#backend", Select).value),
            "groq": {
                "api_key": self.query_one("#groq-key", Input).value,
                "base_url": self.query_one("#groq-url", Input).value,
                "model": self.query_one("#groq-model", Input).value,
                "timeout": float(self.query_one("#groq-timeout", Input).value or 60),
            },
            "particles": {
                "width": int(self.query_one("#pt-width", Input).value or 800),
                "height": int(self.query_one("#pt-height", Input).value or 600),
                "fps": int(self.query_one("#pt-fps", Input).value or 30),
                "background": self.query_one("#pt-background", Input).value,
            },
        }

    def _save_settings(self) -> None:
        """Collect inputs and write config.toml."""
        import tomli_w

        config = load_config()
        try:
            data = self._collect()
        except ValueError as exc:
            self._set_status(f"Invalid number: {exc}")
            return

        try:
            config.config_file.write_text(tomli_w.dumps(data))
        except OSError as exc:
            self._set_status(f"Error saving: {exc}")
            return
        self._set_status(f"Settings saved to {config.config_file}")

    def _reset_defaults(self) -> None:
        """Reset all inputs to defaults."""
        defaults = AppConfig.model_construct()
        groq = defaults.groq
        particles = defaults.particles

        self.query_one("#backend", Select).value = "groq"
        self.query_one("#groq-key", Input).value = ""
        self.query_one("#groq-url", Input).value = groq.base_url
        self.query_one("#groq-model", Input).value = groq.model
        self.query_one("#groq-timeout", Input).value = f"{groq.timeout:g}"
        self.query_one("#pt-width", Input).value = str(particles.width)
        self.query_one("#pt-height", Input).value = str(particles.height)
        self.query_one("#pt-fps", Input).value = str(particles.fps)
        self.query_one("#pt-background", Input).value = particles.background
        self.query_one("#dir-output", Input).value = str(defaults.output_dir)

        self._set_status("Reset to defaults (not yet saved).")

    async def _test_connection(self) -> None:
        """Check the Groq endpoint with the values currently entered."""
        from folioforge.backend.groq import GroqBackend
        from folioforge.config import GroqSettings

        settings = GroqSettings.model_construct(
            api_key=self.query_one("#groq-key", Input).value,
            base_url=self.query_one("#groq-url", Input).value,
            model=self.query_one("#groq-model", Input).value,
            timeout=5.0,
        )
        self._set_status(f"Testing {settings.base_url} ...")
        backend = GroqBackend(settings)
        await backend.connect()
        try:
            if await backend.is_available():
                self._set_status(f"Connected to {settings.base_url}")
            else:
                self._set_status("Groq unavailable (check the API key and URL)")
        finally:
            await backend.disconnect()

    def _set_status(self, text: str) -> None:
        label = self.query_one("#settings-status", Label)
        label.update(text)
