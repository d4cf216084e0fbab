"""CLI entry point using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from folioforge.models.enums import AnimationKind, ParticleStyle, TemplateName

if TYPE_CHECKING:
    from folioforge.models import AnimationConfig, ParticleConfig
    from folioforge.workspace import Workspace

app = typer.Typer(
    name="folioforge",
    help="Animated portfolio builder: sections, motion and particle backgrounds.",
    no_args_is_help=False,
)
animations_app = typer.Typer(help="Inspect and edit per-section animations.")
app.add_typer(animations_app, name="animations")


def _workspace() -> Workspace:
    from folioforge.workspace import Workspace

    return Workspace()


def _describe(config: AnimationConfig) -> str:
    state = "on" if config.enabled else "off"
    return (
        f"{config.type.value}/{config.direction.value} "
        f"{config.duration:g}s +{config.delay:g}s {config.curve.value} [{state}]"
    )


# ── Particle options shared by `particles` and `preview` ────
CountOpt = Annotated[int, typer.Option("--count", "-c", min=0, help="Particle count")]
SizeOpt = Annotated[float, typer.Option("--size", help="Base particle size")]
SpeedOpt = Annotated[float, typer.Option("--speed", help="Maximum speed per axis")]
ColorOpt = Annotated[str, typer.Option("--color", help="Particle colour")]
OpacityOpt = Annotated[
    float, typer.Option("--opacity", min=0.0, max=1.0, help="Maximum opacity"),
]
StyleOpt = Annotated[ParticleStyle, typer.Option("--style", "-s", help="Particle shape")]


def _particle_config(
    count: int, size: float, speed: float, color: str, opacity: float, style: ParticleStyle,
) -> ParticleConfig:
    from pydantic import ValidationError

    from folioforge.models import ParticleConfig

    try:
        return ParticleConfig(
            particle_count=count,
            size=size,
            speed=speed,
            color=color,
            opacity=opacity,
            style=style,
        )
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"][:1])
        typer.echo(f"Error: invalid {field}: {first['msg']}", err=True)
        raise typer.Exit(1) from None


@app.command()
def init(
    name: Annotated[str, typer.Option("--name", "-n", help="Your name")] = "",
    template: Annotated[
        TemplateName, typer.Option("--template", "-t", help="Page template"),
    ] = TemplateName.MODERN,
    theme: Annotated[str, typer.Option("--theme", help="Colour theme")] = "purple",
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Portfolio file or directory"),
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite an existing portfolio"),
    ] = False,
) -> None:
    """Create a new, empty portfolio."""
    from folioforge.models import Portfolio, PortfolioContent

    ws = _workspace()
    target = path or ws.portfolio_file
    existing = target if target.suffix == ".json" else target / "portfolio.json"
    if existing.exists() and not force:
        typer.echo(f"Error: {existing} already exists (use --force to overwrite)", err=True)
        raise typer.Exit(1)

    portfolio = Portfolio(
        content=PortfolioContent(name=name),
        template=template,
        theme=theme,
    )
    save_path = ws.save_portfolio(portfolio, target)
    typer.echo(f"Created portfolio at {save_path}")


@app.command()
def generate(
    path: Annotated[
        Path | None,
        typer.Argument(help="Portfolio file (defaults to the workspace portfolio)"),
    ] = None,
    backend: Annotated[
        str | None,
        typer.Option("--backend", "-b", help="Backend: groq or mock"),
    ] = None,
) -> None:
    """Generate portfolio HTML from the entered content."""
    import asyncio

    from folioforge.backend import GenerationError, GenerationRequest, GroqBackend, MockBackend
    from folioforge.models.portfolio import PortfolioLoadError

    ws = _workspace()
    try:
        portfolio = ws.load_portfolio(path)
    except PortfolioLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    backend_name = backend or ws.config.active_backend
    gen_backend: GroqBackend | MockBackend
    if backend_name == "mock":
        gen_backend = MockBackend()
    else:
        gen_backend = GroqBackend(ws.config.groq)

    request = GenerationRequest.from_portfolio(portfolio)

    async def _run() -> str:
        await gen_backend.connect()
        try:
            typer.echo(f"Generating ({backend_name}) for {request.name or 'portfolio'}")
            result = await gen_backend.generate(
                request,
                progress_callback=lambda step, total, status: typer.echo(
                    f"  {status} ({step}/{total})"
                ),
            )
            return result.html
        finally:
            await gen_backend.disconnect()

    try:
        html = asyncio.run(_run())
    except GenerationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    portfolio.generated_html = html
    saved = ws.save_portfolio(portfolio, path)
    typer.echo(f"Saved generated content to {saved}")


@app.command()
def check() -> None:
    """Check backend connectivity and report status."""
    import asyncio

    from folioforge.config import load_config

    config = load_config()
    backend_name = config.active_backend

    async def _run() -> None:
        if backend_name == "mock":
            typer.echo("Mock backend: always available")
            typer.echo("Status: ready")
            return

        from folioforge.backend.groq import GroqBackend

        groq_backend = GroqBackend(config.groq)
        await groq_backend.connect()
        try:
            available = await groq_backend.is_available()
            if available:
                models = await groq_backend.get_models()
                typer.echo(f"Groq: connected ({config.groq.base_url})")
                typer.echo(f"Model: {', '.join(models)}")
                typer.echo("Status: ready")
            else:
                typer.echo("Groq: unavailable (check GROQ_API_KEY)")
                typer.echo("Status: offline")
                raise typer.Exit(1)
        finally:
            await groq_backend.disconnect()

    asyncio.run(_run())


@app.command()
def export(
    path: Annotated[
        Path | None,
        typer.Argument(help="Portfolio file (defaults to the workspace portfolio)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory"),
    ] = None,
    filename: Annotated[
        str | None, typer.Option("--filename", help="Output file name"),
    ] = None,
    no_animations: Annotated[
        bool, typer.Option("--no-animations", help="Export a static page"),
    ] = False,
    no_footer: Annotated[
        bool, typer.Option("--no-footer", help="Omit the generated-with footer"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Validate export without writing files"),
    ] = False,
) -> None:
    """Export the portfolio as a standalone HTML page."""
    from folioforge.models import ExportConfig
    from folioforge.models.portfolio import PortfolioLoadError

    ws = _workspace()
    try:
        portfolio = ws.load_portfolio(path)
    except PortfolioLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    export_config = ExportConfig(
        output_dir=output or ws.config.output_dir,
        filename=filename,
        include_animations=not no_animations,
        include_footer=not no_footer,
    )

    if dry_run:
        from folioforge.pipeline.export import validate_export

        result = validate_export(portfolio, export_config, store=ws.store)
        typer.echo("Dry run: export validation")
        for item in result.checks:
            symbol = "✓" if item.passed else "✗"
            typer.echo(f"  {symbol} {item.label}")
            if not item.passed and item.message:
                typer.echo(f"    {item.message}")
        typer.echo(f"Export would write: {result.output_path}")
        if not result.valid:
            raise typer.Exit(1)
        return

    from folioforge.pipeline.export import ExportError, export_portfolio

    try:
        out_path = export_portfolio(portfolio, export_config, store=ws.store)
    except ExportError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    typer.echo(f"Exported to {out_path}")


@app.command()
def particles(
    output: Annotated[Path, typer.Option("--output", "-o", help="GIF path")] = Path(
        "particles.gif"
    ),
    frames: Annotated[int, typer.Option("--frames", min=1, help="Frames to render")] = 60,
    width: Annotated[int | None, typer.Option("--width", "-W", help="Canvas width")] = None,
    height: Annotated[int | None, typer.Option("--height", "-H", help="Canvas height")] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
    count: CountOpt = 50,
    size: SizeOpt = 3.0,
    speed: SpeedOpt = 0.5,
    color: ColorOpt = "#3b82f6",
    opacity: OpacityOpt = 0.7,
    style: StyleOpt = ParticleStyle.CIRCLES,
) -> None:
    """Render the particle background to an animated GIF."""
    import random

    from folioforge.particles import render_frames, save_gif

    ws = _workspace()
    settings = ws.config.particles
    config = _particle_config(count, size, speed, color, opacity, style)
    rng = random.Random(seed)  # noqa: S311
    system = ws.particle_system(config, rng=rng)
    system.resize(width or settings.width, height or settings.height)

    rendered = render_frames(system, frames, background=settings.background)
    if not rendered:
        typer.echo("Error: particle system has nothing to render", err=True)
        raise typer.Exit(1)
    save_gif(rendered, output, fps=settings.fps)
    typer.echo(f"Rendered {len(rendered)} frames of {len(system.particles)} particles to {output}")


@app.command()
def preview(
    port: Annotated[int, typer.Option("--port", "-p", help="HTTP port")] = 8765,
    ws_port: Annotated[int, typer.Option("--ws-port", help="WebSocket port")] = 8766,
    no_browser: Annotated[
        bool, typer.Option("--no-browser", help="Don't auto-open browser")
    ] = False,
    count: CountOpt = 50,
    size: SizeOpt = 3.0,
    speed: SpeedOpt = 0.5,
    color: ColorOpt = "#3b82f6",
    opacity: OpacityOpt = 0.7,
    style: StyleOpt = ParticleStyle.CIRCLES,
) -> None:
    """Start a live preview server streaming the particle background."""
    import asyncio

    from folioforge.preview_server import PreviewServer

    ws = _workspace()
    settings = ws.config.particles
    system = ws.particle_system(_particle_config(count, size, speed, color, opacity, style))
    server = PreviewServer(
        system,
        http_port=port,
        ws_port=ws_port,
        fps=settings.fps,
        background=settings.background,
    )
    typer.echo(f"Preview server at http://localhost:{port}")
    typer.echo("Press Ctrl+C to stop")
    try:
        asyncio.run(server.run(open_browser=not no_browser))
    except KeyboardInterrupt:
        typer.echo("\nStopped.")


@app.command()
def tui() -> None:
    """Launch the interactive TUI."""
    from folioforge.app import FolioForgeApp

    app_instance = FolioForgeApp()
    app_instance.run()


# ── animations sub-commands ─────────────────────────────────
@animations_app.command("show")
def animations_show(
    section: Annotated[
        str | None, typer.Argument(help="Section id (omit to list all)"),
    ] = None,
) -> None:
    """Show animation settings for one or all customised sections."""
    from folioforge.motion import resolve_motion

    ws = _workspace()
    store = ws.store
    section_ids = [section] if section else store.section_ids
    if not section_ids:
        typer.echo("No customised sections (all sections use defaults).")
    for section_id in section_ids:
        animations = store.get_section_animations(section_id)
        marker = " (defaults)" if not store.has_section(section_id) else ""
        typer.echo(f"{section_id}{marker}")
        for kind in AnimationKind:
            typer.echo(f"  {kind.value:<9}{_describe(animations.get(kind))}")
        motion = resolve_motion(animations, in_view=True)
        typer.echo(f"  motion   {motion.source.value}")
    typer.echo(f"Preview mode: {'on' if store.preview_mode else 'off'}")


@animations_app.command("set")
def animations_set(
    section: Annotated[str, typer.Argument(help="Section id")],
    kind: Annotated[AnimationKind, typer.Argument(help="entrance, hover or scroll")],
    type_: Annotated[str | None, typer.Option("--type", "-t", help="Animation type")] = None,
    direction: Annotated[
        str | None, typer.Option("--direction", "-d", help="Direction"),
    ] = None,
    duration: Annotated[
        float | None, typer.Option("--duration", help="Duration in seconds"),
    ] = None,
    delay: Annotated[float | None, typer.Option("--delay", help="Delay in seconds")] = None,
    curve: Annotated[str | None, typer.Option("--curve", help="Easing curve")] = None,
    enabled: Annotated[
        bool | None, typer.Option("--enable/--disable", help="Turn the animation on or off"),
    ] = None,
) -> None:
    """Update one animation of a section; unspecified fields are kept."""
    from pydantic import ValidationError

    partial = {
        key: value
        for key, value in {
            "type": type_,
            "direction": direction,
            "duration": duration,
            "delay": delay,
            "curve": curve,
            "enabled": enabled,
        }.items()
        if value is not None
    }
    if not partial:
        typer.echo("Error: nothing to update (pass at least one option)", err=True)
        raise typer.Exit(1)

    ws = _workspace()
    try:
        merged = ws.store.update_animation_config(section, kind, partial)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"][:1])
        typer.echo(f"Error: invalid {field}: {first['msg']}", err=True)
        raise typer.Exit(1) from None
    typer.echo(f"{section} {kind.value}: {_describe(merged)}")


@animations_app.command("reset")
def animations_reset(
    section: Annotated[str, typer.Argument(help="Section id")],
) -> None:
    """Restore one section to the default animations."""
    ws = _workspace()
    ws.store.reset_section_animations(section)
    typer.echo(f"Reset animations for '{section}'")


@animations_app.command("reset-all")
def animations_reset_all(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Forget every customised section."""
    if not yes:
        typer.confirm("Reset animations for all sections?", abort=True)
    ws = _workspace()
    ws.store.reset_all_animations()
    typer.echo("Reset all section animations")


@animations_app.command("preview-mode")
def animations_preview_mode() -> None:
    """Toggle preview mode (entrance animations replay on every view)."""
    ws = _workspace()
    enabled = ws.store.toggle_preview_mode()
    typer.echo(f"Preview mode: {'on' if enabled else 'off'}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool, typer.Option("--version", "-v", help="Show version")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Enable debug logging")
    ] = False,
) -> None:
    """FolioForge - animated portfolio builder."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    if version:
        from folioforge import __version__

        typer.echo(f"folioforge {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        # Default to TUI when no subcommand
        from folioforge.app import FolioForgeApp

        app_instance = FolioForgeApp()
        app_instance.run()
