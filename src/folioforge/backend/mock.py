"""Mock backend for testing and offline development."""

from __future__ import annotations

import asyncio
from html import escape
from typing import TYPE_CHECKING

from folioforge.backend.base import GenerationRequest, GenerationResult
from folioforge.pipeline.prompts import style_guide

if TYPE_CHECKING:
    from folioforge.backend.base import ProgressCallback


class MockBackend:
    """A mock backend that builds a plain HTML fragment from the request.

    Useful for exercising the generate/export flow without network access.
    """

    def __init__(self, delay: float = 0.01) -> None:
        self.delay = delay

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def is_available(self) -> bool:
        return True

    async def generate(
        self,
        request: GenerationRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> GenerationResult:
        request.validate()
        total_steps = 3
        for step in range(total_steps):
            if progress_callback:
                progress_callback(step + 1, total_steps, f"Mock generating step {step + 1}")
            await asyncio.sleep(self.delay)

        return GenerationResult(
            html=_render_fragment(request),
            model="mock-v1",
            metadata={"backend": "mock"},
        )

    async def get_models(self) -> list[str]:
        return ["mock-v1"]


def _render_fragment(request: GenerationRequest) -> str:
    style = style_guide(request.template_style).splitlines()[0].removeprefix("Style Guide: ")
    skills = "".join(
        f"<li>{escape(s.strip())}</li>" for s in request.skills.split(",") if s.strip()
    )
    links = "".join(
        f'<a href="{escape(link.url)}">{escape(link.platform)}</a>'
        for link in request.social_links
    )
    parts = [
        f'<section class="generated" data-style="{escape(style.lower())}">',
        f"<h1>{escape(request.name)}</h1>",
        f"<p>{escape(request.bio)}</p>",
        f"<h2>Skills</h2><ul>{skills}</ul>",
        f"<h2>Projects</h2><p>{escape(request.projects)}</p>",
    ]
    if links:
        parts.append(f'<nav class="social-links">{links}</nav>')
    parts.append("</section>")
    return "\n".join(parts)
