"""Backend protocol and shared types for remote content generation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import Protocol, TypeAlias, runtime_checkable

import jsonschema

from folioforge.models.portfolio import Portfolio, SocialLink
from folioforge.validation import validate_generation_payload


class GenerationError(RuntimeError):
    """Raised when content generation fails; the message is user-facing."""


@dataclass
class GenerationRequest:
    """Structured portfolio fields sent for content generation."""

    name: str
    bio: str
    skills: str
    projects: str
    template_style: str | None = None
    profile_image: str | None = None
    social_links: list[SocialLink] = field(default_factory=list)

    @classmethod
    def from_portfolio(cls, portfolio: Portfolio) -> GenerationRequest:
        content = portfolio.content
        return cls(
            name=content.name,
            bio=content.bio,
            skills=content.skills,
            projects=content.projects,
            template_style=portfolio.template.value,
            profile_image=portfolio.profile_image,
            social_links=list(portfolio.social_links),
        )

    def to_payload(self) -> dict[str, object]:
        """JSON-ready payload (the shape validated before sending)."""
        data = asdict(self)
        data["social_links"] = [link.model_dump() for link in self.social_links]
        return {k: v for k, v in data.items() if v is not None}

    def validate(self) -> None:
        """Check the payload before any network call; raises :class:`GenerationError`."""
        try:
            validate_generation_payload(self.to_payload())
        except jsonschema.ValidationError as exc:
            msg = f"Invalid generation request: {exc.message}"
            raise GenerationError(msg) from None


@dataclass
class GenerationResult:
    """Result from a generation request."""

    html: str
    model: str
    metadata: dict[str, object] = field(default_factory=dict)


@runtime_checkable
class ContentBackend(Protocol):
    """Protocol for content generation backends."""

    async def connect(self) -> None:
        """Prepare the backend for requests."""
        ...

    async def disconnect(self) -> None:
        """Release any held connection."""
        ...

    async def is_available(self) -> bool:
        """Check if the backend is reachable and ready."""
        ...

    async def generate(
        self,
        request: GenerationRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> GenerationResult:
        """Generate an HTML fragment for a request."""
        ...

    async def get_models(self) -> list[str]:
        """List available models."""
        ...


# Callback type for generation progress updates
ProgressCallback: TypeAlias = Callable[[int, int, str], None]  # (step, total, status)
