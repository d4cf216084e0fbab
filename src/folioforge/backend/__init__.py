"""Remote content generation backends."""

from folioforge.backend.base import (
    ContentBackend,
    GenerationError,
    GenerationRequest,
    GenerationResult,
)
from folioforge.backend.groq import GroqBackend
from folioforge.backend.mock import MockBackend

__all__ = [
    "ContentBackend",
    "GenerationError",
    "GenerationRequest",
    "GenerationResult",
    "GroqBackend",
    "MockBackend",
]
